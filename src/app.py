"""Storefront FastAPI application.

Run with:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload

`PROTEAN_ENV` selects the configuration overlay from `domain.toml`.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from storefront.api import (
    category_router,
    order_router,
    product_router,
    register_error_handlers,
    user_router,
)
from storefront.domain import storefront
from storefront.utils.logging import request_context

# Initialized once at import so every worker shares the registry
storefront.init()

app = FastAPI(
    title="Storefront API",
    description="E-commerce backend: users, catalogue and orders",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Run each request inside the storefront domain context."""
    with storefront.domain_context(), request_context(method=request.method, path=request.url.path):
        return await call_next(request)


for router in (user_router, product_router, category_router, order_router):
    app.include_router(router)

register_error_handlers(app)


@app.get("/health")
async def health():
    return {"status": "ok", "domain": storefront.name}
