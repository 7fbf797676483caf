import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def _storefront_domain(request):
    """Initialize the storefront domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from storefront.domain import storefront

    storefront.init()
    return storefront


@pytest.fixture(scope="session", autouse=True)
def setup_db(_storefront_domain):
    from storefront.utils.db import drop_db, setup_db

    setup_db(_storefront_domain)

    yield

    drop_db(_storefront_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_storefront_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _storefront_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------
@pytest.fixture()
def create_user():
    """Register a user through the domain and return its id."""
    from protean import current_domain
    from storefront.user.administration import UpdateUser
    from storefront.user.registration import RegisterUser

    def _create(name="John Doe", email="john@example.com", password="123456", role="customer", phone=None):
        user_id = current_domain.process(
            RegisterUser(name=name, email=email, password=password, phone=phone),
            asynchronous=False,
        )
        if role != "customer":
            current_domain.process(UpdateUser(user_id=user_id, role=role), asynchronous=False)
        return user_id

    return _create


@pytest.fixture()
def create_category():
    from protean import current_domain
    from storefront.category.management import CreateCategory

    def _create(**overrides):
        defaults = {"name": "Electronics", "description": "Devices and gadgets"}
        defaults.update(overrides)
        return current_domain.process(CreateCategory(**defaults), asynchronous=False)

    return _create


@pytest.fixture()
def create_product(create_category):
    from protean import current_domain
    from storefront.product.management import CreateProduct

    def _create(**overrides):
        defaults = {
            "name": "Wireless Mouse",
            "description": "Ergonomic wireless mouse",
            "price": 25.0,
            "image": "/images/mouse.jpg",
            "brand": "Clicky",
            "stock": 10,
        }
        defaults.update(overrides)
        if "category_id" not in defaults:
            defaults["category_id"] = create_category(name=f"Category for {defaults['name']}")
        return current_domain.process(CreateProduct(**defaults), asynchronous=False)

    return _create


@pytest.fixture()
def auth_headers():
    """Build a bearer header for a user id."""
    from protean import current_domain
    from storefront.auth.tokens import issue_token
    from storefront.user.user import User

    def _headers(user_id):
        user = current_domain.repository_for(User).get(user_id)
        return {"Authorization": f"Bearer {issue_token(str(user.id), user.role)}"}

    return _headers


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------
@pytest.fixture()
def client(_storefront_domain):
    from fastapi import FastAPI, Request
    from fastapi.testclient import TestClient
    from storefront.api import (
        category_router,
        order_router,
        product_router,
        register_error_handlers,
        user_router,
    )

    app = FastAPI()

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        with _storefront_domain.domain_context():
            return await call_next(request)

    app.include_router(user_router)
    app.include_router(product_router)
    app.include_router(category_router)
    app.include_router(order_router)
    register_error_handlers(app)
    return TestClient(app)
