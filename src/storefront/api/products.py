"""FastAPI endpoints for the product catalogue."""

import json

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.api.dependencies import get_current_user, require_admin
from storefront.api.schemas import (
    CreateProductRequest,
    MessageResponse,
    ProductListResponse,
    ProductResponse,
    RestockRequest,
    ReviewRequest,
    StockResponse,
    UpdateProductRequest,
)
from storefront.api.serializers import category_names, product_response, product_responses
from storefront.errors import get_or_raise
from storefront.product.management import CreateProduct, DeleteProduct, UpdateProduct
from storefront.product.product import Product
from storefront.product.reviews import AddReview
from storefront.product.stock import RestockProduct
from storefront.user.user import User
from storefront.utils.pagination import paginate

router = APIRouter(prefix="/products", tags=["products"])


def _detail(product_id) -> ProductResponse:
    product = get_or_raise(Product, product_id)
    names = category_names([product.category_id])
    return product_response(product, names.get(str(product.category_id)))


def _dump(value):
    return None if value is None else json.dumps(value)


# --- Browsing ---


@router.get("", response_model=ProductListResponse)
async def list_products(
    keyword: str | None = Query(None),
    category: str | None = Query(None),
    min_price: float | None = Query(None, alias="minPrice", ge=0),
    max_price: float | None = Query(None, alias="maxPrice", ge=0),
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_order: str | None = Query(None, alias="sortOrder"),
    page: int | None = Query(None),
    page_size: int | None = Query(None, alias="pageSize"),
) -> ProductListResponse:
    queryset = current_domain.repository_for(Product).search(
        keyword=keyword,
        category_id=category,
        min_price=min_price,
        max_price=max_price,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    result = paginate(queryset, page, page_size)
    return ProductListResponse(
        products=product_responses(result.items),
        page=result.page,
        pages=result.pages,
        total_products=result.total,
    )


@router.get("/top", response_model=list[ProductResponse])
async def top_products(limit: int = Query(5, ge=1, le=100)) -> list[ProductResponse]:
    return product_responses(current_domain.repository_for(Product).top_rated(limit))


@router.get("/featured", response_model=list[ProductResponse])
async def featured_products(limit: int = Query(8, ge=1, le=100)) -> list[ProductResponse]:
    return product_responses(current_domain.repository_for(Product).featured(limit))


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    return _detail(product_id)


# --- Administration ---


@router.post("", status_code=201, response_model=ProductResponse)
async def create_product(body: CreateProductRequest, admin: User = Depends(require_admin)) -> ProductResponse:
    command = CreateProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        image=body.image,
        brand=body.brand,
        category_id=body.category,
        stock=body.stock,
        features=_dump(body.features),
        specifications=_dump(body.specifications),
        is_featured=body.is_featured,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return _detail(product_id)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str, body: UpdateProductRequest, admin: User = Depends(require_admin)
) -> ProductResponse:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        image=body.image,
        brand=body.brand,
        category_id=body.category,
        features=_dump(body.features),
        specifications=_dump(body.specifications),
        is_featured=body.is_featured,
    )
    current_domain.process(command, asynchronous=False)
    return _detail(product_id)


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(product_id: str, admin: User = Depends(require_admin)) -> MessageResponse:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return MessageResponse(message="Product removed")


@router.put("/{product_id}/stock", response_model=StockResponse)
async def restock_product(product_id: str, body: RestockRequest, admin: User = Depends(require_admin)) -> StockResponse:
    stock = current_domain.process(
        RestockProduct(product_id=product_id, quantity=body.quantity),
        asynchronous=False,
    )
    return StockResponse(id=product_id, stock=stock)


# --- Reviews ---


@router.post("/{product_id}/reviews", status_code=201, response_model=MessageResponse)
async def add_review(
    product_id: str, body: ReviewRequest, current_user: User = Depends(get_current_user)
) -> MessageResponse:
    current_domain.process(
        AddReview(
            product_id=product_id,
            user_id=str(current_user.id),
            rating=body.rating,
            comment=body.comment,
        ),
        asynchronous=False,
    )
    return MessageResponse(message="Review added")
