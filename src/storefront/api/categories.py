"""FastAPI endpoints for categories."""

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.api.dependencies import require_admin
from storefront.api.schemas import (
    CategoryResponse,
    CreateCategoryRequest,
    MessageResponse,
    ProductListResponse,
    UpdateCategoryRequest,
)
from storefront.api.serializers import category_response, product_response
from storefront.category.category import Category
from storefront.category.management import CreateCategory, DeleteCategory, UpdateCategory
from storefront.errors import get_or_raise
from storefront.product.product import Product
from storefront.user.user import User
from storefront.utils.pagination import paginate

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[CategoryResponse])
async def list_categories() -> list[CategoryResponse]:
    return [category_response(c) for c in current_domain.repository_for(Category).active()]


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: str) -> CategoryResponse:
    return category_response(get_or_raise(Category, category_id))


@router.get("/{category_id}/products", response_model=ProductListResponse)
async def category_products(
    category_id: str,
    page: int | None = Query(None),
    page_size: int | None = Query(None, alias="pageSize"),
) -> ProductListResponse:
    category = get_or_raise(Category, category_id)
    result = paginate(current_domain.repository_for(Product).in_category(category.id), page, page_size)
    return ProductListResponse(
        products=[product_response(p, category.name) for p in result.items],
        page=result.page,
        pages=result.pages,
        total_products=result.total,
    )


@router.post("", status_code=201, response_model=CategoryResponse)
async def create_category(body: CreateCategoryRequest, admin: User = Depends(require_admin)) -> CategoryResponse:
    category_id = current_domain.process(
        CreateCategory(name=body.name, description=body.description, image=body.image),
        asynchronous=False,
    )
    return category_response(get_or_raise(Category, category_id))


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: str, body: UpdateCategoryRequest, admin: User = Depends(require_admin)
) -> CategoryResponse:
    current_domain.process(
        UpdateCategory(
            category_id=category_id,
            name=body.name,
            description=body.description,
            image=body.image,
            is_active=body.is_active,
        ),
        asynchronous=False,
    )
    return category_response(get_or_raise(Category, category_id))


@router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category(category_id: str, admin: User = Depends(require_admin)) -> MessageResponse:
    current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)
    return MessageResponse(message="Category removed")
