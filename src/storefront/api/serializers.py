"""Aggregate → response-model conversion for the Storefront API."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    AddressResponse,
    CategoryRef,
    CategoryResponse,
    OrderItemResponse,
    OrderResponse,
    OrderUser,
    PaymentResultResponse,
    ProductResponse,
    ReviewResponse,
    ShippingAddressSchema,
    UserResponse,
    UserSummary,
)
from storefront.category.category import Category


def address_response(address) -> AddressResponse:
    return AddressResponse(
        id=str(address.id),
        street=address.street,
        city=address.city,
        state=address.state,
        postal_code=address.postal_code,
        country=address.country,
        is_default=bool(address.is_default),
    )


def user_response(user) -> UserResponse:
    return UserResponse(
        id=str(user.id),
        name=user.name,
        email=user.email,
        role=user.role,
        phone=user.phone,
        addresses=[address_response(a) for a in user.addresses],
        wishlist=[str(item.product_id) for item in user.wishlist],
        created_at=user.created_at,
    )


def user_summary(user) -> UserSummary:
    return UserSummary(id=str(user.id), name=user.name, email=user.email, role=user.role)


def category_response(category) -> CategoryResponse:
    return CategoryResponse(
        id=str(category.id),
        name=category.name,
        description=category.description,
        image=category.image,
        is_active=bool(category.is_active),
        created_at=category.created_at,
    )


def category_names(category_ids) -> dict:
    """Look up category names for a batch of ids. Unknown ids are skipped."""
    repo = current_domain.repository_for(Category)
    names = {}
    for category_id in {str(c) for c in category_ids if c}:
        try:
            names[category_id] = repo.get(category_id).name
        except ObjectNotFoundError:
            continue
    return names


def product_response(product, category_name=None) -> ProductResponse:
    return ProductResponse(
        id=str(product.id),
        name=product.name,
        description=product.description,
        price=product.price,
        image=product.image,
        brand=product.brand,
        category=CategoryRef(id=str(product.category_id), name=category_name),
        stock=product.stock,
        rating=product.rating or 0.0,
        num_reviews=product.num_reviews or 0,
        reviews=[
            ReviewResponse(
                id=str(r.id),
                user=str(r.user_id),
                name=r.name,
                rating=r.rating,
                comment=r.comment,
                created_at=r.created_at,
            )
            for r in product.reviews
        ],
        features=product.feature_list,
        specifications=product.specification_map,
        is_featured=bool(product.is_featured),
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def product_responses(products) -> list[ProductResponse]:
    names = category_names(p.category_id for p in products)
    return [product_response(p, names.get(str(p.category_id))) for p in products]


def order_response(order, user=None) -> OrderResponse:
    """Serialize an order; pass `user` to populate the owner's name and email."""
    owner = OrderUser(id=str(order.user_id))
    if user is not None:
        owner = OrderUser(id=str(user.id), name=user.name, email=user.email)

    shipping_address = None
    if order.shipping_address:
        shipping_address = ShippingAddressSchema(
            street=order.shipping_address.street,
            city=order.shipping_address.city,
            state=order.shipping_address.state,
            postal_code=order.shipping_address.postal_code,
            country=order.shipping_address.country,
        )

    payment_result = None
    if order.payment_result:
        payment_result = PaymentResultResponse(
            id=order.payment_result.transaction_id,
            status=order.payment_result.status,
            update_time=order.payment_result.update_time,
            email_address=order.payment_result.email_address,
        )

    return OrderResponse(
        id=str(order.id),
        user=owner,
        order_items=[
            OrderItemResponse(
                id=str(item.id),
                product=str(item.product_id),
                name=item.name,
                quantity=item.quantity,
                price=item.price,
            )
            for item in order.items
        ],
        shipping_address=shipping_address,
        payment_method=order.payment_method,
        items_price=order.pricing.items_price,
        tax_price=order.pricing.tax_price,
        shipping_price=order.pricing.shipping_price,
        total_price=order.pricing.total_price,
        is_paid=bool(order.is_paid),
        paid_at=order.paid_at,
        payment_result=payment_result,
        is_delivered=bool(order.is_delivered),
        delivered_at=order.delivered_at,
        status=order.status,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )
