"""Order intake validation.

Checks submitted line items against the live catalogue before anything is
written. Items are examined in submission order and the first violation
wins. Nothing here mutates state.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.errors import InsufficientStock, ItemsEmpty, ProductNotFound
from storefront.product.product import Product


def validate_order_items(items):
    """Resolve `[{"product_id", "quantity", "price"?, "name"?}]` against the catalogue.

    Returns line-item dicts ready for materialization. A missing name or
    price is filled in from the product as it stands now.

    Raises:
        ItemsEmpty: `items` is empty or missing.
        ProductNotFound: an item references an unknown product.
        InsufficientStock: an item asks for more than the product holds.
    """
    if not items:
        raise ItemsEmpty()

    repo = current_domain.repository_for(Product)
    resolved = []

    for item in items:
        product_id = item.get("product_id")
        quantity = item.get("quantity")

        try:
            product = repo.get(product_id)
        except ObjectNotFoundError:
            raise ProductNotFound(product_id) from None

        if product.stock < quantity:
            raise InsufficientStock(product.id, product.name, requested=quantity, available=product.stock)

        price = item.get("price")
        resolved.append(
            {
                "product_id": str(product.id),
                "name": item.get("name") or product.name,
                "quantity": quantity,
                "price": product.price if price is None else price,
            }
        )

    return resolved
