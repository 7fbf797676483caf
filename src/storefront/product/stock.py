"""Stock ledger: the only code path that changes `Product.stock`.

Order placement calls `apply_order_to_stock` inside the same unit of work
that persists the order. Each decrement is conditional on the product
still holding enough units, and product writes are version-checked, so a
shortfall or a concurrent write aborts the whole placement.
"""

from collections import OrderedDict

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.errors import ProductNotFound, get_or_raise
from storefront.product.product import Product
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _quantities_by_product(items):
    """Sum line-item quantities per product, keeping first-seen order."""
    totals = OrderedDict()
    for item in items:
        key = str(item.product_id)
        totals[key] = totals.get(key, 0) + item.quantity
    return totals


def apply_order_to_stock(order):
    """Decrement stock for every line item of a freshly materialized order."""
    repo = current_domain.repository_for(Product)

    for product_id, quantity in _quantities_by_product(order.items).items():
        try:
            product = repo.get(product_id)
        except ObjectNotFoundError:
            raise ProductNotFound(product_id) from None

        product.decrement_stock(quantity, order_id=order.id)
        repo.add(product)

        logger.info(
            "stock_decremented",
            product_id=product_id,
            order_id=str(order.id),
            quantity=quantity,
            remaining=product.stock,
        )


@storefront.command(part_of="Product")
class RestockProduct:
    product_id: Identifier(required=True)
    quantity: Integer(required=True, min_value=1)


@storefront.command_handler(part_of=Product)
class StockLedgerHandler:
    @handle(RestockProduct)
    def restock(self, command):
        product = get_or_raise(Product, command.product_id)
        product.restock(command.quantity)
        current_domain.repository_for(Product).add(product)

        logger.info(
            "stock_replenished",
            product_id=str(product.id),
            quantity=command.quantity,
            stock=product.stock,
        )
        return product.stock
