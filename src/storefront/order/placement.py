"""Order placement: command and handler.

intake validation → order materialization → stock ledger, all inside the
handler's unit of work. A failure at any step leaves neither the order nor
any stock change behind.
"""

import json

from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.intake import validate_order_items
from storefront.order.order import Order
from storefront.product.stock import apply_order_to_stock
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, quantity, price?, name?}
    shipping_address = Text(required=True)  # JSON: address dict
    payment_method = String(required=True, max_length=50)
    items_price = Float(default=0.0)
    tax_price = Float(default=0.0)
    shipping_price = Float(default=0.0)
    total_price = Float(default=0.0)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items
        shipping_address = (
            json.loads(command.shipping_address)
            if isinstance(command.shipping_address, str)
            else command.shipping_address
        )

        line_items = validate_order_items(items_data)

        # Submitted totals are stored as given
        pricing = {
            "items_price": command.items_price or 0.0,
            "tax_price": command.tax_price or 0.0,
            "shipping_price": command.shipping_price or 0.0,
            "total_price": command.total_price or 0.0,
        }

        order = Order.place(
            user_id=command.user_id,
            items_data=line_items,
            shipping_address=shipping_address,
            payment_method=command.payment_method,
            pricing=pricing,
        )
        current_domain.repository_for(Order).add(order)

        apply_order_to_stock(order)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            user_id=str(command.user_id),
            items=len(order.items),
            total_price=order.pricing.total_price,
        )
        return str(order.id)
