"""Order payment: command and handler.

Records whatever the payment gateway reported. The call is repeatable and
the latest payload wins.
"""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.errors import get_or_raise
from storefront.order.order import Order
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class MarkOrderPaid:
    order_id = Identifier(required=True)
    transaction_id = String(max_length=255)
    status = String(max_length=50)
    update_time = String(max_length=50)
    email_address = String(max_length=254)


@storefront.command_handler(part_of=Order)
class OrderPaymentHandler:
    @handle(MarkOrderPaid)
    def mark_paid(self, command):
        order = get_or_raise(Order, command.order_id)
        order.mark_paid(
            transaction_id=command.transaction_id,
            status=command.status,
            update_time=command.update_time,
            email_address=command.email_address,
        )
        current_domain.repository_for(Order).add(order)

        logger.info(
            "payment_recorded",
            order_id=str(order.id),
            transaction_id=command.transaction_id,
            payment_status=command.status,
        )
