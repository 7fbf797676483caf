"""Order aggregate: an immutable purchase snapshot plus its lifecycle flags.

Status Tracking:
    placed → any of {paid, shipped, delivered, cancelled}, set by an admin.
    No transition is forbidden and no state is terminal. Payment and
    delivery are tracked by independent flags:
      - mark_paid sets is_paid/paid_at and overwrites payment_result,
        leaving status untouched (repeatable).
      - setting status to delivered also sets is_delivered/delivered_at.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    ValueObject,
)

from storefront.domain import storefront
from storefront.order.events import (
    OrderDelivered,
    OrderPaid,
    OrderPlaced,
    OrderStatusChanged,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PLACED = "placed"
    PAID = "paid"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships to, captured at placement time.

    Later edits to the user's address book never reach an existing order.
    """

    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    postal_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)


@storefront.value_object(part_of="Order")
class OrderPricing:
    """Price breakdown exactly as the client submitted it."""

    items_price = Float(default=0.0, min_value=0.0)
    tax_price = Float(default=0.0, min_value=0.0)
    shipping_price = Float(default=0.0, min_value=0.0)
    total_price = Float(default=0.0, min_value=0.0)


@storefront.value_object(part_of="Order")
class PaymentResult:
    """Opaque payment-gateway callback payload."""

    transaction_id = String(max_length=255)
    status = String(max_length=50)
    update_time = String(max_length=50)
    email_address = String(max_length=254)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    """A line item; name and price are snapshots taken at placement."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    items = HasMany(OrderItem)
    shipping_address = ValueObject(ShippingAddress)
    payment_method = String(required=True, max_length=50)
    pricing = ValueObject(OrderPricing)
    is_paid = Boolean(default=False)
    paid_at = DateTime()
    payment_result = ValueObject(PaymentResult)
    is_delivered = Boolean(default=False)
    delivered_at = DateTime()
    status = String(
        choices=OrderStatus,
        default=OrderStatus.PLACED.value,
    )
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, items_data, shipping_address, payment_method, pricing):
        """Materialize a new order in `placed` status.

        Args:
            user_id: The user placing the order.
            items_data: List of dicts with product_id, name, quantity, price.
            shipping_address: Dict with street, city, state, postal_code, country.
            pricing: Dict with items_price, tax_price, shipping_price, total_price.
        """
        now = datetime.now(UTC)

        order = cls(
            user_id=user_id,
            items=[OrderItem(**item) for item in items_data],
            shipping_address=ShippingAddress(**shipping_address),
            payment_method=payment_method,
            pricing=OrderPricing(**pricing),
            status=OrderStatus.PLACED.value,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                item_count=sum(item.quantity for item in order.items),
                total_price=order.pricing.total_price,
                status=order.status,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Payment
    # -------------------------------------------------------------------
    def mark_paid(self, transaction_id=None, status=None, update_time=None, email_address=None):
        """Record a payment callback. Repeat calls overwrite the previous result."""
        now = datetime.now(UTC)
        self.is_paid = True
        self.paid_at = now
        self.payment_result = PaymentResult(
            transaction_id=transaction_id,
            status=status,
            update_time=update_time,
            email_address=email_address,
        )
        self.updated_at = now

        self.raise_(
            OrderPaid(
                order_id=str(self.id),
                transaction_id=transaction_id,
                payment_status=status,
                paid_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------
    def update_status(self, status):
        try:
            new_status = OrderStatus(status)
        except ValueError:
            raise ValidationError({"status": [f"Invalid order status: {status}"]}) from None

        now = datetime.now(UTC)
        previous_status = self.status
        self.status = new_status.value
        self.updated_at = now

        if new_status == OrderStatus.DELIVERED:
            self.is_delivered = True
            self.delivered_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous_status,
                new_status=new_status.value,
                changed_at=now,
            )
        )
        if new_status == OrderStatus.DELIVERED:
            self.raise_(
                OrderDelivered(
                    order_id=str(self.id),
                    delivered_at=now,
                )
            )
