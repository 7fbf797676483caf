"""Application tests for payment recording, status tracking and order projections."""

import json

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain
from storefront.order.order import Order
from storefront.order.payment import MarkOrderPaid
from storefront.order.placement import PlaceOrder
from storefront.order.status import UpdateOrderStatus
from storefront.projections.daily_order_stats import all_time_sales, recent_daily_sales
from storefront.projections.orders_by_status import status_counts


@pytest.fixture()
def place_order(create_user, create_product):
    def _place(total_price=115.0):
        user_id = create_user(email=f"buyer{total_price}@example.com")
        product_id = create_product(name=f"Item {total_price}")
        command = PlaceOrder(
            user_id=user_id,
            items=json.dumps([{"product_id": product_id, "quantity": 1}]),
            shipping_address=json.dumps(
                {"street": "1 Main St", "city": "Springfield", "postal_code": "12345", "country": "USA"}
            ),
            payment_method="PayPal",
            total_price=total_price,
        )
        return current_domain.process(command, asynchronous=False)

    return _place


def _order(order_id):
    return current_domain.repository_for(Order).get(order_id)


class TestPayment:
    def test_mark_paid(self, place_order):
        order_id = place_order()
        current_domain.process(
            MarkOrderPaid(order_id=order_id, transaction_id="PAY-1", status="COMPLETED", email_address="j@x.com"),
            asynchronous=False,
        )

        order = _order(order_id)
        assert order.is_paid is True
        assert order.status == "placed"
        assert order.payment_result.email_address == "j@x.com"

    def test_unknown_order(self):
        with pytest.raises(ObjectNotFoundError) as exc:
            current_domain.process(MarkOrderPaid(order_id="missing", transaction_id="PAY-1"), asynchronous=False)
        assert exc.value.messages["_entity"] == ["Order not found"]


class TestStatus:
    def test_update_status(self, place_order):
        order_id = place_order()
        current_domain.process(UpdateOrderStatus(order_id=order_id, status="shipped"), asynchronous=False)
        assert _order(order_id).status == "shipped"

    def test_invalid_status(self, place_order):
        order_id = place_order()
        with pytest.raises(ValidationError):
            current_domain.process(UpdateOrderStatus(order_id=order_id, status="lost"), asynchronous=False)
        assert _order(order_id).status == "placed"

    def test_long_unknown_status_gets_status_message(self, place_order):
        order_id = place_order()
        status = "awaiting-customs-clearance-at-border"

        with pytest.raises(ValidationError) as exc:
            current_domain.process(UpdateOrderStatus(order_id=order_id, status=status), asynchronous=False)

        assert exc.value.messages == {"status": [f"Invalid order status: {status}"]}


class TestProjections:
    def test_daily_sales(self, place_order):
        place_order(total_price=115.0)
        place_order(total_price=85.0)

        days = recent_daily_sales()
        assert len(days) == 1
        assert days[0].orders == 2
        assert days[0].sales == pytest.approx(200.0)
        assert all_time_sales() == pytest.approx(200.0)

    def test_status_counts_follow_changes(self, place_order):
        first = place_order(total_price=10.0)
        place_order(total_price=20.0)

        current_domain.process(UpdateOrderStatus(order_id=first, status="shipped"), asynchronous=False)

        counts = {record.status: record.orders for record in status_counts()}
        assert counts == {"placed": 1, "shipped": 1}
