"""Order counts per status: admin dashboard breakdown."""

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import Integer, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.events import OrderPlaced, OrderStatusChanged
from storefront.order.order import Order


@storefront.projection
class OrderStatusCount:
    status = String(identifier=True, required=True, max_length=20)
    orders = Integer(default=0)


@storefront.projector(projector_for=OrderStatusCount, aggregates=[Order])
class OrderStatusCountProjector:
    def _adjust(self, status, delta):
        repo = current_domain.repository_for(OrderStatusCount)
        try:
            record = repo.get(status)
        except ObjectNotFoundError:
            record = OrderStatusCount(status=status, orders=0)
        record.orders = max((record.orders or 0) + delta, 0)
        repo.add(record)

    @on(OrderPlaced)
    def on_order_placed(self, event):
        self._adjust(event.status, 1)

    @on(OrderStatusChanged)
    def on_status_changed(self, event):
        if event.previous_status == event.new_status:
            return
        self._adjust(event.previous_status, -1)
        self._adjust(event.new_status, 1)


def status_counts():
    records = current_domain.repository_for(OrderStatusCount)._dao.query.order_by("status").all().items
    return [record for record in records if record.orders]
