"""Daily order stats projection: sales and order counts per day.

Keyed by date (YYYY-MM-DD) and fed by OrderPlaced. The admin stats
endpoint reads the trailing 30 days from here.
"""

from datetime import UTC, datetime, timedelta

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, Integer, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.events import OrderPlaced
from storefront.order.order import Order
from storefront.utils.pagination import iterate_all


@storefront.projection
class DailyOrderStats:
    date = String(identifier=True, required=True, max_length=10)  # YYYY-MM-DD
    sales = Float(default=0.0)
    orders = Integer(default=0)


def _get_or_create(date_key):
    repo = current_domain.repository_for(DailyOrderStats)
    try:
        return repo.get(date_key)
    except ObjectNotFoundError:
        return DailyOrderStats(date=date_key, sales=0.0, orders=0)


@storefront.projector(projector_for=DailyOrderStats, aggregates=[Order])
class DailyOrderStatsProjector:
    @on(OrderPlaced)
    def on_order_placed(self, event):
        date_key = event.placed_at.date().isoformat()
        record = _get_or_create(date_key)
        record.orders = (record.orders or 0) + 1
        record.sales = (record.sales or 0.0) + (event.total_price or 0.0)
        current_domain.repository_for(DailyOrderStats).add(record)


def all_time_sales():
    queryset = current_domain.repository_for(DailyOrderStats)._dao.query
    return sum(record.sales or 0.0 for record in iterate_all(queryset))


def recent_daily_sales(days=30, today=None):
    """Daily records from the last `days` days, oldest first."""
    today = today or datetime.now(UTC).date()
    since = (today - timedelta(days=days)).isoformat()

    queryset = current_domain.repository_for(DailyOrderStats)._dao.query.filter(date__gte=since).order_by("date")
    return list(iterate_all(queryset))
