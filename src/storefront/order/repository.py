"""Repository for the Order aggregate."""

from storefront.domain import storefront
from storefront.order.order import Order


@storefront.repository(part_of=Order)
class OrderRepository:
    def for_user(self, user_id):
        """Queryset of a user's orders, newest first."""
        return self._dao.query.filter(user_id=str(user_id)).order_by("-created_at")

    def listing(self, keyword=None):
        """Queryset of all orders, optionally filtered by a status substring."""
        queryset = self._dao.query
        if keyword:
            queryset = queryset.filter(status__icontains=keyword)
        return queryset.order_by("-created_at")
