"""Repository for the Product aggregate."""

from protean.utils.query import Q

from storefront.domain import storefront
from storefront.product.product import Product

# Public sort keys mapped to field names
SORT_FIELDS = {
    "createdAt": "created_at",
    "price": "price",
    "rating": "rating",
    "name": "name",
}


@storefront.repository(part_of=Product)
class ProductRepository:
    def count_in_category(self, category_id) -> int:
        return self._dao.query.filter(category_id=str(category_id)).all().total

    def in_category(self, category_id):
        return self._dao.query.filter(category_id=str(category_id)).order_by("-created_at")

    def search(self, keyword=None, category_id=None, min_price=None, max_price=None, sort_by=None, sort_order=None):
        """Build a product queryset from catalogue filters.

        Returns the unevaluated queryset so callers can paginate it.
        """
        queryset = self._dao.query

        if keyword:
            queryset = queryset.filter(Q(name__icontains=keyword) | Q(description__icontains=keyword))
        if category_id:
            queryset = queryset.filter(category_id=str(category_id))
        if min_price is not None:
            queryset = queryset.filter(price__gte=min_price)
        if max_price is not None:
            queryset = queryset.filter(price__lte=max_price)

        field = SORT_FIELDS.get(sort_by or "createdAt", "created_at")
        if sort_order == "asc":
            return queryset.order_by(field)
        return queryset.order_by(f"-{field}")

    def top_rated(self, limit: int = 5) -> list[Product]:
        return self._dao.query.order_by("-rating").limit(limit).all().items

    def featured(self, limit: int = 8) -> list[Product]:
        return self._dao.query.filter(is_featured=True).order_by("-created_at").limit(limit).all().items
