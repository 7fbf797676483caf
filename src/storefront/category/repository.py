"""Repository for the Category aggregate."""

from storefront.category.category import Category
from storefront.domain import storefront


@storefront.repository(part_of=Category)
class CategoryRepository:
    def find_by_name(self, name: str) -> Category | None:
        return self._dao.query.filter(name=name.strip()).all().first

    def active(self) -> list[Category]:
        return self._dao.query.filter(is_active=True).order_by("name").all().items
