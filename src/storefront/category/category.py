"""Category aggregate root for grouping products."""

from datetime import datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String, Text

from storefront.domain import storefront


@storefront.aggregate
class Category:
    """A flat grouping of products, e.g. "Electronics" or "Fashion".

    Names are unique across the catalogue. Inactive categories are hidden
    from the public listing but keep their products.
    """

    name: String(required=True, max_length=100, unique=True)
    description: Text()
    image: String(max_length=500)
    is_active: Boolean(default=True)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def create(cls, name, description=None, image=None):
        from storefront.category.events import CategoryCreated

        if not name or not name.strip():
            raise ValidationError({"name": ["Category name is required"]})

        now = datetime.now()
        category = cls(
            name=name.strip(),
            description=description,
            image=image,
            created_at=now,
            updated_at=now,
        )
        category.raise_(
            CategoryCreated(
                category_id=category.id,
                name=category.name,
            )
        )
        return category

    def update_details(self, name=None, description=None, image=None, is_active=None):
        from storefront.category.events import CategoryDetailsUpdated

        if name:
            self.name = name.strip()
        if description:
            self.description = description
        if image:
            self.image = image
        if is_active is not None:
            self.is_active = is_active

        self.updated_at = datetime.now()

        self.raise_(
            CategoryDetailsUpdated(
                category_id=self.id,
                name=self.name,
                is_active=self.is_active,
            )
        )
