"""Category management: commands and handler.

Name uniqueness and the "no products reference it" delete rule span more
than one aggregate, so they are checked here rather than on Category.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.category.category import Category
from storefront.domain import storefront
from storefront.errors import get_or_raise


@storefront.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)
    description: Text()
    image: String(max_length=500)


@storefront.command(part_of="Category")
class UpdateCategory:
    category_id: Identifier(required=True)
    name: String(max_length=100)
    description: Text()
    image: String(max_length=500)
    is_active: Boolean()


@storefront.command(part_of="Category")
class DeleteCategory:
    category_id: Identifier(required=True)


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        repo = current_domain.repository_for(Category)
        if repo.find_by_name(command.name) is not None:
            raise ValidationError({"name": ["Category already exists"]})

        category = Category.create(
            name=command.name,
            description=command.description,
            image=command.image,
        )
        repo.add(category)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = get_or_raise(Category, command.category_id)

        if command.name and command.name.strip() != category.name:
            if repo.find_by_name(command.name) is not None:
                raise ValidationError({"name": ["Category already exists"]})

        category.update_details(
            name=command.name,
            description=command.description,
            image=command.image,
            is_active=command.is_active,
        )
        repo.add(category)

    @handle(DeleteCategory)
    def delete_category(self, command):
        from storefront.product.product import Product

        category = get_or_raise(Category, command.category_id)

        product_count = current_domain.repository_for(Product).count_in_category(category.id)
        if product_count > 0:
            raise ValidationError(
                {"category": [f"Cannot delete category with {product_count} associated products"]}
            )

        current_domain.repository_for(Category)._dao.delete(category)
