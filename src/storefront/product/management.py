"""Product catalogue management: commands and handler.

Catalogue edits never carry a stock figure after creation; stock moves
through the ledger in `storefront.product.stock`.
"""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.category.category import Category
from storefront.domain import storefront
from storefront.errors import get_or_raise
from storefront.product.product import Product
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _load_json(field_name, raw):
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        raise ValidationError({field_name: [f"Invalid {field_name} payload"]}) from None


@storefront.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=255)
    description: Text(required=True)
    price: Float(required=True, min_value=0.0)
    image: String(required=True, max_length=500)
    brand: String(max_length=100)
    category_id: Identifier(required=True)
    stock: Integer(default=0, min_value=0)
    features: Text()  # JSON list
    specifications: Text()  # JSON object
    is_featured: Boolean(default=False)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=255)
    description: Text()
    price: Float(min_value=0.0)
    image: String(max_length=500)
    brand: String(max_length=100)
    category_id: Identifier()
    features: Text()
    specifications: Text()
    is_featured: Boolean()


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        get_or_raise(Category, command.category_id)

        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            image=command.image,
            brand=command.brand,
            category_id=command.category_id,
            stock=command.stock,
            features=_load_json("features", command.features),
            specifications=_load_json("specifications", command.specifications),
            is_featured=command.is_featured,
        )
        current_domain.repository_for(Product).add(product)

        logger.info("product_created", product_id=str(product.id), stock=product.stock)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = get_or_raise(Product, command.product_id)

        if command.category_id and str(command.category_id) != str(product.category_id):
            get_or_raise(Category, command.category_id)

        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            image=command.image,
            brand=command.brand,
            category_id=command.category_id,
            features=_load_json("features", command.features),
            specifications=_load_json("specifications", command.specifications),
            is_featured=command.is_featured,
        )
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        product = get_or_raise(Product, command.product_id)
        current_domain.repository_for(Product)._dao.delete(product)
        logger.info("product_deleted", product_id=str(product.id))
