"""Product reviews: command and handler."""

from protean import handle
from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.errors import get_or_raise
from storefront.product.product import Product
from storefront.user.user import User


@storefront.command(part_of="Product")
class AddReview:
    product_id: Identifier(required=True)
    user_id: Identifier(required=True)
    rating: Integer(required=True, min_value=1, max_value=5)
    comment: Text(required=True)


@storefront.command_handler(part_of=Product)
class ReviewHandler:
    @handle(AddReview)
    def add_review(self, command):
        product = get_or_raise(Product, command.product_id)
        reviewer = get_or_raise(User, command.user_id)

        review = product.add_review(
            user_id=reviewer.id,
            name=reviewer.name,
            rating=command.rating,
            comment=command.comment,
        )
        current_domain.repository_for(Product).add(product)
        return str(review.id)
