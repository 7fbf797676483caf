"""Wishlist: commands and handler."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.errors import get_or_raise
from storefront.product.product import Product
from storefront.user.user import User


@storefront.command(part_of="User")
class AddToWishlist:
    user_id: Identifier(required=True)
    product_id: Identifier(required=True)


@storefront.command(part_of="User")
class RemoveFromWishlist:
    user_id: Identifier(required=True)
    product_id: Identifier(required=True)


@storefront.command_handler(part_of=User)
class WishlistHandler:
    @handle(AddToWishlist)
    def add_to_wishlist(self, command):
        user = get_or_raise(User, command.user_id)
        get_or_raise(Product, command.product_id)

        user.add_to_wishlist(command.product_id)
        current_domain.repository_for(User).add(user)

    @handle(RemoveFromWishlist)
    def remove_from_wishlist(self, command):
        user = get_or_raise(User, command.user_id)
        user.remove_from_wishlist(command.product_id)
        current_domain.repository_for(User).add(user)
