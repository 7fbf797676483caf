"""Self-service profile updates: command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.auth.passwords import hash_password
from storefront.domain import storefront
from storefront.errors import get_or_raise
from storefront.user.user import User


@storefront.command(part_of="User")
class UpdateProfile:
    user_id: Identifier(required=True)
    name: String(max_length=100)
    email: String(max_length=254)
    phone: String(max_length=30)
    password: String(min_length=6, max_length=128)


def ensure_email_available(email, user_id):
    """Reject an email change that would collide with another account."""
    if not email:
        return
    existing = current_domain.repository_for(User).find_by_email(email)
    if existing is not None and str(existing.id) != str(user_id):
        raise ValidationError({"email": ["User already exists"]})


@storefront.command_handler(part_of=User)
class UpdateProfileHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        user = get_or_raise(User, command.user_id)
        ensure_email_available(command.email, user.id)

        user.update_profile(
            name=command.name,
            email=command.email,
            phone=command.phone,
            password_hash=hash_password(command.password) if command.password else None,
        )
        current_domain.repository_for(User).add(user)
