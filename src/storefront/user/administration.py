"""Admin-only account management: commands and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.errors import get_or_raise
from storefront.user.profile import ensure_email_available
from storefront.user.user import User
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="User")
class UpdateUser:
    user_id: Identifier(required=True)
    name: String(max_length=100)
    email: String(max_length=254)
    role: String(max_length=20)


@storefront.command(part_of="User")
class DeleteUser:
    user_id: Identifier(required=True)


@storefront.command_handler(part_of=User)
class AdministerUsersHandler:
    @handle(UpdateUser)
    def update_user(self, command):
        user = get_or_raise(User, command.user_id)
        ensure_email_available(command.email, user.id)

        user.update_profile(name=command.name, email=command.email)
        if command.role:
            user.change_role(command.role)

        current_domain.repository_for(User).add(user)

    @handle(DeleteUser)
    def delete_user(self, command):
        user = get_or_raise(User, command.user_id)
        current_domain.repository_for(User)._dao.delete(user)
        logger.info("user_deleted", user_id=str(command.user_id))
