"""Repository for the User aggregate."""

from storefront.domain import storefront
from storefront.user.user import User


@storefront.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        """Find a User by (case-insensitive) email."""
        return self._dao.query.filter(email=email.strip().lower()).all().first

    def listing(self):
        """Queryset of all users, newest first."""
        return self._dao.query.order_by("-created_at")
