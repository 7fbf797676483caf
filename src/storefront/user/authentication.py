"""Credential checks for login."""

from protean.utils.globals import current_domain

from storefront.auth.passwords import verify_password
from storefront.user.user import User


class InvalidCredentials(Exception):
    """Email unknown or password mismatch. The two cases are deliberately indistinguishable."""


def authenticate(email, password) -> User:
    user = current_domain.repository_for(User).find_by_email(email or "")
    if user is None or not verify_password(password, user.password_hash):
        raise InvalidCredentials("Invalid email or password")
    return user
