"""Request authentication dependencies.

Role is a flat capability check: `require_admin` only asks whether the
caller's role is admin.
"""

from fastapi import Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.auth.tokens import InvalidToken, decode_token
from storefront.user.user import User

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/users/login", auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=401, detail=detail, headers={"WWW-Authenticate": "Bearer"})


async def get_current_user(token: str | None = Depends(oauth2_scheme)) -> User:
    if not token:
        raise _unauthorized("Not authorized, no token")

    try:
        claims = decode_token(token)
    except InvalidToken:
        raise _unauthorized("Not authorized, token failed") from None

    try:
        return current_domain.repository_for(User).get(claims.user_id)
    except ObjectNotFoundError:
        raise _unauthorized("Not authorized, token failed") from None


async def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_admin:
        raise HTTPException(status_code=403, detail="Not authorized as an admin")
    return current_user
