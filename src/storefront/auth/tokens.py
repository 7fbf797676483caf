"""Bearer token issuance and verification.

Tokens are HS256 JWTs carrying the user id in `sub` and the role in `role`.
The signing key comes from `JWT_SECRET`, falling back to the domain's
`secret_key`.
"""

import os
from datetime import UTC, datetime, timedelta
from typing import NamedTuple

from jose import JWTError, jwt

from storefront.domain import storefront

ALGORITHM = "HS256"
DEFAULT_EXPIRE_DAYS = 30


class InvalidToken(Exception):
    pass


class TokenClaims(NamedTuple):
    user_id: str
    role: str


def _secret() -> str:
    return os.getenv("JWT_SECRET") or storefront.config["secret_key"]


def _expiry() -> timedelta:
    return timedelta(days=int(os.getenv("JWT_EXPIRE_DAYS", DEFAULT_EXPIRE_DAYS)))


def issue_token(user_id: str, role: str, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(UTC) + (expires_delta or _expiry())
    claims = {"sub": str(user_id), "role": role, "exp": expire}
    return jwt.encode(claims, _secret(), algorithm=ALGORITHM)


def decode_token(token: str) -> TokenClaims:
    try:
        payload = jwt.decode(token, _secret(), algorithms=[ALGORITHM])
    except JWTError as exc:
        raise InvalidToken(str(exc)) from exc

    user_id = payload.get("sub")
    if not user_id:
        raise InvalidToken("Token has no subject")
    return TokenClaims(user_id=user_id, role=payload.get("role", ""))
