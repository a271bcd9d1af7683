"""
Authenticated request gate.

``authenticate`` turns a raw ``Authorization`` header into an ``AuthContext``
or raises one of the errors in ``app.errors``. The checks run in a fixed
order and stop at the first failure: bearer present, not revoked, signature
and expiry valid, subject still exists.
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional
from authx.exceptions import JWTDecodeError
from authx import RequestToken
from app.errors import IdentityNotFound, Unauthenticated
from app.revocation import RevocationStore
from app.tokens import TokenClaims, TokenIssuer


@dataclass(frozen=True)
class AuthContext:
    user: Any
    token: str
    claims: TokenClaims


def extract_bearer(raw_header: Optional[str]) -> Optional[str]:
    if not raw_header:
        return None
    scheme, _, token = raw_header.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        return None
    return token


def authenticate(
    raw_header: Optional[str],
    issuer: TokenIssuer,
    revocations: RevocationStore,
    load_identity: Callable[[str], Any],
) -> AuthContext:
    token = extract_bearer(raw_header)
    if token is None:
        raise Unauthenticated("No token provided")

    if revocations.is_revoked(token):
        raise Unauthenticated("Token is no longer valid")

    try:
        claims = issuer.verify_token(RequestToken(token=token, location="headers"))
    except JWTDecodeError:
        raise Unauthenticated("Invalid or expired token")

    user = load_identity(claims.sub)
    if user is None:
        raise IdentityNotFound("User not found")

    return AuthContext(user=user, token=token, claims=claims)


def authorize(identity: Any, allowed_roles: Iterable[str]) -> bool:
    return getattr(identity, "role", None) in set(allowed_roles)
