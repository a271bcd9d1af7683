import math
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional
from jose import jwt
from jose.exceptions import JOSEError
from pydantic import BaseModel, ValidationError
from authx.exceptions import JWTDecodeError
from authx import RequestToken
from app.config import Settings


class TokenClaims(BaseModel):
    sub: str
    role: str
    email: Optional[str] = None
    jti: str
    iat: datetime
    exp: datetime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenIssuer:
    """
    Mints and verifies signed access tokens.

    Verification is stateless: revocation is checked elsewhere so this class
    never touches external storage.
    """

    def __init__(self, secret_key: str, algorithm: str, access_token_expire_minutes: int, issuer: str, audience: str, clock: Optional[Callable[[], datetime]] = None):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.access_token_expire_minutes = access_token_expire_minutes
        self.issuer = issuer
        self.audience = audience
        self.clock = clock or _utcnow

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        return cls(
            secret_key=settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
            access_token_expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
            issuer=settings.ISSUER,
            audience=settings.AUDIENCE,
        )

    def create_access_token(self, uid: str, role: str, expires_delta: Optional[timedelta] = None, data: Optional[Dict[str, Any]] = None) -> str:
        to_encode = {"sub": uid, "role": role, "jti": str(uuid.uuid4())}
        if data:
            to_encode.update(data)

        now = self.clock()
        if expires_delta is None:
            expires_delta = timedelta(minutes=self.access_token_expire_minutes)
        to_encode.update({"exp": now + expires_delta, "iat": now, "iss": self.issuer, "aud": self.audience})
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, request_token: RequestToken) -> TokenClaims:
        # Every failure collapses into one error so callers cannot tell why.
        token = request_token.token
        if not token:
            raise JWTDecodeError("Invalid token")
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm], audience=self.audience, issuer=self.issuer)
            return TokenClaims(**payload)
        except (JOSEError, ValidationError, ValueError, TypeError):
            raise JWTDecodeError("Invalid token")

    def remaining_seconds(self, claims: TokenClaims) -> int:
        remaining = (claims.exp - self.clock()).total_seconds()
        return max(0, math.ceil(remaining))
