"""Redis-backed deny-list for tokens revoked before their natural expiry."""

import hashlib
import logging
from redis import Redis
from redis.exceptions import RedisError
from app.errors import RevocationStoreError

REVOCATION_PREFIX = "blacklist:"
REVOKED_MARKER = "revoked"


class RevocationStore:
    def __init__(self, redis_client: Redis, prefix: str = REVOCATION_PREFIX):
        self.redis = redis_client
        self.prefix = prefix

    def key_for(self, token: str) -> str:
        return self.prefix + hashlib.sha256(token.encode("utf-8")).hexdigest()

    def revoke(self, token: str, ttl_seconds: int) -> None:
        """
        Record *token* as revoked for *ttl_seconds*.

        The TTL must be the token's remaining lifetime so the entry never
        outlives the token. Revoking twice leaves the first entry untouched.
        """
        if ttl_seconds <= 0:
            logging.info("Revocation skipped: token already expired")
            return
        try:
            self.redis.set(self.key_for(token), REVOKED_MARKER, ex=ttl_seconds, nx=True)
        except (RedisError, OSError) as e:
            logging.error(f"Error revoking token: {e}")
            raise RevocationStoreError("Revocation store unavailable") from e
        logging.info(f"Token revoked for {ttl_seconds} seconds")

    def is_revoked(self, token: str) -> bool:
        try:
            return self.redis.get(self.key_for(token)) is not None
        except (RedisError, OSError) as e:
            # fail closed
            logging.error(f"Error checking token revocation, treating token as revoked: {e}")
            return True
