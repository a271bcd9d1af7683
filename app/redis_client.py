import logging
from redis import Redis
from redis.exceptions import RedisError
from app.config import Settings


class RedisUnavailableError(RuntimeError):
    pass


def connect_redis(settings: Settings) -> Redis:
    if not settings.REDIS_URL:
        logging.error("FATAL: REDIS_URL is not provided. Redis is required for the application to run.")
        raise RedisUnavailableError("REDIS_URL is not configured")
    try:
        client = Redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=settings.REDIS_TIMEOUT_SECONDS,
            socket_timeout=settings.REDIS_TIMEOUT_SECONDS,
        )
    except ValueError as e:
        logging.error(f"Invalid REDIS_URL format: {e}")
        raise RedisUnavailableError("Invalid REDIS_URL") from e
    return client


def ensure_redis(client: Redis) -> None:
    """Ping the revocation store; the service must not start without it."""
    try:
        client.ping()
    except (RedisError, OSError) as e:
        logging.error(f"Could not connect to Redis: {e}")
        raise RedisUnavailableError("Redis is unreachable") from e
    logging.info("Redis connected successfully")
