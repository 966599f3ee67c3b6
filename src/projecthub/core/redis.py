"""Optional Redis connection shared by the rate limiter.

If REDIS_URL is not set, or the server cannot be reached on first use,
``get_redis`` returns None and callers fall back to in-process state.
"""

from redis.asyncio import Redis

from src.projecthub.core.config import get_settings
from src.projecthub.core.logging import get_logger

logger = get_logger(__name__)

_redis: Redis | None = None
_connection_attempted: bool = False


async def get_redis() -> Redis | None:
    """Get the Redis client, connecting lazily. Returns None if unavailable."""
    global _redis, _connection_attempted

    if _redis is not None:
        return _redis
    if _connection_attempted:
        return None

    _connection_attempted = True
    settings = get_settings()
    if not settings.redis_url:
        logger.info("Redis not configured (REDIS_URL not set)")
        return None

    client = Redis.from_url(
        settings.redis_url,
        max_connections=settings.redis_pool_size,
        decode_responses=True,
    )
    try:
        await client.ping()  # type: ignore[misc]
    except Exception as e:
        logger.warning("Redis connection failed, using in-memory fallback", error=str(e))
        await client.aclose()
        return None

    logger.info("Redis connected")
    _redis = client
    return _redis


async def close_redis() -> None:
    """Close the Redis client. Call during shutdown."""
    global _redis, _connection_attempted
    if _redis is not None:
        await _redis.aclose()
        logger.info("Redis connection closed")
    _redis = None
    _connection_attempted = False


def reset_redis_state() -> None:
    """Forget the cached client so tests can reconnect on a fresh loop."""
    global _redis, _connection_attempted
    _redis = None
    _connection_attempted = False
