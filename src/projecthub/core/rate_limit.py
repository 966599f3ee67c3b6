"""Rate limiting with an optional Redis backend.

Two layers:
1. ``global_rate_limit_middleware``: per-IP token bucket on every request.
2. ``limiter``: slowapi decorators on write endpoints that users could spam
   (join requests, comments), keyed by the authenticated viewer.

Both use Redis when REDIS_URL is configured and fall back to per-process
memory otherwise. Everything is disabled when APP_ENV=testing.
"""

import asyncio
import time
from collections import defaultdict
from collections.abc import Awaitable, Callable

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from src.projecthub.core.config import get_settings
from src.projecthub.core.logging import get_logger
from src.projecthub.core.redis import get_redis
from src.projecthub.core.security import decode_token

logger = get_logger(__name__)

EXEMPT_PATHS = frozenset({"/health", "/metrics", "/docs", "/openapi.json", "/redoc"})

# In-memory fallback storage for the global bucket
_rate_limit_buckets: dict[str, dict[str, float]] = defaultdict(dict)
_rate_limit_lock = asyncio.Lock()

# Atomic token bucket, evaluated server-side
_REDIS_TOKEN_BUCKET_SCRIPT = """
local key = KEYS[1]
local rate = tonumber(ARGV[1])
local burst = tonumber(ARGV[2])
local now = tonumber(ARGV[3])
local ttl = tonumber(ARGV[4])

local bucket = redis.call('HMGET', key, 'tokens', 'last_update')
local tokens = tonumber(bucket[1]) or burst
local last_update = tonumber(bucket[2]) or now

tokens = math.min(burst, tokens + (now - last_update) * rate)

local allowed = 0
if tokens >= 1 then
    tokens = tokens - 1
    allowed = 1
end
redis.call('HSET', key, 'tokens', tokens, 'last_update', now)
redis.call('EXPIRE', key, ttl)
return allowed
"""

_script_sha: str | None = None


def get_rate_limit_key(request: Request) -> str:
    """Key endpoint limits by authenticated user, falling back to client IP.

    Only a token that verifies is trusted; a forged header can't mint new
    buckets.
    """
    authorization = request.headers.get("authorization", "")
    if authorization.startswith("Bearer "):
        payload = decode_token(authorization[7:])
        if payload and payload.get("sub"):
            return f"user:{payload['sub']}"
    return f"ip:{get_remote_address(request) or 'unknown'}"


def create_limiter() -> Limiter:
    """Create the endpoint limiter with the appropriate storage backend."""
    settings = get_settings()

    if settings.app_env == "testing":
        return Limiter(key_func=get_rate_limit_key, enabled=False)

    if settings.redis_url:
        logger.info("Rate limiter using Redis backend")
        return Limiter(key_func=get_rate_limit_key, storage_uri=settings.redis_url)

    logger.info("Rate limiter using in-memory backend (not distributed)")
    return Limiter(key_func=get_rate_limit_key)


limiter = create_limiter()


async def _check_in_memory_rate_limit(client_ip: str) -> bool:
    """Token bucket in process memory. True if the request may proceed."""
    settings = get_settings()
    rate = settings.global_rate_limit_per_second
    burst = settings.global_rate_limit_burst
    now = time.time()

    async with _rate_limit_lock:
        bucket = _rate_limit_buckets[client_ip]
        tokens = bucket.get("tokens", float(burst))
        last_update = bucket.get("last_update", now)

        tokens = min(burst, tokens + (now - last_update) * rate)
        allowed = tokens >= 1
        if allowed:
            tokens -= 1

        bucket["tokens"] = tokens
        bucket["last_update"] = now
        return allowed


async def _check_redis_rate_limit(redis: object, client_ip: str) -> bool:
    """Token bucket shared across workers through Redis."""
    global _script_sha
    settings = get_settings()
    rate = settings.global_rate_limit_per_second
    burst = settings.global_rate_limit_burst
    ttl = int(burst / rate) + 60

    if _script_sha is None:
        _script_sha = await redis.script_load(_REDIS_TOKEN_BUCKET_SCRIPT)  # type: ignore[attr-defined]

    result = await redis.evalsha(  # type: ignore[attr-defined]
        _script_sha,
        1,
        f"global_ratelimit:{client_ip}",
        str(rate),
        str(burst),
        str(time.time()),
        str(ttl),
    )
    return bool(result == 1)


async def _check_global_rate_limit(client_ip: str) -> bool:
    """Check the global bucket, preferring Redis when it is reachable."""
    global _script_sha
    if get_settings().app_env == "testing":
        return True

    redis = await get_redis()
    if redis is None:
        return await _check_in_memory_rate_limit(client_ip)

    try:
        return await _check_redis_rate_limit(redis, client_ip)
    except Exception as e:
        logger.warning(
            "Redis rate limit check failed, falling back to in-memory",
            error=str(e),
            client_ip=client_ip,
        )
        _script_sha = None  # Redis may have restarted and lost the script
        return await _check_in_memory_rate_limit(client_ip)


async def global_rate_limit_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Reject clients that exceed the per-IP budget with 429."""
    if request.url.path in EXEMPT_PATHS:
        return await call_next(request)

    client_ip = get_remote_address(request) or "unknown"
    if not await _check_global_rate_limit(client_ip):
        logger.warning("Global rate limit exceeded", client_ip=client_ip, path=request.url.path)
        return JSONResponse(
            status_code=429,
            content={
                "success": False,
                "message": "Too many requests. Please slow down.",
                "retry_after": 1,
            },
            headers={"Retry-After": "1"},
        )

    return await call_next(request)
