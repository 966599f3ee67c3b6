"""Tests for rate limiting (src/projecthub/core/rate_limit.py).

Tests cover:
- get_rate_limit_key: user key from a verified bearer token, IP otherwise
- _check_in_memory_rate_limit: Token bucket algorithm
- _check_global_rate_limit: Redis preference and fallback
- global_rate_limit_middleware: Request flow and exemptions
"""

import json
import time
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid7

import pytest
from starlette.requests import Request
from starlette.responses import Response

from src.projecthub.core import rate_limit
from src.projecthub.core.rate_limit import (
    _check_in_memory_rate_limit,
    get_rate_limit_key,
    global_rate_limit_middleware,
)
from src.projecthub.core.security import create_access_token

pytestmark = pytest.mark.unit


# --- Fixtures ---


@pytest.fixture(autouse=True)
def _reset_rate_limit_state(reset_rate_limit_buckets):
    """Reset rate limit module state before each test."""
    yield


@pytest.fixture
def mock_request() -> MagicMock:
    """Create a mock Starlette request."""
    request = MagicMock(spec=Request)
    request.headers = {}
    request.client = MagicMock()
    request.client.host = "192.168.1.100"
    request.url.path = "/api/v1/projects/feed"
    return request


@pytest.fixture
def mock_settings() -> MagicMock:
    """Mock settings with rate limiting active (it is off when app_env='testing')."""
    settings = MagicMock()
    settings.app_env = "development"
    settings.global_rate_limit_per_second = 10
    settings.global_rate_limit_burst = 20
    settings.redis_url = None
    return settings


# --- get_rate_limit_key Tests ---


class TestGetRateLimitKey:
    def test_returns_ip_key_when_anonymous(self, mock_request: MagicMock) -> None:
        with patch("src.projecthub.core.rate_limit.get_remote_address", return_value="10.0.0.1"):
            key = get_rate_limit_key(mock_request)

        assert key == "ip:10.0.0.1"

    def test_returns_user_key_for_valid_token(self, mock_request: MagicMock) -> None:
        user_id = uuid7()
        mock_request.headers = {"authorization": f"Bearer {create_access_token(user_id)}"}

        key = get_rate_limit_key(mock_request)

        assert key == f"user:{user_id}"

    def test_forged_token_falls_back_to_ip(self, mock_request: MagicMock) -> None:
        """A token that fails verification does not get its own bucket."""
        mock_request.headers = {"authorization": "Bearer not-a-real-token"}

        with patch("src.projecthub.core.rate_limit.get_remote_address", return_value="10.0.0.2"):
            key = get_rate_limit_key(mock_request)

        assert key == "ip:10.0.0.2"

    def test_returns_unknown_when_ip_not_available(self, mock_request: MagicMock) -> None:
        with patch("src.projecthub.core.rate_limit.get_remote_address", return_value=None):
            key = get_rate_limit_key(mock_request)

        assert key == "ip:unknown"


# --- _check_in_memory_rate_limit Tests ---


class TestCheckInMemoryRateLimit:
    """Tests for in-memory token bucket rate limiter."""

    async def test_creates_new_bucket_for_new_client(self, mock_settings: MagicMock) -> None:
        with patch("src.projecthub.core.rate_limit.get_settings", return_value=mock_settings):
            assert await _check_in_memory_rate_limit("new-client-ip") is True

        bucket = rate_limit._rate_limit_buckets["new-client-ip"]
        assert bucket["tokens"] == mock_settings.global_rate_limit_burst - 1

    async def test_denies_request_when_bucket_empty(self, mock_settings: MagicMock) -> None:
        mock_settings.global_rate_limit_burst = 2

        with patch("src.projecthub.core.rate_limit.get_settings", return_value=mock_settings):
            assert await _check_in_memory_rate_limit("exhaust-client") is True
            assert await _check_in_memory_rate_limit("exhaust-client") is True
            assert await _check_in_memory_rate_limit("exhaust-client") is False

    async def test_replenishes_tokens_over_time(self, mock_settings: MagicMock) -> None:
        mock_settings.global_rate_limit_burst = 2

        with patch("src.projecthub.core.rate_limit.get_settings", return_value=mock_settings):
            await _check_in_memory_rate_limit("replenish-client")
            await _check_in_memory_rate_limit("replenish-client")
            assert await _check_in_memory_rate_limit("replenish-client") is False

            bucket = rate_limit._rate_limit_buckets["replenish-client"]
            bucket["last_update"] = time.time() - 0.5

            assert await _check_in_memory_rate_limit("replenish-client") is True

    async def test_tokens_capped_at_burst_limit(self, mock_settings: MagicMock) -> None:
        mock_settings.global_rate_limit_burst = 5
        mock_settings.global_rate_limit_per_second = 100

        with patch("src.projecthub.core.rate_limit.get_settings", return_value=mock_settings):
            await _check_in_memory_rate_limit("cap-client")
            bucket = rate_limit._rate_limit_buckets["cap-client"]
            bucket["last_update"] = time.time() - 1000
            await _check_in_memory_rate_limit("cap-client")

        assert bucket["tokens"] <= mock_settings.global_rate_limit_burst

    async def test_separate_buckets_per_client(self, mock_settings: MagicMock) -> None:
        mock_settings.global_rate_limit_burst = 1

        with patch("src.projecthub.core.rate_limit.get_settings", return_value=mock_settings):
            assert await _check_in_memory_rate_limit("client1") is True
            assert await _check_in_memory_rate_limit("client1") is False
            assert await _check_in_memory_rate_limit("client2") is True


# --- _check_global_rate_limit Tests ---


class TestCheckGlobalRateLimit:
    async def test_disabled_in_testing_env(self) -> None:
        settings = MagicMock(app_env="testing")

        with patch("src.projecthub.core.rate_limit.get_settings", return_value=settings):
            assert await rate_limit._check_global_rate_limit("any-ip") is True

        assert "any-ip" not in rate_limit._rate_limit_buckets

    async def test_uses_redis_when_available(self, mock_settings: MagicMock) -> None:
        mock_redis = AsyncMock()
        mock_redis.script_load = AsyncMock(return_value="script-sha")
        mock_redis.evalsha = AsyncMock(return_value=1)

        with (
            patch("src.projecthub.core.rate_limit.get_settings", return_value=mock_settings),
            patch(
                "src.projecthub.core.rate_limit.get_redis", new_callable=AsyncMock
            ) as mock_get_redis,
        ):
            mock_get_redis.return_value = mock_redis
            result = await rate_limit._check_global_rate_limit("test-ip")

        assert result is True
        mock_redis.evalsha.assert_called_once()
        assert rate_limit._script_sha == "script-sha"

    async def test_falls_back_to_memory_on_redis_error(self, mock_settings: MagicMock) -> None:
        rate_limit._script_sha = "old-sha"
        mock_redis = AsyncMock()
        mock_redis.evalsha = AsyncMock(side_effect=Exception("NOSCRIPT"))

        with (
            patch("src.projecthub.core.rate_limit.get_settings", return_value=mock_settings),
            patch(
                "src.projecthub.core.rate_limit.get_redis", new_callable=AsyncMock
            ) as mock_get_redis,
        ):
            mock_get_redis.return_value = mock_redis
            result = await rate_limit._check_global_rate_limit("error-ip")

        assert result is True
        assert "error-ip" in rate_limit._rate_limit_buckets
        assert rate_limit._script_sha is None

    async def test_redis_bucket_with_fakeredis(
        self, mock_settings: MagicMock, mock_redis
    ) -> None:
        """The Lua token bucket denies once the burst is spent."""
        mock_settings.global_rate_limit_burst = 2

        with patch("src.projecthub.core.rate_limit.get_settings", return_value=mock_settings):
            results = [await rate_limit._check_global_rate_limit("lua-ip") for _ in range(3)]

        assert results == [True, True, False]
        assert await mock_redis.exists("global_ratelimit:lua-ip") == 1


# --- global_rate_limit_middleware Tests ---


class TestGlobalRateLimitMiddleware:
    async def test_exempt_paths_bypass_rate_limit(self, mock_request: MagicMock) -> None:
        call_next = AsyncMock(return_value=Response(content=b"OK"))

        for path in ["/health", "/metrics", "/docs", "/openapi.json", "/redoc"]:
            mock_request.url.path = path
            response = await global_rate_limit_middleware(mock_request, call_next)
            assert response.body == b"OK", f"Path {path} should be exempt"

    async def test_429_response_has_error_envelope(
        self, mock_request: MagicMock, mock_settings: MagicMock
    ) -> None:
        mock_settings.global_rate_limit_burst = 0
        call_next = AsyncMock()

        with (
            patch("src.projecthub.core.rate_limit.get_settings", return_value=mock_settings),
            patch("src.projecthub.core.rate_limit.get_remote_address", return_value="test-ip"),
            patch(
                "src.projecthub.core.rate_limit.get_redis", new_callable=AsyncMock
            ) as mock_get_redis,
        ):
            mock_get_redis.return_value = None
            response = await global_rate_limit_middleware(mock_request, call_next)

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "1"
        body = json.loads(response.body)
        assert body["success"] is False
        assert body["message"] == "Too many requests. Please slow down."
        call_next.assert_not_called()

    async def test_allows_request_within_limit(
        self, mock_request: MagicMock, mock_settings: MagicMock
    ) -> None:
        call_next = AsyncMock(return_value=Response(content=b"Success"))

        with (
            patch("src.projecthub.core.rate_limit.get_settings", return_value=mock_settings),
            patch("src.projecthub.core.rate_limit.get_remote_address", return_value="10.0.0.1"),
            patch(
                "src.projecthub.core.rate_limit.get_redis", new_callable=AsyncMock
            ) as mock_get_redis,
        ):
            mock_get_redis.return_value = None
            response = await global_rate_limit_middleware(mock_request, call_next)

        assert response.body == b"Success"
        call_next.assert_called_once_with(mock_request)
