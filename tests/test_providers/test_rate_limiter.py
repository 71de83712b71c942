"""Tests for the per-client rate limiter."""

from unittest.mock import AsyncMock, patch

import pytest

from scanner.providers.rate_limiter import RateLimiter


@pytest.mark.asyncio
async def test_first_call_does_not_wait() -> None:
    limiter = RateLimiter(max_rps=2.0)
    with patch("scanner.providers.rate_limiter.asyncio.sleep", new=AsyncMock()) as sleep:
        await limiter.acquire()
    sleep.assert_not_awaited()


@pytest.mark.asyncio
async def test_back_to_back_calls_are_spaced() -> None:
    limiter = RateLimiter(max_rps=2.0)
    with patch("scanner.providers.rate_limiter.asyncio.sleep", new=AsyncMock()) as sleep:
        await limiter.acquire()
        await limiter.acquire()
    sleep.assert_awaited_once()
    assert 0 < sleep.call_args.args[0] <= 0.5
