"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services, rate limiters and the reset gate into routes.
"""

import secrets
from functools import lru_cache

from fastapi import Depends, Header, HTTPException, Request, Response, status

from exclusive_drop.api import messages
from exclusive_drop.api.rate_limit import SlidingWindowRateLimiter
from exclusive_drop.config.settings import get_settings
from exclusive_drop.domain.ports import OrderRepository
from exclusive_drop.domain.waitlist import WaitlistService


def get_repository(request: Request) -> OrderRepository:
    """
    Get the order repository from app state.

    The repository is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.repository


def get_waitlist_service(request: Request) -> WaitlistService:
    """
    Create waitlist service with injected dependencies.

    Wires the repository and the configured capacity into the domain service.
    """
    repository = get_repository(request)
    return WaitlistService(repository=repository, capacity=get_settings().capacity)


@lru_cache
def get_api_limiter() -> SlidingWindowRateLimiter:
    """General limiter shared by every /api route (singleton)."""
    settings = get_settings()
    return SlidingWindowRateLimiter(
        max_attempts=settings.api_rate_limit,
        window_seconds=settings.api_rate_window_seconds,
        message=messages.API_RATE_LIMITED,
    )


@lru_cache
def get_buy_limiter() -> SlidingWindowRateLimiter:
    """Strict limiter for the buy endpoint (singleton)."""
    settings = get_settings()
    return SlidingWindowRateLimiter(
        max_attempts=settings.buy_rate_limit,
        window_seconds=settings.buy_rate_window_seconds,
        message=messages.BUY_RATE_LIMITED,
    )


RATE_LIMIT_HEADERS = ("RateLimit-Limit", "RateLimit-Remaining", "RateLimit-Reset")


def client_key(request: Request) -> str:
    """Identify the caller by its socket address."""
    if request.client is None:
        return "anonymous"
    return request.client.host


def _apply_limit(
    limiter: SlidingWindowRateLimiter, request: Request, response: Response
) -> None:
    state = limiter.hit(client_key(request))
    limit, remaining, reset = RATE_LIMIT_HEADERS
    response.headers[limit] = str(state.limit)
    response.headers[remaining] = str(state.remaining)
    response.headers[reset] = str(state.reset_after)


def enforce_api_rate_limit(
    request: Request,
    response: Response,
    limiter: SlidingWindowRateLimiter = Depends(get_api_limiter),
) -> None:
    _apply_limit(limiter, request, response)


def enforce_buy_rate_limit(
    request: Request,
    response: Response,
    limiter: SlidingWindowRateLimiter = Depends(get_buy_limiter),
) -> None:
    _apply_limit(limiter, request, response)


def get_reset_token() -> str | None:
    """Configured admin token for reset, or None when reset is open."""
    return get_settings().reset_token


def require_reset_token(
    x_reset_token: str | None = Header(default=None),
    expected: str | None = Depends(get_reset_token),
) -> None:
    """
    Gate POST /api/reset behind X-Reset-Token when a token is configured.

    Comparison is constant-time via secrets.compare_digest.
    """
    if expected is None:
        return
    if x_reset_token is None or not secrets.compare_digest(
        x_reset_token.encode(), expected.encode()
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=messages.INVALID_RESET_TOKEN,
        )
