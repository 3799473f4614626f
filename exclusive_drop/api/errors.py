"""
Exception handlers shared by every app that mounts the API router.

Maps transport-level failures to the JSON bodies the client understands.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from exclusive_drop.api import messages
from exclusive_drop.api.models import BuyResponse
from exclusive_drop.api.rate_limit import RateLimited

logger = logging.getLogger(__name__)


async def rate_limited_handler(request: Request, exc: RateLimited) -> JSONResponse:
    logger.warning("Rate limit hit on %s", request.url.path)
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content=BuyResponse(success=False, message=exc.message).model_dump(),
        headers={"Retry-After": str(exc.retry_after)},
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed request bodies are client errors (400), never 422."""
    logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=BuyResponse(success=False, message=messages.INVALID_DATA).model_dump(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RateLimited, rate_limited_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
