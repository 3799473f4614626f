"""
API routes - Waitlist endpoints.

This module defines the HTTP endpoints:
- GET  /api/status - Units remaining and sold-out flag
- GET  /api/orders - Registrants, newest first
- POST /api/buy    - Reserve one unit for an email
- POST /api/reset  - Clear every order

Handlers are plain functions so FastAPI runs the blocking store calls
on its thread pool.
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from exclusive_drop.api import messages
from exclusive_drop.api.dependencies import (
    RATE_LIMIT_HEADERS,
    enforce_api_rate_limit,
    enforce_buy_rate_limit,
    get_waitlist_service,
    require_reset_token,
)
from exclusive_drop.api.models import (
    BuyRequest,
    BuyResponse,
    ErrorResponse,
    MessageResponse,
    OrderResponse,
    StatusResponse,
)
from exclusive_drop.domain.exceptions import InvalidEmail, SoldOut, StoreUnavailable
from exclusive_drop.domain.waitlist import WaitlistService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["waitlist"], dependencies=[Depends(enforce_api_rate_limit)])


def _rate_limit_headers(response: Response) -> dict[str, str]:
    """Carry the limiter counters over to a response the handler builds itself."""
    return {
        name: response.headers[name]
        for name in RATE_LIMIT_HEADERS
        if name in response.headers
    }


def _error(status_code: int, message: str, response: Response) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
        headers=_rate_limit_headers(response),
    )


def _buy_failure(status_code: int, message: str, response: Response) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=BuyResponse(success=False, message=message).model_dump(),
        headers=_rate_limit_headers(response),
    )


@router.get(
    "/status",
    response_model=StatusResponse,
    responses={500: {"model": ErrorResponse, "description": "Store unavailable"}},
    summary="Inventory status",
    description="Units remaining in the drop and whether it is sold out.",
)
def get_status(
    response: Response,
    service: WaitlistService = Depends(get_waitlist_service),
) -> StatusResponse | JSONResponse:
    try:
        inventory = service.status()
    except StoreUnavailable:
        logger.exception("Status query failed")
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR, messages.SERVER_ERROR, response
        )
    return StatusResponse(remaining=inventory.remaining, sold_out=inventory.sold_out)


@router.get(
    "/orders",
    response_model=list[OrderResponse],
    responses={500: {"model": ErrorResponse, "description": "Store unavailable"}},
    summary="List registrants",
    description="Every reserved unit, newest first.",
)
def list_orders(
    response: Response,
    service: WaitlistService = Depends(get_waitlist_service),
) -> list[OrderResponse] | JSONResponse:
    try:
        orders = service.list_orders()
    except StoreUnavailable:
        logger.exception("Order listing failed")
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR, messages.FETCH_ORDERS_FAILED, response
        )
    return [
        OrderResponse(id=order.id, email=order.email, created_at=order.created_at)
        for order in orders
    ]


@router.post(
    "/buy",
    response_model=BuyResponse,
    dependencies=[Depends(enforce_buy_rate_limit)],
    responses={
        400: {"model": BuyResponse, "description": "Invalid email or sold out"},
        429: {"model": BuyResponse, "description": "Too many attempts"},
        500: {"model": BuyResponse, "description": "Store unavailable"},
    },
    summary="Reserve a unit",
    description="Join the waitlist with an email address. "
    "Succeeds only while units remain.",
)
def buy(
    request_data: BuyRequest,
    response: Response,
    service: WaitlistService = Depends(get_waitlist_service),
) -> BuyResponse | JSONResponse:
    """
    Reserve one unit of the drop.

    - **email**: Address to register (local@domain, 5 to 100 characters)

    Invalid emails and sold-out refusals are both 400s with distinct messages.
    """
    try:
        service.join(request_data.email)
    except InvalidEmail as e:
        return _buy_failure(status.HTTP_400_BAD_REQUEST, e.message, response)
    except SoldOut:
        return _buy_failure(status.HTTP_400_BAD_REQUEST, messages.SOLD_OUT, response)
    except StoreUnavailable:
        logger.exception("Reservation failed")
        return _buy_failure(
            status.HTTP_500_INTERNAL_SERVER_ERROR, messages.SERVER_ERROR, response
        )
    return BuyResponse(success=True, message=messages.RESERVED)


@router.post(
    "/reset",
    response_model=MessageResponse,
    dependencies=[Depends(require_reset_token)],
    responses={
        401: {"description": "Reset token required"},
        500: {"model": ErrorResponse, "description": "Store unavailable"},
    },
    summary="Clear the waitlist",
    description="Delete every order. Open unless RESET_TOKEN is configured.",
)
def reset(
    response: Response,
    service: WaitlistService = Depends(get_waitlist_service),
) -> MessageResponse | JSONResponse:
    try:
        service.reset()
    except StoreUnavailable:
        logger.exception("Reset failed")
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR, messages.RESET_FAILED, response
        )
    return MessageResponse(message=messages.DATABASE_CLEARED)
