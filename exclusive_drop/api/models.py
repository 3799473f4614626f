"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Field aliases carry the camelCase / _id names the browser client expects.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class BuyRequest(BaseModel):
    """Request model for joining the waitlist."""

    email: str = Field(..., description="Email address to reserve a unit for")


class BuyResponse(BaseModel):
    """Outcome of a join attempt, used for success and client errors alike."""

    success: bool
    message: str


class StatusResponse(BaseModel):
    """Response model for inventory status."""

    model_config = ConfigDict(populate_by_name=True)

    remaining: int = Field(..., ge=0, description="Units still available")
    sold_out: bool = Field(..., alias="soldOut")


class OrderResponse(BaseModel):
    """One reserved unit as shown in the registrant listing."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    email: str
    created_at: datetime = Field(..., alias="createdAt")


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str


class ErrorResponse(BaseModel):
    """Server-side failure on a read or admin endpoint."""

    error: str
