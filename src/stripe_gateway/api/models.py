"""Pydantic models for JSON API responses."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error body returned for failed gateway operations."""

    error: str = Field(..., description="Message safe to show to the end user")
    kind: str | None = Field(
        None, description="Error kind (card_error, connection_error, ...); absent for validation errors"
    )


class CustomerCreatedResponse(BaseModel):
    """Response for a newly created customer."""

    customer_id: str = Field(..., description="Stripe customer id")
