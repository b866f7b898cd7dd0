"""Domain models for the Stripe Gateway."""

from stripe_gateway.models.exceptions import (
    GatewayConfigurationError,
    GatewayError,
    ValidationError,
)
from stripe_gateway.models.requests import (
    ChargeRequest,
    CustomerRequest,
    SubscriptionUpdate,
    to_minor_units,
)
from stripe_gateway.models.result import (
    CANNED_MESSAGES,
    ClassifiedError,
    ErrorKind,
    Failure,
    OperationResult,
    Success,
)

__all__ = [
    "CANNED_MESSAGES",
    "ChargeRequest",
    "ClassifiedError",
    "CustomerRequest",
    "ErrorKind",
    "Failure",
    "GatewayConfigurationError",
    "GatewayError",
    "OperationResult",
    "SubscriptionUpdate",
    "Success",
    "ValidationError",
    "to_minor_units",
]
