"""Stripe payment gateway adapter for web request handlers."""

from stripe_gateway.gateway import StripeGateway
from stripe_gateway.models import (
    ChargeRequest,
    CustomerRequest,
    ErrorKind,
    Failure,
    GatewayConfigurationError,
    GatewayError,
    OperationResult,
    SubscriptionUpdate,
    Success,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "ChargeRequest",
    "CustomerRequest",
    "ErrorKind",
    "Failure",
    "GatewayConfigurationError",
    "GatewayError",
    "OperationResult",
    "StripeGateway",
    "SubscriptionUpdate",
    "Success",
    "ValidationError",
]
