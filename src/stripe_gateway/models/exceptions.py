"""Custom exceptions for the Stripe Gateway.

Only contract violations are raised. Expected provider failures (declines,
network trouble, bad keys) come back as ``Failure`` results instead.
"""


class GatewayError(Exception):
    """Base exception for gateway errors."""

    pass


class GatewayConfigurationError(GatewayError):
    """
    Raised when the gateway cannot be set up.

    This is a FATAL error raised once, at construction:
    - the Stripe library is missing or could not be imported
    - no secret key is configured for the selected mode
    """

    pass


class ValidationError(GatewayError):
    """
    Raised when a request is missing required fields or carries bad values.

    Raised before any call is made to Stripe.
    """

    pass
