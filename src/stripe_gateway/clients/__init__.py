"""
Payment provider clients.

- base.ProviderClient: Abstract interface the gateway depends on
- stripe_client.StripeClient: Stripe implementation over the ``stripe`` library
"""

from stripe_gateway.clients.base import ProviderClient
from stripe_gateway.clients.stripe_client import StripeClient

__all__ = [
    "ProviderClient",
    "StripeClient",
]
