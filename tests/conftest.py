"""Pytest configuration and shared fixtures for all tests.

This module provides shared test fixtures including:
- Isolation from STRIPE_* variables in the developer's environment
- Stripe settings, client and gateway instances
- Sample Stripe response payloads
"""

import os
from typing import Any

import pytest

from stripe_gateway.clients import StripeClient
from stripe_gateway.config import StripeSettings
from stripe_gateway.gateway import StripeGateway

TEST_SECRET_KEY = "sk_test_fake_key"


@pytest.fixture(autouse=True)
def clean_stripe_env(request, monkeypatch):
    """Remove STRIPE_* variables so settings start from their defaults.

    Integration tests keep the environment: they need the real test key.
    """
    if request.node.get_closest_marker("integration"):
        return
    for name in list(os.environ):
        if name.upper().startswith("STRIPE"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def stripe_settings() -> StripeSettings:
    """Test-mode settings with a fake secret key."""
    return StripeSettings(mode="Test", test_secret=TEST_SECRET_KEY, currency="usd")


@pytest.fixture
def stripe_client() -> StripeClient:
    """Real StripeClient; tests patch the stripe resource classes it calls."""
    return StripeClient()


@pytest.fixture
def gateway(stripe_settings: StripeSettings, stripe_client: StripeClient) -> StripeGateway:
    """Gateway wired to the real StripeClient."""
    return StripeGateway(stripe_settings, client=stripe_client)


@pytest.fixture
def sample_charge() -> dict[str, Any]:
    """A successful charge as returned by Stripe."""
    return {
        "id": "ch_test123",
        "object": "charge",
        "amount": 1050,
        "currency": "usd",
        "description": "Order #1001",
        "paid": True,
        "status": "succeeded",
        "source": {
            "id": "card_test123",
            "object": "card",
            "brand": "Visa",
            "last4": "4242",
            "exp_month": 12,
            "exp_year": 2030,
        },
    }


@pytest.fixture
def sample_subscription() -> dict[str, Any]:
    """An active subscription with a single item."""
    return {
        "id": "sub_test123",
        "object": "subscription",
        "status": "active",
        "customer": "cus_test123",
        "items": {
            "object": "list",
            "data": [
                {"id": "si_test123", "price": {"id": "price_basic"}},
            ],
        },
    }


@pytest.fixture
def sample_customer(sample_subscription: dict[str, Any]) -> dict[str, Any]:
    """A customer with an active subscription (subscriptions expanded)."""
    return {
        "id": "cus_test123",
        "object": "customer",
        "email": "jenny@example.com",
        "description": "Jenny Rosen",
        "subscriptions": {"object": "list", "data": [sample_subscription]},
    }


@pytest.fixture
def customer_without_subscription() -> dict[str, Any]:
    """A customer with no subscriptions."""
    return {
        "id": "cus_test456",
        "object": "customer",
        "email": "sam@example.com",
        "subscriptions": {"object": "list", "data": []},
    }
