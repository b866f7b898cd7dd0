"""
Stripe client built on the official ``stripe`` library.

The library is imported when the client is constructed so that a missing
installation surfaces as a GatewayConfigurationError at startup rather than
as an ImportError on the first payment.

Reference:
- https://docs.stripe.com/api/charges/create
- https://docs.stripe.com/api/customers
- https://docs.stripe.com/api/subscriptions
- https://docs.stripe.com/error-handling
"""

import importlib
from typing import Any

import structlog

from stripe_gateway.clients.base import ProviderClient
from stripe_gateway.formatting import lookup
from stripe_gateway.logging_config import LOG_CHANNEL
from stripe_gateway.models import ClassifiedError, ErrorKind, GatewayConfigurationError

logger = structlog.get_logger(__name__)

# Subscription statuses that count as "the customer's current subscription"
ACTIVE_SUBSCRIPTION_STATUSES = ("active", "trialing", "past_due")


class StripeClient(ProviderClient):
    """
    Stripe implementation of ProviderClient.

    Uses the resource classes (``stripe.Charge``, ``stripe.Customer``,
    ``stripe.Subscription``) and passes the API key on every request instead
    of relying on the library's global key.
    """

    name = "stripe"

    def __init__(self) -> None:
        try:
            self._stripe = importlib.import_module("stripe")
        except ImportError as e:
            raise GatewayConfigurationError(
                "Stripe API library is missing or could not be loaded."
            ) from e

        self._api_key: str | None = None
        # No retries at this layer: failures surface once to the caller
        self._stripe.max_network_retries = 0

        # Most specific first; anything else is UNKNOWN
        self._error_kinds: list[tuple[type[Exception], ErrorKind]] = [
            (self._stripe.CardError, ErrorKind.CARD_ERROR),
            (self._stripe.InvalidRequestError, ErrorKind.INVALID_REQUEST_ERROR),
            (self._stripe.AuthenticationError, ErrorKind.AUTHENTICATION_ERROR),
            (self._stripe.APIConnectionError, ErrorKind.CONNECTION_ERROR),
            (self._stripe.StripeError, ErrorKind.PROCESSOR_ERROR),
        ]

    def set_api_key(self, api_key: str) -> None:
        self._api_key = api_key

    def create_charge(self, params: dict[str, Any]) -> Any:
        charge_params: dict[str, Any] = {
            "amount": params["amount"],
            "currency": params["currency"],
        }
        if params.get("description") is not None:
            charge_params["description"] = params["description"]

        # A one-time token is attached as the charge source
        if params.get("card"):
            charge_params["source"] = params["card"]
        else:
            charge_params["customer"] = params["customer"]

        return self._stripe.Charge.create(api_key=self._api_key, **charge_params)

    def create_customer(self, params: dict[str, Any]) -> Any:
        customer_params: dict[str, Any] = {"source": params["card"]}
        for key in ("description", "email"):
            if params.get(key) is not None:
                customer_params[key] = params[key]

        customer = self._stripe.Customer.create(api_key=self._api_key, **customer_params)

        plan = params.get("plan")
        if plan:
            customer_id = lookup(customer, "id")
            try:
                self._stripe.Subscription.create(
                    api_key=self._api_key,
                    customer=customer_id,
                    items=[{"price": plan}],
                )
            except Exception:
                # Don't leave a half-created customer behind
                logger.warning(
                    "stripe_customer_rolled_back",
                    channel=LOG_CHANNEL,
                    customer_id=customer_id,
                    plan=plan,
                )
                try:
                    self._stripe.Customer.delete(customer_id, api_key=self._api_key)
                except Exception as delete_error:
                    # The subscription error is still the one reported
                    logger.error(
                        "stripe_customer_rollback_failed",
                        channel=LOG_CHANNEL,
                        customer_id=customer_id,
                        error_type=type(delete_error).__name__,
                        error=str(delete_error),
                    )
                raise

        return customer

    def retrieve_customer(self, customer_id: str) -> Any:
        return self._stripe.Customer.retrieve(
            customer_id,
            api_key=self._api_key,
            expand=["subscriptions"],
        )

    def update_subscription(
        self, customer: Any, plan: str, prorate: bool | None = None
    ) -> Any:
        params: dict[str, Any] = {}
        if prorate is not None:
            params["proration_behavior"] = "create_prorations" if prorate else "none"

        current = self.active_subscription(customer)
        if current is None:
            return self._stripe.Subscription.create(
                api_key=self._api_key,
                customer=lookup(customer, "id"),
                items=[{"price": plan}],
                **params,
            )

        item_id = lookup(lookup(lookup(current, "items"), "data")[0], "id")
        return self._stripe.Subscription.modify(
            lookup(current, "id"),
            api_key=self._api_key,
            items=[{"id": item_id, "price": plan}],
            **params,
        )

    def cancel_subscription(self, customer: Any) -> Any:
        current = self.active_subscription(customer)
        if current is None:
            logger.info(
                "stripe_no_active_subscription",
                channel=LOG_CHANNEL,
                customer_id=lookup(customer, "id"),
            )
            return None

        return self._stripe.Subscription.cancel(lookup(current, "id"), api_key=self._api_key)

    @staticmethod
    def active_subscription(customer: Any) -> Any | None:
        """Return the customer's current subscription, or None."""
        subscriptions = lookup(lookup(customer, "subscriptions"), "data") or []
        for subscription in subscriptions:
            if lookup(subscription, "status") in ACTIVE_SUBSCRIPTION_STATUSES:
                return subscription
        return None

    def classify_error(self, error: Exception) -> ClassifiedError:
        kind = ErrorKind.UNKNOWN
        for error_class, error_kind in self._error_kinds:
            if isinstance(error, error_class):
                kind = error_kind
                break

        if kind is ErrorKind.UNKNOWN:
            return ClassifiedError.create(
                kind,
                error_type=type(error).__name__,
                error=str(error),
            )

        error_object = getattr(error, "error", None)
        return ClassifiedError.create(
            kind,
            error.user_message,
            error_type=getattr(error_object, "type", None) or type(error).__name__,
            code=getattr(error, "code", None),
            message=error.user_message,
            http_status=getattr(error, "http_status", None),
            request_id=getattr(error, "request_id", None),
        )
