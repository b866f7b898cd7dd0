"""
Stripe gateway adapter.

Exposes charge, customer and subscription operations to request handlers.
Every operation returns an OperationResult: ``Success`` with the payload, or
``Failure`` with a short message safe to show the end user. Exceptions are
reserved for contract violations (ValidationError) and setup problems
(GatewayConfigurationError).
"""

from collections.abc import Callable, Mapping
from typing import Any, TypeVar

import structlog

from stripe_gateway.clients import ProviderClient, StripeClient
from stripe_gateway.config import Credentials, StripeSettings, settings
from stripe_gateway.formatting import lookup, project_fields
from stripe_gateway.logging_config import LOG_CHANNEL
from stripe_gateway.models import (
    ChargeRequest,
    CustomerRequest,
    Failure,
    GatewayConfigurationError,
    OperationResult,
    Success,
    SubscriptionUpdate,
)

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class StripeGateway:
    """
    Payment gateway adapter over a ProviderClient (Stripe by default).

    Credentials, default currency and the charge field map are resolved once
    at construction and are read-only afterwards.
    """

    def __init__(
        self,
        stripe_settings: StripeSettings,
        client: ProviderClient | None = None,
    ) -> None:
        """
        Initialize the gateway.

        Args:
            stripe_settings: Mode, per-mode secret keys, currency and field map
            client: Provider client; a StripeClient is created when omitted

        Raises:
            GatewayConfigurationError: If the Stripe library cannot be loaded
                or no secret key is set for the selected mode
        """
        self._client = client if client is not None else StripeClient()

        secret_key = stripe_settings.secret_key
        if not secret_key:
            raise GatewayConfigurationError(
                f"Stripe API key is not set for {stripe_settings.mode.value} mode."
            )

        self.credentials = Credentials(mode=stripe_settings.mode, secret_key=secret_key)
        self.currency = stripe_settings.currency
        self.field_map = dict(stripe_settings.field_map)
        self._client.set_api_key(secret_key)

    @classmethod
    def from_settings(cls, client: ProviderClient | None = None) -> "StripeGateway":
        """Build the gateway from the process-wide settings."""
        return cls(settings.stripe, client=client)

    def charge(self, request: ChargeRequest | Mapping[str, Any]) -> OperationResult[dict[str, Any]]:
        """
        Charge a card token or a stored customer.

        Args:
            request: ChargeRequest, or form data with ``amount`` (major units),
                ``stripeToken`` or ``stripeCustomer``, and optional
                ``description``

        Returns:
            Success with the charge projected through the field map, or Failure

        Raises:
            ValidationError: No payment source, or a missing/non-numeric/
                non-positive amount. Raised before Stripe is called.
        """
        if not isinstance(request, ChargeRequest):
            request = ChargeRequest.from_mapping(request)

        params: dict[str, Any] = {
            "amount": request.amount_minor_units,
            "currency": request.currency or self.currency,
            "description": request.description,
        }
        if request.token:
            params["card"] = request.token
        else:
            params["customer"] = request.customer

        result = self._invoke("charge", lambda: self._client.create_charge(params))
        if isinstance(result, Failure):
            return result

        charge = result.value
        logger.info(
            "stripe_charge_succeeded",
            channel=LOG_CHANNEL,
            charge_id=lookup(charge, "id"),
            amount=params["amount"],
            currency=params["currency"],
        )
        return Success(project_fields(charge, self.field_map))

    def create_customer(
        self, request: CustomerRequest | Mapping[str, Any]
    ) -> OperationResult[dict[str, Any]]:
        """
        Create a customer from a card token.

        Returns:
            Success with ``{"customer_id": ...}``, or Failure

        Raises:
            ValidationError: If the card token is missing
        """
        if not isinstance(request, CustomerRequest):
            request = CustomerRequest.from_mapping(request)

        params: dict[str, Any] = {
            "card": request.token,
            "description": request.description,
        }
        if request.email is not None:
            params["email"] = request.email
        if request.plan is not None:
            params["plan"] = request.plan

        result = self._invoke("create_customer", lambda: self._client.create_customer(params))
        if isinstance(result, Failure):
            return result

        customer_id = lookup(result.value, "id")
        logger.info("stripe_customer_created", channel=LOG_CHANNEL, customer_id=customer_id)
        return Success({"customer_id": customer_id})

    def update_subscription(
        self,
        customer_id: str,
        subscription: SubscriptionUpdate | Mapping[str, Any],
    ) -> OperationResult[Any]:
        """
        Subscribe a customer to a plan, replacing any active subscription.

        Returns the raw Stripe subscription; no field mapping is applied.
        """
        if not isinstance(subscription, SubscriptionUpdate):
            subscription = SubscriptionUpdate.from_mapping(subscription)

        def _update() -> Any:
            customer = self._client.retrieve_customer(customer_id)
            return self._client.update_subscription(
                customer, subscription.plan, prorate=subscription.prorate
            )

        return self._invoke("update_subscription", _update)

    def cancel_subscription(self, customer_id: str) -> OperationResult[Any]:
        """
        Cancel a customer's active subscription.

        Returns the raw Stripe subscription, or ``Success(None)`` when the
        customer had nothing to cancel.
        """

        def _cancel() -> Any:
            customer = self._client.retrieve_customer(customer_id)
            return self._client.cancel_subscription(customer)

        return self._invoke("cancel_subscription", _cancel)

    def retrieve_customer(self, customer_id: str) -> OperationResult[Any]:
        """Fetch a customer. Returns the raw Stripe record."""
        result = self._invoke(
            "retrieve_customer", lambda: self._client.retrieve_customer(customer_id)
        )
        if isinstance(result, Success):
            logger.info(
                "stripe_customer_retrieved",
                channel=LOG_CHANNEL,
                customer_id=lookup(result.value, "id"),
            )
        return result

    def _invoke(self, operation: str, call: Callable[[], T]) -> OperationResult[T]:
        """
        Run one provider operation and classify its outcome.

        Any exception from the provider is sorted into an ErrorKind, logged
        once at error level with its raw detail, and returned as a Failure
        carrying only the caller-safe message.
        """
        try:
            value = call()
        except Exception as e:
            classified = self._client.classify_error(e)
            logger.error(
                f"stripe_{operation}_failed",
                channel=LOG_CHANNEL,
                operation=operation,
                error_kind=classified.kind.value,
                **classified.detail,
            )
            return classified.to_failure()

        return Success(value)
