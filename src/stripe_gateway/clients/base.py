"""Base interface for payment provider clients."""

from abc import ABC, abstractmethod
from typing import Any

from stripe_gateway.models import ClassifiedError


class ProviderClient(ABC):
    """
    Abstract base class for the payment provider SDK the gateway talks to.

    The gateway only builds provider-neutral payloads and reads results; the
    client owns SDK loading, credentials, the actual API calls, and sorting
    the SDK's exceptions into ErrorKinds.
    """

    name: str = "provider"

    @abstractmethod
    def set_api_key(self, api_key: str) -> None:
        """Set the secret key used for every subsequent call."""

    @abstractmethod
    def create_charge(self, params: dict[str, Any]) -> Any:
        """
        Create a charge.

        Args:
            params: ``amount`` (minor units), ``currency``, ``description``
                and exactly one of ``card`` (token) or ``customer`` (id)

        Returns:
            The provider's charge object
        """

    @abstractmethod
    def create_customer(self, params: dict[str, Any]) -> Any:
        """
        Create a customer with a stored card.

        Args:
            params: ``card`` (token), ``description``, and optionally
                ``email`` and ``plan``

        Returns:
            The provider's customer object
        """

    @abstractmethod
    def retrieve_customer(self, customer_id: str) -> Any:
        """Fetch a customer record, including its subscriptions."""

    @abstractmethod
    def update_subscription(
        self, customer: Any, plan: str, prorate: bool | None = None
    ) -> Any:
        """Subscribe ``customer`` to ``plan``, replacing any active subscription."""

    @abstractmethod
    def cancel_subscription(self, customer: Any) -> Any:
        """Cancel the customer's active subscription, if there is one."""

    @abstractmethod
    def classify_error(self, error: Exception) -> ClassifiedError:
        """Sort an exception raised by one of the calls above into an ErrorKind."""
