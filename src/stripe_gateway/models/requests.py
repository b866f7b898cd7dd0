"""Request models for gateway operations.

Each request can be built directly or from the form data a web handler
receives (``from_mapping``), which uses the checkout form's field names:
``stripeToken``, ``stripeCustomer``, ``amount``, ``description``, ``email``,
``plan`` and ``prorate``.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from stripe_gateway.models.exceptions import ValidationError

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def parse_amount(value: Any) -> Decimal:
    """
    Parse an amount in major currency units.

    Raises:
        ValidationError: If the amount is absent, not numeric, or not positive
    """
    if value is None or isinstance(value, bool):
        raise ValidationError("Amount is required and must be numeric.")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValidationError("Amount is required and must be numeric.") from e
    if not amount.is_finite():
        raise ValidationError("Amount is required and must be numeric.")
    if amount <= 0:
        raise ValidationError("Amount must be greater than zero.")
    return amount


def to_minor_units(amount: Decimal) -> int:
    """Convert a major-unit amount to integer minor units (x100, half-up)."""
    return int((amount * 100).to_integral_value(rounding=ROUND_HALF_UP))


def parse_flag(value: Any) -> bool | None:
    """Parse an optional boolean form field."""
    if value is None or isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUTHY:
        return True
    if text in _FALSY:
        return False
    raise ValidationError(f"Invalid boolean value: {value!r}")


def _optional_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None or value == "":
        return None
    return str(value)


@dataclass(frozen=True)
class ChargeRequest:
    """
    A one-off charge.

    Exactly one payment source is required: a one-time card ``token`` or the
    id of a stored ``customer``.
    """

    amount: Decimal
    token: str | None = None
    customer: str | None = None
    description: str | None = None
    currency: str | None = None

    def __post_init__(self) -> None:
        if not self.token and not self.customer:
            raise ValidationError(
                "The required stripeToken or stripeCustomer fields are missing."
            )
        if self.token and self.customer:
            raise ValidationError(
                "Only one of stripeToken or stripeCustomer may be given."
            )
        # Normalize so int/str/float amounts are accepted by direct callers too
        object.__setattr__(self, "amount", parse_amount(self.amount))
        if to_minor_units(self.amount) == 0:
            raise ValidationError("Amount must be at least 0.01.")

    @property
    def amount_minor_units(self) -> int:
        return to_minor_units(self.amount)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ChargeRequest":
        token = _optional_str(data, "stripeToken")
        customer = _optional_str(data, "stripeCustomer")
        if not token and not customer:
            raise ValidationError(
                "The required stripeToken or stripeCustomer fields are missing."
            )
        return cls(
            amount=parse_amount(data.get("amount")),
            token=token,
            customer=customer,
            description=_optional_str(data, "description"),
            currency=_optional_str(data, "currency"),
        )


@dataclass(frozen=True)
class CustomerRequest:
    """A new customer with a stored card, optionally subscribed to a plan."""

    token: str
    description: str | None = None
    email: str | None = None
    plan: str | None = None

    def __post_init__(self) -> None:
        if not self.token:
            raise ValidationError("The required stripeToken field is missing.")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CustomerRequest":
        return cls(
            token=_optional_str(data, "stripeToken") or "",
            description=_optional_str(data, "description"),
            email=_optional_str(data, "email"),
            plan=_optional_str(data, "plan"),
        )


@dataclass(frozen=True)
class SubscriptionUpdate:
    """
    Subscribe a customer to ``plan``.

    If the customer already has an active subscription it is moved to the new
    plan. ``prorate`` controls proration of the price change; ``None`` leaves
    Stripe's default in place.
    """

    plan: str
    prorate: bool | None = None

    def __post_init__(self) -> None:
        if not self.plan:
            raise ValidationError("The required plan field is missing.")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SubscriptionUpdate":
        return cls(
            plan=_optional_str(data, "plan") or "",
            prorate=parse_flag(data.get("prorate")),
        )
