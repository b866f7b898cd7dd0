"""Operation result types.

Every public gateway operation returns an ``OperationResult``: either a
``Success`` wrapping the payload, or a ``Failure`` carrying the error kind and
a short message that is safe to show to the end user.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Classification of a failed provider call, most specific first."""

    CARD_ERROR = "card_error"
    INVALID_REQUEST_ERROR = "invalid_request_error"
    AUTHENTICATION_ERROR = "authentication_error"
    CONNECTION_ERROR = "connection_error"
    PROCESSOR_ERROR = "processor_error"
    UNKNOWN = "unknown"


# Shown to the caller as-is. Card and invalid-request failures normally pass
# the provider's own message through and only fall back to these.
CANNED_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.CARD_ERROR: "Your card could not be charged.",
    ErrorKind.INVALID_REQUEST_ERROR: "The payment request was invalid.",
    ErrorKind.AUTHENTICATION_ERROR: "Payment processor API key error.",
    ErrorKind.CONNECTION_ERROR: (
        "Network communication with payment processor failed, try again later."
    ),
    ErrorKind.PROCESSOR_ERROR: "Payment processor error, try again later.",
    ErrorKind.UNKNOWN: "There was an error, try again later.",
}


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful provider call."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Failed provider call. ``message`` is never empty."""

    kind: ErrorKind
    message: str

    def __post_init__(self) -> None:
        if not self.message:
            raise ValueError("Failure requires a non-empty message")

    @property
    def ok(self) -> bool:
        return False


OperationResult = Union[Success[T], Failure]


@dataclass(frozen=True)
class ClassifiedError:
    """
    A provider exception sorted into an ErrorKind.

    ``message`` goes back to the caller. ``detail`` holds the raw provider
    information (type, code, provider message) and is only ever logged.
    """

    kind: ErrorKind
    message: str
    detail: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        kind: ErrorKind,
        provider_message: str | None = None,
        **detail: Any,
    ) -> "ClassifiedError":
        """
        Build a classification, choosing the caller-facing message.

        Card and invalid-request errors pass the provider's message through;
        every other kind always uses its canned message.
        """
        passthrough = kind in (ErrorKind.CARD_ERROR, ErrorKind.INVALID_REQUEST_ERROR)
        if passthrough and provider_message:
            message = provider_message
        else:
            message = CANNED_MESSAGES[kind]
        return cls(kind=kind, message=message, detail=detail)

    def to_failure(self) -> Failure:
        return Failure(kind=self.kind, message=self.message)
