"""FastAPI routes exposing the gateway operations.

- POST /v1/charges: Charge a card token or stored customer
- POST /v1/customers: Create a customer from a card token
- GET /v1/customers/{customer_id}: Retrieve a customer
- POST /v1/customers/{customer_id}/subscription: Create or replace a subscription
- DELETE /v1/customers/{customer_id}/subscription: Cancel the active subscription

Handlers are plain ``def`` so the blocking Stripe calls run in the threadpool.
"""

from typing import Any

from fastapi import APIRouter, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from stripe_gateway.api.dependencies import Gateway, Payload
from stripe_gateway.api.models import CustomerCreatedResponse, ErrorResponse
from stripe_gateway.models import ErrorKind, Failure, OperationResult, Success

router = APIRouter(prefix="/v1")

# HTTP status for each failure kind
FAILURE_STATUS: dict[ErrorKind, int] = {
    ErrorKind.CARD_ERROR: status.HTTP_402_PAYMENT_REQUIRED,
    ErrorKind.INVALID_REQUEST_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorKind.AUTHENTICATION_ERROR: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.CONNECTION_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.PROCESSOR_ERROR: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.UNKNOWN: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def to_response(result: OperationResult[Any], success_status: int = status.HTTP_200_OK) -> JSONResponse:
    """Render an OperationResult as a JSON response."""
    if isinstance(result, Failure):
        body = ErrorResponse(error=result.message, kind=result.kind.value)
        return JSONResponse(status_code=FAILURE_STATUS[result.kind], content=body.model_dump())
    return JSONResponse(status_code=success_status, content=jsonable_encoder(result.value))


@router.post("/charges", responses={402: {"model": ErrorResponse}})
def create_charge(payload: Payload, gateway: Gateway) -> JSONResponse:
    """Charge ``amount`` (major units) to ``stripeToken`` or ``stripeCustomer``."""
    return to_response(gateway.charge(payload), status.HTTP_201_CREATED)


@router.post(
    "/customers",
    responses={201: {"model": CustomerCreatedResponse}, 400: {"model": ErrorResponse}},
)
def create_customer(payload: Payload, gateway: Gateway) -> JSONResponse:
    result = gateway.create_customer(payload)
    if isinstance(result, Success):
        body = CustomerCreatedResponse(**result.value)
        return JSONResponse(status_code=status.HTTP_201_CREATED, content=body.model_dump())
    return to_response(result)


@router.get("/customers/{customer_id}", responses={400: {"model": ErrorResponse}})
def retrieve_customer(customer_id: str, gateway: Gateway) -> JSONResponse:
    return to_response(gateway.retrieve_customer(customer_id))


@router.post("/customers/{customer_id}/subscription", responses={400: {"model": ErrorResponse}})
def update_subscription(customer_id: str, payload: Payload, gateway: Gateway) -> JSONResponse:
    """Move the customer to ``plan``, optionally prorating (``prorate``)."""
    return to_response(gateway.update_subscription(customer_id, payload))


@router.delete("/customers/{customer_id}/subscription", responses={400: {"model": ErrorResponse}})
def cancel_subscription(customer_id: str, gateway: Gateway) -> JSONResponse:
    return to_response(gateway.cancel_subscription(customer_id))
