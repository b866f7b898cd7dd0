"""FastAPI dependencies for the gateway routes."""

from typing import Annotated, Any

from fastapi import Depends, HTTPException, Request, status

from stripe_gateway.gateway import StripeGateway
from stripe_gateway.logging_config import get_logger

logger = get_logger(__name__)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_gateway(request: Request) -> StripeGateway:
    """Provide the gateway created at application startup.

    Raises:
        HTTPException: 503 if the application started without a gateway
    """
    gateway = getattr(request.app.state, "gateway", None)
    if gateway is None:
        logger.error("stripe_gateway_not_configured")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Payment gateway not configured",
        )
    return gateway


async def get_payload(request: Request) -> dict[str, Any]:
    """Read the request body as a flat dict, from a form post or JSON.

    An empty body yields an empty dict so the gateway reports the missing fields.

    Raises:
        HTTPException: 400 if the body is neither a form nor a JSON object
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return dict(form)

    if not await request.body():
        return {}
    try:
        payload = await request.json()
    except ValueError:
        payload = None
    if not isinstance(payload, dict):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Request body must be a form post or a JSON object",
        )
    return payload


# Type aliases for dependencies
Gateway = Annotated[StripeGateway, Depends(get_gateway)]
Payload = Annotated[dict[str, Any], Depends(get_payload)]
