"""FastAPI application for the Stripe Gateway.

The gateway is built once at startup; a missing Stripe library or API key
aborts startup instead of failing individual requests.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from stripe_gateway import __version__
from stripe_gateway.api.models import ErrorResponse
from stripe_gateway.api.routes import router
from stripe_gateway.config import settings
from stripe_gateway.gateway import StripeGateway
from stripe_gateway.logging_config import configure_logging, get_logger
from stripe_gateway.models import ValidationError

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging and create the gateway if one was not injected."""
    configure_logging(
        log_level=settings.log_level,
        format_as_json=settings.log_format_json,
        service_name=settings.service_name,
    )

    if getattr(app.state, "gateway", None) is None:
        app.state.gateway = StripeGateway.from_settings()

    logger.info(
        "stripe_gateway_started",
        mode=app.state.gateway.credentials.mode.value,
        currency=app.state.gateway.currency,
        environment=settings.environment,
    )
    yield
    logger.info("stripe_gateway_stopped")


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Map request contract violations to 422."""
    logger.warning("stripe_request_invalid", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=422,
        content=ErrorResponse(error=str(exc)).model_dump(),
    )


def create_app(gateway: StripeGateway | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        gateway: Pre-built gateway (tests inject one with a fake client).
            When omitted it is created from settings during startup.
    """
    app = FastAPI(
        title="Stripe Gateway",
        description="Charge, customer and subscription operations over Stripe",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.gateway = gateway
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.include_router(router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy", "service": settings.service_name}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "stripe_gateway.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )
