"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from app.api.routes import appliances, health, recipes
from app.config import settings
from app.core.request_id import get_request_id
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.rate_limit import get_rate_limit_exceeded_handler, limiter
from app.middleware.security import SecurityHeadersMiddleware, setup_compression, setup_cors
from app.utils.exceptions import (
    InvalidInput,
    KosherChefException,
    MalformedResponse,
    NoAppliancesConfigured,
    UpstreamTimeout,
    UpstreamUnavailable,
)
from app.utils.logging_config import setup_logging

# Setup logging
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

# Most specific first: UpstreamTimeout is an UpstreamUnavailable.
ERROR_RESPONSES = [
    (NoAppliancesConfigured, status.HTTP_400_BAD_REQUEST, "No appliances configured"),
    (InvalidInput, status.HTTP_422_UNPROCESSABLE_ENTITY, "Invalid recipe request"),
    (UpstreamTimeout, status.HTTP_504_GATEWAY_TIMEOUT, "Recipe generation timed out"),
    (UpstreamUnavailable, status.HTTP_502_BAD_GATEWAY, "Failed to generate recipe. Please try again."),
    (MalformedResponse, status.HTTP_502_BAD_GATEWAY, "Failed to parse recipe. Please try again."),
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Kosher Chef API starting up...")
    logger.info(f"Log level: {settings.log_level}")
    logger.info(f"Gemini model: {settings.gemini_model}")
    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY is not set; recipe generation will fail")
    yield
    logger.info("Kosher Chef API shutting down...")


app = FastAPI(
    title="Kosher Chef API",
    description="Kosher recipe generation tailored to your kitchen, using Gemini",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, get_rate_limit_exceeded_handler())


def jsonable_errors(exc: RequestValidationError) -> list:
    # `ctx` may hold exception objects, which JSONResponse cannot encode.
    return [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()]


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors with detailed messages."""
    request_id = get_request_id()

    logger.warning(
        f"Validation error: {str(exc)}",
        extra={
            "request_id": request_id,
            "path": request.url.path,
            "method": request.method,
            "errors": exc.errors(),
        },
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Validation error",
            "reason": InvalidInput.reason,
            "detail": jsonable_errors(exc),
            "request_id": request_id,
        },
    )


@app.exception_handler(KosherChefException)
async def kosher_chef_exception_handler(request: Request, exc: KosherChefException) -> JSONResponse:
    """Map application exceptions to `{error, reason, detail, request_id}` responses."""
    request_id = get_request_id()

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_message = "Internal server error"
    for exc_type, code, message in ERROR_RESPONSES:
        if isinstance(exc, exc_type):
            status_code, error_message = code, message
            break

    log = logger.error if status_code >= 500 else logger.warning
    log(
        f"Exception: {error_message}",
        extra={"request_id": request_id, "reason": exc.reason, "exception": str(exc)},
        exc_info=status_code >= 500,
    )

    return JSONResponse(
        status_code=status_code,
        content={
            "error": error_message,
            "reason": exc.reason,
            "detail": str(exc),
            "request_id": request_id,
        },
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    request_id = get_request_id()

    logger.error(
        f"Unexpected exception: {str(exc)}",
        extra={"request_id": request_id},
        exc_info=True,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "reason": KosherChefException.reason,
            "detail": "An unexpected error occurred",
            "request_id": request_id,
        },
    )


# Add middleware (last added runs first)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLoggingMiddleware)
setup_compression(app)
setup_cors(app)

# Include routers
app.include_router(health.router)
app.include_router(recipes.router)
app.include_router(appliances.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Kosher Chef API",
        "version": "1.0.0",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.host, port=settings.port)
