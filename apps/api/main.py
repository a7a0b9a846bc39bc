"""
TARZIFY Orders - Main FastAPI Application.

REST layer for order placement, fulfillment and public tracking.
"""
import logging
import time

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from apps.api.v1.endpoints import orders, shipping, tracking, uploads
from core.domain.exceptions import (
    InvalidStatusTransitionError,
    OrderCodeExhaustedError,
    OrderNotFoundError,
    PersistenceError,
)
from core.infrastructure.database.config import close_database, get_engine, init_database
from core.infrastructure.logging import configure_logging
from core.settings import get_app_settings


settings = get_app_settings()
configure_logging(settings.api.log_level)
logger = logging.getLogger(__name__)


# =============================================================================
# CREATE FASTAPI APP
# =============================================================================

app = FastAPI(
    title=settings.api.title,
    description="Order placement, fulfillment and tracking for the TARZIFY storefront.",
    version=settings.api.version,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.api.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
    allow_headers=["*"],
)


# =============================================================================
# REQUEST LOGGING MIDDLEWARE
# =============================================================================

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests with timing."""
    start_time = time.time()

    response = await call_next(request)

    duration = time.time() - start_time
    logger.info(
        f"{request.method} {request.url.path} "
        f"[{response.status_code}] ({duration:.3f}s)"
    )

    return response


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

def _error(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
        headers=headers,
    )


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Validation errors (OrderValidationError is a ValueError)."""
    return _error(status.HTTP_400_BAD_REQUEST, str(exc))


@app.exception_handler(OrderNotFoundError)
async def not_found_handler(request: Request, exc: OrderNotFoundError) -> JSONResponse:
    return _error(status.HTTP_404_NOT_FOUND, "Order not found")


@app.exception_handler(InvalidStatusTransitionError)
async def transition_handler(request: Request, exc: InvalidStatusTransitionError) -> JSONResponse:
    return _error(status.HTTP_409_CONFLICT, str(exc))


@app.exception_handler(OrderCodeExhaustedError)
async def exhausted_handler(request: Request, exc: OrderCodeExhaustedError) -> JSONResponse:
    return _error(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "Could not allocate an order code, please try again",
        headers={"Retry-After": "1"},
    )


@app.exception_handler(PersistenceError)
async def persistence_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    logger.error(f"Persistence failure on {request.url.path}: {exc}", exc_info=True)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Order could not be saved, please try again")


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    return _error(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        f"{location}: {message}" if location else message,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all uncaught exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


# =============================================================================
# STARTUP/SHUTDOWN EVENTS
# =============================================================================

@app.on_event("startup")
async def startup_event():
    """Run on application startup."""
    logger.info("🚀 TARZIFY Orders API starting up...")
    await init_database(get_engine(settings.database))
    logger.info("📚 Swagger UI available at: /docs")


@app.on_event("shutdown")
async def shutdown_event():
    """Run on application shutdown."""
    await close_database()
    logger.info("👋 TARZIFY Orders API shutting down...")


# =============================================================================
# INCLUDE ROUTERS
# =============================================================================

app.include_router(tracking.router, prefix="/api/v1")
app.include_router(orders.router, prefix="/api/v1")
app.include_router(shipping.router, prefix="/api/v1")
app.include_router(uploads.router, prefix="/api/v1")


@app.get("/health", tags=["health"])
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
