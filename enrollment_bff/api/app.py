"""FastAPI application factory.

Creates and configures the FastAPI application with middleware,
exception handlers, and route registration.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from enrollment_bff import __version__
from enrollment_bff.api.dependencies import get_settings, reset_dependencies
from enrollment_bff.api.exceptions import error_body
from enrollment_bff.api.middleware.context import RequestContextMiddleware
from enrollment_bff.api.models.errors import ErrorBody, ErrorCode, ErrorDetail, ErrorResponse
from enrollment_bff.api.routes import register_routes
from enrollment_bff.enrollment.errors import EnrollmentError
from enrollment_bff.observability.logging import get_logger, setup_logging
from enrollment_bff.observability.metrics import ERRORS
from enrollment_bff.observability.tracing import setup_tracing

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Release shared connections on shutdown."""
    yield
    await reset_dependencies()
    logger.info("app_shutdown")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Sets up logging and tracing from settings, then wires CORS, the
    request context middleware, global exception handlers and routes.
    """
    settings = get_settings()
    observability = settings.observability

    setup_logging(
        level=observability.logging.level,
        format=observability.logging.format,
        redact_pii=observability.logging.redact_pii,
    )

    app = FastAPI(
        title="Enrollment BFF API",
        description="Benefits-plan enrollment lifecycle for mobile clients",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=settings.api.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    _register_exception_handlers(app)
    register_routes(app, metrics_enabled=observability.metrics.enabled)

    if observability.tracing.enabled:
        setup_tracing(
            service_name=observability.tracing.service_name,
            otlp_endpoint=observability.tracing.otlp_endpoint,
        )
        FastAPIInstrumentor.instrument_app(app)
        logger.info("opentelemetry_instrumentation_enabled")

    logger.info(
        "app_created",
        debug=settings.debug,
        store_backend=settings.storage.enrollment.backend,
    )
    return app


def _error_response(status_code: int, body: ErrorBody) -> JSONResponse:
    ERRORS.labels(error_code=body.code.value).inc()
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=body).model_dump(mode="json", exclude_none=True),
    )


def _register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    Internal failures are logged with full detail here and rendered to
    the caller as an opaque INTERNAL_ERROR.
    """

    @app.exception_handler(EnrollmentError)
    async def enrollment_error_handler(
        request: Request, exc: EnrollmentError
    ) -> JSONResponse:
        status_code, body = error_body(exc)
        logger.warning(
            "enrollment_error",
            error_code=body.code.value,
            message=exc.message,
            path=request.url.path,
        )
        return _error_response(status_code, body)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning("validation_error", errors=exc.errors(), path=request.url.path)

        details = [
            ErrorDetail(
                field=".".join(str(loc) for loc in error["loc"]),
                message=error["msg"],
            )
            for error in exc.errors()
        ]
        return _error_response(
            400,
            ErrorBody(
                code=ErrorCode.INVALID_REQUEST,
                message="Request validation failed",
                details=details,
            ),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception(
            "unexpected_error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )
        return _error_response(
            500,
            ErrorBody(code=ErrorCode.INTERNAL_ERROR, message="An unexpected error occurred"),
        )

    logger.debug("exception_handlers_registered")


# Create the app instance for uvicorn
app = create_app()
