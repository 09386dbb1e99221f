"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import firebase_admin
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from plateshare.api.router import api_router
from plateshare.config import get_settings
from plateshare.errors import PlateShareError
from plateshare.logging_config import setup_logging
from plateshare.middleware.rate_limit import limiter

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and Firebase Admin (token verification) before serving."""
    settings = get_settings()
    setup_logging(settings)

    # Application Default Credentials
    if not firebase_admin._apps:
        options = {"projectId": settings.gcp_project_id} if settings.gcp_project_id else None
        firebase_admin.initialize_app(options=options)

    if not settings.stripe_secret_key:
        logging.getLogger(__name__).warning("STRIPE_SECRET_KEY is not set; payment intents will fail")

    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        description="Food donation coordination between restaurants, charities and admins",
        lifespan=lifespan,
    )

    # Add rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=3600,
    )

    # Global exception handlers
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle all unhandled exceptions."""
        logger = logging.getLogger(__name__)
        logger.error(
            f"Unhandled exception: {type(exc).__name__}",
            exc_info=exc,
            extra={
                "path": request.url.path,
                "method": request.method,
            },
        )

        if settings.debug:
            # Development: Return detailed error
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "message": str(exc),
                    "type": type(exc).__name__,
                },
            )
        else:
            # Production: Return generic error
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"message": "An internal error occurred. Please try again later."},
            )

    @app.exception_handler(PlateShareError)
    async def domain_exception_handler(request: Request, exc: PlateShareError):
        """Map service errors to their status codes."""
        logging.getLogger(__name__).info(
            f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}"
        )
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions - safe to expose."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle validation errors as missing or invalid input."""
        logger = logging.getLogger(__name__)
        logger.warning(
            f"Validation error: {exc.errors()}",
            extra={
                "path": request.url.path,
                "method": request.method,
            },
        )

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "message": "All required fields must be provided",
                "errors": jsonable_encoder(exc.errors()),
            },
        )

    # Include routers
    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        """Service banner."""
        return "PlateShare API running..."

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
