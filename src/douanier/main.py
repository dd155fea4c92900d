"""
Main FastAPI application entry point.

Uses Application Factory Pattern.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from douanier import __version__
from douanier.config.settings import Settings, get_settings
from douanier.di import initialize_container, shutdown_container
from douanier.domain.exceptions import DouanierException
from douanier.infrastructure.monitoring import get_logger, setup_logging
from douanier.presentation.api.middleware import (
    douanier_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from douanier.presentation.api.middleware.metrics_middleware import (
    MetricsMiddleware,
)
from douanier.presentation.api.middleware.request_id_middleware import (
    RequestIDMiddleware,
)
from douanier.presentation.api.routes import (
    apply,
    discounts,
    health,
    shops,
    tokens,
    verify,
)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory - creates and configures FastAPI app.

    Args:
        settings: Optional Settings instance (for testing)

    Returns:
        Configured FastAPI application
    """
    # Get or use provided settings
    if settings is None:
        settings = get_settings()

    # Setup structured logging (JSON only in production)
    json_logs = settings.ENV == "production"
    setup_logging(level=settings.LOG_LEVEL, json_logs=json_logs)
    logger = get_logger(__name__)

    logger.info(f"Creating Douanier application (ENV={settings.ENV})")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        # Startup
        logger.info("Starting Douanier application...")
        await initialize_container()

        chains = sorted(settings.chain_endpoints())
        if chains:
            logger.info(f"Balance oracle chains: {chains}")
        else:
            logger.warning("No chain RPC endpoints configured")
        logger.info("Douanier application started successfully")

        yield

        # Shutdown
        logger.info("Shutting down Douanier application...")
        await shutdown_container()
        logger.info("Douanier application shutdown complete")

    # Create FastAPI app
    app = FastAPI(
        title="Douanier API",
        description="Token-gated discounts for e-commerce storefronts",
        version=__version__,
        lifespan=lifespan,
    )

    # Middleware chain (order matters!)
    # 1. Request ID middleware (FIRST for tracking)
    app.add_middleware(RequestIDMiddleware)

    # 2. Metrics middleware (SECOND for accurate timing)
    if settings.METRICS_ENABLED:
        app.add_middleware(MetricsMiddleware)

    # 3. GZip compression middleware
    app.add_middleware(
        GZipMiddleware,
        minimum_size=1000,
        compresslevel=6,
    )

    # 4. CORS middleware (LAST); storefront script runs on merchant domains
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials="*" not in settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    app.add_exception_handler(DouanierException, douanier_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Register routes
    app.include_router(health.router, prefix="/api")
    app.include_router(verify.router, prefix="/api")
    app.include_router(apply.router, prefix="/api")
    app.include_router(discounts.router, prefix="/api")
    app.include_router(tokens.router, prefix="/api")
    app.include_router(shops.router, prefix="/api")

    @app.get("/", tags=["Health"])
    async def root():
        """Root endpoint."""
        return {
            "service": "Douanier",
            "status": "running",
            "version": __version__,
            "description": "Token-gated discounts",
        }

    if settings.METRICS_ENABLED:

        @app.get("/metrics", tags=["Monitoring"])
        async def metrics():
            """
            Prometheus metrics endpoint.

            Returns metrics in Prometheus text format for scraping.
            """
            return Response(
                content=generate_latest(),
                media_type=CONTENT_TYPE_LATEST,
            )

    logger.info("Douanier application created successfully")
    return app


def get_app() -> FastAPI:
    """
    Get or create application instance (lazy initialization).

    For uvicorn: uvicorn douanier.main:get_app --factory
    """
    return create_app()


_app: Optional[FastAPI] = None


def __getattr__(name: str):
    """Module-level __getattr__ for lazy app initialization (douanier.main:app)."""
    global _app
    if name == "app":
        if _app is None:
            _app = create_app()
        return _app
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


def main():
    """Run the application with uvicorn."""
    import uvicorn

    # Use factory mode for proper lazy initialization
    settings = get_settings()
    uvicorn.run(
        "douanier.main:get_app",
        factory=True,
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_RELOAD,
    )


if __name__ == "__main__":
    main()
