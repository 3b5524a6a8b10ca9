"""
FastAPI application entry point
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.composition import PaymentComposition, build_payment_composition
from api.middleware import LoggingMiddleware, RequestIDMiddleware
from api.routes import payments as payments_routes
from core.config import settings
from core.exceptions import register_exception_handlers
from core.logging_config import configure_logging, get_logger
from core.response import success_response


# Logging is configured once, at the entry point
configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown logging."""
    composition: PaymentComposition = app.state.payments
    logger.info(
        "application_startup",
        environment=settings.ENVIRONMENT,
        providers=[p.name for p in composition.providers],
        methods=[c.id for c in composition.list_contracts()],
    )
    yield
    logger.info("application_shutdown", message="Application shutdown")


def create_app(composition: Optional[PaymentComposition] = None) -> FastAPI:
    """Build the application; tests pass their own composition."""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        description="Grocery checkout payments: method discovery, processing, capture and refunds",
    )
    app.state.payments = composition or build_payment_composition()

    # Middleware runs in reverse order of registration
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(payments_routes.router, prefix=settings.API_PREFIX)

    @app.get("/", tags=["Root"])
    async def root():
        return success_response(
            data={
                "name": settings.PROJECT_NAME,
                "version": settings.VERSION,
                "docs": "/docs",
            }
        )

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Liveness probe."""
        return success_response(data={"status": "healthy"})

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
    )
