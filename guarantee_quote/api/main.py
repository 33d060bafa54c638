"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from guarantee_quote.api.middleware import RequestIDMiddleware, MetricsMiddleware
from guarantee_quote.api.v1 import quote, plan, notification
from guarantee_quote.infrastructure.observability.logging import setup_logging
from guarantee_quote.config import settings

# Setup structured logging
setup_logging(settings.log_level, settings.service_name)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Guarantee Quote Service",
        description="Rental guarantee pricing, payment plans and quote delivery",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(quote.router, prefix="/v1", tags=["quotes"])
    app.include_router(plan.router, prefix="/v1", tags=["plans"])
    app.include_router(notification.router, prefix="/v1", tags=["notifications"])

    return app


app = create_app()
