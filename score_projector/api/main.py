"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from score_projector.api.middleware import RequestIDMiddleware, MetricsMiddleware
from score_projector.api.v1 import simulation, validate, history
from score_projector.infrastructure.observability.logging import setup_logging
from score_projector.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Score Projector",
        description="Credit score projection and simulation history service",
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
    app.include_router(simulation.router, prefix="/v1", tags=["simulations"])
    app.include_router(validate.router, prefix="/v1", tags=["validation"])
    app.include_router(history.router, prefix="/v1", tags=["history"])

    return app


app = create_app()
