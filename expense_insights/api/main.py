"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from expense_insights.api.middleware import RequestIDMiddleware, MetricsMiddleware
from expense_insights.api.v1 import insights, health_score, category_rules
from expense_insights.infrastructure.observability.logging import setup_logging
from expense_insights.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Expense Insights",
        description="Spending trends, pattern summaries and financial health scoring",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(insights.router, prefix="/v1", tags=["insights"])
    app.include_router(health_score.router, prefix="/v1", tags=["financial-health"])
    app.include_router(category_rules.router, prefix="/v1", tags=["category-rules"])

    return app


app = create_app()
