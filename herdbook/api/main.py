"""FastAPI application factory"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.responses import Response

from herdbook.api.dependencies import get_request_id, to_http_error
from herdbook.api.middleware import RequestIDMiddleware, MetricsMiddleware
from herdbook.api.v1 import animals, reproduction, transactions, vaccinations
from herdbook.domain.exceptions import DomainException
from herdbook.infrastructure.database.models import Base
from herdbook.infrastructure.database.session import engine, get_db
from herdbook.infrastructure.observability.logging import setup_logging
from herdbook.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.create_tables_on_startup:
        Base.metadata.create_all(bind=engine)
        logging.info("Database schema ready", extra={"database_url": engine.url.render_as_string(hide_password=True)})
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Herdbook",
        description="Herd registry: reproduction forecasts, vaccination schedule and installment billing",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Domain errors that escape a router still get their mapped status
    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException):
        error = to_http_error(exc)
        logging.error(f"Unhandled domain error: {exc}", extra={"request_id": get_request_id(request)})
        return JSONResponse(status_code=error.status_code, content={"detail": error.detail})

    # Health check endpoint; reports the database as well as the process
    @app.get("/health")
    def health_check(db: Session = Depends(get_db)):
        try:
            db.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logging.error(f"Health check failed: {e}")
            return JSONResponse(
                status_code=503,
                content={"status": "degraded", "service": settings.service_name, "database": "unreachable"},
            )
        return {"status": "ok", "service": settings.service_name, "database": "ok"}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(animals.router, prefix="/v1", tags=["animals"])
    app.include_router(reproduction.router, prefix="/v1", tags=["reproduction"])
    app.include_router(transactions.router, prefix="/v1", tags=["transactions"])
    app.include_router(vaccinations.router, prefix="/v1", tags=["vaccinations"])

    return app


app = create_app()
