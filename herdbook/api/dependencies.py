"""Dependency injection for FastAPI endpoints"""

from datetime import date

from fastapi import HTTPException, Request

from herdbook.domain.exceptions import (
    DomainException,
    InvalidArgumentError,
    PersistenceFailureError,
    RecordNotFoundError,
)
from herdbook.utils.date_utils import today


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_today() -> date:
    """Reference date for status decisions; overridden in tests"""
    return today()


def to_http_error(error: DomainException) -> HTTPException:
    """Map a domain failure to the HTTP status reported to the caller"""
    if isinstance(error, RecordNotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, InvalidArgumentError):
        return HTTPException(status_code=422, detail=str(error))
    if isinstance(error, PersistenceFailureError):
        return HTTPException(status_code=503, detail="Storage unavailable, nothing was saved")
    return HTTPException(status_code=500, detail="Internal server error")
