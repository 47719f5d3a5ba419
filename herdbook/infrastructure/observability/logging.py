"""Structured JSON logging for production observability"""

import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from herdbook.config import settings

logger = logging.getLogger("herdbook")

# Set by the request middleware for the duration of one HTTP request
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class RequestContextFilter(logging.Filter):
    """Stamp records with the current request ID unless the caller passed one"""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = request_id_var.get()
        return True


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name
        if log_record.get("request_id") is None:
            log_record.pop("request_id", None)


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    root = logging.getLogger()
    root.setLevel(level)

    # Remove existing handlers
    root.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    handler.addFilter(RequestContextFilter())
    root.addHandler(handler)


def log_transaction_created(
    transaction_id: str,
    kind: str,
    total_cents: int,
    installment_count: int,
    animal_count: int,
) -> None:
    """Log a committed purchase or sale"""
    logger.info(
        "Transaction created",
        extra={
            "step": "transaction_created",
            "transaction_id": transaction_id,
            "kind": kind,
            "total_cents": total_cents,
            "installment_count": installment_count,
            "animal_count": animal_count,
        },
    )


def log_cycle_started(cycle_id: str, animal_id: str, status: str, deactivated: int) -> None:
    """Log a new active reproductive cycle"""
    logger.info(
        "Reproductive cycle started",
        extra={
            "step": "cycle_started",
            "cycle_id": cycle_id,
            "animal_id": animal_id,
            "suggested_status": status,
            "deactivated_cycles": deactivated,
        },
    )


def log_dose_chained(parent_record_id: str, record_id: str, dose_number: int, scheduled_date: str) -> None:
    """Log an automatically scheduled follow-up dose"""
    logger.info(
        "Next vaccine dose scheduled",
        extra={
            "step": "dose_chained",
            "parent_record_id": parent_record_id,
            "record_id": record_id,
            "dose_number": dose_number,
            "scheduled_date": scheduled_date,
        },
    )


def log_persistence_failure(operation: str, error: Exception) -> None:
    """Log an aborted multi-record write"""
    logger.error(
        f"Persistence failure during {operation}: {error}",
        extra={"step": "persistence_failure", "operation": operation},
    )
