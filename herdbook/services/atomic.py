"""All-or-nothing execution of multi-record writes"""

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from herdbook.domain.exceptions import DomainException, PersistenceFailureError
from herdbook.infrastructure.observability.logging import log_persistence_failure
from herdbook.infrastructure.observability.metrics import persistence_failure_counter


@contextmanager
def atomic(db: Session, operation: str) -> Iterator[Session]:
    """
    Commit everything written inside the block, or nothing.

    Storage errors are rolled back and surfaced as PersistenceFailureError;
    any other error is rolled back and re-raised unchanged.
    """
    try:
        yield db
        db.commit()
    except DomainException:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        persistence_failure_counter.labels(operation=operation).inc()
        log_persistence_failure(operation, e)
        raise PersistenceFailureError(operation, e) from e
    except Exception:
        # Flushed rows must not ride along with the session's next commit
        db.rollback()
        raise
