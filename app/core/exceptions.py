"""Application errors raised by services and rendered by the API error handlers."""
from contextlib import contextmanager
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError


class AppError(Exception):
    """Base application error carrying an HTTP status code."""

    status_code: int = 500
    error: str = "Request failed"

    def __init__(self, message: str, status_code: Optional[int] = None, error: Optional[str] = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if error is not None:
            self.error = error
        super().__init__(f"{self.error} ({self.status_code}): {message}")


class NotFoundError(AppError):
    status_code = 404
    error = "Not found"


class ConflictError(AppError):
    """Duplicate resource or an illegal state transition."""
    status_code = 409
    error = "Conflict"


class QueryTimeoutError(AppError):
    """Parallel report queries did not finish within REPORT_QUERY_TIMEOUT."""
    status_code = 504
    error = "Query timeout"


class DataStoreError(AppError):
    """A database query failed; `error` names the operation, e.g. "Failed to fetch summary"."""
    status_code = 500
    error = "Database error"


@contextmanager
def operation_failed(error: str):
    """Re-raise database errors in the block as DataStoreError(error)."""
    try:
        yield
    except SQLAlchemyError as e:
        raise DataStoreError(str(e), error=error) from e
