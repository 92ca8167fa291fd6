"""
Error Definitions

Defines the exception classes raised by the persistence layer.
Store-level exceptions are translated into these at the repository boundary.
"""

from typing import Any, Optional


class AppError(Exception):
    """
    Application Base Exception

    Base class for all custom exceptions, containing error message, type, and code.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "app_error",
        code: str = "internal_error",
        details: Optional[dict[str, Any]] = None,
    ):
        """
        Initialize exception

        Args:
            message: Error message
            error_type: Error type
            code: Error code
            details: Extra error details
        """
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.code = code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to dictionary format

        Returns:
            dict: Error information dictionary
        """
        result = {
            "error": {
                "message": self.message,
                "type": self.error_type,
                "code": self.code,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result


class NotFoundError(AppError):
    """
    Entity Not Found Error

    Raised when the requested identifier has no corresponding entity.
    """

    def __init__(
        self,
        message: str = "Entity not found",
        code: str = "not_found",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="not_found_error",
            code=code,
            details=details,
        )


class QueryError(AppError):
    """
    Query Error

    Raised when a named query is undefined, its parameters do not match,
    or the store rejects a read.
    """

    def __init__(
        self,
        message: str = "Query failed",
        code: str = "query_error",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="query_error",
            code=code,
            details=details,
        )


class TooManyResultsError(QueryError):
    """
    Too Many Results Error

    Raised when a lookup by a unique business key matches more than one row.
    This signals a data integrity defect, not a regular multi-result case.
    """

    def __init__(
        self,
        unique_id: Any,
        count: int,
        message: Optional[str] = None,
    ):
        super().__init__(
            message=message or f"Found {count} entities for unique id {unique_id!r}",
            code="too_many_results",
            details={"unique_id": unique_id, "count": count},
        )
        self.error_type = "too_many_results_error"
        self.unique_id = unique_id
        self.count = count


class PersistenceError(AppError):
    """
    Persistence Error

    Raised when the store rejects a write: constraint violation,
    stale version, missing row or connectivity failure.
    """

    def __init__(
        self,
        message: str = "Persistence operation failed",
        code: str = "persistence_error",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="persistence_error",
            code=code,
            details=details,
        )


class ValidationError(AppError):
    """
    Argument Validation Error

    Raised when a repository is called with arguments it cannot serve,
    e.g. a None identifier or an entity of a foreign type.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        code: str = "validation_error",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="validation_error",
            code=code,
            details=details,
        )
