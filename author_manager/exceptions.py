"""
Custom exception classes for the application.

Business-rule rejections of the author lifecycle are NOT exceptions: they are
returned as unsuccessful results. The exceptions below cover failures that
must abort the current operation, chiefly storage errors.
"""


class AppException(Exception):
    """
    Base exception class for all application exceptions.

    Attributes:
        message: Human-readable error message.
        http_status: HTTP status code for REST API responses.
    """

    http_status: int = 500

    def __init__(self, message: str):
        """
        Initialize the exception with a message.

        Args:
            message: Human-readable error description.
        """
        self.message = message
        super().__init__(message)


class NotFoundError(AppException):
    """
    Resource not found.

    HTTP Status: 404 Not Found
    """

    http_status = 404


class DatabaseError(AppException):
    """
    Database operation failed.

    Raised when storage is unavailable or a statement fails. The current
    operation is rolled back and must not be retried automatically.

    HTTP Status: 500 Internal Server Error
    """

    http_status = 500


class ConflictError(DatabaseError):
    """
    Storage rejected a write because of a constraint violation.

    Raised when a uniqueness constraint fires after the application-level
    checks passed (e.g., two concurrent writers racing for the same name).

    HTTP Status: 409 Conflict
    """

    http_status = 409
