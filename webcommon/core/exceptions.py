"""
Base exception classes for the application.

Exception hierarchy follows the layer structure:
- Repository layer raises technical exceptions
- Controller helpers raise conversion exceptions
- API layer turns all of them into envelope responses (see api/exception_handlers.py)
"""


class AppException(Exception):
    """
    Base exception for all application-specific exceptions.

    All custom exceptions inherit from this class so a single handler
    can catch anything the application signals on purpose.
    """

    def __init__(self, message: str = "An application error occurred"):
        self.message = message
        super().__init__(self.message)


# ============================================================================
# DOMAIN EXCEPTIONS
# ============================================================================


class ValidationError(AppException):
    """
    Raised when request data is well-formed for the framework but
    unusable for the application.

    Examples:
    - Date text that matches none of the accepted patterns
    - Invalid date range

    Typically maps to HTTP 400
    """

    pass


class DateParseError(ValidationError):
    """Raised by the date utilities when text cannot be read as a date."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Invalid date format: {text}")


# ============================================================================
# CONVERSION EXCEPTIONS (raised by controller helpers)
# ============================================================================


class EmptyPayloadError(AppException):
    """
    Raised when an envelope carries no payload but a typed payload
    was required.

    Typically maps to HTTP 400
    """

    def __init__(self, message: str = "supplied data is empty"):
        super().__init__(message)


class TypeMismatchError(AppException):
    """
    Raised when an envelope payload is present but is not an instance
    of the required type.

    Typically maps to HTTP 500
    """

    def __init__(self, message: str = "converted type does not match required type"):
        super().__init__(message)


class BindingError(AppException):
    """
    Raised when request text cannot be bound because no converter is
    registered for the target type, or no binder exists for the request.
    """

    pass


# ============================================================================
# REPOSITORY/TECHNICAL EXCEPTIONS
# ============================================================================


class RepositoryError(AppException):
    """
    Base exception for repository layer errors.

    Examples:
    - Generic database errors
    - Transaction failures
    - Connection issues
    """

    pass


class DatabaseConstraintError(RepositoryError):
    """
    Raised when a database constraint is violated.

    The service layer usually turns it into a more specific domain error.
    """

    pass
