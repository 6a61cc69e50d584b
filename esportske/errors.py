"""Custom exception classes for the application."""


class AppError(Exception):
    """Base application error class."""

    def __init__(self, message, status_code=400):
        """Initialize the error."""
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ValidationError(AppError):
    """Raised when user input fails validation."""

    def __init__(self, message="Validation failed."):
        """Initialize the error."""
        super().__init__(message, 400)


class UnauthorizedError(AppError):
    """Raised when a bearer credential is missing or rejected."""

    def __init__(self, message="Unauthorized."):
        """Initialize the error."""
        super().__init__(message, 401)


class ForbiddenError(AppError):
    """Raised when a valid caller lacks the required role."""

    def __init__(self, message="Forbidden."):
        """Initialize the error."""
        super().__init__(message, 403)


class NotFoundError(AppError):
    """Raised when a resource is not found."""

    def __init__(self, message="Resource not found."):
        """Initialize the error."""
        super().__init__(message, 404)


class ConflictError(AppError):
    """Raised when a request clashes with the current state of a record."""

    def __init__(self, message="Request conflicts with current state."):
        """Initialize the error."""
        super().__init__(message, 400)


class AlreadyRegisteredError(ConflictError):
    """Raised when registering for a tournament twice."""

    def __init__(self, message="Already registered for this tournament"):
        """Initialize the error."""
        super().__init__(message)


class LimitReachedError(ConflictError):
    """Raised when the per-tournament registration cap has been used up."""

    def __init__(self, message="Registration limit reached for this tournament"):
        """Initialize the error."""
        super().__init__(message)


class NotRegisteredError(ConflictError):
    """Raised when unregistering from a tournament the user is not entered in."""

    def __init__(self, message="Not registered for this tournament"):
        """Initialize the error."""
        super().__init__(message)
