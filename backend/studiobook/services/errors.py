"""
Domain errors raised by the booking services.

Each error carries the HTTP status the API layer answers with; the
exception handler in main.py renders them as {"success": false, "error": ...}.
"""


class BookingError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(BookingError):
    status_code = 400
    default_message = "Please provide all required fields"


class InvalidTransition(ValidationError):
    default_message = "Invalid status transition"

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot change booking status from {current} to {requested}")


class AuthenticationError(BookingError):
    status_code = 401
    default_message = "Not authorized"


class ForbiddenError(BookingError):
    status_code = 403
    default_message = "Not authorized to modify this booking"


class NotFoundError(BookingError):
    status_code = 404
    default_message = "Not found"


class ServiceNotFound(NotFoundError):
    default_message = "Service not found"


class ConflictError(BookingError):
    status_code = 409
    default_message = "This time slot is no longer available"
