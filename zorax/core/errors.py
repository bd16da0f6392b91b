from fastapi import status


class AppError(Exception):
    """Base for errors that map straight onto a JSON ``{"message": ...}`` response."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class Conflict(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Resource already exists"


class InvalidCredentials(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid username or password"


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden: Admin access required"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class SessionError(AppError):
    default_message = "Failed to logout"


class InternalError(AppError):
    pass
