"""
Error taxonomy shared by the REST handlers and the client store.

Every error carries the HTTP status it maps to; the FastAPI app turns them
into ``{"detail": message}`` responses.
"""
from fastapi import status


class BookNestError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequest(BookNestError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class InvalidOrder(BookNestError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid order data"


class Unauthorized(BookNestError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Could not validate credentials"


class Forbidden(BookNestError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Admin role required"


class NotFound(BookNestError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Conflict(BookNestError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class ServerError(BookNestError):
    pass
