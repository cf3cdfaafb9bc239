"""
Domain exceptions raised by the service layer.
Mapped to error responses by the exception handler in goodwill.main
"""
from fastapi import status


class GoodwillError(Exception):
    """Base class for client-facing service errors"""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(GoodwillError):
    """Sender, like or user does not exist"""
    status_code = status.HTTP_404_NOT_FOUND


class QuotaExceededError(GoodwillError):
    """Sender has no likes left in the current period"""
    status_code = status.HTTP_429_TOO_MANY_REQUESTS


class ConflictError(GoodwillError):
    status_code = status.HTTP_409_CONFLICT
