"""
Domain errors raised by the service layer.

Services never build HTTP responses; endpoints let these propagate and the
handlers registered in `app.main` translate them to JSON error bodies.
"""

from fastapi import status


class DomainError(Exception):
    """A precondition of a domain operation was not met."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class NotFoundError(DomainError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(DomainError):
    status_code = status.HTTP_409_CONFLICT


class PermissionDeniedError(DomainError):
    status_code = status.HTTP_403_FORBIDDEN
