"""Domain errors raised by services and mapped to HTTP responses."""

from fastapi import status


class PlateShareError(Exception):
    """Base class for errors a service reports to its caller."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Forbidden(PlateShareError):
    """Caller's role or ownership does not permit the action."""

    status_code = status.HTTP_403_FORBIDDEN


class Conflict(PlateShareError):
    """Duplicate registration or duplicate outstanding request."""

    status_code = status.HTTP_400_BAD_REQUEST


class InvalidInput(PlateShareError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(PlateShareError):
    """Referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class InvalidTransition(PlateShareError):
    """Entity's current status does not allow the requested change."""

    status_code = status.HTTP_400_BAD_REQUEST
