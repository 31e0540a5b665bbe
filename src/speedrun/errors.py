"""Domain errors raised by the service layer.

Each error carries the HTTP status it maps to; the global handler in
``speedrun.middleware.error_handler`` turns them into ``{"message": ...}``
responses.
"""

from __future__ import annotations


class SpeedrunError(Exception):
    """Base class for business-rule failures."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(SpeedrunError):
    """The requested entity does not exist."""

    status_code = 404


class InvalidReferenceError(SpeedrunError):
    """A foreign id in the payload points at nothing."""

    status_code = 400


class IncompatibleReferenceError(SpeedrunError):
    """Two referenced entities belong to different games."""

    status_code = 400


class CrossGameMismatchError(IncompatibleReferenceError):
    """A record and a category from different games were linked."""


class ConflictError(SpeedrunError):
    """A unique field is already taken."""

    status_code = 409


class ValidationFailure(SpeedrunError):
    status_code = 400


class EmptyUpdateError(ValidationFailure):
    def __init__(self, message: str = "No fields to update") -> None:
        super().__init__(message)


class UploadRejectedError(ValidationFailure):
    """An uploaded file has a content type or size we do not store."""


class AuthenticationError(SpeedrunError):
    status_code = 401


class PermissionDeniedError(SpeedrunError):
    status_code = 403
