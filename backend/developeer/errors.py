"""Developeer domain errors.

Every error serializes to the same client-facing body:
    {"code": 422, "reason": "ValidationError", "message": "...", "location": "..."}
"""

from typing import Any, Dict, Optional


class DeveloperError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500

    def __init__(self, message: str, location: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.location = location

    @property
    def reason(self) -> str:
        return type(self).__name__

    def to_dict(self) -> Dict[str, Any]:
        body = {
            "code": self.status_code,
            "reason": self.reason,
            "message": self.message,
        }
        if self.location is not None:
            body["location"] = self.location
        return body


class ValidationError(DeveloperError):
    """Malformed, missing or disallowed input field."""

    status_code = 422

    def __init__(self, message: str, location: str):
        super().__init__(message, location=location)


class Unauthorized(DeveloperError):
    """Principal is not the owner of the addressed resource.

    Both identifiers are kept in the message for debugging.
    """

    status_code = 401

    def __init__(
        self,
        message: str,
        principal_id: Optional[str] = None,
        owner_id: Optional[str] = None,
    ):
        super().__init__(message)
        self.principal_id = principal_id
        self.owner_id = owner_id


class NotFound(DeveloperError):
    status_code = 404


class InternalError(DeveloperError):
    """Storage or collaborator failure, optionally inside a saga step."""

    status_code = 500

    def __init__(self, message: str, step: Optional[int] = None):
        super().__init__(message)
        self.step = step

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        if self.step is not None:
            body["step"] = self.step
        return body
