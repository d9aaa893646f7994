"""
Domain exceptions.

Services raise these; the API layer turns them into ``{"error": message}``
responses with the matching HTTP status.
"""

from typing import Any, Dict, Optional


class PodevimError(Exception):
    """Base class for all domain errors."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r})"


class NotFoundError(PodevimError):
    """Entity is absent or not in the state the operation requires."""

    status_code = 404


class ForbiddenError(PodevimError):
    """Caller lacks permission for the operation."""

    status_code = 403


class ConflictError(PodevimError):
    """A uniqueness or scheduling invariant would be violated."""

    status_code = 409


class ValidationError(PodevimError):
    """Malformed input."""

    status_code = 400


class InternalError(PodevimError):
    """Unexpected persistence failure."""

    status_code = 500
