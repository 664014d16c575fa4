# app/exceptions.py
from typing import Dict, Any

from app.config import ENTITY_KINDS


class ApiError(Exception):
    """
    Base class for errors that map onto a client-visible HTTP outcome.
    Rendered by the exception handler in main.py as {error, message, code}.
    """
    status_code: int = 500
    error: str = "Internal Server Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_envelope(self) -> Dict[str, Any]:
        return {"error": self.error, "message": self.message, "code": self.status_code}


class BadRequest(ApiError):
    status_code = 400
    error = "Bad Request"


class InvalidQuery(BadRequest):
    """Search text shorter than the minimum length."""


class NotFound(ApiError):
    status_code = 404
    error = "Not Found"


class EmptyCollection(ApiError):
    """Random selection against an empty collection. An operator data fault."""
    status_code = 500
    error = "Internal Server Error"


class ServiceUnavailable(ApiError):
    status_code = 503
    error = "Service Unavailable"


class DatasetError(RuntimeError):
    """A dataset file is missing or malformed."""


class UnknownEndpoint(NotFound):
    """
    No route (or no entity kind) matches the path. The envelope points the
    client at the documentation and the top-level endpoints.
    """
    def __init__(self, message: str = "The requested endpoint does not exist."):
        super().__init__(message)

    def to_envelope(self) -> Dict[str, Any]:
        envelope = super().to_envelope()
        envelope["documentation"] = "/api/docs"
        envelope["available_endpoints"] = ["/api"] + [f"/api/{kind}" for kind in ENTITY_KINDS]
        return envelope
