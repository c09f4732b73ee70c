"""
Error taxonomy for the admin API.

Services raise these exceptions; the application factory registers a
single Flask error handler that renders them as::

    {"error": "<kind>", "message": "<text>"}

with the matching HTTP status.  ``Unauthenticated`` and ``Forbidden``
are deliberately separate types so clients can tell "sign in again"
from "you are not allowed".
"""

from flask import jsonify


class ServiceHubError(Exception):
    """Base class for every error the API reports to its callers."""

    status_code = 500
    kind = "internal_error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message())
        self.message = message or self.default_message()

    @classmethod
    def default_message(cls) -> str:
        return "An unexpected error occurred."

    def to_response(self):
        """Build the ``(response, status)`` tuple for a Flask handler."""
        response = jsonify(error=self.kind, message=self.message)
        response.status_code = self.status_code
        return response


class Unauthenticated(ServiceHubError):
    """Missing, malformed, expired or unknown credential."""

    status_code = 401
    kind = "unauthenticated"

    @classmethod
    def default_message(cls) -> str:
        return "Authentication required."

    def to_response(self):
        response = super().to_response()
        response.headers["WWW-Authenticate"] = "Bearer"
        return response


class Forbidden(ServiceHubError):
    """Valid identity whose role is not allowed to perform the action."""

    status_code = 403
    kind = "forbidden"

    @classmethod
    def default_message(cls) -> str:
        return "You do not have permission to perform this action."


class NotFound(ServiceHubError, LookupError):
    """The addressed entity does not exist."""

    status_code = 404
    kind = "not_found"

    @classmethod
    def default_message(cls) -> str:
        return "Resource not found."


class ValidationError(ServiceHubError, ValueError):
    """The request payload or a query parameter is malformed."""

    status_code = 400
    kind = "validation_error"

    @classmethod
    def default_message(cls) -> str:
        return "Invalid request."


class TransientStoreError(ServiceHubError):
    """The database could not be reached; the caller may retry later."""

    status_code = 503
    kind = "transient_store_error"

    @classmethod
    def default_message(cls) -> str:
        return "The data store is temporarily unavailable. Please try again."
