"""Exception hierarchy for oaiwire."""

from enum import Enum
from typing import Any


class OaiwireError(Exception):
    """Base error class for oaiwire errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        result: dict[str, Any] = {"error": self.message}
        if self.details:
            result["details"] = self.details
        return result


class MissingCredentialError(OaiwireError):
    """No API key was supplied or found in the environment."""


class TransportError(OaiwireError):
    """The HTTP exchange could not complete (DNS, connect, TLS, timeout)."""


class HTTPStatusError(OaiwireError):
    """The API answered with a status outside the 2xx range."""

    def __init__(self, message: str, status: int, body: bytes = b"", details: dict | None = None):
        super().__init__(message, details)
        self.status = status
        self.body = body

    @property
    def body_text(self) -> str:
        """Raw response body decoded for diagnostics."""
        return self.body.decode("utf-8", errors="replace")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        result = super().to_dict()
        result["status"] = self.status
        return result


class MalformedResponseError(OaiwireError):
    """The response body is not the JSON document the operation expects."""


class ServiceError(OaiwireError):
    """A response document carries an ``error`` entry."""

    def __init__(self, message: str, error_type: str = "error", details: dict | None = None):
        super().__init__(message, details)
        self.error_type = error_type

    def __str__(self) -> str:
        return f"OpenAI error ({self.error_type}): {self.message}"


class NavigationFailure(Enum):
    """Which piece of structure a response search could not find."""

    NO_OUTPUT_ARRAY = "no_output_array"
    NO_MESSAGE_ITEM = "no_message_item"
    NO_CONTENT = "no_content"
    NO_TEXT_FIELD = "no_text_field"
    NO_TOOL_CALL = "no_tool_call"
    NO_RESULT_FIELD = "no_result_field"
    BAD_RESULT_SHAPE = "bad_result_shape"


class NavigationError(OaiwireError):
    """A response search found no matching structure."""

    def __init__(self, message: str, kind: NavigationFailure, details: dict | None = None):
        super().__init__(message, details)
        self.kind = kind

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        result = super().to_dict()
        result["kind"] = self.kind.value
        return result


class FileAccessError(OaiwireError):
    """A local file could not be read or written."""

    def __init__(self, message: str, path: str, details: dict | None = None):
        super().__init__(message, details)
        self.path = path


class ValidationError(OaiwireError):
    """Validation error for local input/data issues (not API errors)."""
