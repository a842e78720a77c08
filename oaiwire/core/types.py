"""
Core types for the OpenAI REST wire format.

These dataclasses describe the HTTP units exchanged with the API and the
client configuration shared by every operation.
"""

from dataclasses import dataclass, field
from typing import Any, Union

# =============================================================================
# Wire Values
# =============================================================================


# JSON-shaped value used for request bodies, response bodies and the
# ``extra`` overlay on request models. Dict insertion order is preserved.
WireValue = Union[None, bool, int, float, str, list[Any], dict[str, Any]]


# =============================================================================
# HTTP Types
# =============================================================================


HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")


@dataclass(frozen=True)
class HttpHeader:
    """A single HTTP header."""

    name: str
    value: str

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("Header name must not be empty")
        if not self.value.strip():
            raise ValueError(f"Header {self.name!r} must have a non-empty value")


@dataclass(frozen=True)
class HttpRequest:
    """
    A fully assembled HTTP request.

    Built by the operation views and handed to the transport unchanged, so it
    can be inspected (or printed) before it is sent.
    """

    method: str
    url: str
    headers: tuple[HttpHeader, ...] = ()
    body: bytes = b""

    def __post_init__(self) -> None:
        if self.method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method: {self.method}")

    def header(self, name: str) -> str | None:
        """Get a header value by case-insensitive name."""
        return _find_header(self.headers, name)


@dataclass
class HttpResponse:
    """HTTP response returned by the transport."""

    status: int
    body: bytes = b""
    content_type: str | None = None
    headers: list[HttpHeader] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Check if the status is in the 2xx range."""
        return 200 <= self.status < 300

    @property
    def text(self) -> str:
        """Body decoded as UTF-8."""
        return self.body.decode("utf-8", errors="replace")

    def header(self, name: str) -> str | None:
        """Get a header value by case-insensitive name."""
        return _find_header(self.headers, name)


def _find_header(headers: Any, name: str) -> str | None:
    wanted = name.lower()
    for header in headers:
        if header.name.lower() == wanted:
            return header.value
    return None


# =============================================================================
# Configuration
# =============================================================================


DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_TIMEOUT = 300


@dataclass
class ClientConfig:
    """
    Client configuration.

    A single instance is shared by the client and all of its operation
    views, so changes made after construction apply to subsequent calls.
    """

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    organization: str | None = None
    project: str | None = None
    timeout_seconds: float = DEFAULT_TIMEOUT


# =============================================================================
# Multipart Types
# =============================================================================


@dataclass
class MultipartField:
    """A text field in a multipart/form-data body."""

    name: str
    value: str


@dataclass
class MultipartFile:
    """A binary file part in a multipart/form-data body."""

    name: str
    filename: str
    content_type: str
    data: bytes
