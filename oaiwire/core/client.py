"""
Core HTTP client for the OpenAI REST API.

Handles authentication headers, request assembly, status checks and body
parsing. The network exchange itself is delegated to ``core.transport``.
"""

import json
import logging
import os
from typing import Any

from oaiwire.core import transport
from oaiwire.core.errors import HTTPStatusError, MalformedResponseError, MissingCredentialError, ValidationError
from oaiwire.core.multipart import build_multipart_body, multipart_content_type, random_boundary
from oaiwire.core.types import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    ClientConfig,
    HttpHeader,
    HttpRequest,
    HttpResponse,
    MultipartField,
    MultipartFile,
    WireValue,
)

log = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
USER_AGENT = "oaiwire/0.1.0"


def common_headers(config: ClientConfig, content_type: str = JSON_CONTENT_TYPE) -> list[HttpHeader]:
    """
    Build the headers sent with every request.

    Order: Authorization, Content-Type (skipped when empty, e.g. for GET),
    OpenAI-Organization and OpenAI-Project (when configured), User-Agent.
    """
    headers = [HttpHeader("Authorization", f"Bearer {config.api_key}")]
    if content_type:
        headers.append(HttpHeader("Content-Type", content_type))
    if config.organization and config.organization.strip():
        headers.append(HttpHeader("OpenAI-Organization", config.organization))
    if config.project and config.project.strip():
        headers.append(HttpHeader("OpenAI-Project", config.project))
    headers.append(HttpHeader("User-Agent", USER_AGENT))
    return headers


def error_message(body: bytes, default: str) -> str:
    """Pull a readable message out of an error body, if it has one."""
    try:
        error_data = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        text = body.decode("utf-8", errors="replace").strip()
        return text or default

    # Handle both {"error": "message"} and {"error": {"message": "..."}}
    error_field = error_data.get("error") if isinstance(error_data, dict) else None
    if isinstance(error_field, str):
        return error_field
    if isinstance(error_field, dict) and isinstance(error_field.get("message"), str):
        return error_field["message"]
    return default


def check_status(response: HttpResponse, operation: str = "API") -> HttpResponse:
    """
    Raise for any status outside 200-299.

    Raises:
        HTTPStatusError: Carrying the status and the raw body

    """
    if response.ok:
        return response
    message = error_message(response.body, f"HTTP {response.status}")
    log.debug("%s request failed with status %d: %s", operation, response.status, message)
    raise HTTPStatusError(
        f"{operation} error ({response.status}): {message}",
        status=response.status,
        body=response.body,
    )


def parse_json(response: HttpResponse) -> WireValue:
    """
    Parse a response body as a JSON document.

    Raises:
        MalformedResponseError: If the body is not valid UTF-8 JSON

    """
    try:
        return json.loads(response.body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        preview = response.text[:200]
        raise MalformedResponseError(
            f"Invalid JSON response: {e}",
            details={"status": response.status, "body": preview},
        ) from e


class APIClient:
    """
    Low-level HTTP client for the OpenAI API.

    Handles:
    - Configuration (explicit arguments, then environment variables)
    - Request assembly for JSON and multipart bodies
    - Header injection
    - Sending, status checks and JSON parsing
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        organization: str | None = None,
        project: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        config: ClientConfig | None = None,
    ):
        """
        Initialize the API client.

        Args:
            api_key: OpenAI API key (or OPENAI_API_KEY env var)
            base_url: API base URL (or OPENAI_BASE_URL env var)
            organization: Organization ID (or OPENAI_ORG_ID env var)
            project: Project ID (or OPENAI_PROJECT_ID env var)
            timeout: Request timeout in seconds
            config: Complete configuration; other arguments are ignored

        Raises:
            MissingCredentialError: If no API key is available

        """
        if config is None:
            config = ClientConfig(
                api_key=api_key or os.environ.get("OPENAI_API_KEY", ""),
                base_url=(base_url or os.environ.get("OPENAI_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
                organization=organization or os.environ.get("OPENAI_ORG_ID"),
                project=project or os.environ.get("OPENAI_PROJECT_ID"),
                timeout_seconds=timeout,
            )
        if not config.api_key or not config.api_key.strip():
            raise MissingCredentialError("OPENAI_API_KEY environment variable not set")
        self.config = config

    def _build_url(self, path: str) -> str:
        """Build full URL from path."""
        if path.startswith("http"):
            return path
        return f"{self.config.base_url.rstrip('/')}{path}"

    # =========================================================================
    # Request assembly
    # =========================================================================

    def build_request(
        self,
        method: str,
        path: str,
        body: bytes = b"",
        content_type: str = JSON_CONTENT_TYPE,
    ) -> HttpRequest:
        """Assemble a request with the common headers attached."""
        return HttpRequest(
            method=method,
            url=self._build_url(path),
            headers=tuple(common_headers(self.config, content_type)),
            body=body,
        )

    def json_request(self, path: str, data: dict[str, Any], method: str = "POST") -> HttpRequest:
        """
        Assemble a request with a JSON body.

        Raises:
            ValidationError: If the body holds NaN or infinite floats

        """
        try:
            body = json.dumps(data, allow_nan=False).encode("utf-8")
        except ValueError as e:
            raise ValidationError(f"Request body is not valid JSON: {e}") from e
        return self.build_request(method, path, body, JSON_CONTENT_TYPE)

    def multipart_request(
        self,
        path: str,
        fields: list[MultipartField],
        files: list[MultipartFile],
        boundary: str | None = None,
    ) -> HttpRequest:
        """Assemble a multipart/form-data POST request."""
        boundary = boundary or random_boundary()
        body = build_multipart_body(boundary, fields, files)
        return self.build_request("POST", path, body, multipart_content_type(boundary))

    def get_request(self, path: str) -> HttpRequest:
        """Assemble a body-less GET request."""
        return self.build_request("GET", path, content_type="")

    # =========================================================================
    # Sending
    # =========================================================================

    def execute(self, request: HttpRequest) -> HttpResponse:
        """Send a request; non-2xx statuses are returned, not raised."""
        return transport.perform_request(request, self.config.timeout_seconds)

    def send(self, request: HttpRequest, operation: str = "API") -> HttpResponse:
        """Send a request and raise HTTPStatusError on non-2xx statuses."""
        return check_status(self.execute(request), operation)

    def send_json(self, request: HttpRequest, operation: str = "API") -> WireValue:
        """Send a request and parse the JSON response body."""
        return parse_json(self.send(request, operation))
