"""
Core layer - Wire types, request models and HTTP client.

This layer provides:
- Typed dataclasses for HTTP units, configuration and request models
- JSON and multipart body assembly
- The urllib transport with one-time initialization
- Response navigation helpers
"""

from oaiwire.core.client import APIClient, check_status, common_headers, parse_json
from oaiwire.core.errors import (
    FileAccessError,
    HTTPStatusError,
    MalformedResponseError,
    MissingCredentialError,
    NavigationError,
    NavigationFailure,
    OaiwireError,
    ServiceError,
    TransportError,
    ValidationError,
)
from oaiwire.core.multipart import build_multipart_body, random_boundary
from oaiwire.core.navigation import (
    first_image_generation_call,
    first_image_output,
    first_text_output,
    first_tool_call_output,
)
from oaiwire.core.requests import (
    AudioSpeechRequest,
    AudioTranscriptionRequest,
    ImageEditRequest,
    ImagesGenerateRequest,
    ModerationRequest,
    ResponsesRequest,
    VideoCreateRequest,
)
from oaiwire.core.transport import initialize, perform_request, shutdown
from oaiwire.core.types import (
    ClientConfig,
    HttpHeader,
    HttpRequest,
    HttpResponse,
    MultipartField,
    MultipartFile,
    WireValue,
)

__all__ = [
    "APIClient",
    "AudioSpeechRequest",
    "AudioTranscriptionRequest",
    "ClientConfig",
    "FileAccessError",
    "HTTPStatusError",
    "HttpHeader",
    "HttpRequest",
    "HttpResponse",
    "ImageEditRequest",
    "ImagesGenerateRequest",
    "MalformedResponseError",
    "MissingCredentialError",
    "ModerationRequest",
    "MultipartField",
    "MultipartFile",
    "NavigationError",
    "NavigationFailure",
    "OaiwireError",
    "ResponsesRequest",
    "ServiceError",
    "TransportError",
    "ValidationError",
    "VideoCreateRequest",
    "WireValue",
    "build_multipart_body",
    "check_status",
    "common_headers",
    "first_image_generation_call",
    "first_image_output",
    "first_text_output",
    "first_tool_call_output",
    "initialize",
    "parse_json",
    "perform_request",
    "random_boundary",
    "shutdown",
]
