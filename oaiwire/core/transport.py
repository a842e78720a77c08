"""
Synchronous HTTP transport built on urllib.

One call, one attempt. Any completed exchange comes back as an HttpResponse,
whatever its status; only exchanges that could not complete raise.
"""

import atexit
import http.client
import logging
import socket
import ssl
import threading
import time
import urllib.error
import urllib.request
from email.message import Message

from oaiwire.core.errors import TransportError
from oaiwire.core.types import HttpHeader, HttpRequest, HttpResponse

log = logging.getLogger(__name__)

# Methods whose request body is sent on the wire
BODY_METHODS = ("POST", "PUT", "PATCH")

_lock = threading.Lock()
_opener: urllib.request.OpenerDirector | None = None
_atexit_registered = False


class _NoRedirectHandler(urllib.request.HTTPRedirectHandler):
    """Hands 3xx responses back to the caller instead of following them."""

    def redirect_request(self, req, fp, code, msg, headers, newurl):
        return None


def initialize() -> urllib.request.OpenerDirector:
    """
    Set up the process-wide opener, once.

    Safe to call from any number of clients and threads; only the first call
    builds the opener and registers ``shutdown`` to run at interpreter exit.
    """
    global _opener, _atexit_registered
    with _lock:
        if _opener is None:
            context = ssl.create_default_context()
            _opener = urllib.request.build_opener(
                urllib.request.HTTPSHandler(context=context),
                _NoRedirectHandler(),
            )
            log.debug("HTTP transport initialized")
            if not _atexit_registered:
                atexit.register(shutdown)
                _atexit_registered = True
        return _opener


def shutdown() -> None:
    """Close the process-wide opener. A later request re-initializes it."""
    global _opener
    with _lock:
        if _opener is not None:
            _opener.close()
            _opener = None
            log.debug("HTTP transport shut down")


def is_initialized() -> bool:
    """Check whether the process-wide opener exists."""
    return _opener is not None


def _collect_headers(raw: Message | None) -> list[HttpHeader]:
    headers: list[HttpHeader] = []
    if raw is None:
        return headers
    for name, value in raw.items():
        # Headers with an empty name or value carry nothing we can use
        if name.strip() and value.strip():
            headers.append(HttpHeader(name.strip(), value.strip()))
    return headers


def perform_request(request: HttpRequest, timeout: float) -> HttpResponse:
    """
    Send a request and wait for the response.

    Args:
        request: The assembled request
        timeout: Timeout in seconds

    Returns:
        HttpResponse for any completed exchange, including non-2xx statuses

    Raises:
        TransportError: On DNS, connection, TLS or timeout failures

    """
    opener = initialize()
    data = request.body if request.method in BODY_METHODS else None
    headers = {h.name: h.value for h in request.headers}
    start = time.monotonic()
    try:
        req = urllib.request.Request(request.url, data=data, headers=headers, method=request.method)
        with opener.open(req, timeout=timeout) as response:
            result = HttpResponse(
                status=response.status,
                body=response.read(),
                content_type=response.headers.get("Content-Type"),
                headers=_collect_headers(response.headers),
            )

    except urllib.error.HTTPError as e:
        # Non-2xx statuses are completed exchanges, not transport failures
        try:
            error_body = e.read() if e.fp else b""
        finally:
            e.close()
        result = HttpResponse(
            status=e.code,
            body=error_body,
            content_type=e.headers.get("Content-Type") if e.headers else None,
            headers=_collect_headers(e.headers),
        )

    except urllib.error.URLError as e:
        log.debug("%s %s failed: %s", request.method, request.url, e.reason)
        if isinstance(e.reason, (TimeoutError, socket.timeout)):
            raise TransportError(f"Request timed out after {timeout} seconds") from e
        raise TransportError(f"Connection error: {e.reason}") from e

    except TimeoutError as e:
        log.debug("%s %s timed out", request.method, request.url)
        raise TransportError(f"Request timed out after {timeout} seconds") from e

    except (OSError, http.client.HTTPException, ValueError) as e:
        # Connection resets mid-read, malformed URLs
        log.debug("%s %s failed: %s", request.method, request.url, e)
        raise TransportError(f"Connection error: {e}") from e

    log.debug(
        "%s %s -> %d (%.2fs)",
        request.method,
        request.url,
        result.status,
        time.monotonic() - start,
    )
    return result
