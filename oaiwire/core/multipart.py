"""
multipart/form-data encoding for upload endpoints.

Text fields and binary file parts are framed in the order given. File bytes
are copied through untouched.
"""

import uuid
from collections.abc import Iterable

from oaiwire.core.types import MultipartField, MultipartFile

BOUNDARY_PREFIX = "----oaiwire-boundary-"


def random_boundary() -> str:
    """Generate a boundary token (fixed prefix + 32 random hex digits)."""
    return f"{BOUNDARY_PREFIX}{uuid.uuid4().hex}"


def multipart_content_type(boundary: str) -> str:
    """Content-Type header value for a body framed with ``boundary``."""
    return f"multipart/form-data; boundary={boundary}"


def build_multipart_body(
    boundary: str,
    fields: Iterable[MultipartField],
    files: Iterable[MultipartFile] = (),
) -> bytes:
    """
    Build a multipart/form-data body.

    Args:
        boundary: Boundary token (without the leading dashes)
        fields: Text fields, encoded first
        files: Binary file parts, encoded after the fields

    Returns:
        The complete body, terminated by ``--boundary--\\r\\n``

    """
    body_parts: list[bytes] = []

    for f in fields:
        body_parts.append(f"--{boundary}\r\n".encode())
        body_parts.append(f'Content-Disposition: form-data; name="{f.name}"\r\n\r\n'.encode())
        body_parts.append(f"{f.value}\r\n".encode())

    for file in files:
        body_parts.append(f"--{boundary}\r\n".encode())
        body_parts.append(
            f'Content-Disposition: form-data; name="{file.name}"; filename="{file.filename}"\r\n'.encode()
        )
        body_parts.append(f"Content-Type: {file.content_type}\r\n\r\n".encode())
        body_parts.append(bytes(file.data))
        body_parts.append(b"\r\n")

    body_parts.append(f"--{boundary}--\r\n".encode())
    return b"".join(body_parts)
