"""
File, MIME and base64 helpers.

Used by the upload operations to read files into memory, and by callers to
persist base64 image payloads and audio bytes returned by the API.
"""

import base64
import binascii
from pathlib import Path

from oaiwire.core.errors import FileAccessError, ValidationError
from oaiwire.core.types import MultipartFile

# Extension -> MIME type for the media the API accepts or returns
MIME_TYPES = {
    # Images
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".bmp": "image/bmp",
    ".svg": "image/svg+xml",
    # Video
    ".mp4": "video/mp4",
    ".mov": "video/quicktime",
    ".webm": "video/webm",
    # Audio
    ".mp3": "audio/mpeg",
    ".wav": "audio/wav",
    ".ogg": "audio/ogg",
    ".flac": "audio/flac",
    ".m4a": "audio/mp4",
    # Text / data
    ".pdf": "application/pdf",
    ".json": "application/json",
    ".txt": "text/plain",
    ".vtt": "text/vtt",
}

DEFAULT_MIME_TYPE = "application/octet-stream"


def guess_mime_type(path: str | Path) -> str:
    """Guess a MIME type from the file extension (case-insensitive)."""
    return MIME_TYPES.get(Path(path).suffix.lower(), DEFAULT_MIME_TYPE)


# =============================================================================
# Binary files
# =============================================================================


def read_file_bytes(path: str | Path) -> bytes:
    """
    Read a whole file into memory.

    Raises:
        FileAccessError: If the file is missing or unreadable

    """
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise FileAccessError(f"Unable to read {path}: {e.strerror or e}", path=str(path)) from e


def write_file_bytes(path: str | Path, data: bytes) -> None:
    """
    Write bytes to a file, replacing any existing content.

    Raises:
        FileAccessError: If the file cannot be written

    """
    try:
        Path(path).write_bytes(data)
    except OSError as e:
        raise FileAccessError(f"Unable to write {path}: {e.strerror or e}", path=str(path)) from e


def file_part(name: str, path: str | Path) -> MultipartFile:
    """Read a file into a multipart file part named ``name``."""
    path = Path(path)
    return MultipartFile(
        name=name,
        filename=path.name,
        content_type=guess_mime_type(path),
        data=read_file_bytes(path),
    )


# =============================================================================
# Base64 and data: URLs
# =============================================================================


def base64_to_bytes(b64: str) -> bytes:
    """Decode standard base64 text."""
    try:
        return base64.b64decode(b64, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError(f"Invalid base64 data: {e}") from e


def file_to_base64(path: str | Path) -> str:
    """Read a file and return its content as base64 text."""
    return base64.b64encode(read_file_bytes(path)).decode("ascii")


def save_base64_to_file(b64: str, path: str | Path) -> None:
    """Decode a base64 payload (e.g. an image result) and write it to ``path``."""
    write_file_bytes(path, base64_to_bytes(b64))


def bytes_to_data_url(data: bytes, mime_type: str) -> str:
    """Build a ``data:<mime>;base64,...`` URL."""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def file_to_data_url(path: str | Path) -> str:
    """Build a data URL from a file, guessing its MIME type."""
    return bytes_to_data_url(read_file_bytes(path), guess_mime_type(path))


def split_data_url(data_url: str) -> tuple[str, str]:
    """
    Split a data URL into (mime_type, base64_payload).

    Raises:
        ValidationError: If the string is not a base64 data URL

    """
    prefix, marker = "data:", ";base64,"
    if not data_url.startswith(prefix):
        raise ValidationError("Not a data URL (missing 'data:' prefix)")
    mime_type, sep, payload = data_url[len(prefix) :].partition(marker)
    if not sep:
        raise ValidationError("Data URL is missing the ';base64,' segment")
    return mime_type, payload


def data_url_to_bytes(data_url: str) -> bytes:
    """Decode the payload of a base64 data URL."""
    _, payload = split_data_url(data_url)
    return base64_to_bytes(payload)
