"""
Request configuration types, one per API operation.

Field names match the documented wire keys of the OpenAI API. Fields
without a default are required and always sent. Optional fields default to
``None``, which means "absent": they are left out of the request body
entirely. Fields not modeled here can be set through ``extra``, which is
merged in last and wins on key collision (including over modeled fields).
"""

import copy
import dataclasses
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from oaiwire.core import util
from oaiwire.core.types import MultipartField, MultipartFile, WireValue

# Marks dataclass fields that are local inputs (file paths), not wire keys
LOCAL = {"wire": False}


def _is_required(f: dataclasses.Field) -> bool:
    return f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING


def wire_body(model: Any) -> dict[str, Any]:
    """
    Serialize a request model to its wire dict.

    Required fields are always present, optional fields only when not
    ``None``, and ``extra`` entries are applied last so they override.
    Values are deep-copied so the body never aliases caller objects.
    """
    body: dict[str, Any] = {}
    for f in dataclasses.fields(model):
        if f.name == "extra" or not f.metadata.get("wire", True):
            continue
        value = getattr(model, f.name)
        if value is None and not _is_required(f):
            continue
        body[f.name] = copy.deepcopy(value)

    for key, value in model.extra.items():
        body[key] = copy.deepcopy(value)
    return body


def form_value(value: WireValue) -> str:
    """Flatten a wire value to a form-field string (JSON for non-strings)."""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def form_fields(model: Any) -> list[MultipartField]:
    """Serialize a request model to multipart text fields."""
    return [MultipartField(name=key, value=form_value(value)) for key, value in wire_body(model).items()]


# =============================================================================
# Responses: POST /responses
# =============================================================================


@dataclass
class ResponsesRequest:
    """
    Request configuration for the Responses API.

    ``input`` may be a plain string or a list of structured input items.

    Example:
        r = ResponsesRequest(model="gpt-4.1-mini", input="Explain virtual threads.")
        r.temperature = 0.7

    """

    model: str
    input: WireValue
    instructions: str | None = None
    metadata: dict[str, Any] | None = None
    temperature: float | None = None
    top_p: float | None = None
    max_output_tokens: int | None = None
    previous_response_id: str | None = None
    reasoning: dict[str, Any] | None = None
    text: dict[str, Any] | None = None
    tools: list[Any] | None = None
    tool_choice: WireValue = None
    truncation: WireValue = None
    include: list[str] | None = None
    parallel_tool_calls: bool | None = None
    stream: bool | None = None
    audio: dict[str, Any] | None = None
    store: bool | None = None
    user: str | None = None
    service_tier: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for API request."""
        return wire_body(self)


# =============================================================================
# Images: POST /images/generations, POST /images/edits
# =============================================================================


@dataclass
class ImagesGenerateRequest:
    """Request configuration for text-to-image generation."""

    model: str
    prompt: str
    n: int | None = None
    size: str | None = None
    quality: str | None = None
    style: str | None = None
    response_format: str | None = None
    output_format: str | None = None
    background: str | None = None
    user: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for API request."""
        return wire_body(self)


@dataclass
class ImageEditRequest:
    """
    Request configuration for image edits (multipart upload).

    ``image_path`` and ``mask_path`` name local files that are uploaded as
    the ``image`` and ``mask`` file parts; transparent mask areas are edited.
    """

    model: str
    image_path: str | Path = field(metadata=LOCAL)
    mask_path: str | Path | None = field(default=None, metadata=LOCAL)
    prompt: str | None = None
    n: int | None = None
    size: str | None = None
    quality: str | None = None
    style: str | None = None
    response_format: str | None = None
    output_format: str | None = None
    background: str | None = None
    user: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict of wire fields (before form flattening)."""
        return wire_body(self)

    def to_form_fields(self) -> list[MultipartField]:
        """Convert to multipart text fields."""
        return form_fields(self)

    def to_files(self) -> list[MultipartFile]:
        """Read the image (and optional mask) into file parts."""
        files = [util.file_part("image", self.image_path)]
        if self.mask_path is not None:
            files.append(util.file_part("mask", self.mask_path))
        return files


# =============================================================================
# Moderations: POST /moderations
# =============================================================================


@dataclass
class ModerationRequest:
    """Request configuration for the Moderations API.

    ``input`` is a string or a list of strings / multimodal input items.
    """

    model: str
    input: WireValue
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for API request."""
        return wire_body(self)


# =============================================================================
# Audio: POST /audio/speech, POST /audio/transcriptions
# =============================================================================


@dataclass
class AudioSpeechRequest:
    """Request configuration for text-to-speech."""

    model: str
    input: str
    voice: str
    instructions: str | None = None
    response_format: str | None = None
    speed: float | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for API request."""
        return wire_body(self)


@dataclass
class AudioTranscriptionRequest:
    """Request configuration for speech-to-text (multipart upload)."""

    model: str
    file_path: str | Path = field(metadata=LOCAL)
    language: str | None = None
    prompt: str | None = None
    response_format: str | None = None
    temperature: float | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict of wire fields (before form flattening)."""
        return wire_body(self)

    def to_form_fields(self) -> list[MultipartField]:
        """Convert to multipart text fields."""
        return form_fields(self)

    def to_files(self) -> list[MultipartFile]:
        """Read the audio file into the ``file`` part."""
        return [util.file_part("file", self.file_path)]


# =============================================================================
# Videos: POST /videos
# =============================================================================


@dataclass
class VideoCreateRequest:
    """Request configuration for video generation."""

    model: str
    prompt: str
    aspect_ratio: str | None = None
    format: str | None = None
    duration: int | None = None
    seed: int | None = None
    user: str | None = None
    metadata: dict[str, Any] | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for API request."""
        return wire_body(self)
