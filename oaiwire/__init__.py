"""
oaiwire - Three-layer client for the OpenAI REST API.

Layers:
- core: Wire types, request models, multipart encoding, transport
- sdk: High-level OpenAIClient with one view per operation group
- cli: Command-line interface
"""

import logging

from oaiwire.core.navigation import first_image_output, first_text_output, first_tool_call_output
from oaiwire.core.requests import (
    AudioSpeechRequest,
    AudioTranscriptionRequest,
    ImageEditRequest,
    ImagesGenerateRequest,
    ModerationRequest,
    ResponsesRequest,
    VideoCreateRequest,
)
from oaiwire.sdk import OpenAIClient

logging.getLogger("oaiwire").addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "AudioSpeechRequest",
    "AudioTranscriptionRequest",
    "ImageEditRequest",
    "ImagesGenerateRequest",
    "ModerationRequest",
    "OpenAIClient",
    "ResponsesRequest",
    "VideoCreateRequest",
    "first_image_output",
    "first_text_output",
    "first_tool_call_output",
]
