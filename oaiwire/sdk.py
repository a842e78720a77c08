"""
oaiwire SDK - High-level client with one view per API operation group.

This layer provides a typed interface over the core APIClient. Every
operation comes in two forms: ``*_request`` builds the HttpRequest without
sending it (handy for inspection), and the plain method sends it and returns
the parsed result.
"""

import logging
import urllib.parse

from oaiwire.core.client import APIClient
from oaiwire.core.navigation import first_text_output
from oaiwire.core.requests import (
    AudioSpeechRequest,
    AudioTranscriptionRequest,
    ImageEditRequest,
    ImagesGenerateRequest,
    ModerationRequest,
    ResponsesRequest,
    VideoCreateRequest,
)
from oaiwire.core.types import DEFAULT_TIMEOUT, ClientConfig, HttpRequest, HttpResponse, WireValue

log = logging.getLogger(__name__)


class OpenAIClient:
    """
    High-level OpenAI API client.

    Example:
        client = OpenAIClient()

        r = ResponsesRequest(model="gpt-4.1-mini", input="Summarize this text: ...")
        print(client.responses.create_text(r))

        audio = client.audio.speech.create(
            AudioSpeechRequest(model="gpt-4o-mini-tts", input="Hello", voice="alloy")
        )

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
        Initialize the client.

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
        self._client = APIClient(
            api_key=api_key,
            base_url=base_url,
            organization=organization,
            project=project,
            timeout=timeout,
            config=config,
        )

        # Views share self._client, and through it the same ClientConfig
        self.responses = ResponseOperations(self._client)
        self.images = ImageOperations(self._client)
        self.moderations = ModerationOperations(self._client)
        self.audio = AudioOperations(self._client)
        self.videos = VideoOperations(self._client)

    @property
    def config(self) -> ClientConfig:
        """Get the live configuration (changes apply to later calls)."""
        return self._client.config

    def execute(self, request: HttpRequest) -> HttpResponse:
        """Send an assembled request without checking its status."""
        return self._client.execute(request)

    def send(self, request: HttpRequest) -> HttpResponse:
        """Send an assembled request, raising HTTPStatusError on non-2xx."""
        return self._client.send(request)


# =============================================================================
# Responses
# =============================================================================


class ResponseOperations:
    """Operations for /responses."""

    def __init__(self, client: APIClient):
        self._client = client

    def create_request(self, r: ResponsesRequest) -> HttpRequest:
        """Build the POST /responses request."""
        return self._client.json_request("/responses", r.to_dict())

    def create(self, r: ResponsesRequest) -> WireValue:
        """
        Create a model response.

        Args:
            r: Request configuration

        Returns:
            The parsed response document

        """
        return self._client.send_json(self.create_request(r), "Responses API")

    def create_text(self, r: ResponsesRequest) -> str:
        """Create a model response and return its first text output."""
        return first_text_output(self.create(r))


# =============================================================================
# Images
# =============================================================================


class ImageOperations:
    """Operations for /images."""

    def __init__(self, client: APIClient):
        self._client = client

    def generate_request(self, r: ImagesGenerateRequest) -> HttpRequest:
        """Build the POST /images/generations request."""
        return self._client.json_request("/images/generations", r.to_dict())

    def generate(self, r: ImagesGenerateRequest) -> WireValue:
        """Generate images from a text prompt."""
        return self._client.send_json(self.generate_request(r), "Images API")

    def edit_request(self, r: ImageEditRequest, boundary: str | None = None) -> HttpRequest:
        """
        Build the multipart POST /images/edits request.

        Reads the image and mask files from disk.

        Raises:
            FileAccessError: If an input file cannot be read

        """
        return self._client.multipart_request("/images/edits", r.to_form_fields(), r.to_files(), boundary)

    def edit(self, r: ImageEditRequest) -> WireValue:
        """Edit or restyle an existing image."""
        return self._client.send_json(self.edit_request(r), "Images API")


# =============================================================================
# Moderations
# =============================================================================


class ModerationOperations:
    """Operations for /moderations."""

    def __init__(self, client: APIClient):
        self._client = client

    def create_request(self, r: ModerationRequest) -> HttpRequest:
        """Build the POST /moderations request."""
        return self._client.json_request("/moderations", r.to_dict())

    def create(self, r: ModerationRequest) -> WireValue:
        """Classify input for policy violations."""
        return self._client.send_json(self.create_request(r), "Moderations API")


# =============================================================================
# Audio
# =============================================================================


class SpeechOperations:
    """Operations for /audio/speech (text-to-speech)."""

    def __init__(self, client: APIClient):
        self._client = client

    def create_request(self, r: AudioSpeechRequest) -> HttpRequest:
        """Build the POST /audio/speech request."""
        return self._client.json_request("/audio/speech", r.to_dict())

    def create(self, r: AudioSpeechRequest) -> bytes:
        """Synthesize speech and return the raw audio bytes."""
        return self._client.send(self.create_request(r), "Audio Speech API").body


class TranscriptionOperations:
    """Operations for /audio/transcriptions (speech-to-text)."""

    def __init__(self, client: APIClient):
        self._client = client

    def create_request(self, r: AudioTranscriptionRequest, boundary: str | None = None) -> HttpRequest:
        """
        Build the multipart POST /audio/transcriptions request.

        Raises:
            FileAccessError: If the audio file cannot be read

        """
        return self._client.multipart_request("/audio/transcriptions", r.to_form_fields(), r.to_files(), boundary)

    def create(self, r: AudioTranscriptionRequest) -> str:
        """
        Transcribe audio and return the body as text.

        The body format follows ``response_format`` (json, text, srt, vtt...).
        """
        return self._client.send(self.create_request(r), "Audio Transcriptions API").text

    def create_json(self, r: AudioTranscriptionRequest) -> WireValue:
        """Transcribe audio and parse the JSON body."""
        return self._client.send_json(self.create_request(r), "Audio Transcriptions API")


class AudioOperations:
    """Groups the audio views: ``audio.speech`` and ``audio.transcriptions``."""

    def __init__(self, client: APIClient):
        self._client = client
        self.speech = SpeechOperations(client)
        self.transcriptions = TranscriptionOperations(client)


# =============================================================================
# Videos
# =============================================================================


class VideoOperations:
    """Operations for /videos."""

    def __init__(self, client: APIClient):
        self._client = client

    def create_request(self, r: VideoCreateRequest) -> HttpRequest:
        """Build the POST /videos request."""
        return self._client.json_request("/videos", r.to_dict())

    def create(self, r: VideoCreateRequest) -> WireValue:
        """Start a video generation job."""
        return self._client.send_json(self.create_request(r), "Videos API")

    def retrieve_request(self, video_id: str) -> HttpRequest:
        """Build the GET /videos/{video_id} request."""
        return self._client.get_request(f"/videos/{urllib.parse.quote(video_id, safe='')}")

    def retrieve(self, video_id: str) -> WireValue:
        """
        Get a video job by ID.

        Args:
            video_id: The video ID returned by create()

        Returns:
            The video job document (status, progress, ...)

        """
        return self._client.send_json(self.retrieve_request(video_id), "Videos API")

    def download_content_request(self, video_id: str, variant: str | None = None) -> HttpRequest:
        """Build the GET /videos/{video_id}/content request."""
        path = f"/videos/{urllib.parse.quote(video_id, safe='')}/content"
        if variant:
            path = f"{path}?{urllib.parse.urlencode({'variant': variant})}"
        return self._client.get_request(path)

    def download_content(self, video_id: str, variant: str | None = None) -> bytes:
        """
        Download the rendered content of a completed video job.

        Args:
            video_id: The video ID
            variant: Optional asset variant (e.g. "thumbnail")

        Returns:
            Raw content bytes

        """
        log.debug("Downloading video content for %s", video_id)
        return self._client.send(self.download_content_request(video_id, variant), "Videos API").body
