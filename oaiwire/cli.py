"""
oaiwire CLI - Command-line interface over the SDK layer.

This layer provides the user-facing commands, using the SDK layer for all
operations. It handles:
- Argument parsing
- TTY detection for human vs machine output
- Saving binary results (images, audio, video) to files
- --dry-run introspection of the assembled HTTP request
"""

import argparse
import json
import logging
import os
import sys
from typing import Any

from dotenv import load_dotenv

from oaiwire.core.client import parse_json
from oaiwire.core.errors import MalformedResponseError, OaiwireError, ValidationError
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
from oaiwire.core.types import HttpRequest, HttpResponse
from oaiwire.core.util import save_base64_to_file, write_file_bytes
from oaiwire.sdk import OpenAIClient

# =============================================================================
# Output Helpers
# =============================================================================


BODY_PREVIEW = 2000  # Max characters of a non-JSON body shown by --dry-run
DRY_RUN_API_KEY = "sk-dry-run"  # Used by --dry-run when OPENAI_API_KEY is unset


def is_tty() -> bool:
    """Check if stdout is a TTY (human) or pipe (LLM/machine)."""
    return sys.stdout.isatty()


def json_output(data: Any, pretty: bool = False) -> None:
    """Print JSON output."""
    indent = 2 if pretty or is_tty() else None
    print(json.dumps(data, indent=indent, default=str))


def error_output(error: OaiwireError) -> None:
    """Print error and exit."""
    json_output(error.to_dict())
    sys.exit(1)


def success_output(data: Any) -> None:
    """Print success output."""
    json_output(data)


def request_output(request: HttpRequest) -> None:
    """Print an assembled request with the credential redacted."""
    headers = {}
    for h in request.headers:
        headers[h.name] = "Bearer ***" if h.name == "Authorization" else h.value

    body: Any = None
    if request.body:
        content_type = request.header("Content-Type") or ""
        if content_type.startswith("application/json"):
            body = json.loads(request.body)
        else:
            body = request.body.decode("utf-8", errors="replace")[:BODY_PREVIEW]

    json_output(
        {
            "method": request.method,
            "url": request.url,
            "headers": headers,
            "body": body,
            "body_bytes": len(request.body),
        },
        pretty=True,
    )


def parse_extra(raw: str | None) -> dict[str, Any]:
    """Parse the --extra JSON object."""
    if not raw:
        return {}
    try:
        extra = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON for --extra: {e}") from e
    if not isinstance(extra, dict):
        raise ValidationError("--extra must be a JSON object")
    return extra


def first_b64_image(doc: Any) -> str:
    """Get data[0].b64_json from an Images API response."""
    data = doc.get("data") if isinstance(doc, dict) else None
    if isinstance(data, list) and data and isinstance(data[0], dict):
        b64 = data[0].get("b64_json")
        if isinstance(b64, str):
            return b64
    raise MalformedResponseError("Images API response contains no b64_json image")


def parse_object(response: HttpResponse) -> dict[str, Any]:
    """Parse a response body that must be a JSON object."""
    doc = parse_json(response)
    if not isinstance(doc, dict):
        raise MalformedResponseError("Expected a JSON object response", details={"status": response.status})
    return doc


def send_or_show(client: OpenAIClient, args: argparse.Namespace, request: HttpRequest) -> HttpResponse | None:
    """Send the request, or print it and return None under --dry-run."""
    if args.dry_run:
        request_output(request)
        return None
    return client.send(request)


# =============================================================================
# CLI Commands
# =============================================================================


def cmd_respond(client: OpenAIClient, args: argparse.Namespace) -> None:
    """Create a model response."""
    try:
        r = ResponsesRequest(
            model=args.model,
            input=args.prompt,
            instructions=args.instructions,
            temperature=args.temperature,
            max_output_tokens=args.max_output_tokens,
            extra=parse_extra(args.extra),
        )
        response = send_or_show(client, args, client.responses.create_request(r))
        if response is None:
            return

        doc = parse_json(response)
        if is_tty():
            print(first_text_output(doc))
        else:
            success_output(doc)
    except OaiwireError as e:
        error_output(e)


def cmd_image_generate(client: OpenAIClient, args: argparse.Namespace) -> None:
    """Generate an image from a prompt and save it."""
    try:
        r = ImagesGenerateRequest(
            model=args.model,
            prompt=args.prompt,
            size=args.size,
            quality=args.quality,
            extra=parse_extra(args.extra),
        )
        response = send_or_show(client, args, client.images.generate_request(r))
        if response is None:
            return

        doc = parse_object(response)
        save_base64_to_file(first_b64_image(doc), args.output)
        success_output({"output": args.output, "created": doc.get("created")})
    except OaiwireError as e:
        error_output(e)


def cmd_image_edit(client: OpenAIClient, args: argparse.Namespace) -> None:
    """Edit an image and save the result."""
    try:
        r = ImageEditRequest(
            model=args.model,
            image_path=args.image,
            mask_path=args.mask,
            prompt=args.prompt,
            size=args.size,
            extra=parse_extra(args.extra),
        )
        response = send_or_show(client, args, client.images.edit_request(r))
        if response is None:
            return

        doc = parse_object(response)
        save_base64_to_file(first_b64_image(doc), args.output)
        success_output({"output": args.output, "created": doc.get("created")})
    except OaiwireError as e:
        error_output(e)


def cmd_moderate(client: OpenAIClient, args: argparse.Namespace) -> None:
    """Classify text with the moderation model."""
    try:
        r = ModerationRequest(model=args.model, input=args.text)
        response = send_or_show(client, args, client.moderations.create_request(r))
        if response is None:
            return

        doc = parse_json(response)
        if is_tty() and isinstance(doc, dict):
            results = doc.get("results") or []
            if not isinstance(results, list) or not all(isinstance(result, dict) for result in results):
                raise MalformedResponseError("Moderations API response contains malformed results")
            for i, result in enumerate(results, 1):
                categories = result.get("categories")
                flagged = [name for name, hit in categories.items() if hit] if isinstance(categories, dict) else []
                print(f"{i}. flagged: {result.get('flagged', False)}")
                if flagged:
                    print(f"   categories: {', '.join(flagged)}")
        else:
            success_output(doc)
    except OaiwireError as e:
        error_output(e)


def cmd_speak(client: OpenAIClient, args: argparse.Namespace) -> None:
    """Synthesize speech and save the audio."""
    try:
        r = AudioSpeechRequest(
            model=args.model,
            input=args.text,
            voice=args.voice,
            instructions=args.instructions,
            response_format=args.format,
        )
        response = send_or_show(client, args, client.audio.speech.create_request(r))
        if response is None:
            return

        write_file_bytes(args.output, response.body)
        success_output({"output": args.output, "bytes": len(response.body)})
    except OaiwireError as e:
        error_output(e)


def cmd_transcribe(client: OpenAIClient, args: argparse.Namespace) -> None:
    """Transcribe an audio file."""
    try:
        r = AudioTranscriptionRequest(
            model=args.model,
            file_path=args.file,
            language=args.language,
            prompt=args.prompt,
            response_format=args.format,
        )
        response = send_or_show(client, args, client.audio.transcriptions.create_request(r))
        if response is None:
            return

        if args.format in ("json", "verbose_json"):
            success_output(parse_json(response))
        elif is_tty():
            print(response.text)
        else:
            success_output({"text": response.text})
    except OaiwireError as e:
        error_output(e)


def cmd_video_create(client: OpenAIClient, args: argparse.Namespace) -> None:
    """Start a video generation job."""
    try:
        r = VideoCreateRequest(
            model=args.model,
            prompt=args.prompt,
            duration=args.duration,
            aspect_ratio=args.aspect_ratio,
        )
        response = send_or_show(client, args, client.videos.create_request(r))
        if response is None:
            return

        doc = parse_object(response)
        success_output(
            {
                "id": doc.get("id"),
                "status": doc.get("status"),
                "message": "Video job started. Use 'oaiwire video get <id>' to check progress.",
            }
        )
    except OaiwireError as e:
        error_output(e)


def cmd_video_get(client: OpenAIClient, args: argparse.Namespace) -> None:
    """Get a video job."""
    try:
        response = send_or_show(client, args, client.videos.retrieve_request(args.video_id))
        if response is None:
            return

        doc = parse_object(response)
        if is_tty():
            print(f"ID: {doc.get('id')}")
            print(f"Status: {doc.get('status')}")
            if doc.get("progress") is not None:
                print(f"Progress: {doc.get('progress')}%")
        else:
            success_output(doc)
    except OaiwireError as e:
        error_output(e)


def cmd_video_download(client: OpenAIClient, args: argparse.Namespace) -> None:
    """Download the content of a completed video job."""
    try:
        request = client.videos.download_content_request(args.video_id, args.variant)
        response = send_or_show(client, args, request)
        if response is None:
            return

        write_file_bytes(args.output, response.body)
        success_output({"output": args.output, "bytes": len(response.body)})
    except OaiwireError as e:
        error_output(e)


# =============================================================================
# Main CLI
# =============================================================================


def create_parser() -> argparse.ArgumentParser:  # noqa: PLR0915
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="oaiwire",
        description="oaiwire - Command-line interface for the OpenAI REST API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Output Modes:
  TTY (human):  Plain text results
  Pipe (LLM):   Full JSON documents

Examples:
  oaiwire respond "Summarize the plot of Hamlet in two sentences"
  oaiwire --dry-run respond "Hello" --extra '{"store": false}'
  oaiwire image generate "A robot teaching Python" -o robot.png
  oaiwire speak "Hello there" -o hello.mp3
  oaiwire transcribe meeting.m4a | jq -r .text
""",
    )
    parser.add_argument("--dry-run", action="store_true", help="Print the HTTP request instead of sending it")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # ========== Responses ==========
    respond = subparsers.add_parser("respond", help="Create a model response")
    respond.add_argument("prompt", help="Input text")
    respond.add_argument("--model", "-m", default="gpt-4.1-mini", help="Model name")
    respond.add_argument("--instructions", "-i", help="System / developer instructions")
    respond.add_argument("--temperature", "-t", type=float, help="Sampling temperature")
    respond.add_argument("--max-output-tokens", type=int, help="Maximum output tokens")
    respond.add_argument("--extra", "-x", help="JSON object of extra request fields")
    respond.set_defaults(func=cmd_respond)

    # ========== Images ==========
    image = subparsers.add_parser("image", help="Generate and edit images")
    image.set_defaults(func=lambda _c, _a: image.print_help())
    image_sub = image.add_subparsers(dest="subcommand")

    i_generate = image_sub.add_parser("generate", help="Generate an image from a prompt")
    i_generate.add_argument("prompt", help="Image description")
    i_generate.add_argument("--output", "-o", required=True, help="Output image path")
    i_generate.add_argument("--model", "-m", default="gpt-image-1", help="Model name")
    i_generate.add_argument("--size", "-s", help="Image size, e.g. 1024x1024")
    i_generate.add_argument("--quality", "-q", help="Image quality")
    i_generate.add_argument("--extra", "-x", help="JSON object of extra request fields")
    i_generate.set_defaults(func=cmd_image_generate)

    i_edit = image_sub.add_parser("edit", help="Edit or restyle an image")
    i_edit.add_argument("image", help="Input image path")
    i_edit.add_argument("--output", "-o", required=True, help="Output image path")
    i_edit.add_argument("--prompt", "-p", help="How to edit the image")
    i_edit.add_argument("--mask", help="PNG mask; transparent areas are edited")
    i_edit.add_argument("--model", "-m", default="gpt-image-1", help="Model name")
    i_edit.add_argument("--size", "-s", help="Image size, e.g. 1024x1024")
    i_edit.add_argument("--extra", "-x", help="JSON object of extra form fields")
    i_edit.set_defaults(func=cmd_image_edit)

    # ========== Moderation ==========
    moderate = subparsers.add_parser("moderate", help="Classify text for policy violations")
    moderate.add_argument("text", help="Text to classify")
    moderate.add_argument("--model", "-m", default="omni-moderation-latest", help="Model name")
    moderate.set_defaults(func=cmd_moderate)

    # ========== Audio ==========
    speak = subparsers.add_parser("speak", help="Synthesize speech from text")
    speak.add_argument("text", help="Text to speak")
    speak.add_argument("--output", "-o", required=True, help="Output audio path")
    speak.add_argument("--model", "-m", default="gpt-4o-mini-tts", help="Model name")
    speak.add_argument("--voice", default="alloy", help="Voice name")
    speak.add_argument("--format", "-f", help="Audio format (mp3, wav, opus, ...)")
    speak.add_argument("--instructions", "-i", help="Speaking style instructions")
    speak.set_defaults(func=cmd_speak)

    transcribe = subparsers.add_parser("transcribe", help="Transcribe an audio file")
    transcribe.add_argument("file", help="Audio file path")
    transcribe.add_argument("--model", "-m", default="gpt-4o-transcribe", help="Model name")
    transcribe.add_argument("--language", "-l", help="Language hint (ISO-639-1)")
    transcribe.add_argument("--prompt", "-p", help="Prompt to guide the transcription")
    transcribe.add_argument(
        "--format",
        "-f",
        default="text",
        choices=["json", "text", "srt", "verbose_json", "vtt"],
        help="Response format",
    )
    transcribe.set_defaults(func=cmd_transcribe)

    # ========== Videos ==========
    video = subparsers.add_parser("video", help="Generate and download videos")
    video.set_defaults(func=lambda _c, _a: video.print_help())
    video_sub = video.add_subparsers(dest="subcommand")

    v_create = video_sub.add_parser("create", help="Start a video generation job")
    v_create.add_argument("prompt", help="Video description")
    v_create.add_argument("--model", "-m", default="sora-2", help="Model name")
    v_create.add_argument("--duration", "-d", type=int, help="Duration in seconds")
    v_create.add_argument("--aspect-ratio", "-a", help="Aspect ratio, e.g. 16:9")
    v_create.set_defaults(func=cmd_video_create)

    v_get = video_sub.add_parser("get", help="Get video job status")
    v_get.add_argument("video_id", help="Video ID")
    v_get.set_defaults(func=cmd_video_get)

    v_download = video_sub.add_parser("download", help="Download video content")
    v_download.add_argument("video_id", help="Video ID")
    v_download.add_argument("--output", "-o", required=True, help="Output file path")
    v_download.add_argument("--variant", help="Asset variant, e.g. thumbnail")
    v_download.set_defaults(func=cmd_video_download)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    load_dotenv()
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    # Placeholder credential for --dry-run without OPENAI_API_KEY
    api_key = None
    if args.dry_run and not os.environ.get("OPENAI_API_KEY", "").strip():
        api_key = DRY_RUN_API_KEY

    try:
        client = OpenAIClient(api_key=api_key)
    except OaiwireError as e:
        error_output(e)

    # Run command (all subparsers have default funcs that print help)
    args.func(client, args)


if __name__ == "__main__":
    main()
