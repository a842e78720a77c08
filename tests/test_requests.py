"""Request model serialization: optional-field absence, extra overlay, form flattening."""

import dataclasses
import json

import pytest

from oaiwire.core.errors import FileAccessError
from oaiwire.core.requests import (
    AudioSpeechRequest,
    AudioTranscriptionRequest,
    ImageEditRequest,
    ImagesGenerateRequest,
    ModerationRequest,
    ResponsesRequest,
    VideoCreateRequest,
    form_value,
)

PNG_BYTES = bytes([0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A, 0x00, 0xFF])


def minimal_models(tmp_path):
    """One instance of every request model with only required fields set."""
    image = tmp_path / "in.png"
    image.write_bytes(PNG_BYTES)
    audio = tmp_path / "clip.m4a"
    audio.write_bytes(b"\x00\x00\x00\x18ftypM4A ")
    return [
        ResponsesRequest(model="gpt-4.1-mini", input="hi"),
        ImagesGenerateRequest(model="gpt-image-1", prompt="a cat"),
        ImageEditRequest(model="gpt-image-1", image_path=image),
        ModerationRequest(model="omni-moderation-latest", input=["a", "b"]),
        AudioSpeechRequest(model="gpt-4o-mini-tts", input="hello", voice="alloy"),
        AudioTranscriptionRequest(model="gpt-4o-transcribe", file_path=audio),
        VideoCreateRequest(model="sora-2", prompt="waves"),
    ]


def wire_field_names(model) -> list[str]:
    return [f.name for f in dataclasses.fields(model) if f.name != "extra" and f.metadata.get("wire", True)]


class TestOptionalFields:
    def test_unset_optional_fields_are_absent(self, tmp_path):
        for model in minimal_models(tmp_path):
            body = model.to_dict()
            required = [
                f.name
                for f in dataclasses.fields(model)
                if f.default is dataclasses.MISSING
                and f.default_factory is dataclasses.MISSING
                and f.metadata.get("wire", True)
            ]
            assert sorted(body) == sorted(required), type(model).__name__

    def test_set_optional_fields_are_present(self):
        r = ResponsesRequest(
            model="gpt-4.1-mini",
            input="hi",
            temperature=0.0,
            max_output_tokens=0,
            store=False,
            instructions="",
        )
        body = r.to_dict()
        # Falsy values are still "set"
        assert body["temperature"] == 0.0
        assert body["max_output_tokens"] == 0
        assert body["store"] is False
        assert body["instructions"] == ""
        assert "top_p" not in body
        assert None not in body.values()

    def test_responses_has_no_implicit_sampling_defaults(self):
        body = ResponsesRequest(model="m", input="x").to_dict()
        assert body == {"model": "m", "input": "x"}

    def test_local_paths_are_not_wire_fields(self, tmp_path):
        image = tmp_path / "in.png"
        r = ImageEditRequest(model="gpt-image-1", image_path=image, mask_path=image, prompt="p")
        body = r.to_dict()
        assert "image_path" not in body
        assert "mask_path" not in body
        assert body == {"model": "gpt-image-1", "prompt": "p"}

    def test_compound_values_are_copied_verbatim(self):
        tools = [{"type": "image_generation", "size": "1024x1024"}]
        r = ResponsesRequest(model="m", input=[{"role": "user", "content": "x"}], tools=tools)
        body = r.to_dict()
        assert body["tools"] == tools
        assert body["tools"] is not tools

        # Later mutation of caller objects does not leak into a built body
        tools[0]["size"] = "auto"
        assert body["tools"][0]["size"] == "1024x1024"


class TestExtraOverlay:
    def test_extra_adds_unmodeled_fields(self):
        r = VideoCreateRequest(model="sora-2", prompt="waves", extra={"size": "1280x720", "seconds": "8"})
        body = r.to_dict()
        assert body["size"] == "1280x720"
        assert body["seconds"] == "8"

    def test_extra_wins_over_modeled_field(self, tmp_path):
        for model in minimal_models(tmp_path):
            for name in wire_field_names(model):
                model.extra = {name: {"overridden": name}}
                assert model.to_dict()[name] == {"overridden": name}, f"{type(model).__name__}.{name}"

    def test_extra_wins_over_set_optional_field(self):
        r = ImagesGenerateRequest(model="gpt-image-1", prompt="p", size="256x256", extra={"size": "1024x1024"})
        assert r.to_dict()["size"] == "1024x1024"

    def test_extra_can_send_explicit_null(self):
        r = ResponsesRequest(model="m", input="x", extra={"temperature": None})
        body = r.to_dict()
        assert "temperature" in body
        assert body["temperature"] is None

    def test_malformed_extra_passes_through(self):
        r = ModerationRequest(model="m", input="x", extra={"input": 42, "weird": [None, {"a": []}]})
        body = r.to_dict()
        assert body["input"] == 42
        assert body["weird"] == [None, {"a": []}]


class TestRoundTrip:
    def test_json_roundtrip_preserves_values(self):
        r = ResponsesRequest(
            model="gpt-4.1-mini",
            input=[{"role": "user", "content": [{"type": "input_text", "text": "héllo"}]}],
            instructions="Be brief.",
            metadata={"run": "42"},
            temperature=0.7,
            top_p=0.9,
            max_output_tokens=256,
            reasoning={"effort": "low"},
            tools=[{"type": "web_search_preview"}],
            tool_choice="auto",
            include=["reasoning.encrypted_content"],
            parallel_tool_calls=True,
            store=False,
            extra={"prompt_cache_key": "abc", "top_p": 0.5},
        )
        expected = r.to_dict()
        assert json.loads(json.dumps(expected)) == expected
        assert expected["top_p"] == 0.5


class TestFormFields:
    def test_form_value_flattening(self):
        assert form_value("text") == "text"
        assert form_value(0.2) == "0.2"
        assert form_value(2) == "2"
        assert form_value(True) == "true"
        assert form_value(None) == "null"
        assert form_value(["word", "segment"]) == '["word", "segment"]'

    def test_transcription_fields_in_model_order(self, tmp_path):
        audio = tmp_path / "clip.m4a"
        r = AudioTranscriptionRequest(
            model="whisper-1",
            file_path=audio,
            language="en",
            response_format="text",
            temperature=0.2,
        )
        fields = [(f.name, f.value) for f in r.to_form_fields()]
        assert fields == [
            ("model", "whisper-1"),
            ("language", "en"),
            ("response_format", "text"),
            ("temperature", "0.2"),
        ]

    def test_extra_override_keeps_position_and_new_keys_append(self, tmp_path):
        r = ImageEditRequest(
            model="gpt-image-1",
            image_path=tmp_path / "in.png",
            prompt="p",
            size="256x256",
            extra={"size": "1024x1024", "input_fidelity": "high"},
        )
        fields = [(f.name, f.value) for f in r.to_form_fields()]
        assert fields == [
            ("model", "gpt-image-1"),
            ("prompt", "p"),
            ("size", "1024x1024"),
            ("input_fidelity", "high"),
        ]
        assert [name for name, _ in fields].count("size") == 1


class TestFiles:
    def test_image_edit_files(self, tmp_path):
        image = tmp_path / "photo.JPG"
        image.write_bytes(b"\xff\xd8\xff\xe0")
        mask = tmp_path / "mask.png"
        mask.write_bytes(PNG_BYTES)

        files = ImageEditRequest(model="gpt-image-1", image_path=image, mask_path=mask).to_files()

        assert [(f.name, f.filename, f.content_type) for f in files] == [
            ("image", "photo.JPG", "image/jpeg"),
            ("mask", "mask.png", "image/png"),
        ]
        assert files[0].data == b"\xff\xd8\xff\xe0"
        assert files[1].data == PNG_BYTES

    def test_transcription_file_part(self, tmp_path):
        audio = tmp_path / "talk.mp3"
        audio.write_bytes(b"ID3\x00\r\n\x00")
        (part,) = AudioTranscriptionRequest(model="whisper-1", file_path=str(audio)).to_files()
        assert part.name == "file"
        assert part.filename == "talk.mp3"
        assert part.content_type == "audio/mpeg"
        assert part.data == b"ID3\x00\r\n\x00"

    def test_missing_file_raises_file_access_error(self, tmp_path):
        missing = tmp_path / "nope.wav"
        with pytest.raises(FileAccessError) as exc:
            AudioTranscriptionRequest(model="whisper-1", file_path=missing).to_files()
        assert exc.value.path == str(missing)
        assert "nope.wav" in exc.value.message
