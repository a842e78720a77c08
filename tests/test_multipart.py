"""multipart/form-data framing."""

from oaiwire.core.multipart import (
    BOUNDARY_PREFIX,
    build_multipart_body,
    multipart_content_type,
    random_boundary,
)
from oaiwire.core.types import MultipartField, MultipartFile

PNG_BYTES = bytes([0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A])


def test_body_is_byte_exact():
    body = build_multipart_body(
        "B",
        [MultipartField("model", "gpt-image-1"), MultipartField("prompt", "a cat")],
        [MultipartFile("image", "in.png", "image/png", PNG_BYTES)],
    )

    expected = (
        b"--B\r\n"
        b'Content-Disposition: form-data; name="model"\r\n\r\n'
        b"gpt-image-1\r\n"
        b"--B\r\n"
        b'Content-Disposition: form-data; name="prompt"\r\n\r\n'
        b"a cat\r\n"
        b"--B\r\n"
        b'Content-Disposition: form-data; name="image"; filename="in.png"\r\n'
        b"Content-Type: image/png\r\n\r\n" + PNG_BYTES + b"\r\n"
        b"--B--\r\n"
    )
    assert body == expected


def test_fields_only():
    body = build_multipart_body("xyz", [MultipartField("a", "1")])
    assert body == b'--xyz\r\nContent-Disposition: form-data; name="a"\r\n\r\n1\r\n--xyz--\r\n'


def test_no_parts_still_terminates():
    assert build_multipart_body("B", []) == b"--B--\r\n"


def test_file_bytes_are_copied_untouched():
    # Every byte value, including NUL, CR and LF
    data = bytes(range(256)) * 4
    body = build_multipart_body("B", [], [MultipartFile("file", "blob.bin", "application/octet-stream", data)])

    header_end = body.index(b"\r\n\r\n") + 4
    trailer = b"\r\n--B--\r\n"
    assert body.endswith(trailer)
    assert body[header_end : len(body) - len(trailer)] == data


def test_non_ascii_text_is_utf8():
    body = build_multipart_body("B", [MultipartField("prompt", "café ☕")])
    assert "café ☕".encode("utf-8") in body


def test_parts_keep_given_order():
    files = [
        MultipartFile("image", "a.png", "image/png", b"A"),
        MultipartFile("mask", "b.png", "image/png", b"B"),
    ]
    body = build_multipart_body("B", [MultipartField("z", "1"), MultipartField("a", "2")], files)
    positions = [body.index(marker) for marker in (b'name="z"', b'name="a"', b'name="image"', b'name="mask"')]
    assert positions == sorted(positions)


def test_random_boundary_shape():
    boundary = random_boundary()
    assert boundary.startswith(BOUNDARY_PREFIX)
    suffix = boundary[len(BOUNDARY_PREFIX) :]
    assert len(suffix) == 32
    assert all(c in "0123456789abcdef" for c in suffix)


def test_random_boundaries_differ():
    assert len({random_boundary() for _ in range(50)}) == 50


def test_content_type():
    assert multipart_content_type("B") == "multipart/form-data; boundary=B"
