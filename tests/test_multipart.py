"""Tests for the multipart body builder."""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from newsbundle.encoding.multipart import (
    EncodedBody,
    Part,
    encode,
    encode_filename,
    generate_boundary,
)
from newsbundle.errors import FileAccessError, UndetectableContentTypeError, ValidationError

from .conftest import PDF_BYTES, PNG_BYTES


def test_encode_produces_exact_wire_format(png_file: Path) -> None:
    parts = [
        Part.from_json("article.json", '{"title":"Hi"}', filename="article.json"),
        Part.from_json("metadata", '{"data":{}}'),
        Part.from_file("file0", png_file, filename="photo.jpg"),
    ]

    body = encode(parts, boundary="BOUNDARY")

    expected = (
        b"--BOUNDARY\r\n"
        b"Content-Type: application/json\r\n"
        b'Content-Disposition: form-data; filename="article.json"; name="article.json"; size=14\r\n'
        b"\r\n"
        b'{"title":"Hi"}\r\n'
        b"--BOUNDARY\r\n"
        b"Content-Type: application/json\r\n"
        b'Content-Disposition: form-data; name="metadata"; size=11\r\n'
        b"\r\n"
        b'{"data":{}}\r\n'
        b"--BOUNDARY\r\n"
        b"Content-Type: image/png\r\n"
        b'Content-Disposition: form-data; filename="photo.jpg"; name="file0"; size='
        + str(len(PNG_BYTES)).encode()
        + b"\r\n\r\n"
        + PNG_BYTES
        + b"\r\n--BOUNDARY--\r\n"
    )
    assert body.buffer == expected
    assert body.content_type == "multipart/form-data; boundary=BOUNDARY"
    assert body.headers == {"content-type": "multipart/form-data; boundary=BOUNDARY"}
    assert body.content_length == len(expected)


def test_size_attribute_matches_payload_byte_length(tmp_path: Path) -> None:
    text = '{"title":"Café ✓"}'
    pdf = tmp_path / "doc.bin"
    pdf.write_bytes(PDF_BYTES)

    body = encode([Part.from_json("article.json", text), Part.from_file("file0", pdf)])

    sizes = [int(value) for value in re.findall(rb"; size=(\d+)\r\n", body.buffer)]
    assert sizes == [len(text.encode("utf-8")), len(PDF_BYTES)]
    assert [part.size for part in body.parts] == sizes


def test_two_encodings_differ_only_in_boundary(png_file: Path) -> None:
    parts = [
        Part.from_json("article.json", "{}", filename="article.json"),
        Part.from_file("file0", png_file, filename="photo.jpg"),
    ]

    first = encode(parts)
    second = encode(parts)

    assert first.boundary != second.boundary
    assert first.buffer != second.buffer
    normalised_first = first.buffer.replace(first.boundary.encode(), b"<B>")
    normalised_second = second.buffer.replace(second.boundary.encode(), b"<B>")
    assert normalised_first == normalised_second


def test_boundary_shape() -> None:
    token = generate_boundary()
    assert re.fullmatch(r"-{26}[0-9a-f]{24}", token)


def test_every_delimiter_uses_the_same_boundary(png_file: Path) -> None:
    body = encode(
        [
            Part.from_json("article.json", "{}"),
            Part.from_json("metadata", "{}"),
            Part.from_file("file0", png_file),
        ]
    )
    delimiters = re.findall(rb"^--(\S+?)(?:--)?\r$", body.buffer, flags=re.MULTILINE)
    assert delimiters
    assert set(delimiters) == {body.boundary.encode()}
    assert body.buffer.endswith(f"--{body.boundary}--\r\n".encode())


def test_content_type_follows_bytes_not_extension(png_file: Path) -> None:
    assert png_file.suffix == ".jpg"
    body = encode([Part.from_file("file0", png_file, filename=png_file.name)])
    assert body.parts[0].content_type == "image/png"
    assert b"Content-Type: image/png\r\n" in body.buffer


def test_unsupported_type_is_relabelled_octet_stream(pdf_file: Path) -> None:
    body = encode([Part.from_file("file0", pdf_file, filename=pdf_file.name)])
    assert body.parts[0].content_type == "application/octet-stream"


def test_missing_file_aborts_whole_encode(tmp_path: Path) -> None:
    missing = tmp_path / "nope.png"
    with pytest.raises(FileAccessError) as excinfo:
        encode([Part.from_json("article.json", "{}"), Part.from_file("file0", missing)])
    assert excinfo.value.path == missing
    assert str(missing) in str(excinfo.value)


def test_undetectable_file_reports_field_name(tmp_path: Path) -> None:
    notes = tmp_path / "notes.txt"
    notes.write_text("plain words", encoding="utf-8")
    with pytest.raises(UndetectableContentTypeError) as excinfo:
        encode([Part.from_file("file4", notes, filename="notes.txt")])
    assert excinfo.value.field == "file4"


def test_filenames_are_percent_encoded(png_file: Path) -> None:
    body = encode([Part.from_file("file0", png_file, filename="my photo (1).png")])
    assert b'filename="my%20photo%20(1).png"' in body.buffer
    assert encode_filename("a/b é.png") == "a%2Fb%20%C3%A9.png"


def test_part_requires_exactly_one_payload(tmp_path: Path) -> None:
    with pytest.raises(ValidationError):
        Part(name="file0")
    with pytest.raises(ValidationError):
        Part(name="file0", text="{}", path=tmp_path / "x")


def test_encode_rejects_part_without_payload(png_file: Path) -> None:
    part = Part.from_file("file0", png_file, filename="photo.jpg")
    object.__setattr__(part, "path", None)
    with pytest.raises(ValidationError):
        encode([part])


def test_encoded_body_is_immutable() -> None:
    body = encode([Part.from_json("metadata", "{}")])
    assert isinstance(body, EncodedBody)
    assert isinstance(body.buffer, bytes)
    with pytest.raises(AttributeError):
        body.buffer = b""  # type: ignore[misc]
