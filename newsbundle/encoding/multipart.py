"""Byte-exact multipart/form-data encoding for article uploads."""

from __future__ import annotations

import secrets
import urllib.parse
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Mapping

from ..errors import FileAccessError, ValidationError
from ..utils.logging import get_logger
from .content_type import resolve_content_type

LOGGER = get_logger(__name__)

CRLF = "\r\n"
JSON_CONTENT_TYPE = "application/json"

# Characters left untouched by JavaScript's encodeURIComponent.
_FILENAME_SAFE = "-_.!~*'()"


@dataclass(frozen=True, slots=True)
class Part:
    """One entry of a multipart body.

    JSON parts carry their text inline; binary parts reference a local file
    that is only read when the body is encoded.
    """

    name: str | None
    filename: str | None = None
    text: str | None = None
    path: Path | None = None

    def __post_init__(self) -> None:
        if (self.text is None) == (self.path is None):
            raise ValidationError(
                "A part needs exactly one of JSON text or a file path",
                details={"name": self.name, "filename": self.filename},
            )
        if not self.name and not self.filename:
            raise ValidationError("A part needs a field name or a filename")

    @classmethod
    def from_json(cls, name: str, text: str, *, filename: str | None = None) -> "Part":
        return cls(name=name, filename=filename, text=text)

    @classmethod
    def from_file(cls, name: str, path: Path | str, *, filename: str | None = None) -> "Part":
        return cls(name=name, filename=filename, path=Path(path))

    @property
    def is_json(self) -> bool:
        return self.text is not None

    @property
    def field_name(self) -> str:
        return self.name or self.filename or ""


@dataclass(frozen=True, slots=True)
class EncodedPart:
    """What was written for one part: its names, resolved type and byte size."""

    name: str | None
    filename: str | None
    content_type: str
    size: int


@dataclass(frozen=True, slots=True)
class EncodedBody:
    """A fully materialised multipart body and the headers describing it."""

    buffer: bytes = field(repr=False)
    boundary: str
    parts: tuple[EncodedPart, ...] = ()

    @property
    def content_type(self) -> str:
        return f"multipart/form-data; boundary={self.boundary}"

    @property
    def content_length(self) -> int:
        return len(self.buffer)

    @property
    def headers(self) -> Mapping[str, str]:
        return {"content-type": self.content_type}


def generate_boundary() -> str:
    """Return a fresh boundary token: 26 dashes followed by 24 hex digits."""
    return "-" * 26 + secrets.token_hex(12)


def encode_filename(filename: str) -> str:
    return urllib.parse.quote(filename, safe=_FILENAME_SAFE)


def part_header(boundary: str, part: Part, content_type: str, size: int) -> bytes:
    """Build the delimiter and header block that precede a part's bytes."""
    disposition = "Content-Disposition: form-data"
    if part.filename:
        disposition += f'; filename="{encode_filename(part.filename)}"'
    if part.name:
        disposition += f'; name="{part.name}"'
    disposition += f"; size={size}"
    header = (
        f"--{boundary}{CRLF}"
        f"Content-Type: {content_type}{CRLF}"
        f"{disposition}{CRLF}"
        f"{CRLF}"
    )
    return header.encode("utf-8")


def encode(parts: Iterable[Part], *, boundary: str | None = None) -> EncodedBody:
    """Encode ``parts`` in order into a single multipart body.

    Every file is read and sniffed before the buffer is assembled; any
    failure raises and no partial body is returned.
    """
    token = boundary or generate_boundary()
    chunks: list[bytes] = []
    written: list[EncodedPart] = []
    for part in parts:
        data, content_type = _load_part(part)
        chunks.append(part_header(token, part, content_type, len(data)))
        chunks.append(data)
        chunks.append(CRLF.encode("ascii"))
        written.append(
            EncodedPart(
                name=part.name,
                filename=part.filename,
                content_type=content_type,
                size=len(data),
            )
        )
    chunks.append(f"--{token}--{CRLF}".encode("ascii"))

    body = EncodedBody(buffer=b"".join(chunks), boundary=token, parts=tuple(written))
    LOGGER.debug(
        "Encoded multipart body",
        extra={"event": "multipart.encoded", "parts": len(written), "bytes": body.content_length},
    )
    return body


def _load_part(part: Part) -> tuple[bytes, str]:
    if part.text is not None:
        return part.text.encode("utf-8"), JSON_CONTENT_TYPE
    if part.path is None:
        raise ValidationError("A part needs exactly one of JSON text or a file path")

    try:
        data = part.path.read_bytes()
    except OSError as exc:
        raise FileAccessError(part.path, reason=exc.strerror or str(exc)) from exc

    content_type = resolve_content_type(data, field=part.field_name)
    return data, content_type


__all__ = [
    "CRLF",
    "EncodedBody",
    "EncodedPart",
    "JSON_CONTENT_TYPE",
    "Part",
    "encode",
    "encode_filename",
    "generate_boundary",
    "part_header",
]
