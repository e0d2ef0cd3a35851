"""Content type detection for bundled binary files."""

from __future__ import annotations

import filetype

from ..errors import UndetectableContentTypeError

OCTET_STREAM = "application/octet-stream"

# Types the publishing API accepts for binary bundle entries.
VALID_CONTENT_TYPES: tuple[str, ...] = (
    OCTET_STREAM,
    "image/jpeg",
    "image/png",
    "image/gif",
)


def sniff_content_type(data: bytes) -> str | None:
    """Return the MIME type implied by the magic bytes of ``data``, if any."""
    if not data:
        return None
    kind = filetype.guess(data)
    if kind is None:
        return None
    return kind.mime


def resolve_content_type(data: bytes, *, field: str = "<unnamed>") -> str:
    """Sniff ``data`` and fall back to octet-stream for types outside the allow-list.

    The file name and any declared type are ignored; only the bytes count.
    Raises :class:`UndetectableContentTypeError` naming ``field`` when the
    content is empty or carries no recognised signature.
    """
    detected = sniff_content_type(data)
    if detected is None:
        raise UndetectableContentTypeError(field)
    if detected not in VALID_CONTENT_TYPES:
        return OCTET_STREAM
    return detected


__all__ = ["OCTET_STREAM", "VALID_CONTENT_TYPES", "resolve_content_type", "sniff_content_type"]
