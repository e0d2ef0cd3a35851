"""Multipart encoding for article bundles."""

from __future__ import annotations

from .bundle import ARTICLE_PART, METADATA_PART, RESERVED_NAMES, UploadBundle
from .content_type import OCTET_STREAM, VALID_CONTENT_TYPES, resolve_content_type
from .multipart import EncodedBody, EncodedPart, Part, encode, generate_boundary

__all__ = [
    "ARTICLE_PART",
    "EncodedBody",
    "EncodedPart",
    "METADATA_PART",
    "OCTET_STREAM",
    "Part",
    "RESERVED_NAMES",
    "UploadBundle",
    "VALID_CONTENT_TYPES",
    "encode",
    "generate_boundary",
    "resolve_content_type",
]
