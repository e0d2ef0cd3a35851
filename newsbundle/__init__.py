"""Signed multipart client for a news publishing API."""

from __future__ import annotations

from .core import HttpTransport, RequestSigner, SignedRequest, sign
from .encoding import EncodedBody, Part, UploadBundle, encode, resolve_content_type
from .errors import (
    ConfigurationError,
    FileAccessError,
    NewsApiError,
    RemoteApiError,
    SigningError,
    UndetectableContentTypeError,
    ValidationError,
)
from .models import ArticleOptions, SearchOptions
from .platforms import NewsApiClient
from .security import ApiCredentials
from .utils.dates import format_date

__version__ = "0.1.0"

__all__ = [
    "ApiCredentials",
    "ArticleOptions",
    "ConfigurationError",
    "EncodedBody",
    "FileAccessError",
    "HttpTransport",
    "NewsApiClient",
    "NewsApiError",
    "Part",
    "RemoteApiError",
    "RequestSigner",
    "SearchOptions",
    "SignedRequest",
    "SigningError",
    "UndetectableContentTypeError",
    "UploadBundle",
    "ValidationError",
    "encode",
    "format_date",
    "resolve_content_type",
    "sign",
]
