"""Request signing and transport."""

from .http_client import HttpResponse, HttpTransport, parse_envelope
from .signing import (
    RequestSigner,
    SignedRequest,
    authorization_header,
    canonical_request,
    decode_secret,
    sign,
)

__all__ = [
    "HttpResponse",
    "HttpTransport",
    "RequestSigner",
    "SignedRequest",
    "authorization_header",
    "canonical_request",
    "decode_secret",
    "parse_envelope",
    "sign",
]
