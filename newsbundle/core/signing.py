"""HHMAC request signing.

Every request carries an ``Authorization`` header of the form::

    HHMAC; key="<api id>"; signature="<digest>"; date="<timestamp>"

where ``digest`` is the base64 HMAC-SHA256 of the canonical request: the
ASCII bytes of method, ``https://``, host, path, timestamp and (only when a
body is sent) the body content type, followed by the raw body bytes. The
server recomputes the same digest, so scheme name, field order and quoting
must not change.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Mapping

from ..encoding.multipart import EncodedBody
from ..errors import ConfigurationError, SigningError, ValidationError
from ..settings.loader import DEFAULT_HOST
from ..utils.dates import format_date, utc_now
from ..utils.logging import get_logger

LOGGER = get_logger(__name__)

AUTH_SCHEME = "HHMAC"


@dataclass(frozen=True, slots=True)
class SignedRequest:
    """Everything the transport needs to send one authenticated request."""

    method: str
    host: str
    path: str
    timestamp: str
    headers: Mapping[str, str]
    body: bytes | None = field(default=None, repr=False)

    @property
    def url(self) -> str:
        return f"https://{self.host}{self.path}"


def decode_secret(secret: str) -> bytes:
    """Decode the base64 API secret into the HMAC key."""
    if not isinstance(secret, str) or not secret.strip():
        raise ConfigurationError("API secret is required.")
    try:
        key = base64.b64decode(secret.strip(), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise SigningError("API secret is not valid base64") from exc
    if not key:
        raise SigningError("API secret decodes to an empty key")
    return key


def canonical_request(
    method: str,
    host: str,
    path: str,
    timestamp: str,
    content_type: str | None = None,
    body: bytes | None = None,
) -> bytes:
    """Return the exact byte sequence that gets signed."""
    text = method + "https://" + host + path + timestamp
    if body is not None:
        text += content_type or ""
    try:
        message = text.encode("ascii")
    except UnicodeEncodeError as exc:
        raise ValidationError(
            "Request line must be ASCII to be signed",
            details={"method": method, "host": host, "path": path},
        ) from exc
    if body is not None:
        message += body
    return message


def compute_signature(key: bytes, message: bytes) -> str:
    digest = hmac.new(key, message, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def sign(
    method: str,
    host: str,
    path: str,
    timestamp: str,
    content_type: str | None,
    body: bytes | None,
    secret: str,
) -> str:
    """Sign one request with a base64-encoded secret and return the base64 digest."""
    key = decode_secret(secret)
    message = canonical_request(method, host, path, timestamp, content_type, body)
    return compute_signature(key, message)


def authorization_header(api_id: str, signature: str, timestamp: str) -> str:
    return f'{AUTH_SCHEME}; key="{api_id}"; signature="{signature}"; date="{timestamp}"'


class RequestSigner:
    """Holds the API credentials and signs outbound requests.

    The secret is decoded once at construction, so a malformed secret fails
    immediately instead of on the first request.
    """

    def __init__(
        self,
        api_id: str,
        api_secret: str,
        *,
        host: str = DEFAULT_HOST,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if not isinstance(api_id, str) or not api_id.strip():
            raise ConfigurationError("API ID is required.")
        if not isinstance(host, str) or not host:
            raise ConfigurationError("API host is required.")
        self._api_id = api_id
        self._key = decode_secret(api_secret)
        self._host = host
        self._clock = clock or utc_now

    @property
    def api_id(self) -> str:
        return self._api_id

    @property
    def host(self) -> str:
        return self._host

    def sign_request(
        self,
        method: str,
        path: str,
        body: EncodedBody | None = None,
        *,
        now: datetime | None = None,
    ) -> SignedRequest:
        """Sign ``method path`` (and ``body``) at a single captured instant."""
        method = method.upper()
        timestamp = format_date(now or self._clock())
        content_type = body.content_type if body is not None else None
        payload = body.buffer if body is not None else None

        message = canonical_request(method, self._host, path, timestamp, content_type, payload)
        signature = compute_signature(self._key, message)

        headers = {
            "Accept": "application/json",
            "Authorization": authorization_header(self._api_id, signature, timestamp),
        }
        if body is not None:
            headers["Content-Type"] = body.content_type

        LOGGER.debug(
            "Signed request",
            extra={
                "event": "request.signed",
                "method": method,
                "path": path,
                "date": timestamp,
                "body_bytes": len(payload) if payload is not None else 0,
            },
        )
        return SignedRequest(
            method=method,
            host=self._host,
            path=path,
            timestamp=timestamp,
            headers=headers,
            body=payload,
        )


__all__ = [
    "AUTH_SCHEME",
    "DEFAULT_HOST",
    "RequestSigner",
    "SignedRequest",
    "authorization_header",
    "canonical_request",
    "compute_signature",
    "decode_secret",
    "sign",
]
