"""Transport for signed API requests."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from typing import Any, Mapping

import requests

from ..errors import RemoteApiError
from ..settings import ApiSettings
from ..utils.logging import get_logger
from .signing import SignedRequest

_LOGGER = get_logger(__name__)


@dataclass(slots=True)
class HttpResponse:
    url: str
    status: int
    headers: Mapping[str, str]
    body: bytes
    text: str
    elapsed: float


class HttpTransport:
    """Sends one signed request per call and unwraps the JSON envelope.

    No session, pooling or retries: each call opens its own connection
    through :func:`requests.request`.
    """

    def __init__(self, settings: ApiSettings | None = None) -> None:
        self._settings = settings or ApiSettings()

    @property
    def settings(self) -> ApiSettings:
        return self._settings

    def url_for(self, request: SignedRequest) -> str:
        if self._settings.port is None:
            return f"https://{request.host}{request.path}"
        return f"https://{request.host}:{self._settings.port}{request.path}"

    def fetch(self, request: SignedRequest) -> HttpResponse:
        """Send ``request`` and return the raw response."""
        url = self.url_for(request)
        _LOGGER.info(
            "Sending request",
            extra={
                "event": "http.request",
                "method": request.method,
                "path": request.path,
                "body_bytes": len(request.body) if request.body is not None else 0,
            },
        )
        start_time = time.monotonic()
        try:
            resp = requests.request(
                request.method,
                url,
                headers=dict(request.headers),
                data=request.body,
                timeout=self._settings.timeout,
                verify=self._settings.verify_tls,
            )
        except requests.RequestException as exc:
            raise RemoteApiError(
                f"{request.method} {request.path} failed",
                details={"reason": str(exc)},
            ) from exc

        elapsed = time.monotonic() - start_time
        _LOGGER.info(
            "Received response",
            extra={
                "event": "http.response",
                "method": request.method,
                "path": request.path,
                "status": resp.status_code,
                "elapsed": round(elapsed, 3),
            },
        )
        return HttpResponse(
            url=url,
            status=resp.status_code,
            headers=dict(resp.headers),
            body=resp.content,
            text=resp.text,
            elapsed=elapsed,
        )

    def send(self, request: SignedRequest) -> Any:
        """Send ``request`` and return the ``data`` member of the response."""
        response = self.fetch(request)
        return parse_envelope(request.method, request.path, response)


def parse_envelope(method: str, path: str, response: HttpResponse) -> Any:
    """Return the response ``data`` or raise :class:`RemoteApiError`.

    Only statuses in ``[200, 300)`` count as success. An empty success body
    (e.g. a delete) yields ``None``.
    """
    ok = 200 <= response.status < 300
    if not response.body:
        if ok:
            return None
        raise RemoteApiError(
            f"{method} {path} Code: {response.status}",
            status=response.status,
        )

    try:
        parsed = json.loads(response.text)
    except json.JSONDecodeError as exc:
        raise RemoteApiError(
            "Response is not valid JSON",
            status=response.status,
            details={"response": response.text[:200]},
        ) from exc

    api_error = _first_error(parsed)
    if not ok:
        raise RemoteApiError(
            f"{method} {path} Code: {response.status}",
            status=response.status,
            api_error=api_error,
        )

    if isinstance(parsed, dict) and "data" in parsed:
        return parsed["data"]

    if api_error is not None:
        raise RemoteApiError(
            f"{method} {path} rejected: {api_error.get('code')}",
            status=response.status,
            api_error=api_error,
        )

    raise RemoteApiError(
        "Response has no data",
        status=response.status,
        details={"response": response.text[:200]},
    )


def _first_error(parsed: Any) -> dict[str, Any] | None:
    if not isinstance(parsed, dict):
        return None
    errors = parsed.get("errors")
    if not isinstance(errors, list) or not errors:
        return None
    first = errors[0]
    if isinstance(first, dict) and first.get("code"):
        return first
    return None


__all__ = ["HttpResponse", "HttpTransport", "parse_envelope"]
