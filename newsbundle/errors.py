"""Exception types raised by the news API client."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping


class NewsApiError(RuntimeError):
    """Base class for every failure surfaced by the client."""

    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details = dict(details or {})

    def __str__(self) -> str:
        base = super().__str__()
        if not self.details:
            return base
        try:
            detail_repr = json.dumps(self.details, ensure_ascii=False, default=str)
        except TypeError:
            detail_repr = str(self.details)
        return f"{base} | details: {detail_repr}"


class ValidationError(NewsApiError, ValueError):
    """Raised for malformed bundles or options, before any I/O happens."""


class ConfigurationError(ValidationError):
    """Raised when API credentials or settings are unusable."""


class SigningError(ConfigurationError):
    """Raised when the API secret cannot be turned into a signing key."""


class FileAccessError(NewsApiError):
    """Raised when a bundled file cannot be read."""

    def __init__(self, path: Path | str, *, reason: str | None = None) -> None:
        self.path = Path(path)
        details: dict[str, Any] = {"path": str(self.path)}
        if reason:
            details["reason"] = reason
        super().__init__(f"File not found: {self.path}", details=details)


class UndetectableContentTypeError(NewsApiError):
    """Raised when the content type of a bundled file cannot be sniffed."""

    def __init__(self, field: str, *, path: Path | str | None = None) -> None:
        self.field = field
        details: dict[str, Any] = {"field": field}
        if path is not None:
            details["path"] = str(path)
        super().__init__(f"Filetype error: {field}", details=details)


class RemoteApiError(NewsApiError):
    """Raised for transport failures and error responses from the server."""

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        api_error: Mapping[str, Any] | None = None,
        details: Mapping[str, Any] | None = None,
    ) -> None:
        merged: dict[str, Any] = dict(details or {})
        if status is not None:
            merged.setdefault("status", status)
        if api_error:
            merged.setdefault("api_error", dict(api_error))
        super().__init__(message, details=merged)
        self.status = status
        self.api_error = dict(api_error) if api_error else None

    @property
    def code(self) -> str | None:
        if not self.api_error:
            return None
        code = self.api_error.get("code")
        return str(code) if code is not None else None


__all__ = [
    "ConfigurationError",
    "FileAccessError",
    "NewsApiError",
    "RemoteApiError",
    "SigningError",
    "UndetectableContentTypeError",
    "ValidationError",
]
