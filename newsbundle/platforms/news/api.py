"""Client for the channel, section and article endpoints."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Mapping, Protocol

from ...core.http_client import HttpTransport
from ...core.signing import RequestSigner, SignedRequest
from ...encoding.bundle import UploadBundle
from ...errors import ValidationError
from ...models import ArticleOptions, SearchOptions
from ...security import ApiCredentials, SecretProvider, resolve_credentials
from ...settings import ApiSettings, AppConfig

BundleFiles = Mapping[str, Path | str]
OptionsInput = ArticleOptions | Mapping[str, Any] | None


class Transport(Protocol):
    """Sends a signed request and returns the response payload."""

    def send(self, request: SignedRequest) -> Any:
        """Deliver ``request`` and return the unwrapped ``data`` member."""


class NewsApiClient:
    """Signs and sends requests to the publishing API.

    Uploads are encoded and signed in full before the transport is touched,
    so validation, file and content-type errors never open a connection.
    """

    def __init__(
        self,
        credentials: ApiCredentials,
        *,
        settings: ApiSettings | None = None,
        transport: Transport | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if not isinstance(credentials, ApiCredentials):
            raise ValidationError("credentials must be an ApiCredentials instance")
        self._settings = settings or ApiSettings()
        self._signer = RequestSigner(
            credentials.api_id,
            credentials.api_secret,
            host=self._settings.host,
            clock=clock,
        )
        self._transport: Transport = transport or HttpTransport(self._settings)

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        *,
        provider: SecretProvider | None = None,
        transport: Transport | None = None,
    ) -> "NewsApiClient":
        credentials = resolve_credentials(config.credentials, provider)
        return cls(credentials, settings=config.api, transport=transport)

    @property
    def signer(self) -> RequestSigner:
        return self._signer

    def read_channel(self, channel_id: str) -> Any:
        """Get details about a channel, including its name, website and default section."""
        _require_id("channel_id", channel_id)
        return self._request("GET", f"/channels/{channel_id}")

    def list_sections(self, channel_id: str) -> Any:
        _require_id("channel_id", channel_id)
        return self._request("GET", f"/channels/{channel_id}/sections")

    def read_section(self, section_id: str) -> Any:
        _require_id("section_id", section_id)
        return self._request("GET", f"/sections/{section_id}")

    def create_article(
        self,
        channel_id: str,
        article: Mapping[str, Any] | str,
        *,
        bundle_files: BundleFiles | None = None,
        options: OptionsInput = None,
    ) -> Any:
        """Publish an article, plus any bundled files, to a channel."""
        _require_id("channel_id", channel_id)
        article_options = ArticleOptions.from_mapping(options)
        if article_options.revision is not None:
            raise ValidationError(
                "revision only applies to article updates",
                details={"revision": article_options.revision},
            )
        bundle = UploadBundle(
            article=article,
            options=article_options,
            files=bundle_files or {},
        )
        return self._request("POST", f"/channels/{channel_id}/articles", bundle)

    def read_article(self, article_id: str) -> Any:
        _require_id("article_id", article_id)
        return self._request("GET", f"/articles/{article_id}")

    def update_article(
        self,
        article_id: str,
        article: Mapping[str, Any] | str,
        *,
        revision: str,
        bundle_files: BundleFiles | None = None,
        options: OptionsInput = None,
    ) -> Any:
        """Replace an article; ``revision`` must match the latest known revision."""
        _require_id("article_id", article_id)
        _require_id("revision", revision)
        bundle = UploadBundle(
            article=article,
            options=ArticleOptions.from_mapping(options).with_revision(revision),
            files=bundle_files or {},
        )
        return self._request("POST", f"/articles/{article_id}", bundle)

    def delete_article(self, article_id: str) -> Any:
        _require_id("article_id", article_id)
        return self._request("DELETE", f"/articles/{article_id}")

    def search_articles(
        self,
        *,
        channel_id: str | None = None,
        section_id: str | None = None,
        search: SearchOptions | Mapping[str, Any] | None = None,
    ) -> Any:
        """List articles of a channel (or of a section) matching ``search``."""
        if not channel_id and not section_id:
            raise ValidationError("channel_id or section_id required")
        query = SearchOptions.from_mapping(search).query_string()
        if channel_id:
            _require_id("channel_id", channel_id)
            endpoint = f"/channels/{channel_id}/articles{query}"
        else:
            _require_id("section_id", section_id)
            endpoint = f"/sections/{section_id}/articles{query}"
        return self._request("GET", endpoint)

    def _request(self, method: str, endpoint: str, bundle: UploadBundle | None = None) -> Any:
        body = bundle.encode() if bundle is not None else None
        signed = self._signer.sign_request(method, endpoint, body)
        return self._transport.send(signed)


def _require_id(name: str, value: Any) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"options.{name} required", details={name: repr(value)})


__all__ = ["NewsApiClient", "Transport"]
