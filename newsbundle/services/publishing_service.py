"""High-level orchestration for publishing article bundles from disk."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from ..encoding.bundle import ARTICLE_PART, UploadBundle
from ..errors import FileAccessError, ValidationError
from ..models import ArticleOptions
from ..platforms.news import NewsApiClient
from ..utils.logging import get_logger

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class ContentBundle:
    """An ``article.json`` document and the assets stored beside it."""

    article_path: Path
    assets: dict[str, Path] = field(default_factory=dict)

    def read_article(self) -> str:
        try:
            return self.article_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise FileAccessError(self.article_path, reason=exc.strerror or str(exc)) from exc

    def to_upload(self, options: ArticleOptions | None = None) -> UploadBundle:
        return UploadBundle(
            article=self.read_article(),
            options=options or ArticleOptions(),
            files=self.assets,
        )


def load_bundle_directory(root: Path) -> ContentBundle:
    """Collect ``article.json`` and every other regular file in ``root``.

    Assets are keyed by file name, which is how the article refers to them
    through ``bundle://`` URLs, and ordered by name. Hidden files are skipped.
    """
    if not root.is_dir():
        raise FileAccessError(root, reason="not a directory")
    article_path = root / ARTICLE_PART
    if not article_path.is_file():
        raise FileAccessError(article_path, reason="bundle has no article.json")

    assets = {
        path.name: path
        for path in sorted(root.iterdir(), key=lambda p: p.name)
        if path.is_file() and path.name != ARTICLE_PART and not path.name.startswith(".")
    }
    return ContentBundle(article_path=article_path, assets=assets)


class PublishingService:
    """Creates or updates articles from bundles on disk."""

    def __init__(self, client: NewsApiClient) -> None:
        self._client = client

    def publish(
        self,
        bundle: ContentBundle,
        *,
        channel_id: str | None = None,
        article_id: str | None = None,
        revision: str | None = None,
        options: ArticleOptions | Mapping[str, Any] | None = None,
    ) -> Any:
        """Create the article in ``channel_id``, or update ``article_id`` at ``revision``."""
        article = bundle.read_article()
        if article_id:
            if not revision:
                raise ValidationError("revision is required to update an article")
            LOGGER.info(
                "Updating article",
                extra={"event": "publish.update", "article_id": article_id, "assets": len(bundle.assets)},
            )
            return self._client.update_article(
                article_id,
                article,
                revision=revision,
                bundle_files=bundle.assets,
                options=options,
            )

        if not channel_id:
            raise ValidationError("channel_id is required to create an article")
        LOGGER.info(
            "Creating article",
            extra={"event": "publish.create", "channel_id": channel_id, "assets": len(bundle.assets)},
        )
        return self._client.create_article(
            channel_id,
            article,
            bundle_files=bundle.assets,
            options=options,
        )
