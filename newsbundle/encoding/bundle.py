"""Assembly of article uploads into ordered multipart parts."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from ..errors import ValidationError
from ..models import ArticleOptions
from .multipart import EncodedBody, Part, encode

ARTICLE_PART = "article.json"
METADATA_PART = "metadata"
RESERVED_NAMES = frozenset({ARTICLE_PART, METADATA_PART})


def dump_json(value: Any) -> str:
    """Serialise ``value`` compactly, without escaping non-ASCII text."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


@dataclass(slots=True)
class UploadBundle:
    """An article, its metadata and the local files that travel with it.

    ``article`` is either the parsed article document or its JSON text as
    read from disk. ``files`` maps bundle names (as referenced by
    ``bundle://`` URLs in the article) to local paths; insertion order is
    the upload order.
    """

    article: Mapping[str, Any] | str
    options: ArticleOptions = field(default_factory=ArticleOptions)
    files: Mapping[str, Path] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.article is None:
            raise ValidationError("Article JSON must be passed as an argument.")
        if isinstance(self.article, str):
            if not self.article.strip():
                raise ValidationError("Article JSON must not be empty.")
        elif not isinstance(self.article, Mapping):
            raise ValidationError(
                "Article must be a JSON object",
                details={"type": type(self.article).__name__},
            )

        if not isinstance(self.options, ArticleOptions):
            raise ValidationError("options must be an ArticleOptions instance")

        files = self.files or {}
        if not isinstance(files, Mapping):
            raise ValidationError("bundle files must map bundle names to paths")

        normalized: dict[str, Path] = {}
        for name, location in files.items():
            if not isinstance(name, str) or not name:
                raise ValidationError("bundle file names must be non-empty strings")
            if name == ARTICLE_PART:
                raise ValidationError("Bundle cannot contain `article.json`", details={"name": name})
            if name == METADATA_PART:
                raise ValidationError("Bundle cannot contain metadata file.", details={"name": name})
            if not isinstance(location, (str, os.PathLike)):
                raise ValidationError(
                    "bundle file locations must be paths",
                    details={"name": name, "type": type(location).__name__},
                )
            normalized[name] = Path(location)
        self.files = normalized

    def article_json(self) -> str:
        if isinstance(self.article, str):
            return self.article
        return dump_json(self.article)

    def metadata_json(self) -> str:
        return dump_json({"data": self.options.to_metadata()})

    def parts(self) -> list[Part]:
        """Return the article part, the metadata part, then one part per file."""
        result = [
            Part.from_json(ARTICLE_PART, self.article_json(), filename=ARTICLE_PART),
            Part.from_json(METADATA_PART, self.metadata_json()),
        ]
        for index, (name, location) in enumerate(self.files.items()):
            result.append(Part.from_file(f"file{index}", location, filename=name))
        return result

    def encode(self, *, boundary: str | None = None) -> EncodedBody:
        return encode(self.parts(), boundary=boundary)


__all__ = ["ARTICLE_PART", "METADATA_PART", "RESERVED_NAMES", "UploadBundle", "dump_json"]
