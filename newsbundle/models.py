"""Typed option structures for article uploads and searches."""

from __future__ import annotations

import urllib.parse
from dataclasses import dataclass, fields, replace
from datetime import datetime
from typing import Any, Mapping, Sequence

from .errors import ValidationError
from .utils.dates import format_date

MATURITY_RATINGS = ("KIDS", "MATURE", "GENERAL")
SORT_DIRECTIONS = ("ASC", "DESC")

_OPTION_ALIASES = {
    "isPreview": "is_preview",
    "isIssueOnly": "is_issue_only",
    "isSponsored": "is_sponsored",
    "isCandidateToBeFeatured": "is_candidate_to_be_featured",
    "isHidden": "is_hidden",
    "isPaid": "is_paid",
    "maturityRating": "maturity_rating",
    "accessoryText": "accessory_text",
}

_SEARCH_ALIASES = {
    "pageSize": "page_size",
    "fromDate": "from_date",
    "toDate": "to_date",
    "sortDir": "sort_dir",
}


@dataclass(slots=True)
class ArticleOptions:
    """Publishing options that become the ``metadata`` part of an upload."""

    is_preview: bool = True
    is_issue_only: bool = False
    is_sponsored: bool = False
    is_candidate_to_be_featured: bool | None = None
    is_hidden: bool | None = None
    is_paid: bool | None = None
    maturity_rating: str | None = None
    accessory_text: str | None = None
    sections: Sequence[str] = ()
    revision: str | None = None

    def __post_init__(self) -> None:
        for name in ("is_preview", "is_issue_only", "is_sponsored"):
            _require_bool(name, getattr(self, name))
        for name in ("is_candidate_to_be_featured", "is_hidden", "is_paid"):
            value = getattr(self, name)
            if value is not None:
                _require_bool(name, value)

        if self.maturity_rating is not None and self.maturity_rating not in MATURITY_RATINGS:
            raise ValidationError(
                "maturity_rating must be one of KIDS, MATURE or GENERAL",
                details={"maturity_rating": self.maturity_rating},
            )
        if self.accessory_text is not None and not isinstance(self.accessory_text, str):
            raise ValidationError("accessory_text must be a string")
        if self.revision is not None and (not isinstance(self.revision, str) or not self.revision):
            raise ValidationError("revision must be a non-empty string")

        if self.sections is None:
            self.sections = ()
        if isinstance(self.sections, str) or not isinstance(self.sections, Sequence):
            raise ValidationError(
                "sections must be a list of section URLs",
                details={"sections": repr(self.sections)},
            )
        if not all(isinstance(item, str) and item for item in self.sections):
            raise ValidationError("every section must be a non-empty string")
        self.sections = tuple(self.sections)

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None) -> "ArticleOptions":
        """Build options from snake_case or camelCase keys, rejecting unknown ones."""
        if options is None:
            return cls()
        if isinstance(options, ArticleOptions):
            return options
        known = {item.name for item in fields(cls)}
        kwargs: dict[str, Any] = {}
        unknown: list[str] = []
        for key, value in options.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in known:
                unknown.append(key)
                continue
            kwargs[name] = value
        if unknown:
            raise ValidationError(
                "Unknown article options",
                details={"unknown": sorted(unknown)},
            )
        return cls(**kwargs)

    def with_revision(self, revision: str) -> "ArticleOptions":
        return replace(self, revision=revision)

    def to_metadata(self) -> dict[str, Any]:
        """Return the metadata object in the field names the API expects."""
        metadata: dict[str, Any] = {
            "isPreview": self.is_preview,
            "isIssueOnly": self.is_issue_only,
            "isSponsored": self.is_sponsored,
        }
        if self.sections:
            metadata["links"] = {"sections": list(self.sections)}
        if self.maturity_rating:
            metadata["maturityRating"] = self.maturity_rating
        if self.is_candidate_to_be_featured is not None:
            metadata["isCandidateToBeFeatured"] = self.is_candidate_to_be_featured
        if self.is_hidden is not None:
            metadata["isHidden"] = self.is_hidden
        if self.is_paid is not None:
            metadata["isPaid"] = self.is_paid
        if self.accessory_text is not None:
            metadata["accessoryText"] = self.accessory_text
        if self.revision is not None:
            metadata["revision"] = self.revision
        return metadata


@dataclass(slots=True)
class SearchOptions:
    """Query parameters accepted by the article search endpoints."""

    page_size: int | str | None = None
    from_date: datetime | str | None = None
    to_date: datetime | str | None = None
    sort_dir: str | None = None

    def __post_init__(self) -> None:
        if self.page_size is not None:
            if isinstance(self.page_size, bool) or not isinstance(self.page_size, (int, str)):
                raise ValidationError("page_size must be a string or a number")
        for name in ("from_date", "to_date"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, (datetime, str)):
                raise ValidationError(f"{name} must be a datetime or a string")
        if self.sort_dir is not None:
            if not isinstance(self.sort_dir, str) or self.sort_dir.upper() not in SORT_DIRECTIONS:
                raise ValidationError(
                    "sort_dir must be ASC or DESC",
                    details={"sort_dir": self.sort_dir},
                )
            self.sort_dir = self.sort_dir.upper()

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None) -> "SearchOptions":
        if options is None:
            return cls()
        if isinstance(options, SearchOptions):
            return options
        kwargs: dict[str, Any] = {}
        unknown: list[str] = []
        for key, value in options.items():
            name = _SEARCH_ALIASES.get(key, key)
            if name not in _SEARCH_ALIASES.values():
                unknown.append(key)
                continue
            kwargs[name] = value
        if unknown:
            raise ValidationError("Unknown search options", details={"unknown": sorted(unknown)})
        return cls(**kwargs)

    def query_string(self) -> str:
        """Return ``?pageSize=..&...`` for the populated parameters, or ``""``."""
        pairs: list[tuple[str, str]] = []
        for param, value in (
            ("pageSize", self.page_size),
            ("fromDate", self.from_date),
            ("toDate", self.to_date),
            ("sortDir", self.sort_dir),
        ):
            if value is None or value == "":
                continue
            if isinstance(value, datetime):
                value = format_date(value)
            pairs.append((param, urllib.parse.quote(str(value), safe=":")))
        if not pairs:
            return ""
        return "?" + "&".join(f"{key}={value}" for key, value in pairs)


def _require_bool(name: str, value: Any) -> None:
    if not isinstance(value, bool):
        raise ValidationError(
            f"{name} must be a boolean",
            details={name: repr(value)},
        )


__all__ = ["ArticleOptions", "MATURITY_RATINGS", "SORT_DIRECTIONS", "SearchOptions"]
