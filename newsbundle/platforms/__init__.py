"""Platform integration package."""

from __future__ import annotations

from .news import NewsApiClient, Transport

__all__ = ["NewsApiClient", "Transport"]
