"""Publishing API adapters."""

from __future__ import annotations

from .api import NewsApiClient, Transport

__all__ = ["NewsApiClient", "Transport"]
