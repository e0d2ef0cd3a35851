"""Publishing services."""

from __future__ import annotations

from .publishing_service import ContentBundle, PublishingService, load_bundle_directory

__all__ = ["ContentBundle", "PublishingService", "load_bundle_directory"]
