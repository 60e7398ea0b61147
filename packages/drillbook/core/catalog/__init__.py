"""Read-only content lookup (songs and formation templates)."""

from drillbook.core.catalog.catalog import ContentCatalog, InMemoryContentCatalog
from drillbook.core.catalog.models import SongData, TempoChange

__all__ = ["ContentCatalog", "InMemoryContentCatalog", "SongData", "TempoChange"]
