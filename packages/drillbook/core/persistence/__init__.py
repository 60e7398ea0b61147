"""Chart persistence: repository protocol plus file and in-memory backends."""

from drillbook.core.persistence.backends import FSChartRepository, InMemoryChartRepository
from drillbook.core.persistence.protocols import ChartRepository

__all__ = ["ChartRepository", "FSChartRepository", "InMemoryChartRepository"]
