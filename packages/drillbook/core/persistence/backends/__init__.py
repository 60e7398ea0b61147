from drillbook.core.persistence.backends.fs import FSChartRepository
from drillbook.core.persistence.backends.memory import InMemoryChartRepository

__all__ = ["FSChartRepository", "InMemoryChartRepository"]
