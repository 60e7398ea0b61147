"""In-memory chart repository for development/testing.

Stores deep copies, so callers can keep editing a chart after saving it
without touching the stored version.
"""

from __future__ import annotations

import logging

from drillbook.core.drill.models import Chart, ChartSummary, new_id, utc_now_iso
from drillbook.core.errors import ChartNotFoundError

logger = logging.getLogger(__name__)


class InMemoryChartRepository:
    """Dict-backed chart repository; nothing survives the process."""

    def __init__(self) -> None:
        self._charts: dict[str, Chart] = {}

    def __len__(self) -> int:
        return len(self._charts)

    def save(self, chart: Chart) -> None:
        if not chart.id:
            chart.id = new_id()
        chart.last_modified_date = utc_now_iso()
        self._charts[chart.id] = chart.model_copy(deep=True)

    def load(self, chart_id: str, *, strict: bool = False) -> Chart | None:
        stored = self._charts.get(chart_id)
        if stored is None:
            if strict:
                raise ChartNotFoundError(chart_id)
            logger.warning("InMemoryChartRepository: chart not found: %s", chart_id)
            return None
        return stored.model_copy(deep=True)

    def list_summaries(self) -> list[ChartSummary]:
        summaries = [ChartSummary.from_chart(c) for c in self._charts.values()]
        summaries.sort(key=lambda s: s.last_modified, reverse=True)
        return summaries

    def delete(self, chart_id: str) -> None:
        self._charts.pop(chart_id, None)
