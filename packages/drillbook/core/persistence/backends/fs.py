"""Filesystem-backed chart repository.

One ``chart_<id>.json`` file per chart under a root directory. Writes go
through a temp file + replace so a crash never leaves a half-written chart.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from drillbook.core.drill.models import Chart, ChartSummary, new_id, utc_now_iso
from drillbook.core.errors import ChartNotFoundError
from drillbook.core.utils.json import write_text_atomic

logger = logging.getLogger(__name__)

CHART_FILE_PREFIX = "chart_"
CHART_FILE_SUFFIX = ".json"


class FSChartRepository:
    """
    Chart repository over a local directory.

    The directory is created lazily on first save.
    """

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    def path_for(self, chart_id: str) -> Path:
        """File path a chart with ``chart_id`` is stored at."""
        if not chart_id or any(sep in chart_id for sep in ("/", "\\")) or chart_id in (".", ".."):
            raise ValueError(f"Invalid chart id for file storage: {chart_id!r}")
        return self.root / f"{CHART_FILE_PREFIX}{chart_id}{CHART_FILE_SUFFIX}"

    def save(self, chart: Chart) -> None:
        """
        Write ``chart`` to disk, stamping its modified date.

        A chart without an id is given one.
        """
        if not chart.id:
            chart.id = new_id()
        chart.last_modified_date = utc_now_iso()
        if not chart.created_date:
            chart.created_date = chart.last_modified_date

        path = self.path_for(chart.id)
        write_text_atomic(path, chart.model_dump_json(indent=2))
        logger.info("Saved chart %s to %s", chart.id, path)

    def load(self, chart_id: str, *, strict: bool = False) -> Chart | None:
        path = self.path_for(chart_id)
        if not path.exists():
            if strict:
                raise ChartNotFoundError(chart_id)
            logger.warning("FSChartRepository: chart not found: %s", chart_id)
            return None

        return Chart.model_validate_json(path.read_text(encoding="utf-8"))

    def list_summaries(self) -> list[ChartSummary]:
        if not self.root.is_dir():
            return []

        summaries: list[ChartSummary] = []
        for path in sorted(self.root.glob(f"{CHART_FILE_PREFIX}*{CHART_FILE_SUFFIX}")):
            try:
                chart = Chart.model_validate_json(path.read_text(encoding="utf-8"))
            except (OSError, ValidationError, ValueError) as e:
                logger.warning("FSChartRepository: failed to read chart %s: %s", path.name, e)
                continue
            summaries.append(ChartSummary.from_chart(chart))

        summaries.sort(key=lambda s: s.last_modified, reverse=True)
        return summaries

    def delete(self, chart_id: str) -> None:
        path = self.path_for(chart_id)
        if path.exists():
            path.unlink()
            logger.info("Deleted chart %s", chart_id)
