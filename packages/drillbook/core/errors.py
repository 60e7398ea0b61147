"""Exception hierarchy for Drillbook.

Lookup failures inside the editing core are not exceptions (they log and
return None); these types cover configuration and persistence boundaries.
"""

from __future__ import annotations


class DrillbookError(Exception):
    """Base class for all Drillbook errors."""


class ConfigError(DrillbookError):
    """Raised when a configuration file cannot be parsed or validated."""


class ChartNotFoundError(DrillbookError):
    """Raised when a chart id is not present in a repository.

    Attributes:
        chart_id: The id that was requested.
    """

    def __init__(self, chart_id: str) -> None:
        self.chart_id = chart_id
        super().__init__(f"Chart not found: {chart_id}")
