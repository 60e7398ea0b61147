"""Protocol for chart storage backends."""

from typing import Protocol, runtime_checkable

from drillbook.core.drill.models import Chart, ChartSummary


@runtime_checkable
class ChartRepository(Protocol):
    """
    Protocol for chart persistence.

    The storage format is opaque to callers. Implementations must:
    - stamp ``last_modified_date`` on save
    - return independent copies from ``load`` (editing a loaded chart
      never changes what is stored until it is saved again)
    - treat deleting an unknown id as a no-op
    """

    def save(self, chart: Chart) -> None:
        """Persist ``chart`` under its id, replacing any previous version."""
        ...

    def load(self, chart_id: str, *, strict: bool = False) -> Chart | None:
        """
        Load a chart by id.

        Args:
            chart_id: Chart identifier
            strict: Raise instead of returning None when the chart is missing

        Returns:
            The chart, or None if not found (non-strict)

        Raises:
            ChartNotFoundError: If missing and ``strict`` is True
        """
        ...

    def list_summaries(self) -> list[ChartSummary]:
        """Summaries of every stored chart, most recently modified first."""
        ...

    def delete(self, chart_id: str) -> None:
        """Remove a chart. Unknown ids are ignored."""
        ...
