"""Drillbook session - wires the editing core to its collaborators.

The session owns one FormationStore, its CommandHistory, and a
ScoringEngine, all sharing a single EventBus. External collaborators
(content catalog, chart repository, roster, playback clock) are passed in
explicitly; anything not supplied is built from the AppConfig.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from drillbook.core.catalog import ContentCatalog, InMemoryContentCatalog
from drillbook.core.config.models import AppConfig
from drillbook.core.drill.field import clamp_to_field, snap_to_grid, snap_to_yard_lines
from drillbook.core.drill.models import Chart, ChartSummary, Formation, MemberPosition
from drillbook.core.drill.store import FormationStore
from drillbook.core.drill.templates import create_template_mapping
from drillbook.core.editor.commands.base import EditorCommand
from drillbook.core.editor.history import CommandHistory
from drillbook.core.events import EventBus
from drillbook.core.persistence import ChartRepository, FSChartRepository
from drillbook.core.playback import PlaybackClock, TempoClock
from drillbook.core.roster.models import Roster
from drillbook.core.scoring.engine import ScoringEngine
from drillbook.core.validation.transition import TransitionResult, validate_chart, validate_transition

logger = logging.getLogger(__name__)


class DrillSession:
    """One editing/playback session over a single active chart.

    Only one session should mutate a given chart at a time.

    Example:
        >>> session = DrillSession(repository=InMemoryChartRepository())
        >>> session.new_chart("Opener", "fight-song")
        >>> f = session.store.add_formation(0, 8, "Company front")
        >>> session.save_active_chart()
    """

    def __init__(
        self,
        *,
        app_config: AppConfig | Path | str | None = None,
        catalog: ContentCatalog | None = None,
        repository: ChartRepository | None = None,
        roster: Roster | None = None,
        clock: PlaybackClock | None = None,
    ):
        """Initialize the session.

        Args:
            app_config: AppConfig instance, path, or None (default path/defaults)
            catalog: Song/template lookup (empty in-memory catalog if None)
            repository: Chart storage (file repository under
                ``storage.charts_dir`` if None)
            roster: Band roster used for scoring and template mapping
            clock: Playback clock (a fixed-tempo clock at ``default_bpm`` if None)

        Raises:
            FileNotFoundError: If an explicit config path doesn't exist
            ConfigError: If the config is invalid
        """
        self.config: AppConfig = self._resolve_config(app_config)
        self.events = EventBus()

        self.store = FormationStore(self.events)
        self.history = CommandHistory(self.config.editor.history_capacity, self.events)
        self.scoring = ScoringEngine(self.config.scoring, self.events)

        self.catalog: ContentCatalog = catalog if catalog is not None else InMemoryContentCatalog()
        self.repository: ChartRepository = (
            repository
            if repository is not None
            else FSChartRepository(Path(self.config.storage.charts_dir))
        )
        self.roster = roster
        self.clock: PlaybackClock = clock if clock is not None else TempoClock(bpm=self.config.default_bpm)

        logger.debug("Session initialized (history capacity %d)", self.history.max_history)

    @staticmethod
    def _resolve_config(value: Any) -> AppConfig:
        if value is None:
            return AppConfig.load_or_default()
        elif isinstance(value, (Path, str)):
            return AppConfig.load_or_default(Path(value))
        elif isinstance(value, AppConfig):
            return value
        else:
            raise TypeError(f"Expected AppConfig, Path, str, or None; got {type(value).__name__}")

    # ------------------------------------------------------------------
    # Charts
    # ------------------------------------------------------------------

    @property
    def active_chart(self) -> Chart | None:
        return self.store.active_chart

    def new_chart(self, name: str, song_id: str) -> Chart:
        """Start an empty chart for ``song_id``; clears undo history."""
        chart = self.store.create_chart(name, song_id)
        song = self.catalog.get_song(song_id) if song_id else None
        if song is not None:
            chart.total_duration_beats = song.total_beats
            self.store.set_song(song_id, 0.0, song.total_beats, 1.0)
        self.history.clear()
        return chart

    def open_chart(self, chart_id: str) -> Chart | None:
        """Load a stored chart into the store; clears undo history.

        Returns:
            The loaded chart, or None if the repository does not have it
        """
        chart = self.repository.load(chart_id)
        if chart is None:
            return None
        self.store.load_chart(chart)
        self.history.clear()
        return chart

    def save_active_chart(self) -> ChartSummary | None:
        """Persist the active chart. Returns its summary, or None if there is none."""
        chart = self.store.active_chart
        if chart is None:
            logger.warning("save_active_chart: no active chart")
            return None
        self.repository.save(chart)
        return ChartSummary.from_chart(chart)

    def close_chart(self) -> None:
        self.store.close_chart()
        self.history.clear()

    def list_charts(self) -> list[ChartSummary]:
        return self.repository.list_summaries()

    def delete_chart(self, chart_id: str) -> None:
        """Delete a stored chart. The active chart, if it is the same one, stays open."""
        self.repository.delete(chart_id)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def execute(self, command: EditorCommand) -> None:
        """Run a user edit through the undo history."""
        self.history.execute(command)

    def undo(self) -> None:
        self.history.undo()

    def redo(self) -> None:
        self.history.redo()

    def snap_position(
        self, position: tuple[float, float], *, to_yard_lines: bool = False
    ) -> tuple[float, float]:
        """Snap a dropped spot to the editor grid (or the 5-yard lines), kept on the field."""
        x, y = position
        if to_yard_lines:
            x, y = snap_to_yard_lines(x, y)
        else:
            x, y = snap_to_grid(x, y, self.config.editor.snap_grid_yards)
        return clamp_to_field(x, y)

    def apply_template(self, formation_id: str, template_id: str) -> Formation | None:
        """Stamp a catalog template onto a formation, auto-assigning active members.

        Returns:
            The updated formation, or None if the template, roster, or
            formation is unavailable
        """
        template = self.catalog.get_template(template_id)
        if template is None:
            return None
        if self.roster is None:
            logger.warning("apply_template: no roster loaded")
            return None

        mapping = create_template_mapping(template, self.roster.active_members)
        return self.store.apply_template(formation_id, template, mapping)

    # ------------------------------------------------------------------
    # Validation & preview
    # ------------------------------------------------------------------

    def bpm_for_active_chart(self) -> float:
        """Tempo of the active chart's song, or ``default_bpm`` if unknown."""
        chart = self.store.active_chart
        if chart is not None and chart.song_id:
            song = self.catalog.get_song(chart.song_id)
            if song is not None:
                return song.bpm
        return self.config.default_bpm

    def validate_neighbours(
        self, formation_id: str
    ) -> tuple[TransitionResult | None, TransitionResult | None]:
        """Check the transitions into and out of a formation.

        Returns:
            (incoming, outgoing); either is None when there is no neighbour
            on that side or the formation is unknown
        """
        chart = self.store.active_chart
        if chart is None:
            return None, None
        index = chart.index_of(formation_id)
        if index < 0:
            logger.warning("validate_neighbours: formation not found: %s", formation_id)
            return None, None

        bpm = self.bpm_for_active_chart()
        formations = chart.formations
        incoming = validate_transition(formations[index - 1], formations[index], bpm) if index > 0 else None
        outgoing = (
            validate_transition(formations[index], formations[index + 1], bpm)
            if index + 1 < len(formations)
            else None
        )
        return incoming, outgoing

    def validate_active_chart(self) -> list[TransitionResult]:
        chart = self.store.active_chart
        if chart is None:
            return []
        return validate_chart(chart, self.bpm_for_active_chart())

    def preview(self, beat: float | None = None) -> list[MemberPosition]:
        """Interpolated positions at ``beat``, or at the clock's beat if None."""
        if beat is not None:
            self.clock.seek(beat)
        return self.store.get_interpolated_positions(self.clock.current_beat)

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def begin_evaluation(self) -> None:
        """Start scoring a run of the active chart with the session roster."""
        self.scoring.begin_evaluation(self.store.active_chart, self.roster)
