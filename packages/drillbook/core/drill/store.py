"""FormationStore - sole owner of the active drill chart.

All chart mutation flows through this class so that:
- formations stay sorted ascending by ``start_beat``
- member coordinates are clamped to the field on every write
- subscribers are notified synchronously after each mutating call

Unknown chart/formation/member ids are not errors: the call logs and
returns None (or does nothing).
"""

from __future__ import annotations

import bisect
from collections.abc import Iterable, Mapping
import logging

from drillbook.core.drill.field import clamp_to_field
from drillbook.core.drill.models import (
    AudioRegion,
    AudioTrack,
    Chart,
    Formation,
    FormationTemplate,
    MemberPosition,
    TransitionType,
)
from drillbook.core.events import ChartEvent, EventBus, Handler, Subscription
from drillbook.core.utils.math import lerp, lerp_angle, smoothstep

logger = logging.getLogger(__name__)


class FormationStore:
    """Owns the active Chart and exposes CRUD plus beat interpolation.

    Example:
        >>> store = FormationStore()
        >>> chart = store.create_chart("Opener", "song-1")
        >>> intro = store.add_formation(0, 8, "Intro")
        >>> store.set_member_position(intro.id, "m1", (40.0, 26.67), 0.0)
        >>> store.get_interpolated_positions(2.0)[0].field_x
        40.0
    """

    def __init__(self, events: EventBus | None = None) -> None:
        self.events = events or EventBus()
        self._active_chart: Chart | None = None
        self._current_index = -1

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def active_chart(self) -> Chart | None:
        return self._active_chart

    @property
    def current_formation_index(self) -> int:
        return self._current_index

    @property
    def current_formation(self) -> Formation | None:
        chart = self._active_chart
        if chart is None or not (0 <= self._current_index < len(chart.formations)):
            return None
        return chart.formations[self._current_index]

    def subscribe(self, event: ChartEvent, handler: Handler) -> Subscription:
        """Register a change handler. See ``ChartEvent`` for payloads."""
        return self.events.subscribe(event, handler)

    def get_formation(self, formation_id: str) -> Formation | None:
        """Look up a formation by id, logging when it cannot be found."""
        return self._find_formation(formation_id)

    # ------------------------------------------------------------------
    # Chart lifecycle
    # ------------------------------------------------------------------

    def create_chart(self, name: str, song_id: str) -> Chart:
        """Replace the active chart with a fresh, empty one."""
        self._ensure_not_notifying()
        chart = Chart(name=name, song_id=song_id)
        chart.audio_timeline.song_id = song_id
        self._active_chart = chart
        self._current_index = -1

        logger.info("Created chart %s (%r) for song %r", chart.id, name, song_id)
        self.events.emit(ChartEvent.CHART_CHANGED, chart)
        return chart

    def load_chart(self, chart: Chart) -> None:
        """Install ``chart`` as-is and select its first formation, if any."""
        self._ensure_not_notifying()
        self._active_chart = chart
        self._current_index = 0 if chart.formations else -1

        logger.info("Loaded chart %s (%d formations)", chart.id, chart.formation_count)
        self.events.emit(ChartEvent.CHART_CHANGED, chart)
        if self._current_index >= 0:
            self.events.emit(ChartEvent.CURRENT_FORMATION_CHANGED, self._current_index)

    def close_chart(self) -> None:
        self._ensure_not_notifying()
        self._active_chart = None
        self._current_index = -1
        self.events.emit(ChartEvent.CHART_CHANGED, None)

    # ------------------------------------------------------------------
    # Formation CRUD
    # ------------------------------------------------------------------

    def add_formation(
        self,
        start_beat: float,
        duration_beats: float,
        label: str,
        transition_in: TransitionType = TransitionType.LINEAR_MARCH,
    ) -> Formation | None:
        """Insert a new formation, keeping formations sorted by start beat.

        A formation starting on the same beat as existing ones is placed
        after them.

        Args:
            start_beat: Beat at which members arrive
            duration_beats: Hold length before transitioning onward
            label: Display label
            transition_in: Travel style into this formation

        Returns:
            The new Formation, or None if there is no active chart
        """
        self._ensure_not_notifying()
        chart = self._require_chart()
        if chart is None:
            return None

        formation = Formation(
            label=label,
            start_beat=float(start_beat),
            duration_beats=float(duration_beats),
            transition_in=transition_in,
        )
        index = bisect.bisect_right(
            chart.formations, formation.start_beat, key=lambda f: f.start_beat
        )
        chart.formations.insert(index, formation)

        chart.touch()
        logger.debug("Added formation %s at index %d (beat %.2f)", formation.id, index, start_beat)
        self.events.emit(ChartEvent.FORMATION_ADDED, formation)
        self.events.emit(ChartEvent.CHART_CHANGED, chart)
        return formation

    def remove_formation(self, formation_id: str) -> None:
        """Remove a formation; the current selection clamps to the last valid index."""
        self._ensure_not_notifying()
        chart = self._require_chart()
        if chart is None:
            return

        index = chart.index_of(formation_id)
        if index < 0:
            logger.warning("FormationStore: formation not found: %s", formation_id)
            return

        del chart.formations[index]
        if self._current_index >= len(chart.formations):
            self._current_index = len(chart.formations) - 1

        chart.touch()
        self.events.emit(ChartEvent.FORMATION_REMOVED, formation_id)
        self.events.emit(ChartEvent.CHART_CHANGED, chart)

    def update_formation(
        self,
        formation_id: str,
        start_beat: float | None = None,
        duration_beats: float | None = None,
        label: str | None = None,
    ) -> None:
        """Partially update a formation; re-sorts when ``start_beat`` is given.

        The current selection follows its formation across the re-sort.
        """
        self._ensure_not_notifying()
        formation = self._find_formation(formation_id)
        if formation is None:
            return
        chart = self._active_chart
        assert chart is not None

        if start_beat is not None:
            formation.start_beat = float(start_beat)
        if duration_beats is not None:
            formation.duration_beats = max(0.0, float(duration_beats))
        if label is not None:
            formation.label = label

        selected = self.current_formation
        if start_beat is not None:
            # list.sort is stable, so formations sharing a beat keep their order
            chart.formations.sort(key=lambda f: f.start_beat)

        chart.touch()
        self.events.emit(ChartEvent.FORMATION_CHANGED, formation)
        self._reselect(selected)

    def reorder_formation(self, formation_id: str, new_index: int) -> None:
        """Move a formation to ``new_index`` (clamped) without touching its beats.

        This can break the start-beat ordering; it exists for programmatic
        callers that manage ordering themselves.
        """
        self._ensure_not_notifying()
        formation = self._find_formation(formation_id)
        if formation is None:
            return
        chart = self._active_chart
        assert chart is not None

        selected = self.current_formation
        chart.formations.remove(formation)
        new_index = max(0, min(new_index, len(chart.formations)))
        chart.formations.insert(new_index, formation)

        chart.touch()
        self.events.emit(ChartEvent.CHART_CHANGED, chart)
        self._reselect(selected)

    def set_current_formation(self, index: int) -> None:
        self._ensure_not_notifying()
        chart = self._active_chart
        if chart is None:
            return
        if not 0 <= index < len(chart.formations):
            logger.warning("FormationStore: formation index out of range: %d", index)
            return

        self._current_index = index
        self.events.emit(ChartEvent.CURRENT_FORMATION_CHANGED, index)

    # ------------------------------------------------------------------
    # Member positioning
    # ------------------------------------------------------------------

    def set_member_position(
        self,
        formation_id: str,
        member_id: str,
        position: tuple[float, float],
        facing_angle: float,
        index: int | None = None,
    ) -> None:
        """Upsert a member's spot in a formation, clamping it to the field.

        Args:
            formation_id: Target formation
            member_id: Member to place
            position: (field_x, field_y) in yards
            facing_angle: Degrees, 0 = toward the home side
            index: Where to insert a new entry (default: append). Ignored
                when the member already has a position.
        """
        self._ensure_not_notifying()
        formation = self._find_formation(formation_id)
        if formation is None:
            return

        self._upsert(formation, member_id, position, facing_angle, index)

        self._touch()
        self.events.emit(ChartEvent.FORMATION_CHANGED, formation)

    def set_member_positions_batch(
        self, formation_id: str, positions: Iterable[MemberPosition]
    ) -> None:
        """Upsert many positions with a single change notification."""
        self._ensure_not_notifying()
        formation = self._find_formation(formation_id)
        if formation is None:
            return

        for pos in positions:
            self._upsert(formation, pos.member_id, pos.field_position, pos.facing_angle)

        self._touch()
        self.events.emit(ChartEvent.FORMATION_CHANGED, formation)

    def remove_member_from_formation(self, formation_id: str, member_id: str) -> None:
        self._ensure_not_notifying()
        formation = self._find_formation(formation_id)
        if formation is None:
            return

        before = len(formation.positions)
        formation.positions = [p for p in formation.positions if p.member_id != member_id]
        if len(formation.positions) == before:
            logger.debug("Member %s had no position in formation %s", member_id, formation_id)

        self._touch()
        self.events.emit(ChartEvent.FORMATION_CHANGED, formation)

    def apply_template(
        self,
        formation_id: str,
        template: FormationTemplate,
        slot_to_member: Mapping[int, str],
    ) -> Formation | None:
        """Replace a formation's positions with template slots.

        Slots with no mapped member are skipped. If two slots map to the
        same member, the first slot (in template order) wins.

        Args:
            formation_id: Target formation
            template: Template providing slot coordinates
            slot_to_member: slot_index -> member_id

        Returns:
            The updated Formation, or None if it was not found
        """
        self._ensure_not_notifying()
        formation = self._find_formation(formation_id)
        if formation is None:
            return None

        formation.positions = []
        for slot in template.slots:
            member_id = slot_to_member.get(slot.slot_index)
            if member_id is None:
                continue
            if formation.get_position(member_id) is not None:
                logger.warning(
                    "Template %s maps member %s to more than one slot; keeping the first",
                    template.id,
                    member_id,
                )
                continue
            x, y = clamp_to_field(slot.field_x, slot.field_y)
            formation.positions.append(
                MemberPosition(
                    member_id=member_id, field_x=x, field_y=y, facing_angle=slot.facing_angle
                )
            )

        self._touch()
        self.events.emit(ChartEvent.FORMATION_CHANGED, formation)
        return formation

    # ------------------------------------------------------------------
    # Audio timeline
    # ------------------------------------------------------------------

    def add_sfx_track(self, label: str) -> AudioTrack | None:
        self._ensure_not_notifying()
        chart = self._require_chart()
        if chart is None:
            return None

        track = AudioTrack(label=label)
        chart.audio_timeline.sfx_tracks.append(track)

        chart.touch()
        self.events.emit(ChartEvent.AUDIO_TIMELINE_CHANGED, chart.audio_timeline)
        return track

    def add_audio_region(
        self, track_id: str, region: AudioRegion, index: int | None = None
    ) -> AudioRegion | None:
        """Insert a copy of ``region`` into a track (appended when ``index`` is None)."""
        self._ensure_not_notifying()
        track = self._find_track(track_id)
        if track is None:
            return None

        stored = region.model_copy(deep=True)
        if index is None or not 0 <= index <= len(track.regions):
            track.regions.append(stored)
        else:
            track.regions.insert(index, stored)

        self._emit_audio_changed()
        return stored

    def remove_audio_region(
        self, track_id: str, region_id: str
    ) -> tuple[AudioRegion, int] | None:
        """Remove a region, returning it with the index it occupied."""
        self._ensure_not_notifying()
        track = self._find_track(track_id)
        if track is None:
            return None

        for i, region in enumerate(track.regions):
            if region.id == region_id:
                del track.regions[i]
                self._emit_audio_changed()
                return region, i

        logger.warning("FormationStore: audio region not found: %s", region_id)
        return None

    def update_audio_region(
        self,
        track_id: str,
        region_id: str,
        start_beat: float | None = None,
        duration_beats: float | None = None,
    ) -> None:
        self._ensure_not_notifying()
        track = self._find_track(track_id)
        if track is None:
            return
        region = track.get_region(region_id)
        if region is None:
            logger.warning("FormationStore: audio region not found: %s", region_id)
            return

        if start_beat is not None:
            region.start_beat = float(start_beat)
        if duration_beats is not None:
            region.duration_beats = max(0.0, float(duration_beats))

        self._emit_audio_changed()

    def set_song(
        self,
        song_id: str,
        start_beat: float = 0.0,
        end_beat: float = 0.0,
        volume: float = 1.0,
    ) -> None:
        """Point the chart at a different song and place it on the timeline."""
        self._ensure_not_notifying()
        chart = self._require_chart()
        if chart is None:
            return

        chart.song_id = song_id
        audio = chart.audio_timeline
        audio.song_id = song_id
        audio.song_start_beat = float(start_beat)
        audio.song_end_beat = float(end_beat)
        audio.song_volume = max(0.0, float(volume))

        chart.touch()
        self.events.emit(ChartEvent.AUDIO_TIMELINE_CHANGED, audio)
        self.events.emit(ChartEvent.CHART_CHANGED, chart)

    # ------------------------------------------------------------------
    # Import / export
    # ------------------------------------------------------------------

    def export_chart_json(self) -> str | None:
        """Serialize the active chart, or None if there is none."""
        if self._active_chart is None:
            return None
        return self._active_chart.model_dump_json(indent=2)

    @staticmethod
    def import_chart_json(text: str) -> Chart:
        """Parse a chart previously produced by ``export_chart_json``.

        Raises:
            pydantic.ValidationError: If the JSON does not describe a valid chart
        """
        return Chart.model_validate_json(text)

    # ------------------------------------------------------------------
    # Interpolation
    # ------------------------------------------------------------------

    def get_interpolated_positions(self, beat: float) -> list[MemberPosition]:
        """Member positions at an arbitrary beat, for preview and playback.

        Holds return the owning formation's stored positions unchanged.
        Between a hold end and the next formation's start, members present
        in both formations glide with a smooth-step ease; members present
        on only one side pass through unchanged.

        Args:
            beat: Timeline position (may be fractional)

        Returns:
            Fresh MemberPosition copies; empty before the first formation
        """
        chart = self._active_chart
        if chart is None or not chart.formations:
            return []

        formations = chart.formations
        index = bisect.bisect_right(formations, beat, key=lambda f: f.start_beat) - 1
        if index < 0:
            return []

        current = formations[index]
        hold_end = current.hold_end_beat
        if index == len(formations) - 1 or beat <= hold_end:
            return _copy_positions(current.positions)

        upcoming = formations[index + 1]
        if beat >= upcoming.start_beat or upcoming.start_beat <= hold_end:
            return _copy_positions(upcoming.positions)

        t = (beat - hold_end) / (upcoming.start_beat - hold_end)
        return interpolate_formations(current, upcoming, smoothstep(t))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_chart(self) -> Chart | None:
        if self._active_chart is None:
            logger.error("FormationStore: no active chart")
        return self._active_chart

    def _find_formation(self, formation_id: str) -> Formation | None:
        chart = self._require_chart()
        if chart is None:
            return None
        formation = chart.get_formation(formation_id)
        if formation is None:
            logger.warning("FormationStore: formation not found: %s", formation_id)
        return formation

    def _find_track(self, track_id: str) -> AudioTrack | None:
        chart = self._require_chart()
        if chart is None:
            return None
        track = chart.audio_timeline.get_track(track_id)
        if track is None:
            logger.warning("FormationStore: audio track not found: %s", track_id)
        return track

    def _reselect(self, selected: Formation | None) -> None:
        """Keep the current index on ``selected`` after formations were reordered."""
        chart = self._active_chart
        if selected is None or chart is None:
            return
        index = chart.index_of(selected.id)
        if index != self._current_index:
            self._current_index = index
            self.events.emit(ChartEvent.CURRENT_FORMATION_CHANGED, index)

    def _upsert(
        self,
        formation: Formation,
        member_id: str,
        position: tuple[float, float],
        facing_angle: float,
        index: int | None = None,
    ) -> None:
        x, y = clamp_to_field(*position)
        existing = formation.get_position(member_id)
        if existing is not None:
            existing.field_x = x
            existing.field_y = y
            existing.facing_angle = float(facing_angle)
            return

        new_pos = MemberPosition(
            member_id=member_id, field_x=x, field_y=y, facing_angle=float(facing_angle)
        )
        if index is None or not 0 <= index <= len(formation.positions):
            formation.positions.append(new_pos)
        else:
            formation.positions.insert(index, new_pos)

    def _touch(self) -> None:
        if self._active_chart is not None:
            self._active_chart.touch()

    def _emit_audio_changed(self) -> None:
        chart = self._active_chart
        assert chart is not None
        chart.touch()
        self.events.emit(ChartEvent.AUDIO_TIMELINE_CHANGED, chart.audio_timeline)

    def _ensure_not_notifying(self) -> None:
        if self.events.is_emitting:
            raise RuntimeError("Chart mutation attempted from inside a change notification")


def interpolate_formations(
    start: Formation, end: Formation, t: float
) -> list[MemberPosition]:
    """Blend two formations at eased progress ``t`` in [0, 1].

    Covers the union of members: those in both formations are lerped
    (facing along the shortest arc), those in only one pass through.
    """
    end_by_member = {p.member_id: p for p in end.positions}
    result: list[MemberPosition] = []

    for a in start.positions:
        b = end_by_member.get(a.member_id)
        if b is None:
            result.append(a.model_copy())
            continue
        x, y = clamp_to_field(lerp(a.field_x, b.field_x, t), lerp(a.field_y, b.field_y, t))
        result.append(
            MemberPosition(
                member_id=a.member_id,
                field_x=x,
                field_y=y,
                facing_angle=lerp_angle(a.facing_angle, b.facing_angle, t),
            )
        )

    start_members = {p.member_id for p in start.positions}
    result.extend(p.model_copy() for p in end.positions if p.member_id not in start_members)
    return result


def _copy_positions(positions: list[MemberPosition]) -> list[MemberPosition]:
    return [p.model_copy() for p in positions]
