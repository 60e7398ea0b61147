"""ScoringEngine - grades a performance run of a chart.

Lifecycle::

    IDLE --begin_evaluation--> EVALUATING --finalize/cancel--> IDLE

Frames are buffered while evaluating; a running score is published after
each one. Two formation formulas coexist on purpose: the running score
is a linear penalty on raw yards (cheap live estimate) while the final
formation score penalises the ratio to the error threshold, capped at 5x.
"""

from __future__ import annotations

from enum import Enum
import logging

import numpy as np

from drillbook.core.config.models import ScoringConfig
from drillbook.core.drill.models import Chart
from drillbook.core.events import EventBus, Handler, ScoringEvent, Subscription
from drillbook.core.roster.models import Roster, SkillType
from drillbook.core.scoring.models import (
    ScoringFrame,
    ScoringNote,
    ShowScore,
    calculate_grade,
)
from drillbook.core.utils.math import clamp, safe_mean

logger = logging.getLogger(__name__)

# Formation score stops penalising beyond this multiple of the threshold.
ERROR_RATIO_CAP = 5.0
# Notable-event trigger, as a multiple of the position threshold.
NOTABLE_ERROR_MULTIPLE = 3.0
# Adjacent sets closer than this many beats count as a hard transition.
SHORT_TRANSITION_BEATS = 8.0
# Share of the difficulty bonus added on top of the weighted sum.
DIFFICULTY_BONUS_SHARE = 0.2


class EvaluationState(str, Enum):
    IDLE = "idle"
    EVALUATING = "evaluating"


class ScoringEngine:
    """Aggregates ScoringFrames into a ShowScore.

    Args:
        config: Rubric weights and thresholds (defaults if None)
        events: Bus for running-score and notable-event notifications

    Example:
        >>> engine = ScoringEngine()
        >>> engine.begin_evaluation(chart, roster)
        >>> for frame in frames:
        ...     engine.record_frame(frame)
        >>> engine.finalize_evaluation().grade
        'B+'
    """

    def __init__(self, config: ScoringConfig | None = None, events: EventBus | None = None) -> None:
        self.config = config or ScoringConfig()
        self.events = events or EventBus()

        if not self.config.weights_balanced:
            logger.warning(
                "Scoring weights sum to %.3f, expected 1.0; overall scores will be skewed",
                self.config.weight_total,
            )

        self._state = EvaluationState.IDLE
        self._chart: Chart | None = None
        self._roster: Roster | None = None
        self._frames: list[ScoringFrame] = []
        self._notes: list[ScoringNote] = []
        self._running_score = 100.0

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> EvaluationState:
        return self._state

    @property
    def is_evaluating(self) -> bool:
        return self._state is EvaluationState.EVALUATING

    @property
    def running_score(self) -> float:
        return self._running_score

    @property
    def frame_count(self) -> int:
        return len(self._frames)

    @property
    def notes(self) -> list[ScoringNote]:
        return list(self._notes)

    def on_running_score(self, handler: Handler) -> Subscription:
        """Call ``handler(score)`` after every recorded frame."""
        return self.events.subscribe(ScoringEvent.RUNNING_SCORE_UPDATED, handler)

    def on_notable_event(self, handler: Handler) -> Subscription:
        """Call ``handler(note)`` whenever a notable moment is logged."""
        return self.events.subscribe(ScoringEvent.NOTABLE_EVENT, handler)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def begin_evaluation(self, chart: Chart | None, roster: Roster | None) -> None:
        """Start a run, discarding anything left from a previous one."""
        if self.is_evaluating:
            logger.warning("begin_evaluation while already evaluating; restarting")

        self._chart = chart
        self._roster = roster
        self._frames = []
        self._notes = []
        self._running_score = 100.0
        self._state = EvaluationState.EVALUATING
        logger.info(
            "Evaluation started for chart %s",
            chart.id if chart is not None else "<none>",
        )

    def record_frame(self, frame: ScoringFrame) -> None:
        """Buffer a frame and publish the updated running score. Ignored when idle."""
        if not self.is_evaluating:
            logger.debug("record_frame ignored: no evaluation in progress")
            return

        self._frames.append(frame)

        notable_limit = self.config.position_error_threshold * NOTABLE_ERROR_MULTIPLE
        for snapshot in frame.member_snapshots:
            if snapshot.position_error > notable_limit:
                note = ScoringNote(
                    at_beat=frame.beat,
                    category="Formation",
                    description="Member significantly out of position",
                    impact=-snapshot.position_error,
                )
                self._notes.append(note)
                self.events.emit(ScoringEvent.NOTABLE_EVENT, note)

        self._running_score = self._calculate_running_score()
        self.events.emit(ScoringEvent.RUNNING_SCORE_UPDATED, self._running_score)

    def finalize_evaluation(self) -> ShowScore:
        """Compute the final score and return to idle.

        Returns:
            The graded ShowScore, or an empty default score (grade "F")
            if no evaluation was in progress
        """
        if not self.is_evaluating:
            logger.warning("finalize_evaluation called with no evaluation in progress")
            return ShowScore()

        self._state = EvaluationState.IDLE

        cfg = self.config
        formation = self.calculate_formation_score()
        music = self.calculate_music_score()
        showmanship = self.calculate_showmanship_score()
        bonus = self.calculate_difficulty_bonus()

        weighted = (
            formation * cfg.formation_weight
            + music * cfg.music_weight
            + showmanship * cfg.showmanship_weight
            + bonus * cfg.difficulty_weight
        )
        overall = clamp(weighted + bonus * DIFFICULTY_BONUS_SHARE, 0.0, 100.0)

        score = ShowScore(
            overall_score=overall,
            formation_score=formation,
            music_score=music,
            showmanship_score=showmanship,
            difficulty_bonus=bonus,
            grade=calculate_grade(overall),
            notes=tuple(self._notes),
        )
        logger.info(
            "Evaluation finished: %.1f (%s) over %d frames",
            overall,
            score.grade,
            len(self._frames),
        )
        return score

    def cancel_evaluation(self) -> None:
        """Abort the run, discarding buffered frames and notes."""
        self._state = EvaluationState.IDLE
        self._frames.clear()
        self._notes.clear()
        logger.info("Evaluation cancelled")

    # ------------------------------------------------------------------
    # Sub-scores
    # ------------------------------------------------------------------

    def calculate_formation_score(self) -> float:
        errors = self._position_errors()
        if errors.size == 0:
            return 100.0
        ratios = np.minimum(errors / self.config.position_error_threshold, ERROR_RATIO_CAP)
        return clamp(100.0 - float(np.mean(ratios)) * 20.0, 0.0, 100.0)

    def calculate_music_score(self) -> float:
        if self._roster is None:
            return 50.0

        musicianship = self._roster.average_skill(SkillType.MUSICIANSHIP)
        quality = safe_mean(
            [s.playing_quality for f in self._frames for s in f.member_snapshots],
            default=0.5,
        )
        return (musicianship * 0.6 + quality * 0.4) * 100.0

    def calculate_showmanship_score(self) -> float:
        if self._roster is None:
            return 50.0

        showmanship = self._roster.average_skill(SkillType.SHOWMANSHIP)
        complexity = 0.0
        if self._chart is not None:
            complexity = min(self._chart.formation_count * 2.0, 15.0)
        return clamp(showmanship * 85.0 + complexity, 0.0, 100.0)

    def calculate_difficulty_bonus(self) -> float:
        if self._chart is None:
            return 0.0

        formations = self._chart.formations
        bonus = min(len(formations) * 1.5, 10.0)
        for prev, curr in zip(formations, formations[1:]):
            if curr.start_beat - prev.hold_end_beat < SHORT_TRANSITION_BEATS:
                bonus += 1.0
        return clamp(bonus, 0.0, self.config.max_difficulty_bonus)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _position_errors(self) -> np.ndarray:
        return np.array(
            [s.position_error for f in self._frames for s in f.member_snapshots],
            dtype=float,
        )

    def _calculate_running_score(self) -> float:
        errors = self._position_errors()
        if errors.size == 0:
            return 100.0
        return clamp(100.0 - float(np.mean(errors)) * 20.0, 0.0, 100.0)
