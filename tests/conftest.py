"""Shared pytest fixtures for drillbook tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from drillbook.core.drill.models import Chart, Formation
from drillbook.core.drill.store import FormationStore
from drillbook.core.events import ChartEvent
from drillbook.core.roster.models import BandMember, InstrumentType, MemberStatus, Roster

# ============================================================================
# Path Fixtures
# ============================================================================


@pytest.fixture
def project_root() -> Path:
    """Get project root directory."""
    return Path(__file__).parent.parent


# ============================================================================
# Store Fixtures
# ============================================================================


@pytest.fixture
def store() -> FormationStore:
    """FormationStore with an empty active chart."""
    s = FormationStore()
    s.create_chart("Test Show", "song-1")
    return s


@pytest.fixture
def two_sets(store: FormationStore) -> tuple[Formation, Formation]:
    """Two formations with one shared member: A holds 0-4, B arrives at 8.

    Member ``m1`` moves from (40, 26.67) to (60, 26.67).
    """
    a = store.add_formation(0, 4, "A")
    b = store.add_formation(8, 4, "B")
    assert a is not None and b is not None
    store.set_member_position(a.id, "m1", (40.0, 26.67), 0.0)
    store.set_member_position(b.id, "m1", (60.0, 26.67), 0.0)
    return a, b


@pytest.fixture
def event_log(store: FormationStore) -> list[tuple[str, object]]:
    """Records every chart event emitted by ``store`` as (event, payload)."""
    log: list[tuple[str, object]] = []
    for event in ChartEvent:
        store.subscribe(event, lambda *args, _e=event: log.append((_e.value, args[0] if args else None)))
    return log


# ============================================================================
# Roster Fixtures
# ============================================================================


def make_member(member_id: str, **overrides) -> BandMember:
    """Build a BandMember with sensible defaults."""
    data = {
        "id": member_id,
        "first_name": member_id.upper(),
        "last_name": "Test",
        "instrument": InstrumentType.TRUMPET,
    }
    data.update(overrides)
    return BandMember(**data)


@pytest.fixture
def member_factory():
    """Expose ``make_member`` to tests."""
    return make_member


@pytest.fixture
def skilled_roster() -> Roster:
    """Four active members with every skill at 0.8, plus one injured novice."""
    skills = {"musicianship": 0.8, "marching": 0.8, "stamina": 0.8, "showmanship": 0.8}
    members = [make_member(f"m{i}", **skills) for i in range(1, 5)]
    members.append(
        make_member("hurt", status=MemberStatus.INJURED, musicianship=0.0, showmanship=0.0)
    )
    return Roster(school_id="school-1", members=members)


@pytest.fixture
def sample_chart(two_sets: tuple[Formation, Formation], store: FormationStore) -> Chart:
    """The store's active chart after ``two_sets`` is applied."""
    assert store.active_chart is not None
    return store.active_chart
