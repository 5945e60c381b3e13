from __future__ import annotations

from pybeacon.models import Region
from pybeacon.state.policy import elapsed_since, is_expired
from pybeacon.state.region import InsideStatus, RegionState

WINDOW = 10.0


def _state(calls: list[tuple[bool, Region]] | None = None) -> RegionState:
    sink = calls if calls is not None else []
    return RegionState(lambda inside, region: sink.append((inside, region)))


def test_new_state_is_unknown_and_never_seen() -> None:
    state = _state()

    assert state.status is InsideStatus.UNKNOWN
    assert state.last_seen is None
    assert not state.is_inside


def test_first_sighting_is_a_transition() -> None:
    state = _state()

    assert state.mark_seen(100.0) is True
    assert state.status is InsideStatus.INSIDE
    assert state.last_seen == 100.0


def test_repeated_sightings_only_refresh_last_seen() -> None:
    state = _state()
    state.mark_seen(100.0)

    assert state.mark_seen(105.0) is False
    assert state.mark_seen(108.0) is False
    assert state.last_seen == 108.0


def test_expiry_requires_gap_strictly_greater_than_window() -> None:
    state = _state()
    state.mark_seen(100.0)

    assert state.check_expired(100.0 + WINDOW, WINDOW) is False
    assert state.status is InsideStatus.INSIDE
    assert state.check_expired(100.0 + WINDOW + 0.001, WINDOW) is True
    assert state.status is InsideStatus.OUTSIDE


def test_outside_never_resignals() -> None:
    state = _state()
    state.mark_seen(100.0)
    assert state.check_expired(200.0, WINDOW) is True

    assert state.check_expired(300.0, WINDOW) is False
    assert state.check_expired(400.0, WINDOW) is False


def test_never_seen_region_becomes_outside_on_first_check() -> None:
    state = _state()

    assert state.check_expired(0.0, WINDOW) is True
    assert state.status is InsideStatus.OUTSIDE
    assert state.check_expired(1.0, WINDOW) is False


def test_sighting_after_exit_reenters() -> None:
    state = _state()
    state.mark_seen(100.0)
    state.check_expired(200.0, WINDOW)

    assert state.mark_seen(201.0) is True
    assert state.status is InsideStatus.INSIDE


def test_notify_reports_current_status() -> None:
    calls: list[tuple[bool, Region]] = []
    state = _state(calls)
    region = Region(unique_id="lobby")

    state.mark_seen(1.0)
    state.notify(region)
    state.check_expired(100.0, WINDOW)
    state.notify(region)

    assert calls == [(True, region), (False, region)]


def test_snapshot_is_detached_copy() -> None:
    state = _state()
    state.mark_seen(5.0)
    snap = state.snapshot()
    state.check_expired(100.0, WINDOW)

    assert snap.status is InsideStatus.INSIDE
    assert snap.last_seen == 5.0
    assert snap.is_inside


def test_policy_helpers() -> None:
    assert elapsed_since(10.0, None) is None
    assert elapsed_since(10.0, 4.0) == 6.0
    assert is_expired(10.0, None, 100.0) is True
    assert is_expired(10.0, 4.0, 6.0) is False
    assert is_expired(10.0, 4.0, 5.9) is True
