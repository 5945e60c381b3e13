"""Per-region presence state machine."""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from pybeacon.models.region import Region
from pybeacon.state.policy import is_expired

TransitionNotifier = Callable[[bool, Region], None]
"""Sink invoked as ``notifier(inside, region)`` once per transition."""


class InsideStatus(StrEnum):
    UNKNOWN = "unknown"
    INSIDE = "inside"
    OUTSIDE = "outside"


class RegionStateSnapshot(BaseModel):
    """Read-only view of a region's state."""

    model_config = ConfigDict(frozen=True)

    status: InsideStatus
    last_seen: float | None = None

    @property
    def is_inside(self) -> bool:
        return self.status is InsideStatus.INSIDE


class RegionState:
    """Debounced inside/outside tracking for one region.

    ``status`` starts as UNKNOWN and never returns to it.  Every method
    that changes ``status`` returns ``True`` so the owner can notify and
    persist; repeated confirmations of the current status return
    ``False``.
    """

    __slots__ = ("_last_seen", "_notifier", "_status")

    def __init__(
        self,
        notifier: TransitionNotifier,
        *,
        status: InsideStatus = InsideStatus.UNKNOWN,
        last_seen: float | None = None,
    ) -> None:
        self._notifier = notifier
        self._status = status
        self._last_seen = last_seen

    @property
    def status(self) -> InsideStatus:
        return self._status

    @property
    def last_seen(self) -> float | None:
        return self._last_seen

    @property
    def notifier(self) -> TransitionNotifier:
        return self._notifier

    @property
    def is_inside(self) -> bool:
        return self._status is InsideStatus.INSIDE

    def mark_seen(self, now: float) -> bool:
        """Record a matching sighting at *now*; True if this entered the region."""
        self._last_seen = now
        if self._status is InsideStatus.INSIDE:
            return False
        self._status = InsideStatus.INSIDE
        return True

    def check_expired(self, now: float, expiration_window: float) -> bool:
        """Flip to OUTSIDE once the region has gone unseen for too long."""
        if self._status is InsideStatus.OUTSIDE:
            return False
        # Never seen counts as expired.
        if not is_expired(now, self._last_seen, expiration_window):
            return False
        self._status = InsideStatus.OUTSIDE
        return True

    def notify(self, region: Region) -> None:
        """Deliver the current status for *region* to the notifier."""
        self._notifier(self.is_inside, region)

    def snapshot(self) -> RegionStateSnapshot:
        return RegionStateSnapshot(status=self._status, last_seen=self._last_seen)

    def __repr__(self) -> str:
        return f"RegionState(status={self._status.value!r}, last_seen={self._last_seen!r})"
