"""Region registry: owns every region state, dispatches sightings and
sweeps, and persists the whole map as one snapshot blob."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

from pybeacon.config import DEFAULT_EXPIRATION_WINDOW, DEFAULT_STATE_NAME, MonitoringConfig
from pybeacon.exceptions import SnapshotError, StateStoreError
from pybeacon.models.beacon import Beacon
from pybeacon.models.region import Region
from pybeacon.state.codec import DecodeOutcome, DecodeResult, decode_snapshot, encode_snapshot
from pybeacon.state.region import RegionState, RegionStateSnapshot, TransitionNotifier
from pybeacon.state.storage import FileStateStore, StateStore

_logger = logging.getLogger(__name__)


class RegionRegistry:
    """Thread-safe map of monitored regions to their presence state.

    Usage::

        registry = RegionRegistry(FileStateStore(state_dir), on_transition)
        registry.add(Region(unique_id="lobby", identifiers=[uuid, None, None]))
        registry.dispatch_sighting(beacon)     # from the scanner
        registry.sweep_expired()               # from a timer

    Every public method holds one re-entrant lock for its whole
    duration, including notifier calls and the snapshot save, so a
    transition is computed, delivered and persisted as one unit.
    """

    def __init__(
        self,
        store: StateStore,
        notifier: TransitionNotifier,
        *,
        expiration_window: float = DEFAULT_EXPIRATION_WINDOW,
        state_name: str = DEFAULT_STATE_NAME,
        clock: Callable[[], float] = time.time,
        persistence_enabled: bool = True,
        autosave: bool = True,
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._expiration_window = expiration_window
        self._state_name = state_name
        self._clock = clock
        self._persistence_enabled = persistence_enabled
        self._autosave = autosave
        self._lock = threading.RLock()
        self._states: dict[Region, RegionState] = {}
        self._count = 0
        if self._persistence_enabled:
            self.restore()

    @classmethod
    def from_config(
        cls,
        config: MonitoringConfig,
        notifier: TransitionNotifier,
        *,
        store: StateStore | None = None,
        clock: Callable[[], float] = time.time,
    ) -> RegionRegistry:
        """Build a registry from *config*, defaulting to a file store under ``config.state_dir``."""
        return cls(
            store if store is not None else FileStateStore(config.state_dir),
            notifier,
            expiration_window=config.expiration_window,
            state_name=config.state_name,
            clock=clock,
            persistence_enabled=config.persistence_enabled,
            autosave=config.autosave,
        )

    @property
    def expiration_window(self) -> float:
        return self._expiration_window

    @property
    def persistence_enabled(self) -> bool:
        with self._lock:
            return self._persistence_enabled

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add(self, region: Region) -> None:
        """Start monitoring *region*.  Re-adding a monitored region is a no-op."""
        with self._lock:
            if region in self._states:
                return
            self._states[region] = RegionState(self._notifier)
            self._count += 1
            _logger.debug("Monitoring region %s (%d total)", region, self._count)
            self._autosave_if_on()

    def remove(self, region: Region) -> None:
        """Stop monitoring *region*.  Unknown regions are ignored."""
        with self._lock:
            if self._states.pop(region, None) is None:
                return
            self._count -= 1
            _logger.debug("Stopped monitoring region %s (%d total)", region, self._count)
            self._autosave_if_on()

    def count(self) -> int:
        with self._lock:
            return self._count

    def regions_snapshot(self) -> frozenset[Region]:
        """Point-in-time copy of the monitored regions."""
        with self._lock:
            return frozenset(self._states)

    def state_of(self, region: Region) -> RegionStateSnapshot | None:
        with self._lock:
            state = self._states.get(region)
            return state.snapshot() if state is not None else None

    def __contains__(self, region: object) -> bool:
        with self._lock:
            return region in self._states

    def __len__(self) -> int:
        return self.count()

    # ------------------------------------------------------------------
    # Sightings and sweeps
    # ------------------------------------------------------------------

    def dispatch_sighting(self, beacon: Beacon) -> None:
        """Mark every region matching *beacon* as seen and notify entries."""
        with self._lock:
            now = self._clock()
            needs_saving = False
            # A beacon can match several overlapping regions; check them all.
            for region, state in self._states.items():
                if not region.matches(beacon):
                    continue
                if state.mark_seen(now):
                    needs_saving = True
                    _logger.debug("Entered region %s", region)
                    self._notify(region, state)
            if needs_saving:
                self._autosave_if_on()

    def sweep_expired(self, now: float | None = None) -> None:
        """Flip regions unseen for longer than the expiration window to outside."""
        with self._lock:
            if now is None:
                now = self._clock()
            needs_saving = False
            for region, state in self._states.items():
                if state.check_expired(now, self._expiration_window):
                    needs_saving = True
                    _logger.debug("Found a region that expired: %s", region)
                    self._notify(region, state)
            if needs_saving:
                self._autosave_if_on()

    def _notify(self, region: Region, state: RegionState) -> None:
        try:
            state.notify(region)
        except Exception:
            _logger.warning("Transition notifier failed for region %s", region, exc_info=True)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self) -> None:
        """Persist every region state.  Failures are logged, never raised."""
        with self._lock:
            if not self._persistence_enabled:
                return
            try:
                blob = encode_snapshot({region: state.snapshot() for region, state in self._states.items()})
                self._store.save(self._state_name, blob)
            except (SnapshotError, StateStoreError) as exc:
                _logger.error("Error while saving monitored region states: %s", exc)
                return
            except Exception:
                _logger.exception("Unexpected error while saving monitored region states")
                return
            _logger.debug("Saved %d region states to %r", len(self._states), self._state_name)

    def restore(self) -> DecodeOutcome:
        """Merge the persisted snapshot into the live map.

        Called on construction.  Returns how decoding went; anything but
        ``OK`` leaves the map untouched.  A store read failure is reported
        as ``CORRUPT``.
        """
        with self._lock:
            if not self._persistence_enabled:
                return DecodeOutcome.ABSENT
            try:
                blob = self._store.load(self._state_name)
            except StateStoreError as exc:
                _logger.error("Error while reading monitored region states: %s", exc)
                return DecodeOutcome.CORRUPT
            except Exception:
                _logger.exception("Unexpected error while reading monitored region states")
                return DecodeOutcome.CORRUPT

            result = decode_snapshot(blob)
            self._log_restore(result)
            if not result.ok:
                return result.outcome

            for region, snapshot in result.states.items():
                self._states[region] = RegionState(
                    self._notifier,
                    status=snapshot.status,
                    last_seen=snapshot.last_seen,
                )
            self._count = len(self._states)
            return result.outcome

    def _log_restore(self, result: DecodeResult) -> None:
        if result.outcome is DecodeOutcome.OK:
            _logger.debug("Restored %d region states from %r", len(result.states), self._state_name)
        elif result.outcome is DecodeOutcome.ABSENT:
            _logger.debug("No saved monitoring state %r", self._state_name)
        elif result.outcome is DecodeOutcome.INCOMPATIBLE_VERSION:
            _logger.debug("Saved monitoring state has incompatible format (%s); ignoring it", result.detail)
        else:
            _logger.error("Saved monitoring state is corrupt (%s); ignoring it", result.detail)

    def disable_persistence(self) -> None:
        """Delete the saved snapshot and stop saving for the rest of this registry's life."""
        with self._lock:
            try:
                self._store.delete(self._state_name)
            except StateStoreError as exc:
                _logger.error("Error while deleting monitored region states: %s", exc)
            except Exception:
                _logger.exception("Unexpected error while deleting monitored region states")
            self._persistence_enabled = False

    def _autosave_if_on(self) -> None:
        if self._autosave:
            self.save()
