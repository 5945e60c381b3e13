"""pybeacon - Beacon region monitoring with durable enter/exit state."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pybeacon")
except PackageNotFoundError:
    __version__ = "0+local"
from pybeacon.config import MonitoringConfig
from pybeacon.exceptions import BeaconConfigError, BeaconError, SnapshotError, StateStoreError
from pybeacon.models import Beacon, Region
from pybeacon.registry import RegionRegistry
from pybeacon.state import (
    DecodeOutcome,
    FileStateStore,
    InsideStatus,
    MemoryStateStore,
    RegionStateSnapshot,
    StateStore,
    TransitionNotifier,
)

__all__ = [
    "__version__",
    "Beacon",
    "BeaconConfigError",
    "BeaconError",
    "DecodeOutcome",
    "FileStateStore",
    "InsideStatus",
    "MemoryStateStore",
    "MonitoringConfig",
    "Region",
    "RegionRegistry",
    "RegionStateSnapshot",
    "SnapshotError",
    "StateStore",
    "StateStoreError",
    "TransitionNotifier",
]
