"""Region state layer.

Holds the per-region debounce state machine, the pure expiry policy, the
versioned snapshot codec and the blob stores the registry persists to.
"""

from pybeacon.state.codec import DecodeOutcome, DecodeResult, decode_snapshot, encode_snapshot
from pybeacon.state.region import InsideStatus, RegionState, RegionStateSnapshot, TransitionNotifier
from pybeacon.state.storage import FileStateStore, MemoryStateStore, StateStore

__all__ = [
    "DecodeOutcome",
    "DecodeResult",
    "FileStateStore",
    "InsideStatus",
    "MemoryStateStore",
    "RegionState",
    "RegionStateSnapshot",
    "StateStore",
    "TransitionNotifier",
    "decode_snapshot",
    "encode_snapshot",
]
