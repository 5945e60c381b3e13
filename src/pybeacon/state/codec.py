"""Versioned encoding of the monitoring snapshot.

The snapshot is a JSON document tagged with a format name and schema
version::

    {
        "format": "pybeacon.monitoring",
        "version": 1,
        "regions": [
            {"region": {"uniqueId": "lobby", ...}, "status": "inside", "lastSeen": 1767225600.0}
        ]
    }

Decoding never raises.  Callers branch on :class:`DecodeOutcome`.
"""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping
from enum import StrEnum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from pybeacon.exceptions import SnapshotError
from pybeacon.models.region import Region
from pybeacon.state.region import InsideStatus, RegionStateSnapshot

SNAPSHOT_FORMAT = "pybeacon.monitoring"
SNAPSHOT_VERSION = 1


class DecodeOutcome(StrEnum):
    OK = "ok"
    ABSENT = "absent"
    INCOMPATIBLE_VERSION = "incompatible_version"
    CORRUPT = "corrupt"


@dataclasses.dataclass(frozen=True)
class DecodeResult:
    """Result of :func:`decode_snapshot`.

    ``states`` is empty unless ``outcome`` is ``OK``.  ``detail`` is a
    short human-readable reason for log messages.
    """

    outcome: DecodeOutcome
    states: dict[Region, RegionStateSnapshot] = dataclasses.field(default_factory=dict)
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.outcome is DecodeOutcome.OK


class _SnapshotEntry(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True, alias_generator=to_camel)

    region: Region
    status: InsideStatus
    last_seen: Annotated[float, Field(allow_inf_nan=False)] | None = None


class _Snapshot(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True, alias_generator=to_camel)

    format: str = SNAPSHOT_FORMAT
    version: int = SNAPSHOT_VERSION
    regions: list[_SnapshotEntry] = Field(default_factory=list)


def encode_snapshot(states: Mapping[Region, RegionStateSnapshot]) -> bytes:
    """Encode a region to state mapping into snapshot bytes."""
    try:
        snapshot = _Snapshot(
            regions=[
                _SnapshotEntry(region=region, status=state.status, last_seen=state.last_seen)
                for region, state in states.items()
            ]
        )
        return snapshot.model_dump_json(by_alias=True).encode("utf-8")
    except (ValidationError, ValueError, TypeError) as exc:
        raise SnapshotError(f"Could not encode monitoring snapshot: {exc}") from exc


def _is_compatible(document: dict[str, Any]) -> bool:
    version = document.get("version")
    if isinstance(version, bool) or not isinstance(version, int):
        return False
    return document.get("format") == SNAPSHOT_FORMAT and version == SNAPSHOT_VERSION


def decode_snapshot(blob: bytes | None) -> DecodeResult:
    """Decode snapshot bytes produced by :func:`encode_snapshot`."""
    if blob is None:
        return DecodeResult(DecodeOutcome.ABSENT)

    try:
        document = json.loads(blob)
    except (ValueError, TypeError, RecursionError) as exc:
        return DecodeResult(DecodeOutcome.CORRUPT, detail=f"not JSON: {exc}")

    if not isinstance(document, dict):
        return DecodeResult(DecodeOutcome.CORRUPT, detail=f"expected object, got {type(document).__name__}")

    if not _is_compatible(document):
        return DecodeResult(
            DecodeOutcome.INCOMPATIBLE_VERSION,
            detail=f"format={document.get('format')!r} version={document.get('version')!r}",
        )

    try:
        snapshot = _Snapshot.model_validate(document)
    except ValidationError as exc:
        return DecodeResult(DecodeOutcome.CORRUPT, detail=f"{exc.error_count()} validation error(s)")
    except RecursionError:
        return DecodeResult(DecodeOutcome.CORRUPT, detail="nesting too deep")

    # Duplicate regions: the last entry wins.
    states = {
        entry.region: RegionStateSnapshot(status=entry.status, last_seen=entry.last_seen)
        for entry in snapshot.regions
    }
    return DecodeResult(DecodeOutcome.OK, states=states)
