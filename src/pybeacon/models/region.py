"""Monitored region model."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from pybeacon.models._base import BeaconBaseModel, normalize_bluetooth_address, normalize_identifier
from pybeacon.models.beacon import Beacon


class Region(BeaconBaseModel):
    """A set of beacons treated as one monitored area.

    Regions are frozen and compare by value, so a region rebuilt by the
    application after a restart is the same dictionary key as the one
    decoded from the persisted snapshot.

    Parameters
    ----------
    unique_id : str
        Application-chosen name for the region.
    identifiers : tuple of (str or None)
        Identifier constraints by position.  ``None`` matches any value.
    bluetooth_address : str or None
        Restrict the region to a single transmitter.
    """

    unique_id: str
    identifiers: tuple[str | None, ...] = Field(default_factory=tuple)
    bluetooth_address: str | None = None

    @field_validator("unique_id")
    @classmethod
    def _normalize_unique_id(cls, value: str) -> str:
        unique_id = value.strip()
        if not unique_id:
            raise ValueError("unique_id must be non-empty")
        return unique_id

    @field_validator("identifiers", mode="before")
    @classmethod
    def _normalize_identifiers(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = (value,)
        if not isinstance(value, (list, tuple)):
            return value
        return tuple(normalize_identifier(item) for item in value)

    @field_validator("bluetooth_address", mode="before")
    @classmethod
    def _normalize_address(cls, value: Any) -> Any:
        return normalize_bluetooth_address(value)

    def matches(self, beacon: Beacon) -> bool:
        """Return True if *beacon* belongs to this region.

        Every non-wildcard identifier must equal the beacon identifier
        at the same position; a beacon with fewer identifiers than a
        constrained position never matches.
        """
        for index, wanted in enumerate(self.identifiers):
            if wanted is None:
                continue
            if beacon.identifier(index) != wanted:
                return False
        if self.bluetooth_address is not None and self.bluetooth_address != beacon.bluetooth_address:
            return False
        return True

    def __str__(self) -> str:
        parts = [f"id{index + 1}: {ident or '*'}" for index, ident in enumerate(self.identifiers)]
        if self.bluetooth_address:
            parts.append(f"mac: {self.bluetooth_address}")
        return f"{self.unique_id} [{' '.join(parts)}]"
