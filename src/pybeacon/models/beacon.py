"""Beacon sighting model."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from pybeacon.models._base import BeaconBaseModel, normalize_bluetooth_address, normalize_identifier


class Beacon(BeaconBaseModel):
    """A single beacon sighting as produced by a scanner.

    Parameters
    ----------
    identifiers : tuple of str
        Ordered beacon identifiers (e.g. proximity UUID, major, minor).
        Normalised to lower case.
    bluetooth_address : str or None
        Transmitter MAC address, upper case.
    rssi : int or None
        Received signal strength in dBm.
    tx_power : int or None
        Calibrated transmit power at one metre in dBm.
    """

    identifiers: tuple[str, ...] = Field(default_factory=tuple)
    bluetooth_address: str | None = None
    rssi: int | None = None
    tx_power: int | None = None

    @field_validator("identifiers", mode="before")
    @classmethod
    def _normalize_identifiers(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = (value,)
        if not isinstance(value, (list, tuple)):
            return value
        normalized: list[str] = []
        for item in value:
            ident = normalize_identifier(item)
            if ident is None:
                raise ValueError("beacon identifiers must be non-empty")
            normalized.append(ident)
        return tuple(normalized)

    @field_validator("bluetooth_address", mode="before")
    @classmethod
    def _normalize_address(cls, value: Any) -> Any:
        return normalize_bluetooth_address(value)

    def identifier(self, index: int) -> str | None:
        """Return identifier *index* or ``None`` when the beacon has fewer."""
        if 0 <= index < len(self.identifiers):
            return self.identifiers[index]
        return None
