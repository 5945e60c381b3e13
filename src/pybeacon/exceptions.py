"""Custom exception hierarchy for pybeacon."""

from __future__ import annotations


class BeaconError(Exception):
    """Base exception for all pybeacon errors."""


class BeaconConfigError(BeaconError):
    """Invalid or missing configuration."""


class StateStoreError(BeaconError):
    """Durable blob store failure (read, write or delete)."""

    def __init__(
        self,
        message: str,
        *,
        name: str = "",
    ) -> None:
        self.name = name
        super().__init__(message)


class SnapshotError(BeaconError):
    """A monitoring snapshot could not be encoded.

    Decoding never raises; it reports a
    :class:`~pybeacon.state.codec.DecodeOutcome` instead.
    """
