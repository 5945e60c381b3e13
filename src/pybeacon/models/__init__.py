"""Value models for beacons and monitored regions."""

from pybeacon.models._base import BeaconBaseModel, normalize_bluetooth_address, normalize_identifier
from pybeacon.models.beacon import Beacon
from pybeacon.models.region import Region

__all__ = [
    "Beacon",
    "BeaconBaseModel",
    "Region",
    "normalize_bluetooth_address",
    "normalize_identifier",
]
