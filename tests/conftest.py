from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from pybeacon.models import Beacon, Region

UUID = "2f234454-cf6d-4a0f-adf2-f4911ba9ffa6"


@dataclass
class FakeClock:
    now: float = 1_767_225_600.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@dataclass
class RecordingNotifier:
    calls: list[tuple[bool, Region]] = field(default_factory=list)

    def __call__(self, inside: bool, region: Region) -> None:
        self.calls.append((inside, region))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def lobby() -> Region:
    return Region(unique_id="lobby", identifiers=[UUID, "1", None])


@pytest.fixture
def whole_site() -> Region:
    return Region(unique_id="site", identifiers=[UUID])


@pytest.fixture
def lobby_beacon() -> Beacon:
    return Beacon(identifiers=[UUID, "1", "7"], bluetooth_address="aa:bb:cc:dd:ee:01", rssi=-60)


@pytest.fixture
def kitchen_beacon() -> Beacon:
    return Beacon(identifiers=[UUID, "2", "3"], bluetooth_address="aa:bb:cc:dd:ee:02", rssi=-70)
