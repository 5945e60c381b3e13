from __future__ import annotations

import json

from pybeacon.models import Region
from pybeacon.state.codec import (
    SNAPSHOT_FORMAT,
    SNAPSHOT_VERSION,
    DecodeOutcome,
    decode_snapshot,
    encode_snapshot,
)
from pybeacon.state.region import InsideStatus, RegionStateSnapshot

UUID = "2f234454-cf6d-4a0f-adf2-f4911ba9ffa6"


def _states() -> dict[Region, RegionStateSnapshot]:
    return {
        Region(unique_id="lobby", identifiers=[UUID, "1"]): RegionStateSnapshot(
            status=InsideStatus.INSIDE, last_seen=1000.5
        ),
        Region(unique_id="dock", bluetooth_address="aa:bb:cc:dd:ee:ff"): RegionStateSnapshot(
            status=InsideStatus.OUTSIDE, last_seen=900.0
        ),
        Region(unique_id="new"): RegionStateSnapshot(status=InsideStatus.UNKNOWN),
    }


def test_encoded_snapshot_is_tagged_json() -> None:
    document = json.loads(encode_snapshot(_states()))

    assert document["format"] == SNAPSHOT_FORMAT
    assert document["version"] == SNAPSHOT_VERSION
    assert {entry["region"]["uniqueId"] for entry in document["regions"]} == {"lobby", "dock", "new"}
    lobby = next(entry for entry in document["regions"] if entry["region"]["uniqueId"] == "lobby")
    assert lobby["status"] == "inside"
    assert lobby["lastSeen"] == 1000.5


def test_decode_restores_equal_mapping() -> None:
    states = _states()
    result = decode_snapshot(encode_snapshot(states))

    assert result.outcome is DecodeOutcome.OK
    assert result.ok
    assert result.states == states


def test_decode_none_is_absent() -> None:
    result = decode_snapshot(None)

    assert result.outcome is DecodeOutcome.ABSENT
    assert result.states == {}


def test_decode_garbage_is_corrupt() -> None:
    for blob in (b"\x00\xff\xfe", b"{not json", b"[1, 2, 3]", b"42"):
        result = decode_snapshot(blob)
        assert result.outcome is DecodeOutcome.CORRUPT, blob
        assert result.states == {}


def test_decode_other_version_is_incompatible() -> None:
    document = json.loads(encode_snapshot(_states()))
    document["version"] = SNAPSHOT_VERSION + 1

    result = decode_snapshot(json.dumps(document).encode())

    assert result.outcome is DecodeOutcome.INCOMPATIBLE_VERSION
    assert result.states == {}
    assert "version=2" in result.detail


def test_decode_untagged_document_is_incompatible() -> None:
    result = decode_snapshot(b'{"regions": []}')

    assert result.outcome is DecodeOutcome.INCOMPATIBLE_VERSION


def test_decode_boolean_version_is_incompatible() -> None:
    result = decode_snapshot(json.dumps({"format": SNAPSHOT_FORMAT, "version": True, "regions": []}).encode())

    assert result.outcome is DecodeOutcome.INCOMPATIBLE_VERSION


def test_decode_bad_entry_is_corrupt() -> None:
    document = {
        "format": SNAPSHOT_FORMAT,
        "version": SNAPSHOT_VERSION,
        "regions": [{"region": {"uniqueId": "lobby"}, "status": "sideways"}],
    }

    result = decode_snapshot(json.dumps(document).encode())

    assert result.outcome is DecodeOutcome.CORRUPT
    assert result.states == {}


def test_decode_duplicate_regions_last_wins() -> None:
    document = {
        "format": SNAPSHOT_FORMAT,
        "version": SNAPSHOT_VERSION,
        "regions": [
            {"region": {"uniqueId": "lobby"}, "status": "inside", "lastSeen": 1.0},
            {"region": {"uniqueId": "lobby"}, "status": "outside", "lastSeen": 2.0},
        ],
    }

    result = decode_snapshot(json.dumps(document).encode())

    assert result.ok
    assert result.states == {
        Region(unique_id="lobby"): RegionStateSnapshot(status=InsideStatus.OUTSIDE, last_seen=2.0)
    }


def test_decode_deeply_nested_blob_is_corrupt() -> None:
    for blob in (b"[" * 200_000, b'{"a":' * 200_000):
        result = decode_snapshot(blob)
        assert result.outcome is DecodeOutcome.CORRUPT
        assert result.states == {}


def test_decode_non_finite_last_seen_is_corrupt() -> None:
    for value in ("NaN", "Infinity", "-Infinity"):
        blob = (
            '{"format": "pybeacon.monitoring", "version": 1, "regions": '
            f'[{{"region": {{"uniqueId": "lobby"}}, "status": "inside", "lastSeen": {value}}}]}}'
        ).encode()

        result = decode_snapshot(blob)

        assert result.outcome is DecodeOutcome.CORRUPT, value
        assert result.states == {}
