"""Tests for traffic usage classification and display helpers."""

import pytest

from conftest import GIB
from domains.traffic.usage import (
    Bucket,
    ServerSnapshot,
    classify,
    format_bytes,
    obfuscate_name,
)


def _snapshot(outgoing, included, name="web-01"):
    return ServerSnapshot(
        id=1, name=name, status="running",
        outgoing_bytes=outgoing, included_bytes=included, credential="secret-token",
    )


class TestClassify:
    """Bucket assignment against notify/kill thresholds."""

    def test_over_kill_threshold(self):
        record = classify(_snapshot(92 * GIB, 100 * GIB), 50, 90)

        assert record.usage_percent == 92.00
        assert record.bucket is Bucket.KILL

    def test_over_notify_threshold(self):
        record = classify(_snapshot(60 * GIB, 100 * GIB), 50, 90)

        assert record.usage_percent == 60.00
        assert record.bucket is Bucket.NOTIFY

    def test_under_notify_threshold(self):
        record = classify(_snapshot(10 * GIB, 100 * GIB), 50, 90)
        assert record.bucket is Bucket.OK

    def test_raw_ratio_is_unrounded(self):
        record = classify(_snapshot(1, 3), 50, 90)

        assert record.raw_ratio == 1 / 3
        assert record.usage_percent == 33.33

    @pytest.mark.parametrize("outgoing,expected", [
        (49, Bucket.OK),
        (50, Bucket.NOTIFY),
        (89, Bucket.NOTIFY),
        (90, Bucket.KILL),
    ])
    def test_thresholds_are_inclusive(self, outgoing, expected):
        assert classify(_snapshot(outgoing, 100), 50, 90).bucket is expected

    def test_rounding_does_not_move_bucket(self):
        """89.999% rounds to 90.00 for display but stays NOTIFY."""
        record = classify(_snapshot(89_999, 100_000), 50, 90)

        assert record.usage_percent == 90.0
        assert record.bucket is Bucket.NOTIFY

    def test_buckets_are_monotonic(self):
        severity = {Bucket.OK: 0, Bucket.NOTIFY: 1, Bucket.KILL: 2}
        levels = [severity[classify(_snapshot(n, 200), 50, 90).bucket] for n in range(0, 400)]

        assert levels == sorted(levels)

    def test_zero_included_traffic_is_ok(self):
        record = classify(_snapshot(500 * GIB, 0), 50, 90)

        assert record.raw_ratio == 0
        assert record.usage_percent == 0
        assert record.bucket is Bucket.OK

    @pytest.mark.parametrize("junk", [None, "lots", float("nan"), -5])
    def test_malformed_counters_count_as_zero(self, junk):
        record = classify(_snapshot(junk, 100), 50, 90)

        assert record.outgoing_bytes == 0
        assert record.bucket is Bucket.OK

    def test_credential_carried_but_hidden(self):
        record = classify(_snapshot(1, 100), 50, 90)

        assert record.credential == "secret-token"
        assert "secret-token" not in repr(record)


class TestServerSnapshot:
    """Building snapshots from Hetzner payloads."""

    def test_from_api(self):
        snapshot = ServerSnapshot.from_api({
            "id": 7,
            "name": "db-1",
            "status": "running",
            "outgoing_traffic": 123,
            "included_traffic": 456,
        }, "tok")

        assert snapshot.id == 7
        assert snapshot.outgoing_bytes == 123
        assert snapshot.included_bytes == 456
        assert snapshot.credential == "tok"

    def test_missing_counters_default_to_zero(self):
        snapshot = ServerSnapshot.from_api(
            {"id": 7, "name": "db-1", "status": "off", "outgoing_traffic": None}, "tok"
        )

        assert snapshot.outgoing_bytes == 0
        assert snapshot.included_bytes == 0


class TestFormatBytes:

    def test_scales_to_largest_unit(self):
        assert format_bytes(512) == "512.000 B"
        assert format_bytes(1536) == "1.500 KB"
        assert format_bytes(20 * 1024 ** 4) == "20.000 TB"

    def test_fixed_unit(self):
        assert format_bytes(512 * GIB, "TB") == "0.500 TB"


class TestObfuscateName:

    def test_masks_interior(self):
        assert obfuscate_name("web-01") == "wXXXX1"

    def test_short_names_unchanged(self):
        assert obfuscate_name("ab") == "ab"
        assert obfuscate_name("") == ""

    def test_disabled(self):
        assert obfuscate_name("web-01", enabled=False) == "web-01"
