"""Traffic usage classification.

Turns raw Hetzner traffic counters into usage records and sorts each server
into a bucket. Classification always works on raw byte counts; the rounded
percentage and formatted byte strings are for display only.
"""

import math
from dataclasses import dataclass, field
from enum import Enum

from .config import BYTE_UNITS, OBFUSCATION_CHAR


class Bucket(Enum):
    """Severity of a server's traffic usage."""
    OK = "ok"
    NOTIFY = "notify"
    KILL = "kill"


@dataclass
class ServerSnapshot:
    """One server's counters as returned by the Hetzner API."""
    id: int
    name: str
    status: str
    outgoing_bytes: float
    included_bytes: float
    credential: str = field(default="", repr=False)

    @classmethod
    def from_api(cls, payload: dict, credential: str) -> "ServerSnapshot":
        """Build a snapshot from a Hetzner server object."""
        return cls(
            id=payload.get("id"),
            name=payload.get("name") or str(payload.get("id")),
            status=payload.get("status") or "unknown",
            outgoing_bytes=_to_bytes(payload.get("outgoing_traffic")),
            included_bytes=_to_bytes(payload.get("included_traffic")),
            credential=credential,
        )


@dataclass
class UsageRecord:
    """A classified server for one check cycle."""
    id: int
    name: str
    status: str
    outgoing_bytes: float
    included_bytes: float
    usage_percent: float
    raw_ratio: float
    bucket: Bucket
    credential: str = field(default="", repr=False)


def _to_bytes(value) -> float:
    """Coerce a counter to a non-negative number, treating junk as zero."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(number) or number < 0:
        return 0
    return number


def classify(snapshot: ServerSnapshot, threshold_notify: float, threshold_kill: float) -> UsageRecord:
    """Classify a server's traffic usage against notify and kill thresholds.

    Args:
        snapshot: Raw counters for one server
        threshold_notify: Notify threshold in percent
        threshold_kill: Kill threshold in percent

    Returns:
        UsageRecord with the bucket decided on the unrounded ratio.
        Thresholds are inclusive.
    """
    outgoing = _to_bytes(snapshot.outgoing_bytes)
    included = _to_bytes(snapshot.included_bytes)
    raw_ratio = outgoing / included if included > 0 else 0

    if raw_ratio >= threshold_kill / 100:
        bucket = Bucket.KILL
    elif raw_ratio >= threshold_notify / 100:
        bucket = Bucket.NOTIFY
    else:
        bucket = Bucket.OK

    return UsageRecord(
        id=snapshot.id,
        name=snapshot.name,
        status=snapshot.status,
        outgoing_bytes=outgoing,
        included_bytes=included,
        usage_percent=round(raw_ratio * 100, 2),
        raw_ratio=raw_ratio,
        bucket=bucket,
        credential=snapshot.credential,
    )


def format_bytes(value: float, unit: str | None = None) -> str:
    """Format a byte count for display.

    Scales by 1024 to the largest fitting unit, or to ``unit`` when given.
    """
    value = _to_bytes(value)

    if unit in BYTE_UNITS:
        return f"{value / 1024 ** BYTE_UNITS.index(unit):.3f} {unit}"

    i = 0
    while value >= 1024 and i < len(BYTE_UNITS) - 1:
        value /= 1024
        i += 1
    return f"{value:.3f} {BYTE_UNITS[i]}"


def obfuscate_name(name: str, enabled: bool = True) -> str:
    """Mask the interior of a server name, e.g. ``web-01`` -> ``wXXXX1``."""
    if not enabled or not name or len(name) <= 2:
        return name
    return f"{name[0]}{OBFUSCATION_CHAR * (len(name) - 2)}{name[-1]}"
