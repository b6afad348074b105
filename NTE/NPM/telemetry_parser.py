# =============================================================================
# telemetry_parser.py — Time-Sliced Telemetry Parser
# =============================================================================
#
# Parses time_sliced_data.txt into one DeviceSnapshot per device index.
#
# File format
# -----------
#   # Time-sliced neural activity data          <- comment, ignored
#   device,channel,a0,a1,a2,a3,a4,freq,phase    <- basic scheme (>= 9 fields)
#   device,channel,a0,a1,a2,a3,a4,freq,p0..p4   <- rich scheme  (>= 12 fields)
#
# A 12-field rich line carries only four phase readings (p0..p3).  Missing
# trailing phases carry the last reading forward, so slice 4 reuses p3.
#
# Line policy
# -----------
#   too few fields                 -> skipped
#   device index outside 0..11     -> skipped
#   any non-finite numeric field   -> skipped (no NaN ever reaches a sample)
#
# Skipped lines are counted in ParseResult; the parser never raises on a bad
# line.  Device order in the output is the first-seen order of device indices.
# =============================================================================

from __future__ import annotations
import math
from typing import NamedTuple

from NTE.NMM.constants import (
    NUM_SLICES, MAX_DEVICES, MIN_DEVICE_INDEX, MAX_DEVICE_INDEX,
    SCHEME_BASIC, SCHEME_RICH, SCHEMES,
    BASIC_MIN_FIELDS, RICH_MIN_FIELDS,
    FIELD_DEVICE, FIELD_CHANNEL, FIELD_ACTIVITY, FIELD_FREQUENCY, FIELD_PHASE,
    COMMENT_PREFIX,
)


class ChannelSample(NamedTuple):
    device:      int
    channel:     int
    slice_index: int
    activity:    float      # 0..1
    frequency:   float
    phase:       float

    @property
    def activity_level(self) -> float:
        """Activity as a percentage (0..100)."""
        return self.activity * 100

    def to_dict(self) -> dict:
        return {
            "id":            self.channel,
            "activity":      self.activity,
            "activityLevel": self.activity_level,
            "frequency":     self.frequency,
            "phase":         self.phase,
            "sliceIndex":    self.slice_index,
            "changed":       self.activity > 0,
        }


class DeviceSnapshot(NamedTuple):
    id:              int
    slices:          tuple[tuple[ChannelSample, ...], ...]   # NUM_SLICES buckets
    is_active:       bool
    active_channels: int

    @property
    def channels(self) -> list[int]:
        """Distinct channel ids in first-seen order."""
        seen: dict[int, None] = {}
        for bucket in self.slices:
            for sample in bucket:
                seen.setdefault(sample.channel, None)
        return list(seen)

    def to_dict(self) -> dict:
        return {
            "id":             self.id,
            "slices":         [[s.to_dict() for s in bucket] for bucket in self.slices],
            "isActive":       self.is_active,
            "activeChannels": self.active_channels,
        }


class ParseResult(NamedTuple):
    devices:         list[DeviceSnapshot]
    line_count:      int                # data lines seen (comments/blanks excluded)
    skipped_lines:   int
    skipped_reasons: dict[str, int]     # reason -> count


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _finite(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"non-finite value {text!r}")
    return value


def _min_fields(scheme: str) -> int:
    if scheme == SCHEME_BASIC:
        return BASIC_MIN_FIELDS
    if scheme == SCHEME_RICH:
        return RICH_MIN_FIELDS
    raise ValueError(f"scheme must be one of {SCHEMES}, got {scheme!r}")


def _phases(parts: list[str], scheme: str) -> list[float]:
    if scheme == SCHEME_BASIC:
        return [_finite(parts[FIELD_PHASE])] * NUM_SLICES
    raw = parts[FIELD_PHASE:FIELD_PHASE + NUM_SLICES]
    phases = [_finite(p) for p in raw]
    while len(phases) < NUM_SLICES:
        phases.append(phases[-1])
    return phases


def _snapshot(device_id: int, buckets: list[list[ChannelSample]]) -> DeviceSnapshot:
    active_ids = {s.channel for bucket in buckets for s in bucket if s.activity > 0}
    return DeviceSnapshot(
        id=device_id,
        slices=tuple(tuple(bucket) for bucket in buckets),
        is_active=bool(active_ids),
        active_channels=len(active_ids),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_time_sliced(text: str, scheme: str = SCHEME_BASIC) -> ParseResult:
    """
    Parse time-sliced telemetry text.

    Parameters
    ----------
    text    : full file contents
    scheme  : "basic" (>= 9 fields, one shared phase) or
              "rich"  (>= 12 fields, per-slice phases)

    Returns
    -------
    ParseResult
    """
    min_fields = _min_fields(scheme)

    buckets: dict[int, list[list[ChannelSample]]] = {}
    reasons: dict[str, int] = {}
    line_count = 0

    def skip(reason: str) -> None:
        reasons[reason] = reasons.get(reason, 0) + 1

    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT_PREFIX):
            continue
        line_count += 1

        parts = [p.strip() for p in stripped.split(",")]
        if len(parts) < min_fields:
            skip("too_few_fields")
            continue

        try:
            device_id  = int(parts[FIELD_DEVICE])
            channel_id = int(parts[FIELD_CHANNEL])
        except ValueError:
            skip("bad_number")
            continue

        if not MIN_DEVICE_INDEX <= device_id <= MAX_DEVICE_INDEX:
            skip("device_out_of_range")
            continue

        try:
            activities = [_finite(p) for p in parts[FIELD_ACTIVITY:FIELD_FREQUENCY]]
            frequency  = _finite(parts[FIELD_FREQUENCY])
            phases     = _phases(parts, scheme)
        except ValueError:
            skip("bad_number")
            continue

        device_buckets = buckets.setdefault(device_id, [[] for _ in range(NUM_SLICES)])
        for slice_index in range(NUM_SLICES):
            device_buckets[slice_index].append(ChannelSample(
                device=device_id,
                channel=channel_id,
                slice_index=slice_index,
                activity=activities[slice_index],
                frequency=frequency,
                phase=phases[slice_index],
            ))

    devices = [_snapshot(device_id, b) for device_id, b in buckets.items()]
    return ParseResult(
        devices=devices,
        line_count=line_count,
        skipped_lines=sum(reasons.values()),
        skipped_reasons=reasons,
    )


def parse_time_sliced_file(path, scheme: str = SCHEME_BASIC) -> ParseResult:
    with open(path, "r", encoding="utf-8") as f:
        return parse_time_sliced(f.read(), scheme=scheme)


def pad_devices(devices: list[DeviceSnapshot]) -> list[DeviceSnapshot]:
    """
    Return exactly MAX_DEVICES snapshots ordered by device index; indices
    with no records get an empty, inactive snapshot.
    """
    by_id = {d.id: d for d in devices}
    empty = tuple(() for _ in range(NUM_SLICES))
    return [
        by_id.get(i, DeviceSnapshot(id=i, slices=empty, is_active=False, active_channels=0))
        for i in range(MAX_DEVICES)
    ]
