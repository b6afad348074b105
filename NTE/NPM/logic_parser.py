# =============================================================================
# logic_parser.py — Logic Snapshot Parser (logic_data.txt)
# =============================================================================
#
# File format
# -----------
#   # Neural Monitor Data - Updated: <timestamp>
#   DEVICE,<id>,<serial>,<model>,<captureCount>
#   CHANNEL,<ch>,<name>,<currentState>,<transitions>,<totalTransitions>,<activityLevel>
#   CHANNEL,...
#   DEVICE,...
#
# CHANNEL lines belong to the most recent DEVICE line; CHANNEL lines before
# the first DEVICE are ignored.  Counters that do not parse read as 0.  A
# CHANNEL line whose channel id does not parse is skipped.
# =============================================================================

from __future__ import annotations
from typing import NamedTuple

from NTE.NMM.constants import COMMENT_PREFIX


class LogicChannel(NamedTuple):
    channel:           int
    name:              str
    current_state:     int
    transitions:       int
    total_transitions: int
    activity_level:    int

    def to_dict(self) -> dict:
        return {
            "channel":          self.channel,
            "name":             self.name,
            "currentState":     self.current_state,
            "transitions":      self.transitions,
            "totalTransitions": self.total_transitions,
            "activityLevel":    self.activity_level,
            "changed":          self.activity_level > 0,
        }


class LogicDevice(NamedTuple):
    id:            int
    serial_number: str
    model:         str
    capture_count: int
    channels:      tuple[LogicChannel, ...]

    @property
    def is_active(self) -> bool:
        return any(c.transitions > 0 or c.total_transitions > 0 for c in self.channels)

    def to_dict(self) -> dict:
        return {
            "id":           self.id,
            "serialNumber": self.serial_number,
            "model":        self.model,
            "captureCount": self.capture_count,
            "channels":     [c.to_dict() for c in self.channels],
            "isActive":     self.is_active,
        }


def _int_or_zero(parts: list[str], index: int) -> int:
    try:
        return int(parts[index])
    except (IndexError, ValueError):
        return 0


def _field(parts: list[str], index: int, default: str) -> str:
    if index < len(parts) and parts[index]:
        return parts[index]
    return default


def parse_logic_data(text: str) -> list[LogicDevice]:
    devices: list[LogicDevice] = []
    header = None                       # (id, serial, model, capture_count)
    channels: list[LogicChannel] = []

    def close() -> None:
        if header is not None:
            devices.append(LogicDevice(*header, channels=tuple(channels)))

    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT_PREFIX):
            continue
        parts = [p.strip() for p in stripped.split(",")]

        if parts[0] == "DEVICE":
            close()
            channels = []
            header = (
                _int_or_zero(parts, 1),
                _field(parts, 2, "Unknown"),
                _field(parts, 3, "Unknown"),
                _int_or_zero(parts, 4),
            )
        elif parts[0] == "CHANNEL" and header is not None:
            try:
                channel_id = int(parts[1])
            except (IndexError, ValueError):
                continue
            channels.append(LogicChannel(
                channel=channel_id,
                name=_field(parts, 2, f"Channel {channel_id}"),
                current_state=_int_or_zero(parts, 3),
                transitions=_int_or_zero(parts, 4),
                total_transitions=_int_or_zero(parts, 5),
                activity_level=_int_or_zero(parts, 6),
            ))

    close()
    return devices


def parse_logic_file(path) -> list[LogicDevice]:
    with open(path, "r", encoding="utf-8") as f:
        return parse_logic_data(f.read())
