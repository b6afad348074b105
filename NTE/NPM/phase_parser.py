# =============================================================================
# phase_parser.py — Phase Relationship Parser (phase_data.txt)
# =============================================================================
#
#   DEVICE,<id>,<serial>,<model>,<captureCount>
#   PHASE,<ch>,<name>,<meanPhase rad>,<variance>
#
# Each PHASE record also reports its mean phase in degrees.  PHASE lines
# with unparsable or non-finite numbers are skipped.
# =============================================================================

from __future__ import annotations
import math
from typing import NamedTuple

from NTE.NMM.constants import COMMENT_PREFIX


class PhaseChannel(NamedTuple):
    channel:    int
    name:       str
    mean_phase: float       # radians
    variance:   float

    @property
    def mean_phase_deg(self) -> float:
        return math.degrees(self.mean_phase)

    def to_dict(self) -> dict:
        return {
            "channel":      self.channel,
            "name":         self.name,
            "meanPhase":    self.mean_phase,
            "meanPhaseDeg": self.mean_phase_deg,
            "variance":     self.variance,
        }


class PhaseDevice(NamedTuple):
    id:            int
    serial:        str
    model:         str
    capture_count: int
    channels:      tuple[PhaseChannel, ...]

    def to_dict(self) -> dict:
        return {
            "id":           self.id,
            "serial":       self.serial,
            "model":        self.model,
            "captureCount": self.capture_count,
            "channels":     [c.to_dict() for c in self.channels],
        }


def _finite(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"non-finite value {text!r}")
    return value


def parse_phase_data(text: str) -> list[PhaseDevice]:
    devices: list[PhaseDevice] = []
    header = None
    channels: list[PhaseChannel] = []

    def close() -> None:
        if header is not None:
            devices.append(PhaseDevice(*header, channels=tuple(channels)))

    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT_PREFIX):
            continue
        parts = [p.strip() for p in stripped.split(",")]

        if parts[0] == "DEVICE":
            try:
                device_id = int(parts[1])
            except (IndexError, ValueError):
                continue
            close()
            channels = []
            try:
                capture_count = int(parts[4])
            except (IndexError, ValueError):
                capture_count = 0
            header = (
                device_id,
                parts[2] if len(parts) > 2 else "",
                parts[3] if len(parts) > 3 else "",
                capture_count,
            )
        elif parts[0] == "PHASE" and header is not None:
            try:
                channels.append(PhaseChannel(
                    channel=int(parts[1]),
                    name=parts[2],
                    mean_phase=_finite(parts[3]),
                    variance=_finite(parts[4]),
                ))
            except (IndexError, ValueError):
                continue

    close()
    return devices


def parse_phase_file(path) -> list[PhaseDevice]:
    with open(path, "r", encoding="utf-8") as f:
        return parse_phase_data(f.read())
