# =============================================================================
# scene_bridge.py — Sphere Scene State for the Browser
# =============================================================================
#
# Self-contained: no file I/O, no rendering.  Returns plain dicts the browser
# applies to its scene graph.
#
# Marker layout (Fibonacci distribution over the sphere surface):
#   phi_i   = acos(-1 + 2i / N)
#   theta_i = sqrt(N * pi) * phi_i
#   p_i     = r * (cos theta sin phi, sin theta sin phi, cos phi)
#
# Marker appearance (activity level in percent):
#   >= 75 red | >= 50 yellow | >= 25 green | else cyan
#   scale = 1 + level / 100
#   markers absent from the update: grey, scale 0.7
#
# Marker i is named channel_name(i), the same name telemetry channel i
# carries, so ids 0..31 land on A0..A15 / B0..B15.
#
# Connections: one line per unordered pair of channels both >= 50,
# opacity = (level_a + level_b) / 200.
#
# A SceneState belongs to whoever created it.  The server builds one per
# request; nothing is shared between requests.
# =============================================================================

from __future__ import annotations
import math
from itertools import combinations
from typing import Optional

from NTE.NMM.constants import (
    MARKER_COUNT, SPHERE_RADIUS, LABEL_OFFSET, POLL_INTERVAL_MS,
    COLOR_HIGH, COLOR_MEDIUM, COLOR_LOW, COLOR_VERY_LOW,
    COLOR_INACTIVE, COLOR_IDLE, COLOR_LINE,
    LEVEL_HIGH, LEVEL_MEDIUM, LEVEL_LOW, CONNECTION_MIN_LEVEL,
    INACTIVE_SCALE,
    channel_name,
)
from NTE.NPM.telemetry_parser import DeviceSnapshot


def fibonacci_positions(count: int, radius: float = SPHERE_RADIUS) -> list[tuple[float, float, float]]:
    positions = []
    for i in range(count):
        phi   = math.acos(-1 + (2 * i) / count)
        theta = math.sqrt(count * math.pi) * phi
        positions.append((
            radius * math.cos(theta) * math.sin(phi),
            radius * math.sin(theta) * math.sin(phi),
            radius * math.cos(phi),
        ))
    return positions


def activity_color(level: float) -> int:
    if level >= LEVEL_HIGH:
        return COLOR_HIGH
    if level >= LEVEL_MEDIUM:
        return COLOR_MEDIUM
    if level >= LEVEL_LOW:
        return COLOR_LOW
    return COLOR_VERY_LOW


def _hex(color: int) -> str:
    return f"#{color:06x}"


class SceneState:
    """
    Marker and connection state for one sphere.

    Example:
        scene = SceneState()
        scene.update([{"name": "A0", "activityLevel": 80},
                      {"name": "A3", "activityLevel": 60}])
        scene.to_dict()["connections"]
        # -> [{"from": "A0", "to": "A3", "opacity": 0.7, ...}]
    """

    def __init__(self, marker_count: int = MARKER_COUNT, radius: float = SPHERE_RADIUS) -> None:
        self.radius = radius
        names = [channel_name(i) for i in range(marker_count)]
        self._markers: dict[str, dict] = {}
        for name, pos in zip(names, fibonacci_positions(marker_count, radius)):
            self._markers[name] = {
                "name":     name,
                "position": pos,
                "label":    tuple(c * LABEL_OFFSET for c in pos),
                "color":    COLOR_IDLE,
                "scale":    1.0,
                "active":   False,
                "activityLevel": 0.0,
            }
        self._connections: list[dict] = []

    # ── Updates ──────────────────────────────────────────────────────────────

    def update(self, channels: list[dict]) -> None:
        """
        Apply one activity feed.  `channels` is a list of
        {"name": str, "activityLevel": float}; names with no marker are
        ignored.
        """
        levels: dict[str, float] = {}
        for ch in channels:
            name = ch.get("name")
            if name in self._markers:
                levels[name] = float(ch.get("activityLevel", 0.0))

        for name, marker in self._markers.items():
            if name in levels:
                level = levels[name]
                marker["color"] = activity_color(level)
                marker["scale"] = 1.0 + level / 100
                marker["active"] = True
                marker["activityLevel"] = level
            else:
                marker["color"] = COLOR_INACTIVE
                marker["scale"] = INACTIVE_SCALE
                marker["active"] = False
                marker["activityLevel"] = 0.0

        strong = [n for n, lvl in levels.items() if lvl >= CONNECTION_MIN_LEVEL]
        self._connections = [
            {
                "from":    a,
                "to":      b,
                "start":   self._markers[a]["position"],
                "end":     self._markers[b]["position"],
                "opacity": (levels[a] + levels[b]) / 200,
            }
            for a, b in combinations(strong, 2)
        ]

    # ── Queries ──────────────────────────────────────────────────────────────

    def marker(self, name: str) -> Optional[dict]:
        return self._markers.get(name)

    @property
    def connections(self) -> list[dict]:
        return list(self._connections)

    def to_dict(self) -> dict:
        return {
            "radius":         self.radius,
            "pollIntervalMs": POLL_INTERVAL_MS,
            "markers": [
                {
                    "name":          m["name"],
                    "position":      list(m["position"]),
                    "label":         list(m["label"]),
                    "color":         _hex(m["color"]),
                    "scale":         m["scale"],
                    "active":        m["active"],
                    "activityLevel": m["activityLevel"],
                }
                for m in self._markers.values()
            ],
            "connections": [
                {
                    "from":    c["from"],
                    "to":      c["to"],
                    "start":   list(c["start"]),
                    "end":     list(c["end"]),
                    "color":   _hex(COLOR_LINE),
                    "opacity": c["opacity"],
                }
                for c in self._connections
            ],
        }


def scene_from_device(device: DeviceSnapshot, slice_index: int = 0,
                      marker_count: int = MARKER_COUNT) -> SceneState:
    """
    Scene for one parsed device at one slice.  Only channels with activity
    > 0 count as active; the rest are greyed.
    """
    feed = [
        {"name": channel_name(s.channel), "activityLevel": s.activity_level}
        for s in device.slices[slice_index]
        if s.activity > 0
    ]
    scene = SceneState(marker_count=marker_count)
    scene.update(feed)
    return scene
