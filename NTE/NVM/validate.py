#!/usr/bin/env python3
# =============================================================================
# validate.py — NTE Self-Validation Suite
# =============================================================================
#
# Run directly:  python -m NTE.NVM.validate
#             or python NTE/NVM/validate.py (from project root)
#
# Tests:
#   1. Constants integrity  — slice/device counts and field layout agree
#   2. Telemetry parser     — both schemes, skip policy, NaN policy
#   3. Pair statistics      — averages and synchronization thresholds
#   4. Config store         — allow-listed root, canonical paths
#   5. Scene bridge         — marker layout, colours, connections
# =============================================================================

import sys
import os
import math
import tempfile

# Allow running from project root without installing
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from NTE.NMM.constants import (
    MAX_DEVICES, NUM_SLICES, BASIC_MIN_FIELDS, RICH_MIN_FIELDS,
    FIELD_ACTIVITY, FIELD_FREQUENCY, FIELD_PHASE, MARKER_COUNT, SPHERE_RADIUS,
    channel_name,
)
from NTE.NPM.telemetry_parser import parse_time_sliced, pad_devices
from NTE.NSM.pair_stats import synchronization_label, pair_statistics
from NTE.NCM.config_store import ConfigStore, ConfigAccessError
from NTE.NViz.scene_bridge import SceneState, fibonacci_positions

PASS = "[PASS]"
FAIL = "[FAIL]"

failures = 0

def check(label: str, condition: bool, detail: str = "") -> bool:
    global failures
    if condition:
        print(f"  {PASS} {label}")
    else:
        print(f"  {FAIL} {label}{(' -- ' + detail) if detail else ''}")
        failures += 1
    return condition


def section(title: str) -> None:
    print("\n" + "="*60)
    print(title)
    print("="*60)


# =============================================================================
# TEST 1 — Constants Integrity
# =============================================================================
section("TEST 1 — Constants Integrity")

check("MAX_DEVICES = 12",               MAX_DEVICES == 12)
check("NUM_SLICES = 5",                 NUM_SLICES == 5)
check("frequency follows activities",   FIELD_FREQUENCY == FIELD_ACTIVITY + NUM_SLICES)
check("basic minimum = phase field + 1", BASIC_MIN_FIELDS == FIELD_PHASE + 1)
check("rich minimum = 12",              RICH_MIN_FIELDS == 12)
check("channel_name(0) = A0",           channel_name(0) == "A0")
check("channel_name(16) = B0",          channel_name(16) == "B0")
check("channel_name(31) = B15",         channel_name(31) == "B15")
check("64 distinct marker names",       len({channel_name(i) for i in range(64)}) == 64)


# =============================================================================
# TEST 2 — Telemetry Parser
# =============================================================================
section("TEST 2 — Telemetry Parser")

rich = parse_time_sliced("2,5,0.1,0.2,0.3,0.4,0.5,10.0,1.1,1.2,1.3,1.4", scheme="rich")
dev = rich.devices[0] if rich.devices else None
check("rich: one device parsed", len(rich.devices) == 1)
check("rich: device id 2", dev is not None and dev.id == 2)
sample = dev.slices[0][0] if dev else None
check("rich: slice 0 activity 0.1", sample is not None and sample.activity == 0.1)
check("rich: slice 0 phase 1.1", sample is not None and sample.phase == 1.1)
check("rich: slice 4 carries last phase forward",
      dev is not None and dev.slices[4][0].phase == 1.4)

text = "\n".join([
    "# comment",
    "",
    "0,1,0,0,0,0,0,8.0,0.5",
    "12,1,0.5,0.5,0.5,0.5,0.5,8.0,0.5",      # device out of range
    "-1,1,0.5,0.5,0.5,0.5,0.5,8.0,0.5",      # device out of range
    "3,1,0.5,0.5",                           # too few fields
    "4,1,nan,0.5,0.5,0.5,0.5,8.0,0.5",       # non-finite
    "1,2,0,0,0.3,0,0,8.0,0.5",
])
basic = parse_time_sliced(text)
ids = [d.id for d in basic.devices]
check("basic: out-of-range devices dropped", ids == [0, 1], f"got {ids}")
check("basic: four lines skipped", basic.skipped_lines == 4, f"got {basic.skipped_lines}")
check("basic: all-zero device inactive", not basic.devices[0].is_active)
check("basic: device with one reading active", basic.devices[1].is_active)
padded = pad_devices(basic.devices)
check("pad: MAX_DEVICES snapshots", len(padded) == MAX_DEVICES)


# =============================================================================
# TEST 3 — Pair Statistics
# =============================================================================
section("TEST 3 — Pair Statistics")

for diff, expected in [(0.05, "High"), (0.0999, "High"), (0.1, "Medium"),
                       (0.2, "Medium"), (0.2999, "Medium"), (0.3, "Low"), (0.5, "Low")]:
    got = synchronization_label(diff)
    check(f"sync({diff}) = {expected}", got == expected, f"got {got}")

pair = parse_time_sliced("\n".join([
    "0,1,0.5,0.5,0.5,0.5,0.5,8.0,0.1",
    "1,1,0.0,0.0,0.0,0.0,0.0,8.0,0.1",
]))
stats = pair_statistics(pair.devices[0], pair.devices[1])
check("pair average = 0.25", math.isclose(stats.pair_average, 0.25))
check("pair sync = Low", stats.synchronization == "Low")


# =============================================================================
# TEST 4 — Config Store
# =============================================================================
section("TEST 4 — Config Store")

with tempfile.TemporaryDirectory() as td:
    root = os.path.join(td, "brain-viz")
    store = ConfigStore(root)
    store.save("analyzer_config.json", '{"updateInterval": 1500}')
    loaded = store.load("analyzer_config.json")
    check("round trip keeps document", loaded["config"] == {"updateInterval": 1500})
    for bad in ("../outside.json", os.path.join(td, "brain-viz-evil", "x.json")):
        try:
            store.resolve(bad)
            check(f"reject {os.path.basename(bad)}", False, "path accepted")
        except ConfigAccessError as e:
            check(f"reject {os.path.basename(bad)} with 403", e.status == 403)


# =============================================================================
# TEST 5 — Scene Bridge
# =============================================================================
section("TEST 5 — Scene Bridge")

positions = fibonacci_positions(MARKER_COUNT)
check("64 marker positions", len(positions) == MARKER_COUNT)
check("markers lie on the sphere",
      all(math.isclose(math.sqrt(x*x + y*y + z*z), SPHERE_RADIUS, rel_tol=1e-9)
          for x, y, z in positions))

scene = SceneState()
scene.update([{"name": "A0", "activityLevel": 80},
              {"name": "A1", "activityLevel": 60},
              {"name": "A2", "activityLevel": 30}])
check("one connection between A0 and A1", len(scene.connections) == 1)
check("connection opacity 0.7", math.isclose(scene.connections[0]["opacity"], 0.7))
check("A2 green", scene.marker("A2")["color"] == 0x00ff00)
check("A3 greyed", scene.marker("A3")["scale"] == 0.7)


# =============================================================================
# Summary
# =============================================================================
print("\n" + "="*60)
if failures == 0:
    print(f"  ALL TESTS PASSED")
else:
    print(f"  {failures} TEST(S) FAILED")
print("="*60 + "\n")
sys.exit(0 if failures == 0 else 1)
