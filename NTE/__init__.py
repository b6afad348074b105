# =============================================================================
# Neural Telemetry Engine (NTE)
# Python backend of the multi-brain activity dashboard.
# =============================================================================
#
# ── PYTHON OWNS THE NUMBERS, THE BROWSER OWNS THE PIXELS ─────────────────────
#
# RESPONSIBLE for (Python owns these completely):
#   - Telemetry parsing
#       The capture program writes flat comma-separated files every scan
#       (time_sliced_data.txt, logic_data.txt, phase_data.txt).  Python turns
#       them into per-device / per-slice structures.  Bad lines are skipped
#       and counted, never guessed at.
#   - Derived statistics
#       Active flags, active-channel counts, per-pair average activity and
#       the High / Medium / Low synchronization label.
#   - Scene bookkeeping
#       Marker positions on the sphere (Fibonacci distribution), activity
#       colours and the connection set between highly active channels.
#   - Configuration load / save
#       Confined to one allow-listed root directory, checked on the
#       canonical path.
#
# NOT responsible for:
#   - 3D rendering / UI layout
#       JS owns the WebGL scene graph and all DOM work.  Python only hands it
#       the scene state as JSON.
#   - Image post-processing of the brain outline template.
#
# ── DATA FLOW ─────────────────────────────────────────────────────────────────
#   capture program → writes public/data/*.txt
#   JS (dashboard)  → polls /api/... every 500 ms
#   Python (Flask)  → reads file, parses (NPM), derives stats (NSM),
#                     builds scene (NViz), returns JSON
#   JS              → renders
#
# ── Module layout ─────────────────────────────────────────────────────────────
#   NMM/constants.py         — device/slice/threshold constants (single source)
#   NPM/telemetry_parser.py  — time-sliced telemetry (basic + rich schemes)
#   NPM/logic_parser.py      — DEVICE/CHANNEL logic snapshot file
#   NPM/phase_parser.py      — DEVICE/PHASE phase relationship file
#   NSM/pair_stats.py        — brain-pair averages and synchronization label
#   NCM/config_store.py      — allow-listed configuration load / save
#   NViz/scene_bridge.py     — sphere scene state for the browser
#   NVM/validate.py          — self-validation suite
#   server.py                — Flask app factory for the dashboard API
# =============================================================================
