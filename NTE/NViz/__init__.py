# =============================================================================
# NTE/NViz/__init__.py — Neural Visualizer Module
# =============================================================================
#
# Computes the sphere scene the browser renders: marker positions, colours,
# scales and the connection lines between highly active channels.
#
# Data flow:
#   JS: polls /api/scene every POLL_INTERVAL_MS
#   Python: parse → SceneState.update() → to_dict()
#   JS: patches its WebGL scene graph from the returned JSON
#
# Sub-modules:
#   scene_bridge.py  — SceneState; no rendering, no file I/O
# =============================================================================
