# =============================================================================
# NTE/NPM/__init__.py — Neural Parse Module
# =============================================================================
#
# The NPM turns the flat text files written by the capture program into
# immutable per-device structures.  Every parse builds a fresh structure;
# nothing is cached between reads.
#
# Sub-modules:
#   telemetry_parser.py  — time_sliced_data.txt (basic + rich schemes)
#   logic_parser.py      — logic_data.txt (DEVICE / CHANNEL blocks)
#   phase_parser.py      — phase_data.txt (DEVICE / PHASE blocks)
# =============================================================================
