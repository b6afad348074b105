# =============================================================================
# NTE/NSM/__init__.py — Neural Statistics Module
# =============================================================================
#
# Display statistics derived from parsed telemetry.  Computed on every
# request from a fresh parse; nothing here is stored.
#
# Sub-modules:
#   pair_stats.py  — device averages, brain-pair selection, sync labels
# =============================================================================
