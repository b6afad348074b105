# =============================================================================
# NTE/NMM/__init__.py — Neural Mapping Module
# =============================================================================
#
# The NMM is the single source of truth for the telemetry system's fixed
# numbers: device and slice counts, field minimums of the flat-file schemes,
# synchronization thresholds, scene colour bands and data file names.
#
# All other NTE sub-modules import exclusively from here.
# Never define telemetry constants outside this module.
#
# Sub-modules:
#   constants.py  — all constants plus channel naming
# =============================================================================
