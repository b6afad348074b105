# =============================================================================
# NTE/NCM/__init__.py — Neural Configuration Module
# =============================================================================
#
# Loads and saves the analyzer configuration document (an opaque JSON object
# the capture program and the settings dialog share).  Every path is
# canonicalised and must resolve inside one allow-listed root directory.
#
# Sub-modules:
#   config_store.py  — ConfigStore + ConfigError hierarchy
# =============================================================================
