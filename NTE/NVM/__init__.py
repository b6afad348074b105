# =============================================================================
# NTE/NVM/__init__.py — Neural Verification Module
# =============================================================================
#
# Sub-modules:
#   validate.py  — self-validation suite for the NPM / NSM / NCM / NViz stack
# =============================================================================
