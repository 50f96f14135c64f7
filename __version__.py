# ============================================================================
# VERSION - SEQUENCE STATUS ENGINE
# ============================================================================
# EPOCH: 1 - SEQUENCE STATUS
# ============================================================================
"""
Version information for the Sequence status engine.

This is the single source of truth for the package version.
Updated manually for each release.
"""
# Version format: major.minor.patch
# Criteria for 0.2 - manifest loading and status service
__version__ = "0.2.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Build metadata
BUILD_DATE = "2026-10-18"

EPOCH = 1
CODENAME = "Sequence Status"
