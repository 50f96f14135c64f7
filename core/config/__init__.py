# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# EPOCH: 1 - SEQUENCE STATUS
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for the status engine.
"""

from core.config.defaults import (
    ResourceDefaults,
    LoggingDefaults,
    Defaults,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "ResourceDefaults",
    "LoggingDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
