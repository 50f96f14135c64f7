# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# EPOCH: 1 - SEQUENCE STATUS
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for resource identity and logging
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides sensible defaults for the Sequence status engine.
These can be overridden via environment variables.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from core.contracts import GroupVersionKind


@dataclass(frozen=True)
class ResourceDefaults:
    """
    Identity of the Sequence resource type.

    Used by Sequence.get_group_version_kind() and by the manifest loader
    to recognize Sequence documents.
    """
    group: str = "flows.knative.dev"
    version: str = "v1"
    kind: str = "Sequence"

    # Kind of the child objects that forward events between stages
    subscription_kind: str = "Subscription"

    @property
    def api_version(self) -> str:
        return f"{self.group}/{self.version}"

    def group_version_kind(self) -> GroupVersionKind:
        return GroupVersionKind(group=self.group, version=self.version, kind=self.kind)

    @classmethod
    def from_env(cls) -> "ResourceDefaults":
        """Create from environment variables."""
        return cls(
            group=os.getenv("SEQUENCE_API_GROUP", "flows.knative.dev"),
            version=os.getenv("SEQUENCE_API_VERSION", "v1"),
        )


@dataclass(frozen=True)
class LoggingDefaults:
    """
    Defaults for log output.

    JSON output is meant for log aggregation, human output for development.
    """
    level: str = "INFO"
    json_output: bool = False

    @classmethod
    def from_env(cls) -> "LoggingDefaults":
        """Create from environment variables."""
        return cls(
            level=os.getenv("LOG_LEVEL", "INFO").upper(),
            json_output=os.getenv("LOG_FORMAT", "").lower() == "json",
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    resource: ResourceDefaults = field(default_factory=ResourceDefaults)
    logging: LoggingDefaults = field(default_factory=LoggingDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            resource=ResourceDefaults.from_env(),
            logging=LoggingDefaults.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ResourceDefaults",
    "LoggingDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
