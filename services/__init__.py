# ============================================================================
# SERVICES MODULE
# ============================================================================
# EPOCH: 1 - SEQUENCE STATUS
# STATUS: Core - Reconciler-facing layer
# PURPOSE: Status passes and manifest loading
# CREATED: 18 OCT 2026
# ============================================================================
"""
Services Module

Thin layer between a reconciler and the status models.

Usage:
    from services import ManifestService, SequenceStatusService

    bundle = ManifestService().load_file("sequence.yaml")
    report = SequenceStatusService().reconcile_status(
        bundle.sequences[0], bundle.channels, bundle.subscriptions
    )
"""

from .manifest_service import ManifestBundle, ManifestError, ManifestService
from .status_service import SequenceStatusService, StatusReport

__all__ = [
    "ManifestBundle",
    "ManifestError",
    "ManifestService",
    "SequenceStatusService",
    "StatusReport",
]
