# ============================================================================
# ADDRESSABLE MODEL
# ============================================================================
# EPOCH: 1 - SEQUENCE STATUS
# STATUS: Core model - Reachable endpoint
# PURPOSE: Address advertised by channels and exposed by a Sequence
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: Addressable, AuthStatus
# DEPENDENCIES: pydantic
# ============================================================================
"""
Addressable Model

An Addressable is an endpoint that events can be delivered to.
Channels advertise one in status.address; a Sequence re-exposes the
address of its first channel as its own entry point.
"""

from typing import Optional
from pydantic import BaseModel, Field

from core.contracts import K8S_MODEL_CONFIG


class Addressable(BaseModel):
    """
    Endpoint advertised by a resource.

    An address without a URL is considered empty.
    """
    name: Optional[str] = None
    url: Optional[str] = None
    ca_certs: Optional[str] = Field(default=None, alias="CACerts")
    audience: Optional[str] = None

    model_config = K8S_MODEL_CONFIG

    def is_empty(self) -> bool:
        """True when there is no URL to deliver to."""
        return not self.url


class AuthStatus(BaseModel):
    """Identity provisioned for the resource (written by the reconciler)."""
    service_account_name: Optional[str] = None

    model_config = K8S_MODEL_CONFIG


__all__ = ["Addressable", "AuthStatus"]
