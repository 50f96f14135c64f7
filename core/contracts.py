# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# EPOCH: 1 - SEQUENCE STATUS
# STATUS: Foundation - Core enums and base contracts
# PURPOSE: Define condition enums and the object identity shared by all resources
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: ConditionStatus, ConditionSeverity, GroupVersionKind, ObjectMeta,
#          ObjectReference, ResourceData
# DEPENDENCIES: enum, pydantic
# ============================================================================
"""
Base contracts for the Sequence status engine.

These define the minimal identity fields that cross boundaries:
- Manifests (YAML / JSON as emitted by the API server)
- Python (status derivation)

Boundary-specific models inherit from these contracts.
All models serialize with Kubernetes camelCase keys and accept
snake_case names on input.
"""

from enum import Enum
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


# Shared model configuration: camelCase on the wire, snake_case in Python
K8S_MODEL_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "frozen": False,
}


# ============================================================================
# CONDITION ENUMS
# ============================================================================

class ConditionStatus(str, Enum):
    """
    Tri-state condition status.

    Every transition between the three values is permitted; a condition
    has no terminal state while its owning resource exists.
    """
    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"


class ConditionSeverity(str, Enum):
    """
    Severity of a condition that is not True.

    Tracked conditions carry ERROR (serialized as empty string),
    informational conditions outside the tracked set carry INFO.
    """
    ERROR = ""
    WARNING = "Warning"
    INFO = "Info"


# ============================================================================
# IDENTITY CONTRACTS
# ============================================================================

class GroupVersionKind(BaseModel):
    """API group, version and kind identifying a resource type."""
    group: str = ""
    version: str
    kind: str

    model_config = {"frozen": True}

    @property
    def api_version(self) -> str:
        """Group/version string as used in manifests (``group/version``)."""
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"

    def __str__(self) -> str:
        return f"{self.api_version}, Kind={self.kind}"


class ObjectMeta(BaseModel):
    """Subset of object metadata the engine reads or carries."""
    name: str = Field(default="", max_length=253)
    namespace: str = Field(default="", max_length=63)
    uid: Optional[str] = None
    generation: int = Field(default=0, ge=0)
    resource_version: Optional[str] = None
    labels: Dict[str, str] = Field(default_factory=dict)
    annotations: Dict[str, str] = Field(default_factory=dict)

    model_config = K8S_MODEL_CONFIG


class ObjectReference(BaseModel):
    """
    Lightweight reference to another object.

    Recorded in status entries so consumers can find the child
    without knowing its concrete type.
    """
    api_version: str = ""
    kind: str = ""
    name: str = ""
    namespace: str = ""

    model_config = K8S_MODEL_CONFIG


class ResourceData(BaseModel):
    """
    Essential resource identity - the fields every manifest carries.

    All resource models (Sequence, Channelable, Subscription) inherit these.
    """
    api_version: str = ""
    kind: str = ""
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)

    model_config = K8S_MODEL_CONFIG

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    def to_reference(self) -> ObjectReference:
        """Build an ObjectReference pointing at this resource."""
        return ObjectReference(
            api_version=self.api_version,
            kind=self.kind,
            name=self.metadata.name,
            namespace=self.metadata.namespace,
        )

    def to_manifest(self) -> Dict[str, Any]:
        """Serialize with Kubernetes field names."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
