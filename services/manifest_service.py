# ============================================================================
# MANIFEST SERVICE
# ============================================================================
# EPOCH: 1 - SEQUENCE STATUS
# STATUS: Service - Manifest loading
# PURPOSE: Load Sequences and child snapshots from YAML / JSON documents
# CREATED: 18 OCT 2026
# ============================================================================
"""
Manifest Service

Parses manifests as emitted by `kubectl get -o yaml` (or -o json) into
the engine's models. Multi-document streams and `kind: List` documents
are both supported.

Dispatch on kind:
    Sequence          -> Sequence
    Subscription      -> Subscription
    any other kind    -> Channelable (channels are duck-typed)
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Union

import yaml
from pydantic import ValidationError

from core.config import get_defaults
from core.logging import ComponentType, get_logger
from core.models import Channelable, Sequence, Subscription

logger = get_logger(__name__, ComponentType.LOADER)

ManifestObject = Union[Sequence, Channelable, Subscription]


class ManifestError(Exception):
    """A manifest could not be parsed into a model."""

    def __init__(self, message: str, source: str = "<string>", index: int = -1):
        self.source = source
        self.index = index
        location = source if index < 0 else f"{source}[{index}]"
        super().__init__(f"{location}: {message}")


@dataclass
class ManifestBundle:
    """Objects loaded from one source, in document order per kind."""
    sequences: List[Sequence] = field(default_factory=list)
    channels: List[Channelable] = field(default_factory=list)
    subscriptions: List[Subscription] = field(default_factory=list)

    def add(self, obj: ManifestObject) -> None:
        if isinstance(obj, Sequence):
            self.sequences.append(obj)
        elif isinstance(obj, Subscription):
            self.subscriptions.append(obj)
        else:
            self.channels.append(obj)

    def __len__(self) -> int:
        return len(self.sequences) + len(self.channels) + len(self.subscriptions)


class ManifestService:
    """Service for loading manifests into models."""

    def load_documents(self, text: str, source: str = "<string>") -> List[Dict[str, Any]]:
        """
        Parse YAML (or JSON) text into a flat list of object documents.

        Empty documents are skipped; `kind: List` documents are expanded
        into their items.

        Raises:
            ManifestError: If the text is not valid YAML or a document is
                not a mapping
        """
        try:
            raw_docs = list(yaml.safe_load_all(text))
        except yaml.YAMLError as e:
            raise ManifestError(f"invalid YAML: {e}", source) from e

        documents: List[Dict[str, Any]] = []
        for index, doc in enumerate(raw_docs):
            if doc is None:
                continue
            if not isinstance(doc, dict):
                raise ManifestError(
                    f"expected a mapping, got {type(doc).__name__}", source, index
                )
            documents.extend(self._flatten(doc))
        return documents

    def parse_object(self, doc: Dict[str, Any], source: str = "<string>", index: int = -1) -> ManifestObject:
        """
        Build the model matching the document's kind.

        Raises:
            ManifestError: If kind is missing or the document fails validation
        """
        kind = doc.get("kind")
        if not kind:
            raise ManifestError("document has no kind", source, index)

        resource = get_defaults().resource
        if kind == resource.kind:
            model = Sequence
        elif kind == resource.subscription_kind:
            model = Subscription
        else:
            model = Channelable

        try:
            return model.model_validate(doc)
        except ValidationError as e:
            raise ManifestError(f"invalid {kind}: {e}", source, index) from e

    def load_text(self, text: str, source: str = "<string>") -> ManifestBundle:
        """Parse every object in YAML/JSON text into a ManifestBundle."""
        bundle = ManifestBundle()
        for index, doc in enumerate(self.load_documents(text, source)):
            bundle.add(self.parse_object(doc, source, index))
        logger.debug(
            f"Loaded {len(bundle)} objects from {source}",
            extra={
                "sequences": len(bundle.sequences),
                "channels": len(bundle.channels),
                "subscriptions": len(bundle.subscriptions),
            },
        )
        return bundle

    def load_file(self, path: Union[str, Path]) -> ManifestBundle:
        """
        Load a manifest file.

        Raises:
            ManifestError: If the file cannot be read or parsed
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ManifestError(f"cannot read file: {e}", str(path)) from e
        return self.load_text(text, str(path))

    def _flatten(self, doc: Dict[str, Any]) -> Iterator[Dict[str, Any]]:
        # "List", "SubscriptionList", "InMemoryChannelList", ...
        kind = doc.get("kind")
        is_list = isinstance(kind, str) and kind.endswith("List")
        if not (is_list and isinstance(doc.get("items"), list)):
            yield doc
            return
        for item in doc["items"]:
            if isinstance(item, dict):
                yield from self._flatten(item)


__all__ = ["ManifestError", "ManifestBundle", "ManifestService"]
