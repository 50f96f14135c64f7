# ============================================================================
# MANIFEST SERVICE TESTS
# ============================================================================
# EPOCH: 1 - SEQUENCE STATUS
# STATUS: Tests - Manifest loading
# PURPOSE: Verify YAML/JSON parsing, kind dispatch and error wrapping
# CREATED: 18 OCT 2026
# ============================================================================
"""
Manifest Service Tests

Covers:
1. Multi-document YAML with a Sequence and its children
2. kind: List expansion and JSON input
3. ManifestError for bad YAML, missing kind, invalid fields
4. End-to-end: load manifests, run a status pass

Run with:
    pytest tests/test_manifest_service.py -v
"""

import json

import pytest
from pydantic import ValidationError

from core.contracts import ConditionStatus
from core.models import Channelable, Sequence, Subscription
from services.manifest_service import ManifestError, ManifestService
from services.status_service import SequenceStatusService


SEQUENCE_YAML = """
apiVersion: flows.knative.dev/v1
kind: Sequence
metadata:
  name: orders
  namespace: shop
  generation: 2
  creationTimestamp: "2026-10-18T08:00:00Z"
spec:
  channelTemplate:
    apiVersion: messaging.knative.dev/v1
    kind: InMemoryChannel
  steps:
    - ref:
        apiVersion: serving.knative.dev/v1
        kind: Service
        name: validate
    - uri: http://enrich.shop.svc.cluster.local
  reply:
    ref:
      apiVersion: v1
      kind: Service
      name: sink
---
apiVersion: messaging.knative.dev/v1
kind: InMemoryChannel
metadata:
  name: orders-kn-sequence-0
  namespace: shop
status:
  address:
    url: http://orders-kn-sequence-0-kn-channel.shop.svc.cluster.local
  conditions:
    - type: Ready
      status: "True"
      lastTransitionTime: "2026-10-18T08:01:00Z"
---
apiVersion: messaging.knative.dev/v1
kind: InMemoryChannel
metadata:
  name: orders-kn-sequence-1
  namespace: shop
status:
  conditions:
    - type: Ready
      status: True
---
apiVersion: messaging.knative.dev/v1
kind: Subscription
metadata:
  name: orders-kn-sequence-0
  namespace: shop
status:
  conditions:
    - type: Ready
      status: "True"
---
apiVersion: messaging.knative.dev/v1
kind: Subscription
metadata:
  name: orders-kn-sequence-1
  namespace: shop
status:
  conditions:
    - type: Ready
      status: "False"
      reason: NotAddressable
      message: subscriber not found
"""


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def service():
    return ManifestService()


# ============================================================================
# PARSING
# ============================================================================

class TestLoadText:
    def test_multi_document(self, service):
        bundle = service.load_text(SEQUENCE_YAML)

        assert len(bundle) == 5
        assert len(bundle.sequences) == 1
        assert [c.name for c in bundle.channels] == ["orders-kn-sequence-0", "orders-kn-sequence-1"]
        assert [s.name for s in bundle.subscriptions] == ["orders-kn-sequence-0", "orders-kn-sequence-1"]

    def test_sequence_fields(self, service):
        sequence = service.load_text(SEQUENCE_YAML).sequences[0]

        assert isinstance(sequence, Sequence)
        assert sequence.metadata.generation == 2
        assert sequence.spec.channel_template.kind == "InMemoryChannel"
        assert sequence.spec.steps[0].ref.name == "validate"
        assert sequence.spec.steps[1].uri == "http://enrich.shop.svc.cluster.local"
        assert sequence.spec.reply.ref.name == "sink"

    def test_channel_fields(self, service):
        channel = service.load_text(SEQUENCE_YAML).channels[0]

        assert isinstance(channel, Channelable)
        assert channel.kind == "InMemoryChannel"
        assert channel.address.url.startswith("http://orders-kn-sequence-0")
        assert channel.get_ready_condition().is_true()
        assert channel.get_ready_condition().last_transition_time is not None

    def test_unquoted_bool_status(self, service):
        channel = service.load_text(SEQUENCE_YAML).channels[1]

        assert channel.get_ready_condition().status == ConditionStatus.TRUE

    def test_subscription_fields(self, service):
        subscription = service.load_text(SEQUENCE_YAML).subscriptions[1]

        assert isinstance(subscription, Subscription)
        ready = subscription.get_ready_condition()
        assert ready.is_false()
        assert ready.reason == "NotAddressable"

    def test_list_kind_expanded(self, service):
        text = """
apiVersion: v1
kind: List
items:
  - apiVersion: messaging.knative.dev/v1
    kind: Subscription
    metadata: {name: a}
  - apiVersion: messaging.knative.dev/v1
    kind: Subscription
    metadata: {name: b}
"""
        bundle = service.load_text(text)

        assert [s.name for s in bundle.subscriptions] == ["a", "b"]

    def test_json_input(self, service):
        doc = {
            "apiVersion": "messaging.knative.dev/v1",
            "kind": "KafkaChannel",
            "metadata": {"name": "k0", "namespace": "shop"},
            "status": {"conditions": [{"type": "Ready", "status": "Unknown"}]},
        }

        bundle = service.load_text(json.dumps(doc))

        assert bundle.channels[0].kind == "KafkaChannel"
        assert bundle.channels[0].get_ready_condition().is_unknown()

    def test_empty_documents_skipped(self, service):
        assert service.load_documents("---\n---\n") == []

    def test_null_status_accepted(self, service):
        text = """
kind: Sequence
metadata: {name: orders}
status: null
---
kind: InMemoryChannel
metadata: {name: orders-kn-sequence-0}
status: null
---
kind: Subscription
metadata: {name: orders-kn-sequence-0}
status: null
"""
        bundle = service.load_text(text)

        assert bundle.sequences[0].status.conditions == []
        assert bundle.channels[0].get_ready_condition() is None
        assert bundle.subscriptions[0].get_ready_condition() is None

    def test_long_channel_url(self, service):
        url = "http://orders-kn-sequence-0.shop.svc/" + "x" * 2100
        text = f"kind: InMemoryChannel\nmetadata: {{name: c0}}\nstatus:\n  address:\n    url: {url}\n"

        channel = service.load_text(text).channels[0]

        assert channel.address.url == url


# ============================================================================
# ERRORS
# ============================================================================

class TestManifestErrors:
    def test_invalid_yaml(self, service):
        with pytest.raises(ManifestError, match="invalid YAML"):
            service.load_text("kind: [unclosed", source="broken.yaml")

    def test_scalar_document(self, service):
        with pytest.raises(ManifestError, match="expected a mapping"):
            service.load_text("just a string")

    def test_missing_kind(self, service):
        with pytest.raises(ManifestError, match="no kind") as exc_info:
            service.load_text("metadata: {name: x}\n", source="x.yaml")

        assert exc_info.value.source == "x.yaml"
        assert exc_info.value.index == 0

    @pytest.mark.parametrize("kind", ["5", "[a]", "{x: 1}"])
    def test_non_string_kind(self, service, kind):
        with pytest.raises(ManifestError, match="invalid"):
            service.load_text(f"apiVersion: v1\nkind: {kind}\n")

    def test_validation_error_wrapped(self, service):
        text = "kind: Subscription\nmetadata:\n  name: s\n  generation: -1\n"

        with pytest.raises(ManifestError, match="invalid Subscription") as exc_info:
            service.load_text(text)

        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_missing_file(self, service, tmp_path):
        with pytest.raises(ManifestError, match="cannot read file"):
            service.load_file(tmp_path / "missing.yaml")


# ============================================================================
# END TO END
# ============================================================================

class TestLoadAndReconcile:
    def test_file_to_status(self, service, tmp_path):
        path = tmp_path / "orders.yaml"
        path.write_text(SEQUENCE_YAML, encoding="utf-8")
        bundle = service.load_file(path)
        sequence = bundle.sequences[0]
        sequence.status.mark_oidc_identity_created_succeeded()

        report = SequenceStatusService().reconcile_status(
            sequence, bundle.channels, bundle.subscriptions
        )

        status = sequence.status
        assert status.address.url == "http://orders-kn-sequence-0-kn-channel.shop.svc.cluster.local"
        assert status.get_condition("ChannelsReady").is_true()
        assert status.get_condition("SubscriptionsReady").reason == "SubscriptionsNotReady"
        assert not report.ready
        assert report.not_ready_conditions == ["SubscriptionsReady"]
