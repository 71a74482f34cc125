"""Shared fixtures: in-memory stand-ins for the Kubernetes API clients."""

from __future__ import annotations

import copy
from typing import Any

import pytest
from kubernetes.client.exceptions import ApiException

from patterns_operator.constants import API_GROUP, CONFIG_GROUP, PLURAL_PATTERNS
from patterns_operator.handlers.pattern import PatternHandler
from patterns_operator.resources.application import ApplicationKind
from patterns_operator.resources.subscription import SubscriptionKind
from patterns_operator.services.cluster import OpenShiftClusterMetadata
from patterns_operator.services.kubernetes import ClusterState, PatternStore

PATTERN_NAMESPACE = "patterns"
PATTERN_NAME = "multicloud-gitops"
PATTERN_UID = "4b3c2d1e-0000-4000-8000-000000000001"


class FakeCustomObjectsApi:
    """CustomObjectsApi backed by a dict, with resourceVersion checks on replace."""

    def __init__(self) -> None:
        self.objects: dict[tuple[str, str, str | None, str], dict[str, Any]] = {}
        self.missing_crds: set[str] = set()
        self.failures: dict[tuple[str, str], Exception] = {}
        self.mutations: list[tuple[str, str, str]] = []
        self.request_timeouts: list[Any] = []
        self._uid_counter = 0

    def _check(self, verb: str, plural: str, kwargs: dict[str, Any]) -> None:
        self.request_timeouts.append(kwargs.get("_request_timeout"))
        error = self.failures.get((verb, plural))
        if error is not None:
            raise error

    def _stored(self, group: str, plural: str, namespace: str | None, name: str) -> dict[str, Any]:
        try:
            return self.objects[(group, plural, namespace, name)]
        except KeyError:
            raise ApiException(status=404, reason="Not Found") from None

    def _bump(self, obj: dict[str, Any]) -> None:
        meta = obj.setdefault("metadata", {})
        meta["resourceVersion"] = str(int(meta.get("resourceVersion") or 0) + 1)

    def put(self, group: str, plural: str, namespace: str | None, obj: dict[str, Any]) -> None:
        """Seed an object without recording a mutation."""
        stored = copy.deepcopy(obj)
        stored["metadata"].setdefault("resourceVersion", "1")
        self.objects[(group, plural, namespace, stored["metadata"]["name"])] = stored

    def peek(self, group: str, plural: str, namespace: str | None, name: str) -> dict[str, Any] | None:
        return self.objects.get((group, plural, namespace, name))

    def get_namespaced_custom_object(self, group, version, namespace, plural, name, **kwargs):
        self._check("get", plural, kwargs)
        return copy.deepcopy(self._stored(group, plural, namespace, name))

    def get_cluster_custom_object(self, group, version, plural, name, **kwargs):
        self._check("get", plural, kwargs)
        return copy.deepcopy(self._stored(group, plural, None, name))

    def list_cluster_custom_object(self, group, version, plural, **kwargs):
        self._check("list", plural, kwargs)
        if plural in self.missing_crds:
            raise ApiException(status=404, reason="Not Found")
        items = [copy.deepcopy(obj) for (g, p, _, _), obj in self.objects.items() if g == group and p == plural]
        return {"items": items}

    def create_namespaced_custom_object(self, group, version, namespace, plural, body, **kwargs):
        self._check("create", plural, kwargs)
        name = body["metadata"]["name"]
        if (group, plural, namespace, name) in self.objects:
            raise ApiException(status=409, reason="AlreadyExists")
        stored = copy.deepcopy(body)
        self._uid_counter += 1
        stored["metadata"].setdefault("uid", f"created-{self._uid_counter}")
        self._bump(stored)
        self.objects[(group, plural, namespace, name)] = stored
        self.mutations.append(("create", plural, name))
        return copy.deepcopy(stored)

    def _replace(self, group, namespace, plural, name, body, status_only):
        current = self._stored(group, plural, namespace, name)
        if body["metadata"].get("resourceVersion") != current["metadata"].get("resourceVersion"):
            raise ApiException(status=409, reason="Conflict")
        if status_only:
            stored = copy.deepcopy(current)
            stored["status"] = copy.deepcopy(body.get("status", {}))
        else:
            stored = copy.deepcopy(body)
            if "status" in current:
                stored["status"] = copy.deepcopy(current["status"])
            else:
                stored.pop("status", None)
        self._bump(stored)
        self.objects[(group, plural, namespace, name)] = stored
        return copy.deepcopy(stored)

    def replace_namespaced_custom_object(self, group, version, namespace, plural, name, body, **kwargs):
        self._check("replace", plural, kwargs)
        result = self._replace(group, namespace, plural, name, body, status_only=False)
        self.mutations.append(("replace", plural, name))
        return result

    def replace_namespaced_custom_object_status(self, group, version, namespace, plural, name, body, **kwargs):
        self._check("replace_status", plural, kwargs)
        result = self._replace(group, namespace, plural, name, body, status_only=True)
        self.mutations.append(("replace_status", plural, name))
        return result

    def delete_namespaced_custom_object(self, group, version, namespace, plural, name, **kwargs):
        self._check("delete", plural, kwargs)
        stored = self._stored(group, plural, namespace, name)
        self.mutations.append(("delete", plural, name))
        if stored["metadata"].get("finalizers"):
            stored["metadata"].setdefault("deletionTimestamp", "2026-10-18T12:00:00Z")
        else:
            del self.objects[(group, plural, namespace, name)]
        return {"status": "Success"}


class FakeCoreV1Api:
    """CoreV1Api that only knows which namespaces exist."""

    def __init__(self) -> None:
        self.namespaces: set[str] = set()

    def read_namespace(self, name, **kwargs):
        if name not in self.namespaces:
            raise ApiException(status=404, reason="Not Found")
        return {"metadata": {"name": name}}


def make_pattern(**spec_overrides: Any) -> dict[str, Any]:
    """Build a fresh Pattern object as the API server would return it."""
    spec: dict[str, Any] = {
        "gitSpec": {"targetRepo": "https://github.com/validatedpatterns/multicloud-gitops"},
    }
    spec.update(spec_overrides)
    return {
        "apiVersion": f"{API_GROUP}/v1alpha1",
        "kind": "Pattern",
        "metadata": {
            "name": PATTERN_NAME,
            "namespace": PATTERN_NAMESPACE,
            "uid": PATTERN_UID,
            "resourceVersion": "1",
        },
        "spec": spec,
    }


def seed_cluster_metadata(api: FakeCustomObjectsApi, domain: str = "apps.hub.example.com") -> None:
    api.put(CONFIG_GROUP, "clusterversions", None, {"metadata": {"name": "version"}, "spec": {"clusterID": "c0ffee-1234"}})
    api.put(
        CONFIG_GROUP,
        "infrastructures",
        None,
        {"metadata": {"name": "cluster"}, "spec": {"platformSpec": {"type": "AWS"}}},
    )
    api.put(CONFIG_GROUP, "ingresses", None, {"metadata": {"name": "cluster"}, "spec": {"domain": domain}})


@pytest.fixture
def custom_api() -> FakeCustomObjectsApi:
    api = FakeCustomObjectsApi()
    seed_cluster_metadata(api)
    api.missing_crds.add("multiclusterhubs")
    return api


@pytest.fixture
def core_api() -> FakeCoreV1Api:
    api = FakeCoreV1Api()
    api.namespaces.add(PATTERN_NAMESPACE)
    return api


@pytest.fixture
def cluster_metadata() -> dict[str, dict[str, Any]]:
    """Return values for a mocked ClusterMetadataProvider."""
    return {
        "version": {"spec": {"clusterID": "c0ffee-1234"}},
        "infrastructure": {"spec": {"platformSpec": {"type": "AWS"}}},
        "ingress": {"spec": {"domain": "apps.hub.example.com"}},
    }


@pytest.fixture
def handler(custom_api: FakeCustomObjectsApi, core_api: FakeCoreV1Api) -> PatternHandler:
    return PatternHandler(
        patterns=PatternStore(custom_api),
        cluster=OpenShiftClusterMetadata(custom_api),
        cluster_state=ClusterState(custom_api, core_api),
        subscriptions=SubscriptionKind(custom_api),
        applications=ApplicationKind(custom_api),
    )


@pytest.fixture
def seed_pattern(custom_api: FakeCustomObjectsApi):
    """Return a function that stores a Pattern in the fake API."""

    def _seed(pattern: dict[str, Any] | None = None) -> None:
        custom_api.put(API_GROUP, PLURAL_PATTERNS, PATTERN_NAMESPACE, pattern or make_pattern())

    return _seed
