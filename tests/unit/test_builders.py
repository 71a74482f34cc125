"""Tests for the Subscription and Application builders."""

from __future__ import annotations

import pytest

from conftest import PATTERN_UID
from patterns_operator.builders import application_name, build_application, build_subscription
from patterns_operator.builders.application import build_parameters, build_sync_policy, build_value_files
from patterns_operator.constants import ARGO_CASCADE_FINALIZER, LABEL_PATTERN


@pytest.fixture
def qualified():
    """A Pattern after defaulting."""
    return {
        "metadata": {"name": "multicloud-gitops", "namespace": "patterns", "uid": PATTERN_UID},
        "spec": {
            "clusterGroupName": "hub",
            "gitSpec": {
                "targetRepo": "https://github.com/validatedpatterns/multicloud-gitops",
                "targetRevision": "main",
                "hostname": "github.com",
                "valuesDirectoryURL": "https://raw.example.com/values/",
            },
            "gitOpsSpec": {
                "operatorChannel": "stable",
                "operatorSource": "redhat-operators",
                "operatorCSV": "v1.4.0",
            },
        },
        "status": {
            "clusterID": "c0ffee-1234",
            "clusterPlatform": "AWS",
            "clusterName": "hub",
            "clusterDomain": "apps.hub.example.com",
        },
    }


class TestBuildSubscription:
    """Test cases for build_subscription."""

    def test_identity(self, qualified):
        sub = build_subscription(qualified)

        assert sub["apiVersion"] == "operators.coreos.com/v1alpha1"
        assert sub["kind"] == "Subscription"
        assert sub["metadata"]["name"] == "openshift-gitops-operator"
        assert sub["metadata"]["namespace"] == "openshift-operators"
        assert sub["metadata"]["ownerReferences"][0]["uid"] == PATTERN_UID

    def test_spec(self, qualified):
        """Test the channel, source and starting CSV come from gitOpsSpec."""
        spec = build_subscription(qualified)["spec"]

        assert spec["name"] == "openshift-gitops-operator"
        assert spec["source"] == "redhat-operators"
        assert spec["sourceNamespace"] == "openshift-marketplace"
        assert spec["channel"] == "stable"
        assert spec["startingCSV"] == "openshift-gitops-operator.v1.4.0"
        assert spec["installPlanApproval"] == "Automatic"

    def test_cluster_config_namespaces(self, qualified):
        env = build_subscription(qualified)["spec"]["config"]["env"]
        assert env == [{"name": "ARGOCD_CLUSTER_CONFIG_NAMESPACES", "value": "openshift-gitops, patterns"}]


class TestBuildApplication:
    """Test cases for build_application."""

    def test_name(self, qualified):
        assert application_name(qualified) == "multicloud-gitops-hub"

    def test_metadata(self, qualified):
        meta = build_application(qualified)["metadata"]

        assert meta["namespace"] == "openshift-gitops"
        assert meta["labels"] == {LABEL_PATTERN: "multicloud-gitops"}
        assert meta["finalizers"] == [ARGO_CASCADE_FINALIZER]
        assert meta["ownerReferences"] == [
            {
                "apiVersion": "gitops.hybrid-cloud-patterns.io/v1alpha1",
                "kind": "Pattern",
                "name": "multicloud-gitops",
                "uid": PATTERN_UID,
            }
        ]

    def test_source_and_destination(self, qualified):
        spec = build_application(qualified)["spec"]

        assert spec["project"] == "default"
        assert spec["source"]["repoURL"] == "https://github.com/validatedpatterns/multicloud-gitops"
        assert spec["source"]["targetRevision"] == "main"
        assert spec["source"]["path"] == "common/clustergroup"
        assert spec["source"]["helm"]["ignoreMissingValueFiles"] is True
        assert spec["destination"] == {"server": "https://kubernetes.default.svc", "namespace": "patterns"}

    def test_value_files_layering(self, qualified):
        """Test value files go from most generic to most specific."""
        assert build_value_files(qualified) == [
            "https://raw.example.com/values/values-global.yaml",
            "https://raw.example.com/values/values-hub.yaml",
            "https://raw.example.com/values/values-AWS.yaml",
            "https://raw.example.com/values/values-AWS-hub.yaml",
            "https://raw.example.com/values/values-hub.yaml",
        ]

    def test_value_files_without_directory(self, qualified):
        del qualified["spec"]["gitSpec"]["valuesDirectoryURL"]
        assert build_value_files(qualified)[0] == "/values-global.yaml"

    def test_parameters(self, qualified):
        params = {p["name"]: p["value"] for p in build_parameters(qualified)}

        assert params["global.pattern"] == "multicloud-gitops"
        assert params["global.namespace"] == "patterns"
        assert params["global.repoURL"] == "https://github.com/validatedpatterns/multicloud-gitops"
        assert params["global.targetRevision"] == "main"
        assert params["global.hostname"] == "github.com"
        assert params["global.hubClusterDomain"] == "apps.hub.example.com"
        assert params["global.clusterPlatform"] == "AWS"
        assert params["main.clusterGroupName"] == "hub"

    def test_extra_parameters_appended(self, qualified):
        """Test that extraParameters follow the built-in parameters in order."""
        qualified["spec"]["extraParameters"] = [
            {"name": "global.foo", "value": "bar"},
            {"name": "clusterGroup.isHubCluster", "value": "true"},
        ]

        params = build_parameters(qualified)

        assert params[-2:] == [
            {"name": "global.foo", "value": "bar"},
            {"name": "clusterGroup.isHubCluster", "value": "true"},
        ]

    def test_sync_policy_prunes_only_when_deleting(self, qualified):
        assert build_sync_policy(qualified) == {"automated": {"prune": False, "selfHeal": False}}

        qualified["metadata"]["deletionTimestamp"] = "2026-10-18T12:00:00Z"

        assert build_sync_policy(qualified)["automated"]["prune"] is True

    def test_deterministic(self, qualified):
        assert build_application(qualified) == build_application(qualified)
