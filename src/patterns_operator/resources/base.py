"""Ownership and drift classification shared by every owned resource kind."""

from __future__ import annotations

import abc
import enum
from typing import Any

from ..constants import API_GROUP_VERSION, KIND_PATTERN


class Classification(enum.Enum):
    """How an observed object relates to its desired target."""

    MISSING = "missing"
    OWNED_AND_SYNCED = "owned-and-synced"
    OWNED_AND_DRIFTED = "owned-and-drifted"
    NOT_OWNED = "not-owned"


def owner_reference(pattern: dict[str, Any]) -> dict[str, Any]:
    """Owner reference pointing back at a Pattern."""
    meta = pattern["metadata"]
    return {
        "apiVersion": API_GROUP_VERSION,
        "kind": KIND_PATTERN,
        "name": meta["name"],
        "uid": meta["uid"],
    }


def _same_owner(expected: dict[str, Any], actual: dict[str, Any]) -> bool:
    return all(expected.get(key) == actual.get(key) for key in ("kind", "name", "uid"))


class OwnedResourceKind(abc.ABC):
    """Capabilities the reconcilers need from one downstream resource kind.

    Subclasses talk to the API for one kind and say which fields this
    operator manages; everything else about ownership and drift lives here.
    """

    kind: str

    @abc.abstractmethod
    def fetch(self, name: str, namespace: str) -> dict[str, Any] | None:
        """Return the live object, or None if it does not exist."""

    @abc.abstractmethod
    def create(self, body: dict[str, Any]) -> dict[str, Any]:
        """Create the object."""

    @abc.abstractmethod
    def update(self, body: dict[str, Any]) -> dict[str, Any]:
        """Replace the object; ``body`` carries the live resourceVersion."""

    @abc.abstractmethod
    def managed_fields(self, obj: dict[str, Any]) -> dict[str, Any]:
        """Extract the fields this operator keeps in line with the target."""

    @abc.abstractmethod
    def apply_managed_fields(self, target: dict[str, Any], observed: dict[str, Any]) -> dict[str, Any]:
        """Return a copy of ``observed`` with the target's managed fields."""

    def owner_references(self, obj: dict[str, Any]) -> list[dict[str, Any]]:
        return obj.get("metadata", {}).get("ownerReferences") or []

    def is_owned_by_same(self, target: dict[str, Any], observed: dict[str, Any]) -> bool:
        """True if every owner of the target is also an owner of the observed object."""
        expected = self.owner_references(target)
        actual = self.owner_references(observed)
        if not expected:
            return False
        return all(any(_same_owner(ref, other) for other in actual) for ref in expected)

    def is_drifted(self, target: dict[str, Any], observed: dict[str, Any]) -> bool:
        return self.managed_fields(target) != self.managed_fields(observed)

    def update_if_changed(self, target: dict[str, Any], observed: dict[str, Any]) -> bool:
        """Update the observed object when it drifted from the target.

        Returns:
            True if an update was issued

        Raises:
            client.exceptions.ApiException: If the update failed
        """
        if not self.is_drifted(target, observed):
            return False
        self.update(self.apply_managed_fields(target, observed))
        return True


def classify(
    kind: OwnedResourceKind,
    target: dict[str, Any],
    observed: dict[str, Any] | None,
) -> Classification:
    """Compare a desired object with what is live in the cluster.

    Args:
        kind: Capability set for the resource kind
        target: Locally built desired object
        observed: Live object, or None when it does not exist

    Returns:
        The classification driving the reconciler's next action
    """
    if observed is None:
        return Classification.MISSING
    if not kind.is_owned_by_same(target, observed):
        return Classification.NOT_OWNED
    if kind.is_drifted(target, observed):
        return Classification.OWNED_AND_DRIFTED
    return Classification.OWNED_AND_SYNCED
