"""Errors raised while reconciling a Pattern."""

from __future__ import annotations


class PatternOperatorError(Exception):
    """Base class for all operator errors."""


class DefaultingError(PatternOperatorError):
    """Cluster metadata needed to qualify a Pattern could not be read."""


class ValidationError(PatternOperatorError):
    """The Pattern spec is structurally invalid."""


class InvalidTargetRepo(ValidationError):
    """The target repository URL is not an http/https URL."""


class OwnershipConflict(PatternOperatorError):
    """A downstream resource exists but belongs to something else."""


class PendingCondition(PatternOperatorError):
    """An expected wait; the reconcile should simply be retried later."""


class NamespaceNotReady(PendingCondition):
    """The namespace provisioned by the GitOps engine does not exist yet."""

    def __init__(self, namespace: str) -> None:
        super().__init__("waiting for creation")
        self.namespace = namespace
