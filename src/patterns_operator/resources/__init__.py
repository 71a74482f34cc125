"""Downstream resource kinds owned by a Pattern."""

from .application import ApplicationKind, sync_status
from .base import Classification, OwnedResourceKind, classify, owner_reference
from .subscription import SubscriptionKind

__all__ = [
    "ApplicationKind",
    "Classification",
    "OwnedResourceKind",
    "SubscriptionKind",
    "classify",
    "owner_reference",
    "sync_status",
]
