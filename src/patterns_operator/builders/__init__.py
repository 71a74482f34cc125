"""Builders for qualified Patterns and their owned resources."""

from .application import application_name, build_application
from .pattern import apply_defaults, is_deleting
from .subscription import build_subscription

__all__ = [
    "apply_defaults",
    "application_name",
    "build_application",
    "build_subscription",
    "is_deleting",
]
