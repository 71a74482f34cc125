"""Kubernetes operator that bootstraps validated patterns through OpenShift GitOps."""

__version__ = "0.1.0"
