"""Clients for the Kubernetes and OpenShift APIs."""
