"""Kubernetes cluster resource reporter."""

__version__ = "0.1.0"
