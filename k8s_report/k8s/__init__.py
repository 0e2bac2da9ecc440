"""Kubernetes interaction module."""

from .client import K8sClient
from .metrics import MetricsServerInstaller

__all__ = ["K8sClient", "MetricsServerInstaller"]
