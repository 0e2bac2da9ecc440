"""Data models for k8s-report."""

from .config import ReportConfig
from .report import ClusterReport, ReportFormat, ReportSection

__all__ = [
    "ReportConfig",
    "ClusterReport",
    "ReportFormat",
    "ReportSection",
]
