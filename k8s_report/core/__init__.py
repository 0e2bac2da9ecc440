"""Core business logic."""

from .config import build_report_config
from .kubeconfig import find_kubeconfig, resolve_kubeconfig
from .pdf import PdfConverter
from .reporter import ClusterReporter
from .sections import REPORT_SECTIONS, SectionSpec

__all__ = [
    "build_report_config",
    "find_kubeconfig",
    "resolve_kubeconfig",
    "PdfConverter",
    "ClusterReporter",
    "REPORT_SECTIONS",
    "SectionSpec",
]
