"""Report run configuration."""

import tempfile
from pathlib import Path
from typing import Optional

from ..exceptions import ReportWriteError
from ..model.config import ReportConfig
from ..model.report import ReportFormat

DEFAULT_MARKDOWN_FILE = "k8s_resources_report.md"


def pdf_path_for(markdown_file: Path) -> Path:
    """PDF path derived from a Markdown file name."""
    if markdown_file.suffix == ".md":
        return markdown_file.with_suffix(".pdf")
    return markdown_file.with_name(markdown_file.name + ".pdf")


def _check_writable(path: Path) -> None:
    """Fail early when the report file cannot be created."""
    if not path.parent.is_dir():
        raise ReportWriteError(f"Directory does not exist for report file: {path}")
    if path.is_dir():
        raise ReportWriteError(f"Report path is a directory: {path}")


def build_report_config(
    kubeconfig: Path,
    markdown: bool = False,
    markdown_name: Optional[str] = None,
    pdf: bool = False,
    install_metrics_server: bool = False,
    cwd: Optional[Path] = None,
) -> ReportConfig:
    """Resolve output mode and file paths for a report run."""
    cwd = Path.cwd() if cwd is None else Path(cwd)

    markdown_file = None
    pdf_file = None
    pdf_only = False

    if markdown:
        markdown_file = cwd / (markdown_name or DEFAULT_MARKDOWN_FILE)
        _check_writable(markdown_file)
        if pdf:
            pdf_file = pdf_path_for(markdown_file)
    elif pdf:
        # PDF-only: the Markdown is an intermediate temporary file
        pdf_only = True
        pdf_file = cwd / pdf_path_for(Path(markdown_name or DEFAULT_MARKDOWN_FILE))
        _check_writable(pdf_file)
        handle = tempfile.NamedTemporaryFile(prefix="k8s_report_", suffix=".md", delete=False)
        handle.close()
        markdown_file = Path(handle.name)

    report_format = ReportFormat.MARKDOWN if markdown_file else ReportFormat.TEXT

    return ReportConfig(
        kubeconfig=kubeconfig,
        report_format=report_format,
        markdown_file=markdown_file,
        pdf_file=pdf_file,
        pdf_only=pdf_only,
        install_metrics_server=install_metrics_server,
    )
