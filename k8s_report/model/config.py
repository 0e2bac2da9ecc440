"""Run configuration model."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .report import ReportFormat


class ReportConfig(BaseModel):
    """Options for one report run, resolved before any query runs."""

    model_config = ConfigDict(frozen=True)

    kubeconfig: Path
    report_format: ReportFormat = ReportFormat.TEXT
    markdown_file: Optional[Path] = None
    pdf_file: Optional[Path] = None
    pdf_only: bool = False
    install_metrics_server: bool = False

    @property
    def convert_to_pdf(self) -> bool:
        """Whether the Markdown report is converted to PDF."""
        return self.pdf_file is not None

    @property
    def writes_file(self) -> bool:
        """Whether the report is written to a file instead of the console."""
        return self.markdown_file is not None
