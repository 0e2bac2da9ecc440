"""Report-related models."""

from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field


class ReportFormat(str, Enum):
    """Supported report formats."""

    TEXT = "text"
    MARKDOWN = "markdown"


class ReportSection(BaseModel):
    """Captured output of one cluster query."""

    key: str
    title: str
    plain_title: str
    level: int = 2
    group: Optional[str] = None
    plain_group: Optional[str] = None
    output: str = ""
    footer: Optional[str] = None
    succeeded: bool = True


class ClusterReport(BaseModel):
    """Complete cluster report."""

    timestamp: datetime
    kubeconfig: Path
    sections: List[ReportSection] = Field(default_factory=list)

    @property
    def failed_sections(self) -> List[ReportSection]:
        """Sections whose query failed and carry a fallback message."""
        return [section for section in self.sections if not section.succeeded]
