"""Cluster report generator."""

from datetime import datetime
from pathlib import Path
from typing import List, Optional

from ..k8s import K8sClient
from ..model.report import ClusterReport, ReportFormat, ReportSection
from ..utils.logger import get_logger
from ..utils.text import strip_ansi_codes
from .sections import REPORT_SECTIONS, USEFUL_COMMANDS, SectionSpec

logger = get_logger(__name__)

FENCE = "```"


class ClusterReporter:
    """Runs the report queries in order and renders the result."""

    def __init__(
        self,
        client: K8sClient,
        sections: Optional[List[SectionSpec]] = None,
        strip_ansi: bool = False,
    ):
        self.client = client
        self.sections = REPORT_SECTIONS if sections is None else sections
        self.strip_ansi = strip_ansi

    def collect(self, kubeconfig: Path) -> ClusterReport:
        """Run every section query, substituting fallbacks for failures."""
        logger.info("Collecting cluster report sections")
        report = ClusterReport(timestamp=datetime.now(), kubeconfig=kubeconfig)

        for spec in self.sections:
            report.sections.append(self._run_section(spec))

        failed = report.failed_sections
        if failed:
            logger.warning(f"{len(failed)} of {len(report.sections)} sections used fallback output")
        return report

    def _run_section(self, spec: SectionSpec) -> ReportSection:
        """Run one query and capture its output."""
        success, output = self.client.execute(spec.args)

        if success and spec.transform:
            try:
                output = spec.transform(output)
            except (ValueError, KeyError, TypeError, AttributeError) as e:
                logger.warning(f"Could not process output of '{spec.command}': {e}")
                success = False

        if not success:
            logger.warning(f"Query '{spec.command}' failed, using fallback for {spec.key}")
            output = spec.fallback_message()

        output = output.rstrip("\n")
        if self.strip_ansi:
            output = strip_ansi_codes(output)

        return ReportSection(
            key=spec.key,
            title=spec.title,
            plain_title=spec.plain_title,
            level=spec.level,
            group=spec.group,
            plain_group=spec.plain_group,
            output=output,
            footer=spec.footer,
            succeeded=success,
        )

    def render(self, report: ClusterReport, output_format: ReportFormat) -> str:
        """Render a collected report."""
        if output_format == ReportFormat.MARKDOWN:
            return self._format_markdown_report(report)
        return self._format_text_report(report)

    def generate_report(self, kubeconfig: Path, output_format: ReportFormat) -> str:
        """Collect and render a report in one step."""
        return self.render(self.collect(kubeconfig), output_format)

    def _format_text_report(self, report: ClusterReport) -> str:
        """Format report as plain console text."""
        lines = []
        lines.append("=== Kubernetes Cluster Explorer ===")
        lines.append(f"Using kubeconfig: {report.kubeconfig}")
        lines.append("")

        current_group = None
        for section in report.sections:
            if section.plain_group and section.plain_group != current_group:
                lines.append(section.plain_group)
            current_group = section.plain_group

            lines.append(section.plain_title)
            if section.output:
                lines.append(section.output)
            if section.footer:
                lines.append(section.footer)
            lines.append("")

        return "\n".join(lines)

    def _format_markdown_report(self, report: ClusterReport) -> str:
        """Format report as Markdown with fenced command output."""
        lines = []
        lines.append("# Kubernetes Cluster Report")
        lines.append(f"Generated on: {report.timestamp.strftime('%a %b %d %H:%M:%S %Y')}")
        lines.append(f"Kubeconfig: {report.kubeconfig}")
        lines.append("")

        current_group = None
        for section in report.sections:
            if section.group and section.group != current_group:
                lines.append(f"## {section.group}")
                lines.append("")
            current_group = section.group

            lines.append(f"{'#' * section.level} {section.title}")
            lines.append(FENCE)
            if section.output:
                lines.append(section.output)
            if section.footer:
                lines.append(section.footer)
            lines.append(FENCE)
            lines.append("")

        lines.append("## Useful Commands for Resource Management")
        lines.append("")
        lines.append(f"{FENCE}bash")
        lines.extend(USEFUL_COMMANDS)
        lines.append(FENCE)

        return "\n".join(lines) + "\n"
