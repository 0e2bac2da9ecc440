"""Main CLI interface using Typer."""

import logging
import shutil
from pathlib import Path
from typing import Iterable, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from .. import __version__
from ..core import ClusterReporter, PdfConverter, build_report_config, find_kubeconfig, resolve_kubeconfig
from ..core.kubeconfig import (
    DEFAULT_KUBECONFIG_FILE,
    check_cluster_access,
    copy_kubeconfig,
    kubeconfig_locations,
    validate_kubeconfig,
)
from ..exceptions import ConverterNotFoundError, ReportError, ReportWriteError
from ..k8s import K8sClient, MetricsServerInstaller
from ..model.config import ReportConfig
from ..model.report import ReportFormat
from ..utils.logger import get_logger, set_log_level

# Create CLI app
app = typer.Typer(
    name="k8s-report",
    help="Generate Kubernetes cluster resource reports",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

console = Console()
logger = get_logger(__name__)


def _fail(message: str, hints: Iterable[str] = ()) -> NoReturn:
    """Print an error and exit non-zero."""
    console.print(f"[red]Error:[/red] {escape(message)}")
    for hint in hints:
        console.print(f"  {escape(hint)}")
    raise typer.Exit(1)


def _write_report(path: Path, content: str) -> None:
    try:
        path.write_text(content)
    except OSError as e:
        raise ReportWriteError(f"Cannot write report to {path}: {e}")


def _convert_to_pdf(config: ReportConfig) -> None:
    """Convert the written Markdown report and tidy up PDF-only temp files."""
    console.print("Converting markdown to PDF...")
    try:
        pdf_path = PdfConverter().convert(config.markdown_file, config.pdf_file)
    except ReportError as e:
        hints = e.hints if isinstance(e, ConverterNotFoundError) else []
        if config.pdf_only:
            hints = list(hints) + [f"PDF conversion failed. Markdown file preserved at: {config.markdown_file}"]
        _fail(str(e), hints)

    console.print(f"[green]✓[/green] PDF report saved to: [cyan]{pdf_path}[/cyan]")
    if config.pdf_only:
        config.markdown_file.unlink(missing_ok=True)
        logger.debug(f"Removed temporary markdown file {config.markdown_file}")


@app.command()
def report(
    kubeconfig: Optional[str] = typer.Option(
        None,
        "--kubeconfig",
        "-k",
        help=f"Path to kubeconfig file (default: KUBECONFIG env var, then ./{DEFAULT_KUBECONFIG_FILE})",
    ),
    markdown: bool = typer.Option(False, "--markdown", "-md", help="Output in markdown format"),
    markdown_name: Optional[str] = typer.Option(
        None, "--markdown-name", "-mn", help="Markdown output file name (default: k8s_resources_report.md)"
    ),
    pdf: bool = typer.Option(
        False, "--pdf", "-pdf", help="Convert markdown to PDF (saves to current directory)"
    ),
    metrics_server: bool = typer.Option(
        False,
        "--metrics-server",
        "-m",
        help="Install metrics server if not present (for resource usage data)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Explore the cluster and print or save a resource report."""
    if verbose:
        set_log_level(logging.DEBUG)

    try:
        config = build_report_config(
            resolve_kubeconfig(kubeconfig),
            markdown=markdown,
            markdown_name=markdown_name,
            pdf=pdf,
            install_metrics_server=metrics_server,
        )
    except ReportError as e:
        _fail(str(e))

    try:
        client = K8sClient(kubeconfig=config.kubeconfig)

        if config.install_metrics_server:
            with console.status("[bold green]Checking metrics server..."):
                ready = MetricsServerInstaller(client).ensure_installed()
            if not ready:
                console.print(
                    "[yellow]Warning:[/yellow] metrics server is not ready, usage sections may be unavailable"
                )

        reporter = ClusterReporter(client, strip_ansi=config.convert_to_pdf)

        if not config.writes_file:
            console.out(reporter.generate_report(config.kubeconfig, ReportFormat.TEXT), highlight=False)
            return

        if config.pdf_only:
            console.print("Generating PDF report...")
        else:
            console.print(f"Generating markdown report: [cyan]{config.markdown_file}[/cyan]")

        with console.status("[bold green]Generating cluster report..."):
            report_content = reporter.generate_report(config.kubeconfig, config.report_format)
        _write_report(config.markdown_file, report_content)
    except (ReportError, RuntimeError) as e:
        if config.pdf_only:
            config.markdown_file.unlink(missing_ok=True)
        _fail(str(e))

    if not config.pdf_only:
        console.print(f"[green]✓[/green] Report saved to: [cyan]{config.markdown_file}[/cyan]")

    if config.convert_to_pdf:
        _convert_to_pdf(config)


@app.command("retrieve-kubeconfig")
def retrieve_kubeconfig(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite ./kubeconfig.yaml without asking"),
):
    """Find a kubeconfig and copy it to ./kubeconfig.yaml."""
    console.print(f"Current directory: [cyan]{Path.cwd()}[/cyan]")
    console.print("Searching for kubeconfig files...")

    source = find_kubeconfig()
    if source is None:
        locations = [str(location) for location in kubeconfig_locations()]
        _fail("No valid kubeconfig file found!", ["Checked locations:"] + locations)

    console.print(f"[green]✓[/green] Using kubeconfig from: [cyan]{source}[/cyan]")

    target = Path.cwd() / DEFAULT_KUBECONFIG_FILE
    if target.exists() and not force:
        if not typer.confirm(f"Target file already exists: {target}. Overwrite it?", default=False):
            console.print("Operation cancelled.")
            return

    try:
        copy_kubeconfig(source, target)
    except ReportError as e:
        _fail(str(e))

    console.print(f"[green]✓[/green] Successfully created [cyan]{target}[/cyan]")

    if validate_kubeconfig(target):
        console.print("[green]✓[/green] YAML syntax is valid")
    else:
        console.print("[yellow]⚠[/yellow]  YAML syntax check failed")

    if shutil.which("kubectl"):
        console.print("Testing cluster access...")
        if check_cluster_access(target):
            console.print("[green]✓[/green] Cluster is accessible with the new kubeconfig")
        else:
            console.print("[yellow]⚠[/yellow]  Could not connect to cluster (this might be expected)")

    console.print(f"To use it with kubectl: export KUBECONFIG={target}")


@app.command()
def version():
    """Show version information."""
    console.print(f"[bold]k8s-report[/bold] version {__version__}")
    console.print("A Kubernetes cluster resource reporter")


if __name__ == "__main__":
    app()
