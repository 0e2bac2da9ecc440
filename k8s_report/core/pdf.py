"""Markdown to PDF conversion through pandoc."""

import os
import shutil
import subprocess
import sys
import tempfile
from pathlib import Path
from typing import List, Optional

from ..exceptions import ConverterNotFoundError, PdfConversionError
from ..utils.logger import get_logger
from ..utils.text import strip_ansi_codes

logger = get_logger(__name__)

PDF_STYLESHEET = """\
body {
    font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Arial, sans-serif;
    margin: 40px;
    line-height: 1.6;
}
pre {
    background-color: #f5f5f5;
    padding: 10px;
    border-radius: 5px;
    overflow-x: auto;
    font-family: 'SF Mono', Monaco, 'Cascadia Code', 'Roboto Mono', Consolas, 'Courier New', monospace;
}
code {
    background-color: #f5f5f5;
    padding: 2px 4px;
    border-radius: 3px;
    font-family: 'SF Mono', Monaco, 'Cascadia Code', 'Roboto Mono', Consolas, 'Courier New', monospace;
}
h1, h2, h3 {
    color: #2c3e50;
    margin-top: 2em;
    margin-bottom: 1em;
}
table {
    border-collapse: collapse;
    width: 100%;
    margin: 1em 0;
}
th, td {
    border: 1px solid #ddd;
    padding: 8px;
    text-align: left;
}
th {
    background-color: #f2f2f2;
    font-weight: bold;
}
"""

LATEX_VARIABLES = [
    "geometry:margin=20mm",
    "fontsize=11pt",
    "documentclass=article",
    "colorlinks=true",
    "linkcolor=blue",
    "urlcolor=blue",
    "toccolor=gray",
]

WKHTMLTOPDF_OPTIONS = [
    ("--page-size", "A4"),
    ("--margin-top", "20mm"),
    ("--margin-bottom", "20mm"),
    ("--margin-left", "15mm"),
    ("--margin-right", "15mm"),
]


def install_hints(platform: Optional[str] = None) -> List[str]:
    """pandoc installation instructions for the running OS."""
    platform = platform or sys.platform
    if platform == "darwin":
        return [
            "Install pandoc on macOS with: brew install pandoc",
            "For LaTeX PDF engine, also install: brew install --cask basictex",
            "Note: wkhtmltopdf has been discontinued on macOS",
        ]
    if platform.startswith("linux"):
        return [
            "Install pandoc on Linux with: sudo apt install pandoc",
            "For better PDF formatting, also install: sudo apt install wkhtmltopdf",
        ]
    return ["Install pandoc for your system. Visit: https://pandoc.org/installing.html"]


class PdfConverter:
    """Converts Markdown reports to PDF with pandoc."""

    def __init__(self, platform: Optional[str] = None):
        self.platform = platform or sys.platform

    @property
    def pandoc_available(self) -> bool:
        return shutil.which("pandoc") is not None

    def engine(self) -> str:
        """PDF engine to use: latex on macOS, wkhtmltopdf when installed, else pandoc's default."""
        if self.platform == "darwin":
            return "latex"
        if shutil.which("wkhtmltopdf"):
            return "wkhtmltopdf"
        return "default"

    def build_command(self, source: Path, target: Path, engine: str, stylesheet: Optional[Path] = None) -> List[str]:
        """Build the pandoc command line for an engine."""
        if engine == "latex":
            cmd = ["pandoc", str(source), "-f", "markdown", "-t", "pdf"]
            for variable in LATEX_VARIABLES:
                cmd.extend(["-V", variable])
        elif engine == "wkhtmltopdf":
            cmd = ["pandoc", str(source), "-f", "markdown", "-t", "html5", "--pdf-engine=wkhtmltopdf"]
            if stylesheet:
                cmd.extend(["--css", str(stylesheet)])
            for option, value in WKHTMLTOPDF_OPTIONS:
                cmd.extend([f"--pdf-engine-opt={option}", f"--pdf-engine-opt={value}"])
        else:
            cmd = ["pandoc", str(source), "-f", "markdown", "-t", "pdf"]

        cmd.extend(["-o", str(target)])
        return cmd

    def convert(self, markdown_file: Path, pdf_file: Optional[Path] = None) -> Path:
        """Convert a Markdown file to PDF and return the PDF path.

        The Markdown is copied with ANSI escape codes removed before pandoc
        sees it. Raises ConverterNotFoundError when pandoc is missing and
        PdfConversionError when pandoc fails or a file cannot be read or written.
        """
        pdf_file = pdf_file or Path(markdown_file).with_suffix(".pdf")

        if not self.pandoc_available:
            raise ConverterNotFoundError("pandoc is not installed.", install_hints(self.platform))

        engine = self.engine()
        logger.info(f"Converting {markdown_file} to PDF with the {engine} engine")

        temp_files: List[Path] = []
        try:
            source = self._write_temp(
                strip_ansi_codes(Path(markdown_file).read_text()), ".md", temp_files
            )
            stylesheet = None
            if engine == "wkhtmltopdf":
                stylesheet = self._write_temp(PDF_STYLESHEET, ".css", temp_files)

            cmd = self.build_command(source, pdf_file, engine, stylesheet)
            logger.debug(f"Executing: {' '.join(cmd)}")
            subprocess.run(cmd, capture_output=True, text=True, check=True)
        except subprocess.CalledProcessError as e:
            message = "Failed to convert markdown to PDF"
            if e.stderr:
                message = f"{message}: {e.stderr.strip()}"
            if self.platform == "darwin":
                message = f"{message}. On macOS, you might also try: brew install --cask basictex"
            raise PdfConversionError(message)
        except OSError as e:
            raise PdfConversionError(f"Failed to convert markdown to PDF: {e}")
        finally:
            for path in temp_files:
                try:
                    os.unlink(path)
                except OSError:
                    logger.debug(f"Could not remove temporary file {path}")

        logger.info(f"PDF report saved to {pdf_file}")
        return pdf_file

    def _write_temp(self, content: str, suffix: str, temp_files: List[Path]) -> Path:
        with tempfile.NamedTemporaryFile("w", suffix=suffix, prefix="k8s_report_", delete=False) as f:
            f.write(content)
        path = Path(f.name)
        temp_files.append(path)
        return path
