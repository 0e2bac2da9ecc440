"""Errors that stop a report run."""


class ReportError(Exception):
    """Base class for fatal report errors."""


class KubeconfigError(ReportError):
    """No usable kubeconfig could be resolved."""


class ReportWriteError(ReportError):
    """The report file could not be written."""


class ConverterNotFoundError(ReportError):
    """pandoc is not installed."""

    def __init__(self, message: str, hints=None):
        super().__init__(message)
        self.hints = list(hints or [])


class PdfConversionError(ReportError):
    """pandoc ran but did not produce a PDF."""
