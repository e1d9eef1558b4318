"""Exceptions raised by k8s-api-docgen."""

from __future__ import annotations


class DocgenError(Exception):
    """Base exception for documentation generation."""

    pass


class GoSyntaxError(DocgenError):
    """Raised when Go source cannot be parsed."""

    def __init__(self, message: str, line: int | None = None):
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line


class UnreadableSourceError(DocgenError):
    """Raised when an input file cannot be read or parsed.

    Extraction is all-or-nothing, so this aborts the whole run.
    """

    def __init__(self, path: str, reason: str):
        super().__init__(f"cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


class UnsupportedOutputFormatError(DocgenError):
    """Raised when the requested output format has no generator."""

    def __init__(self, output_format: str, supported: tuple[str, ...] = ()):
        message = f"unsupported output format: {output_format!r}"
        if supported:
            message += f" (supported: {', '.join(supported)})"
        super().__init__(message)
        self.output_format = output_format


class ConfigError(DocgenError):
    """Raised when a configuration file is missing or invalid."""

    pass


class TemplateRenderError(DocgenError):
    """Raised when a Markdown template cannot be compiled or rendered."""

    pass
