"""Error taxonomy for an export run.

Every error is fatal: the run stops, a message goes to stderr, and no JSON is
written to stdout.
"""

from __future__ import annotations

from typing import Optional

# Exit codes (click itself uses 2 for usage errors)
EXIT_FAILURE = 1
EXIT_INTERNAL = 2


class ExportError(Exception):
    """Base class for all export failures."""

    exit_code = EXIT_FAILURE


class ConfigError(ExportError):
    """The exporter configuration file is unreadable or invalid."""


class StagingError(ExportError):
    """Creating the package directory, copying the source or writing the manifest failed."""


class CompilationError(ExportError):
    """The frontend reported errors or could not be run."""

    def __init__(self, message: str, diagnostics: Optional[list[str]] = None):
        super().__init__(message)
        self.diagnostics = diagnostics or []

    def __str__(self) -> str:
        text = super().__str__()
        if self.diagnostics:
            text += "\n" + "\n".join(f"  {d}" for d in self.diagnostics)
        return text


class SerializationError(ExportError):
    """The assembled document could not be encoded as JSON."""

    exit_code = EXIT_INTERNAL
