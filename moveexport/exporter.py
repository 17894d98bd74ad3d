"""One export run: stage, compile, check, assemble, serialize."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from moveexport.config import ExporterConfig
from moveexport.errors import CompilationError
from moveexport.export.assembler import assemble
from moveexport.export.schema import ExportFormat
from moveexport.export.serializer import serialize_document
from moveexport.frontend import CompilerOptions, Frontend, create_frontend
from moveexport.logging import get_logger, timed_operation
from moveexport.model.env import GlobalEnv, Severity
from moveexport.staging import staged_package

log = get_logger("exporter")


def compile_package(path: Path, config: ExporterConfig, frontend: Frontend) -> GlobalEnv:
    """Stage `path`, compile it, and fail if the frontend reported errors.

    The staging directory (if any) is gone by the time this returns or raises.

    Raises:
        StagingError: If the input cannot be staged.
        CompilationError: If compilation reported errors.
    """
    with staged_package(path, config) as root:
        options = CompilerOptions.for_package(root, config)
        with timed_operation(log, "compile", path=str(path)) as ctx:
            env = frontend.compile(options)
            ctx["module_count"] = len(env.modules)
            ctx["diagnostic_count"] = len(env.diagnostics)

    for d in env.diagnostics:
        if d.severity == Severity.WARNING:
            log.warning(f"{d.location}: {d.message}" if d.location else d.message)

    if env.has_errors():
        raise CompilationError("Compilation failed", diagnostics=env.error_messages())
    return env


def export_path(
    path: Path,
    config: Optional[ExporterConfig] = None,
    frontend: Optional[Frontend] = None,
    fmt: ExportFormat = ExportFormat.BASIC,
) -> str:
    """Export the package at `path` and return the JSON text.

    Args:
        path: A single source file or a package directory.
        config: Exporter configuration (defaults if None).
        frontend: Compiler frontend (the configured one if None).
        fmt: Output format.

    Returns:
        Pretty-printed JSON document.
    """
    config = config or ExporterConfig()
    frontend = frontend or create_frontend(config)

    env = compile_package(Path(path), config, frontend)

    with timed_operation(log, "serialize", format=fmt.value) as ctx:
        text = serialize_document(assemble(env, fmt))
        ctx["struct_count"] = sum(m.struct_count for m in env.modules)
        ctx["function_count"] = sum(m.function_count for m in env.modules)
    return text
