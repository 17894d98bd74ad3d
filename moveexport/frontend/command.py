"""Frontend that shells out to an external model-dump command."""

from __future__ import annotations

import json
import subprocess
from typing import Sequence

from moveexport.errors import CompilationError
from moveexport.frontend.base import CompilerOptions, Frontend
from moveexport.logging import get_logger
from moveexport.model.dump import load_env
from moveexport.model.env import Diagnostic, GlobalEnv, Severity

log = get_logger("frontend")


class CommandFrontend(Frontend):
    """Runs `<command> --source S --named-address N=A --dependency D ...`.

    The command prints a JSON model dump (see `moveexport.model.dump`) on stdout
    and human-readable diagnostics on stderr.
    """

    def __init__(self, command: Sequence[str]):
        if not command:
            raise ValueError("command must not be empty")
        self.command = list(command)

    def build_argv(self, options: CompilerOptions) -> list[str]:
        argv = list(self.command)
        for src in options.sources:
            argv += ["--source", src]
        for mapping in options.named_address_mapping:
            argv += ["--named-address", mapping]
        for dep in options.dependencies:
            argv += ["--dependency", dep]
        return argv

    def compile(self, options: CompilerOptions) -> GlobalEnv:
        argv = self.build_argv(options)
        log.debug(f"Running frontend: {' '.join(argv)}")
        try:
            proc = subprocess.run(argv, capture_output=True, text=True, check=False)
        except FileNotFoundError as e:
            raise CompilationError(f"Frontend executable not found: {argv[0]}") from e
        except OSError as e:
            raise CompilationError(f"Cannot run frontend {argv[0]}: {e}") from e

        stderr_lines = [line for line in proc.stderr.splitlines() if line.strip()]
        for line in stderr_lines:
            log.warning(line)

        if not proc.stdout.strip():
            if proc.returncode == 0:
                raise CompilationError("Frontend produced no model dump")
            return GlobalEnv(
                diagnostics=[
                    Diagnostic(Severity.ERROR, f"frontend exited with status {proc.returncode}")
                ]
                + [Diagnostic(Severity.ERROR, line) for line in stderr_lines]
            )

        try:
            env = load_env(json.loads(proc.stdout))
        except ValueError as e:  # JSONDecodeError is a ValueError too
            raise CompilationError(f"Unreadable model dump from {argv[0]}: {e}") from e

        if proc.returncode != 0 and not env.has_errors():
            env.diagnostics.append(
                Diagnostic(Severity.ERROR, f"frontend exited with status {proc.returncode}")
            )
        return env
