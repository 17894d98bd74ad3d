"""Interface to the external compiler frontend."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

from moveexport.config import ExporterConfig
from moveexport.model.env import GlobalEnv
from moveexport.staging import source_root


@dataclass
class CompilerOptions:
    """What the frontend is asked to compile."""

    sources: list[str] = field(default_factory=list)
    named_address_mapping: list[str] = field(default_factory=list)  # "name=0x1"
    dependencies: list[str] = field(default_factory=list)

    @classmethod
    def for_package(cls, package_root: Path, config: ExporterConfig) -> CompilerOptions:
        return cls(
            sources=[str(source_root(package_root, config))],
            named_address_mapping=config.address_mapping(),
            dependencies=list(config.dependencies),
        )


class Frontend(ABC):
    """Compiles a package and returns its model view."""

    @abstractmethod
    def compile(self, options: CompilerOptions) -> GlobalEnv:
        """Compile the configured sources.

        Compilation problems are reported through the returned environment's
        diagnostics (`GlobalEnv.has_errors()`), not raised.

        Raises:
            CompilationError: If the frontend itself cannot be run.
        """
        ...
