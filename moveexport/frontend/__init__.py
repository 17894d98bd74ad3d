"""Compiler frontends that produce a `GlobalEnv`."""

from moveexport.config import ExporterConfig
from moveexport.frontend.base import CompilerOptions, Frontend
from moveexport.frontend.command import CommandFrontend


def create_frontend(config: ExporterConfig) -> Frontend:
    """Frontend described by the configuration."""
    return CommandFrontend(config.frontend_command)


__all__ = [
    "CommandFrontend",
    "CompilerOptions",
    "Frontend",
    "create_frontend",
]
