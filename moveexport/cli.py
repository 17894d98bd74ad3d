"""Click CLI: export a Move file or package as JSON on stdout."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import click

from moveexport import __version__
from moveexport.config import load_config
from moveexport.errors import ExportError
from moveexport.export.schema import ExportFormat
from moveexport.exporter import export_path
from moveexport.frontend import create_frontend
from moveexport.logging import get_logger, new_correlation_id, setup_logging


class ExportFailed(click.ClickException):
    """Reports an `ExportError` on stderr with the error's exit code."""

    def __init__(self, err: ExportError):
        super().__init__(str(err))
        self.exit_code = err.exit_code


@click.command()
@click.version_option(version=__version__, prog_name="moveexport")
@click.argument("path", type=click.Path(path_type=Path))
@click.option(
    "--format",
    "-f",
    "fmt",
    type=click.Choice([f.value for f in ExportFormat]),
    default=ExportFormat.BASIC.value,
    show_default=True,
    help="Output format.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Exporter configuration (YAML).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.option("--json-logs", is_flag=True, help="Output structured JSON logs.")
def main(
    path: Path,
    fmt: str,
    config_path: Optional[Path],
    verbose: bool,
    json_logs: bool,
):
    """Export the compiled model of PATH (a .move file or package directory)."""
    new_correlation_id()
    setup_logging(logging.DEBUG if verbose else logging.WARNING, structured=json_logs)
    log = get_logger("cli")

    try:
        config = load_config(config_path)
        text = export_path(
            path,
            config=config,
            frontend=create_frontend(config),
            fmt=ExportFormat(fmt),
        )
    except ExportError as e:
        log.debug(f"Export failed: {type(e).__name__}")
        raise ExportFailed(e) from e

    click.echo(text)


if __name__ == "__main__":
    main()
