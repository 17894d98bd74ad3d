"""Turn a source file or package directory into a package root for the frontend."""

from __future__ import annotations

import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from moveexport.config import ExporterConfig
from moveexport.errors import StagingError
from moveexport.logging import get_logger

log = get_logger("staging")


@contextmanager
def staged_package(path: Path, config: ExporterConfig) -> Generator[Path, None, None]:
    """Yield a package root for `path`.

    A directory is yielded as-is. A single file is copied into a temporary
    package (manifest plus `<source_dir>/<staged_file_name>`) which is removed
    when the block exits, however it exits.

    Raises:
        StagingError: If the input does not exist or the package cannot be built.
    """
    path = Path(path)
    if path.is_dir():
        log.debug("Using package directory", extra={"path": str(path)})
        yield path
        return
    if not path.is_file():
        raise StagingError(f"Input not found: {path}")

    try:
        tmp = tempfile.TemporaryDirectory(prefix="moveexport-")
    except OSError as e:
        raise StagingError(f"Cannot create temporary package: {e}") from e

    with tmp as tmp_dir:
        root = Path(tmp_dir)
        try:
            (root / config.manifest_name).write_text(config.manifest_text(), encoding="utf-8")
            src_dir = root / config.source_dir
            src_dir.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(path, src_dir / config.staged_file_name)
        except OSError as e:
            raise StagingError(f"Cannot stage {path}: {e}") from e

        log.debug("Staged single file", extra={"path": str(root)})
        yield root


def source_root(package_root: Path, config: ExporterConfig) -> Path:
    """Directory the frontend treats as the package's sources."""
    return Path(package_root) / config.source_dir
