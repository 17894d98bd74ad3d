"""Load and validate exporter configuration."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from moveexport.errors import ConfigError

_ADDRESS_LITERAL = re.compile(r"^(0x[0-9a-fA-F]+|[0-9]+)$")


class ExporterConfig(BaseModel):
    """Settings handed to the frontend and used when staging a single file."""

    model_config = ConfigDict(extra="forbid")

    named_addresses: dict[str, str] = Field(
        default_factory=lambda: {"BasicCoin": "0x1", "std": "0x1"}
    )
    dependencies: list[str] = Field(
        default_factory=lambda: ["../aptos-core/third_party/move/move-stdlib/sources"]
    )
    package_name: str = "scratch"
    package_version: str = "0.0.0"
    manifest_name: str = "Move.toml"
    source_dir: str = "sources"
    staged_file_name: str = "main.move"
    frontend_command: list[str] = Field(default_factory=lambda: ["move-model-dump"])

    @field_validator("named_addresses")
    @classmethod
    def _check_addresses(cls, v: dict[str, str]) -> dict[str, str]:
        for name, literal in v.items():
            if not _ADDRESS_LITERAL.match(str(literal)):
                raise ValueError(f"address for '{name}' is not a numeric literal: {literal!r}")
        return v

    @field_validator("frontend_command")
    @classmethod
    def _check_command(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("frontend_command must name an executable")
        return v

    def address_mapping(self) -> list[str]:
        """Named addresses as `name=0x..` strings, in insertion order."""
        return [f"{name}={addr}" for name, addr in self.named_addresses.items()]

    def manifest_text(self) -> str:
        return f'[package]\nname = "{self.package_name}"\nversion = "{self.package_version}"\n'


def load_config(path: Optional[Path] = None) -> ExporterConfig:
    """Load configuration from a YAML file, or return the defaults.

    Args:
        path: Path to a YAML config file. None means defaults only.

    Returns:
        Validated configuration.

    Raises:
        ConfigError: If the file is missing, unparsable or has invalid values.
    """
    if path is None:
        return ExporterConfig()

    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path) as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return ExporterConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    try:
        return ExporterConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}:\n{_format_validation_error(e)}") from e


def _format_validation_error(err: ValidationError) -> str:
    lines = []
    for e in err.errors():
        loc = ".".join(str(x) for x in e["loc"])
        lines.append(f"  - {loc}: {e['msg']}")
    return "\n".join(lines)
