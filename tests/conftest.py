"""Shared fixtures: a decoded sample package and an in-process frontend."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import pytest
import yaml

from moveexport.frontend import CompilerOptions, Frontend
from moveexport.logging import ROOT_LOGGER
from moveexport.model.dump import load_env
from moveexport.model.env import Diagnostic, GlobalEnv, Severity

FIXTURES = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> dict:
    with open(FIXTURES / name) as f:
        return yaml.safe_load(f)


class FakeFrontend(Frontend):
    """Returns a fresh env decoded from a dump; remembers what it was asked."""

    def __init__(self, dump: dict, errors: Optional[list[str]] = None):
        self.dump = dump
        self.errors = errors or []
        self.calls: list[CompilerOptions] = []
        self.seen_sources: list[dict[str, str]] = []

    def compile(self, options: CompilerOptions) -> GlobalEnv:
        self.calls.append(options)
        # Snapshot source files while the package (possibly temporary) exists
        snapshot = {}
        for src in options.sources:
            for p in sorted(Path(src).glob("*.move")):
                snapshot[p.name] = p.read_text()
        self.seen_sources.append(snapshot)

        env = load_env(self.dump)
        env.diagnostics.extend(Diagnostic(Severity.ERROR, msg) for msg in self.errors)
        return env


@pytest.fixture
def basic_coin_dump():
    return load_fixture("basic_coin.yml")


@pytest.fixture
def basic_coin_env(basic_coin_dump):
    return load_env(basic_coin_dump)


@pytest.fixture
def fake_frontend(basic_coin_dump):
    return FakeFrontend(basic_coin_dump)


@pytest.fixture
def failing_frontend(basic_coin_dump):
    return FakeFrontend(basic_coin_dump, errors=["unbound type `Foo` in main.move:3:12"])


@pytest.fixture
def move_file(tmp_path):
    path = tmp_path / "coin.move"
    path.write_text(
        "module BasicCoin::BasicCoin {\n"
        "    struct Coin has store, drop { value: u64, owner: address }\n"
        "    public entry fun mint(account: &signer) { }\n"
        "}\n"
    )
    return path


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers the CLI attached to streams that CliRunner has since closed."""
    yield
    root = logging.getLogger(ROOT_LOGGER)
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.propagate = True
