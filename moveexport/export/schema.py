"""Export records: the JSON document shape for each output format."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class ExportFormat(str, Enum):
    """Output formats."""

    BASIC = "basic"  # entity metadata, no bodies
    FULL = "full"  # attribute-aware, with function bodies
    SUMMARY = "summary"  # module names and counts only


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------


@dataclass
class AttrRecord:
    name: str
    value: str  # debug-style rendering of the whole attribute


@dataclass
class ExpNode:
    """One node of a function body tree."""

    kind: str
    value: Optional[str] = None
    children: list[ExpNode] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Basic format
# ---------------------------------------------------------------------------


@dataclass
class FieldRecord:
    name: str
    ty: str
    offset: int
    variant: Optional[str] = None


@dataclass
class StructRecord:
    name: str
    abilities: list[str] = field(default_factory=list)
    type_params: list[str] = field(default_factory=list)
    fields: list[FieldRecord] = field(default_factory=list)
    is_native: bool = False
    is_ghost_memory: bool = False


@dataclass
class ParamRecord:
    name: str
    ty: str


@dataclass
class FunctionRecord:
    name: str
    visibility: str
    kind: str
    type_params: list[str] = field(default_factory=list)
    parameters: list[ParamRecord] = field(default_factory=list)
    results: list[str] = field(default_factory=list)
    is_native: bool = False
    is_intrinsic: bool = False
    is_entry: bool = False


@dataclass
class ModuleRecord:
    name: str
    address: str
    is_script: bool = False
    structs: list[StructRecord] = field(default_factory=list)
    functions: list[FunctionRecord] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Full (attribute-aware) format
# ---------------------------------------------------------------------------


@dataclass
class FullStructRecord:
    name: str
    fields: list[str] = field(default_factory=list)  # "name: type"
    attrs: list[AttrRecord] = field(default_factory=list)


@dataclass
class FullFunctionRecord:
    name: str
    params: list[str] = field(default_factory=list)  # "name: type"
    ret: str = "()"
    attrs: list[AttrRecord] = field(default_factory=list)
    body: Optional[ExpNode] = None


@dataclass
class FullModuleRecord:
    name: str  # fully qualified, e.g. "0x1::BasicCoin"
    structs: list[FullStructRecord] = field(default_factory=list)
    functions: list[FullFunctionRecord] = field(default_factory=list)
    attrs: list[AttrRecord] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


@dataclass
class Document:
    """Root of the basic and full formats."""

    modules: list[Union[ModuleRecord, FullModuleRecord]] = field(default_factory=list)


@dataclass
class SummaryStats:
    structs: int = 0
    functions: int = 0


@dataclass
class Summary:
    """Root of the summary format."""

    modules: list[str] = field(default_factory=list)
    stats: SummaryStats = field(default_factory=SummaryStats)
