"""Read-only environment of a compiled package.

A `GlobalEnv` is what a `Frontend` hands back after compilation: the symbol
pool, the modules in declaration order, and any diagnostics. The exporter only
reads it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Union

from moveexport.model.exp import Exp, Value
from moveexport.model.symbols import Symbol, SymbolPool
from moveexport.model.types import (
    UNIT,
    Ability,
    ModuleName,
    Type,
    TypeParameter,
)


class Visibility(str, Enum):
    PRIVATE = "Private"
    PUBLIC = "Public"
    FRIEND = "Friend"
    PACKAGE = "Package"
    UNKNOWN = "Unknown"

    @classmethod
    def _missing_(cls, value: object) -> Visibility:
        return cls.UNKNOWN


class FunctionKind(str, Enum):
    REGULAR = "Regular"
    INLINE = "Inline"
    SCRIPT = "Script"
    UNKNOWN = "Unknown"

    @classmethod
    def _missing_(cls, value: object) -> FunctionKind:
        return cls.UNKNOWN


class Severity(str, Enum):
    WARNING = "warning"
    ERROR = "error"
    BUG = "bug"

    # notes, hints and anything newer never fail a run
    @classmethod
    def _missing_(cls, value: object) -> Severity:
        return cls.WARNING


@dataclass(frozen=True)
class Diagnostic:
    """A message reported by the frontend."""

    severity: Severity
    message: str
    location: str = ""


# ---------------------------------------------------------------------------
# Attributes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ValueAttributeValue:
    value: Value


@dataclass(frozen=True)
class NameAttributeValue:
    module: Optional[ModuleName]
    name: Symbol


AttributeValue = Union[ValueAttributeValue, NameAttributeValue]


@dataclass(frozen=True)
class ApplyAttribute:
    """`#[name(args...)]` or a bare `#[name]`."""

    name: Symbol
    args: tuple[Attribute, ...] = ()


@dataclass(frozen=True)
class AssignAttribute:
    """`name = value` inside an attribute list."""

    name: Symbol
    value: AttributeValue


Attribute = Union[ApplyAttribute, AssignAttribute]


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Parameter:
    name: Symbol
    type: Type


@dataclass
class FieldEnv:
    """A struct field. `variant` is set for fields of struct-of-variants types."""

    struct: StructEnv = field(repr=False, compare=False)
    name: Symbol
    type: Type
    offset: int
    variant: Optional[Symbol] = None

    @property
    def env(self) -> GlobalEnv:
        return self.struct.env


@dataclass
class StructEnv:
    module: ModuleEnv = field(repr=False, compare=False)
    name: Symbol
    abilities: list[Ability] = field(default_factory=list)
    type_params: list[TypeParameter] = field(default_factory=list)
    fields: list[FieldEnv] = field(default_factory=list)
    attributes: list[Attribute] = field(default_factory=list)
    is_native: bool = False
    is_ghost_memory: bool = False  # spec-only struct, not runtime state

    @property
    def env(self) -> GlobalEnv:
        return self.module.env

    @property
    def symbol_pool(self) -> SymbolPool:
        return self.module.env.symbol_pool

    def add_field(
        self,
        name: Symbol,
        ty: Type,
        variant: Optional[Symbol] = None,
        offset: Optional[int] = None,
    ) -> FieldEnv:
        """Append a field. Without an explicit offset it gets its declaration index."""
        f = FieldEnv(
            struct=self,
            name=name,
            type=ty,
            offset=len(self.fields) if offset is None else offset,
            variant=variant,
        )
        self.fields.append(f)
        return f

    def get_fields(self) -> Iterator[FieldEnv]:
        return iter(self.fields)


@dataclass
class FunctionEnv:
    module: ModuleEnv = field(repr=False, compare=False)
    name: Symbol
    visibility: Visibility = Visibility.PRIVATE
    kind: FunctionKind = FunctionKind.REGULAR
    type_params: list[TypeParameter] = field(default_factory=list)
    params: list[Parameter] = field(default_factory=list)
    result_type: Type = UNIT
    attributes: list[Attribute] = field(default_factory=list)
    is_native: bool = False
    is_intrinsic: bool = False
    is_entry: bool = False
    body: Optional[Exp] = None  # absent for native and intrinsic functions

    @property
    def env(self) -> GlobalEnv:
        return self.module.env

    @property
    def symbol_pool(self) -> SymbolPool:
        return self.module.env.symbol_pool


@dataclass
class ModuleEnv:
    env: GlobalEnv = field(repr=False, compare=False)
    name: ModuleName
    is_script: bool = False
    structs: list[StructEnv] = field(default_factory=list)
    functions: list[FunctionEnv] = field(default_factory=list)
    attributes: list[Attribute] = field(default_factory=list)

    @property
    def symbol_pool(self) -> SymbolPool:
        return self.env.symbol_pool

    def add_struct(self, name: Symbol, **kwargs) -> StructEnv:
        s = StructEnv(module=self, name=name, **kwargs)
        self.structs.append(s)
        return s

    def add_function(self, name: Symbol, **kwargs) -> FunctionEnv:
        f = FunctionEnv(module=self, name=name, **kwargs)
        self.functions.append(f)
        return f

    def get_structs(self) -> Iterator[StructEnv]:
        return iter(self.structs)

    def get_functions(self) -> Iterator[FunctionEnv]:
        return iter(self.functions)

    @property
    def struct_count(self) -> int:
        return len(self.structs)

    @property
    def function_count(self) -> int:
        return len(self.functions)


@dataclass
class GlobalEnv:
    """Complete compiled package."""

    symbol_pool: SymbolPool = field(default_factory=SymbolPool)
    modules: list[ModuleEnv] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def add_module(self, name: ModuleName, is_script: bool = False) -> ModuleEnv:
        m = ModuleEnv(env=self, name=name, is_script=is_script)
        self.modules.append(m)
        return m

    def get_modules(self) -> Iterator[ModuleEnv]:
        return iter(self.modules)

    def has_errors(self) -> bool:
        return any(
            d.severity in (Severity.ERROR, Severity.BUG) for d in self.diagnostics
        )

    def error_messages(self) -> list[str]:
        return [
            d.message
            for d in self.diagnostics
            if d.severity in (Severity.ERROR, Severity.BUG)
        ]
