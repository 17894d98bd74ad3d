"""Types, addresses and module names of the compiled model view."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from moveexport.model.symbols import Symbol


class Ability(str, Enum):
    """Capability markers a struct may declare."""

    COPY = "Copy"
    DROP = "Drop"
    STORE = "Store"
    KEY = "Key"
    UNKNOWN = "Unknown"

    @classmethod
    def _missing_(cls, value: object) -> Ability:
        return cls.UNKNOWN


class PrimitiveKind(str, Enum):
    """Builtin scalar types."""

    BOOL = "bool"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    U128 = "u128"
    U256 = "u256"
    ADDRESS = "address"
    SIGNER = "signer"
    # specification-only
    NUM = "num"
    RANGE = "range"


@dataclass(frozen=True)
class NumericalAddress:
    value: int


@dataclass(frozen=True)
class SymbolicAddress:
    """A named address the frontend could not resolve to a number."""

    name: Symbol


Address = Union[NumericalAddress, SymbolicAddress]


@dataclass(frozen=True)
class ModuleName:
    """Fully qualified module name: address plus module symbol."""

    addr: Address
    name: Symbol


@dataclass(frozen=True)
class QualifiedName:
    """A struct or function inside a module, e.g. `0x1::coin::transfer`."""

    module: ModuleName
    name: Symbol


@dataclass(frozen=True)
class PrimitiveType:
    kind: PrimitiveKind


@dataclass(frozen=True)
class TupleType:
    elements: tuple[Type, ...] = ()


@dataclass(frozen=True)
class VectorType:
    element: Type


@dataclass(frozen=True)
class StructType:
    target: QualifiedName
    type_args: tuple[Type, ...] = ()


@dataclass(frozen=True)
class TypeParameterType:
    """Reference to the n-th type parameter of the enclosing declaration."""

    index: int


@dataclass(frozen=True)
class ReferenceType:
    mutable: bool
    target: Type


@dataclass(frozen=True)
class FunctionType:
    args: tuple[Type, ...]
    result: Type


@dataclass(frozen=True)
class ErrorType:
    """Placeholder the frontend leaves where a type failed to check."""


Type = Union[
    PrimitiveType,
    TupleType,
    VectorType,
    StructType,
    TypeParameterType,
    ReferenceType,
    FunctionType,
    ErrorType,
]

UNIT = TupleType(())


@dataclass(frozen=True)
class TypeParameter:
    """A declared type parameter with its ability constraints."""

    name: Symbol
    abilities: tuple[Ability, ...] = field(default_factory=tuple)
    is_phantom: bool = False


def flatten(ty: Type) -> list[Type]:
    """Expand a tuple type into its elements; any other type is a singleton."""
    if isinstance(ty, TupleType):
        return list(ty.elements)
    return [ty]


def primitive(name: str) -> Optional[PrimitiveType]:
    """Look up a primitive type by its source spelling."""
    try:
        return PrimitiveType(PrimitiveKind(name))
    except ValueError:
        return None
