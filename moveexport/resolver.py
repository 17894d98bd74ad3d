"""Render symbols, types and values of the model view as canonical strings.

Type parameters are stored as indices into the enclosing declaration's
parameter list, so a type can only be rendered inside a `DisplayContext` built
for that declaration. Everything here is a pure function of its arguments.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from moveexport.model.env import (
    ApplyAttribute,
    AssignAttribute,
    Attribute,
    FunctionEnv,
    GlobalEnv,
    ModuleEnv,
    NameAttributeValue,
    StructEnv,
    ValueAttributeValue,
)
from moveexport.model.exp import (
    AddressArrayValue,
    AddressValue,
    BoolValue,
    ByteArrayValue,
    NumberValue,
    Pattern,
    StructPattern,
    TuplePattern,
    TupleValue,
    Value,
    VarPattern,
    VectorValue,
    WildcardPattern,
)
from moveexport.model.symbols import Symbol, SymbolPool
from moveexport.model.types import (
    Address,
    ErrorType,
    FunctionType,
    ModuleName,
    NumericalAddress,
    PrimitiveType,
    QualifiedName,
    ReferenceType,
    StructType,
    SymbolicAddress,
    TupleType,
    Type,
    TypeParameter,
    TypeParameterType,
    VectorType,
)


@dataclass(frozen=True)
class DisplayContext:
    """Scope for rendering types of one declaration."""

    env: GlobalEnv
    type_param_names: tuple[str, ...] = field(default_factory=tuple)
    module: Optional[ModuleName] = None  # structs of this module render unqualified

    @property
    def pool(self) -> SymbolPool:
        return self.env.symbol_pool


def _param_names(params: list[TypeParameter], pool: SymbolPool) -> tuple[str, ...]:
    return tuple(display_symbol(tp.name, pool) for tp in params)


def module_display_context(module: ModuleEnv) -> DisplayContext:
    return DisplayContext(env=module.env, module=module.name)


def struct_display_context(struct: StructEnv) -> DisplayContext:
    return DisplayContext(
        env=struct.env,
        type_param_names=_param_names(struct.type_params, struct.symbol_pool),
        module=struct.module.name,
    )


def function_display_context(func: FunctionEnv) -> DisplayContext:
    return DisplayContext(
        env=func.env,
        type_param_names=_param_names(func.type_params, func.symbol_pool),
        module=func.module.name,
    )


# ---------------------------------------------------------------------------
# Names
# ---------------------------------------------------------------------------


def display_symbol(sym: Symbol, pool: SymbolPool) -> str:
    return pool.string(sym)


def display_address(addr: Address, pool: SymbolPool) -> str:
    """Render `0x1` style for numeric addresses, the name for symbolic ones."""
    if isinstance(addr, NumericalAddress):
        return f"0x{addr.value:x}"
    if isinstance(addr, SymbolicAddress):
        return pool.string(addr.name)
    raise TypeError(f"Not an address: {addr!r}")


def display_module_name(name: ModuleName, pool: SymbolPool, full: bool = True) -> str:
    """`0x1::coin` when `full`, else just `coin`."""
    short = pool.string(name.name)
    if not full:
        return short
    return f"{display_address(name.addr, pool)}::{short}"


def display_qualified(qn: QualifiedName, ctx: DisplayContext) -> str:
    """Render a struct or function name, unqualified inside its own module."""
    name = ctx.pool.string(qn.name)
    if ctx.module is not None and qn.module == ctx.module:
        return name
    return f"{display_module_name(qn.module, ctx.pool)}::{name}"


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


def display_type(ty: Type, ctx: DisplayContext) -> str:
    if isinstance(ty, PrimitiveType):
        return ty.kind.value
    if isinstance(ty, TypeParameterType):
        if 0 <= ty.index < len(ctx.type_param_names):
            return ctx.type_param_names[ty.index]
        return f"#{ty.index}"
    if isinstance(ty, VectorType):
        return f"vector<{display_type(ty.element, ctx)}>"
    if isinstance(ty, ReferenceType):
        prefix = "&mut " if ty.mutable else "&"
        return prefix + display_type(ty.target, ctx)
    if isinstance(ty, TupleType):
        return "(" + ", ".join(display_type(t, ctx) for t in ty.elements) + ")"
    if isinstance(ty, StructType):
        name = display_qualified(ty.target, ctx)
        if ty.type_args:
            args = ", ".join(display_type(t, ctx) for t in ty.type_args)
            return f"{name}<{args}>"
        return name
    if isinstance(ty, FunctionType):
        args = ", ".join(display_type(t, ctx) for t in ty.args)
        return f"|{args}|{display_type(ty.result, ctx)}"
    if isinstance(ty, ErrorType):
        return "*error*"
    raise TypeError(f"Not a type: {ty!r}")


# ---------------------------------------------------------------------------
# Values, patterns, attributes
# ---------------------------------------------------------------------------


def display_value(value: Value, pool: SymbolPool) -> str:
    if isinstance(value, BoolValue):
        return "true" if value.value else "false"
    if isinstance(value, NumberValue):
        return str(value.value)
    if isinstance(value, AddressValue):
        return "@" + display_address(value.addr, pool)
    if isinstance(value, ByteArrayValue):
        return f'x"{value.data.hex()}"'
    if isinstance(value, AddressArrayValue):
        return "[" + ", ".join("@" + display_address(a, pool) for a in value.addrs) + "]"
    if isinstance(value, VectorValue):
        return "[" + ", ".join(display_value(v, pool) for v in value.items) + "]"
    if isinstance(value, TupleValue):
        return "(" + ", ".join(display_value(v, pool) for v in value.items) + ")"
    raise TypeError(f"Not a value: {value!r}")


def display_pattern(pattern: Pattern, ctx: DisplayContext) -> str:
    if isinstance(pattern, VarPattern):
        return ctx.pool.string(pattern.name)
    if isinstance(pattern, WildcardPattern):
        return "_"
    if isinstance(pattern, TuplePattern):
        return "(" + ", ".join(display_pattern(p, ctx) for p in pattern.items) + ")"
    if isinstance(pattern, StructPattern):
        name = display_qualified(pattern.target, ctx)
        if pattern.variant is not None:
            name = f"{name}::{ctx.pool.string(pattern.variant)}"
        return name + "{" + ", ".join(display_pattern(p, ctx) for p in pattern.items) + "}"
    raise TypeError(f"Not a pattern: {pattern!r}")


def display_attribute(attr: Attribute, pool: SymbolPool) -> str:
    """Debug-style rendering of an attribute's full structure.

    `#[expected_failure(abort_code = 5)]` renders as
    `Apply(expected_failure, [Assign(abort_code, Value(5))])`.
    """
    name = pool.string(attr.name)
    if isinstance(attr, ApplyAttribute):
        args = ", ".join(display_attribute(a, pool) for a in attr.args)
        return f"Apply({name}, [{args}])"
    if isinstance(attr, AssignAttribute):
        value = attr.value
        if isinstance(value, ValueAttributeValue):
            return f"Assign({name}, Value({display_value(value.value, pool)}))"
        if isinstance(value, NameAttributeValue):
            target = pool.string(value.name)
            if value.module is not None:
                target = f"{display_module_name(value.module, pool)}::{target}"
            return f"Assign({name}, Name({target}))"
    raise TypeError(f"Not an attribute: {attr!r}")
