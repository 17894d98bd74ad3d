"""Convert struct, function and attribute metadata into export records.

The compiled model is assumed well-formed (it passed the frontend's checks),
so nothing here raises on purpose.
"""

from __future__ import annotations

from moveexport.export.expressions import exp_to_node
from moveexport.export.schema import (
    AttrRecord,
    FieldRecord,
    FullFunctionRecord,
    FullStructRecord,
    FunctionRecord,
    ParamRecord,
    StructRecord,
)
from moveexport.model.env import (
    Attribute,
    FieldEnv,
    FunctionEnv,
    FunctionKind,
    StructEnv,
    Visibility,
)
from moveexport.model.symbols import SymbolPool
from moveexport.model.types import Ability, flatten
from moveexport.resolver import (
    DisplayContext,
    display_attribute,
    display_symbol,
    display_type,
    function_display_context,
    struct_display_context,
)

UNKNOWN_TAG = "Unknown"

ABILITY_TAGS = {
    Ability.COPY: "Copy",
    Ability.DROP: "Drop",
    Ability.STORE: "Store",
    Ability.KEY: "Key",
}

VISIBILITY_TAGS = {
    Visibility.PRIVATE: "Private",
    Visibility.PUBLIC: "Public",
    Visibility.FRIEND: "Friend",
    Visibility.PACKAGE: "Package",
}

FUNCTION_KIND_TAGS = {
    FunctionKind.REGULAR: "Regular",
    FunctionKind.INLINE: "Inline",
    FunctionKind.SCRIPT: "Script",
}


def _tag(table: dict, value: object) -> str:
    return table.get(value, UNKNOWN_TAG)


# ---------------------------------------------------------------------------
# Basic format
# ---------------------------------------------------------------------------


def field_to_record(f: FieldEnv, ctx: DisplayContext) -> FieldRecord:
    return FieldRecord(
        name=display_symbol(f.name, ctx.pool),
        ty=display_type(f.type, ctx),
        offset=f.offset,
        variant=display_symbol(f.variant, ctx.pool) if f.variant is not None else None,
    )


def struct_to_record(s: StructEnv) -> StructRecord:
    ctx = struct_display_context(s)
    return StructRecord(
        name=display_symbol(s.name, ctx.pool),
        abilities=[_tag(ABILITY_TAGS, a) for a in s.abilities],
        type_params=list(ctx.type_param_names),
        fields=[field_to_record(f, ctx) for f in s.get_fields()],
        is_native=s.is_native,
        is_ghost_memory=s.is_ghost_memory,
    )


def function_to_record(f: FunctionEnv) -> FunctionRecord:
    ctx = function_display_context(f)
    return FunctionRecord(
        name=display_symbol(f.name, ctx.pool),
        visibility=_tag(VISIBILITY_TAGS, f.visibility),
        kind=_tag(FUNCTION_KIND_TAGS, f.kind),
        type_params=list(ctx.type_param_names),
        parameters=[
            ParamRecord(name=display_symbol(p.name, ctx.pool), ty=display_type(p.type, ctx))
            for p in f.params
        ],
        results=[display_type(t, ctx) for t in flatten(f.result_type)],
        is_native=f.is_native,
        is_intrinsic=f.is_intrinsic,
        is_entry=f.is_entry,
    )


# ---------------------------------------------------------------------------
# Full (attribute-aware) format
# ---------------------------------------------------------------------------


def attrs_to_records(attrs: list[Attribute], pool: SymbolPool) -> list[AttrRecord]:
    return [
        AttrRecord(name=display_symbol(a.name, pool), value=display_attribute(a, pool))
        for a in attrs
    ]


def full_struct_to_record(s: StructEnv) -> FullStructRecord:
    ctx = struct_display_context(s)
    return FullStructRecord(
        name=display_symbol(s.name, ctx.pool),
        fields=[
            f"{display_symbol(f.name, ctx.pool)}: {display_type(f.type, ctx)}"
            for f in s.get_fields()
        ],
        attrs=attrs_to_records(s.attributes, ctx.pool),
    )


def full_function_to_record(f: FunctionEnv) -> FullFunctionRecord:
    ctx = function_display_context(f)
    return FullFunctionRecord(
        name=display_symbol(f.name, ctx.pool),
        params=[
            f"{display_symbol(p.name, ctx.pool)}: {display_type(p.type, ctx)}"
            for p in f.params
        ],
        ret=display_type(f.result_type, ctx),
        attrs=attrs_to_records(f.attributes, ctx.pool),
        body=exp_to_node(f.body, ctx) if f.body is not None else None,
    )
