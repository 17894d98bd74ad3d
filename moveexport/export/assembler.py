"""Compose per-module records into the top-level document."""

from __future__ import annotations

from typing import Union

from moveexport.export.entities import (
    attrs_to_records,
    full_function_to_record,
    full_struct_to_record,
    function_to_record,
    struct_to_record,
)
from moveexport.export.schema import (
    Document,
    ExportFormat,
    FullModuleRecord,
    ModuleRecord,
    Summary,
    SummaryStats,
)
from moveexport.model.env import GlobalEnv, ModuleEnv
from moveexport.resolver import display_address, display_module_name, display_symbol


def module_to_record(m: ModuleEnv) -> ModuleRecord:
    pool = m.symbol_pool
    return ModuleRecord(
        name=display_symbol(m.name.name, pool),
        address=display_address(m.name.addr, pool),
        is_script=m.is_script,
        structs=[struct_to_record(s) for s in m.get_structs()],
        functions=[function_to_record(f) for f in m.get_functions()],
    )


def full_module_to_record(m: ModuleEnv) -> FullModuleRecord:
    pool = m.symbol_pool
    return FullModuleRecord(
        name=display_module_name(m.name, pool),
        structs=[full_struct_to_record(s) for s in m.get_structs()],
        functions=[full_function_to_record(f) for f in m.get_functions()],
        attrs=attrs_to_records(m.attributes, pool),
    )


def build_document(env: GlobalEnv) -> Document:
    """Basic format: entity metadata for every module, in declaration order."""
    return Document(modules=[module_to_record(m) for m in env.get_modules()])


def build_full_document(env: GlobalEnv) -> Document:
    """Attribute-aware format with function bodies."""
    return Document(modules=[full_module_to_record(m) for m in env.get_modules()])


def build_summary(env: GlobalEnv) -> Summary:
    """Module names plus total struct and function counts."""
    stats = SummaryStats()
    names = []
    for m in env.get_modules():
        names.append(display_module_name(m.name, env.symbol_pool, full=False))
        stats.structs += m.struct_count
        stats.functions += m.function_count
    return Summary(modules=names, stats=stats)


def assemble(env: GlobalEnv, fmt: ExportFormat = ExportFormat.BASIC) -> Union[Document, Summary]:
    if fmt == ExportFormat.FULL:
        return build_full_document(env)
    if fmt == ExportFormat.SUMMARY:
        return build_summary(env)
    return build_document(env)
