"""Read-only view of a compiled Move package, as produced by a frontend."""

from moveexport.model.dump import load_env
from moveexport.model.env import (
    Diagnostic,
    FieldEnv,
    FunctionEnv,
    FunctionKind,
    GlobalEnv,
    ModuleEnv,
    Parameter,
    Severity,
    StructEnv,
    Visibility,
)
from moveexport.model.symbols import Symbol, SymbolPool
from moveexport.model.types import Ability, ModuleName, TypeParameter

__all__ = [
    "Ability",
    "Diagnostic",
    "FieldEnv",
    "FunctionEnv",
    "FunctionKind",
    "GlobalEnv",
    "ModuleEnv",
    "ModuleName",
    "Parameter",
    "Severity",
    "StructEnv",
    "Symbol",
    "SymbolPool",
    "TypeParameter",
    "Visibility",
    "load_env",
]
