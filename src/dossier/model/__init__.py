"""Entity model and registry."""

from .entities import (
    Module,
    ModuleExports,
    ModuleKind,
    NominalType,
    Property,
    SourcePosition,
    Symbol,
    TypeKind,
    page_owner,
)
from .registry import EntityRegistry

__all__ = [
    "EntityRegistry",
    "Module",
    "ModuleExports",
    "ModuleKind",
    "NominalType",
    "Property",
    "SourcePosition",
    "Symbol",
    "TypeKind",
    "page_owner",
]
