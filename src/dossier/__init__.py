"""
Dossier - cross-linked API documentation layout for JavaScript

Resolves the qualified-name references found in documentation comments,
gives every documented entity and source file a deterministic output
path, links pages to each other, and builds the navigation index that
drives client-side search.
"""

__version__ = "0.3.0"

from .config import DossierConfig, load_config
from .index import TypeIndex, build_index, build_tree
from .layout import LinkFactory, OutputLayout, TypeLink
from .loader import load_registry, load_registry_file
from .model import EntityRegistry, Module, ModuleKind, NominalType, Property, TypeKind
from .resolve import QualifiedNameResolver

__all__ = [
    "DossierConfig",
    "EntityRegistry",
    "LinkFactory",
    "Module",
    "ModuleKind",
    "NominalType",
    "OutputLayout",
    "Property",
    "QualifiedNameResolver",
    "TypeIndex",
    "TypeKind",
    "TypeLink",
    "build_index",
    "build_tree",
    "load_config",
    "load_registry",
    "load_registry_file",
]
