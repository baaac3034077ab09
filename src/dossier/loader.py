"""Entity-graph loading.

The analysis front end exports the entity graph as one JSON document:

    {
      "externs":  [TYPE, ...],
      "types":    [TYPE, ...],                 global types, qualified names
      "modules":  [MODULE, ...],
      "file_overviews": {"<source path>": "<text>"}
    }

    TYPE   = {"name", "kind"?, "doc"?, "handle"?, "source"?,
              "statics"?: [PROP], "members"?: [PROP], "nested"?: [TYPE]}
    PROP   = {"name", "typedef"?, "doc"?, "handle"?, "source"?,
              "statics"?: [PROP], "members"?: [PROP]}
    MODULE = {"id", "kind"?, "path"?, "public_name"?, "doc"?, "handle"?,
              "exports"?: [PROP], "types"?: [TYPE], "internal_vars"?: {"local": "exported"}}

Nested types, module types and properties use simple names. Handles are
opaque strings; two types sharing a handle are aliases of each other.
"""

import json
from pathlib import Path, PurePosixPath
from typing import Any, Optional

from .exceptions import DossierError, InvalidGraphError
from .logging_config import get_logger
from .model.entities import (
    Module,
    ModuleKind,
    NominalType,
    SourcePosition,
    Symbol,
    TypeKind,
)
from .model.registry import EntityRegistry

logger = get_logger(__name__)


def load_registry_file(path: Path) -> EntityRegistry:
    """Read a JSON entity graph from disk into a frozen registry."""
    try:
        with open(path, encoding="utf-8") as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidGraphError(f"not valid JSON: {e}", location=str(path))
    except OSError as e:
        raise DossierError(f"Cannot read entity graph '{path}': {e}")
    return load_registry(document)


def load_registry(document: Any) -> EntityRegistry:
    """Populate and freeze a registry from a decoded entity-graph document."""
    if not isinstance(document, dict):
        raise InvalidGraphError("top level must be an object")

    registry = EntityRegistry()

    for i, raw in enumerate(_list(document, "externs", "")):
        registry.add_extern(_type(raw, None, f"externs[{i}]"))

    for i, raw in enumerate(_list(document, "modules", "")):
        registry.add_module(_module(raw, f"modules[{i}]"))

    for i, raw in enumerate(_list(document, "types", "")):
        registry.add_type(_type(raw, None, f"types[{i}]"))

    overviews = document.get("file_overviews", {})
    if not isinstance(overviews, dict):
        raise InvalidGraphError("file_overviews must be an object")
    for path, text in overviews.items():
        registry.add_file_overview(path, text)

    registry.freeze()
    logger.info("Loaded %d types and %d modules", len(registry.types()), len(registry.modules()))
    return registry


def _module(raw: Any, where: str) -> Module:
    _require(raw, "id", where)
    kind = _enum(ModuleKind, raw.get("kind", "file"), where)
    path = raw.get("path")
    try:
        module = Module(
            id=raw["id"],
            kind=kind,
            path=PurePosixPath(path) if path else None,
            public_name=raw.get("public_name", ""),
            doc=raw.get("doc", ""),
            handle=_handle(raw),
        )
    except DossierError as e:
        raise InvalidGraphError(e.message, location=where)

    for i, prop in enumerate(_list(raw, "exports", where)):
        at = f"{where}.exports[{i}]"
        _require(prop, "name", at)
        exported = module.export_property(
            prop["name"],
            typedef=bool(prop.get("typedef", False)),
            doc=prop.get("doc", ""),
            position=_position(prop, at),
            handle=_handle(prop),
        )
        _members(exported, prop, at)

    for i, raw_type in enumerate(_list(raw, "types", where)):
        at = f"{where}.types[{i}]"
        _require(raw_type, "name", at)
        exported = module.export_type(
            raw_type["name"],
            _enum(TypeKind, raw_type.get("kind", "class"), at),
            doc=raw_type.get("doc", ""),
            position=_position(raw_type, at),
            handle=_handle(raw_type),
        )
        _type_body(exported, raw_type, at)

    internal_vars = raw.get("internal_vars", {})
    if not isinstance(internal_vars, dict):
        raise InvalidGraphError("internal_vars must be an object", location=where)
    for var_name, export_name in internal_vars.items():
        module.declare_internal_var(var_name, export_name)
    return module


def _type(raw: Any, parent: Optional[NominalType], where: str) -> NominalType:
    _require(raw, "name", where)
    kind = _enum(TypeKind, raw.get("kind", "class"), where)
    kwargs = {
        "doc": raw.get("doc", ""),
        "position": _position(raw, where),
        "handle": _handle(raw),
    }
    if parent is None:
        type_ = NominalType(name=raw["name"], kind=kind, **kwargs)
    else:
        type_ = parent.add_nested_type(raw["name"], kind, **kwargs)
    _type_body(type_, raw, where)
    return type_


def _type_body(type_: NominalType, raw: dict, where: str) -> None:
    _members(type_, raw, where)
    for i, nested in enumerate(_list(raw, "nested", where)):
        _type(nested, type_, f"{where}.nested[{i}]")


def _members(owner: Symbol, raw: dict, where: str) -> None:
    for key, add in (("statics", owner.add_property), ("members", owner.add_instance_property)):
        for i, prop in enumerate(_list(raw, key, where)):
            at = f"{where}.{key}[{i}]"
            _require(prop, "name", at)
            child = add(
                prop["name"],
                typedef=bool(prop.get("typedef", False)),
                doc=prop.get("doc", ""),
                position=_position(prop, at),
                handle=_handle(prop),
            )
            _members(child, prop, at)


def _position(raw: dict, where: str) -> Optional[SourcePosition]:
    source = raw.get("source")
    if source is None:
        return None
    if not isinstance(source, dict) or not source.get("path"):
        raise InvalidGraphError("source must be an object with a path", location=where)
    try:
        line = int(source.get("line", 0))
        column = int(source.get("column", 0))
    except (TypeError, ValueError):
        raise InvalidGraphError("source line/column must be integers", location=where)
    return SourcePosition(PurePosixPath(source["path"]), line, column)


def _list(raw: dict, key: str, where: str) -> list:
    value = raw.get(key, [])
    if not isinstance(value, list):
        raise InvalidGraphError(f"{key} must be a list", location=where)
    return value


def _require(raw: Any, key: str, where: str) -> None:
    if not isinstance(raw, dict):
        raise InvalidGraphError("expected an object", location=where)
    if not isinstance(raw.get(key), str) or not raw[key]:
        raise InvalidGraphError(f"missing {key}", location=where)


def _enum(enum_type, value: Any, where: str):
    try:
        return enum_type(value)
    except ValueError:
        raise InvalidGraphError(f"unknown {enum_type.__name__} {value!r}", location=where)


def _handle(raw: dict) -> Optional[str]:
    handle = raw.get("handle")
    return None if handle is None else str(handle)
