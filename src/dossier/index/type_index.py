"""Navigation index: every module and type in the generated documentation.

The index is one JSON document consumed by client-side search and the
side navigation:

    {
      "modules": [{"name": "foo/bar", "href": "module/foo_bar.html",
                   "statics": ["helper"],
                   "types": [{"name": "Clazz", "href": "...", ...}]}],
      "types":   [{"name": "a.b.C", "href": "a.b.C.html",
                   "namespace": false, "interface": false,
                   "statics": ["create"], "members": ["render"]}]
    }

It is built last, once every output path is final.
"""

from __future__ import annotations

import json
from typing import Any, Union

from ..exceptions import InvariantViolationError, UnresolvedLinkError
from ..logging_config import get_logger
from ..layout.links import LinkFactory
from ..layout.paths import OutputLayout
from ..model.entities import Module, NominalType, Symbol
from ..model.registry import EntityRegistry

logger = get_logger(__name__)


class TypeIndex:
    """Builder for the navigation index document."""

    def __init__(self, layout: OutputLayout, links: LinkFactory, registry: EntityRegistry):
        self.layout = layout
        self.registry = registry
        # Index hrefs are relative to the output root.
        self.links = links.with_context(None)
        self._json: dict[str, list] = {}

    def add_module(self, module: Union[Module, Symbol]) -> IndexReference:
        """Record a module; returns a reference for adding its types and members."""
        if isinstance(module, Module):
            exports = module.exports
        elif module.is_module_exports:
            exports = module
        else:
            raise InvariantViolationError(f"Not a module exports object: {module.name}")

        record = {
            "name": self.layout.display_name_for(exports),
            "href": self._href(exports),
        }
        _json_array(self._json, "modules").append(record)
        return IndexReference(self, exports, record)

    def add_type(self, type_: NominalType) -> IndexReference:
        return self._add_type_info(_json_array(self._json, "types"), type_)

    def _add_type_info(self, array: list, type_: NominalType) -> IndexReference:
        details = {
            "name": self.layout.display_name_for(type_),
            "href": self._href(type_),
            "namespace": type_.is_namespace,
            "interface": type_.is_interface,
        }
        array.append(details)

        if not self.registry.is_canonical(type_):
            # An alias: surface the typedefs declared on it next to the type.
            typedefs = [t for t in type_.nested_types if t.is_typedef]
            typedefs.extend(p for p in type_.properties if p.is_typedef)
            for typedef in sorted(typedefs, key=lambda t: t.name):
                link = self.links.create_link(typedef)
                if not link.href:
                    raise UnresolvedLinkError(typedef)
                array.append({"name": link.text, "href": link.href})
        return IndexReference(self, type_, details)

    def _href(self, target) -> str:
        return str(self.layout.relativize(self.layout.path_for(target)))

    def to_dict(self) -> dict[str, list]:
        return {
            "modules": self._json.get("modules", []),
            "types": self._json.get("types", []),
        }

    def to_json(self, indent: Union[int, None] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def to_script(self) -> str:
        """The index as a page script assigning the global ``TYPES``."""
        return f"var TYPES = {self.to_json()};"

    def __str__(self) -> str:
        return self.to_json()


class IndexReference:
    """A record in the index that can still be extended."""

    def __init__(self, index: TypeIndex, symbol: NominalType, record: dict[str, Any]):
        self._index = index
        self._symbol = symbol
        self._record = record

    @property
    def symbol(self) -> NominalType:
        return self._symbol

    @property
    def record(self) -> dict[str, Any]:
        return self._record

    def add_nested_type(self, type_: NominalType) -> IndexReference:
        if not self._symbol.is_module_exports:
            raise InvariantViolationError(
                f"Nested types should only be recorded for modules: {self._symbol.name}"
            )
        if type_.module is not self._symbol.module:
            raise InvariantViolationError(
                f"Type does not belong to this module: ({self._symbol.name}, {type_.name})",
                details={"module": self._symbol.name, "type": type_.name},
            )
        return self._index._add_type_info(_json_array(self._record, "types"), type_)

    def add_static_property(self, name: str) -> None:
        _json_array(self._record, "statics").append(name)

    def add_instance_property(self, name: str) -> None:
        _json_array(self._record, "members").append(name)


def _json_array(obj: dict, key: str) -> list:
    if key not in obj:
        obj[key] = []
    return obj[key]


def build_index(registry: EntityRegistry, layout: OutputLayout, links: LinkFactory) -> TypeIndex:
    """Walk the whole registry into a navigation index.

    Modules are ordered by display name and global types by qualified
    name. Members keep the order the front end reported them in.
    """
    index = TypeIndex(layout, links, registry)

    for module in sorted(registry.modules(), key=layout.display_name_for):
        ref = index.add_module(module)
        for prop in module.exports.properties:
            ref.add_static_property(prop.simple_name)
        for type_ in sorted(registry.module_types(module), key=lambda t: t.name):
            if type_.is_typedef:
                continue
            _add_members(ref.add_nested_type(type_), type_)

    for type_ in sorted(registry.global_types(), key=lambda t: t.name):
        if type_.is_typedef:
            continue
        _add_members(index.add_type(type_), type_)

    document = index.to_dict()
    logger.info(
        "Indexed %d modules and %d types", len(document["modules"]), len(document["types"])
    )
    return index


def _add_members(ref: IndexReference, type_: NominalType) -> None:
    for prop in type_.properties:
        ref.add_static_property(prop.simple_name)
    for prop in type_.instance_properties:
        ref.add_instance_property(prop.simple_name)
