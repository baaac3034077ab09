"""Entity model for Dossier.

Entities are the things we document. They form a hierarchy:

    EntityRegistry (root)
        ├── NominalType               a.b.C
        │       ├── Property          a.b.C.create, a.b.C.prototype.render
        │       │       └── Property  a.b.C.prototype.render.Options
        │       └── NominalType       a.b.C.Nested
        ├── Extern (any Symbol)       Element, Array
        └── Module                    foo/bar.js, goog.module('foo.bar')
                └── ModuleExports     foo.bar
                        ├── Property  foo.bar.helper
                        └── NominalType foo.bar.Clazz

Children are only ever created through their owner's factory methods, so
a child's qualified name and owner are fixed the moment it exists.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath
from typing import Hashable, Optional

from ..exceptions import DuplicateEntityError, InvariantViolationError

PROTOTYPE = "prototype"
INDEX_FILE = "index.js"


class TypeKind(Enum):
    """What a nominal type is, as reported by the analysis front end."""

    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    NAMESPACE = "namespace"  # a value acting purely as a container
    TYPEDEF = "typedef"


class ModuleKind(Enum):
    """The two module systems the front end understands."""

    FILE = "file"  # CommonJS, identified by its resolved file path
    NAMESPACE = "namespace"  # goog.module style, identified by a dotted name


@dataclass(frozen=True)
class SourcePosition:
    """Where an entity was declared."""

    path: PurePosixPath
    line: int = 0
    column: int = 0


def _check_simple_name(owner: str, name: str) -> None:
    if not name or "." in name or "#" in name:
        raise InvariantViolationError(
            f"Invalid member name {name!r} under {owner}", details={"owner": owner}
        )


@dataclass(eq=False)
class Symbol:
    """Anything a reference can resolve to.

    Every symbol has:
        - name:       fully qualified dotted name
        - owner:      the symbol it hangs off (None for registry roots)
        - handle:     opaque type handle supplied by the front end
        - properties / instance_properties: ordered static and prototype members
    """

    name: str
    doc: str = ""
    position: Optional[SourcePosition] = None
    handle: Optional[Hashable] = None
    owner: Optional[Symbol] = field(default=None, repr=False)
    properties: list[Property] = field(default_factory=list, repr=False)
    instance_properties: list[Property] = field(default_factory=list, repr=False)

    @property
    def simple_name(self) -> str:
        return self.name.rsplit(".", 1)[-1]

    @property
    def is_module_exports(self) -> bool:
        return False

    @property
    def is_typedef(self) -> bool:
        return False

    def add_property(
        self,
        name: str,
        *,
        typedef: bool = False,
        doc: str = "",
        position: Optional[SourcePosition] = None,
        handle: Optional[Hashable] = None,
    ) -> Property:
        """Create a static member of this symbol.

        Static members share their namespace with nested types.
        """
        if isinstance(self, NominalType):
            nested = self.find_nested_type(name)
            if nested is not None:
                raise DuplicateEntityError(f"{self.name}.{name}", nested, f"{self.name}.{name}")
        return self._attach(
            self.properties,
            f"{self.name}.{name}",
            name,
            typedef=typedef,
            doc=doc,
            position=position,
            handle=handle,
        )

    def add_instance_property(
        self,
        name: str,
        *,
        typedef: bool = False,
        doc: str = "",
        position: Optional[SourcePosition] = None,
        handle: Optional[Hashable] = None,
    ) -> Property:
        """Create a prototype member of this symbol."""
        return self._attach(
            self.instance_properties,
            f"{self.name}.{PROTOTYPE}.{name}",
            name,
            typedef=typedef,
            doc=doc,
            position=position,
            handle=handle,
        )

    def find_property(self, name: str) -> Optional[Property]:
        return _find(self.properties, name)

    def find_instance_property(self, name: str) -> Optional[Property]:
        return _find(self.instance_properties, name)

    def _attach(self, siblings: list[Property], qualified: str, simple: str, **kwargs) -> Property:
        _check_simple_name(self.name, simple)
        prop = Property(name=qualified, owner=self, **kwargs)
        existing = _find(siblings, simple)
        if existing is not None:
            raise DuplicateEntityError(qualified, existing, prop)
        siblings.append(prop)
        return prop


@dataclass(eq=False)
class Property(Symbol):
    """A member of a type, a module's exports, or another property."""

    typedef: bool = False

    @property
    def is_typedef(self) -> bool:
        return self.typedef

    @property
    def is_instance_member(self) -> bool:
        if self.owner is None:
            return False
        return any(p is self for p in self.owner.instance_properties)

    @property
    def module(self) -> Optional[Module]:
        return getattr(self.owner, "module", None)


@dataclass(eq=False)
class NominalType(Symbol):
    """A named type: class, interface, enum, namespace or typedef.

    A type with a module is a module-exported type. Its qualified name is
    ``<module id>.<name>`` but it is displayed and linked relative to
    the module.
    """

    kind: TypeKind = TypeKind.CLASS
    module: Optional[Module] = field(default=None, repr=False)
    nested_types: list[NominalType] = field(default_factory=list, repr=False)

    @property
    def is_namespace(self) -> bool:
        return self.kind is TypeKind.NAMESPACE

    @property
    def is_interface(self) -> bool:
        return self.kind is TypeKind.INTERFACE

    @property
    def is_typedef(self) -> bool:
        return self.kind is TypeKind.TYPEDEF

    def add_nested_type(
        self,
        name: str,
        kind: TypeKind = TypeKind.CLASS,
        *,
        doc: str = "",
        position: Optional[SourcePosition] = None,
        handle: Optional[Hashable] = None,
    ) -> NominalType:
        """Create a type nested under this one, in the same module."""
        _check_simple_name(self.name, name)
        nested = NominalType(
            name=f"{self.name}.{name}",
            doc=doc,
            position=position,
            handle=handle,
            owner=self,
            kind=kind,
            module=self.module,
        )
        existing = self.find_nested_type(name) or self.find_property(name)
        if existing is not None:
            raise DuplicateEntityError(nested.name, existing, nested)
        self.nested_types.append(nested)
        return nested

    def find_nested_type(self, name: str) -> Optional[NominalType]:
        for nested in self.nested_types:
            if nested.simple_name == name:
                return nested
        return None

    def iter_nested_types(self):
        """Depth-first walk over every type nested below this one."""
        stack = list(reversed(self.nested_types))
        while stack:
            nested = stack.pop()
            yield nested
            stack.extend(reversed(nested.nested_types))


@dataclass(eq=False)
class ModuleExports(NominalType):
    """The object a module exposes to the code that requires it."""

    kind: TypeKind = TypeKind.NAMESPACE

    @property
    def is_module_exports(self) -> bool:
        return True


@dataclass(eq=False)
class Module:
    """A CommonJS file module or a namespace module.

    ``id`` is the internal identifier used for storage and qualified names.
    ``public_name`` is what other code passes to ``require()``. The two may
    differ, and the registry maps both.
    """

    id: str
    kind: ModuleKind = ModuleKind.FILE
    path: Optional[PurePosixPath] = None
    public_name: str = ""
    doc: str = ""
    handle: Optional[Hashable] = None
    exports: ModuleExports = field(init=False, repr=False)
    internal_vars: dict[str, str] = field(default_factory=dict, repr=False)
    _surface: dict[str, Symbol] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.kind is ModuleKind.FILE and self.path is None:
            raise InvariantViolationError(f"File module {self.id} has no path")
        if self.path is not None:
            self.path = PurePosixPath(self.path)
        if not self.public_name:
            self.public_name = self.id
        self.exports = ModuleExports(
            name=self.id,
            doc=self.doc,
            position=SourcePosition(self.path) if self.path is not None else None,
            handle=self.handle,
            module=self,
        )

    @property
    def is_file_module(self) -> bool:
        return self.kind is ModuleKind.FILE

    @property
    def is_index(self) -> bool:
        return self.is_file_module and self.path.name == INDEX_FILE

    @property
    def types(self) -> list[NominalType]:
        """Types on the export surface, in export order."""
        return [s for s in self._surface.values() if isinstance(s, NominalType)]

    def export_type(
        self,
        name: str,
        kind: TypeKind = TypeKind.CLASS,
        *,
        doc: str = "",
        position: Optional[SourcePosition] = None,
        handle: Optional[Hashable] = None,
    ) -> NominalType:
        """Create a type exported by this module as ``name``."""
        _check_simple_name(self.id, name)
        exported = NominalType(
            name=f"{self.id}.{name}",
            doc=doc,
            position=position,
            handle=handle,
            owner=self.exports,
            kind=kind,
            module=self,
        )
        return self._add_to_surface(name, exported)

    def export_property(
        self,
        name: str,
        *,
        typedef: bool = False,
        doc: str = "",
        position: Optional[SourcePosition] = None,
        handle: Optional[Hashable] = None,
    ) -> Property:
        """Create a plain exported member of this module."""
        if name in self._surface:
            raise DuplicateEntityError(f"{self.id}.{name}", self._surface[name], name)
        prop = self.exports.add_property(
            name, typedef=typedef, doc=doc, position=position, handle=handle
        )
        return self._add_to_surface(name, prop)

    def exported_symbols(self) -> list[Symbol]:
        return list(self._surface.values())

    def get_export(self, name: str) -> Optional[Symbol]:
        return self._surface.get(name)

    def exports_name(self, qualified: str) -> bool:
        """True if ``qualified`` is the name of a symbol on the export surface."""
        return any(s.name == qualified for s in self._surface.values())

    def declare_internal_var(self, var_name: str, export_name: str) -> None:
        """Record that module-local ``var_name`` is exported as ``export_name``."""
        self.internal_vars[var_name] = export_name

    def find_exported_var(self, var_name: str) -> Optional[Symbol]:
        export_name = self.internal_vars.get(var_name)
        if export_name is None:
            return None
        return self._surface.get(export_name)

    def _add_to_surface(self, name: str, symbol):
        existing = self._surface.get(name)
        if existing is not None:
            raise DuplicateEntityError(symbol.name, existing, symbol)
        self._surface[name] = symbol
        return symbol


def _find(properties: list[Property], name: str) -> Optional[Property]:
    for prop in properties:
        if prop.simple_name == name:
            return prop
    return None


def page_owner(symbol: Symbol) -> Optional[NominalType]:
    """The nearest enclosing type (or exports object) that gets its own page."""
    current: Optional[Symbol] = symbol
    while current is not None and not isinstance(current, NominalType):
        current = current.owner
    return current
