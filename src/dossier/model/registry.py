"""Entity registry: every symbol a documentation run knows about.

The registry is populated once by the front end, frozen, and then only
queried. It is an explicit object handed to the resolver, the layout and
the index; nothing in Dossier keeps it in module-level state.
"""

from __future__ import annotations

from collections import defaultdict
from pathlib import PurePosixPath
from typing import Hashable, Iterator, Optional, Union

from ..exceptions import DuplicateEntityError, InvariantViolationError
from ..logging_config import get_logger
from .entities import Module, NominalType, Symbol

logger = get_logger(__name__)

_EXPORTS_SUFFIX = ".exports"


class EntityRegistry:
    """Lookup tables keyed by qualified name, module identifier and type handle."""

    def __init__(self) -> None:
        self._externs: dict[str, Symbol] = {}
        self._types: dict[str, NominalType] = {}
        self._modules: dict[str, Module] = {}
        self._module_names: dict[str, Module] = {}
        self._by_handle: dict[Hashable, list[Symbol]] = defaultdict(list)
        self._internal_vars: dict[str, Module] = {}
        self._file_overviews: dict[PurePosixPath, str] = {}
        self._frozen = False

    # ── Population ────────────────────────────────────────────────

    def freeze(self) -> None:
        """End the populate phase. Later registrations are invariant violations."""
        self._frozen = True
        logger.debug(
            "Registry frozen: %d types, %d modules, %d externs",
            len(self._types),
            len(self._modules),
            len(self._externs),
        )

    @property
    def frozen(self) -> bool:
        return self._frozen

    def add_extern(self, symbol: Symbol) -> None:
        self._check_mutable(symbol.name)
        if self._put(self._externs, symbol.name, symbol):
            self._record_handle(symbol)

    def add_type(self, type_: NominalType) -> None:
        """Register a type and, recursively, the types nested below it."""
        self._check_mutable(type_.name)
        if type_.module is not None and self._modules.get(type_.module.id) is not type_.module:
            raise InvariantViolationError(
                f"Type {type_.name} belongs to unregistered module {type_.module.id}"
            )
        if not self._put(self._types, type_.name, type_):
            return
        self._record_handle(type_)
        logger.debug("Registered type %s", type_.name)
        for nested in type_.nested_types:
            self.add_type(nested)

    def add_module(self, module: Module) -> None:
        """Register a module, its exported types and its hoisted variables."""
        self._check_mutable(module.id)
        if not self._put(self._modules, module.id, module):
            return
        existing = self._module_names.get(module.public_name)
        if existing is not None and existing is not module:
            raise DuplicateEntityError(module.public_name, existing, module)
        self._module_names[module.public_name] = module
        self._record_handle(module.exports)

        for var_name in module.internal_vars:
            self._internal_vars[var_name] = module
        logger.debug("Registered module %s (%s)", module.id, module.public_name)

        for exported in module.types:
            self.add_type(exported)

    def add_file_overview(self, path: Union[str, PurePosixPath], overview: Optional[str]) -> None:
        self._check_mutable(str(path))
        self._file_overviews[PurePosixPath(path)] = overview or ""

    def _check_mutable(self, name: str) -> None:
        if self._frozen:
            raise InvariantViolationError(
                f"Cannot register {name}: registry is frozen", details={"name": name}
            )

    @staticmethod
    def _put(table: dict, key: str, value) -> bool:
        """Insert ``value`` under ``key``; False if it was already there."""
        existing = table.get(key)
        if existing is value:
            return False
        if existing is not None:
            raise DuplicateEntityError(key, existing, value)
        table[key] = value
        return True

    def _record_handle(self, symbol: Symbol) -> None:
        if symbol.handle is not None:
            self._by_handle[symbol.handle].append(symbol)

    # ── Lookup ────────────────────────────────────────────────────

    def get_extern(self, name: str) -> Optional[Symbol]:
        return self._externs.get(name)

    def get_type(self, name: str) -> Optional[NominalType]:
        return self._types.get(name)

    def get_module(self, name: str) -> Optional[Module]:
        """Find a module by internal id or by the name code requires it with."""
        module = self._modules.get(name)
        if module is None:
            module = self._module_names.get(name)
        return module

    def types(self) -> list[NominalType]:
        return list(self._types.values())

    def global_types(self) -> list[NominalType]:
        return [t for t in self._types.values() if t.module is None]

    def module_types(self, module: Module) -> list[NominalType]:
        """Every registered type that lives in ``module``, nested ones included."""
        return [t for t in self._types.values() if t.module is module]

    def modules(self) -> list[Module]:
        return list(self._modules.values())

    def externs(self) -> list[Symbol]:
        return list(self._externs.values())

    def module_for_internal_var(self, var_name: str) -> Optional[Module]:
        return self._internal_vars.get(var_name)

    def get_file_overview(self, path: Union[str, PurePosixPath]) -> Optional[str]:
        return self._file_overviews.get(PurePosixPath(path))

    def source_files(self) -> list[PurePosixPath]:
        """Every source file referenced by a registered entity, sorted."""
        files = set(self._file_overviews)
        for module in self._modules.values():
            if module.path is not None:
                files.add(module.path)
        for type_ in self._types.values():
            if type_.position is not None:
                files.add(type_.position.path)
        return sorted(files)

    def lookup_by_analysis_handle(self, handle: Hashable) -> Optional[Symbol]:
        """The first symbol registered for ``handle``, if any."""
        registered = self._by_handle.get(handle)
        return registered[0] if registered else None

    def types_for_handle(self, handle: Hashable) -> list[Symbol]:
        return list(self._by_handle.get(handle, ()))

    def is_canonical(self, symbol: Symbol) -> bool:
        """True unless another symbol was registered first under the same handle."""
        if symbol.handle is None:
            return True
        first = self.lookup_by_analysis_handle(symbol.handle)
        return first is None or first is symbol

    # ── Name queries ──────────────────────────────────────────────

    def is_extern(self, name: str) -> bool:
        """True if ``name`` is an extern or a dotted descendant of one."""
        for prefix in _prefixes(name):
            if prefix in self._externs:
                return True
        return False

    def is_known_name(self, name: str) -> bool:
        if name in self._types or self.get_module(name) is not None or self.is_extern(name):
            return True

        if name.endswith(_EXPORTS_SUFFIX):
            return self.get_module(name[: -len(_EXPORTS_SUFFIX)]) is not None

        return any(module.exports_name(name) for module in self._modules.values())

    def is_documented(self, symbol: Symbol) -> bool:
        """True if the symbol or its nearest registered ancestor is known."""
        return any(self.is_known_name(prefix) for prefix in _prefixes(symbol.name))

    def __iter__(self) -> Iterator[NominalType]:
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types) + len(self._modules)


def _prefixes(name: str) -> Iterator[str]:
    """``a.b.c``, ``a.b``, ``a``."""
    while True:
        yield name
        index = name.rfind(".")
        if index == -1:
            return
        name = name[:index]
