"""Qualified-name resolution against the entity registry.

Resolution is a scope-chain lookup. Module-local names shadow global
ones. A dotted name that has no direct match is resolved by finding its
longest prefix that does match and then walking the remaining segments
down through members.
"""

from typing import Optional

from ..logging_config import get_logger
from ..model.entities import PROTOTYPE, Module, NominalType, Symbol
from ..model.registry import EntityRegistry
from .references import Reference, ReferenceKind, parse_reference

logger = get_logger(__name__)

DEFAULT_MAX_DEPTH = 64

_EXPORTS = "exports"


class QualifiedNameResolver:
    """Resolves reference strings to registered symbols."""

    def __init__(self, registry: EntityRegistry, max_depth: int = DEFAULT_MAX_DEPTH):
        self.registry = registry
        self.max_depth = max_depth

    def resolve(self, reference: str, scope: Optional[Module] = None) -> Optional[Symbol]:
        """Resolve ``reference``, first against ``scope``'s exports if given.

        Returns None when nothing matches; callers render the text unlinked.
        """
        parsed = parse_reference(reference)
        if parsed is None:
            logger.debug("Malformed reference %r", reference)
            return None
        if len(parsed.segments) > self.max_depth:
            logger.debug("Reference %r exceeds %d segments", reference, self.max_depth)
            return None

        found = self.resolve_reference(parsed, scope)
        if found is None:
            logger.debug("Unresolved reference %r", reference)
        return found

    def resolve_reference(
        self, reference: Reference, scope: Optional[Module] = None
    ) -> Optional[Symbol]:
        if reference.kind is ReferenceKind.MODULE_EXPORT:
            module = self.registry.get_module(reference.module)
            if module is None:
                return None
            return self._walk(module.exports, reference.segments)

        segments = reference.segments
        for end in range(len(segments), 0, -1):
            # "Foo.prototype" normalizes to "Foo", which the next pass tries.
            if end > 1 and segments[end - 1] == PROTOTYPE:
                continue
            found = self._lookup(".".join(segments[:end]), scope)
            if found is not None:
                return self._walk(found, segments[end:])
        return None

    def _lookup(self, name: str, scope: Optional[Module]) -> Optional[Symbol]:
        """Direct match for a whole name, honouring module shadowing and priority."""
        if scope is not None:
            found = scope.get_export(name)
            if found is not None:
                return found

            # A module-internal variable hoisted into global scope is reached
            # through whatever its declaring module exported it as.
            declaring = self.registry.module_for_internal_var(name)
            if declaring is not None:
                found = declaring.find_exported_var(name)
                if found is not None:
                    return found

        found = self.registry.get_extern(name)
        if found is not None:
            return found

        found = self.registry.get_type(name)
        if found is not None:
            return found

        module = self.registry.get_module(name)
        if module is not None:
            return module.exports
        return None

    def _walk(self, symbol: Symbol, segments: tuple[str, ...]) -> Optional[Symbol]:
        instance = False
        for segment in segments:
            if segment == PROTOTYPE:
                instance = True
                continue
            symbol = self._child(symbol, segment, instance)
            if symbol is None:
                return None
            instance = False
        return symbol

    @staticmethod
    def _child(parent: Symbol, name: str, instance: bool) -> Optional[Symbol]:
        if instance:
            return parent.find_instance_property(name)

        if parent.is_module_exports:
            if name == _EXPORTS:
                return parent
            return parent.module.get_export(name)

        found = parent.find_property(name)
        if found is None and isinstance(parent, NominalType):
            found = parent.find_nested_type(name)
        return found
