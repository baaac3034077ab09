"""Hyperlinks between generated pages."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath, PurePosixPath
from typing import Optional, Union

from ..exceptions import UnresolvedLinkError
from ..model.entities import Module, Property, Symbol
from ..resolve.resolver import QualifiedNameResolver
from .paths import OutputLayout, Target


@dataclass(frozen=True)
class TypeLink:
    """Link text plus an href relative to the page it appears on."""

    text: str
    href: str


class LinkFactory:
    """Creates links from one page (the context) to other entities.

    A context of None produces hrefs relative to the output root, which is
    what the navigation index uses.
    """

    def __init__(
        self,
        layout: OutputLayout,
        resolver: QualifiedNameResolver,
        context: Optional[Target] = None,
    ):
        self.layout = layout
        self.resolver = resolver
        self.context = context

    def with_context(self, context: Optional[Target]) -> LinkFactory:
        return LinkFactory(self.layout, self.resolver, context)

    def create_link(self, to: Union[Symbol, Module]) -> TypeLink:
        return self.link_to(self.context, to)

    def link_to(self, from_: Optional[Target], to: Union[Symbol, Module]) -> TypeLink:
        """Link from ``from_``'s page to ``to``.

        Raises:
            UnresolvedLinkError: If ``to`` has no output path
        """
        if self.layout.find_path(to) is None:
            raise UnresolvedLinkError(to)
        href = str(self.layout.relative_path(from_, to))
        if isinstance(to, Property):
            href = f"{href}#{self._anchor(to)}"
        return TypeLink(text=self.layout.display_name_for(to), href=href)

    def link_reference(self, reference: str, scope: Optional[Module] = None) -> Optional[TypeLink]:
        """Resolve ``reference`` and link to it; None means render it as plain text."""
        target = self.resolver.resolve(reference, scope)
        if target is None:
            return None
        # Externs resolve but have no page of their own.
        if not self.resolver.registry.is_documented(target) or self.layout.find_path(target) is None:
            return None
        return self.create_link(target)

    def link_source(self, path: Union[str, PurePath], line: Optional[int] = None) -> TypeLink:
        """Link to the rendered copy of a source file, optionally to one line."""
        path = PurePosixPath(path)
        href = str(self.layout.relative_path(self.context, path))
        if line is not None and line > 0:
            href = f"{href}#l{line}"
        return TypeLink(text=self.layout.display_name_for(path), href=href)

    def _anchor(self, prop: Property) -> str:
        if prop.is_instance_member:
            return prop.simple_name
        return f"{self.layout.display_name_for(prop.owner)}.{prop.simple_name}"
