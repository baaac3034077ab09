"""Reference grammar for names embedded in documentation comments.

Three notations overlap in a JSDoc comment:

    Foo.Bar.baz           GLOBAL            dotted global namespace
    Foo#bar               INSTANCE_MEMBER   same as Foo.prototype.bar
    "foo/bar".Clazz       MODULE_EXPORT     a name on a module's export surface

Every reference is normalized once, up front, into a ``Reference`` whose
segments the resolver walks without further string surgery.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..model.entities import PROTOTYPE

_QUOTED_MODULE = re.compile(r"""^(["'])(?P<module>[^"']+)\1(?:\.(?P<rest>.*))?$""")
_PROTOTYPE_SUFFIX = "." + PROTOTYPE


class ReferenceKind(Enum):
    GLOBAL = "global"
    INSTANCE_MEMBER = "instance_member"
    MODULE_EXPORT = "module_export"


@dataclass(frozen=True)
class Reference:
    """A parsed reference: the notation used plus the dotted name segments."""

    kind: ReferenceKind
    segments: tuple[str, ...]
    module: Optional[str] = None

    @property
    def qualified_name(self) -> str:
        return ".".join(self.segments)

    def __str__(self) -> str:
        if self.module is None:
            return self.qualified_name
        if not self.segments:
            return f'"{self.module}"'
        return f'"{self.module}".{self.qualified_name}'


def normalize_name(name: str) -> str:
    """Rewrite ``#`` as ``.prototype.`` and drop trailing ``.prototype`` / ``.``."""
    name = name.strip().replace("#", _PROTOTYPE_SUFFIX + ".")
    while True:
        if name.endswith(_PROTOTYPE_SUFFIX):
            name = name[: -len(_PROTOTYPE_SUFFIX)]
        elif name.endswith("."):
            name = name[:-1]
        else:
            return name


def parse_reference(text: str) -> Optional[Reference]:
    """Parse ``text``, or return None if it cannot name anything."""
    text = text.strip()
    module = None
    match = _QUOTED_MODULE.match(text)
    if match:
        module = match.group("module")
        text = match.group("rest") or ""

    name = normalize_name(text)
    if not name:
        if module is None:
            return None
        return Reference(ReferenceKind.MODULE_EXPORT, (), module)

    segments = tuple(name.split("."))
    if any(not s for s in segments):
        return None

    if module is not None:
        kind = ReferenceKind.MODULE_EXPORT
    elif PROTOTYPE in segments[1:]:
        kind = ReferenceKind.INSTANCE_MEMBER
    else:
        kind = ReferenceKind.GLOBAL
    return Reference(kind, segments, module)
