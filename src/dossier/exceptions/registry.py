"""Registry and layout errors.

These abort a documentation run: once the registry or the path table is
ambiguous, every page rendered afterwards could carry a broken link.
"""

from typing import Any

from .base import DossierError


def _describe(target: Any) -> str:
    name = getattr(target, "name", None)
    if name is None:
        name = getattr(target, "id", None)
    if name is None:
        return str(target)
    return f"{type(target).__name__}({name})"


class RegistryError(DossierError):
    """Base class for entity registry errors."""

    pass


class DuplicateEntityError(RegistryError):
    """Raised when two distinct entities claim the same qualified name."""

    def __init__(self, name: str, existing: Any, duplicate: Any):
        super().__init__(
            f"Duplicate entity registered as {name}",
            details={"existing": _describe(existing), "duplicate": _describe(duplicate)},
        )
        self.name = name
        self.existing = existing
        self.duplicate = duplicate


class InvariantViolationError(RegistryError):
    """Raised when a structural precondition does not hold."""

    pass


class LayoutError(DossierError):
    """Base class for output layout errors."""

    pass


class LayoutCollisionError(LayoutError):
    """Raised when two distinct targets are planned onto the same output path."""

    def __init__(self, path: Any, first: Any, second: Any):
        super().__init__(
            f"Output path collision at {path}",
            details={"first": _describe(first), "second": _describe(second)},
        )
        self.path = path
        self.first = first
        self.second = second


class UnresolvedLinkError(LayoutError):
    """Raised when a link is requested for a target with no output path."""

    def __init__(self, target: Any):
        super().__init__(
            f"Failed to build link for {_describe(target)}",
            details={"target": _describe(target)},
        )
        self.target = target
