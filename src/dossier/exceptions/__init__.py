"""Exception hierarchy for Dossier."""

from .base import DossierError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidGraphError,
    InvalidPathError,
)
from .registry import (
    DuplicateEntityError,
    InvariantViolationError,
    LayoutCollisionError,
    LayoutError,
    RegistryError,
    UnresolvedLinkError,
)

__all__ = [
    "DossierError",
    "ConfigurationError",
    "InvalidConfigError",
    "InvalidGraphError",
    "InvalidPathError",
    "RegistryError",
    "DuplicateEntityError",
    "InvariantViolationError",
    "LayoutError",
    "LayoutCollisionError",
    "UnresolvedLinkError",
]
