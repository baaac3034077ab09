"""Reference parsing and qualified-name resolution."""

from .references import Reference, ReferenceKind, normalize_name, parse_reference
from .resolver import DEFAULT_MAX_DEPTH, QualifiedNameResolver

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "QualifiedNameResolver",
    "Reference",
    "ReferenceKind",
    "normalize_name",
    "parse_reference",
]
