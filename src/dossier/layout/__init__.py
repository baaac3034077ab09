"""Output paths, display names and links."""

from .links import LinkFactory, TypeLink
from .paths import OutputLayout

__all__ = ["LinkFactory", "OutputLayout", "TypeLink"]
