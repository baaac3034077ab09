"""Navigation index and side-navigation tree."""

from .nav_tree import TreeNode, build_tree
from .type_index import IndexReference, TypeIndex, build_index

__all__ = ["IndexReference", "TreeNode", "TypeIndex", "build_index", "build_tree"]
