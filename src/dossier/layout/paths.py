"""Output layout: where every page of the generated documentation lives.

Layout under the output root:

    source/<relative source path>.src.html     rendered source files
    <qualified.Name>.html                      global types
    module/<slug>.html                         modules
    module/<slug>_exports_<Name>.html          types exported by a module

Everything here is computed in memory. Writing the files is the
renderer's job.
"""

from __future__ import annotations

import posixpath
from pathlib import PurePath, PurePosixPath
from typing import Optional, Union

from ..config import DossierConfig, module_prefix_for, source_prefix_for
from ..exceptions import InvalidPathError, InvariantViolationError, LayoutCollisionError
from ..logging_config import get_logger
from ..model.entities import Module, NominalType, Property, Symbol, page_owner
from ..model.registry import EntityRegistry
from . import naming

logger = get_logger(__name__)

SOURCE_DIR = "source"
MODULE_DIR = "module"
SOURCE_SUFFIX = ".src.html"
PAGE_SUFFIX = ".html"

Target = Union[Symbol, Module, PurePath, str]


class OutputLayout:
    """Computes and memoizes output paths and display names.

    One layout per run. Paths are a pure function of the frozen registry
    and the configured prefixes, so the cache never needs invalidating.
    """

    def __init__(
        self,
        registry: EntityRegistry,
        output_root: Union[str, PurePath],
        source_prefix: Union[str, PurePath],
        module_prefix: Union[str, PurePath],
        elide_index_modules: bool = False,
    ):
        self.registry = registry
        self.output_root = PurePosixPath(output_root)
        self.source_prefix = PurePosixPath(source_prefix)
        self.module_prefix = PurePosixPath(module_prefix)
        self.elide_index_modules = elide_index_modules
        self._paths: dict[object, Optional[PurePosixPath]] = {}
        self._file_modules: Optional[set[PurePosixPath]] = None

    @classmethod
    def from_config(cls, registry: EntityRegistry, config: DossierConfig) -> OutputLayout:
        """Build a layout, deriving any unset prefix from the registered inputs."""
        module_paths = [m.path for m in registry.modules() if m.path is not None]
        if config.source_prefix is not None:
            source_prefix = PurePosixPath(config.source_prefix)
        else:
            source_prefix = source_prefix_for(registry.source_files(), module_paths)
        module_prefix = module_prefix_for(module_paths, config.module_prefix)
        logger.debug("Source prefix %s, module prefix %s", source_prefix, module_prefix)
        return cls(
            registry,
            config.output_root,
            source_prefix,
            module_prefix,
            elide_index_modules=config.elide_index_modules,
        )

    # ── Paths ─────────────────────────────────────────────────────

    def path_for(self, target: Target) -> PurePosixPath:
        """Output path for ``target``.

        Raises:
            InvariantViolationError: If the target is not a documented entity
        """
        path = self.find_path(target)
        if path is None:
            raise InvariantViolationError(
                f"No output path for {target!r}", details={"target": _name_of(target)}
            )
        return path

    def find_path(self, target: Target) -> Optional[PurePosixPath]:
        """Output path for ``target``, or None if it has no page of its own or its owner's."""
        if isinstance(target, (str, PurePath)):
            key: object = PurePosixPath(target)
        else:
            key = target
        if key not in self._paths:
            self._paths[key] = self._compute(key)
        return self._paths[key]

    def _compute(self, target) -> Optional[PurePosixPath]:
        if isinstance(target, PurePosixPath):
            return self._source_path(target)
        if isinstance(target, Module):
            if self.registry.get_module(target.id) is not target:
                return None
            return self.output_root / MODULE_DIR / f"{self.module_slug(target)}{PAGE_SUFFIX}"
        if isinstance(target, Property):
            owner = page_owner(target)
            return self.find_path(owner) if owner is not None else None
        if isinstance(target, NominalType):
            return self._type_path(target)
        return None

    def _source_path(self, path: PurePosixPath) -> PurePosixPath:
        try:
            relative = path.relative_to(self.source_prefix)
        except ValueError:
            raise InvalidPathError(path, f"not under source prefix {self.source_prefix}")
        return self.output_root / SOURCE_DIR / relative.parent / f"{relative.name}{SOURCE_SUFFIX}"

    def _type_path(self, type_: NominalType) -> Optional[PurePosixPath]:
        if type_.is_module_exports:
            return self.find_path(type_.module)
        if self.registry.get_type(type_.name) is not type_:
            # Externs and unregistered types are never rendered.
            return None
        if type_.module is None:
            return self.output_root / f"{type_.name}{PAGE_SUFFIX}"
        module_slug = self.module_slug(type_.module)
        name = naming.name_in_module(type_)
        return self.output_root / MODULE_DIR / f"{module_slug}_exports_{name}{PAGE_SUFFIX}"

    def module_slug(self, module: Module) -> str:
        if not module.is_file_module:
            return naming.namespace_module_slug(module.id)
        rel_path = naming.relative_module_path(module, self.module_prefix)
        elide = self.elide_index_modules and not self._has_sibling_file(rel_path)
        return naming.file_module_slug(rel_path, elide_index=elide)

    def _has_sibling_file(self, rel_path: PurePosixPath) -> bool:
        directory = naming.index_directory(rel_path)
        if directory is None:
            return False
        if self._file_modules is None:
            self._file_modules = {
                naming.relative_module_path(m, self.module_prefix)
                for m in self.registry.modules()
                if m.is_file_module
            }
        return naming.sibling_file(directory) in self._file_modules

    # ── Display names ─────────────────────────────────────────────

    def display_name_for(self, target: Target) -> str:
        if isinstance(target, (str, PurePath)):
            return str(PurePosixPath(target).relative_to(self.source_prefix))
        if isinstance(target, Module):
            return self._module_display_name(target)
        if isinstance(target, Property):
            owner = self.display_name_for(target.owner)
            separator = "#" if target.is_instance_member else "."
            return f"{owner}{separator}{target.simple_name}"
        if isinstance(target, NominalType):
            if target.is_module_exports:
                return self._module_display_name(target.module)
            if target.module is not None:
                return naming.name_in_module(target)
        return target.name

    def _module_display_name(self, module: Module) -> str:
        if not module.is_file_module:
            return module.id
        rel_path = naming.relative_module_path(module, self.module_prefix)
        return naming.file_module_display_name(rel_path, self._has_sibling_file(rel_path))

    # ── Relative paths ────────────────────────────────────────────

    def relative_path(self, from_: Optional[Target], to: Target) -> PurePosixPath:
        """Path to ``to`` relative to the directory holding ``from_``'s page.

        ``from_`` of None means relative to the output root.
        """
        target = self.path_for(to)
        if from_ is None:
            base = self.output_root
        else:
            base = self.path_for(from_).parent
        return PurePosixPath(posixpath.relpath(str(target), str(base)))

    def relativize(self, path: PurePosixPath) -> PurePosixPath:
        """``path`` relative to the output root."""
        return path.relative_to(self.output_root)

    # ── Planning ──────────────────────────────────────────────────

    def plan(self) -> dict[PurePosixPath, Target]:
        """Compute the full path table and reject any collision.

        Raises:
            LayoutCollisionError: If two distinct targets map to one path
        """
        table: dict[PurePosixPath, Target] = {}

        def claim(target: Target) -> None:
            path = self.path_for(target)
            existing = table.get(path)
            if existing is not None and existing is not target:
                raise LayoutCollisionError(path, existing, target)
            table[path] = target

        for module in self.registry.modules():
            claim(module)
        for type_ in self.registry.types():
            claim(type_)
        for source in self.registry.source_files():
            claim(source)

        logger.info("Planned %d output paths", len(table))
        return table


def _name_of(target) -> str:
    return str(getattr(target, "name", None) or getattr(target, "id", None) or target)
