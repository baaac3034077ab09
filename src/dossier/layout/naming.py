"""Slugs and display names for modules.

Storage names and display names are computed separately. Storage names
only have to be unique. Display names also have to read well, so only
display names get the trailing ``/`` that tells ``foo/bar/index.js`` apart
from ``foo/bar.js``.
"""

from pathlib import PurePosixPath
from typing import Optional

from ..exceptions import InvalidPathError
from ..model.entities import INDEX_FILE, Module, NominalType

JS_SUFFIX = ".js"

_CURRENT_DIR = PurePosixPath(".")


def relative_module_path(module: Module, module_prefix: PurePosixPath) -> PurePosixPath:
    """The module's path with the configured module prefix stripped."""
    try:
        return module.path.relative_to(module_prefix)
    except ValueError:
        raise InvalidPathError(module.path, f"not under module prefix {module_prefix}")


def strip_js(path: PurePosixPath) -> PurePosixPath:
    return path.with_suffix("") if path.suffix == JS_SUFFIX else path


def index_directory(rel_path: PurePosixPath) -> Optional[PurePosixPath]:
    """``foo/bar`` for ``foo/bar/index.js``; None for non-index files and a top-level index."""
    if rel_path.name != INDEX_FILE or rel_path.parent == _CURRENT_DIR:
        return None
    return rel_path.parent


def sibling_file(directory: PurePosixPath) -> PurePosixPath:
    """``foo/bar.js`` for directory ``foo/bar``."""
    return directory.with_name(directory.name + JS_SUFFIX)


def file_module_slug(rel_path: PurePosixPath, elide_index: bool = False) -> str:
    """Storage slug: ``foo/bar/baz.js`` -> ``foo_bar_baz``.

    With ``elide_index`` an index module takes its directory's slug
    (``foo/bar/index.js`` -> ``foo_bar``). Callers only pass it when no
    sibling file module would claim the same slug.
    """
    directory = index_directory(rel_path)
    stem = directory if elide_index and directory is not None else strip_js(rel_path)
    return "_".join(stem.parts)


def namespace_module_slug(module_id: str) -> str:
    return module_id.replace(".", "_")


def file_module_display_name(rel_path: PurePosixPath, has_sibling: bool) -> str:
    """``foo`` for ``foo/index.js``, ``foo/bar/baz`` for ``foo/bar/baz.js``.

    An index module whose directory name collides with a sibling file
    module gets a trailing separator (``foo/bar/``); the sibling keeps the
    plain form.
    """
    directory = index_directory(rel_path)
    if directory is None:
        return str(strip_js(rel_path))
    name = str(directory)
    if has_sibling:
        name += "/"
    return name


def name_in_module(type_: NominalType) -> str:
    """``Clazz.Inner`` for ``foo.bar.Clazz.Inner`` exported by module ``foo.bar``."""
    prefix = type_.module.id + "."
    if type_.name.startswith(prefix):
        return type_.name[len(prefix) :]
    return type_.simple_name
