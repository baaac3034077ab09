"""Shared test fixtures for Dossier."""

from pathlib import PurePosixPath

import pytest

from dossier.layout.links import LinkFactory
from dossier.layout.paths import OutputLayout
from dossier.model.entities import Module, ModuleKind, NominalType, SourcePosition, TypeKind
from dossier.model.registry import EntityRegistry
from dossier.resolve.resolver import QualifiedNameResolver

SRC_PREFIX = PurePosixPath("/input/src")
MODULE_PREFIX = PurePosixPath("/input/module")
OUTPUT_ROOT = PurePosixPath("/out")


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


def _commonjs_module(path: str, **kwargs) -> Module:
    """A CommonJS module under MODULE_PREFIX, id derived from its path."""
    return Module(
        id=path[: -len(".js")].replace("/", "."),
        kind=ModuleKind.FILE,
        path=MODULE_PREFIX / path,
        public_name=kwargs.pop("public_name", path[: -len(".js")]),
        **kwargs,
    )


def _namespace_module(name: str, **kwargs) -> Module:
    return Module(id=name, kind=ModuleKind.NAMESPACE, **kwargs)


def _global_type(name: str, **kwargs) -> NominalType:
    kwargs.setdefault("position", SourcePosition(SRC_PREFIX / "global.js", 1))
    return NominalType(name=name, **kwargs)


def _make_layout(
    registry: EntityRegistry, elide_index: bool = False, source_prefix=SRC_PREFIX
) -> OutputLayout:
    return OutputLayout(
        registry, OUTPUT_ROOT, source_prefix, MODULE_PREFIX, elide_index_modules=elide_index
    )


def _make_links(registry: EntityRegistry, layout: OutputLayout = None) -> LinkFactory:
    layout = layout or _make_layout(registry)
    return LinkFactory(layout, QualifiedNameResolver(registry))


@pytest.fixture
def commonjs_module():
    """Factory for file modules: ``commonjs_module("foo/bar.js")`` has id ``foo.bar``."""
    return _commonjs_module


@pytest.fixture
def namespace_module():
    return _namespace_module


@pytest.fixture
def global_type():
    """Factory for global types declared in /input/src/global.js."""
    return _global_type


@pytest.fixture
def make_layout():
    """Factory for layouts writing under /out, with modules under /input/module."""
    return _make_layout


@pytest.fixture
def make_links():
    return _make_links


@pytest.fixture
def registry():
    """Empty, unfrozen registry."""
    return EntityRegistry()


@pytest.fixture
def library():
    """A small library: globals, externs, aliases and two CommonJS modules.

        Element                     extern
        app.Widget                  class, static create, member render
        app.Widget.Options          nested typedef
        app.ui                      namespace
        app.ui.Button               class (handle "button")
        app.ui.LegacyButton         alias of app.ui.Button
        app.IWidget                 interface
        Widget                      global class shadowed inside foo/bar
        foo/bar.js                  exports Widget, helper; var InternalWidget -> Widget
        foo/bar/index.js            exports Clazz
    """
    reg = EntityRegistry()

    reg.add_extern(NominalType(name="Element", handle="Element"))

    widget = _global_type("app.Widget", handle="widget")
    widget.add_property("create")
    render = widget.add_instance_property("render")
    render.add_property("Options", typedef=True)
    widget.add_nested_type("Options", TypeKind.TYPEDEF)
    reg.add_type(widget)

    reg.add_type(_global_type("app.ui", kind=TypeKind.NAMESPACE, handle="ui"))
    button = _global_type("app.ui.Button", handle="button")
    reg.add_type(button)
    legacy = _global_type("app.ui.LegacyButton", handle="button")
    legacy.add_nested_type("Style", TypeKind.TYPEDEF)
    legacy.add_property("Size", typedef=True)
    reg.add_type(legacy)
    reg.add_type(_global_type("app.IWidget", kind=TypeKind.INTERFACE))
    reg.add_type(_global_type("Widget", handle="global-widget"))

    bar = _commonjs_module("foo/bar.js")
    local_widget = bar.export_type("Widget", handle="bar-widget")
    local_widget.add_instance_property("paint")
    bar.export_property("helper")
    bar.declare_internal_var("InternalWidget", "Widget")
    reg.add_module(bar)

    bar_index = _commonjs_module("foo/bar/index.js")
    bar_index.export_type("Clazz")
    reg.add_module(bar_index)

    reg.freeze()
    return reg
