"""Tests for qualified-name resolution."""

import pytest

from dossier.model.entities import NominalType
from dossier.model.registry import EntityRegistry
from dossier.resolve.resolver import QualifiedNameResolver


@pytest.fixture
def resolver(library):
    return QualifiedNameResolver(library)


class TestGlobalResolution:
    def test_exact_type(self, resolver, library):
        assert resolver.resolve("app.Widget") is library.get_type("app.Widget")

    def test_static_property(self, resolver, library):
        widget = library.get_type("app.Widget")
        assert resolver.resolve("app.Widget.create") is widget.find_property("create")

    def test_hash_and_prototype_agree(self, resolver, library):
        render = library.get_type("app.Widget").find_instance_property("render")
        assert resolver.resolve("app.Widget#render") is render
        assert resolver.resolve("app.Widget.prototype.render") is render

    def test_trailing_prototype_and_dot_stripped(self, resolver, library):
        widget = library.get_type("app.Widget")
        assert resolver.resolve("app.Widget.prototype") is widget
        assert resolver.resolve("app.Widget.") is widget
        assert resolver.resolve("app.Widget#") is widget

    def test_deep_member_chain(self, resolver, library):
        render = library.get_type("app.Widget").find_instance_property("render")
        options = render.find_property("Options")
        assert resolver.resolve("app.Widget#render.Options") is options

    def test_instance_member_not_found_as_static(self, resolver):
        assert resolver.resolve("app.Widget.render") is None

    def test_nested_type(self, resolver, library):
        assert resolver.resolve("app.Widget.Options") is library.get_type("app.Widget.Options")

    def test_extern(self, resolver, library):
        assert resolver.resolve("Element") is library.get_extern("Element")

    def test_module_by_id_and_public_name(self, resolver, library):
        module = library.get_module("foo.bar")
        assert resolver.resolve("foo.bar") is module.exports
        assert resolver.resolve("foo/bar") is module.exports

    def test_module_exports_suffix(self, resolver, library):
        module = library.get_module("foo.bar")
        assert resolver.resolve("foo/bar.exports") is module.exports

    def test_module_member_by_path(self, resolver, library):
        module = library.get_module("foo.bar")
        assert resolver.resolve("foo/bar.helper") is module.get_export("helper")
        assert resolver.resolve("foo.bar.Widget#paint") is module.get_export(
            "Widget"
        ).find_instance_property("paint")

    def test_unknown_names_are_not_found(self, resolver):
        assert resolver.resolve("nope") is None
        assert resolver.resolve("app.Widget.nope") is None
        assert resolver.resolve("app.Widget#nope.deeper") is None
        assert resolver.resolve("") is None
        assert resolver.resolve("a..b") is None


class TestModuleScope:
    def test_module_scope_shadows_global(self, resolver, library):
        module = library.get_module("foo.bar")
        assert resolver.resolve("Widget") is library.get_type("Widget")
        assert resolver.resolve("Widget", module) is module.get_export("Widget")

    def test_scoped_member_walk(self, resolver, library):
        module = library.get_module("foo.bar")
        paint = module.get_export("Widget").find_instance_property("paint")
        assert resolver.resolve("Widget#paint", module) is paint

    def test_global_fallback_inside_scope(self, resolver, library):
        module = library.get_module("foo.bar")
        assert resolver.resolve("app.Widget", module) is library.get_type("app.Widget")

    def test_hoisted_internal_variable(self, resolver, library):
        bar = library.get_module("foo.bar")
        index = library.get_module("foo.bar.index")
        exported = bar.get_export("Widget")
        assert resolver.resolve("InternalWidget", index) is exported
        assert resolver.resolve("InternalWidget#paint", index) is exported.find_instance_property(
            "paint"
        )

    def test_hoisted_variable_needs_scope(self, resolver):
        assert resolver.resolve("InternalWidget") is None

    def test_quoted_module_reference(self, resolver, library):
        index = library.get_module("foo.bar.index")
        assert resolver.resolve('"foo/bar/index".Clazz') is index.get_export("Clazz")
        assert resolver.resolve('"foo/bar/index"') is index.exports
        assert resolver.resolve('"no/such/module".Clazz') is None


class TestPriority:
    def test_extern_shadows_application_type(self, global_type):
        registry = EntityRegistry()
        extern = NominalType(name="Event")
        app_type = global_type("Event")
        registry.add_extern(extern)
        registry.add_type(app_type)
        registry.freeze()
        assert QualifiedNameResolver(registry).resolve("Event") is extern

    def test_type_shadows_module(self, commonjs_module, global_type):
        registry = EntityRegistry()
        module = commonjs_module("foo.js")
        registry.add_module(module)
        foo = global_type("foo")
        registry.add_type(foo)
        registry.freeze()
        assert QualifiedNameResolver(registry).resolve("foo") is foo


class TestDepthGuard:
    def test_overlong_reference_unresolved(self, library):
        resolver = QualifiedNameResolver(library, max_depth=3)
        assert resolver.resolve("app.Widget") is not None
        assert resolver.resolve("app.Widget.prototype.render") is None

    def test_pathological_name_does_not_recurse(self, resolver):
        name = ".".join(["a"] * 5000)
        assert resolver.resolve(name) is None
