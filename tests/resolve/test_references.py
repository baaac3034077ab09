"""Tests for reference parsing and normalization."""

import pytest

from dossier.resolve.references import (
    Reference,
    ReferenceKind,
    normalize_name,
    parse_reference,
)


class TestNormalizeName:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Foo#bar", "Foo.prototype.bar"),
            ("Foo.prototype", "Foo"),
            ("Foo#", "Foo"),
            ("Foo.", "Foo"),
            ("  a.b.C  ", "a.b.C"),
            ("Foo#bar#baz", "Foo.prototype.bar.prototype.baz"),
        ],
    )
    def test_normalize(self, raw, expected):
        assert normalize_name(raw) == expected


class TestParseReference:
    def test_global(self):
        ref = parse_reference("a.b.C")
        assert ref == Reference(ReferenceKind.GLOBAL, ("a", "b", "C"))
        assert ref.qualified_name == "a.b.C"

    def test_instance_member_notations_agree(self):
        hash_ref = parse_reference("Foo#bar")
        proto_ref = parse_reference("Foo.prototype.bar")
        assert hash_ref == proto_ref
        assert hash_ref.kind is ReferenceKind.INSTANCE_MEMBER

    def test_quoted_module(self):
        ref = parse_reference('"some/module".SomeClass')
        assert ref.kind is ReferenceKind.MODULE_EXPORT
        assert ref.module == "some/module"
        assert ref.segments == ("SomeClass",)
        assert str(ref) == '"some/module".SomeClass'

    def test_single_quoted_module_alone(self):
        ref = parse_reference("'some/module'")
        assert ref.kind is ReferenceKind.MODULE_EXPORT
        assert ref.segments == ()
        assert str(ref) == '"some/module"'

    def test_quoted_module_with_instance_member(self):
        ref = parse_reference('"foo/bar".Clazz#render')
        assert ref.kind is ReferenceKind.MODULE_EXPORT
        assert ref.segments == ("Clazz", "prototype", "render")

    @pytest.mark.parametrize("text", ["", "   ", ".", "a..b", "#"])
    def test_malformed(self, text):
        assert parse_reference(text) is None
