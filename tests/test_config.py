"""Tests for configuration loading and path prefixes."""

from pathlib import PurePosixPath

import pytest

from dossier.config import (
    DossierConfig,
    common_prefix,
    load_config,
    module_prefix_for,
    source_prefix_for,
)
from dossier.exceptions import DossierError, InvalidConfigError


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """Empty home and working directory, no DOSSIER_* variables."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    for field_name in DossierConfig.__dataclass_fields__:
        monkeypatch.delenv(f"DOSSIER_{field_name.upper()}", raising=False)
    return home, work


class TestDossierConfig:
    def test_defaults(self):
        config = DossierConfig()
        assert config.output_root == "docs"
        assert config.source_prefix is None
        assert config.elide_index_modules is False
        assert config.max_reference_depth == 64
        assert config.index_filename == "types.js"

    def test_frozen(self):
        config = DossierConfig()
        with pytest.raises(AttributeError):
            config.output_root = "elsewhere"

    @pytest.mark.parametrize(
        "kwargs,key",
        [
            ({"output_root": ""}, "output_root"),
            ({"max_reference_depth": 0}, "max_reference_depth"),
            ({"index_filename": "a/types.js"}, "index_filename"),
            ({"verbosity": "loud"}, "verbosity"),
        ],
    )
    def test_validation(self, kwargs, key):
        with pytest.raises(InvalidConfigError) as exc_info:
            DossierConfig(**kwargs)
        assert exc_info.value.key == key


class TestLoadConfig:
    def test_defaults_without_files(self, isolated):
        assert load_config() == DossierConfig()

    def test_merge_order(self, isolated, monkeypatch):
        home, work = isolated
        (home / ".dossier.toml").write_text(
            'output_root = "home-docs"\nindex_filename = "home.js"\n'
        )
        (work / "dossier.toml").write_text(
            '[dossier]\noutput_root = "project-docs"\nelide_index_modules = true\n'
        )
        monkeypatch.setenv("DOSSIER_INDEX_FILENAME", "env.js")

        config = load_config()
        assert config.output_root == "project-docs"
        assert config.elide_index_modules is True
        assert config.index_filename == "env.js"

        config = load_config(output_root="cli-docs", index_filename=None)
        assert config.output_root == "cli-docs"
        assert config.index_filename == "env.js"

    def test_explicit_file(self, isolated, tmp_path):
        explicit = tmp_path / "custom.toml"
        explicit.write_text("max_reference_depth = 8\n")
        assert load_config(config_file=explicit).max_reference_depth == 8

    def test_missing_explicit_file(self, isolated, tmp_path):
        with pytest.raises(DossierError):
            load_config(config_file=tmp_path / "absent.toml")

    def test_unknown_key(self, isolated):
        _, work = isolated
        (work / "dossier.toml").write_text("colour = true\n")
        with pytest.raises(DossierError):
            load_config()

    def test_invalid_toml(self, isolated):
        _, work = isolated
        (work / "dossier.toml").write_text("output_root = \n")
        with pytest.raises(DossierError):
            load_config()

    def test_env_types(self, isolated, monkeypatch):
        monkeypatch.setenv("DOSSIER_ELIDE_INDEX_MODULES", "yes")
        monkeypatch.setenv("DOSSIER_MAX_REFERENCE_DEPTH", "10")
        monkeypatch.setenv("DOSSIER_SOURCE_PREFIX", "/src")
        config = load_config()
        assert config.elide_index_modules is True
        assert config.max_reference_depth == 10
        assert config.source_prefix == "/src"

    def test_bad_env_value(self, isolated, monkeypatch):
        monkeypatch.setenv("DOSSIER_ELIDE_INDEX_MODULES", "maybe")
        with pytest.raises(DossierError):
            load_config()

    def test_verbosity_flags(self, isolated):
        assert load_config(verbose=True).verbosity == "verbose"
        assert load_config(quiet=True).verbosity == "quiet"
        assert load_config(verbose=False, quiet=False).verbosity == "normal"


class TestPrefixes:
    def test_common_prefix(self):
        paths = [PurePosixPath("/a/b/c.js"), PurePosixPath("/a/b/d/e.js")]
        assert common_prefix(paths) == PurePosixPath("/a/b")

    def test_common_prefix_of_nothing(self):
        assert common_prefix([]) == PurePosixPath(".")

    def test_single_source_uses_its_directory(self):
        assert source_prefix_for([PurePosixPath("/a/b/c.js")]) == PurePosixPath("/a/b")

    def test_sources_and_modules_share_prefix(self):
        prefix = source_prefix_for([PurePosixPath("/a/src/x.js")], [PurePosixPath("/a/lib/y.js")])
        assert prefix == PurePosixPath("/a")

    def test_module_prefix_from_common_directory(self):
        modules = [PurePosixPath("/m/foo/bar.js"), PurePosixPath("/m/foo/baz/index.js")]
        assert module_prefix_for(modules) == PurePosixPath("/m/foo")

    def test_single_module(self):
        assert module_prefix_for([PurePosixPath("/m/foo.js")]) == PurePosixPath("/m")

    def test_explicit_module_prefix(self):
        modules = [PurePosixPath("/m/foo/bar.js")]
        assert module_prefix_for(modules, "/m") == PurePosixPath("/m")

    def test_explicit_module_prefix_must_contain_modules(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            module_prefix_for([PurePosixPath("/m/foo.js"), PurePosixPath("/n/bar.js")], "/m")
        assert exc_info.value.key == "module_prefix"
