"""Tests for configuration loading."""

from pathlib import Path

import pytest
from zzap.config import (
    DEFAULT_BUNDLE_COMMAND,
    BuildConfig,
    CommandConfig,
    Config,
    PublicFileConfig,
    ScriptsConfig,
    SiteConfig,
)


class TestConfigLoad:
    """Tests for Config.load()."""

    def test__explicit_path__loads_file(self, tmp_path: Path) -> None:
        """Load every section from an explicit file."""
        config_file = tmp_path / "zzap.toml"
        config_file.write_text(
            """
[site]
title = "My Site"
description = "All about things"
base = "/docs/"
url = "https://example.com"
lang = "de"
heads = ["<link rel='icon' href='/favicon.ico'>"]

[build]
src_dir = "content"
output_dir = "out"
public_dir = "static"
module = "site.py"
clean = false

[scripts]
entry_points = ["js/app.ts"]
bundle_command = "bundle {entry} {outfile}"

[[public_files]]
path = "assets/robots.txt"
name = "robots.txt"

[[commands]]
command = "npx tailwindcss -o out/app.css"
quiet = true
"""
        )

        config = Config.load(config_file)

        assert config.config_path == config_file
        assert config.root_dir == tmp_path
        assert config.site.title == "My Site"
        assert config.site.description == "All about things"
        assert config.site.base == "/docs/"
        assert config.site.url == "https://example.com"
        assert config.site.lang == "de"
        assert config.site.heads == ["<link rel='icon' href='/favicon.ico'>"]
        assert config.build.src_dir == tmp_path / "content"
        assert config.build.output_dir == tmp_path / "out"
        assert config.build.public_dir == tmp_path / "static"
        assert config.build.module == tmp_path / "site.py"
        assert config.build.clean is False
        assert config.scripts.entry_points == [tmp_path / "js" / "app.ts"]
        assert config.scripts.bundle_command == "bundle {entry} {outfile}"
        assert config.public_files == [
            PublicFileConfig(path=tmp_path / "assets" / "robots.txt", name="robots.txt"),
        ]
        assert config.commands == [CommandConfig(command="npx tailwindcss -o out/app.css", quiet=True)]

    def test__empty_file__uses_defaults(self, tmp_path: Path) -> None:
        """Missing sections fall back to defaults relative to the file."""
        config_file = tmp_path / "zzap.toml"
        config_file.write_text("")

        config = Config.load(config_file)

        assert config.site == SiteConfig()
        assert config.build.src_dir == tmp_path / "src"
        assert config.build.output_dir == tmp_path / ".zzap" / "dist"
        assert config.build.routes_dir == tmp_path / "src" / "routes"
        assert config.build.layouts_dir == tmp_path / "src" / "layouts"
        assert config.build.clean is True
        assert config.scripts.bundle_command == DEFAULT_BUNDLE_COMMAND
        assert config.public_files == []
        assert config.commands == []
        assert config.routes == []
        assert config.plugins == []

    def test__explicit_path__not_found__raises(self, tmp_path: Path) -> None:
        """Raise FileNotFoundError for a missing explicit path."""
        with pytest.raises(FileNotFoundError):
            Config.load(tmp_path / "missing.toml")

    def test__discovers_in_parent(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Find zzap.toml in a parent directory."""
        (tmp_path / "zzap.toml").write_text('[site]\ntitle = "Found"\n')
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)

        config = Config.load()

        assert config.site.title == "Found"
        assert config.config_path == tmp_path / "zzap.toml"

    def test__no_file__defaults_in_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without a config file, paths are relative to the working directory."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(Config, "_discover_config", classmethod(lambda cls: None))

        config = Config.load()

        assert config.config_path is None
        assert config.build.src_dir == tmp_path / "src"
        assert config.root_dir == tmp_path

    def test__invalid_toml__raises(self, tmp_path: Path) -> None:
        """Syntax errors are reported."""
        config_file = tmp_path / "zzap.toml"
        config_file.write_text("[site\n")

        with pytest.raises(ValueError):
            Config.load(config_file)


class TestConfigValidation:
    """Tests for configuration validation."""

    @pytest.mark.parametrize(
        ("content", "message"),
        [
            ("site = 1", "site section must be a dictionary"),
            ("[site]\ntitle = 1", "site.title must be a string"),
            ('[site]\nbase = "docs"', "site.base must start and end with '/'"),
            ('[site]\nbase = "/docs"', "site.base must start and end with '/'"),
            ("[site]\nurl = 5", "site.url must be a string"),
            ('[site]\nheads = "<meta>"', "site.heads must be a list"),
            ("[site]\nheads = [1]", "site.heads items must be strings"),
            ("[build]\nsrc_dir = 1", "build.src_dir must be a string"),
            ('[build]\nclean = "yes"', "build.clean must be a boolean"),
            ('[scripts]\nentry_points = "app.ts"', "scripts.entry_points must be a list"),
            ("[scripts]\nbundle_command = 1", "scripts.bundle_command must be a string"),
            ('[[public_files]]\nname = "a"', "public_files.path must be a string"),
            ('[[public_files]]\npath = "a"', "public_files.name must be a string"),
            ("public_files = 1", "public_files must be a list"),
            ("[[commands]]\nquiet = true", "commands.command must be a string"),
            ('[[commands]]\ncommand = "x"\nquiet = 1', "commands.quiet must be a boolean"),
        ],
    )
    def test__invalid_values__raise(self, tmp_path: Path, content: str, message: str) -> None:
        """Wrong types are rejected with a message naming the key."""
        config_file = tmp_path / "zzap.toml"
        config_file.write_text(content)

        with pytest.raises(ValueError) as exc_info:
            Config.load(config_file)

        assert str(exc_info.value) == message


class TestConfigWithOverrides:
    """Tests for Config.with_overrides()."""

    def _config(self, tmp_path: Path) -> Config:
        return Config(
            site=SiteConfig(),
            build=BuildConfig(src_dir=tmp_path / "src", output_dir=tmp_path / "dist"),
            scripts=ScriptsConfig(),
        )

    def test__overrides_directories(self, tmp_path: Path) -> None:
        """Given directories replace the configured ones."""
        config = self._config(tmp_path)

        result = config.with_overrides(src_dir=tmp_path / "other", output_dir=tmp_path / "out")

        assert result.build.src_dir == tmp_path / "other"
        assert result.build.output_dir == tmp_path / "out"

    def test__none__keeps_values(self, tmp_path: Path) -> None:
        """None values leave the config unchanged."""
        config = self._config(tmp_path)

        result = config.with_overrides(output_dir=tmp_path / "out")

        assert result.build.src_dir == tmp_path / "src"
        assert result.build.output_dir == tmp_path / "out"

    def test__original__not_modified(self, tmp_path: Path) -> None:
        """The original config is left as it was."""
        config = self._config(tmp_path)

        config.with_overrides(src_dir=tmp_path / "other")

        assert config.build.src_dir == tmp_path / "src"


class TestSiteConfig:
    """Tests for SiteConfig."""

    def test__to_dict__excludes_heads(self) -> None:
        """Layouts get site metadata; heads are passed separately."""
        site = SiteConfig(title="T", heads=["<meta>"])

        assert site.to_dict() == {
            "title": "T",
            "description": "",
            "base": "/",
            "url": None,
            "lang": "en",
        }
