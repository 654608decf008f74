"""Configuration management for zzap.

Supports TOML configuration format with auto-discovery. Routes and plugins
are Python objects and live in the site module (see ``zzap.site_module``);
this file only records where that module is.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from zzap.core.plugins import Plugin
    from zzap.core.routes import Route

CONFIG_FILENAME = "zzap.toml"
DEFAULT_BUNDLE_COMMAND = "esbuild {entry} --bundle --format=esm --outfile={outfile}"


@dataclass
class SiteConfig:
    """Site metadata configuration."""

    title: str = ""
    description: str = ""
    base: str = "/"
    url: str | None = None
    lang: str = "en"
    heads: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for layouts."""
        return {
            "title": self.title,
            "description": self.description,
            "base": self.base,
            "url": self.url,
            "lang": self.lang,
        }


@dataclass
class BuildConfig:
    """Build directories configuration."""

    src_dir: Path = field(default_factory=lambda: Path("src"))
    output_dir: Path = field(default_factory=lambda: Path(".zzap/dist"))
    public_dir: Path = field(default_factory=lambda: Path("public"))
    module: Path = field(default_factory=lambda: Path("zzap_site.py"))
    clean: bool = True

    @property
    def routes_dir(self) -> Path:
        """Directory with markdown content."""
        return self.src_dir / "routes"

    @property
    def layouts_dir(self) -> Path:
        """Directory with Jinja2 layouts."""
        return self.src_dir / "layouts"


@dataclass
class ScriptsConfig:
    """Client-side script bundling configuration."""

    entry_points: list[Path] = field(default_factory=list)
    bundle_command: str = DEFAULT_BUNDLE_COMMAND


@dataclass
class PublicFileConfig:
    """Single file copied into the output directory."""

    path: Path
    name: str


@dataclass
class CommandConfig:
    """Shell command run during the build."""

    command: str
    quiet: bool = False


@dataclass
class Config:
    """Application configuration."""

    site: SiteConfig
    build: BuildConfig
    scripts: ScriptsConfig
    public_files: list[PublicFileConfig] = field(default_factory=list)
    commands: list[CommandConfig] = field(default_factory=list)
    routes: "list[Route]" = field(default_factory=list)
    plugins: "list[Plugin]" = field(default_factory=list)
    config_path: Path | None = None

    @property
    def root_dir(self) -> Path:
        """Directory relative to which commands run."""
        if self.config_path is not None:
            return self.config_path.parent
        return Path.cwd()

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for zzap.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents.

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> "Config":
        """Create config with all defaults, relative to the current directory."""
        return cls._from_dict({}, Path.cwd())

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            data = tomllib.load(f)

        return replace(cls._from_dict(data, path.parent), config_path=path)

    @classmethod
    def _from_dict(cls, data: dict[str, object], config_dir: Path) -> "Config":
        return cls(
            site=cls._parse_site(data.get("site")),
            build=cls._parse_build(data.get("build"), config_dir),
            scripts=cls._parse_scripts(data.get("scripts"), config_dir),
            public_files=cls._parse_public_files(data.get("public_files"), config_dir),
            commands=cls._parse_commands(data.get("commands")),
        )

    @classmethod
    def _parse_site(cls, data: object) -> SiteConfig:
        """Parse site configuration section.

        Args:
            data: Raw site section data

        Returns:
            SiteConfig instance
        """
        if data is None:
            return SiteConfig()

        if not isinstance(data, dict):
            raise ValueError("site section must be a dictionary")

        title = data.get("title", "")
        if not isinstance(title, str):
            raise ValueError("site.title must be a string")

        description = data.get("description", "")
        if not isinstance(description, str):
            raise ValueError("site.description must be a string")

        base = data.get("base", "/")
        if not isinstance(base, str):
            raise ValueError("site.base must be a string")
        if not base.startswith("/") or not base.endswith("/"):
            raise ValueError("site.base must start and end with '/'")

        url = data.get("url")
        if url is not None and not isinstance(url, str):
            raise ValueError("site.url must be a string")

        lang = data.get("lang", "en")
        if not isinstance(lang, str):
            raise ValueError("site.lang must be a string")

        heads = _parse_str_list(data.get("heads", []), "site.heads")

        return SiteConfig(
            title=title,
            description=description,
            base=base,
            url=url,
            lang=lang,
            heads=heads,
        )

    @classmethod
    def _parse_build(cls, data: object, config_dir: Path) -> BuildConfig:
        """Parse build configuration section.

        Args:
            data: Raw build section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            BuildConfig instance
        """
        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ValueError("build section must be a dictionary")

        paths: dict[str, Path] = {}
        for key, default in (
            ("src_dir", "src"),
            ("output_dir", ".zzap/dist"),
            ("public_dir", "public"),
            ("module", "zzap_site.py"),
        ):
            value = data.get(key, default)
            if not isinstance(value, str):
                raise ValueError(f"build.{key} must be a string")
            paths[key] = config_dir / value

        clean = data.get("clean", True)
        if not isinstance(clean, bool):
            raise ValueError("build.clean must be a boolean")

        return BuildConfig(**paths, clean=clean)

    @classmethod
    def _parse_scripts(cls, data: object, config_dir: Path) -> ScriptsConfig:
        """Parse scripts configuration section.

        Args:
            data: Raw scripts section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            ScriptsConfig instance
        """
        if data is None:
            return ScriptsConfig()

        if not isinstance(data, dict):
            raise ValueError("scripts section must be a dictionary")

        entry_points = [
            config_dir / item
            for item in _parse_str_list(data.get("entry_points", []), "scripts.entry_points")
        ]

        bundle_command = data.get("bundle_command", DEFAULT_BUNDLE_COMMAND)
        if not isinstance(bundle_command, str):
            raise ValueError("scripts.bundle_command must be a string")

        return ScriptsConfig(entry_points=entry_points, bundle_command=bundle_command)

    @classmethod
    def _parse_public_files(cls, data: object, config_dir: Path) -> list[PublicFileConfig]:
        """Parse public_files array of tables.

        Args:
            data: Raw public_files data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            List of PublicFileConfig
        """
        if data is None:
            return []

        if not isinstance(data, list):
            raise ValueError("public_files must be a list")

        public_files: list[PublicFileConfig] = []
        for item in data:
            if not isinstance(item, dict):
                raise ValueError("public_files items must be dictionaries")

            path = item.get("path")
            if not isinstance(path, str):
                raise ValueError("public_files.path must be a string")

            name = item.get("name")
            if not isinstance(name, str):
                raise ValueError("public_files.name must be a string")

            public_files.append(PublicFileConfig(path=config_dir / path, name=name))
        return public_files

    @classmethod
    def _parse_commands(cls, data: object) -> list[CommandConfig]:
        """Parse commands array of tables.

        Args:
            data: Raw commands data

        Returns:
            List of CommandConfig
        """
        if data is None:
            return []

        if not isinstance(data, list):
            raise ValueError("commands must be a list")

        commands: list[CommandConfig] = []
        for item in data:
            if not isinstance(item, dict):
                raise ValueError("commands items must be dictionaries")

            command = item.get("command")
            if not isinstance(command, str):
                raise ValueError("commands.command must be a string")

            quiet = item.get("quiet", False)
            if not isinstance(quiet, bool):
                raise ValueError("commands.quiet must be a boolean")

            commands.append(CommandConfig(command=command, quiet=quiet))
        return commands

    def with_overrides(
        self,
        *,
        src_dir: Path | None = None,
        output_dir: Path | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            src_dir: Override build.src_dir
            output_dir: Override build.output_dir

        Returns:
            New Config instance with overrides applied
        """
        build = self.build
        if src_dir is not None or output_dir is not None:
            build = replace(
                self.build,
                src_dir=src_dir if src_dir is not None else self.build.src_dir,
                output_dir=output_dir if output_dir is not None else self.build.output_dir,
            )

        return replace(self, build=build)


def _parse_str_list(data: object, name: str) -> list[str]:
    """Validate a list of strings."""
    if not isinstance(data, list):
        raise ValueError(f"{name} must be a list")
    for item in data:
        if not isinstance(item, str):
            raise ValueError(f"{name} items must be strings")
    return list(data)
