"""Shared test fixtures."""

from pathlib import Path

import pytest
from zzap.config import BuildConfig, Config, ScriptsConfig, SiteConfig
from zzap.core.context import BuildContext


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Create a test configuration with tmp_path directories.

    Creates the routes directory and returns a Config instance suitable
    for testing. The site module path points to a file that doesn't exist.
    """
    build = BuildConfig(
        src_dir=tmp_path / "src",
        output_dir=tmp_path / "dist",
        public_dir=tmp_path / "public",
        module=tmp_path / "zzap_site.py",
    )
    build.routes_dir.mkdir(parents=True, exist_ok=True)

    return Config(
        site=SiteConfig(title="Test Site"),
        build=build,
        scripts=ScriptsConfig(),
        config_path=tmp_path / "zzap.toml",
    )


@pytest.fixture
def routes_dir(test_config: Config) -> Path:
    """Markdown content directory of test_config."""
    return test_config.build.routes_dir


@pytest.fixture
def context(test_config: Config) -> BuildContext:
    """Build context for test_config backed by the local filesystem."""
    return BuildContext(config=test_config)
