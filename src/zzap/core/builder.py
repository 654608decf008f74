"""Build coordination.

Sequences one build:

    setup phase -> path enumeration -> page resolution -> sitemap
                -> build phase -> render phase

Path enumeration is skipped when a subset of paths is requested.
"""

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field

from zzap.config import Config
from zzap.core.context import BuildContext, RenderContext, Shell
from zzap.core.filesystem import FileSystem, LocalFileSystem
from zzap.core.markdown import MarkdownRenderer, render_markdown
from zzap.core.page import Page, SitemapEntry
from zzap.core.plugins import Plugin, run_phase
from zzap.core.resolver import PathResolver
from zzap.core.sitemap import build_sitemap
from zzap.core.types import URLPath, join_web_path
from zzap.plugins import core_plugins as default_core_plugins

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Outcome of a build."""

    pages: list[Page]
    sitemap: list[SitemapEntry]
    heads: list[str] = field(default_factory=list)
    scripts: list[str] = field(default_factory=list)
    elapsed_ms: float = 0.0


def parse_paths(paths: str | None) -> list[URLPath] | None:
    """Parse a comma-separated list of web paths.

    Args:
        paths: e.g. "/guide, /blog/my-post", or None for a full build

    Returns:
        Normalized paths, or None when no paths were given

    Raises:
        ValueError: If paths is given but names no path (e.g., "" or ",")
    """
    if paths is None:
        return None
    parsed = [join_web_path(path.strip()) for path in paths.split(",") if path.strip()]
    if not parsed:
        raise ValueError(f"No paths to rebuild in {paths!r}")
    return parsed


class Builder:
    """Runs builds for a site.

    Core plugins are registered before user plugins. Plugin failures
    propagate as PluginError and abort the build; failures of single
    routes or markdown documents are logged and skipped.
    """

    def __init__(
        self,
        config: Config,
        *,
        core_plugins: Sequence[Plugin] | None = None,
        fs: FileSystem | None = None,
        shell: Shell | None = None,
        markdown_renderer: MarkdownRenderer = render_markdown,
    ) -> None:
        """Initialize builder.

        Args:
            config: Configuration with routes and user plugins loaded
            core_plugins: Core plugins to run before user plugins.
                          If None, the plugins shipped with zzap are used.
            fs: Filesystem implementation (default: local disk)
            shell: Shell for plugin commands (default: run in the config directory)
            markdown_renderer: Markdown to HTML converter
        """
        if core_plugins is None:
            core_plugins = default_core_plugins()

        self._config = config
        self._plugins = [*core_plugins, *config.plugins]
        self._context = BuildContext(
            config=config,
            logger=logging.getLogger("zzap"),
            shell=shell or Shell(cwd=str(config.root_dir)),
            fs=fs or LocalFileSystem(),
            render_markdown=markdown_renderer,
        )
        self._resolver = PathResolver(config.routes, config.build.routes_dir, self._context)
        self._heads: list[str] = []
        self._scripts: list[str] = []

    @property
    def plugins(self) -> list[Plugin]:
        """Plugins in registration order."""
        return list(self._plugins)

    async def run(self, paths: Sequence[str] | None = None) -> BuildResult:
        """Run the setup phase and a build.

        Args:
            paths: Web paths to rebuild, or None to build the whole site

        Returns:
            BuildResult of the build
        """
        if paths is None and self._config.build.clean:
            logger.debug(f"Cleaning {self._config.build.output_dir}")
            await self._context.fs.remove_tree(self._config.build.output_dir)

        await self.setup()
        return await self.build(paths)

    async def setup(self) -> None:
        """Run the setup phase.

        Fragments returned by setup hooks are kept for every later build.
        """
        result = await run_phase("setup", self._plugins, self._context)
        self._heads = result.heads
        self._scripts = result.scripts

    async def build(self, paths: Sequence[str] | None = None) -> BuildResult:
        """Resolve pages and run the build and render phases.

        Args:
            paths: Web paths to rebuild, or None to build the whole site

        Returns:
            BuildResult with the rendered pages and sitemap
        """
        started = time.perf_counter()
        if paths is None:
            logger.info("Building...")
            paths = await self._resolver.get_paths()
        else:
            logger.info(f"Rebuilding... ({', '.join(paths)})")

        pages = list((await self._resolver.get_pages(paths)).values())
        sitemap = build_sitemap(pages)

        build_result = await run_phase("build", self._plugins, self._context)
        heads = [*self._heads, *build_result.heads]
        scripts = [*self._scripts, *build_result.scripts]

        render_context = RenderContext(
            config=self._context.config,
            logger=self._context.logger,
            shell=self._context.shell,
            fs=self._context.fs,
            render_markdown=self._context.render_markdown,
            pages=pages,
            sitemap=sitemap,
            heads=heads,
            scripts=scripts,
        )
        await run_phase("render", self._plugins, render_context)

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(f"Finished in {elapsed_ms:.0f}ms. Rendered {len(pages)} pages.")
        return BuildResult(
            pages=pages,
            sitemap=sitemap,
            heads=heads,
            scripts=scripts,
            elapsed_ms=elapsed_ms,
        )
