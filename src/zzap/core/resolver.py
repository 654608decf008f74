"""Path resolution for routes and markdown content.

Reconciles declared routes with markdown files found under the routes
directory. Enumeration lists every web path a full build must produce;
resolution turns requested web paths into pages.

Markdown lookup for a web path, first match wins:

    <routes_dir>/<path>/index.md
    <routes_dir>/<path>.md
    <routes_dir>/<parent>/!index.md   (exploded into one page per heading)

Each candidate is also tried with the ``.mdx`` extension right after ``.md``.
"""

import asyncio
import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from pathlib import Path

from zzap.core.context import BuildContext
from zzap.core.filesystem import MARKDOWN_PATTERNS, FileSystem
from zzap.core.page import FrontMatterError, Page, from_markdown
from zzap.core.routes import PageRequest, Route
from zzap.core.types import URLPath, join_web_path, maybe_await, split_web_path

logger = logging.getLogger(__name__)

EXPLODED_INDEX = "!index"
MARKDOWN_SUFFIXES = (".md", ".mdx")

_MARKDOWN_SUFFIX_RE = re.compile(r"\.mdx?$")
_INDEX_SUFFIX_RE = re.compile(r"(^|/)index$")


@dataclass
class PathResolution:
    """Pages produced for one requested path, split by origin."""

    path: URLPath
    route_pages: list[Page] = field(default_factory=list)
    markdown_pages: list[Page] = field(default_factory=list)


class PathResolver:
    """Resolves web paths to pages from routes and markdown files.

    Failures of individual routes or markdown documents are logged and
    isolated: the failing unit contributes nothing and the rest continues.
    """

    def __init__(
        self,
        routes: Sequence[Route],
        routes_dir: Path,
        context: BuildContext,
    ) -> None:
        """Initialize resolver.

        Args:
            routes: Declared routes, in declaration order
            routes_dir: Root directory of markdown content
            context: Context passed to route handlers. Its filesystem and
                     markdown converter are used for markdown lookup.
        """
        self._routes = list(routes)
        self._routes_dir = routes_dir
        self._context = context

    @property
    def fs(self) -> FileSystem:
        return self._context.fs

    async def get_paths(self) -> list[URLPath]:
        """List every web path of a full build.

        Returns:
            De-duplicated paths: route paths in declaration order, then
            markdown paths in sorted file order
        """
        route_paths = await asyncio.gather(*(self._get_route_paths(route) for route in self._routes))
        markdown_paths = await self._get_markdown_paths()

        paths = [path for paths in route_paths for path in paths]
        paths.extend(markdown_paths)
        return list(dict.fromkeys(paths))

    async def get_pages(self, paths: Iterable[str]) -> dict[URLPath, Page]:
        """Resolve web paths to pages.

        All paths resolve concurrently. Results are merged once every
        resolution finished: route pages first, in request order, with the
        last write winning; markdown pages after them, never replacing a
        path a route produced.

        Args:
            paths: Web paths to resolve

        Returns:
            Pages keyed by web path, in merge order
        """
        resolutions = await asyncio.gather(*(self.resolve(path) for path in paths))

        pages: dict[URLPath, Page] = {}
        for resolution in resolutions:
            for page in resolution.route_pages:
                pages[URLPath(page.path)] = page

        route_paths = set(pages)
        for resolution in resolutions:
            for page in resolution.markdown_pages:
                if page.path in route_paths:
                    logger.debug(f"Route page for {page.path} takes precedence over markdown")
                    continue
                pages[URLPath(page.path)] = page

        return pages

    async def resolve(self, path: str) -> PathResolution:
        """Resolve a single web path.

        Markdown is only consulted when no route produced a page.

        Args:
            path: Web path (e.g., "/blog/my-post")

        Returns:
            PathResolution with the pages the path produced
        """
        web_path = join_web_path(path)
        resolution = PathResolution(path=web_path)

        for route in self._routes:
            params = route.match(web_path)
            if params is None:
                continue
            page = await self._get_route_page(route, web_path, params)
            if page is not None:
                resolution.route_pages.append(page)

        if not resolution.route_pages:
            resolution.markdown_pages = await self._get_markdown_pages(web_path)

        return resolution

    async def _get_route_paths(self, route: Route) -> list[URLPath]:
        """Enumerate paths of one route, logging and isolating failures."""
        try:
            if route.get_path_params is None:
                return [join_web_path(route.path)]

            path_params = await maybe_await(route.get_path_params(self._context))
            if path_params is None:
                return [join_web_path(route.path)]
            return [route.build_path(entry["params"]) for entry in path_params]
        except Exception:
            logger.exception(f"Error while getting path params for route {route.path}")
            return []

    async def _get_route_page(self, route: Route, path: URLPath, params: dict[str, str]) -> Page | None:
        """Invoke a route's page handler, logging and isolating failures."""
        request = PageRequest(path=path, params=params)
        try:
            page = await maybe_await(route.get_page(request, self._context))
        except Exception:
            logger.exception(f"Error while getting page for route {route.path} ({path})")
            return None

        if page is None:
            return None
        return replace(page, path=path)

    async def _get_markdown_paths(self) -> list[URLPath]:
        """Enumerate web paths of markdown files under the routes directory."""
        files = await self.fs.glob(self._routes_dir, MARKDOWN_PATTERNS)
        paths: list[URLPath] = []
        for file_path in files:
            relative = file_path.relative_to(self._routes_dir).as_posix()
            relative = _MARKDOWN_SUFFIX_RE.sub("", relative)
            relative = _INDEX_SUFFIX_RE.sub("", relative)
            paths.append(join_web_path(relative))
        return paths

    async def _get_markdown_pages(self, path: URLPath) -> list[Page]:
        """Build pages for a path from its markdown file, if one exists."""
        found = await self._find_markdown(path)
        if found is None:
            return []

        source_path, explode = found
        try:
            markdown_text = await self.fs.read_text(source_path)
            return from_markdown(
                markdown_text,
                path,
                explode=explode,
                render=self._context.render_markdown,
            )
        except (FrontMatterError, OSError, UnicodeDecodeError):
            logger.exception(f"Error while building pages from {source_path} ({path})")
            return []

    async def _find_markdown(self, path: URLPath) -> tuple[Path, bool] | None:
        """Locate the markdown source for a web path.

        A file named "!index" is always exploded, also when it is reached
        directly through its own enumerated path (e.g., "/guide/!index").

        Returns:
            Tuple of (source file, whether to explode it), or None
        """
        segments = split_web_path(path)
        directory = self._routes_dir.joinpath(*segments)

        candidates = [directory / f"index{suffix}" for suffix in MARKDOWN_SUFFIXES]
        if segments:
            parent = self._routes_dir.joinpath(*segments[:-1])
            candidates.extend(parent / f"{segments[-1]}{suffix}" for suffix in MARKDOWN_SUFFIXES)
            candidates.extend(parent / f"{EXPLODED_INDEX}{suffix}" for suffix in MARKDOWN_SUFFIXES)

        for candidate in candidates:
            if await self.fs.exists(candidate):
                return candidate, candidate.stem == EXPLODED_INDEX
        return None
