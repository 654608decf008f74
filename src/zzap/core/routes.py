"""Programmatically declared routes.

A route pattern is a "/"-separated sequence of segments. Segments starting
with "$" capture the corresponding segment of a requested path, e.g.
"/blog/$slug" matches "/blog/my-post" with ``{"slug": "my-post"}``.
"""

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypedDict

from zzap.core.page import Page
from zzap.core.types import URLPath, join_web_path, split_web_path

if TYPE_CHECKING:
    from zzap.core.context import BuildContext

PARAM_PREFIX = "$"


class PathParamsDict(TypedDict):
    """One set of parameters to build a route with."""

    params: dict[str, str]


@dataclass(frozen=True)
class PageRequest:
    """Request handed to a route's page handler."""

    path: URLPath
    params: dict[str, str] = field(default_factory=dict)


PageHandler = Callable[[PageRequest, "BuildContext"], "Page | None | Awaitable[Page | None]"]
PathParamsHandler = Callable[
    ["BuildContext"], "list[PathParamsDict] | None | Awaitable[list[PathParamsDict] | None]"
]


@dataclass(frozen=True)
class Route:
    """Route declared in the site module.

    Attributes:
        path: Route pattern (e.g., "/blog/$slug")
        get_page: Produces the page for a matched path, or None for no page
        get_path_params: Lists parameter sets to build during a full build.
                         Without it, the pattern itself is built as a path.
    """

    path: str
    get_page: PageHandler
    get_path_params: PathParamsHandler | None = None

    def match(self, path: str) -> dict[str, str] | None:
        """Match a web path against this route's pattern.

        Args:
            path: Requested web path (e.g., "/blog/my-post")

        Returns:
            Captured parameters if the path matches, None otherwise
        """
        route_segments = split_web_path(self.path)
        path_segments = split_web_path(path)
        if len(route_segments) != len(path_segments):
            return None

        params: dict[str, str] = {}
        for route_segment, path_segment in zip(route_segments, path_segments):
            if route_segment.startswith(PARAM_PREFIX):
                params[route_segment[len(PARAM_PREFIX) :]] = path_segment
            elif route_segment != path_segment:
                return None
        return params

    def build_path(self, params: Mapping[str, str]) -> URLPath:
        """Substitute parameters into this route's pattern.

        Args:
            params: Values for each "$name" segment

        Returns:
            Normalized web path

        Raises:
            KeyError: If a "$name" segment has no value in params
        """
        segments: list[str] = []
        for segment in split_web_path(self.path):
            if segment.startswith(PARAM_PREFIX):
                name = segment[len(PARAM_PREFIX) :]
                if name not in params:
                    raise KeyError(f"Missing value for route parameter '{name}'")
                segments.append(str(params[name]))
            else:
                segments.append(segment)
        return join_web_path(*segments)
