"""Core type definitions."""

import inspect
from collections.abc import Awaitable
from typing import NewType, TypeVar

T = TypeVar("T")

# URL path of a built page (e.g., "/", "/guide", "/blog/my-post")
# Distinct from filesystem Path to catch type mismatches
URLPath = NewType("URLPath", str)


def join_web_path(*parts: str) -> URLPath:
    """Join path parts into a canonical web path.

    Empty segments are dropped, so repeated, leading and trailing slashes
    collapse. The result always starts with "/" and never ends with one,
    except for the root path itself.

    Args:
        parts: Path fragments (e.g., "blog/", "/my-post")

    Returns:
        Normalized URL path (e.g., "/blog/my-post")
    """
    return URLPath("/" + "/".join(split_web_path(*parts)))


def split_web_path(*parts: str) -> list[str]:
    """Split path parts into their non-empty segments."""
    return [segment for part in parts for segment in part.split("/") if segment]


async def maybe_await(value: T | Awaitable[T]) -> T:
    """Await value if it is awaitable, return it unchanged otherwise.

    Lets route handlers and plugin hooks be plain functions or coroutines.
    """
    if inspect.isawaitable(value):
        return await value
    return value
