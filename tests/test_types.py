"""Tests for core type helpers."""

import pytest
from zzap.core.types import join_web_path, maybe_await, split_web_path


class TestJoinWebPath:
    """Tests for join_web_path()."""

    def test__relative_path__adds_leading_slash(self) -> None:
        """Relative paths become absolute."""
        assert join_web_path("guide/setup") == "/guide/setup"

    def test__trailing_slash__removed(self) -> None:
        """Trailing slash is dropped."""
        assert join_web_path("/guide/") == "/guide"

    def test__repeated_slashes__collapsed(self) -> None:
        """Empty segments are dropped."""
        assert join_web_path("//guide///setup") == "/guide/setup"

    def test__empty__returns_root(self) -> None:
        """Empty input is the root path."""
        assert join_web_path("") == "/"
        assert join_web_path("/") == "/"

    def test__multiple_parts__joined(self) -> None:
        """Parts are joined with a single slash."""
        assert join_web_path("/blog/", "/my-post") == "/blog/my-post"


class TestSplitWebPath:
    """Tests for split_web_path()."""

    def test__root__returns_empty(self) -> None:
        """Root has no segments."""
        assert split_web_path("/") == []

    def test__nested__returns_segments(self) -> None:
        """Nested path splits into its segments."""
        assert split_web_path("/a/b/c") == ["a", "b", "c"]


class TestMaybeAwait:
    """Tests for maybe_await()."""

    @pytest.mark.asyncio
    async def test__plain_value__returned(self) -> None:
        """Non-awaitable values pass through."""
        assert await maybe_await(42) == 42

    @pytest.mark.asyncio
    async def test__coroutine__awaited(self) -> None:
        """Coroutines are awaited."""

        async def produce() -> str:
            return "done"

        assert await maybe_await(produce()) == "done"
