"""Filesystem access for the build.

The build only talks to the filesystem through the ``FileSystem`` protocol
so tests and embedders can swap the implementation. ``LocalFileSystem``
runs blocking calls in worker threads to keep the event loop responsive.
"""

import asyncio
import shutil
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

MARKDOWN_PATTERNS = ("**/*.md", "**/*.mdx")


class FileSystem(Protocol):
    """Asynchronous filesystem operations used by the build."""

    async def exists(self, path: Path) -> bool: ...

    async def read_text(self, path: Path) -> str: ...

    async def write_text(self, path: Path, content: str) -> None: ...

    async def glob(self, root: Path, patterns: Iterable[str]) -> list[Path]: ...

    async def copy_tree(self, src: Path, dst: Path) -> None: ...

    async def copy_file(self, src: Path, dst: Path) -> None: ...

    async def remove_tree(self, path: Path) -> None: ...


class LocalFileSystem:
    """FileSystem backed by the local disk."""

    async def exists(self, path: Path) -> bool:
        return await asyncio.to_thread(path.exists)

    async def read_text(self, path: Path) -> str:
        """Read a UTF-8 text file.

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        return await asyncio.to_thread(path.read_text, encoding="utf-8")

    async def write_text(self, path: Path, content: str) -> None:
        """Write a UTF-8 text file, creating parent directories."""
        await asyncio.to_thread(_write_text, path, content)

    async def glob(self, root: Path, patterns: Iterable[str]) -> list[Path]:
        """Find regular files under root matching any of the patterns.

        Args:
            root: Directory to search
            patterns: Glob patterns relative to root (e.g., "**/*.md")

        Returns:
            Sorted, de-duplicated list of matching file paths
        """
        return await asyncio.to_thread(_glob, root, tuple(patterns))

    async def copy_tree(self, src: Path, dst: Path) -> None:
        """Copy a directory tree, merging into an existing destination."""
        await asyncio.to_thread(shutil.copytree, src, dst, dirs_exist_ok=True)

    async def copy_file(self, src: Path, dst: Path) -> None:
        """Copy a single file, creating parent directories."""
        await asyncio.to_thread(_copy_file, src, dst)

    async def remove_tree(self, path: Path) -> None:
        """Remove a directory tree if it exists."""
        await asyncio.to_thread(shutil.rmtree, path, ignore_errors=True)


def _write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _copy_file(src: Path, dst: Path) -> None:
    dst.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(src, dst)


def _glob(root: Path, patterns: tuple[str, ...]) -> list[Path]:
    if not root.is_dir():
        return []
    found = {path for pattern in patterns for path in root.glob(pattern) if path.is_file()}
    return sorted(found)
