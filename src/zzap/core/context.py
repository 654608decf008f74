"""Contexts handed to route handlers and plugin hooks."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from zzap.core.filesystem import FileSystem, LocalFileSystem
from zzap.core.markdown import MarkdownRenderer, render_markdown
from zzap.core.page import Page, SitemapEntry, from_markdown

if TYPE_CHECKING:
    from zzap.config import Config

logger = logging.getLogger(__name__)


class ShellCommandError(RuntimeError):
    """Raised when a shell command exits with a non-zero status."""

    def __init__(self, command: str, exit_code: int, output: str = "") -> None:
        self.command = command
        self.exit_code = exit_code
        self.output = output
        message = f"Command failed with exit code {exit_code}: {command}"
        if output:
            message += f"\n{output}"
        super().__init__(message)


@dataclass(frozen=True)
class ShellResult:
    """Result of a finished shell command."""

    exit_code: int
    stdout: str
    stderr: str


class Shell:
    """Runs shell commands for plugins."""

    def __init__(self, cwd: str | None = None) -> None:
        """Initialize shell.

        Args:
            cwd: Working directory for commands (default: current directory)
        """
        self._cwd = cwd

    async def run(self, command: str, *, quiet: bool = False) -> ShellResult:
        """Run a shell command and wait for it to finish.

        Args:
            command: Command line, interpreted by the system shell
            quiet: Capture output instead of streaming it to the terminal

        Returns:
            ShellResult with exit code and captured output (empty when not quiet)

        Raises:
            ShellCommandError: If the command exits with a non-zero status
        """
        logger.debug(f"Running command: {command}")
        pipe = asyncio.subprocess.PIPE if quiet else None
        process = await asyncio.create_subprocess_shell(
            command,
            stdout=pipe,
            stderr=pipe,
            cwd=self._cwd,
        )
        stdout, stderr = await process.communicate()
        result = ShellResult(
            exit_code=process.returncode if process.returncode is not None else -1,
            stdout=stdout.decode("utf-8", errors="replace") if stdout else "",
            stderr=stderr.decode("utf-8", errors="replace") if stderr else "",
        )
        if result.exit_code != 0:
            raise ShellCommandError(command, result.exit_code, result.stderr or result.stdout)
        return result


@dataclass
class BuildContext:
    """Shared context for route handlers and setup/build plugin hooks."""

    config: "Config"
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("zzap"))
    shell: Shell = field(default_factory=Shell)
    fs: FileSystem = field(default_factory=LocalFileSystem)
    render_markdown: MarkdownRenderer = render_markdown

    def markdown_to_page(self, markdown_text: str, *, explode: bool = False) -> list[Page]:
        """Build pages from markdown text inside a route handler.

        Pages are produced without a path; the resolver assigns the
        requested path to whatever page the handler returns.
        """
        return from_markdown(markdown_text, "", explode=explode, render=self.render_markdown)


@dataclass
class RenderContext(BuildContext):
    """Context for render hooks, with the resolved site."""

    pages: list[Page] = field(default_factory=list)
    sitemap: list[SitemapEntry] = field(default_factory=list)
    heads: list[str] = field(default_factory=list)
    scripts: list[str] = field(default_factory=list)
