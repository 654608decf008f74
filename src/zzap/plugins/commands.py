"""Custom shell commands run during the build."""

import asyncio
import logging

from zzap.core.context import BuildContext
from zzap.core.plugins import Plugin

logger = logging.getLogger(__name__)


def commands_plugin() -> Plugin:
    """Run ``[[commands]]`` concurrently. Any failing command fails the build."""

    async def on_build(ctx: BuildContext) -> None:
        async def run(command: str, quiet: bool) -> None:
            logger.info(f"Running command: {command}")
            await ctx.shell.run(command, quiet=quiet)

        await asyncio.gather(*(run(c.command, c.quiet) for c in ctx.config.commands))

    return Plugin(name="core-commands", on_build=on_build)
