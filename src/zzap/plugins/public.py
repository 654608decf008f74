"""Static files copied verbatim into the output directory."""

import asyncio

from zzap.core.context import BuildContext
from zzap.core.plugins import Plugin


def public_dir_plugin() -> Plugin:
    """Copy the public directory, if present, into the output directory."""

    async def on_build(ctx: BuildContext) -> None:
        build = ctx.config.build
        if await ctx.fs.exists(build.public_dir):
            await ctx.fs.copy_tree(build.public_dir, build.output_dir)

    return Plugin(name="core-public-dir", on_build=on_build)


def public_files_plugin() -> Plugin:
    """Copy each ``[[public_files]]`` entry to ``<output_dir>/<name>``."""

    async def on_build(ctx: BuildContext) -> None:
        output_dir = ctx.config.build.output_dir
        await asyncio.gather(
            *(ctx.fs.copy_file(f.path, output_dir / f.name) for f in ctx.config.public_files)
        )

    return Plugin(name="core-public-files", on_build=on_build)
