"""Client-side script bundling.

Each configured entry point is compiled by an external bundler (esbuild by
default) into ``<output_dir>/__zzap/scripts/<name>.js`` and referenced from
every page as an ES module.
"""

import asyncio
import shlex
from pathlib import Path

from zzap.core.context import BuildContext
from zzap.core.plugins import Plugin, PluginOutput

SCRIPTS_DIR = "__zzap/scripts"


def scripts_plugin() -> Plugin:
    """Bundle ``[scripts] entry_points`` and reference them in page scripts."""

    async def on_build(ctx: BuildContext) -> PluginOutput:
        scripts_config = ctx.config.scripts
        if not scripts_config.entry_points:
            return PluginOutput()

        out_dir = ctx.config.build.output_dir / SCRIPTS_DIR
        await asyncio.gather(
            *(
                ctx.shell.run(bundle_command(scripts_config.bundle_command, entry, out_dir), quiet=True)
                for entry in scripts_config.entry_points
            )
        )

        base = ctx.config.site.base
        return PluginOutput(
            scripts=[
                f'<script type="module" src="{base}{SCRIPTS_DIR}/{entry.stem}.js"></script>'
                for entry in scripts_config.entry_points
            ]
        )

    return Plugin(name="core-scripts", on_build=on_build)


def bundle_command(template: str, entry: Path, out_dir: Path) -> str:
    """Fill the bundle command template for one entry point.

    Supported placeholders: ``{entry}``, ``{outfile}``, ``{outdir}``.
    """
    outfile = out_dir / f"{entry.stem}.js"
    return template.format(
        entry=shlex.quote(str(entry)),
        outfile=shlex.quote(str(outfile)),
        outdir=shlex.quote(str(out_dir)),
    )
