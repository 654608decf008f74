"""Head fragments from the site configuration."""

from zzap.core.context import BuildContext
from zzap.core.plugins import Plugin, PluginOutput


def heads_plugin() -> Plugin:
    """Add ``[site] heads`` fragments to every page head."""

    async def on_build(ctx: BuildContext) -> PluginOutput:
        return PluginOutput(heads=list(ctx.config.site.heads))

    return Plugin(name="core-heads", on_build=on_build)
