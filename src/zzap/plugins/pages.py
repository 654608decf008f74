"""Page output.

Renders every resolved page with its layout and writes it to
``<output_dir>/<path>/index.html``.
"""

import asyncio
import logging

from zzap.core.context import RenderContext
from zzap.core.page import Page
from zzap.core.plugins import Plugin
from zzap.core.renderer import PageRenderer, output_path

logger = logging.getLogger(__name__)


def page_renderer_plugin() -> Plugin:
    """Render and write all pages."""

    async def on_render(ctx: RenderContext) -> None:
        renderer = PageRenderer(ctx.config.build.layouts_dir, site=ctx.config.site.to_dict())

        async def write(page: Page) -> None:
            html = renderer.render(page, heads=ctx.heads, scripts=ctx.scripts, sitemap=ctx.sitemap)
            target = output_path(ctx.config.build.output_dir, page.path)
            logger.debug(f"Writing {page.path} to {target}")
            await ctx.fs.write_text(target, html)

        await asyncio.gather(*(write(page) for page in ctx.pages))

    return Plugin(name="core-page-renderer", on_render=on_render)
