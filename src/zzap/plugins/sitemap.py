"""Sitemap output.

Writes ``sitemap.json`` for client-side navigation and, when the site has
a public URL configured, a ``sitemap.xml`` for search engines.
"""

import json
from xml.etree import ElementTree as ET

from zzap.core.context import RenderContext
from zzap.core.page import SitemapEntry
from zzap.core.plugins import Plugin

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


def sitemap_plugin() -> Plugin:
    """Write the sitemap of the build."""

    async def on_render(ctx: RenderContext) -> None:
        output_dir = ctx.config.build.output_dir
        entries = [entry.to_dict() for entry in ctx.sitemap]
        await ctx.fs.write_text(output_dir / "sitemap.json", json.dumps(entries, indent=2))

        site_url = ctx.config.site.url
        if site_url:
            xml = sitemap_xml(ctx.sitemap, site_url, ctx.config.site.base)
            await ctx.fs.write_text(output_dir / "sitemap.xml", xml)

    return Plugin(name="core-sitemap-renderer", on_render=on_render)


def sitemap_xml(sitemap: list[SitemapEntry], site_url: str, base: str = "/") -> str:
    """Render sitemap entries as a sitemaps.org XML document.

    Args:
        sitemap: Sitemap entries
        site_url: Public site URL (e.g., "https://example.com")
        base: Base path the site is served under

    Returns:
        XML document text
    """
    prefix = site_url.rstrip("/") + base.rstrip("/")
    urlset = ET.Element("urlset", xmlns=SITEMAP_NS)
    for entry in sitemap:
        url = ET.SubElement(urlset, "url")
        ET.SubElement(url, "loc").text = prefix + entry.path
    body = ET.tostring(urlset, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}\n'
