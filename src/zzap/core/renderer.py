"""Page rendering with Jinja2 layouts.

Each page names a layout. Layouts are looked up as ``<layout>.html`` in
the site's layouts directory first, then among the layouts bundled with
zzap (only ``default.html``).
"""

from collections.abc import Sequence
from pathlib import Path

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape
from markupsafe import Markup

from zzap.core.page import Page, SitemapEntry
from zzap.core.types import split_web_path

LAYOUT_SUFFIX = ".html"
OUTPUT_FILENAME = "index.html"


class PageRenderer:
    """Renders pages to HTML documents.

    Page content, heads and scripts are trusted HTML and inserted without
    escaping; every other value is autoescaped by Jinja2.
    """

    def __init__(
        self,
        layouts_dir: Path | None = None,
        *,
        site: dict[str, object] | None = None,
    ) -> None:
        """Initialize renderer.

        Args:
            layouts_dir: Directory with site layouts (e.g., "src/layouts").
                         If None, only bundled layouts are available.
            site: Site-wide values exposed to layouts as ``site``
        """
        loaders = [PackageLoader("zzap", "templates")]
        if layouts_dir is not None:
            loaders.insert(0, FileSystemLoader(layouts_dir))

        self._env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(["html"]),
            keep_trailing_newline=True,
        )
        self._site = site or {}

    def render(
        self,
        page: Page,
        *,
        heads: Sequence[str] = (),
        scripts: Sequence[str] = (),
        sitemap: Sequence[SitemapEntry] = (),
    ) -> str:
        """Render a page with its layout.

        Args:
            page: Page to render
            heads: HTML fragments for the document head
            scripts: HTML fragments placed after the body content
            sitemap: Site navigation entries

        Returns:
            Complete HTML document

        Raises:
            jinja2.TemplateNotFound: If the page's layout doesn't exist
        """
        template = self._env.get_template(f"{page.layout}{LAYOUT_SUFFIX}")
        return template.render(
            site=self._site,
            page=page.to_dict(),
            content=Markup(page.content),
            heads=Markup("\n".join(heads)),
            scripts=Markup("\n".join(scripts)),
            sitemap=[entry.to_dict() for entry in sitemap],
        )


def output_path(output_dir: Path, path: str) -> Path:
    """Return the file a page is written to.

    Args:
        output_dir: Build output directory
        path: Page web path (e.g., "/guide/setup")

    Returns:
        Output file path (e.g., "<output_dir>/guide/setup/index.html")
    """
    return output_dir.joinpath(*split_web_path(path), OUTPUT_FILENAME)
