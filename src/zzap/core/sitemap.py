"""Sitemap assembly.

The sitemap is a flat list of navigable entries, shallow pages first.
"""

from collections.abc import Iterable

from zzap.core.page import Page, SitemapEntry
from zzap.core.types import split_web_path


def build_sitemap(pages: Iterable[Page]) -> list[SitemapEntry]:
    """Build sitemap entries from pages.

    Entries are ordered by path depth. Pages of equal depth keep their
    input order.

    Args:
        pages: Resolved pages, in page store order

    Returns:
        One SitemapEntry per page
    """
    entries = [SitemapEntry(path=page.path, title=page.title) for page in pages]
    return sorted(entries, key=lambda entry: len(split_web_path(entry.path)))
