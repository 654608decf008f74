"""zzap - static sites from markdown and routes.

Public API for site modules.
"""

from zzap.core.context import BuildContext, RenderContext
from zzap.core.page import Page, SitemapEntry
from zzap.core.plugins import Plugin, PluginOutput
from zzap.core.routes import PageRequest, Route

__all__ = [
    "BuildContext",
    "Page",
    "PageRequest",
    "Plugin",
    "PluginOutput",
    "RenderContext",
    "Route",
    "SitemapEntry",
]
