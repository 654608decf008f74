"""Plugins shipped with zzap.

Core plugins run before user plugins, in the order returned by
``core_plugins``.
"""

from zzap.core.plugins import Plugin
from zzap.plugins.commands import commands_plugin
from zzap.plugins.heads import heads_plugin
from zzap.plugins.pages import page_renderer_plugin
from zzap.plugins.public import public_dir_plugin, public_files_plugin
from zzap.plugins.scripts import scripts_plugin
from zzap.plugins.sitemap import sitemap_plugin

__all__ = ["core_plugins"]


def core_plugins() -> list[Plugin]:
    """Create the core plugins in registration order."""
    return [
        heads_plugin(),
        scripts_plugin(),
        commands_plugin(),
        public_dir_plugin(),
        public_files_plugin(),
        sitemap_plugin(),
        page_renderer_plugin(),
    ]
