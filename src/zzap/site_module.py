"""Site module loading.

Routes and user plugins are declared in a Python file next to the
configuration (``zzap_site.py`` by default)::

    from zzap import Page, Plugin, Route

    async def get_post(request, ctx):
        return Page(path=request.path, title=request.params["slug"])

    routes = [Route("/blog/$slug", get_post)]
    plugins = []
"""

import importlib.util
import logging
from dataclasses import replace
from pathlib import Path
from types import ModuleType

from zzap.config import Config
from zzap.core.plugins import Plugin
from zzap.core.routes import Route

logger = logging.getLogger(__name__)

MODULE_NAME = "zzap_site"


def load_site_module(config: Config) -> Config:
    """Load routes and plugins from the configured site module.

    A missing module file is not an error: the site then consists of
    markdown content only.

    Args:
        config: Configuration with ``build.module`` set

    Returns:
        New Config with ``routes`` and ``plugins`` filled in

    Raises:
        ValueError: If ``routes`` or ``plugins`` hold objects of the wrong type
        ImportError: If the module cannot be loaded
    """
    module_path = config.build.module
    if not module_path.is_file():
        logger.debug(f"No site module at {module_path}")
        return config

    module = _import_file(module_path)
    routes = getattr(module, "routes", [])
    plugins = getattr(module, "plugins", [])

    if not isinstance(routes, list) or not all(isinstance(r, Route) for r in routes):
        raise ValueError(f"{module_path}: routes must be a list of Route")
    if not isinstance(plugins, list) or not all(isinstance(p, Plugin) for p in plugins):
        raise ValueError(f"{module_path}: plugins must be a list of Plugin")

    logger.debug(f"Loaded {len(routes)} routes and {len(plugins)} plugins from {module_path}")
    return replace(config, routes=list(routes), plugins=list(plugins))


def _import_file(path: Path) -> ModuleType:
    """Import a Python file as a module without touching sys.path."""
    spec = importlib.util.spec_from_file_location(MODULE_NAME, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load site module: {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module
