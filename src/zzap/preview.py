"""aiohttp server for previewing a built site.

Serves the output directory as-is; nothing is rebuilt on request.
"""

from pathlib import Path

from aiohttp import web

from zzap.core.renderer import OUTPUT_FILENAME

output_dir_key = web.AppKey("output_dir", Path)


async def serve_output(request: web.Request) -> web.FileResponse:
    """Serve a file from the output directory.

    Directory paths are served from their index.html, matching how pages
    are written by the build.
    """
    output_dir = request.app[output_dir_key]
    target = resolve_output_file(output_dir, request.match_info["path"])
    if target is None:
        raise web.HTTPNotFound()
    return web.FileResponse(target)


def resolve_output_file(output_dir: Path, path: str) -> Path | None:
    """Map a request path to a file in the output directory.

    Args:
        output_dir: Build output directory
        path: Request path without leading slash (e.g., "guide/setup")

    Returns:
        Existing file path, or None if not found or outside output_dir
    """
    root = output_dir.resolve()
    candidate = (root / path).resolve()
    if not candidate.is_relative_to(root):
        return None
    if candidate.is_dir():
        candidate = candidate / OUTPUT_FILENAME
    if not candidate.is_file():
        return None
    return candidate


def create_app(output_dir: Path) -> web.Application:
    """Create aiohttp application.

    Args:
        output_dir: Build output directory to serve

    Returns:
        Configured aiohttp application
    """
    app = web.Application()
    app[output_dir_key] = output_dir
    app.router.add_get("/{path:.*}", serve_output)
    return app


def run_server(output_dir: Path, *, host: str = "127.0.0.1", port: int = 8080) -> None:
    """Run the preview server.

    Args:
        output_dir: Build output directory to serve
        host: Host to bind to
        port: Port to bind to
    """
    app = create_app(output_dir)
    web.run_app(app, host=host, port=port)
