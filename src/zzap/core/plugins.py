"""Plugin lifecycle.

Plugins take part in three phases, run in this order for every build:

    setup  -> once, before any page is resolved
    build  -> after pages are resolved (copy assets, run commands, bundle)
    render -> with the resolved pages and sitemap (write output)

Within a phase all plugin hooks run concurrently. A failing hook aborts the
whole build.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Literal

from zzap.core.context import BuildContext, RenderContext
from zzap.core.types import maybe_await

logger = logging.getLogger(__name__)

CORE_PREFIX = "core-"

Phase = Literal["setup", "build", "render"]


@dataclass
class PluginOutput:
    """HTML fragments a plugin contributes to every rendered page."""

    heads: list[str] = field(default_factory=list)
    scripts: list[str] = field(default_factory=list)


SetupHook = Callable[[BuildContext], "PluginOutput | None | Awaitable[PluginOutput | None]"]
BuildHook = Callable[[BuildContext], "PluginOutput | None | Awaitable[PluginOutput | None]"]
RenderHook = Callable[[RenderContext], "None | Awaitable[None]"]


@dataclass(frozen=True)
class Plugin:
    """Build plugin.

    Every hook is optional; a plugin without a hook for a phase is skipped
    in that phase. Plugins shipped with zzap are named with the "core-"
    prefix.
    """

    name: str
    on_setup: SetupHook | None = None
    on_build: BuildHook | None = None
    on_render: RenderHook | None = None

    def hook_for(self, phase: Phase) -> Callable[..., object] | None:
        """Return the hook for a phase, or None if the plugin has none."""
        if phase == "setup":
            return self.on_setup
        if phase == "build":
            return self.on_build
        return self.on_render


class PluginError(RuntimeError):
    """Raised when a plugin hook fails. Aborts the build."""

    def __init__(self, phase: Phase, plugin: str, error: BaseException) -> None:
        self.phase = phase
        self.plugin = plugin
        super().__init__(f"[{phase}] plugin {plugin} failed: {error}")


@dataclass(frozen=True)
class PluginRun:
    """Timing of one plugin hook invocation."""

    name: str
    elapsed_ms: float
    output: PluginOutput | None = None


@dataclass
class PhaseResult:
    """Outcome of one lifecycle phase."""

    phase: Phase
    runs: list[PluginRun] = field(default_factory=list)
    heads: list[str] = field(default_factory=list)
    scripts: list[str] = field(default_factory=list)


def report_order(name: str) -> tuple[bool, str]:
    """Sort key for plugin reports: core plugins first, then by name."""
    return (not name.startswith(CORE_PREFIX), name)


async def run_phase(
    phase: Phase,
    plugins: Sequence[Plugin],
    context: BuildContext,
) -> PhaseResult:
    """Run one lifecycle phase across all plugins.

    Hooks are started together and awaited as a group. Once all of them
    finished, timings are logged and fragments collected in report order.

    Args:
        phase: Phase to run
        plugins: Plugins in registration order (core plugins first)
        context: Context passed to every hook. Render hooks expect a
                 RenderContext.

    Returns:
        PhaseResult with per-plugin runs and collected fragments, in
        report order

    Raises:
        PluginError: If any hook raises or a setup/build hook returns
                     something other than PluginOutput or None
    """
    invocations = [
        _invoke(phase, plugin.name, hook, context)
        for plugin in plugins
        if (hook := plugin.hook_for(phase)) is not None
    ]
    runs = sorted(await asyncio.gather(*invocations), key=lambda run: report_order(run.name))

    result = PhaseResult(phase=phase, runs=runs)
    for run in runs:
        logger.debug(f"[{phase}] ▶ {run.name} Done in {run.elapsed_ms:.0f}ms.")
        if run.output is not None:
            result.heads.extend(run.output.heads)
            result.scripts.extend(run.output.scripts)
    return result


async def _invoke(
    phase: Phase,
    name: str,
    hook: Callable[..., object],
    context: BuildContext,
) -> PluginRun:
    """Invoke one hook and time it.

    Setup and build hooks must return a PluginOutput or None. Values returned
    by render hooks are ignored.
    """
    started = time.perf_counter()
    try:
        output = await maybe_await(hook(context))
    except Exception as e:
        raise PluginError(phase, name, e) from e
    elapsed_ms = (time.perf_counter() - started) * 1000

    if phase == "render" or output is None:
        return PluginRun(name=name, elapsed_ms=elapsed_ms)
    if not isinstance(output, PluginOutput):
        error = TypeError(f"{phase} hook returned {type(output).__name__}, expected PluginOutput or None")
        raise PluginError(phase, name, error) from error
    return PluginRun(name=name, elapsed_ms=elapsed_ms, output=output)
