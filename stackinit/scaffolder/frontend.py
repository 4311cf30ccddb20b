"""Frontend toolchain bootstrap.

The generated project serves a React + Vite + Tailwind app out of
``ui/static``.  Creating that app is delegated to an external package manager
(``bun`` by default): each step is its own child process sharing this
process's stdin, stdout and stderr, run strictly in order.  Afterwards two of
the generated config files are overwritten with fixed content.

``FrontendBootstrapper`` is the seam the generator talks to, so tests and
``--skip-frontend`` can substitute :class:`NullBootstrapper` and never spawn
a process.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from stackinit.config import Config
from stackinit.utils import console, format_command, markup_safe, print_step, run_command

from .templates import TemplateRenderer

CommandRunner = Callable[..., Awaitable[tuple[int, str, str]]]

TAILWIND_PACKAGES: tuple[str, ...] = ("tailwindcss", "postcss", "autoprefixer")


class FrontendBootstrapError(Exception):
    """Raised when an external bootstrap command fails or cannot be started.

    Attributes:
        step: Name of the bootstrap step that failed.
        returncode: Exit status of the command, ``-1`` on timeout, or ``None``
            when the executable could not be started at all.
    """

    def __init__(self, step: str, message: str, returncode: int | None = None) -> None:
        self.step = step
        self.returncode = returncode
        super().__init__(message)


@dataclass(frozen=True)
class BootstrapStep:
    """A single external command in the bootstrap sequence."""

    name: str
    argv: tuple[str, ...]
    cwd: Path


class FrontendBootstrapper(ABC):
    """Capability that turns an empty ``ui/static`` into a frontend app."""

    @abstractmethod
    async def bootstrap(self, static_dir: Path, context: dict[str, Any]) -> list[Path]:
        """Bootstrap the frontend in *static_dir* and return the files written."""


class NullBootstrapper(FrontendBootstrapper):
    """Leaves ``ui/static`` untouched."""

    async def bootstrap(self, static_dir: Path, context: dict[str, Any]) -> list[Path]:
        console.print("[dim]Skipping frontend bootstrap[/dim]")
        return []


class BunBootstrapper(FrontendBootstrapper):
    """Bootstraps Vite + React + Tailwind by shelling out to a package manager.

    Args:
        renderer: Renders the Tailwind config and stylesheet overrides.
        package_manager: Executable used for ``create``, ``install`` and ``add``.
        package_runner: Executable used to run package binaries (``bunx``).
        vite_template: ``create-vite`` template variant.
        timeout: Per-command timeout in seconds, ``None`` for no limit.
        runner: Coroutine with the signature of
            :func:`stackinit.utils.run_command`; injectable for tests.
    """

    def __init__(
        self,
        renderer: TemplateRenderer,
        package_manager: str = "bun",
        package_runner: str = "bunx",
        vite_template: str = "react-ts",
        timeout: int | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        self.renderer = renderer
        self.package_manager = package_manager
        self.package_runner = package_runner
        self.vite_template = vite_template
        self.timeout = timeout
        self.runner: CommandRunner = runner or run_command

    @classmethod
    def from_config(
        cls,
        config: Config,
        renderer: TemplateRenderer,
        runner: CommandRunner | None = None,
    ) -> "BunBootstrapper":
        return cls(
            renderer,
            package_manager=config.package_manager,
            package_runner=config.package_runner,
            vite_template=config.vite_template,
            timeout=config.command_timeout,
            runner=runner,
        )

    def plan(self, static_dir: Path) -> list[BootstrapStep]:
        """Return the external commands run by :meth:`bootstrap`, in order."""
        static_dir = Path(static_dir)
        pm = self.package_manager
        return [
            BootstrapStep(
                "create-app",
                (pm, "create", "vite", static_dir.name, "--template", self.vite_template),
                static_dir.parent,
            ),
            BootstrapStep("install", (pm, "install"), static_dir),
            BootstrapStep("add-tailwind", (pm, "add", "-d", *TAILWIND_PACKAGES), static_dir),
            BootstrapStep(
                "init-tailwind", (self.package_runner, "tailwindcss", "init", "-p"), static_dir
            ),
        ]

    async def bootstrap(self, static_dir: Path, context: dict[str, Any]) -> list[Path]:
        static_dir = Path(static_dir)
        console.print(
            f"Setting up frontend with {markup_safe(self.package_manager)} + Vite + Tailwind..."
        )
        for step in self.plan(static_dir):
            await self._run(step)

        # Replace the initializer's config with ours, then add the entry stylesheet.
        written = [
            await self.renderer.render_to_file(
                "frontend/tailwind.config.ts.j2", static_dir / "tailwind.config.ts", context
            ),
            await self.renderer.render_to_file(
                "frontend/src/index.css.j2", static_dir / "src" / "index.css", context
            ),
        ]
        return written

    async def _run(self, step: BootstrapStep) -> None:
        argv = list(step.argv)
        print_step(format_command(argv))
        try:
            returncode, _, stderr = await self.runner(
                argv, cwd=step.cwd, timeout=self.timeout, capture=False
            )
        except OSError as exc:
            raise FrontendBootstrapError(
                step.name, f"could not start {argv[0]!r}: {exc}"
            ) from exc

        if returncode != 0:
            message = stderr or f"{format_command(argv)} exited with status {returncode}"
            raise FrontendBootstrapError(step.name, message, returncode=returncode)


def default_bootstrapper(config: Config, renderer: TemplateRenderer) -> FrontendBootstrapper:
    """Pick the bootstrapper implied by *config*."""
    if config.skip_frontend:
        return NullBootstrapper()
    return BunBootstrapper.from_config(config, renderer)
