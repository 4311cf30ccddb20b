"""Main scaffolding orchestrator.

Takes a ``ProjectConfig`` and materialises a Go (Chi) + Postgres backend
skeleton with a bun + Vite + React + Tailwind frontend under ``ui/static``.
Steps run strictly in order; the first failure stops the run and is reported
in the returned :class:`ScaffoldResult` rather than ending the process.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from stackinit.config import Config
from stackinit.utils import console, ensure_dir, markup_safe, print_error, print_step, touch_empty

from .docker_gen import DockerGenerator
from .frontend import FrontendBootstrapError, FrontendBootstrapper, default_bootstrapper
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------

PROJECT_DIRECTORIES: tuple[str, ...] = (
    "cmd/web",
    "internal",
    "ui/html",
    "ui/static",
)

# Files created empty for the user to fill in.
PLACEHOLDER_FILES: tuple[str, ...] = (
    "cmd/web/handlers.go",
    "sqlc.yaml",
)

STATIC_DIR = "ui/static"


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class ProjectConfig(BaseModel):
    """The project to scaffold.

    The name is used verbatim as the directory name and substituted into the
    generated files.  It is deliberately not validated.
    """

    name: str = Field(..., description="Project name (directory name, module suffix, database name)")

    def root(self, output_dir: str | Path) -> Path:
        """Return the project root inside *output_dir*."""
        return Path(output_dir) / self.name


class ScaffoldStatus(str, Enum):
    OK = "ok"
    PARTIAL = "partial"
    FAILED = "failed"


class ScaffoldError(Exception):
    """Raised when a scaffolding step fails."""

    def __init__(self, step: str, message: str) -> None:
        self.step = step
        super().__init__(f"Step {step!r} failed: {message}")


@dataclass
class ScaffoldResult:
    """Outcome of a single :meth:`ProjectGenerator.generate` call."""

    project_root: Path
    status: ScaffoldStatus = ScaffoldStatus.OK
    failed_step: str | None = None
    error: str | None = None
    created: list[Path] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status is ScaffoldStatus.OK

    def fail(self, step: str, error: str) -> None:
        """Record a failure at *step*; anything already created makes it partial."""
        self.failed_step = step
        self.error = error
        self.status = ScaffoldStatus.PARTIAL if self.created else ScaffoldStatus.FAILED

    def raise_for_status(self) -> None:
        """Raise :class:`ScaffoldError` unless the run succeeded."""
        if not self.ok:
            raise ScaffoldError(self.failed_step or "unknown", self.error or "")

    def summary(self) -> dict[str, str]:
        """Return a label -> value mapping suitable for a summary table."""
        data = {
            "Project root": str(self.project_root),
            "Status": self.status.value,
            "Paths created": str(len(self.created)),
        }
        if self.failed_step:
            data["Failed step"] = self.failed_step
            data["Error"] = self.error or ""
        return data


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------

StepFn = Callable[[Path, dict[str, Any], list[Path]], Awaitable[None]]


class ProjectGenerator:
    """Main scaffolding orchestrator.

    Given a ``ProjectConfig``, generates:
    - ``cmd/web``, ``internal``, ``ui/html`` and ``ui/static`` directories
    - ``go.mod`` and a Chi static-file server in ``cmd/web/main.go``
    - empty ``cmd/web/handlers.go`` and ``sqlc.yaml``
    - ``docker-compose.yml`` with a Postgres service and ``README.md``
    - a bootstrapped frontend app in ``ui/static``

    Re-running against an existing tree succeeds and overwrites every file
    listed above.
    """

    def __init__(
        self,
        project: ProjectConfig,
        config: Config | None = None,
        bootstrapper: FrontendBootstrapper | None = None,
    ) -> None:
        self.project = project
        self.config = config or Config()
        self.renderer = TemplateRenderer()
        self.docker_gen = DockerGenerator(self.renderer)
        self.bootstrapper = bootstrapper or default_bootstrapper(self.config, self.renderer)

    # -- Public API --------------------------------------------------------

    async def generate(self, output_dir: str | Path | None = None) -> ScaffoldResult:
        """Generate the project structure.

        Args:
            output_dir: Parent directory of the project folder.  Defaults to
                ``config.output_dir``.

        Returns:
            A :class:`ScaffoldResult`.  File-system errors, unencodable
            names and bootstrap failures stop the run and are recorded on the result; nothing
            already written is removed.
        """
        if output_dir is None:
            output_dir = self.config.output_dir
        project_root = self.project.root(output_dir)
        result = ScaffoldResult(project_root=project_root)
        context = self._build_context()

        console.print(f"Scaffolding project: [bold]{markup_safe(self.project.name)}[/bold]")

        steps: list[tuple[str, StepFn]] = [
            ("directories", self._create_directory_structure),
            ("go_mod", self._render_go_mod),
            ("server_entrypoint", self._render_server),
            ("placeholders", self._create_placeholders),
            ("docker_compose", self._render_compose),
            ("readme", self._render_readme),
            ("frontend", self._bootstrap_frontend),
        ]
        for step_name, step in steps:
            print_step(step_name.replace("_", " "))
            try:
                await step(project_root, context, result.created)
            except (OSError, UnicodeError, FrontendBootstrapError) as exc:
                result.fail(step_name, str(exc))
                print_error(f"Failed at step {step_name!r}: {exc}")
                return result

        return result

    # -- Context building --------------------------------------------------

    def _build_context(self) -> dict[str, Any]:
        """Build the Jinja2 template context from the project and settings."""
        prefix = self.config.module_prefix.rstrip("/")
        module_path = f"{prefix}/{self.project.name}" if prefix else self.project.name
        return {
            "project_name": self.project.name,
            "module_path": module_path,
            "go_version": self.config.go_version,
            "server_port": self.config.server_port,
            "postgres_image": self.config.postgres_image,
            "postgres_port": self.config.postgres_port,
        }

    # -- Steps -------------------------------------------------------------

    async def _create_directory_structure(
        self, root: Path, ctx: dict[str, Any], created: list[Path]
    ) -> None:
        """Create the project directory tree, one directory at a time."""
        for d in PROJECT_DIRECTORIES:
            created.append(await asyncio.to_thread(ensure_dir, root / d))

    async def _render_go_mod(
        self, root: Path, ctx: dict[str, Any], created: list[Path]
    ) -> None:
        created.append(await self.renderer.render_to_file("go.mod.j2", root / "go.mod", ctx))

    async def _render_server(
        self, root: Path, ctx: dict[str, Any], created: list[Path]
    ) -> None:
        created.append(
            await self.renderer.render_to_file(
                "cmd/web/main.go.j2", root / "cmd" / "web" / "main.go", ctx
            )
        )

    async def _create_placeholders(
        self, root: Path, ctx: dict[str, Any], created: list[Path]
    ) -> None:
        for name in PLACEHOLDER_FILES:
            created.append(await asyncio.to_thread(touch_empty, root / name))

    async def _render_compose(
        self, root: Path, ctx: dict[str, Any], created: list[Path]
    ) -> None:
        created.append(await self.docker_gen.generate(root, ctx))

    async def _render_readme(
        self, root: Path, ctx: dict[str, Any], created: list[Path]
    ) -> None:
        created.append(await self.renderer.render_to_file("README.md.j2", root / "README.md", ctx))

    async def _bootstrap_frontend(
        self, root: Path, ctx: dict[str, Any], created: list[Path]
    ) -> None:
        created.extend(await self.bootstrapper.bootstrap(root / STATIC_DIR, ctx))
