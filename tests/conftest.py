"""Shared pytest fixtures for the stackinit test suite.

Provides reusable fixtures for:
- Project and tool configuration
- A recording fake for the external command runner
- Generators wired to the no-op frontend bootstrapper
- A fully scaffolded project tree
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from stackinit.config import Config
from stackinit.scaffolder import (
    NullBootstrapper,
    ProjectConfig,
    ProjectGenerator,
    TemplateRenderer,
)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def project_config() -> ProjectConfig:
    """The project used throughout the suite."""
    return ProjectConfig(name="demo")


@pytest.fixture
def offline_config(tmp_path: Path) -> Config:
    """Config that writes into ``tmp_path`` and never spawns the package manager."""
    return Config(output_dir=tmp_path, skip_frontend=True)


@pytest.fixture
def renderer() -> TemplateRenderer:
    """Renderer over the packaged templates."""
    return TemplateRenderer()


# ---------------------------------------------------------------------------
# External command runner
# ---------------------------------------------------------------------------

class RecordingRunner:
    """Stand-in for ``run_command`` that records calls instead of spawning.

    ``results`` maps an executable-plus-first-argument prefix (e.g.
    ``"bun install"``) to the ``(returncode, stdout, stderr)`` it returns;
    everything else succeeds.  ``raises`` does the same for exceptions.
    """

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.results: dict[str, tuple[int, str, str]] = {}
        self.raises: dict[str, Exception] = {}

    async def __call__(self, cmd: list[str], **kwargs: Any) -> tuple[int, str, str]:
        self.calls.append({"argv": list(cmd), **kwargs})
        key = " ".join(cmd[:2])
        if key in self.raises:
            raise self.raises[key]
        return self.results.get(key, (0, "", ""))

    @property
    def argvs(self) -> list[list[str]]:
        return [c["argv"] for c in self.calls]


@pytest.fixture
def recording_runner() -> RecordingRunner:
    return RecordingRunner()


# ---------------------------------------------------------------------------
# Generators and generated trees
# ---------------------------------------------------------------------------

@pytest.fixture
def offline_generator(project_config: ProjectConfig, offline_config: Config) -> ProjectGenerator:
    """A generator whose frontend bootstrap is a no-op."""
    return ProjectGenerator(project_config, offline_config, bootstrapper=NullBootstrapper())


@pytest.fixture
async def scaffolded_project(offline_generator: ProjectGenerator, tmp_path: Path) -> Path:
    """Path to a freshly scaffolded ``demo`` project (no frontend)."""
    result = await offline_generator.generate(tmp_path)
    result.raise_for_status()
    return result.project_root
