"""Tests for the frontend bootstrap.

Covers:
- Command plan (executables, arguments, working directories, order)
- Config overwrites written after the commands
- Failure modes: non-zero exit, missing executable, timeout
- NullBootstrapper and default_bootstrapper selection
"""

from __future__ import annotations

from pathlib import Path

import pytest

from stackinit.config import Config
from stackinit.scaffolder.frontend import (
    BootstrapStep,
    BunBootstrapper,
    FrontendBootstrapError,
    NullBootstrapper,
    default_bootstrapper,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    path = tmp_path / "demo" / "ui" / "static"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def bootstrapper(renderer, recording_runner) -> BunBootstrapper:
    return BunBootstrapper(renderer, runner=recording_runner)


# ---------------------------------------------------------------------------
# Plan
# ---------------------------------------------------------------------------


class TestPlan:
    def test_four_steps_in_order(self, bootstrapper, static_dir):
        steps = bootstrapper.plan(static_dir)
        assert [s.name for s in steps] == [
            "create-app",
            "install",
            "add-tailwind",
            "init-tailwind",
        ]

    def test_create_runs_from_parent(self, bootstrapper, static_dir):
        create = bootstrapper.plan(static_dir)[0]
        assert create == BootstrapStep(
            "create-app",
            ("bun", "create", "vite", "static", "--template", "react-ts"),
            static_dir.parent,
        )

    def test_remaining_steps_run_in_static_dir(self, bootstrapper, static_dir):
        steps = bootstrapper.plan(static_dir)[1:]
        assert all(s.cwd == static_dir for s in steps)
        assert [s.argv for s in steps] == [
            ("bun", "install"),
            ("bun", "add", "-d", "tailwindcss", "postcss", "autoprefixer"),
            ("bunx", "tailwindcss", "init", "-p"),
        ]

    def test_from_config_uses_settings(self, renderer, static_dir):
        config = Config(package_manager="pnpm", package_runner="pnpx", vite_template="react")
        steps = BunBootstrapper.from_config(config, renderer).plan(static_dir)
        assert steps[0].argv == ("pnpm", "create", "vite", "static", "--template", "react")
        assert steps[3].argv[0] == "pnpx"


# ---------------------------------------------------------------------------
# bootstrap
# ---------------------------------------------------------------------------


class TestBootstrap:
    async def test_runs_every_command_sharing_streams(self, bootstrapper, recording_runner, static_dir):
        await bootstrapper.bootstrap(static_dir, {})
        assert recording_runner.argvs == [list(s.argv) for s in bootstrapper.plan(static_dir)]
        for call in recording_runner.calls:
            assert call["capture"] is False
            assert call["timeout"] is None

    async def test_package_manager_name_printed_literally(self, renderer, recording_runner, static_dir, capsys):
        bootstrapper = BunBootstrapper(renderer, package_manager="[red]bun", runner=recording_runner)
        await bootstrapper.bootstrap(static_dir, {})
        assert "Setting up frontend with [red]bun" in capsys.readouterr().out

    async def test_passes_timeout(self, renderer, recording_runner, static_dir):
        bootstrapper = BunBootstrapper(renderer, timeout=90, runner=recording_runner)
        await bootstrapper.bootstrap(static_dir, {})
        assert {c["timeout"] for c in recording_runner.calls} == {90}

    async def test_overwrites_tailwind_config(self, bootstrapper, static_dir):
        (static_dir / "tailwind.config.ts").write_text("generated by init", encoding="utf-8")
        written = await bootstrapper.bootstrap(static_dir, {})
        config = (static_dir / "tailwind.config.ts").read_text(encoding="utf-8")
        assert "generated by init" not in config
        assert "./index.html" in config
        assert static_dir / "tailwind.config.ts" in written

    async def test_writes_index_css(self, bootstrapper, static_dir):
        written = await bootstrapper.bootstrap(static_dir, {})
        css = static_dir / "src" / "index.css"
        assert css in written
        assert css.read_text(encoding="utf-8").splitlines() == [
            "@tailwind base;",
            "@tailwind components;",
            "@tailwind utilities;",
        ]

    async def test_nonzero_exit_stops_sequence(self, bootstrapper, recording_runner, static_dir):
        recording_runner.results["bun install"] = (1, "", "")
        with pytest.raises(FrontendBootstrapError) as exc_info:
            await bootstrapper.bootstrap(static_dir, {})
        assert exc_info.value.step == "install"
        assert exc_info.value.returncode == 1
        assert "exited with status 1" in str(exc_info.value)
        assert len(recording_runner.calls) == 2
        assert not (static_dir / "src" / "index.css").exists()

    async def test_missing_executable(self, bootstrapper, recording_runner, static_dir):
        recording_runner.raises["bun create"] = FileNotFoundError(2, "No such file or directory")
        with pytest.raises(FrontendBootstrapError) as exc_info:
            await bootstrapper.bootstrap(static_dir, {})
        assert exc_info.value.step == "create-app"
        assert exc_info.value.returncode is None
        assert "could not start 'bun'" in str(exc_info.value)

    async def test_timeout_reported(self, bootstrapper, recording_runner, static_dir):
        recording_runner.results["bun add"] = (-1, "", "Command timed out after 5s: bun add")
        with pytest.raises(FrontendBootstrapError) as exc_info:
            await bootstrapper.bootstrap(static_dir, {})
        assert exc_info.value.step == "add-tailwind"
        assert exc_info.value.returncode == -1
        assert "timed out" in str(exc_info.value)


# ---------------------------------------------------------------------------
# NullBootstrapper / default_bootstrapper
# ---------------------------------------------------------------------------


class TestNullBootstrapper:
    async def test_writes_nothing(self, static_dir):
        assert await NullBootstrapper().bootstrap(static_dir, {}) == []
        assert list(static_dir.iterdir()) == []


class TestDefaultBootstrapper:
    def test_skip_frontend_selects_null(self, renderer):
        assert isinstance(default_bootstrapper(Config(skip_frontend=True), renderer), NullBootstrapper)

    def test_default_selects_bun(self, renderer):
        chosen = default_bootstrapper(Config(), renderer)
        assert isinstance(chosen, BunBootstrapper)
        assert chosen.package_manager == "bun"
