"""stackinit configuration.

Typed settings for the scaffolder. Defaults reproduce the stack the tool
generates out of the box (Go 1.21 + Chi, Postgres 15, bun + Vite + Tailwind);
every value can be overridden from the environment or the CLI.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


_TRUTHY = {"1", "true", "yes", "on"}


class Config(BaseModel):
    """Global stackinit configuration.

    Created once by the CLI entry point (usually via :meth:`from_env`) and
    passed to :class:`~stackinit.scaffolder.ProjectGenerator`.
    """

    output_dir: Path = Field(default=Path("."), description="Parent directory of the generated project")

    # Backend
    module_prefix: str = Field(default="github.com/yourusername")
    go_version: str = Field(default="1.21")
    server_port: int = Field(default=4000, ge=1, le=65535)
    postgres_image: str = Field(default="postgres:15")
    postgres_port: int = Field(default=5432, ge=1, le=65535)

    # Frontend bootstrap
    package_manager: str = Field(default="bun")
    package_runner: str = Field(default="bunx")
    vite_template: str = Field(default="react-ts")
    command_timeout: int | None = Field(
        default=None, ge=1, description="Per-command timeout in seconds (None waits forever)"
    )
    skip_frontend: bool = Field(default=False)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            STACKINIT_OUTPUT_DIR, STACKINIT_MODULE_PREFIX, STACKINIT_GO_VERSION,
            STACKINIT_POSTGRES_IMAGE, STACKINIT_PACKAGE_MANAGER,
            STACKINIT_PACKAGE_RUNNER, STACKINIT_VITE_TEMPLATE,
            STACKINIT_COMMAND_TIMEOUT, STACKINIT_SKIP_FRONTEND.
        """
        kwargs: dict[str, Any] = {}
        string_vars = {
            "STACKINIT_MODULE_PREFIX": "module_prefix",
            "STACKINIT_GO_VERSION": "go_version",
            "STACKINIT_POSTGRES_IMAGE": "postgres_image",
            "STACKINIT_PACKAGE_MANAGER": "package_manager",
            "STACKINIT_PACKAGE_RUNNER": "package_runner",
            "STACKINIT_VITE_TEMPLATE": "vite_template",
        }
        for env_name, field_name in string_vars.items():
            if os.environ.get(env_name):
                kwargs[field_name] = os.environ[env_name]

        if os.environ.get("STACKINIT_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["STACKINIT_OUTPUT_DIR"])
        if os.environ.get("STACKINIT_COMMAND_TIMEOUT"):
            kwargs["command_timeout"] = int(os.environ["STACKINIT_COMMAND_TIMEOUT"])
        if os.environ.get("STACKINIT_SKIP_FRONTEND"):
            kwargs["skip_frontend"] = os.environ["STACKINIT_SKIP_FRONTEND"].strip().lower() in _TRUTHY

        return cls(**kwargs)
