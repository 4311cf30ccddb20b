"""Docker Compose file generation.

Renders ``docker-compose.yml.j2`` into the project root, giving the generated
project a Postgres service whose database is named after the project.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .templates import TemplateRenderer


class DockerGenerator:
    """Generates the project's Docker Compose file."""

    _COMPOSE_TEMPLATE = "docker-compose.yml.j2"
    _COMPOSE_FILE = "docker-compose.yml"

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    async def generate(
        self,
        output_dir: Path,
        context: dict[str, Any],
    ) -> Path:
        """Write ``docker-compose.yml`` to *output_dir*.

        Args:
            output_dir: Project root directory.
            context: Template rendering context. Must include
                ``project_name``, ``postgres_image`` and ``postgres_port``.

        Returns:
            Path of the written Compose file.
        """
        return await self.renderer.render_to_file(
            self._COMPOSE_TEMPLATE, Path(output_dir) / self._COMPOSE_FILE, context
        )
