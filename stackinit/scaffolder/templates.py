"""Jinja2 template rendering for project scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``stackinit/scaffolder/templates/`` directory and renders them with
project-specific context data.  The project name is never pasted into a
template raw: filters escape it for the format of the file being written
(YAML, go.mod, Markdown).
"""

from __future__ import annotations

import asyncio
import json
import re
from pathlib import Path
from typing import Any

import yaml
from jinja2 import Environment, FileSystemLoader, StrictUndefined


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for project scaffolding.

    The renderer discovers ``.j2`` template files under a configurable
    template directory.  Templates are rendered with a context dictionary
    that contains the project name and the configured stack versions.
    Missing context variables raise instead of rendering as empty strings.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self.env.filters["yaml_scalar"] = _yaml_scalar_filter
        self.env.filters["go_module_path"] = _go_module_path_filter
        self.env.filters["single_line"] = _single_line_filter

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"cmd/web/main.go.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        """Render an inline template string with the provided context."""
        template = self.env.from_string(template_string)
        return template.render(**context)

    # -- File-based rendering (async) --------------------------------------

    async def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render a template and write the result to *output_path*.

        Parent directories are created automatically and an existing file is
        overwritten.  Returns the output path.
        """
        content = self.render(template_path, context)
        out = Path(output_path)
        await asyncio.to_thread(_write_file, out, content)
        return out

    # -- Utility -----------------------------------------------------------

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all ``.j2`` template paths under *prefix*.

        Paths are relative to the template root directory.
        """
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob("*.j2")
        )


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

_GO_PLAIN_PATH_RE = re.compile(r"^[A-Za-z0-9._~/+-]+$")


def _yaml_scalar_filter(value: Any) -> str:
    """Render *value* as a YAML scalar, quoting only when YAML requires it.

    ``demo`` stays ``demo``; ``a: b`` becomes ``'a: b'``; ``yes`` becomes
    ``'yes'`` so it is not read back as a boolean.
    """
    text = str(value)
    # Double quotes keep escaped line breaks on one line.
    style = '"' if "\n" in text or "\r" in text else None
    dumped = yaml.safe_dump(text, default_style=style, width=2**31 - 1, allow_unicode=True)
    if dumped.endswith("\n...\n"):
        dumped = dumped[: -len("\n...\n")]
    return dumped.strip()


def _go_module_path_filter(value: Any) -> str:
    """Render a module path for ``go.mod``.

    Plain paths are emitted bare; anything containing spaces, quotes or other
    special characters becomes a Go interpreted string literal.
    """
    text = str(value)
    if _GO_PLAIN_PATH_RE.match(text):
        return text
    return json.dumps(text, ensure_ascii=False)


def _single_line_filter(value: Any) -> str:
    """Collapse line breaks so the value stays on one Markdown line."""
    return " ".join(str(value).splitlines())


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content.

    Undecodable bytes from the command line (surrogate escapes) are written
    back out as the original bytes.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8", errors="surrogateescape")
