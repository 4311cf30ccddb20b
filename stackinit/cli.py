"""stackinit command-line entry point.

Usage::

    stackinit init my-app
    stackinit init my-app -o ~/code --skip-frontend
    python -m stackinit init my-app

Any other invocation prints the usage line and exits successfully.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from stackinit.config import Config
from stackinit.scaffolder import ProjectConfig, ProjectGenerator
from stackinit.utils import (
    console,
    print_error,
    print_header,
    print_success,
    print_summary_table,
    print_warning,
)

USAGE = "Usage: stackinit init <project-name>"


def _build_init_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stackinit init <project-name>",
        description="Scaffold a Go (Chi) + React + Tailwind + Postgres project",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  stackinit init my-app\n"
            "  stackinit init my-app -o ~/code --module-prefix github.com/acme\n"
            "  stackinit init my-app --skip-frontend\n"
            "  stackinit init my-app --config stackinit.json\n"
        ),
    )
    parser.add_argument(
        "--config",
        default=None,
        help="JSON settings file to use instead of STACKINIT_* variables",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Parent directory for the project (default: current directory)",
    )
    parser.add_argument(
        "--module-prefix",
        default=None,
        help="Go module path prefix (default: github.com/yourusername)",
    )
    parser.add_argument(
        "--package-manager",
        default=None,
        help="Executable used to create and install the frontend (default: bun)",
    )
    parser.add_argument(
        "--package-runner",
        default=None,
        help="Executable used to run frontend package binaries (default: bunx)",
    )
    parser.add_argument(
        "--skip-frontend",
        action="store_true",
        help="Do not run the frontend bootstrap",
    )
    return parser


def _apply_overrides(config: Config, opts: argparse.Namespace) -> Config:
    updates: dict[str, object] = {}
    if opts.output is not None:
        updates["output_dir"] = Path(opts.output)
    if opts.module_prefix is not None:
        updates["module_prefix"] = opts.module_prefix
    if opts.package_manager is not None:
        updates["package_manager"] = opts.package_manager
    if opts.package_runner is not None:
        updates["package_runner"] = opts.package_runner
    if opts.skip_frontend:
        updates["skip_frontend"] = True
    return config.model_copy(update=updates)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``stackinit`` and ``python -m stackinit``."""
    args = sys.argv[1:] if argv is None else list(argv)

    if len(args) < 2 or args[0] != "init":
        console.print(USAGE, markup=False, highlight=False)
        return

    # The name is taken verbatim, even if it looks like an option.
    project_name = args[1]
    opts, extra = _build_init_parser().parse_known_args(args[2:])
    if extra:
        print_warning(f"Ignoring unrecognised arguments: {' '.join(extra)}")

    try:
        base = Config.load(Path(opts.config)) if opts.config else Config.from_env()
    except (OSError, ValueError) as exc:
        print_error(f"Could not load settings: {exc}")
        sys.exit(1)
    config = _apply_overrides(base, opts)

    print_header("stackinit")
    generator = ProjectGenerator(ProjectConfig(name=project_name), config)
    result = asyncio.run(generator.generate())

    if not result.ok:
        print_summary_table(result.summary(), title="Scaffold failed")
        sys.exit(1)

    print_success(f"Project created at {result.project_root}")


if __name__ == "__main__":
    main()
