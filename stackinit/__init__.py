"""stackinit -- scaffold a Go (Chi) + React + Tailwind + Postgres project."""

__version__ = "0.1.0"
