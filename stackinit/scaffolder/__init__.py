"""stackinit scaffolder -- generates a Go + React project skeleton.

Quick usage::

    from stackinit.scaffolder import ProjectConfig, ProjectGenerator

    generator = ProjectGenerator(ProjectConfig(name="demo"))
    result = await generator.generate("/tmp/output")
    result.raise_for_status()
"""

from stackinit.scaffolder.docker_gen import DockerGenerator
from stackinit.scaffolder.frontend import (
    BootstrapStep,
    BunBootstrapper,
    FrontendBootstrapError,
    FrontendBootstrapper,
    NullBootstrapper,
)
from stackinit.scaffolder.generator import (
    ProjectConfig,
    ProjectGenerator,
    ScaffoldError,
    ScaffoldResult,
    ScaffoldStatus,
)
from stackinit.scaffolder.templates import TemplateRenderer

__all__ = [
    "BootstrapStep",
    "BunBootstrapper",
    "DockerGenerator",
    "FrontendBootstrapError",
    "FrontendBootstrapper",
    "NullBootstrapper",
    "ProjectConfig",
    "ProjectGenerator",
    "ScaffoldError",
    "ScaffoldResult",
    "ScaffoldStatus",
    "TemplateRenderer",
]
