"""
frontbuilder.build - Release build pipeline.

Provides manifest loading, release folder staging, resource copying and
the javascript/css optimization passes.
"""

from frontbuilder.build.config import (
    VERSION_BANNER,
    DEFAULT_MANIFEST,
    TOOLS_DIR,
    BuildConfig,
    BuildSession,
    BuildError,
    ManifestError,
    ResourceError,
    OptimizerError,
)
from frontbuilder.build.manifest import (
    BuildTargets,
    ProjectManifest,
    load_manifest,
)
from frontbuilder.build.orchestrator import (
    BuildOrchestrator,
    parse_args,
    main,
)

__all__ = [
    # Constants
    "VERSION_BANNER",
    "DEFAULT_MANIFEST",
    "TOOLS_DIR",
    # Data classes
    "BuildConfig",
    "BuildSession",
    "BuildTargets",
    "ProjectManifest",
    # Errors
    "BuildError",
    "ManifestError",
    "ResourceError",
    "OptimizerError",
    # Functions
    "load_manifest",
    # Orchestrator
    "BuildOrchestrator",
    "parse_args",
    "main",
]
