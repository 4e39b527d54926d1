"""
Build configuration for FrontBuilder.

Constants, dataclasses, and the build error taxonomy.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from frontbuilder import __version__

# =============================================================================
# Constants
# =============================================================================

VERSION = __version__
RELEASE_DATE = "29/08/2012"
VERSION_BANNER = f"FrontBuilder v{VERSION}. Release Date: {RELEASE_DATE}"

DEFAULT_MANIFEST = "manifest.json"

# Optimizer jars are looked up beside the package unless --tools-dir is given
TOOLS_DIR = Path(__file__).resolve().parent.parent / "tools"
COMPILER_JAR = "compiler.jar"
COMPRESSOR_JAR = "compressor.jar"
DEFAULT_JAVA = "java"


# =============================================================================
# Errors
# =============================================================================


class BuildError(RuntimeError):
    """Fatal build failure. Aborts the remaining pipeline."""


class ManifestError(BuildError):
    """The manifest is missing, empty, or structurally invalid."""


class ResourceError(BuildError):
    """A declared resource, script or style path cannot be used."""


class OptimizerError(BuildError):
    """An external optimizer could not be started or exited non-zero."""


# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class BuildConfig:
    """Configuration for a build run."""

    manifest_path: Path = field(default_factory=lambda: Path(DEFAULT_MANIFEST))
    debug: bool = False
    verbose: bool = False
    java: str = DEFAULT_JAVA
    tools_dir: Path = field(default_factory=lambda: TOOLS_DIR)
    ignore_optimizer_errors: bool = False  # Legacy behavior: warn instead of abort

    @property
    def manifest_name(self) -> str:
        return self.manifest_path.name

    @property
    def app_path(self) -> Path:
        """Directory containing the manifest; all manifest paths resolve here."""
        return self.manifest_path.parent.resolve()

    @property
    def compiler_jar(self) -> Path:
        return self.tools_dir / COMPILER_JAR

    @property
    def compressor_jar(self) -> Path:
        return self.tools_dir / COMPRESSOR_JAR


@dataclass
class BuildSession:
    """Transient per-run state derived once the manifest is loaded."""

    app_path: Path
    debug: bool
    tmp_js_file: Path
    tmp_css_file: Path

    @classmethod
    def for_project(cls, app_path: Path, project_name: str, debug: bool = False) -> "BuildSession":
        """Derive temp concatenation filenames from the project name."""
        return cls(
            app_path=app_path,
            debug=debug,
            tmp_js_file=app_path / f".{project_name}.js.tmp",
            tmp_css_file=app_path / f".{project_name}.css.tmp",
        )
