"""
Project manifest loading and validation.

The manifest is a JSON file in the root of the front-end project. Every
required field is checked when the file is loaded, so later phases can
rely on a complete structure.
"""

from __future__ import annotations

import json
from pathlib import Path, PurePosixPath, PureWindowsPath

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from frontbuilder.build.config import ManifestError


# =============================================================================
# Models
# =============================================================================


def _check_relative(path: str) -> str:
    if PurePosixPath(path).is_absolute() or PureWindowsPath(path).is_absolute():
        raise ValueError(f"path must be relative to the manifest folder: {path}")
    return path


def _check_contained(path: str) -> str:
    """Reject paths that do not name something below their base folder.

    Catches `..` segments and paths such as `.` or `./` that point at the
    base folder itself. Backslashes count as separators.
    """
    _check_relative(path)
    parts = [part for part in PureWindowsPath(path).parts if part != "."]
    if not parts:
        raise ValueError(f"path must name an entry inside its folder: {path}")
    if ".." in parts:
        raise ValueError(f"path must not contain '..': {path}")
    return path


class BuildTargets(BaseModel):
    """Output filenames, relative to the release folder."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    js_path: str = Field(alias="jsPath", min_length=1, description="Optimized javascript output")
    css_path: str = Field(alias="cssPath", min_length=1, description="Optimized css output")

    @field_validator("js_path", "css_path")
    @classmethod
    def _output_contained(cls, value: str) -> str:
        return _check_contained(value)


class ProjectManifest(BaseModel):
    """Typed view of manifest.json."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    project_name: str = Field(alias="projectName", min_length=1)
    release_folder: str = Field(alias="releaseFolder", min_length=1)
    resources: list[str] = Field(default_factory=list)
    files: list[str]
    styles: list[str]
    build: BuildTargets
    closure_build_parameters: list[str] = Field(
        default_factory=list, alias="closureBuildParameters"
    )
    compressor_build_parameters: list[str] = Field(
        default_factory=list, alias="compressorBuildParameters"
    )

    @field_validator("project_name")
    @classmethod
    def _no_separators(cls, value: str) -> str:
        # Used verbatim in temp filenames
        if "/" in value or "\\" in value:
            raise ValueError("projectName must not contain path separators")
        return value

    @field_validator("release_folder")
    @classmethod
    def _release_contained(cls, value: str) -> str:
        # The folder is wiped before every build
        return _check_contained(value)

    @field_validator("resources")
    @classmethod
    def _resources_contained(cls, value: list[str]) -> list[str]:
        for path in value:
            _check_contained(path)
        return value

    @field_validator("files", "styles")
    @classmethod
    def _paths_relative(cls, value: list[str]) -> list[str]:
        for path in value:
            _check_relative(path)
        return value


# =============================================================================
# Loading
# =============================================================================


def _format_validation_error(manifest_path: Path, exc: ValidationError) -> str:
    lines = [f"Invalid manifest {manifest_path} ({exc.error_count()} problem(s)):"]
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "<root>"
        lines.append(f"  {location}: {error['msg']}")
    return "\n".join(lines)


def load_manifest(manifest_path: Path) -> ProjectManifest:
    """Load and validate a project manifest.

    Raises:
        ManifestError: If the file is missing, empty, not UTF-8 JSON, or any
            required field is missing or has the wrong type. All field
            problems are reported in a single error.
    """
    if not manifest_path.is_file():
        raise ManifestError(f"No project manifest found at {manifest_path}")

    try:
        text = manifest_path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise ManifestError(f"There was an error while parsing {manifest_path}: {e}") from e

    if not text.strip():
        raise ManifestError(f"There was an error while parsing {manifest_path}: file is empty")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ManifestError(f"There was an error while parsing {manifest_path}: {e}") from e

    if not isinstance(data, dict) or not data:
        raise ManifestError(
            f"There was an error while parsing {manifest_path}: expected a non-empty JSON object"
        )

    try:
        return ProjectManifest.model_validate(data)
    except ValidationError as e:
        raise ManifestError(_format_validation_error(manifest_path, e)) from e
