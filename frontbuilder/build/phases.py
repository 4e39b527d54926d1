"""
Build phases for FrontBuilder.

Individual build operations that the orchestrator runs in sequence:
release folder staging, resource copying, and the concatenate/optimize
routine shared by the javascript and css builds.
"""

from __future__ import annotations

import shutil
import subprocess
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, Optional, Sequence

from frontbuilder.build.config import (
    BuildConfig,
    BuildSession,
    OptimizerError,
    ResourceError,
)
from frontbuilder.build.manifest import ProjectManifest
from frontbuilder.core.utils import echo_output, format_cmd, log, run_cmd

# Builds the optimizer command line from (temp input, output) paths
CommandFactory = Callable[[str, str], list[str]]


# =============================================================================
# Release Folder
# =============================================================================


def stage_release_folder(release_dir: Path) -> None:
    """Create the release folder, or wipe it if it already exists."""
    if release_dir.is_dir():
        log.info(f"Cleaning {release_dir} folder")
        shutil.rmtree(release_dir)
    elif release_dir.exists():
        raise ResourceError(f"Release folder is not a directory: {release_dir}")

    release_dir.mkdir(parents=True)


def copy_resources(resources: Sequence[str], app_path: Path, release_dir: Path) -> list[Path]:
    """Mirror each resource into the release folder, keeping its relative directory.

    A resource at ``assets/img/logo.png`` lands at
    ``<release>/assets/img/logo.png``; directories are copied recursively.

    Returns the list of destination paths, in manifest order.
    """
    copied: list[Path] = []

    for resource in resources:
        source = app_path / resource
        target_dir = release_dir / Path(resource).parent

        if source.is_dir():
            target_dir.mkdir(parents=True, exist_ok=True)
            destination = target_dir / source.name
            shutil.copytree(source, destination, dirs_exist_ok=True)
        elif source.is_file():
            target_dir.mkdir(parents=True, exist_ok=True)
            destination = target_dir / source.name
            shutil.copy(source, destination)
        else:
            raise ResourceError(f"Cannot copy resource: {resource}")

        log.dim(f"{resource} -> {destination.relative_to(release_dir.parent)}")
        copied.append(destination)

    return copied


# =============================================================================
# Concatenation
# =============================================================================


def concatenate_sources(sources: Sequence[str], app_path: Path) -> bytes:
    """Join source files in order, each followed by a single newline.

    Content is read as bytes so the result is verbatim.

    Raises:
        ResourceError: On the first listed file that does not exist.
    """
    chunks: list[bytes] = []
    for source in sources:
        path = app_path / source
        if not path.is_file():
            raise ResourceError(f"Cannot include {path}")
        chunks.append(path.read_bytes())
        chunks.append(b"\n")
    return b"".join(chunks)


@contextmanager
def staged_temp_file(path: Path, content: bytes) -> Iterator[Path]:
    """Write ``content`` to ``path`` for the duration of the block, then delete it."""
    path.write_bytes(content)
    try:
        yield path
    finally:
        try:
            path.unlink()
        except FileNotFoundError:
            pass


# =============================================================================
# Optimizers
# =============================================================================


def closure_command(java: str, jar: Path, parameters: Sequence[str]) -> CommandFactory:
    """google-closure-compiler invocation."""

    def factory(input_file: str, output_file: str) -> list[str]:
        return [java, "-jar", str(jar), *parameters, "--js", input_file, "--js_output_file", output_file]

    return factory


def compressor_command(java: str, jar: Path, parameters: Sequence[str]) -> CommandFactory:
    """yui-compressor invocation for css."""

    def factory(input_file: str, output_file: str) -> list[str]:
        return [java, "-jar", str(jar), *parameters, "--type", "css", input_file, "-o", output_file]

    return factory


def run_optimizer(
    cmd: list[str],
    cwd: Optional[Path] = None,
    ignore_errors: bool = False,
) -> Optional[subprocess.CompletedProcess]:
    """Run an optimizer, echo its output, and check its exit status.

    Raises:
        OptimizerError: If the process cannot be started or exits non-zero,
            unless ``ignore_errors`` is set, in which case a warning is logged.
    """
    try:
        result = run_cmd(cmd, cwd=cwd, capture=True)
    except OSError as e:
        message = f"Could not start optimizer {cmd[0]}: {e}"
        if ignore_errors:
            log.warning(message)
            return None
        raise OptimizerError(message) from e

    echo_output(result)

    if result.returncode != 0:
        message = f"Optimizer exited with status {result.returncode}: {format_cmd(cmd)}"
        if ignore_errors:
            log.warning(message)
        else:
            raise OptimizerError(message)

    return result


def _display_path(path: Path, base: Path) -> str:
    try:
        return str(path.relative_to(base))
    except ValueError:
        return str(path)


def build_artifact(
    sources: Sequence[str],
    app_path: Path,
    output_path: Path,
    temp_file: Path,
    command_factory: CommandFactory,
    debug: bool = False,
    ignore_errors: bool = False,
) -> Path:
    """Concatenate ``sources`` and write them, optimized unless ``debug``.

    In debug mode the raw concatenation is written to ``output_path``.
    Otherwise it is staged in ``temp_file`` and piped through the command
    built by ``command_factory``; the temp file is removed on every path.
    """
    content = concatenate_sources(sources, app_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if debug:
        log.info(f"Debug: {_display_path(output_path, app_path)}")
        output_path.write_bytes(content)
        return output_path

    with staged_temp_file(temp_file, content):
        cmd = command_factory(
            _display_path(temp_file, app_path),
            _display_path(output_path, app_path),
        )
        log.info(f"Build: {format_cmd(cmd)}")
        run_optimizer(cmd, cwd=app_path, ignore_errors=ignore_errors)

    return output_path


def build_javascript(manifest: ProjectManifest, session: BuildSession, config: BuildConfig) -> Path:
    """Concatenate and optimize the manifest's javascript files."""
    release_dir = session.app_path / manifest.release_folder
    return build_artifact(
        manifest.files,
        session.app_path,
        release_dir / manifest.build.js_path,
        session.tmp_js_file,
        closure_command(config.java, config.compiler_jar, manifest.closure_build_parameters),
        debug=session.debug,
        ignore_errors=config.ignore_optimizer_errors,
    )


def build_style(manifest: ProjectManifest, session: BuildSession, config: BuildConfig) -> Path:
    """Concatenate and compress the manifest's css files."""
    release_dir = session.app_path / manifest.release_folder
    return build_artifact(
        manifest.styles,
        session.app_path,
        release_dir / manifest.build.css_path,
        session.tmp_css_file,
        compressor_command(config.java, config.compressor_jar, manifest.compressor_build_parameters),
        debug=session.debug,
        ignore_errors=config.ignore_optimizer_errors,
    )
