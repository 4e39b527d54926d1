"""
Build orchestrator for FrontBuilder.

Loads the project manifest, then stages the release folder, copies
resources, and builds the javascript and css bundles in sequence.
"""

from __future__ import annotations

import argparse
import os
import sys
import time
from pathlib import Path
from typing import Optional

from frontbuilder.build.config import (
    DEFAULT_JAVA,
    DEFAULT_MANIFEST,
    TOOLS_DIR,
    VERSION_BANNER,
    BuildConfig,
    BuildError,
    BuildSession,
)
from frontbuilder.build.manifest import ProjectManifest, load_manifest
from frontbuilder.build.phases import (
    build_javascript,
    build_style,
    copy_resources,
    stage_release_folder,
)
from frontbuilder.core.timing import TimingContext, format_duration, format_phase_timings
from frontbuilder.core.utils import log


# =============================================================================
# Build Orchestrator
# =============================================================================


class BuildOrchestrator:
    """Runs the release build for a single manifest."""

    def __init__(self, config: BuildConfig):
        self.config = config
        self.manifest: Optional[ProjectManifest] = None
        self.session: Optional[BuildSession] = None

        self._phase_timings: dict[str, float] = {}

    def _require_loaded(self) -> tuple[ProjectManifest, BuildSession]:
        if self.manifest is None or self.session is None:
            raise BuildError("Manifest not loaded; call load() first")
        return self.manifest, self.session

    @property
    def release_dir(self) -> Path:
        manifest, session = self._require_loaded()
        return session.app_path / manifest.release_folder

    def load(self) -> ProjectManifest:
        """Load the manifest. Nothing on disk is touched before this succeeds."""
        app_path = self.config.app_path
        self.manifest = load_manifest(app_path / self.config.manifest_name)
        self.session = BuildSession.for_project(
            app_path, self.manifest.project_name, debug=self.config.debug
        )
        return self.manifest

    def enter_app_path(self) -> None:
        """Make the manifest folder the working directory for the rest of the run.

        Done exactly once per process; the previous directory is not restored.
        """
        _, session = self._require_loaded()
        os.chdir(session.app_path)
        log.info(f"Note: Working directory changed to: {Path.cwd()}")

    def create_release_folder(self) -> None:
        stage_release_folder(self.release_dir)

    def copy_resources(self) -> None:
        manifest, session = self._require_loaded()
        copy_resources(manifest.resources, session.app_path, self.release_dir)

    def build_javascript(self) -> Path:
        manifest, session = self._require_loaded()
        return build_javascript(manifest, session, self.config)

    def build_style(self) -> Path:
        manifest, session = self._require_loaded()
        return build_style(manifest, session, self.config)

    def run(self) -> None:
        """Run the full build process."""
        build_start = time.time()

        with TimingContext(self._phase_timings, "load_manifest"):
            manifest = self.load()

        self.enter_app_path()
        log.header(f"Building '{manifest.project_name}' ...")
        if self.config.debug:
            log.info("Debug build: sources are concatenated but not optimized")

        with TimingContext(self._phase_timings, "release_folder"):
            self.create_release_folder()

        with TimingContext(self._phase_timings, "copy_resources"):
            self.copy_resources()

        with TimingContext(self._phase_timings, "build_javascript"):
            js_output = self.build_javascript()
        log.success(f"javascript: {js_output}")

        with TimingContext(self._phase_timings, "build_style"):
            css_output = self.build_style()
        log.success(f"css: {css_output}")

        log.header("BUILD COMPLETE")
        log.info(f"Output: {self.release_dir}")

        total = time.time() - build_start
        log.info(f"Total time: {format_duration(total)}")
        if self.config.verbose:
            for line in format_phase_timings(self._phase_timings):
                log.dim(line)


# =============================================================================
# CLI
# =============================================================================


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Options are evaluated left to right: help and version print and exit
    as soon as they are seen.
    """
    parser = argparse.ArgumentParser(
        prog="frontbuilder",
        description=(
            "Merges and optimizes the javascript and css files of a front end "
            "project and creates its release folder."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        allow_abbrev=False,
        epilog="""
Examples:
    frontbuilder                          # Build ./manifest.json
    frontbuilder app/manifest.json        # Build another project
    frontbuilder --debug                  # Merge only, skip optimization
        """,
    )

    parser.add_argument(
        "manifest",
        nargs="*",
        help=f"Project manifest (default: ./{DEFAULT_MANIFEST}). The last one given wins.",
    )

    parser.add_argument(
        "-h", "--h", "-help", "--help",
        action="help",
        help="Show this screen and exit",
    )

    parser.add_argument(
        "-v", "--v", "-version", "--version",
        action="version",
        version=VERSION_BANNER,
        help="Print the version of FrontBuilder and exit",
    )

    parser.add_argument(
        "-d", "--d", "-debug", "--debug",
        dest="debug",
        action="store_true",
        help="Merge all the files and create the release folder, but do not optimize css and javascript",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print phase timings and tracebacks",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    parser.add_argument(
        "--java",
        default=DEFAULT_JAVA,
        help=f"Java executable used to run the optimizers (default: {DEFAULT_JAVA})",
    )

    parser.add_argument(
        "--tools-dir",
        type=Path,
        default=TOOLS_DIR,
        help="Folder containing compiler.jar and compressor.jar",
    )

    parser.add_argument(
        "--ignore-optimizer-errors",
        action="store_true",
        help="Warn instead of failing when an optimizer exits with an error",
    )

    return parser


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Tokens the parser does not recognize, dash-prefixed ones included, are
    manifest paths. The last manifest in argument order wins.
    """
    if argv is None:
        argv = sys.argv[1:]
    args, extras = create_parser().parse_known_intermixed_args(argv)
    if extras:
        manifests = set(args.manifest) | set(extras)
        args.manifest = [token for token in argv if token in manifests]
    return args


def config_from_args(args: argparse.Namespace) -> BuildConfig:
    """Build a BuildConfig from parsed arguments."""
    manifest = args.manifest[-1] if args.manifest else DEFAULT_MANIFEST
    return BuildConfig(
        manifest_path=Path(manifest),
        debug=args.debug,
        verbose=args.verbose,
        java=args.java,
        # Resolved before the working directory changes
        tools_dir=args.tools_dir.resolve(),
        ignore_optimizer_errors=args.ignore_optimizer_errors,
    )


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.no_color:
        log.set_color(False)

    config = config_from_args(args)

    try:
        BuildOrchestrator(config).run()
        return 0

    except KeyboardInterrupt:
        log.warning("Build interrupted")
        return 130
    except BuildError as e:
        log.error(str(e))
        if config.verbose:
            import traceback
            traceback.print_exc()
        return 1
    except OSError as e:
        log.error(f"Filesystem error: {e}")
        if config.verbose:
            import traceback
            traceback.print_exc()
        return 1
    except Exception as e:
        log.error(f"Build failed: {e}")
        if config.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
