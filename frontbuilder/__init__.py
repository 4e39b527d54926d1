"""
frontbuilder - manifest-driven front-end release builder.

Concatenates the javascript and css files listed in a project manifest,
optimizes them with google-closure-compiler and yui-compressor, and
assembles a release folder with the project's resources.

Usage:
    python -m frontbuilder [--debug] [path/to/manifest.json]
"""

from __future__ import annotations

__version__ = "1.0"

__all__ = ["__version__", "main"]


def main(argv: list[str] | None = None) -> int:
    from frontbuilder.build.orchestrator import main as _main

    return _main(argv)
