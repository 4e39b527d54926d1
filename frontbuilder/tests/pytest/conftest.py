"""
Shared pytest fixtures for frontbuilder tests.

Provides a small front-end project on disk and helpers for writing
manifests.

Test Tier Markers:
  @pytest.mark.evergreen - Tests that always run, never skip (production tests)
  @pytest.mark.dev       - Development/WIP tests, toggle-able
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Callable

import pytest


# =============================================================================
# Test Data Constants
# =============================================================================

DEMO_MANIFEST: dict[str, Any] = {
    "projectName": "demo",
    "releaseFolder": "dist",
    "resources": [],
    "files": ["a.js", "b.js"],
    "styles": ["a.css"],
    "build": {"jsPath": "app.js", "cssPath": "app.css"},
    "closureBuildParameters": [],
    "compressorBuildParameters": [],
}


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test tiers."""
    config.addinivalue_line(
        "markers",
        "evergreen: tests that always run, never skip (production tests)"
    )
    config.addinivalue_line(
        "markers",
        "dev: development/WIP tests, toggle-able for active development"
    )


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def demo_manifest_data() -> dict[str, Any]:
    """A fresh copy of the demo manifest, safe to mutate."""
    return copy.deepcopy(DEMO_MANIFEST)


@pytest.fixture
def write_manifest() -> Callable[..., Path]:
    """Return a helper that writes a manifest dict to ``<folder>/manifest.json``."""

    def _write(folder: Path, data: dict[str, Any], name: str = "manifest.json") -> Path:
        folder.mkdir(parents=True, exist_ok=True)
        path = folder / name
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def demo_project(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    write_manifest: Callable[..., Path],
) -> Path:
    """Create the demo project and run the test from a neutral directory.

    The working directory is restored by monkeypatch, even when the build
    under test changes it.
    """
    app = tmp_path / "app"
    write_manifest(app, DEMO_MANIFEST)
    (app / "a.js").write_text("var a=1;")
    (app / "b.js").write_text("var b=2;")
    (app / "a.css").write_text("body { color: red; }")

    monkeypatch.chdir(tmp_path)
    return app
