"""Version lookup for calcline.

A source checkout reads ``[project] version`` from pyproject.toml, so the
version is current without reinstalling. An installed package falls back to
its distribution metadata.
"""

from __future__ import annotations

import tomllib
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as distribution_version
from pathlib import Path

DISTRIBUTION_NAME = "calcline"
UNKNOWN_VERSION = "0.0.0"

# src/calcline/_version.py -> repository root
PYPROJECT_PATH = Path(__file__).resolve().parents[2] / "pyproject.toml"


def _version_from_pyproject(path: Path) -> str | None:
    if not path.is_file():
        return None
    with open(path, "rb") as f:
        data = tomllib.load(f)
    project = data.get("project", {})
    if project.get("name") != DISTRIBUTION_NAME:
        return None
    return project.get("version")


def get_version() -> str:
    """Return the calcline version, or "0.0.0" if it cannot be determined."""
    found = _version_from_pyproject(PYPROJECT_PATH)
    if found:
        return found
    try:
        return distribution_version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return UNKNOWN_VERSION
