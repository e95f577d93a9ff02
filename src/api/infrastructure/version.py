"""Version of the Tenant Notes API.

Read from installed distribution metadata; a source checkout that was never
installed falls back to the project's pyproject.toml.
"""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION_NAME = "tenant-notes-api"


def get_version() -> str:
    """Get the application version string (e.g. "0.1.0")."""
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        # src/api/infrastructure/version.py -> repository root
        pyproject_path = Path(__file__).resolve().parents[3] / "pyproject.toml"
        with open(pyproject_path, "rb") as f:
            return tomllib.load(f)["project"]["version"]


__version__ = get_version()
