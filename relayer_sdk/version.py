"""
Version information for the Safe relayer SDK.
"""
import importlib.metadata
import pathlib

import tomli

DISTRIBUTION_NAME = "relayer-sdk"
DEFAULT_VERSION = "0.1.0"
PYPROJECT_PATH = pathlib.Path(__file__).parent.parent / "pyproject.toml"


def _version_from_pyproject(path: pathlib.Path) -> str:
    """Read ``project.version`` from a source checkout."""
    with path.open("rb") as f:
        return tomli.load(f)["project"]["version"]


def get_version() -> str:
    """
    Resolve the package version.

    Installed distribution metadata wins; a source checkout falls back to
    its pyproject.toml, and anything unreadable yields DEFAULT_VERSION.
    """
    try:
        return importlib.metadata.version(DISTRIBUTION_NAME)
    except importlib.metadata.PackageNotFoundError:
        pass
    try:
        return _version_from_pyproject(PYPROJECT_PATH)
    except (FileNotFoundError, KeyError, tomli.TOMLDecodeError):
        return DEFAULT_VERSION


__version__ = get_version()
