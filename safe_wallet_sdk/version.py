"""
Version information for the Safe Wallet SDK.

Installed distributions report their metadata version. A source checkout
that was never installed reads `project.version` from pyproject.toml.
"""
import importlib.metadata
import pathlib

import tomli

DISTRIBUTION_NAME = "safe-wallet-sdk"
FALLBACK_VERSION = "0.1.0"
PYPROJECT_PATH = pathlib.Path(__file__).resolve().parent.parent / "pyproject.toml"


def _pyproject_version(path: pathlib.Path) -> str:
    try:
        with path.open("rb") as f:
            return tomli.load(f)["project"]["version"]
    except (OSError, KeyError, TypeError, tomli.TOMLDecodeError):
        return FALLBACK_VERSION


def get_version() -> str:
    try:
        return importlib.metadata.version(DISTRIBUTION_NAME)
    except importlib.metadata.PackageNotFoundError:
        return _pyproject_version(PYPROJECT_PATH)


__version__ = get_version()
