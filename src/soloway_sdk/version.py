"""Installed version of the Soloway SDK."""

from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION_NAME = "soloway-sdk"
UNKNOWN_VERSION = "0.0.0+unknown"


def get_version() -> str:
    """Version of the installed soloway-sdk distribution.

    Running from a source checkout that was never installed yields
    UNKNOWN_VERSION.
    """
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return UNKNOWN_VERSION
