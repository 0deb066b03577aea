"""
Version information for the Shyft SDK.
"""
from importlib import metadata
from typing import Optional

DISTRIBUTION_NAME = "shyft-sdk"
DEFAULT_VERSION = "0.1.0"


def resolve_version(distribution: str = DISTRIBUTION_NAME) -> str:
    """Installed version of ``distribution``, or DEFAULT_VERSION when running from a source tree."""
    try:
        return metadata.version(distribution)
    except metadata.PackageNotFoundError:
        return DEFAULT_VERSION


def user_agent(version: Optional[str] = None) -> str:
    """User-Agent header value sent with every request."""
    return f"shyft-sdk-python/{version or __version__}"


__version__ = resolve_version()
