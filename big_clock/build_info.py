"""
Build information - package name, version and author.
"""
from importlib import metadata


PACKAGE_NAME = 'big-clock'
PROGRAM_NAME = 'big_clock'
AUTHOR = 'Emanuel (evilenx)'
FALLBACK_VERSION = '0.3.0'


def get_version() -> str:
    """Installed distribution version, or the source tree version."""
    try:
        return metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        return FALLBACK_VERSION


def format_version() -> str:
    return f"{PROGRAM_NAME} {get_version()} - by {AUTHOR}"
