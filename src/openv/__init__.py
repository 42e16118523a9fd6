"""Locate, download and install the 1Password CLI (op)."""
from openv.home_dir import get_or_create
from openv.installer import get_or_install
from openv.platforms import current_platform
from openv.types import (
    Arch,
    CatalogChannel,
    Installation,
    LocalVersion,
    OperatingSystem,
    Platform,
    Release,
    Version,
)

__all__ = [
    "get_or_create",
    "get_or_install",
    "current_platform",
    "Arch",
    "CatalogChannel",
    "Installation",
    "LocalVersion",
    "OperatingSystem",
    "Platform",
    "Release",
    "Version",
]
