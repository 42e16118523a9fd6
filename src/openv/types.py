"""Core type definitions"""

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from openv.constants import CATALOG_V1_URL, CATALOG_V2_URL
from openv.errors import (
    InvalidVersionError,
    MissingDelimiterError,
    UnsupportedArchError,
    UnsupportedOsError,
)

_VERSION_RE = re.compile(r"^(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)$")


class OperatingSystem(Enum):
    """Operating systems op is built for, valued by their artifact token."""
    APPLE = "apple"
    LINUX = "linux"
    OPENBSD = "openbsd"
    FREEBSD = "freebsd"
    WINDOWS = "windows"

    @classmethod
    def parse(cls, token: str) -> "OperatingSystem":
        try:
            return cls(token)
        except ValueError:
            raise UnsupportedOsError(token) from None


class Arch(Enum):
    """CPU architectures, valued by their artifact token."""
    X86_32 = "386"
    AMD64 = "amd64"
    ARM64 = "arm64"
    ARM = "arm"
    APPLE_UNIVERSAL = "universal"

    @classmethod
    def parse(cls, token: str) -> "Arch":
        try:
            return cls(token)
        except ValueError:
            raise UnsupportedArchError(token) from None


class CatalogChannel(Enum):
    """Release history page to consult, by major version of op."""
    V1 = CATALOG_V1_URL
    V2 = CATALOG_V2_URL

    @property
    def url(self) -> str:
        return self.value


@dataclass(frozen=True)
class Platform:
    """An (operating system, architecture) pair."""
    os: OperatingSystem
    arch: Arch

    @classmethod
    def parse(cls, token: str) -> "Platform":
        """Parse a ``<os>_<arch>`` token such as ``linux_amd64``.

        Apple builds are only published as universal binaries, and the
        universal arch only exists for Apple.
        """
        os_token, sep, arch_token = token.partition("_")
        if not sep:
            raise MissingDelimiterError(token)
        os = OperatingSystem.parse(os_token)
        arch = Arch.parse(arch_token)
        if (os is OperatingSystem.APPLE) != (arch is Arch.APPLE_UNIVERSAL):
            raise UnsupportedArchError(arch_token, os_token)
        return cls(os=os, arch=arch)

    def __str__(self) -> str:
        return f"{self.os.value}_{self.arch.value}"


@dataclass(frozen=True, order=True)
class Version:
    """Semantic version (major.minor.patch)."""
    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, text: str) -> "Version":
        match = _VERSION_RE.match(text)
        if not match:
            raise InvalidVersionError(text)
        major, minor, patch = (int(part) for part in match.groups())
        return cls(major, minor, patch)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


@dataclass(frozen=True)
class Release:
    """One downloadable artifact listed in the release catalog."""
    version: Version
    platform: Platform
    url: str


@dataclass(frozen=True)
class LocalVersion:
    """A binary already present on disk."""
    version: Version
    platform: Platform
    path: Path


@dataclass(frozen=True)
class Installation:
    """Result of ensuring a usable binary.

    ``release`` is None when an existing local binary was good enough.
    """
    channel: CatalogChannel
    local_version: LocalVersion
    release: Optional[Release] = None


@dataclass(frozen=True)
class UseEntryName:
    """Name the unpacked file after the zip archive entry."""
    entry: str


@dataclass(frozen=True)
class UseArchiveName:
    """Name the unpacked file after the zip archive, without its extension."""
    entry: str


UnpackOption = Union[UseEntryName, UseArchiveName]


@dataclass(frozen=True)
class UnpackResult:
    bytes_written: int
    path: Path
