"""Artifact name grammar shared by catalog URLs and installed binaries.

Both the release catalog and the install directory encode the platform and
version of a binary in its file name::

    <prefix>_<os>_<arch>_v<major>.<minor>.<patch>[.<ext>]

e.g. ``op_linux_amd64_v1.12.3.zip`` or ``op_apple_universal_v2.0.0``.
"""
import re
from pathlib import Path
from typing import NamedTuple, Union

from openv.constants import ARTIFACT_PREFIX
from openv.errors import InvalidArtifactNameError
from openv.types import LocalVersion, Platform, Release, Version


class ArtifactName(NamedTuple):
    """Platform and version decoded from an artifact file name."""
    platform: Platform
    version: Version


def basename(name: str) -> str:
    """Text after the last ``/`` or ``\\``, independent of the host OS."""
    return re.split(r"[/\\]", name)[-1]


def _name_pattern(prefix: str) -> re.Pattern:
    return re.compile(
        rf"^{re.escape(prefix)}_(?P<platform>[0-9a-zA-Z_]+?)_v(?P<version>[0-9]+(?:\.[0-9]+)*)"
    )


def parse_artifact_name(name: str, prefix: str = ARTIFACT_PREFIX) -> ArtifactName:
    """Decode platform and version from a file name, URL or path.

    Raises a subclass of ArtifactNameError naming what was wrong.
    """
    base = basename(name)
    match = _name_pattern(prefix).match(base)
    if not match:
        raise InvalidArtifactNameError(base)
    return ArtifactName(
        platform=Platform.parse(match.group("platform")),
        version=Version.parse(match.group("version")),
    )


def parse_release(url: str, prefix: str = ARTIFACT_PREFIX) -> Release:
    artifact = parse_artifact_name(url, prefix)
    return Release(version=artifact.version, platform=artifact.platform, url=url)


def parse_local_version(
    path: Union[str, Path], prefix: str = ARTIFACT_PREFIX
) -> LocalVersion:
    artifact = parse_artifact_name(str(path), prefix)
    return LocalVersion(
        version=artifact.version, platform=artifact.platform, path=Path(path)
    )
