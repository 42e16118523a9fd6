"""Discovery of op binaries already present in the install directory."""
from pathlib import Path
from typing import List, Optional

from openv.artifacts import parse_local_version
from openv.errors import ArtifactNameError, NoLocalVersionError
from openv.logging import get_logger
from openv.types import LocalVersion, Platform

logger = get_logger(__name__)


def find_local_versions(directory: Path) -> List[LocalVersion]:
    """Parse every entry of directory (non-recursive), in name order.

    Entries whose names aren't artifact names are ignored.
    """
    found = []
    for entry in sorted(Path(directory).iterdir(), key=lambda p: p.name):
        try:
            found.append(parse_local_version(entry))
        except ArtifactNameError:
            continue
    return found


def find_local_version(directory: Path, platform: Platform) -> LocalVersion:
    """Select the newest local binary built for platform.

    When several entries share the newest version the first one in name
    order is returned.
    """
    newest: Optional[LocalVersion] = None
    for local in find_local_versions(directory):
        if local.platform != platform:
            continue
        if newest is None or local.version > newest.version:
            newest = local

    if newest is None:
        raise NoLocalVersionError(str(directory), platform)

    logger.debug(
        "local_version_found", path=str(newest.path), version=str(newest.version)
    )
    return newest
