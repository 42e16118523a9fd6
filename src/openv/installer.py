"""Ensure a usable op binary is installed."""
import os
from pathlib import Path
from typing import Optional

import aiohttp

from openv.constants import BINARY_NAME, PKG_WORKDIR
from openv.errors import NoLocalVersionError, NotExecutableError
from openv.local_versions import find_local_version
from openv.logging import get_logger
from openv.platforms import current_platform
from openv.releases import get_latest_release
from openv.types import CatalogChannel, Installation, LocalVersion, Platform, Release
from openv.unpackers import select_unpacker
from openv.utils.fetching import download_url

logger = get_logger(__name__)


def is_executable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


def find_usable_local_version(
    directory: Path, platform: Platform, release: Release
) -> Optional[LocalVersion]:
    """Local binary at least as new as release, if there is one we can run."""
    try:
        local = find_local_version(directory, platform)
    except NoLocalVersionError:
        logger.info("no_local_version", directory=str(directory))
        return None

    if local.version < release.version:
        logger.info(
            "local_version_outdated",
            local=str(local.version),
            latest=str(release.version),
        )
        return None

    if not is_executable(local.path):
        logger.warning("local_version_not_executable", path=str(local.path))
        return None

    return local


async def install_release(
    directory: Path,
    release: Release,
    session: aiohttp.ClientSession,
    workdir: Path,
    binary_name: str = BINARY_NAME,
) -> LocalVersion:
    """Download, unpack and clean up one release, returning the new binary."""
    archive = await download_url(directory, release.url, session)

    unpacker = select_unpacker(release.platform, workdir, binary_name)
    result = await unpacker.unpack(archive, directory)

    archive.unlink()
    logger.debug("archive_removed", path=str(archive))

    if not is_executable(result.path):
        logger.error("installed_binary_not_executable", path=str(result.path))
        raise NotExecutableError(str(result.path))

    return LocalVersion(
        version=release.version, platform=release.platform, path=result.path
    )


async def get_or_install(
    directory: Path,
    channel: CatalogChannel = CatalogChannel.V2,
    *,
    platform: Optional[Platform] = None,
    session: Optional[aiohttp.ClientSession] = None,
    workdir: Optional[Path] = None,
    binary_name: str = BINARY_NAME,
) -> Installation:
    """Return an installed op binary, downloading the latest release if needed.

    Args:
        directory: Install directory; must already exist
        channel: Which release catalog to consult
        platform: Target platform, defaults to the running host
        session: HTTP session to reuse; one is opened for the call otherwise
        workdir: Scratch directory for expanding macOS installer packages
        binary_name: Name of the executable inside release archives

    Returns:
        Installation; its release is None when a local binary was reused

    Raises:
        OpenvError: If any step of resolving or installing fails
        OSError: On filesystem failures
    """
    directory = Path(directory)
    platform = platform or current_platform()
    workdir = Path(workdir) if workdir is not None else PKG_WORKDIR

    if session is None:
        async with aiohttp.ClientSession() as own_session:
            return await get_or_install(
                directory,
                channel,
                platform=platform,
                session=own_session,
                workdir=workdir,
                binary_name=binary_name,
            )

    release = await get_latest_release(channel, platform, session)

    local = find_usable_local_version(directory, platform, release)
    if local is not None:
        logger.info(
            "using_local_version", path=str(local.path), version=str(local.version)
        )
        return Installation(channel=channel, local_version=local, release=None)

    installed = await install_release(directory, release, session, workdir, binary_name)

    logger.info(
        "release_installed",
        path=str(installed.path),
        version=str(installed.version),
    )
    return Installation(channel=channel, local_version=installed, release=release)
