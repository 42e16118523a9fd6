"""Unpacking of downloaded op releases.

Two strategies exist. Most platforms get a zip archive holding a single
``op`` entry. macOS gets an installer package, unpacked in three stages::

    op_apple_universal_vX.pkg  --pkgutil--> <workdir>/op.pkg/Payload (gzip)
    Payload                    --gunzip-->  <workdir>/Payload.cpio
    Payload.cpio               --cpio-->    <dest>/op

Each stage reports its name and the path it could not produce or read when
it fails.
"""
import gzip
import os
import shutil
import zipfile
import zlib
from pathlib import Path
from typing import Union

from openv.constants import BINARY_MODE, BINARY_NAME, PKG_PAYLOAD_PATH
from openv.errors import (
    ArchiveEntryMissingError,
    ExtractionStageError,
    InvalidArchiveError,
)
from openv.logging import get_logger
from openv.types import (
    OperatingSystem,
    Platform,
    UnpackOption,
    UnpackResult,
    UseArchiveName,
    UseEntryName,
)
from openv.utils.commands import run_checked

logger = get_logger(__name__)

COPY_BUFFER_SIZE = 64 * 1024


def make_executable(path: Path) -> None:
    """Restrict a binary to owner read/write/execute on POSIX systems."""
    if os.name != "nt":
        path.chmod(BINARY_MODE)


def archive_stem(archive_path: Path) -> str:
    """Archive file name without its last extension."""
    return archive_path.stem


class ZipUnpacker:
    """Copy a single named entry out of a zip archive."""

    def __init__(self, option: UnpackOption):
        self.option = option

    def output_path(self, archive_path: Path, dest_dir: Path) -> Path:
        if isinstance(self.option, UseEntryName):
            return dest_dir / self.option.entry
        return dest_dir / archive_stem(archive_path)

    async def unpack(self, archive_path: Path, dest_dir: Path) -> UnpackResult:
        entry = self.option.entry
        output = self.output_path(archive_path, dest_dir)

        try:
            archive = zipfile.ZipFile(archive_path)
        except zipfile.BadZipFile as e:
            logger.error("archive_unreadable", archive=str(archive_path), error=str(e))
            raise InvalidArchiveError(str(archive_path), str(e)) from e

        with archive:
            try:
                info = archive.getinfo(entry)
            except KeyError:
                logger.error(
                    "archive_entry_missing",
                    archive=str(archive_path),
                    entry=entry,
                    available_files=archive.namelist(),
                )
                raise ArchiveEntryMissingError(str(archive_path), entry) from None

            with archive.open(info) as src, open(output, "wb") as dst:
                shutil.copyfileobj(src, dst, COPY_BUFFER_SIZE)

        make_executable(output)
        bytes_written = output.stat().st_size

        logger.info(
            "archive_extracted",
            archive=str(archive_path),
            entry=entry,
            extracted_to=str(output),
            size=bytes_written,
        )
        return UnpackResult(bytes_written=bytes_written, path=output)


class PkgUnpacker:
    """Expand a macOS installer package and pull the binary out of its payload."""

    def __init__(
        self,
        workdir: Path,
        binary_name: str = BINARY_NAME,
        payload_path: str = PKG_PAYLOAD_PATH,
    ):
        self.workdir = Path(workdir)
        self.binary_name = binary_name
        self.payload_path = payload_path

    async def expand(self, pkg_path: Path) -> Path:
        """Stage 1: pkgutil --expand, returning the gzipped payload."""
        # pkgutil refuses to expand into an existing directory
        if self.workdir.exists():
            shutil.rmtree(self.workdir)
        self.workdir.parent.mkdir(parents=True, exist_ok=True)

        await run_checked("pkgutil", "--expand", str(pkg_path), str(self.workdir))

        payload = self.workdir / self.payload_path
        if not payload.is_file():
            logger.error("pkg_payload_missing", pkg=str(pkg_path), expected=str(payload))
            raise ExtractionStageError("expand", str(payload))
        return payload

    def decompress(self, payload: Path) -> Path:
        """Stage 2: gunzip the payload into a cpio archive."""
        cpio_path = self.workdir / "Payload.cpio"
        try:
            with gzip.open(payload, "rb") as src, open(cpio_path, "wb") as dst:
                shutil.copyfileobj(src, dst, COPY_BUFFER_SIZE)
        except (OSError, EOFError, zlib.error) as e:
            cpio_path.unlink(missing_ok=True)
            logger.error("pkg_payload_unreadable", payload=str(payload), error=str(e))
            raise ExtractionStageError("decompress", str(payload)) from e
        return cpio_path

    async def extract(self, cpio_path: Path, dest_dir: Path) -> Path:
        """Stage 3: cpio -i into dest_dir, returning the extracted binary."""
        await run_checked("cpio", "-i", "-d", "-F", str(cpio_path), cwd=dest_dir)

        binary = dest_dir / self.binary_name
        if not binary.is_file():
            logger.error(
                "cpio_binary_missing", archive=str(cpio_path), expected=str(binary)
            )
            raise ExtractionStageError("extract", str(binary))
        return binary

    async def unpack(self, pkg_path: Path, dest_dir: Path) -> UnpackResult:
        payload = await self.expand(pkg_path)
        cpio_path = self.decompress(payload)
        binary = await self.extract(cpio_path, dest_dir)
        shutil.rmtree(self.workdir)

        output = dest_dir / archive_stem(pkg_path)
        if output != binary:
            binary.replace(output)
        make_executable(output)
        bytes_written = output.stat().st_size

        logger.info(
            "pkg_extracted",
            pkg=str(pkg_path),
            extracted_to=str(output),
            size=bytes_written,
        )
        return UnpackResult(bytes_written=bytes_written, path=output)


Unpacker = Union[ZipUnpacker, PkgUnpacker]


def select_unpacker(
    platform: Platform, workdir: Path, binary_name: str = BINARY_NAME
) -> Unpacker:
    """Pick the unpack strategy for the artifacts published for platform."""
    if platform.os is OperatingSystem.APPLE:
        return PkgUnpacker(workdir, binary_name)
    if platform.os is OperatingSystem.WINDOWS:
        return ZipUnpacker(UseArchiveName(f"{binary_name}.exe"))
    return ZipUnpacker(UseArchiveName(binary_name))
