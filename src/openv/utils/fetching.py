import asyncio
from pathlib import Path

import aiohttp

from openv.constants import DOWNLOAD_CHUNK_SIZE, UNNAMED_DOWNLOAD
from openv.errors import FetchRejectedError, TransportError
from openv.logging import get_logger

logger = get_logger(__name__)


def url_basename(url: str) -> str:
    """File name for a download: text after the last ``/`` of the URL."""
    _, sep, name = url.rpartition("/")
    if not sep or not name:
        return UNNAMED_DOWNLOAD
    return name


async def fetch_text(url: str, session: aiohttp.ClientSession) -> str:
    """GET a document and return its body as text."""
    try:
        async with session.get(url) as response:
            if response.status != 200:
                logger.error("fetch_rejected", url=url, status=response.status)
                raise FetchRejectedError(url, response.status)
            return await response.text()
    except (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError) as e:
        logger.error("fetch_failed", url=url, error=str(e))
        raise TransportError(url, str(e)) from e


async def download_url(
    directory: Path, url: str, session: aiohttp.ClientSession
) -> Path:
    """Download a URL into directory, named after the URL's basename.

    The body is streamed into a ``.part`` file that only replaces the final
    name once complete.
    """
    dest = Path(directory) / url_basename(url)
    partial = dest.with_name(dest.name + ".part")

    logger.info("download_started", url=url, destination=str(dest))
    try:
        async with session.get(url) as response:
            if response.status != 200:
                logger.error("download_rejected", url=url, status=response.status)
                raise FetchRejectedError(url, response.status)

            downloaded = 0
            with open(partial, "wb") as f:
                async for chunk in response.content.iter_chunked(DOWNLOAD_CHUNK_SIZE):
                    f.write(chunk)
                    downloaded += len(chunk)

    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        if partial.exists():
            partial.unlink()
        logger.error("download_failed", url=url, error=str(e))
        raise TransportError(url, str(e)) from e
    except BaseException:
        if partial.exists():
            partial.unlink()
        raise

    partial.replace(dest)
    logger.info("download_complete", url=url, path=str(dest), size=downloaded)
    return dest
