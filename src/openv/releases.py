"""Release catalog parsing.

The catalog is the op release history page. Its first ``<article>`` inside
``<body>`` describes the latest release and links one download per platform::

    <a href="https://cache.agilebits.com/dist/1P/op/pkg/v1.12.3/op_linux_amd64_v1.12.3.zip" title="...">

Parsing narrows the document to that article before looking for links, so
downloads for older releases further down the page never match.
"""
import re
from typing import Iterable, List

import aiohttp

from openv.artifacts import parse_release
from openv.errors import (
    ArtifactNameError,
    MissingArticleTagError,
    MissingBodyTagError,
    MissingDownloadUrlsError,
    MissingPlatformError,
)
from openv.logging import get_logger
from openv.types import CatalogChannel, Platform, Release
from openv.utils.fetching import fetch_text

logger = get_logger(__name__)

DOWNLOAD_URL_RE = re.compile(r' href="(https.+?)" title=')


def extract_latest_release(text: str) -> str:
    """Return the section of the catalog describing the latest release."""
    _, body_tag, body = text.partition("<body>")
    if not body_tag:
        logger.error("catalog_body_missing")
        raise MissingBodyTagError()

    latest, article_end, _ = body.partition("</article>")
    if not article_end:
        logger.error("catalog_article_missing")
        raise MissingArticleTagError()

    return latest


def extract_download_urls(text: str) -> List[str]:
    urls = DOWNLOAD_URL_RE.findall(text)
    if not urls:
        logger.error("catalog_download_urls_missing")
        raise MissingDownloadUrlsError()
    return urls


def select_release(urls: Iterable[str], platform: Platform) -> Release:
    """Return the first release in urls built for platform.

    URLs that don't follow the artifact name grammar are skipped.
    """
    for url in urls:
        try:
            release = parse_release(url)
        except ArtifactNameError as e:
            logger.debug("skipping_download_url", url=url, reason=str(e))
            continue
        if release.platform == platform:
            return release

    logger.error("platform_not_in_catalog", platform=str(platform))
    raise MissingPlatformError(platform)


def parse_release_notes(text: str, platform: Platform) -> Release:
    latest_release = extract_latest_release(text)
    download_urls = extract_download_urls(latest_release)
    return select_release(download_urls, platform)


async def download_release_notes(
    channel: CatalogChannel, session: aiohttp.ClientSession
) -> str:
    """Fetch the release history page for a channel."""
    logger.info("fetching_release_notes", url=channel.url)
    return await fetch_text(channel.url, session)


async def get_latest_release(
    channel: CatalogChannel, platform: Platform, session: aiohttp.ClientSession
) -> Release:
    """Fetch the catalog and resolve the latest release for platform."""
    text = await download_release_notes(channel, session)
    release = parse_release_notes(text, platform)
    logger.info(
        "latest_release_resolved",
        version=str(release.version),
        platform=str(release.platform),
        url=release.url,
    )
    return release
