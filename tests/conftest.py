import zipfile
from pathlib import Path
from typing import Dict, List, Union

import aiohttp
import pytest

from openv.types import Arch, OperatingSystem, Platform

DATA_DIR = Path(__file__).parent / "data"

DOWNLOAD_BASE = "https://cache.agilebits.com/dist/1P/op/pkg"
CATALOG_PLATFORMS = [
    "apple_universal",
    "freebsd_386",
    "freebsd_amd64",
    "linux_386",
    "linux_amd64",
    "linux_arm",
    "linux_arm64",
    "openbsd_amd64",
    "windows_amd64",
]


class FakeContent:
    def __init__(self, body: bytes, error: Exception = None):
        self.body = body
        self.error = error

    async def iter_chunked(self, n: int):
        for i in range(0, len(self.body), n):
            yield self.body[i:i + n]
        if self.error is not None:
            raise self.error


class FakeResponse:
    def __init__(self, status: int, body: bytes, error: Exception = None):
        self.status = status
        self.body = body
        self.content = FakeContent(body, error)

    async def text(self) -> str:
        return self.body.decode()


class FakeRequest:
    def __init__(self, route):
        self.route = route

    async def __aenter__(self) -> FakeResponse:
        if isinstance(self.route, Exception):
            raise self.route
        return self.route

    async def __aexit__(self, *exc):
        return False


class FakeSession:
    """Stand-in for aiohttp.ClientSession serving canned responses by URL."""

    def __init__(self):
        self.routes: Dict[str, Union[FakeResponse, Exception]] = {}
        self.requests: List[str] = []

    def add(self, url: str, body: Union[bytes, str] = b"", status: int = 200, error: Exception = None):
        if isinstance(body, str):
            body = body.encode()
        self.routes[url] = FakeResponse(status, body, error)

    def fail(self, url: str, error: Exception):
        self.routes[url] = error

    def get(self, url: str, **kwargs) -> FakeRequest:
        self.requests.append(url)
        route = self.routes.get(url)
        if route is None:
            route = aiohttp.ClientConnectionError(f"no route for {url}")
        return FakeRequest(route)


def download_url_for(platform: str, version: str, ext: str = "zip") -> str:
    return f"{DOWNLOAD_BASE}/v{version}/op_{platform}_v{version}.{ext}"


def make_catalog(version: str, older: str = "1.0.0") -> str:
    """Release history page with a latest and an older release article."""
    def article(v: str) -> str:
        links = "\n".join(
            f'      <a href="{download_url_for(p, v, "pkg" if p.startswith("apple") else "zip")}" title="Download for {p}">{p}</a>'
            for p in CATALOG_PLATFORMS
        )
        return f"""  <article>
    <h3>Version {v}</h3>
    <div class="downloads">
{links}
    </div>
  </article>"""

    return f"""<!DOCTYPE html>
<html>
<head><title>1Password CLI release history</title>
<link href="https://app-updates.agilebits.com/style.css" title="style">
</head>
<body>
{article(version)}
{article(older)}
</body>
</html>
"""


def make_zip(path: Path, entries: Dict[str, bytes]) -> Path:
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, content in entries.items():
            zf.writestr(name, content)
    return path


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def linux_amd64():
    return Platform(os=OperatingSystem.LINUX, arch=Arch.AMD64)


@pytest.fixture
def apple_universal():
    return Platform(os=OperatingSystem.APPLE, arch=Arch.APPLE_UNIVERSAL)


@pytest.fixture
def release_notes():
    return (DATA_DIR / "release_notes.html").read_text()
