"""Error handling for the openv installer."""
from typing import Any, Dict, Optional


class OpenvError(Exception):
    """Base error class for openv."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class UnsupportedPlatformError(OpenvError):
    """The host operating system or architecture has no op build."""
    def __init__(self, system: str, machine: str):
        super().__init__(
            f"Unsupported platform: {system}/{machine}",
            details={"system": system, "machine": machine}
        )


# Artifact name grammar: <prefix>_<os>_<arch>_v<major>.<minor>.<patch>

class ArtifactNameError(OpenvError, ValueError):
    """A file name or URL does not follow the artifact name grammar."""


class InvalidArtifactNameError(ArtifactNameError):
    def __init__(self, name: str):
        super().__init__(f"invalid format: {name}", details={"name": name})


class MissingDelimiterError(ArtifactNameError):
    def __init__(self, token: str):
        super().__init__(f"missing delimiter: {token}", details={"token": token})


class UnsupportedOsError(ArtifactNameError):
    def __init__(self, token: str):
        super().__init__(f"unsupported os: {token}", details={"token": token})


class UnsupportedArchError(ArtifactNameError):
    def __init__(self, token: str, os_token: Optional[str] = None):
        message = f"unsupported arch: {token}"
        if os_token:
            message = f"unsupported arch for {os_token}: {token}"
        super().__init__(message, details={"token": token, "os": os_token})


class InvalidVersionError(ArtifactNameError):
    def __init__(self, token: str):
        super().__init__(
            f"invalid semantic version: {token}", details={"token": token}
        )


# Release catalog document shape

class CatalogError(OpenvError):
    """The release catalog does not have the expected shape."""


class MissingBodyTagError(CatalogError):
    def __init__(self):
        super().__init__("Missing html <body>...</body> tag.")


class MissingArticleTagError(CatalogError):
    def __init__(self):
        super().__init__("Missing html <article>...</article> tag.")


class MissingDownloadUrlsError(CatalogError):
    def __init__(self):
        super().__init__("Missing download urls to the binaries.")


class MissingPlatformError(CatalogError):
    """No download in the latest release targets the requested platform."""
    def __init__(self, platform: Any):
        super().__init__(
            f"Missing platform. Expect: {platform}",
            details={"platform": str(platform)}
        )
        self.platform = platform


class NoLocalVersionError(OpenvError):
    """No installed binary in a directory matches the platform."""
    def __init__(self, directory: str, platform: Any):
        super().__init__(
            f"No local version for {platform} in {directory}",
            details={"directory": directory, "platform": str(platform)}
        )
        self.platform = platform


# Network

class FetchRejectedError(OpenvError):
    def __init__(self, url: str, status: int):
        super().__init__(
            f"request has been rejected: {url} (status {status})",
            details={"url": url, "status": status}
        )
        self.url = url
        self.status = status


class TransportError(OpenvError):
    def __init__(self, url: str, reason: str):
        super().__init__(
            f"Failed to fetch {url}: {reason}",
            details={"url": url, "reason": reason}
        )
        self.url = url


# Archives and helper processes

class ArchiveEntryMissingError(OpenvError):
    def __init__(self, archive: str, entry: str):
        super().__init__(
            f"Entry {entry} not found in archive {archive}",
            details={"archive": archive, "entry": entry}
        )


class InvalidArchiveError(OpenvError):
    """A downloaded archive cannot be opened as a zip file."""
    def __init__(self, archive: str, reason: str):
        super().__init__(
            f"Not a valid archive: {archive} ({reason})",
            details={"archive": archive, "reason": reason}
        )
        self.archive = archive


class ExtractionStageError(OpenvError):
    """An unpack stage finished without producing its expected file."""
    def __init__(self, stage: str, path: str):
        super().__init__(
            f"Unpack stage '{stage}' failed: expected {path}",
            details={"stage": stage, "path": path}
        )
        self.stage = stage
        self.path = path


class ProcessError(OpenvError):
    def __init__(self, command: str, returncode: int, stderr: str):
        super().__init__(
            f"Command failed with code {returncode}: {command}\nstderr: {stderr}",
            details={"command": command, "returncode": returncode, "stderr": stderr}
        )
        self.returncode = returncode


class NotExecutableError(OpenvError):
    def __init__(self, path: str):
        super().__init__(f"Binary is not executable: {path}", details={"path": path})
