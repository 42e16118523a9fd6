"""Installer constants and release catalog endpoints."""
from pathlib import Path

import appdirs

# Release history pages, one per major version of the CLI
CATALOG_BASE = "https://app-updates.agilebits.com/product_history"
CATALOG_V1_URL = f"{CATALOG_BASE}/CLI"
CATALOG_V2_URL = f"{CATALOG_BASE}/CLI2"

# Artifact names look like op_<os>_<arch>_v<version>[.<ext>]
ARTIFACT_PREFIX = "op"
BINARY_NAME = "op"

HOME_DIR_NAME = ".op_cli"
HOME_DIR_MODE = 0o700
BINARY_MODE = 0o700

# Location of the gzipped cpio payload inside an expanded macOS installer
PKG_PAYLOAD_PATH = "op.pkg/Payload"
PKG_WORKDIR = Path(appdirs.user_cache_dir("openv")) / "pkgutil_workdir"

DOWNLOAD_CHUNK_SIZE = 8192
UNNAMED_DOWNLOAD = "unnamed"
