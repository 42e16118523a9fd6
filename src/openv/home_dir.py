import os
import stat
from pathlib import Path
from typing import Optional

from openv.constants import HOME_DIR_MODE, HOME_DIR_NAME
from openv.logging import get_logger

logger = get_logger(__name__)


def default_home_dir() -> Path:
    return Path.home() / HOME_DIR_NAME


def get_or_create(home: Optional[Path] = None) -> Path:
    """Ensure the install root exists and is private to the current user."""
    home = Path(home) if home is not None else default_home_dir()

    if not home.is_dir():
        home.mkdir(mode=HOME_DIR_MODE)
        logger.info("home_dir_created", path=str(home))

    if os.name != "nt":
        mode = stat.S_IMODE(home.stat().st_mode)
        if mode != HOME_DIR_MODE:
            home.chmod(HOME_DIR_MODE)
            logger.debug("home_dir_permissions_fixed", path=str(home), previous=oct(mode))

    return home
