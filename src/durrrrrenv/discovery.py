"""Locate the environment file for a directory.

Walks from the start directory up through a bounded number of parents,
mirroring the fast-path search the shell hook performs: at most
max_depth directories are checked, the start directory being the first.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from durrrrrenv.config import DEFAULT_ENV_FILENAME, DEFAULT_SEARCH_DEPTH

logger = logging.getLogger(__name__)


def find_env_dir(
    start: Union[str, Path],
    env_filename: str = DEFAULT_ENV_FILENAME,
    max_depth: int = DEFAULT_SEARCH_DEPTH,
) -> Optional[Path]:
    """Return the nearest directory at or above start holding env_filename.

    Args:
        start: Directory to start from
        env_filename: Name of the environment file
        max_depth: Number of directories to check, start included

    Returns:
        The directory containing the file, or None if not found
    """
    current = Path(start).absolute()
    for _ in range(max_depth):
        if (current / env_filename).is_file():
            logger.debug("Found %s in %s", env_filename, current)
            return current
        if current.parent == current:
            break
        current = current.parent
    return None
