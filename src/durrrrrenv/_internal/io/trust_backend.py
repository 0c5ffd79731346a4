"""Storage backends for the trust document (internal).

A backend moves the serialized document in and out of storage; it knows
nothing about its structure. read() returns None when no document exists yet.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from durrrrrenv.errors import StorageError

logger = logging.getLogger(__name__)


class FileTrustBackend:
    """Trust document stored as a JSON file on disk."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _ensure_dir(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to create config directory {self.path.parent}: {e}") from e

    def read(self) -> Optional[str]:
        self._ensure_dir()
        if not self.path.exists():
            logger.debug("No trust document at %s", self.path)
            return None
        try:
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read config file {self.path}: {e}") from e

    def write(self, text: str) -> None:
        """Replace the document.

        The new text goes to a temporary file that is renamed over the old
        one. There is no lock: concurrent writers can still lose updates.
        """
        self._ensure_dir()
        fd, tmp_name = tempfile.mkstemp(prefix=".allowed-", suffix=".tmp", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp_name, self.path)
        except OSError as e:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise StorageError(f"Failed to write config file {self.path}: {e}") from e
        logger.debug("Wrote trust document to %s", self.path)


class MemoryTrustBackend:
    """Trust document held in memory, for tests and embedding."""

    def __init__(self, text: Optional[str] = None):
        self.text = text
        self.writes = 0

    def read(self) -> Optional[str]:
        return self.text

    def write(self, text: str) -> None:
        self.text = text
        self.writes += 1
