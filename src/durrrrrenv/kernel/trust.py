"""Trust store: which environment file content is approved for which directory.

Approval is bound to content. A directory is authorized for a given content
string only if its fingerprint is in the store AND the stored file hash equals
the digest of that exact content, so any edit to the file revokes approval.

The store is loaded fresh from its backend on every invocation and written back
in full after every mutation; there is no long-lived in-memory instance.
"""

import json
import logging
import time
from pathlib import Path
from typing import Callable, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from durrrrrenv.errors import PathResolutionError, StorageError
from durrrrrenv.kernel.hash_utils import PathLike, content_digest, fingerprint

logger = logging.getLogger(__name__)


class TrustRecord(BaseModel):
    """One human approval event."""
    canonical_path: str = Field(..., alias="path", description="Canonical absolute path of the directory")
    file_hash: str = Field(..., description="SHA256 hex digest of the approved file content")
    approved_at: int = Field(..., alias="allowed_at", description="Unix timestamp (seconds) of the approval")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class TrustDocument(BaseModel):
    """Serialized form of the trust store."""
    allowed_dirs: Dict[str, TrustRecord] = Field(
        default_factory=dict,
        description="Directory fingerprint -> approval record",
    )

    model_config = ConfigDict(extra="ignore")


class TrustStore:
    """Mapping from directory fingerprint to approval record, bound to a backend.

    The backend only needs ``read() -> Optional[str]`` and ``write(text)``;
    see durrrrrenv._internal.io.trust_backend.
    """

    def __init__(self, document: TrustDocument, backend, clock: Callable[[], float] = time.time):
        self._document = document
        self._backend = backend
        self._clock = clock

    @classmethod
    def load(cls, backend, clock: Callable[[], float] = time.time) -> "TrustStore":
        """Load the store from its backend.

        An absent document yields an empty store.

        Raises:
            StorageError: If the document exists but cannot be parsed, or the
                backend cannot be read
        """
        text = backend.read()
        if text is None:
            return cls(TrustDocument(), backend, clock)

        try:
            document = TrustDocument.model_validate(json.loads(text))
        except (json.JSONDecodeError, ValidationError) as e:
            raise StorageError(f"Failed to parse config file: {e}") from e

        logger.debug("Loaded trust store with %d approved directories", len(document.allowed_dirs))
        return cls(document, backend, clock)

    def save(self) -> None:
        """Write the full document back to the backend."""
        try:
            text = json.dumps(self._document.model_dump(by_alias=True), indent=2, sort_keys=True)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Failed to serialize config: {e}") from e
        self._backend.write(text + "\n")

    @property
    def records(self) -> Dict[str, TrustRecord]:
        """Snapshot of fingerprint -> record."""
        return dict(self._document.allowed_dirs)

    def __len__(self) -> int:
        return len(self._document.allowed_dirs)

    def get(self, directory: PathLike) -> Optional[TrustRecord]:
        """Return the approval record for a directory, if any."""
        return self._document.allowed_dirs.get(fingerprint(directory))

    def is_authorized(self, directory: PathLike, content: str) -> bool:
        """Check whether this exact content is approved for directory.

        Pure predicate: never raises for an unapproved directory.
        """
        record = self.get(directory)
        if record is None:
            return False
        return record.file_hash == content_digest(content)

    def approve(self, directory: PathLike, content: str) -> TrustRecord:
        """Approve content for directory, replacing any previous approval.

        Raises:
            PathResolutionError: If the directory does not exist
            StorageError: If the store cannot be persisted
        """
        try:
            canonical = Path(directory).resolve(strict=True)
        except (OSError, RuntimeError) as e:
            raise PathResolutionError(f"Failed to canonicalize directory path {directory}: {e}") from e
        if not canonical.is_dir():
            raise PathResolutionError(f"Not a directory: {canonical}")

        record = TrustRecord(
            canonical_path=str(canonical),
            file_hash=content_digest(content),
            approved_at=int(self._clock()),
        )
        self._document.allowed_dirs[fingerprint(canonical)] = record
        self.save()
        logger.info("Approved %s (hash %s)", canonical, record.file_hash[:12])
        return record

    def revoke(self, directory: PathLike) -> bool:
        """Remove the approval for directory.

        Removing an absent entry is not an error. The store is persisted
        either way.

        Returns:
            True if an approval was removed
        """
        removed = self._document.allowed_dirs.pop(fingerprint(directory), None) is not None
        self.save()
        logger.info("Revoked %s (had approval: %s)", directory, removed)
        return removed
