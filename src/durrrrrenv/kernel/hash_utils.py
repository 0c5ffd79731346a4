"""Hash utilities for directory fingerprints and content digests.

Both digests are plain SHA-256 over UTF-8 bytes, rendered as lowercase hex
without a prefix; that is the format stored in the trust document.

Key rules:
- Directory fingerprints hash the canonical (symlink-free, absolute) path
- If the directory cannot be canonicalized, the literal path text is hashed
- Content digests hash the exact file text, byte for byte
"""

import hashlib
import os
from pathlib import Path
from typing import Union

PathLike = Union[str, os.PathLike]


def sha256_hex(content: Union[str, bytes]) -> str:
    """Compute SHA256 of a string or bytes.

    Args:
        content: Text (encoded as UTF-8) or raw bytes

    Returns:
        SHA256 hash as lowercase hex string (no prefix)
    """
    if isinstance(content, str):
        content_bytes = content.encode("utf-8")
    else:
        content_bytes = content
    return hashlib.sha256(content_bytes).hexdigest()


def canonicalize_or_identity(path: PathLike) -> str:
    """Return the canonical form of path, or the path text if it does not exist."""
    try:
        return str(Path(path).resolve(strict=True))
    except (OSError, RuntimeError):
        return os.fspath(path)


def fingerprint(path: PathLike) -> str:
    """Compute the trust-store key for a directory."""
    return sha256_hex(canonicalize_or_identity(path))


def content_digest(text: str) -> str:
    """Compute the digest of environment file content."""
    return sha256_hex(text)
