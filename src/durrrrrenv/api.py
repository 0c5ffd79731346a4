"""Public API for durrrrrenv.

High-level operations that compose the trust store, the directive parser and
the script compiler for one invocation. The CLI is a thin layer over these.

Each function takes a trust backend rather than a loaded store: the store is
loaded fresh per operation, and tests can pass a MemoryTrustBackend.
"""

import logging
from pathlib import Path
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field

from durrrrrenv.config import Settings
from durrrrrenv.discovery import find_env_dir
from durrrrrenv.errors import EnvFileError, ParseError
from durrrrrenv.kernel.compiler import compile_script
from durrrrrenv.kernel.directives import Directive, describe
from durrrrrenv.kernel.parser import parse
from durrrrrenv.kernel.trust import TrustRecord, TrustStore

logger = logging.getLogger(__name__)


class CheckResult(BaseModel):
    """Outcome of checking a directory."""
    status: Literal["absent", "unauthorized", "authorized"]
    directory: Path  # Directory holding the env file, or the start directory if none was found
    env_file: Optional[Path] = None
    content: Optional[str] = None  # Raw file content, for human review when unauthorized
    script: str = ""  # Compiled shell script; empty unless authorized


class AllowResult(BaseModel):
    """Outcome of approving a directory."""
    directory: Path
    record: TrustRecord
    script: str


class StatusResult(BaseModel):
    """Human-facing status of a directory."""
    directory: Path
    env_file: Optional[Path] = None
    allowed: bool = False
    record: Optional[TrustRecord] = None
    directives: List[str] = Field(default_factory=list)  # Rendered directives (only when allowed)
    parse_error: Optional[str] = None


def locate(directory: Union[str, Path], settings: Settings) -> Path:
    """Return the directory whose env file applies, or directory itself if none does."""
    start = Path(directory).absolute()
    found = find_env_dir(start, settings.env_filename, settings.search_depth)
    return found if found is not None else start


def read_env_file(env_file: Path) -> str:
    """Read an environment file as UTF-8 text, byte for byte.

    No newline translation: the digest must see exactly what is on disk.

    Raises:
        EnvFileError: If the file is missing or unreadable
    """
    try:
        return env_file.read_bytes().decode("utf-8")
    except FileNotFoundError as e:
        raise EnvFileError(f"No {env_file.name} file found in {env_file.parent}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise EnvFileError(f"Failed to read {env_file}: {e}") from e


def check(directory: Union[str, Path], backend, settings: Settings) -> CheckResult:
    """Decide whether the environment file for directory may be loaded.

    Only an authorized file yields a script. An unauthorized file is a normal
    outcome (not an error); its content is returned for review.

    Raises:
        StorageError, ParseError, CompileError: On genuine failures
    """
    env_dir = locate(directory, settings)
    env_file = env_dir / settings.env_filename
    if not env_file.is_file():
        return CheckResult(status="absent", directory=env_dir)

    content = read_env_file(env_file)
    store = TrustStore.load(backend)

    if not store.is_authorized(env_dir, content):
        logger.info("%s is not approved for %s", env_file.name, env_dir)
        return CheckResult(status="unauthorized", directory=env_dir, env_file=env_file, content=content)

    directives = parse(content)
    script = compile_script(directives, env_dir)
    return CheckResult(
        status="authorized",
        directory=env_dir,
        env_file=env_file,
        content=content,
        script=script,
    )


def allow(
    directory: Union[str, Path],
    backend,
    settings: Settings,
    content: Optional[str] = None,
) -> AllowResult:
    """Approve the environment file for directory and compile it.

    Args:
        directory: Directory to approve (the env file is searched for upwards)
        backend: Trust backend
        settings: Runtime settings
        content: Content the user reviewed; read from disk when omitted. The
            approval is bound to exactly this text.

    Raises:
        EnvFileError: If there is no environment file
        ParseError: If the content is invalid (nothing is approved)
        PathResolutionError, StorageError, CompileError: On other failures
    """
    env_dir = locate(directory, settings)
    if content is None:
        content = read_env_file(env_dir / settings.env_filename)

    # Validate before recording the approval
    directives = parse(content)

    store = TrustStore.load(backend)
    record = store.approve(env_dir, content)

    script = compile_script(directives, env_dir)
    return AllowResult(directory=env_dir, record=record, script=script)


def deny(directory: Union[str, Path], backend, settings: Settings) -> bool:
    """Revoke the approval for directory.

    Returns:
        True if an approval existed
    """
    env_dir = locate(directory, settings)
    store = TrustStore.load(backend)
    return store.revoke(env_dir)


def status(directory: Union[str, Path], backend, settings: Settings) -> StatusResult:
    """Report the approval state of directory without producing a script."""
    env_dir = locate(directory, settings)
    env_file = env_dir / settings.env_filename
    if not env_file.is_file():
        return StatusResult(directory=env_dir)

    content = read_env_file(env_file)
    store = TrustStore.load(backend)
    result = StatusResult(directory=env_dir, env_file=env_file, record=store.get(env_dir))

    if not store.is_authorized(env_dir, content):
        return result

    result.allowed = True
    try:
        directives: List[Directive] = parse(content)
    except ParseError as e:
        result.parse_error = str(e)
        return result
    result.directives = [describe(d) for d in directives]
    return result
