"""Compile parsed directives into a shell script.

The script is produced all-or-nothing: if any directive fails to compile no
text is returned, so a half-applied environment never reaches the shell.
"""

import logging
import re
from pathlib import Path
from typing import List, Sequence, Union

from durrrrrenv.errors import MissingActivateScript, UnresolvablePath
from durrrrrenv.kernel.directives import Directive, ProcessSubstitution, PythonVenv, SourceFile

logger = logging.getLogger(__name__)

# "~user" prefixes the shell is allowed to expand itself
_TILDE_USER_RE = re.compile(r"^~[A-Za-z0-9._-]*(?=/|$)")


def compile_script(directives: Sequence[Directive], base_dir: Union[str, Path]) -> str:
    """Generate shell script text from parsed directives.

    Args:
        directives: Directives in execution order
        base_dir: Directory relative paths are resolved against

    Returns:
        One shell line per directive, each newline-terminated

    Raises:
        CompileError: If a path cannot be resolved or a venv is missing
    """
    base = Path(base_dir)
    lines: List[str] = [compile_directive(d, base) for d in directives]
    logger.debug("Compiled %d directive(s) against %s", len(lines), base)
    return "".join(f"{line}\n" for line in lines)


def compile_directive(directive: Directive, base_dir: Path) -> str:
    """Convert one directive into a shell line."""
    if isinstance(directive, SourceFile):
        return f"source {_shell_path(resolve_path(directive.path, base_dir))}"

    if isinstance(directive, PythonVenv):
        resolved = resolve_path(directive.path, base_dir)
        activate_script = Path(resolved) / "bin" / "activate"
        if not activate_script.exists():
            raise MissingActivateScript(activate_script)
        return f"source {_shell_path(str(activate_script))}"

    if isinstance(directive, ProcessSubstitution):
        # Opaque: the invoking shell is responsible for what the command does
        return f"source <({directive.command})"

    raise TypeError(f"Unknown directive type: {type(directive).__name__}")


def resolve_path(path: str, base_dir: Path) -> str:
    """Resolve a directive path against base_dir.

    - ``~/rest``  -> home directory joined with rest
    - ``~user``   -> returned verbatim for the shell to expand
    - ``/abs``    -> used as is
    - otherwise   -> joined onto base_dir
    """
    if path.startswith("~/"):
        try:
            home = Path.home()
        except (RuntimeError, KeyError) as e:
            raise UnresolvablePath(f"Failed to determine home directory: {e}") from e
        return str(home / path[2:])
    if path.startswith("~"):
        return path
    if path.startswith("/"):
        return path
    return str(base_dir / path)


def _shell_path(path: str) -> str:
    """Quote a path for the shell, leaving a leading ``~user`` unquoted."""
    match = _TILDE_USER_RE.match(path)
    if match is None:
        return _single_quote(path)
    # The slash ending the tilde-prefix must stay unquoted for expansion
    prefix, rest = match.group(0), path[match.end() + 1:]
    if match.end() == len(path):
        return prefix
    return prefix + "/" + (_single_quote(rest) if rest else "")


def _single_quote(text: str) -> str:
    return "'" + text.replace("'", "'\\''") + "'"
