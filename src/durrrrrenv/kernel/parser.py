"""Parser for .local_environment files.

Grammar (line-oriented, order-preserving):
- Blank lines and lines starting with '#' are skipped
- ``source <(command)``   -> ProcessSubstitution
- ``source <path>``       -> SourceFile
- ``python_venv [path]``  -> PythonVenv (default path ".venv")

Matching is priority ordered: a ``source`` line that contains both ``<(``
and ``)`` is always a process substitution. The command spans from the first
``<(`` to the last ``)``; anything after the last ``)`` is ignored.
"""

import logging
from typing import List

from durrrrrenv.errors import ArityError, MalformedSubstitution, ParseError, UnrecognizedDirective
from durrrrrenv.kernel.directives import Directive, ProcessSubstitution, PythonVenv, SourceFile

logger = logging.getLogger(__name__)

SOURCE_KEYWORD = "source"
PYTHON_VENV_KEYWORD = "python_venv"
DEFAULT_VENV_PATH = ".venv"


def parse(content: str) -> List[Directive]:
    """Parse environment file content into an ordered list of directives.

    Args:
        content: Full text of the environment file

    Returns:
        Directives in file order (empty for blank or comment-only content)

    Raises:
        ParseError: On the first invalid line, annotated with its 1-based
            line number. No partial result is returned.
    """
    directives: List[Directive] = []

    # Only "\n" and "\r\n" end a line; form feeds and other separators do not
    for line_number, raw_line in enumerate(content.split("\n"), start=1):
        raw_line = raw_line.removesuffix("\r")
        line = raw_line.strip()

        if not line or line.startswith("#"):
            continue

        try:
            directives.append(parse_line(line))
        except ParseError as e:
            raise e.at_line(line_number, raw_line) from None

    logger.debug("Parsed %d directive(s)", len(directives))
    return directives


def parse_line(line: str) -> Directive:
    """Parse a single trimmed, non-comment line."""
    if _starts_with_keyword(line, SOURCE_KEYWORD, allow_substitution=True) and "<(" in line and ")" in line:
        return _parse_process_substitution(line)

    if _starts_with_keyword(line, SOURCE_KEYWORD):
        return _parse_source(line)

    if _starts_with_keyword(line, PYTHON_VENV_KEYWORD):
        return _parse_python_venv(line)

    raise UnrecognizedDirective(f"Unknown command: {line}")


def _starts_with_keyword(line: str, keyword: str, allow_substitution: bool = False) -> bool:
    """Check that line begins with keyword as a whole token.

    ``source<(cmd)`` still counts as starting with ``source`` when
    allow_substitution is set.
    """
    if not line.startswith(keyword):
        return False
    rest = line[len(keyword):]
    if not rest or rest[0].isspace():
        return True
    return allow_substitution and rest.startswith("<(")


def _parse_source(line: str) -> SourceFile:
    parts = line.split()
    if len(parts) != 2:
        raise ArityError("source command expects exactly one argument")
    return SourceFile(path=parts[1])


def _parse_python_venv(line: str) -> PythonVenv:
    parts = line.split()
    if len(parts) == 1:
        path = DEFAULT_VENV_PATH
    elif len(parts) == 2:
        path = parts[1]
    else:
        raise ArityError("python_venv command expects zero or one argument")
    return PythonVenv(path=path)


def _parse_process_substitution(line: str) -> ProcessSubstitution:
    start = line.find("<(")
    end = line.rfind(")")

    if end <= start + 2:
        raise MalformedSubstitution("Empty process substitution command")

    command = line[start + 2:end].strip()
    if not command:
        raise MalformedSubstitution("Empty process substitution command")

    return ProcessSubstitution(command=command)
