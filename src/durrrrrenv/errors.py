"""Exception hierarchy for durrrrrenv.

Every failure the tool can hit derives from DurrrrrenvError so the CLI can
report it uniformly. A directory that has an environment file which is not
approved is not an error and has no exception here.
"""

from pathlib import Path
from typing import Optional

from durrrrrenv.codes import ParseErrorCode


class DurrrrrenvError(Exception):
    """Base class for all durrrrrenv failures."""


class StorageError(DurrrrrenvError):
    """Raised when the trust document cannot be read, parsed or written."""


class PathResolutionError(DurrrrrenvError):
    """Raised when a directory path cannot be canonicalized."""


class ParseError(DurrrrrenvError, ValueError):
    """Raised when a line of an environment file is not a valid directive.

    Attributes:
        reason: What is wrong with the line
        line_number: 1-based line number, set once the parser annotates the error
        line: Text of the offending line
    """

    code: ParseErrorCode = ParseErrorCode.INVALID_DIRECTIVE

    def __init__(self, reason: str, line_number: Optional[int] = None, line: Optional[str] = None):
        self.reason = reason
        self.line_number = line_number
        self.line = line
        if line_number is None:
            message = reason
        else:
            message = f"Failed to parse line {line_number}: {line}: {reason}"
        super().__init__(message)

    def at_line(self, line_number: int, line: str) -> "ParseError":
        """Return a copy of this error annotated with its position."""
        return type(self)(self.reason, line_number=line_number, line=line)


class ArityError(ParseError):
    """A directive was given the wrong number of arguments."""

    code = ParseErrorCode.ARITY


class MalformedSubstitution(ParseError):
    """A process substitution has an empty or unterminated body."""

    code = ParseErrorCode.MALFORMED_SUBSTITUTION


class UnrecognizedDirective(ParseError):
    """A line does not start with any known directive keyword."""

    code = ParseErrorCode.UNRECOGNIZED_DIRECTIVE


class CompileError(DurrrrrenvError):
    """Raised when directives cannot be turned into a shell script."""


class MissingActivateScript(CompileError):
    """A python_venv directive points at a directory without bin/activate."""

    def __init__(self, activate_path: Path):
        self.activate_path = activate_path
        super().__init__(f"Python venv activate script not found: {activate_path}")


class UnresolvablePath(CompileError):
    """A directive path could not be resolved (e.g. no home directory)."""


class EnvFileError(DurrrrrenvError):
    """Raised when the environment file is missing or unreadable."""
