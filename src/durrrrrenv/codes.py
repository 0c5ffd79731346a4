"""Error code constants for directive parsing.

These constants prevent stringly-typed error codes and let callers
branch on the kind of parse failure without matching on messages.
"""

from enum import Enum


class ParseErrorCode(str, Enum):
    """Directive parse failure codes."""

    INVALID_DIRECTIVE = "INVALID_DIRECTIVE"
    ARITY = "ARITY"
    MALFORMED_SUBSTITUTION = "MALFORMED_SUBSTITUTION"
    UNRECOGNIZED_DIRECTIVE = "UNRECOGNIZED_DIRECTIVE"
