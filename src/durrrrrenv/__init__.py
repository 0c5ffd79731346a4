"""durrrrrenv: trust-on-first-use per-directory environment loader."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("durrrrrenv")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
# Note: check/allow/deny/status live in durrrrrenv.api to keep the CLI
# module and the API functions from shadowing each other
from durrrrrenv.codes import ParseErrorCode
from durrrrrenv.errors import (
    ArityError,
    CompileError,
    DurrrrrenvError,
    EnvFileError,
    MalformedSubstitution,
    MissingActivateScript,
    ParseError,
    PathResolutionError,
    StorageError,
    UnrecognizedDirective,
    UnresolvablePath,
)
from durrrrrenv.kernel.compiler import compile_script
from durrrrrenv.kernel.directives import Directive, ProcessSubstitution, PythonVenv, SourceFile
from durrrrrenv.kernel.parser import parse
from durrrrrenv.kernel.trust import TrustRecord, TrustStore

__all__ = [
    "__version__",
    "parse",
    "compile_script",
    "TrustStore",
    "TrustRecord",
    "Directive",
    "SourceFile",
    "PythonVenv",
    "ProcessSubstitution",
    "ParseErrorCode",
    "DurrrrrenvError",
    "StorageError",
    "PathResolutionError",
    "ParseError",
    "ArityError",
    "MalformedSubstitution",
    "UnrecognizedDirective",
    "CompileError",
    "MissingActivateScript",
    "UnresolvablePath",
    "EnvFileError",
]
