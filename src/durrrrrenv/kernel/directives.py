"""Pydantic models for parsed environment directives."""

from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class SourceFile(BaseModel):
    """Source a shell file: ``source <path>``."""
    kind: Literal["source"] = "source"
    path: str

    model_config = ConfigDict(extra="forbid", frozen=True)


class PythonVenv(BaseModel):
    """Activate a Python virtual environment: ``python_venv [path]``."""
    kind: Literal["python_venv"] = "python_venv"
    path: str = ".venv"

    model_config = ConfigDict(extra="forbid", frozen=True)


class ProcessSubstitution(BaseModel):
    """Source the output of a command: ``source <(command)``.

    The command text is opaque; it is replayed verbatim by the caller's shell.
    """
    kind: Literal["process_substitution"] = "process_substitution"
    command: str

    model_config = ConfigDict(extra="forbid", frozen=True)


Directive = Annotated[Union[SourceFile, PythonVenv, ProcessSubstitution], Field(discriminator="kind")]

DirectiveList = List[Directive]


def describe(directive: Directive) -> str:
    """Render a directive for human-facing output."""
    if isinstance(directive, SourceFile):
        return f"source {directive.path}"
    if isinstance(directive, PythonVenv):
        return f"python_venv {directive.path}"
    if isinstance(directive, ProcessSubstitution):
        return f"source <({directive.command})"
    raise TypeError(f"Unknown directive type: {type(directive).__name__}")
