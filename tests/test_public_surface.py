"""Test public API surface - ensure imports work and the error hierarchy holds."""

import durrrrrenv
from durrrrrenv import api


def test_root_exports():
    for name in durrrrrenv.__all__:
        assert hasattr(durrrrrenv, name), name


def test_version():
    assert isinstance(durrrrrenv.__version__, str)


def test_api_exports_operations():
    for name in ("check", "allow", "deny", "status"):
        assert callable(getattr(api, name))


def test_error_hierarchy():
    assert issubclass(durrrrrenv.StorageError, durrrrrenv.DurrrrrenvError)
    assert issubclass(durrrrrenv.PathResolutionError, durrrrrenv.DurrrrrenvError)
    assert issubclass(durrrrrenv.ArityError, durrrrrenv.ParseError)
    assert issubclass(durrrrrenv.MalformedSubstitution, durrrrrenv.ParseError)
    assert issubclass(durrrrrenv.UnrecognizedDirective, durrrrrenv.ParseError)
    assert issubclass(durrrrrenv.MissingActivateScript, durrrrrenv.CompileError)
    assert issubclass(durrrrrenv.UnresolvablePath, durrrrrenv.CompileError)
    assert issubclass(durrrrrenv.ParseError, durrrrrenv.DurrrrrenvError)


def test_parse_then_compile_round_trip(tmp_path):
    directives = durrrrrenv.parse("source <(west completion zsh)\n")
    assert durrrrrenv.compile_script(directives, tmp_path) == "source <(west completion zsh)\n"


def test_directive_discriminator():
    from pydantic import TypeAdapter

    adapter = TypeAdapter(durrrrrenv.Directive)
    directive = adapter.validate_python({"kind": "python_venv", "path": "env"})
    assert directive == durrrrrenv.PythonVenv(path="env")
