"""Pytest configuration for tests.

No sys.path hacks - tests should import from installed durrrrrenv package.
Every test runs with the trust store redirected into its own tmp_path so the
real per-user config directory is never touched.
"""

import pytest

from durrrrrenv._internal.io.trust_backend import MemoryTrustBackend
from durrrrrenv.config import Settings

_ENV_VARS = (
    "DURRRRRENV_CONFIG_DIR",
    "DURRRRRENV_ENV_FILE",
    "DURRRRRENV_SEARCH_DEPTH",
    "DURRRRRENV_LOG_LEVEL",
    "XDG_CONFIG_HOME",
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the trust store at a per-test directory."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    config_dir = tmp_path / "config"
    monkeypatch.setenv("DURRRRRENV_CONFIG_DIR", str(config_dir))
    return config_dir


@pytest.fixture
def settings(isolated_config):
    return Settings(config_dir=isolated_config)


@pytest.fixture
def backend():
    return MemoryTrustBackend()


@pytest.fixture
def project(tmp_path):
    """A project directory with an empty workspace."""
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.fixture
def write_env(project):
    """Write a .local_environment file into the project directory."""
    def _write(content: str, directory=None):
        target = (directory or project) / ".local_environment"
        target.write_text(content, encoding="utf-8")
        return target
    return _write


@pytest.fixture
def make_venv():
    """Create a fake virtualenv with bin/activate under a directory."""
    def _make(root, name=".venv"):
        venv = root / name
        (venv / "bin").mkdir(parents=True)
        (venv / "bin" / "activate").write_text("# activate\n", encoding="utf-8")
        return venv
    return _make
