"""Tests for the high-level check/allow/deny/status API."""

import pytest

from durrrrrenv import api
from durrrrrenv.errors import EnvFileError, MissingActivateScript, ParseError
from durrrrrenv.kernel.trust import TrustStore


class TestCheck:
    def test_absent(self, project, backend, settings):
        result = api.check(project, backend, settings)
        assert result.status == "absent"
        assert result.script == ""
        assert backend.writes == 0

    def test_unauthorized_returns_content_but_no_script(self, project, backend, settings, write_env):
        write_env("source env.sh\n")
        result = api.check(project, backend, settings)
        assert result.status == "unauthorized"
        assert result.content == "source env.sh\n"
        assert result.script == ""

    def test_authorized(self, project, backend, settings, write_env):
        write_env("source env.sh\n")
        TrustStore.load(backend).approve(project, "source env.sh\n")
        result = api.check(project, backend, settings)
        assert result.status == "authorized"
        assert result.script == f"source '{project / 'env.sh'}'\n"

    def test_edit_after_approval_revokes(self, project, backend, settings, write_env):
        write_env("source env.sh\n")
        api.allow(project, backend, settings)
        write_env("source evil.sh\n")
        assert api.check(project, backend, settings).status == "unauthorized"

    @pytest.mark.parametrize("approved, edited", [
        (b"source env.sh\nsource other.sh\n", b"source env.sh\r\nsource other.sh\r\n"),
        (b"source env.sh\n", b"source env.sh\r"),
        (b"source env.sh\r\n", b"source env.sh\n"),
    ])
    def test_line_ending_edit_revokes(self, project, backend, settings, approved, edited):
        env_file = project / ".local_environment"
        env_file.write_bytes(approved)
        api.allow(project, backend, settings)
        assert api.check(project, backend, settings).status == "authorized"

        env_file.write_bytes(edited)
        assert api.check(project, backend, settings).status == "unauthorized"

    def test_content_read_byte_for_byte(self, project):
        env_file = project / ".local_environment"
        env_file.write_bytes(b"source a.sh\r\n# note\rsource b.sh\n")
        assert api.read_env_file(env_file) == "source a.sh\r\n# note\rsource b.sh\n"

    def test_unauthorized_invalid_file_is_not_parsed(self, project, backend, settings, write_env):
        write_env("rm -rf /\n")
        assert api.check(project, backend, settings).status == "unauthorized"

    def test_found_from_subdirectory(self, project, backend, settings, write_env):
        write_env("source env.sh\n")
        api.allow(project, backend, settings)
        sub = project / "src" / "pkg"
        sub.mkdir(parents=True)
        result = api.check(sub, backend, settings)
        assert result.status == "authorized"
        assert result.directory == project
        # Paths resolve against the directory holding the file
        assert result.script == f"source '{project / 'env.sh'}'\n"


class TestAllow:
    def test_allow_compiles_script(self, project, backend, settings, write_env, make_venv):
        make_venv(project)
        write_env("python_venv\nsource <(west completion zsh)\n")
        result = api.allow(project, backend, settings)
        assert result.directory == project
        assert result.script.splitlines() == [
            f"source '{project / '.venv' / 'bin' / 'activate'}'",
            "source <(west completion zsh)",
        ]
        assert result.record.file_hash

    def test_missing_file(self, project, backend, settings):
        with pytest.raises(EnvFileError, match="No .local_environment file found"):
            api.allow(project, backend, settings)

    def test_invalid_file_not_approved(self, project, backend, settings, write_env):
        write_env("source a b\n")
        with pytest.raises(ParseError):
            api.allow(project, backend, settings)
        assert backend.writes == 0

    def test_reviewed_content_is_what_gets_approved(self, project, backend, settings, write_env):
        write_env("source reviewed.sh\n")
        api.allow(project, backend, settings, content="source reviewed.sh\n")
        write_env("source swapped.sh\n")
        assert api.check(project, backend, settings).status == "unauthorized"

    def test_missing_venv_still_records_approval(self, project, backend, settings, write_env):
        write_env("python_venv\n")
        with pytest.raises(MissingActivateScript):
            api.allow(project, backend, settings)
        assert TrustStore.load(backend).is_authorized(project, "python_venv\n")


class TestDeny:
    def test_deny_revokes(self, project, backend, settings, write_env):
        write_env("source env.sh\n")
        api.allow(project, backend, settings)
        assert api.deny(project, backend, settings) is True
        assert api.check(project, backend, settings).status == "unauthorized"

    def test_deny_without_approval(self, project, backend, settings):
        assert api.deny(project, backend, settings) is False


class TestStatus:
    def test_no_file(self, project, backend, settings):
        result = api.status(project, backend, settings)
        assert result.env_file is None
        assert result.allowed is False

    def test_not_allowed(self, project, backend, settings, write_env):
        write_env("source env.sh\n")
        result = api.status(project, backend, settings)
        assert result.env_file == project / ".local_environment"
        assert result.allowed is False
        assert result.directives == []

    def test_allowed_lists_directives(self, project, backend, settings, write_env):
        write_env("source ~/.bashrc\npython_venv\n")
        TrustStore.load(backend).approve(project, "source ~/.bashrc\npython_venv\n")
        result = api.status(project, backend, settings)
        assert result.allowed is True
        assert result.directives == ["source ~/.bashrc", "python_venv .venv"]
        assert result.record is not None

    def test_allowed_but_unparseable(self, project, backend, settings, write_env):
        write_env("bogus\n")
        TrustStore.load(backend).approve(project, "bogus\n")
        result = api.status(project, backend, settings)
        assert result.allowed is True
        assert "line 1" in result.parse_error
