"""Unit tests for the scconf command-line interface."""

import json
from pathlib import Path
from typing import Any

import pytest
import structlog

from scconf import __main__ as cli
from scconf.__main__ import import_schema, main
from scconf.observability.logging import setup_logging

SCHEMA_MODULE = '''
SCHEMA = {
    "server": {
        "host": {"default": "localhost", "commandLineArg": "host"},
        "port": {"default": 8081, "envVar": "CLI_TEST_PORT", "envVarParser": int},
        "url": lambda scope: f"http://{scope['host']}:{scope['port']}",
    },
    "db": {
        "password": {"default": "hunter2"},
        "mode": {"default": "rw", "values": ["rw", "ro"], "commandLineArg": "mode"},
    },
}

BROKEN = {"url": lambda scope: scope["nowhere"]}
'''


@pytest.fixture(autouse=True)
def uncached_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep loggers from binding to a capture stream that outlives its test."""

    def _setup(**kwargs: Any) -> None:
        setup_logging(**kwargs)
        structlog.configure(cache_logger_on_first_use=False)

    monkeypatch.setattr(cli, "setup_logging", _setup)


@pytest.fixture
def schema_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    """Write an importable schema module and return its reference."""
    (tmp_path / "cli_schema_fixture.py").write_text(SCHEMA_MODULE)
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.delenv("CLI_TEST_PORT", raising=False)
    monkeypatch.delenv("SC_DEPLOY_CONFIG", raising=False)
    monkeypatch.setenv("SC_REDACT_SECRETS", "true")
    return "cli_schema_fixture:SCHEMA"


class TestImportSchema:
    """Tests for import_schema function."""

    def test_imports_attribute(self, schema_module: str) -> None:
        """module:attribute references resolve to the object."""
        schema = import_schema(schema_module)
        assert "server" in schema

    def test_rejects_malformed_reference(self) -> None:
        """References without a colon are rejected."""
        with pytest.raises(ValueError):
            import_schema("just_a_module")


class TestMain:
    """Tests for the main entry point."""

    def test_prints_resolved_json(
        self,
        schema_module: str,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """The resolved tree is printed as JSON with secrets redacted."""
        exit_code = main(["--cwd", str(tmp_path), schema_module, "--host", "example.com"])

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["server"] == {
            "host": "example.com",
            "port": 8081,
            "url": "http://example.com:8081",
        }
        assert output["db"]["password"] == "[REDACTED]"

    def test_show_secrets(
        self,
        schema_module: str,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """--show-secrets prints secrets verbatim."""
        exit_code = main(["--show-secrets", "--cwd", str(tmp_path), schema_module])

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["db"]["password"] == "hunter2"

    def test_explain_lists_sources(
        self,
        schema_module: str,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """--explain appends one line per property with its source."""
        exit_code = main(["--explain", "--cwd", str(tmp_path), schema_module, "--mode", "ro"])

        assert exit_code == 0
        out = capsys.readouterr().out
        lines = out.splitlines()
        assert any(line.startswith("db.mode") and line.endswith("command_line") for line in lines)
        assert any(line.startswith("server.url") and line.endswith("computed") for line in lines)

    def test_deploy_config_flag(
        self,
        schema_module: str,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """--dc after the schema reference is passed to the application."""
        (tmp_path / "deploy.json").write_text(json.dumps({"server": {"port": 9443}}))

        exit_code = main(["--cwd", str(tmp_path), schema_module, "--dc", "deploy.json"])

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["server"]["port"] == 9443

    def test_resolution_error_exit_code(self, schema_module: str, tmp_path: Path) -> None:
        """Resolution errors exit with status 1."""
        assert main(["--cwd", str(tmp_path), schema_module, "--mode", "rwx"]) == 1

    def test_computed_failure_exit_code(self, schema_module: str, tmp_path: Path) -> None:
        """A failing computed property exits with status 1, not a traceback."""
        broken = schema_module.replace(":SCHEMA", ":BROKEN")
        assert main(["--cwd", str(tmp_path), broken]) == 1

    def test_import_error_exit_code(self, tmp_path: Path) -> None:
        """Unimportable schemas exit with status 2."""
        assert main(["--cwd", str(tmp_path), "no_such_module_xyz:SCHEMA"]) == 2
