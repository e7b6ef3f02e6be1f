"""Tests for the CLI entry point."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from codeguide.cli import main
from codeguide.repository.config import dump_rules
from codeguide.rules.models import Rule


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    for name in ("CODEGUIDE_CONFIG", "CODEGUIDE_REPOSITORY_TYPE", "CODEGUIDE_PORT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_file(tmp_path: Path, sample_rules: list[Rule]) -> Path:
    path = tmp_path / "codeguide.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "repository": {"type": "static", "rules": dump_rules(sample_rules)},
                "guidelines": {"python": ["api"]},
            }
        )
    )
    return path


@pytest.fixture
def vector_config_file(tmp_path: Path, sample_rules: list[Rule]) -> Path:
    path = tmp_path / "vector.json"
    repository = {"type": "vector", "dimensions": 32, "rules": dump_rules(sample_rules)}
    path.write_text(json.dumps({"repository": repository}))
    return path


def _run(*argv: str) -> None:
    with patch("sys.argv", ["codeguide", *argv]):
        main()


class TestTopLevel:
    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]):
        with pytest.raises(SystemExit) as exc_info:
            _run()
        assert exc_info.value.code == 1
        assert "usage:" in capsys.readouterr().out

    def test_version(self, capsys: pytest.CaptureFixture[str]):
        with pytest.raises(SystemExit) as exc_info:
            _run("-V")
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.startswith("codeguide ")

    def test_bad_config_exits_with_error(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ):
        path = tmp_path / "broken.yaml"
        path.write_text("rules: [unclosed")
        with pytest.raises(SystemExit) as exc_info:
            _run("--config", str(path), "rules")
        assert exc_info.value.code == 1
        assert "failed to parse" in capsys.readouterr().err

    def test_log_file_written(self, config_file: Path, tmp_path: Path):
        log_file = tmp_path / "cli.log"
        _run(
            "--config", str(config_file),
            "--log-level", "debug",
            "--log-file", str(log_file),
            "rules", "--categories", "code",
        )
        assert log_file.exists()
        assert log_file.read_text()


class TestRulesCommand:
    def test_prints_formatted_rules(self, config_file: Path, capsys: pytest.CaptureFixture[str]):
        _run("--config", str(config_file), "rules", "--categories", "testing")
        out = capsys.readouterr().out
        assert "Table-driven tests" in out
        assert "\n---\n" in out

    def test_keyword_and_language_filters(
        self, config_file: Path, capsys: pytest.CaptureFixture[str]
    ):
        _run(
            "--config", str(config_file),
            "rules", "--categories", "testing", "--keywords", "go", "--language", "go",
        )
        out = capsys.readouterr().out
        assert "Table-driven tests" in out
        assert "Plain pytest" not in out

    def test_markdown(self, config_file: Path, capsys: pytest.CaptureFixture[str]):
        _run("--config", str(config_file), "rules", "--categories", "code", "--markdown")
        out = capsys.readouterr().out
        assert out.startswith("# Code Style Rules")
        assert "## short_functions" in out

    def test_no_match(self, config_file: Path, capsys: pytest.CaptureFixture[str]):
        _run("--config", str(config_file), "rules", "--categories", "missing")
        assert "No matching rules" in capsys.readouterr().err


class TestValidateCommand:
    def test_valid_file(
        self, config_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ):
        source = tmp_path / "good.py"
        source.write_text('def f():\n    """Doc."""\n')
        _run("--config", str(config_file), "validate", str(source), "--context", "function")
        assert "ok" in capsys.readouterr().out

    def test_invalid_file_exits_1(
        self, config_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ):
        source = tmp_path / "bad.py"
        source.write_text('def f():\n    print("x")\n')
        with pytest.raises(SystemExit) as exc_info:
            _run("--config", str(config_file), "validate", str(source), "--context", "function")
        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert "- no print calls" in captured.out
        assert "invalid" in captured.err

    def test_missing_file(self, config_file: Path, tmp_path: Path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            _run(
                "--config", str(config_file),
                "validate", str(tmp_path / "nope.py"), "--context", "function",
            )
        assert exc_info.value.code == 1
        assert "not found" in capsys.readouterr().err


class TestSearchCommand:
    def test_static_backend_unsupported(
        self, config_file: Path, capsys: pytest.CaptureFixture[str]
    ):
        with pytest.raises(SystemExit) as exc_info:
            _run("--config", str(config_file), "search", "tests")
        assert exc_info.value.code == 1
        assert "does not support similarity search" in capsys.readouterr().err

    def test_vector_backend(
        self, vector_config_file: Path, capsys: pytest.CaptureFixture[str]
    ):
        _run(
            "--config", str(vector_config_file),
            "search", "short_functions Keep functions short", "--limit", "1",
        )
        out = capsys.readouterr().out
        assert out.startswith("1. [code] short_functions: Keep functions short")


class TestServeCommands:
    def test_serve_passes_port_override(self, config_file: Path):
        with patch("codeguide.server.runner.run_server") as run_server:
            _run("--config", str(config_file), "serve", "--port", "9999")
        config = run_server.call_args.args[0]
        assert config.server.port == 9999

    def test_mcp_serve_builds_services(self, config_file: Path):
        with patch("codeguide.mcp_server.server.main") as mcp_main:
            _run("--config", str(config_file), "mcp-serve")
        services = mcp_main.call_args.args[0]
        assert services.guidelines.languages() == ["go", "python"]

    def test_rpc_serve_runs_line_server(self, config_file: Path):
        with patch("codeguide.rpc.server.JsonLineServer") as server_cls:
            _run("--config", str(config_file), "rpc-serve")
        server_cls.return_value.run.assert_called_once()
