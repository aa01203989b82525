"""Unit tests for the cache-demo CLI (cachedemo.cli.demo)."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
import structlog.testing

from cachedemo.cli.demo import (
    EXIT_CONFIG_ERROR,
    EXIT_OK,
    EXIT_STEP_ERROR,
    _format_text_output,
    build_parser,
    main,
)
from cachedemo.models.outcomes import OutcomeTag
from cachedemo.models.scenario import ScenarioReport, StepRecord


@pytest.fixture(autouse=True)
def _isolate(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):  # noqa: ANN202
    """Run from an empty directory with no cache env vars.

    Log output is captured rather than printed so stdout holds only the report.
    """
    for var in (
        "MOMENTO_API_KEY",
        "CACHE_NAME",
        "CACHE_BACKEND",
        "DEFAULT_TTL_SECONDS",
        "MEMORY_CACHE_MAX_ENTRIES",
        "APP_ENV",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    with patch("cachedemo.cli.demo.configure_logging"), structlog.testing.capture_logs():
        yield


class TestParser:
    def test_defaults(self) -> None:
        args = build_parser().parse_args([])
        assert args.backend is None
        assert args.scenario is None
        assert args.json is False

    def test_repeatable_scenario(self) -> None:
        args = build_parser().parse_args(["--scenario", "pop", "--scenario", "push"])
        assert args.scenario == ["pop", "push"]

    def test_rejects_unknown_backend(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--backend", "redis"])


class TestMain:
    def test_memory_backend_runs_all_scenarios(self, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code = main(["--backend", "memory"])
        out = capsys.readouterr().out
        assert exit_code == EXIT_OK
        for name in ("scalar", "concatenate", "pop", "push", "remove"):
            assert name in out
        assert "Final list: ['g', 'h', 'i', 'a', 'b', 'c', 'd', 'e', 'f']" in out

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code = main(["--backend", "memory", "--scenario", "push", "--json"])
        payload = json.loads(capsys.readouterr().out)
        assert exit_code == EXIT_OK
        assert payload["succeeded"] is True
        [scenario] = payload["scenarios"]
        assert scenario["name"] == "push"
        assert scenario["final_list"] == ["e", "a", "b", "c", "d"]
        assert scenario["steps"][1]["summary"] == "list_length=4"

    def test_missing_credential_exits_with_config_error(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        exit_code = main(["--backend", "momento"])
        assert exit_code == EXIT_CONFIG_ERROR
        assert "MOMENTO_API_KEY" in capsys.readouterr().err

    def test_config_file_namespace_used(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        config = tmp_path / "cfg.yaml"
        config.write_text("cache:\n  backend: memory\n  namespace: from-file\n", encoding="utf-8")
        with structlog.testing.capture_logs() as logs:
            exit_code = main(["--config", str(config), "--scenario", "scalar"])
        assert exit_code == EXIT_OK
        assert "Hello_world" in capsys.readouterr().out
        [built] = [log for log in logs if log["event"] == "cache_client_built"]
        assert built["namespace"] == "from-file"
        assert built["backend"] == "memory"

    def test_step_error_sets_exit_code(self) -> None:
        failing = ScenarioReport(
            name="scalar",
            steps=[StepRecord(operation="get", tag=OutcomeTag.ERROR, summary="boom")],
        )

        async def _fake_run(client, names):  # noqa: ANN001, ANN202
            return [failing]

        with patch("cachedemo.cli.demo.run_scenarios", _fake_run):
            assert main(["--backend", "memory"]) == EXIT_STEP_ERROR


class TestTextFormatting:
    def test_marks_failed_scenarios(self) -> None:
        report = ScenarioReport(
            name="remove",
            steps=[
                StepRecord(operation="list_remove_value", tag=OutcomeTag.SUCCESS, summary="ok"),
                StepRecord(operation="list_fetch", tag=OutcomeTag.ERROR, summary="TIMEOUT_ERROR: x"),
            ],
        )
        text = _format_text_output([report])
        assert "remove  [FAILED]" in text
        assert "TIMEOUT_ERROR: x" in text
        assert "Final list" not in text


class TestLoggingSetup:
    def test_log_level_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        with patch("cachedemo.cli.demo.configure_logging") as configure:
            main(["--backend", "memory", "--scenario", "scalar"])
        assert configure.call_args.kwargs["log_level"] == "DEBUG"

    def test_log_level_from_config_file(self, tmp_path: Path) -> None:
        config = tmp_path / "cfg.yaml"
        config.write_text("logging:\n  level: ERROR\n", encoding="utf-8")
        with patch("cachedemo.cli.demo.configure_logging") as configure:
            main(["--config", str(config), "--backend", "memory", "--scenario", "scalar"])
        assert configure.call_args.kwargs["log_level"] == "ERROR"

    def test_flag_overrides_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        with patch("cachedemo.cli.demo.configure_logging") as configure:
            main(["--backend", "memory", "--scenario", "scalar", "--log-level", "WARNING"])
        assert configure.call_args.kwargs["log_level"] == "WARNING"

    def test_quiet_wins_over_configured_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        with patch("cachedemo.cli.demo.configure_logging") as configure:
            main(["--backend", "memory", "--scenario", "scalar", "--quiet"])
        assert configure.call_args.kwargs["log_level"] == "WARNING"

    @pytest.mark.parametrize(("app_env", "expected"), [("production", True), ("development", False)])
    def test_app_env_selects_renderer(
        self, monkeypatch: pytest.MonkeyPatch, app_env: str, expected: bool
    ) -> None:
        monkeypatch.setenv("APP_ENV", app_env)
        with patch("cachedemo.cli.demo.configure_logging") as configure:
            main(["--backend", "memory", "--scenario", "scalar"])
        assert configure.call_args.kwargs["json_output"] is expected


class TestInvalidConfiguration:
    def test_malformed_environment_value(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("DEFAULT_TTL_SECONDS", "abc")
        assert main(["--backend", "memory"]) == EXIT_CONFIG_ERROR
        assert "default_ttl_seconds" in capsys.readouterr().err

    def test_malformed_max_entries_in_config_file(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        config = tmp_path / "cfg.yaml"
        config.write_text("cache:\n  memory_max_entries: lots\n", encoding="utf-8")
        assert main(["--config", str(config), "--backend", "memory"]) == EXIT_CONFIG_ERROR
        assert "memory_max_entries" in capsys.readouterr().err
