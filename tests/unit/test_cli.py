"""Unit tests for the CLI entrypoint."""

from __future__ import annotations

import io
from pathlib import Path
from unittest.mock import patch

import pytest

from event_scheduler.__main__ import main
from event_scheduler.models import CalendarLink
from event_scheduler.pipeline import PipelineResult


def _ok_result() -> PipelineResult:
    return PipelineResult(
        page_url="",
        model="gpt-4o",
        mode="newTab",
        artifact=CalendarLink(url="https://www.google.com/calendar/render?action=TEMPLATE"),
    )


def _failed_result() -> PipelineResult:
    return PipelineResult(page_url="", model="gpt-4o", mode="newTab", error=RuntimeError("x"))


class TestCLI:
    """Unit tests for ``event_scheduler.__main__.main``."""

    def test_text_argument_runs_pipeline(self, monkeypatch_env: dict[str, str]) -> None:
        with patch("event_scheduler.__main__.run_pipeline", return_value=_ok_result()) as mock_run:
            exit_code = main(["Lunch Friday", "--page-url", "https://example.com", "--print-only"])

        assert exit_code == 0
        kwargs = mock_run.call_args.kwargs
        assert kwargs["selected_text"] == "Lunch Friday"
        assert kwargs["page_url"] == "https://example.com"
        assert kwargs["settings"].model == "gpt-4o"

    def test_reads_stdin_when_no_text(
        self, monkeypatch_env: dict[str, str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("Dinner at 7\n"))

        with patch("event_scheduler.__main__.run_pipeline", return_value=_ok_result()) as mock_run:
            exit_code = main([])

        assert exit_code == 0
        assert mock_run.call_args.kwargs["selected_text"] == "Dinner at 7\n"

    def test_empty_text_is_error(
        self,
        monkeypatch_env: dict[str, str],
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("   "))

        with patch("event_scheduler.__main__.run_pipeline") as mock_run:
            exit_code = main([])

        assert exit_code == 1
        mock_run.assert_not_called()
        assert "no text" in capsys.readouterr().err

    def test_model_and_mode_overrides(
        self, monkeypatch_env: dict[str, str], tmp_path: Path
    ) -> None:
        with patch("event_scheduler.__main__.run_pipeline", return_value=_ok_result()) as mock_run:
            main(
                [
                    "x",
                    "--model",
                    "gemini-pro",
                    "--mode",
                    "ical",
                    "--output-dir",
                    str(tmp_path),
                ]
            )

        settings = mock_run.call_args.kwargs["settings"]
        assert settings.model == "gemini-pro"
        assert settings.mode == "ical"
        assert settings.output_dir == str(tmp_path)
        assert settings.api_key == "sk-test-key-12345"

    def test_unknown_model_rejected_by_argparse(
        self, monkeypatch_env: dict[str, str], capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["x", "--model", "gpt-5"])

        assert exc_info.value.code == 2
        assert "invalid choice" in capsys.readouterr().err

    def test_pipeline_failure_exit_code(self, monkeypatch_env: dict[str, str]) -> None:
        with patch("event_scheduler.__main__.run_pipeline", return_value=_failed_result()):
            assert main(["x"]) == 1

    def test_config_error_exit_code(
        self,
        clean_env: None,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("EVENT_SCHEDULER_TIMEOUT", "soon")

        assert main(["x"]) == 1
        assert "EVENT_SCHEDULER_TIMEOUT" in capsys.readouterr().err

    def test_missing_key_end_to_end(
        self, clean_env: None, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """No key configured: the pipeline notifies and no request is sent."""
        with patch("event_scheduler.pipeline.HttpTransport") as mock_transport:
            mock_transport.return_value.__enter__.return_value = mock_transport.return_value
            mock_transport.return_value.__exit__.return_value = False
            exit_code = main(["Lunch", "--print-only"])

        assert exit_code == 1
        mock_transport.return_value.send.assert_not_called()
        assert "API key is not set" in capsys.readouterr().err

    def test_verbose_sets_debug(self, monkeypatch_env: dict[str, str]) -> None:
        with (
            patch("event_scheduler.__main__.run_pipeline", return_value=_ok_result()),
            patch("event_scheduler.__main__.setup_logging") as mock_setup,
        ):
            main(["x", "-v"])

        mock_setup.assert_called_once_with("DEBUG")
