"""
Tests for frontbuilder.core: logger output, command helpers and timing.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from frontbuilder.core.timing import TimingContext, format_duration, format_phase_timings
from frontbuilder.core.utils import Logger, echo_output, format_cmd, run_cmd


@pytest.mark.evergreen
class TestLogger:
    """Logger prefixes messages and honors the color switch."""

    def test_plain_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = Logger(use_color=False)

        logger.success("done")
        logger.error("broken")

        out = capsys.readouterr().out
        assert "  [OK] done" in out
        assert "  [ERROR] broken" in out
        assert "\033[" not in out

    def test_colored_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = Logger(use_color=True)

        logger.warning("careful")

        assert "\033[93m[WARN]\033[0m careful" in capsys.readouterr().out


@pytest.mark.evergreen
class TestCommandHelpers:
    """format_cmd, run_cmd and echo_output."""

    def test_format_cmd_quotes_arguments(self) -> None:
        assert format_cmd(["java", "-jar", "my tools/compiler.jar"]) == "java -jar 'my tools/compiler.jar'"

    def test_run_cmd_passes_options(self) -> None:
        with patch("subprocess.run", return_value=MagicMock(returncode=0)) as run:
            run_cmd(["java", "-version"], capture=True)

        run.assert_called_once_with(
            ["java", "-version"], cwd=None, capture_output=True, text=True, check=False,
        )

    def test_run_cmd_returns_failed_process(self, tmp_path) -> None:
        failed = MagicMock(returncode=3, stdout="", stderr="bad jar")

        with patch("subprocess.run", return_value=failed) as run:
            result = run_cmd(["java"], cwd=tmp_path)

        assert result is failed
        assert run.call_args.kwargs["cwd"] == tmp_path
        assert run.call_args.kwargs["check"] is False

    def test_run_cmd_propagates_missing_executable(self) -> None:
        with patch("subprocess.run", side_effect=FileNotFoundError("java")):
            with pytest.raises(FileNotFoundError):
                run_cmd(["java"])

    def test_echo_output_prints_each_line(self, capsys: pytest.CaptureFixture[str]) -> None:
        echo_output(MagicMock(stdout="one\ntwo\n", stderr="three\n"))

        lines = [line.strip() for line in capsys.readouterr().out.splitlines()]
        assert [line for line in lines if line] == ["one", "two", "three"]


@pytest.mark.evergreen
class TestTiming:
    """TimingContext and format_duration."""

    def test_records_duration(self) -> None:
        timings: dict[str, float] = {}

        with TimingContext(timings, "phase"):
            pass

        assert "phase" in timings
        assert timings["phase"] >= 0

    def test_records_on_error(self) -> None:
        timings: dict[str, float] = {}

        with pytest.raises(ValueError):
            with TimingContext(timings, "phase"):
                raise ValueError("boom")

        assert "phase" in timings

    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [(0.5, "0.5s"), (59.94, "59.9s"), (65.3, "1m 5.3s")],
    )
    def test_format_duration(self, seconds: float, expected: str) -> None:
        assert format_duration(seconds) == expected

    def test_phase_timings_are_aligned_in_run_order(self) -> None:
        lines = format_phase_timings({"load_manifest": 0.01, "build_style": 65.3})

        assert lines == ["load_manifest  0.0s", "build_style    1m 5.3s"]

    def test_phase_timings_empty(self) -> None:
        assert format_phase_timings({}) == []
