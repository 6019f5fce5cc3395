"""Tests for relcut.output.console module."""

from __future__ import annotations

import pytest

from relcut.output.console import MockConsole, RichConsole, Style


class TestMockConsole:
    def test_severity_prefixes(self) -> None:
        console = MockConsole()
        console.success("done")
        console.error("failed")
        console.warning("careful")
        console.info("note")

        assert console.messages == ["OK done", "error: failed", "warning: careful", "info: note"]
        assert console.has_error()

    def test_emit_is_stdout(self) -> None:
        console = MockConsole()
        console.print("log line", Style.DIM)
        console.emit("git push origin 2.0.2")

        assert console.stdout_lines == ["git push origin 2.0.2"]
        assert console.text == "log line\ngit push origin 2.0.2"

    def test_find(self) -> None:
        console = MockConsole()
        console.header("Commit")
        console.newline()
        assert [o.style for o in console.find("Commit")] == [Style.HEADER]


class TestRichConsole:
    def test_logs_to_stderr_and_emits_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.error("bad [thing]")
        console.emit("git push -u origin next-release-2.0.2")

        captured = capsys.readouterr()
        assert "error:" in captured.err
        assert "bad [thing]" in captured.err
        assert captured.out.strip() == "git push -u origin next-release-2.0.2"
