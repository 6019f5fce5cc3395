from __future__ import annotations

from pathlib import Path
from typing import get_args

import pytest
import typer
from typer.testing import CliRunner

from relcut import __version__
from relcut.cli.app import app
from relcut.cli.commands import _helpers
from relcut.cli.context import CLIContext
from relcut.core.config import ForgeConfig, ReleaseConfig
from relcut.core.errors import ErrorCode
from relcut.core.result import Err
from relcut.output.console import MockConsole
from relcut.release.errors import ReleaseError, ReleaseErrorKind
from relcut.release.pipeline import Aborted, Stage

from ..release._fakes import FakeVcs, write_project


def _ctx(tmp_path: Path, *, repo: str | None = "example/app") -> CLIContext:
    return CLIContext(
        config=ReleaseConfig(root=tmp_path, forge=ForgeConfig(repo=repo)),
        console=MockConsole(),
    )


def test_every_error_kind_has_an_exit_code() -> None:
    for kind in get_args(ReleaseErrorKind):
        assert kind in _helpers._KIND_CODES  # pyright: ignore[reportPrivateUsage]


def test_exit_release_prints_hint_and_exits() -> None:
    console = MockConsole()
    with pytest.raises(typer.Exit) as exc:
        _helpers.exit_release(
            ReleaseError(kind="forge_failed", message="notes failed", hint="HTTP 502"),
            console=console,
        )
    assert exc.value.exit_code == int(ErrorCode.NETWORK_ERROR)
    assert console.messages == ["error: notes failed", "hint: HTTP 502"]


def test_cut_without_repo_is_user_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import relcut.cli.commands.cut as cut_cmd

    monkeypatch.setattr(cut_cmd, "build_context", lambda **_: _ctx(tmp_path, repo=None))

    with pytest.raises(typer.Exit) as exc:
        cut_cmd.cut(root=None, config=None, repo=None)

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)


def test_cut_maps_aborted_run_to_exit_code(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import relcut.cli.commands.cut as cut_cmd

    ctx = _ctx(tmp_path)
    monkeypatch.setattr(cut_cmd, "build_context", lambda **_: ctx)

    class FakeReleaseCut:
        def __init__(self, **_: object) -> None:
            pass

        def run(self):
            return Err(
                Aborted(
                    reached=Stage.INIT,
                    target=Stage.PRECONDITIONS_OK,
                    error=ReleaseError(kind="dirty_tree", message="working tree is dirty"),
                )
            )

    monkeypatch.setattr(cut_cmd, "ReleaseCut", FakeReleaseCut)

    with pytest.raises(typer.Exit) as exc:
        cut_cmd.cut(root=None, config=None, repo=None)

    assert exc.value.exit_code == int(ErrorCode.ENV_ERROR)
    assert isinstance(ctx.console, MockConsole)
    assert ctx.console.find("aborted before preconditions_ok")


def test_plan_prints_section(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import relcut.cli.commands.plan as plan_cmd

    write_project(tmp_path)
    ctx = _ctx(tmp_path)
    monkeypatch.setattr(plan_cmd, "build_context", lambda **_: ctx)
    monkeypatch.setattr(plan_cmd, "Repository", lambda root: FakeVcs())

    plan_cmd.plan(root=None, config=None, repo=None, no_fetch=True)

    assert isinstance(ctx.console, MockConsole)
    assert "branch: next-release-2.0.2" in ctx.console.messages
    assert ctx.console.stdout_lines[0].startswith("## [2.0.2] - ")


def test_version_flag() -> None:
    result = CliRunner().invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.stdout.strip() == __version__


def test_invalid_config_exits(tmp_path: Path) -> None:
    (tmp_path / "relcut.toml").write_text("[forge\n", encoding="utf-8")

    result = CliRunner().invoke(app, ["plan", "--root", str(tmp_path), "--no-fetch"])

    assert result.exit_code == int(ErrorCode.USER_ERROR)
