from __future__ import annotations

from pathlib import Path

import typer

from relcut.cli.commands._helpers import exit_release
from relcut.cli.context import build_context
from relcut.core.result import Err
from relcut.git.repository import Repository
from relcut.output.console import Style
from relcut.platform.terminal import is_interactive_terminal
from relcut.release.gh import GhChangelogSource
from relcut.release.pages import default_generators
from relcut.release.service import ReleaseCut, require_repo


def _prompt_version(proposed: str) -> str:
    return typer.prompt(
        f"Release version (Enter accepts {proposed})",
        default="",
        show_default=False,
    )


def cut(
    root: Path | None = typer.Option(None, "--root", help="Project root (default: cwd)"),
    config: Path | None = typer.Option(None, "--config", help="Path to relcut.toml"),
    repo: str | None = typer.Option(None, "--repo", help="Forge repository (owner/name)"),
) -> None:
    """Cut a release: bump version, update changelog and pages, branch, commit and tag."""
    ctx = build_context(root=root, config_path=config, repo=repo)
    cfg = ctx.config

    repo_slug = require_repo(cfg)
    if isinstance(repo_slug, Err):
        exit_release(repo_slug.error, console=ctx.console)

    release = ReleaseCut(
        config=cfg,
        vcs=Repository(cfg.root),
        notes_source=GhChangelogSource(
            root=cfg.root,
            repo=repo_slug.value,
            notes_config=cfg.forge.notes_config,
            placeholder_tag=cfg.forge.placeholder_tag,
            console=ctx.console,
        ),
        pages=default_generators(cfg, ctx.console),
        prompt=_prompt_version,
        console=ctx.console,
        is_interactive=is_interactive_terminal,
    )

    result = release.run()
    if isinstance(result, Err):
        aborted = result.error
        ctx.console.print(
            f"aborted before {aborted.target} (last completed: {aborted.reached})", Style.DIM
        )
        exit_release(aborted.error, console=ctx.console)
