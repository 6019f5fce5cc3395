from __future__ import annotations

from datetime import date
from pathlib import Path

import typer

from relcut.cli.commands._helpers import exit_release
from relcut.cli.context import build_context
from relcut.core.result import Err
from relcut.git.repository import Repository
from relcut.output.console import Style
from relcut.release.gh import GhChangelogSource
from relcut.release.service import plan_release, require_repo


def plan(
    root: Path | None = typer.Option(None, "--root", help="Project root (default: cwd)"),
    config: Path | None = typer.Option(None, "--config", help="Path to relcut.toml"),
    repo: str | None = typer.Option(None, "--repo", help="Forge repository (owner/name)"),
    no_fetch: bool = typer.Option(
        False, "--no-fetch", help="Skip the forge call (proposes a patch bump)"
    ),
) -> None:
    """Preview the next release (no side effects, no prompt)."""
    ctx = build_context(root=root, config_path=config, repo=repo)
    cfg = ctx.config
    console = ctx.console

    repo_slug = require_repo(cfg)
    if isinstance(repo_slug, Err):
        exit_release(repo_slug.error, console=console)

    notes_source = None
    if not no_fetch:
        notes_source = GhChangelogSource(
            root=cfg.root,
            repo=repo_slug.value,
            notes_config=cfg.forge.notes_config,
            placeholder_tag=cfg.forge.placeholder_tag,
            console=console,
        )

    planned = plan_release(
        config=cfg,
        vcs=Repository(cfg.root),
        notes_source=notes_source,
        today=date.today(),
    )
    if isinstance(planned, Err):
        exit_release(planned.error, console=console)
    p = planned.value

    console.header("Release Plan")
    console.print(f"current: {p.previous.version} (code {p.previous.version_code})")
    console.print(f"proposed: {p.proposed.version} (code {p.previous.version_code + 1})")
    console.print(f"branch: {p.proposed.branch}")
    console.print(f"tag: {p.proposed.tag}")
    console.print("files:")
    for rel in p.files:
        console.print(f"- {rel}")

    for warning in p.warnings:
        console.warning(warning)

    console.header("Changelog section")
    console.emit(p.section.render())

    console.newline()
    console.print("Run: relcut cut", Style.DIM)
