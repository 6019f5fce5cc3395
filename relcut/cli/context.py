from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from relcut.core.config import ReleaseConfig, load_config, load_config_or_default
from relcut.core.errors import ErrorCode
from relcut.core.result import Err
from relcut.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: ReleaseConfig
    console: ConsoleProtocol


def build_context(
    *,
    root: Path | None = None,
    config_path: Path | None = None,
    repo: str | None = None,
) -> CLIContext:
    """Resolve the project root and load the configuration once."""
    try:
        project_root = (root or Path.cwd()).expanduser().resolve()
    except OSError as e:
        typer.echo(f"error: invalid --root: {e}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    if not project_root.is_dir():
        typer.echo(f"error: project root is not a directory: {project_root}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    if config_path is not None:
        loaded = load_config(config_path, root=project_root)
    else:
        loaded = load_config_or_default(project_root)

    if isinstance(loaded, Err):
        typer.echo(f"error: {loaded.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    return CLIContext(config=loaded.value.with_repo(repo), console=RichConsole())
