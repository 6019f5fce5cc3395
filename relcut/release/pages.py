from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relcut.core.config import ReleaseConfig
from relcut.core.result import Err, Ok, Result
from relcut.output.console import ConsoleProtocol, Style
from relcut.platform.process import run_live
from relcut.release.collaborators import PageGenerator
from relcut.release.errors import ReleaseError


@dataclass(frozen=True, slots=True)
class CommandPageGenerator:
    """Runs an external generator that rewrites its output files in place."""

    name: str
    command: tuple[str, ...]
    root: Path
    console: ConsoleProtocol

    def generate(self) -> Result[None, ReleaseError]:
        self.console.print(" ".join(self.command), Style.DIM)
        result = run_live(list(self.command), cwd=self.root)
        if isinstance(result, Err):
            e = result.error
            return Err(
                ReleaseError(
                    kind="page_failed",
                    message=f"{self.name} generator failed (exit {e.returncode})",
                    hint=e.detail() or " ".join(self.command),
                )
            )
        return Ok(None)


def default_generators(
    config: ReleaseConfig, console: ConsoleProtocol
) -> tuple[PageGenerator, ...]:
    return (
        CommandPageGenerator(
            name="contributors",
            command=config.pages.contributors_command,
            root=config.root,
            console=console,
        ),
        CommandPageGenerator(
            name="licenses",
            command=config.pages.licenses_command,
            root=config.root,
            console=console,
        ),
    )


def rebuild_pages(generators: tuple[PageGenerator, ...]) -> Result[None, ReleaseError]:
    """Run every generator in order; the first failure stops the rest."""
    for generator in generators:
        result = generator.generate()
        if isinstance(result, Err):
            return result
    return Ok(None)
