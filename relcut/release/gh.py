"""Release notes from GitHub, through the ``gh`` CLI.

One call to ``POST repos/{repo}/releases/generate-notes``. Failures are not
retried: a broken network or a bad notes config is for the operator to fix
before re-running.
"""

from __future__ import annotations

import json
import shutil
from dataclasses import dataclass
from pathlib import Path

from relcut.core.result import Err, Ok, Result
from relcut.core.structured import as_str_dict, get_raw_str
from relcut.output.console import ConsoleProtocol, Style
from relcut.platform.process import run as run_process
from relcut.release.errors import ReleaseError

GH_TIMEOUT_SECONDS = 60.0


def ensure_gh_available() -> Result[None, ReleaseError]:
    if shutil.which("gh") is None:
        return Err(
            ReleaseError(
                kind="gh_missing",
                message="gh: missing",
                hint="Install GitHub CLI: https://cli.github.com/ then run: gh auth login",
            )
        )
    return Ok(None)


def generate_notes_command(
    *,
    repo: str,
    tag_name: str,
    target_commitish: str,
    previous_tag_name: str,
    configuration_file_path: str,
) -> list[str]:
    return [
        "gh",
        "api",
        "--method",
        "POST",
        "-H",
        "Accept: application/vnd.github+json",
        f"repos/{repo}/releases/generate-notes",
        "-f",
        f"tag_name={tag_name}",
        "-f",
        f"target_commitish={target_commitish}",
        "-f",
        f"previous_tag_name={previous_tag_name}",
        "-f",
        f"configuration_file_path={configuration_file_path}",
    ]


def parse_notes_body(payload: str, *, repo: str) -> Result[str, ReleaseError]:
    try:
        obj: object = json.loads(payload)
    except json.JSONDecodeError as e:
        return Err(
            ReleaseError(
                kind="forge_failed",
                message=f"generate-notes returned invalid JSON: {e}",
                hint=repo,
            )
        )

    data = as_str_dict(obj)
    body = get_raw_str(data, "body") if data is not None else None
    if body is None:
        return Err(
            ReleaseError(
                kind="forge_failed",
                message=f"unexpected generate-notes payload: {repo}",
                hint="Response has no string 'body' field",
            )
        )
    return Ok(body)


@dataclass(frozen=True, slots=True)
class GhChangelogSource:
    """``ChangelogSource`` backed by ``gh api``."""

    root: Path
    repo: str
    notes_config: str
    placeholder_tag: str
    console: ConsoleProtocol

    def generate_notes(self, *, previous_tag: str, target: str) -> Result[str, ReleaseError]:
        available = ensure_gh_available()
        if isinstance(available, Err):
            return available

        cmd = generate_notes_command(
            repo=self.repo,
            tag_name=self.placeholder_tag,
            target_commitish=target,
            previous_tag_name=previous_tag,
            configuration_file_path=self.notes_config,
        )
        self.console.print(
            f"gh api repos/{self.repo}/releases/generate-notes ({previous_tag}...{target})",
            Style.DIM,
        )
        result = run_process(cmd, cwd=self.root, timeout=GH_TIMEOUT_SECONDS)
        if isinstance(result, Err):
            return Err(
                ReleaseError(
                    kind="forge_failed",
                    message=f"failed to generate release notes for {self.repo}",
                    hint=result.error.detail() or "Check network access and: gh auth status",
                )
            )
        return parse_notes_body(result.value, repo=self.repo)
