"""Git repository abstraction.

``Repository`` wraps the handful of git commands a release cut needs. Every
method returns a Result; nothing raises on a failing git command.

Usage:
    repo = Repository(Path("/path/to/project"))

    match repo.status():
        case Ok(status):
            print(status.branch, status.ahead, status.behind)
        case Err(e):
            print(f"{e.command}: {e.message}")
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from relcut.core.result import Err, Ok, Result
from relcut.platform.process import ProcessError
from relcut.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

__all__ = [
    "GitError",
    "GitStatus",
    "Repository",
    "StatusEntry",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed (e.g. "checkout -b")
        message: Error text reported by git
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """One changed path from ``git status --porcelain``.

    Attributes:
        xy: Two-character status code (e.g. "M ", " M", "??")
        path: File path
    """

    xy: str
    path: str

    def pretty_xy(self) -> str:
        """Format XY with dots for spaces (".M" instead of " M")."""
        return self.xy.replace(" ", ".")


@dataclass(frozen=True, slots=True)
class GitStatus:
    """Parsed ``git status --porcelain=v1 -b``.

    The branch-tracking ``##`` line becomes branch/upstream/ahead/behind; all
    other lines become entries.
    """

    branch: str
    upstream: str | None = None
    ahead: int = 0
    behind: int = 0
    entries: tuple[StatusEntry, ...] = field(default_factory=tuple)

    @property
    def is_clean(self) -> bool:
        """True if nothing besides the branch line was reported."""
        return len(self.entries) == 0

    @property
    def has_divergence(self) -> bool:
        """True if the branch is ahead of, behind, or has no upstream."""
        return bool(self.ahead or self.behind or self.upstream is None)


class Repository:
    """Git operations on a single working tree."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def status(self) -> Result[GitStatus, GitError]:
        result = self._run(["status", "--porcelain=v1", "-b"])
        match result:
            case Err(e):
                return Err(_git_error("status", e, "git status failed"))
            case Ok(stdout):
                return Ok(parse_status(stdout))

    def fetch(self, remote: str) -> Result[None, GitError]:
        result = self._run(["fetch", remote])
        if isinstance(result, Err):
            return Err(_git_error("fetch", result.error, "fetch failed"))
        return Ok(None)

    def branch_exists(self, name: str) -> bool:
        result = self._run(["rev-parse", "--verify", "--quiet", f"refs/heads/{name}"])
        return isinstance(result, Ok)

    def tag_exists(self, name: str) -> bool:
        result = self._run(["rev-parse", "--verify", "--quiet", f"refs/tags/{name}"])
        return isinstance(result, Ok)

    def create_branch(self, name: str) -> Result[None, GitError]:
        """Create ``name`` at HEAD and switch to it (``git checkout -b``)."""
        result = self._run(["checkout", "-b", name])
        if isinstance(result, Err):
            return Err(_git_error("checkout -b", result.error, f"cannot create branch {name}"))
        return Ok(None)

    def add(self, paths: list[str]) -> Result[None, GitError]:
        result = self._run(["add", "--", *paths])
        if isinstance(result, Err):
            return Err(_git_error("add", result.error, "git add failed"))
        return Ok(None)

    def commit(self, message: str) -> Result[None, GitError]:
        result = self._run(["commit", "-m", message])
        if isinstance(result, Err):
            return Err(_git_error("commit", result.error, "git commit failed"))
        return Ok(None)

    def create_annotated_tag(self, name: str, message: str) -> Result[None, GitError]:
        """Tag HEAD with an annotated tag (``git tag -a``)."""
        result = self._run(["tag", "-a", name, "-m", message])
        if isinstance(result, Err):
            return Err(_git_error("tag -a", result.error, f"cannot create tag {name}"))
        return Ok(None)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        command = args[0] if args else ""
        timeout = (
            _GIT_NETWORK_TIMEOUT_SECONDS
            if command in {"fetch", "pull", "push"}
            else _GIT_TIMEOUT_SECONDS
        )
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)


def _git_error(command: str, error: ProcessError, fallback: str) -> GitError:
    return GitError(
        command=command,
        message=error.stderr.strip() or error.stdout.strip() or fallback,
        returncode=error.returncode,
    )


def parse_status(output: str) -> GitStatus:
    """Parse ``git status --porcelain=v1 -b`` output."""
    lines = [ln for ln in output.splitlines() if ln.strip()]
    if not lines:
        return GitStatus(branch="")

    branch_line = lines[0]
    if not branch_line.startswith("##"):
        return GitStatus(branch="", entries=_parse_entries(lines))

    branch, upstream = _parse_branch_line(branch_line)
    ahead, behind = _parse_ahead_behind(branch_line)
    return GitStatus(
        branch=branch,
        upstream=upstream,
        ahead=ahead,
        behind=behind,
        entries=_parse_entries(lines[1:]),
    )


def _parse_branch_line(line: str) -> tuple[str, str | None]:
    """Parse ``## branch...upstream [ahead N, behind M]``."""
    s = line[2:].strip()
    s = s.split(" [", 1)[0].strip()

    if s.startswith("No commits yet on "):
        return (s.removeprefix("No commits yet on ").strip(), None)

    if "..." in s:
        left, right = s.split("...", 1)
        return (left.strip(), right.strip())

    return (s, None)


def _parse_ahead_behind(line: str) -> tuple[int, int]:
    match = re.search(r"\[([^\]]+)\]", line)
    if not match:
        return (0, 0)

    inside = match.group(1)
    ahead_match = re.search(r"ahead\s+(\d+)", inside)
    behind_match = re.search(r"behind\s+(\d+)", inside)
    ahead = int(ahead_match.group(1)) if ahead_match else 0
    behind = int(behind_match.group(1)) if behind_match else 0
    return (ahead, behind)


def _parse_entries(lines: list[str]) -> tuple[StatusEntry, ...]:
    entries: list[StatusEntry] = []
    for line in lines:
        if len(line) < 4:
            continue
        entries.append(StatusEntry(xy=line[:2], path=line[3:]))
    return tuple(entries)
