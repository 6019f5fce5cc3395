from __future__ import annotations

from collections.abc import Callable

from relcut.core.config import GitConfig
from relcut.core.result import Err, Ok, Result
from relcut.git.repository import GitStatus
from relcut.output.console import ConsoleProtocol, Style
from relcut.release.collaborators import VersionControl
from relcut.release.errors import ReleaseError


def _status(vcs: VersionControl) -> Result[GitStatus, ReleaseError]:
    result = vcs.status()
    if isinstance(result, Err):
        return Err(
            ReleaseError(
                kind="git_failed",
                message="failed to check git status",
                hint=result.error.message,
            )
        )
    return result


def ensure_clean(status: GitStatus) -> Result[None, ReleaseError]:
    """Only the branch-tracking line may be present."""
    if status.is_clean:
        return Ok(None)

    shown = ", ".join(f"{e.pretty_xy()} {e.path}" for e in status.entries[:5])
    if len(status.entries) > 5:
        shown += f", ... ({len(status.entries)} total)"
    return Err(
        ReleaseError(
            kind="dirty_tree",
            message="working tree has uncommitted changes",
            hint=shown,
        )
    )


def ensure_synced(status: GitStatus, *, git: GitConfig) -> Result[None, ReleaseError]:
    if status.branch != git.release_branch:
        return Err(
            ReleaseError(
                kind="wrong_branch",
                message=f"not on {git.release_branch} (current: {status.branch or 'detached'})",
                hint=f"Run: git checkout {git.release_branch}",
            )
        )

    if status.has_divergence:
        if status.upstream is None:
            detail = "no upstream configured"
        else:
            detail = f"ahead {status.ahead}, behind {status.behind} vs {status.upstream}"
        return Err(
            ReleaseError(
                kind="out_of_sync",
                message=f"{git.release_branch} is not in sync with {git.remote}: {detail}",
                hint=f"Run: git pull --ff-only {git.remote} {git.release_branch}",
            )
        )

    return Ok(None)


def check_preconditions(
    *,
    vcs: VersionControl,
    git: GitConfig,
    is_interactive: Callable[[], bool],
    console: ConsoleProtocol,
) -> Result[None, ReleaseError]:
    """Verify a release can start; nothing is modified except remote refs.

    Order matters: the interactivity check runs before any git command, and
    the fetch runs before the sync check so ahead/behind reflect the remote.
    """
    if not is_interactive():
        return Err(
            ReleaseError(
                kind="not_interactive",
                message="relcut cut needs an interactive terminal",
                hint="Run it from a terminal; use `relcut plan` for a non-interactive preview",
            )
        )

    console.print(f"git fetch {git.remote}", Style.DIM)
    fetched = vcs.fetch(git.remote)
    if isinstance(fetched, Err):
        return Err(
            ReleaseError(
                kind="git_failed",
                message=f"git fetch {git.remote} failed",
                hint=fetched.error.message,
            )
        )

    status = _status(vcs)
    if isinstance(status, Err):
        return status

    synced = ensure_synced(status.value, git=git)
    if isinstance(synced, Err):
        return synced
    return ensure_clean(status.value)


def verify_clean(vcs: VersionControl) -> Result[None, ReleaseError]:
    """Post-commit check: every release file made it into the commit."""
    status = _status(vcs)
    if isinstance(status, Err):
        return status
    clean = ensure_clean(status.value)
    if isinstance(clean, Err):
        return Err(
            ReleaseError(
                kind="dirty_tree",
                message="working tree is not clean after the release commit",
                hint=clean.error.hint,
            )
        )
    return Ok(None)
