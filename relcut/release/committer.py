from __future__ import annotations

from relcut.core.result import Err, Ok, Result
from relcut.git.repository import GitError
from relcut.output.console import ConsoleProtocol, Style
from relcut.release.collaborators import VersionControl
from relcut.release.errors import ReleaseError
from relcut.release.model import ReleaseNames


def commit_message(names: ReleaseNames) -> str:
    return f"Prepare release {names.version}"


def ensure_not_released(vcs: VersionControl, names: ReleaseNames) -> Result[None, ReleaseError]:
    """Refuse to cut a version whose branch or tag already exists locally."""
    existing: list[str] = []
    if vcs.branch_exists(names.branch):
        existing.append(f"branch {names.branch}")
    if vcs.tag_exists(names.tag):
        existing.append(f"tag {names.tag}")
    if existing:
        return Err(
            ReleaseError(
                kind="already_exists",
                message=f"{' and '.join(existing)} already exist(s)",
                hint="This version was already cut; pick another version or delete them",
            )
        )
    return Ok(None)


def _git_failed(error: GitError) -> Err[ReleaseError]:
    return Err(
        ReleaseError(
            kind="git_failed",
            message=f"git {error.command} failed",
            hint=error.message,
        )
    )


def commit_release(
    *,
    vcs: VersionControl,
    names: ReleaseNames,
    files: tuple[str, ...],
    console: ConsoleProtocol,
) -> Result[None, ReleaseError]:
    """Branch, stage ``files``, commit and tag; stops at the first failure."""
    exists = ensure_not_released(vcs, names)
    if isinstance(exists, Err):
        return exists

    message = commit_message(names)

    console.print(f"git checkout -b {names.branch}", Style.DIM)
    branched = vcs.create_branch(names.branch)
    if isinstance(branched, Err):
        return _git_failed(branched.error)

    console.print(f"git add -- {' '.join(files)}", Style.DIM)
    added = vcs.add(list(files))
    if isinstance(added, Err):
        return _git_failed(added.error)

    console.print(f"git commit -m {message!r}", Style.DIM)
    committed = vcs.commit(message)
    if isinstance(committed, Err):
        return _git_failed(committed.error)

    console.print(f"git tag -a {names.tag}", Style.DIM)
    tagged = vcs.create_annotated_tag(names.tag, message)
    if isinstance(tagged, Err):
        return _git_failed(tagged.error)

    return Ok(None)
