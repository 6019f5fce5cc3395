"""External collaborators of a release cut.

The release service only talks to these protocols; production code passes
``Repository``, ``GhChangelogSource`` and ``CommandPageGenerator``, tests
pass fakes that record calls.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from relcut.core.result import Result
from relcut.git.repository import GitError, GitStatus
from relcut.release.errors import ReleaseError


class VersionControl(Protocol):
    def status(self) -> Result[GitStatus, GitError]: ...

    def fetch(self, remote: str) -> Result[None, GitError]: ...

    def branch_exists(self, name: str) -> bool: ...

    def tag_exists(self, name: str) -> bool: ...

    def create_branch(self, name: str) -> Result[None, GitError]: ...

    def add(self, paths: list[str]) -> Result[None, GitError]: ...

    def commit(self, message: str) -> Result[None, GitError]: ...

    def create_annotated_tag(self, name: str, message: str) -> Result[None, GitError]: ...


class ChangelogSource(Protocol):
    def generate_notes(self, *, previous_tag: str, target: str) -> Result[str, ReleaseError]:
        """Raw generated notes between ``previous_tag`` and ``target``."""
        ...


class PageGenerator(Protocol):
    name: str

    def generate(self) -> Result[None, ReleaseError]: ...


# Shows the proposed version, returns the operator's raw answer.
VersionPrompt = Callable[[str], str]
