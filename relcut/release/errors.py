from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "not_interactive",
    "wrong_branch",
    "out_of_sync",
    "dirty_tree",
    "git_failed",
    "gh_missing",
    "forge_failed",
    "invalid_input",
    "invalid_version",
    "descriptor_unchanged",
    "already_exists",
    "page_failed",
    "io_failed",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Failure of one release step.

    The same payload is used by every step so the CLI can render and map it to
    an exit code without knowing which step produced it.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message
