from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import TypeVar

from relcut.core.result import Err, Ok, Result
from relcut.release.errors import ReleaseError

S = TypeVar("S")


class Stage(StrEnum):
    INIT = "init"
    PRECONDITIONS_OK = "preconditions_ok"
    CHANGELOG_FETCHED = "changelog_fetched"
    VERSION_DECIDED = "version_decided"
    METADATA_UPDATED = "metadata_updated"
    PAGES_REBUILT = "pages_rebuilt"
    COMMITTED = "committed"
    VERIFIED = "verified"
    DONE = "done"
    ABORTED = "aborted"


@dataclass(frozen=True, slots=True)
class Aborted:
    """A run that stopped early.

    ``reached`` is the last stage completed; ``target`` the one whose step
    failed. Nothing done before ``target`` is rolled back.
    """

    reached: Stage
    target: Stage
    error: ReleaseError

    @property
    def stage(self) -> Stage:
        return Stage.ABORTED


StepHandler = Callable[[S], Result[S, ReleaseError]]
Step = tuple[Stage, StepHandler[S]]
OnStage = Callable[[Stage, S], None]


def _ignore(stage: Stage, state: object) -> None:
    del stage, state


def run_steps(
    *,
    initial_state: S,
    steps: Sequence[Step[S]],
    on_stage: OnStage[S] = _ignore,
) -> Result[S, Aborted]:
    """Run ``steps`` in order; each handler moves the run to its stage.

    The first Err aborts the run and no later handler is called.
    """
    current = initial_state
    reached = Stage.INIT

    for target, handler in steps:
        outcome = handler(current)
        if isinstance(outcome, Err):
            return Err(Aborted(reached=reached, target=target, error=outcome.error))
        current = outcome.value
        reached = target
        on_stage(reached, current)

    return Ok(current)
