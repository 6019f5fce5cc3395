from __future__ import annotations

from relcut.core.result import Err, Ok, Result
from relcut.release.errors import ReleaseError
from relcut.release.pipeline import Stage, run_steps


def _add(n: int):
    def step(value: int) -> Result[int, ReleaseError]:
        return Ok(value + n)

    return step


def test_run_steps_threads_state_and_reports_stages() -> None:
    seen: list[tuple[Stage, int]] = []

    result = run_steps(
        initial_state=0,
        steps=[(Stage.PRECONDITIONS_OK, _add(1)), (Stage.CHANGELOG_FETCHED, _add(10))],
        on_stage=lambda stage, value: seen.append((stage, value)),
    )

    assert result == Ok(11)
    assert seen == [(Stage.PRECONDITIONS_OK, 1), (Stage.CHANGELOG_FETCHED, 11)]


def test_run_steps_stops_at_first_error() -> None:
    called: list[str] = []

    def boom(value: int) -> Result[int, ReleaseError]:
        del value
        return Err(ReleaseError(kind="page_failed", message="boom"))

    def never(value: int) -> Result[int, ReleaseError]:
        called.append("never")
        return Ok(value)

    result = run_steps(
        initial_state=0,
        steps=[
            (Stage.PRECONDITIONS_OK, _add(1)),
            (Stage.CHANGELOG_FETCHED, boom),
            (Stage.VERSION_DECIDED, never),
        ],
    )

    assert isinstance(result, Err)
    assert result.error.reached == Stage.PRECONDITIONS_OK
    assert result.error.target == Stage.CHANGELOG_FETCHED
    assert result.error.stage == Stage.ABORTED
    assert result.error.error.message == "boom"
    assert called == []


def test_first_step_failure_reports_init() -> None:
    result = run_steps(
        initial_state=0,
        steps=[(Stage.PRECONDITIONS_OK, lambda _: Err(ReleaseError("dirty_tree", "dirty")))],
    )
    assert isinstance(result, Err)
    assert result.error.reached == Stage.INIT
