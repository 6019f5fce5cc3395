"""Release cut orchestration.

``ReleaseCut.run`` drives one cut through the stages of ``Stage``:

    INIT -> PRECONDITIONS_OK -> CHANGELOG_FETCHED -> VERSION_DECIDED
         -> METADATA_UPDATED -> PAGES_REBUILT -> COMMITTED -> VERIFIED -> DONE

Each stage is one handler returning a Result; the first failure aborts the
run with whatever earlier stages changed left in place. Nothing is pushed:
the run ends by printing the push commands for the operator.

``plan_release`` is the side-effect-free preview used by ``relcut plan``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import date

from relcut.core.config import ReleaseConfig
from relcut.core.result import Err, Ok, Result
from relcut.output.console import ConsoleProtocol, Style
from relcut.release.changelog import ChangelogSection, filter_boilerplate, update_changelog
from relcut.release.collaborators import (
    ChangelogSource,
    PageGenerator,
    VersionControl,
    VersionPrompt,
)
from relcut.release.committer import commit_release
from relcut.release.descriptor import apply_version_info, read_version_info
from relcut.release.errors import ReleaseError
from relcut.release.model import ReleaseNames, Version, VersionInfo
from relcut.release.pages import rebuild_pages
from relcut.release.pipeline import Aborted, Stage, Step, run_steps
from relcut.release.preconditions import (
    check_preconditions,
    ensure_clean,
    ensure_synced,
    verify_clean,
)
from relcut.release.version import choose_version, propose_version


@dataclass(frozen=True, slots=True)
class CutState:
    """What a run has learned so far; each stage fills in one more field."""

    previous: VersionInfo | None = None
    notes: str | None = None
    names: ReleaseNames | None = None

    def require_previous(self) -> VersionInfo:
        if self.previous is None:
            raise AssertionError("previous version not probed yet")
        return self.previous

    def require_notes(self) -> str:
        if self.notes is None:
            raise AssertionError("changelog not fetched yet")
        return self.notes

    def require_names(self) -> ReleaseNames:
        if self.names is None:
            raise AssertionError("version not decided yet")
        return self.names


@dataclass(frozen=True, slots=True)
class CutSummary:
    previous: VersionInfo
    released: VersionInfo
    names: ReleaseNames
    instructions: tuple[str, ...]


def require_repo(config: ReleaseConfig) -> Result[str, ReleaseError]:
    if config.forge.repo is None:
        return Err(
            ReleaseError(
                kind="invalid_input",
                message="forge repository is not configured",
                hint="Set [forge] repo = \"owner/name\" in relcut.toml or pass --repo",
            )
        )
    return Ok(config.forge.repo)


def operator_instructions(config: ReleaseConfig, names: ReleaseNames) -> tuple[str, ...]:
    """The manual steps that publish the cut: push branch, push tag, open the PR."""
    repo = config.forge.repo or "<owner>/<repo>"
    remote = config.git.remote
    return (
        f"git push -u {remote} {names.branch}",
        f"git push {remote} {names.tag}",
        f"https://github.com/{repo}/compare/{config.git.release_branch}...{names.branch}?expand=1",
    )


@dataclass(frozen=True, slots=True)
class ReleaseCut:
    config: ReleaseConfig
    vcs: VersionControl
    notes_source: ChangelogSource
    pages: tuple[PageGenerator, ...]
    prompt: VersionPrompt
    console: ConsoleProtocol
    is_interactive: Callable[[], bool]
    today: Callable[[], date] = date.today

    def run(self) -> Result[CutSummary, Aborted]:
        steps: list[Step[CutState]] = [
            (Stage.PRECONDITIONS_OK, self._check),
            (Stage.CHANGELOG_FETCHED, self._fetch_changelog),
            (Stage.VERSION_DECIDED, self._decide_version),
            (Stage.METADATA_UPDATED, self._update_metadata),
            (Stage.PAGES_REBUILT, self._rebuild_pages),
            (Stage.COMMITTED, self._commit),
            (Stage.VERIFIED, self._verify),
            (Stage.DONE, self._print_instructions),
        ]
        result = run_steps(initial_state=CutState(), steps=steps, on_stage=self._report)
        if isinstance(result, Err):
            return result

        state = result.value
        previous = state.require_previous()
        names = state.require_names()
        return Ok(
            CutSummary(
                previous=previous,
                released=previous.next(names.version),
                names=names,
                instructions=operator_instructions(self.config, names),
            )
        )

    def _report(self, stage: Stage, state: CutState) -> None:
        del state
        self.console.print(f"stage: {stage}", Style.DIM)

    def _check(self, state: CutState) -> Result[CutState, ReleaseError]:
        self.console.header("Preconditions")
        repo = require_repo(self.config)
        if isinstance(repo, Err):
            return repo

        ok = check_preconditions(
            vcs=self.vcs,
            git=self.config.git,
            is_interactive=self.is_interactive,
            console=self.console,
        )
        if isinstance(ok, Err):
            return ok

        info = read_version_info(self.config.path(self.config.files.descriptor))
        if isinstance(info, Err):
            return info

        self.console.success(
            f"{self.config.git.release_branch} is clean and in sync "
            f"(current {info.value.version}, code {info.value.version_code})"
        )
        return Ok(replace(state, previous=info.value))

    def _fetch_changelog(self, state: CutState) -> Result[CutState, ReleaseError]:
        self.console.header("Changelog")
        previous = state.require_previous()
        raw = self.notes_source.generate_notes(
            previous_tag=str(previous.version),
            target=self.config.git.release_branch,
        )
        if isinstance(raw, Err):
            return raw

        notes = filter_boilerplate(raw.value)
        self.console.print(notes.strip("\n") or "(no changes listed)")
        return Ok(replace(state, notes=notes))

    def _decide_version(self, state: CutState) -> Result[CutState, ReleaseError]:
        previous = state.require_previous()
        proposed = propose_version(
            previous.version,
            state.require_notes(),
            features_heading=self.config.changelog.features_heading,
        )
        self.console.header("Version")
        self.console.info(f"current {previous.version}, proposed {proposed}")

        version = self._ask_version(proposed)
        names = ReleaseNames.derive(
            previous=previous.version,
            version=version,
            branch_prefix=self.config.git.branch_prefix,
        )
        self.console.success(f"releasing {names.version} on branch {names.branch}")
        return Ok(replace(state, names=names))

    def _ask_version(self, proposed: Version) -> Version:
        while True:
            chosen = choose_version(proposed, self.prompt(str(proposed)))
            if isinstance(chosen, Ok):
                return chosen.value
            self.console.error(chosen.error.message)
            if chosen.error.hint:
                self.console.print(f"hint: {chosen.error.hint}", Style.DIM)

    def _update_metadata(self, state: CutState) -> Result[CutState, ReleaseError]:
        self.console.header("Metadata")
        previous = state.require_previous()
        names = state.require_names()
        files = self.config.files
        released = previous.next(names.version)

        descriptor = apply_version_info(
            self.config.path(files.descriptor), previous=previous, new=released
        )
        if isinstance(descriptor, Err):
            return descriptor
        self.console.success(
            f"{files.descriptor}: {previous.version} -> {released.version}, "
            f"code {previous.version_code} -> {released.version_code}"
        )

        section = ChangelogSection(
            version=names.tag,
            previous_version=names.previous_tag,
            released_on=self.today(),
            body=state.require_notes(),
            repo=self.config.forge.repo or "",
        )
        changelog = update_changelog(
            self.config.path(files.changelog), title=files.changelog_title, section=section
        )
        if isinstance(changelog, Err):
            return changelog
        self.console.success(f"{files.changelog}: added {section.heading()}")
        return Ok(state)

    def _rebuild_pages(self, state: CutState) -> Result[CutState, ReleaseError]:
        self.console.header("Pages")
        return rebuild_pages(self.pages).map(lambda _: state)

    def _commit(self, state: CutState) -> Result[CutState, ReleaseError]:
        self.console.header("Commit")
        return commit_release(
            vcs=self.vcs,
            names=state.require_names(),
            files=self.config.files.release_files(),
            console=self.console,
        ).map(lambda _: state)

    def _verify(self, state: CutState) -> Result[CutState, ReleaseError]:
        return verify_clean(self.vcs).map(lambda _: state)

    def _print_instructions(self, state: CutState) -> Result[CutState, ReleaseError]:
        names = state.require_names()
        self.console.header(f"Release {names.tag} is ready")
        self.console.print("Nothing was pushed. To publish, run:", Style.BOLD)
        for line in operator_instructions(self.config, names):
            self.console.emit(line)
        return Ok(state)


@dataclass(frozen=True, slots=True)
class ReleasePlan:
    previous: VersionInfo
    proposed: ReleaseNames
    section: ChangelogSection
    files: tuple[str, ...]
    warnings: tuple[str, ...]


def plan_release(
    *,
    config: ReleaseConfig,
    vcs: VersionControl,
    notes_source: ChangelogSource | None,
    today: date,
) -> Result[ReleasePlan, ReleaseError]:
    """Compute what ``ReleaseCut.run`` would propose, without changing anything.

    No git fetch, prompt or write happens (only the forge notes API is called);
    precondition problems become warnings.
    With ``notes_source=None`` the notes are empty (so a patch bump).
    """
    repo = require_repo(config)
    if isinstance(repo, Err):
        return repo

    info = read_version_info(config.path(config.files.descriptor))
    if isinstance(info, Err):
        return info
    previous = info.value

    warnings: list[str] = []
    status = vcs.status()
    if isinstance(status, Err):
        warnings.append(f"git status failed: {status.error.message}")
    else:
        for check in (ensure_synced(status.value, git=config.git), ensure_clean(status.value)):
            if isinstance(check, Err):
                warnings.append(check.error.pretty())

    notes = ""
    if notes_source is not None:
        raw = notes_source.generate_notes(
            previous_tag=str(previous.version), target=config.git.release_branch
        )
        if isinstance(raw, Err):
            return raw
        notes = filter_boilerplate(raw.value)

    version = propose_version(
        previous.version, notes, features_heading=config.changelog.features_heading
    )
    names = ReleaseNames.derive(
        previous=previous.version, version=version, branch_prefix=config.git.branch_prefix
    )
    section = ChangelogSection(
        version=names.tag,
        previous_version=names.previous_tag,
        released_on=today,
        body=notes,
        repo=repo.value,
    )
    return Ok(
        ReleasePlan(
            previous=previous,
            proposed=names,
            section=section,
            files=config.files.release_files(),
            warnings=tuple(warnings),
        )
    )
