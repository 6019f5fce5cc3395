from __future__ import annotations

from relcut.core.result import Err, Ok, Result
from relcut.release.errors import ReleaseError
from relcut.release.model import Version, VersionBump, parse_version


def bump_kind(notes: str, *, features_heading: str) -> VersionBump:
    """Minor bump if the notes carry the features heading, patch otherwise.

    Only the literal heading is looked for; the release-notes config routes
    feature-labelled changes under it, so its presence is the whole signal.
    """
    if features_heading in notes:
        return "minor"
    return "patch"


def propose_version(previous: Version, notes: str, *, features_heading: str) -> Version:
    return previous.bump(bump_kind(notes, features_heading=features_heading))


def choose_version(proposed: Version, answer: str) -> Result[Version, ReleaseError]:
    """Resolve the operator's answer to the version prompt.

    An empty answer accepts ``proposed``; anything else must itself be a
    version (MAJOR.MINOR.PATCH with an optional -suffix).
    """
    typed = answer.strip()
    if not typed:
        return Ok(proposed)

    override = parse_version(typed)
    if override is None:
        return Err(
            ReleaseError(
                kind="invalid_version",
                message=f"not a version: {typed!r}",
                hint="Expected MAJOR.MINOR.PATCH[-suffix], or press Enter to accept",
            )
        )
    return Ok(override)
