from __future__ import annotations

import pytest

from relcut.core.result import Err, Ok
from relcut.release.model import ReleaseNames, Version, parse_version
from relcut.release.version import bump_kind, choose_version, propose_version


def test_parse_version() -> None:
    assert parse_version("2.0.1") == Version(2, 0, 1)
    assert parse_version("10.20.30-next") == Version(10, 20, 30, "-next")
    assert str(parse_version("1.2.3-beta.4")) == "1.2.3-beta.4"


@pytest.mark.parametrize("text", ["", "2.0", "v2.0.1", "2.0.1.4", "02.0.1", "2.0.1 next", "-1.0.0"])
def test_parse_version_rejects(text: str) -> None:
    assert parse_version(text) is None


def test_features_heading_bumps_minor() -> None:
    notes = "### Features\n* Add filters\n### Fixes\n* Fix crash"
    assert bump_kind(notes, features_heading="### Features") == "minor"
    assert propose_version(Version(2, 0, 1), notes, features_heading="### Features") == Version(
        2, 1, 0
    )


def test_no_features_heading_bumps_patch() -> None:
    notes = "### Fixes\n* Fix crash\n* Mention features in the docs"
    assert propose_version(Version(2, 0, 1), notes, features_heading="### Features") == Version(
        2, 0, 2
    )


def test_bump_drops_suffix_and_keeps_major() -> None:
    previous = Version(3, 4, 5, "-next")
    assert previous.bump("patch") == Version(3, 4, 6)
    assert previous.bump("minor") == Version(3, 5, 0)


def test_custom_features_heading() -> None:
    notes = "## New\n* thing"
    assert bump_kind(notes, features_heading="## New") == "minor"
    assert bump_kind(notes, features_heading="### Features") == "patch"


def test_choose_version_accepts_empty_answer() -> None:
    assert choose_version(Version(2, 0, 2), "") == Ok(Version(2, 0, 2))
    assert choose_version(Version(2, 0, 2), "   ") == Ok(Version(2, 0, 2))


def test_choose_version_override() -> None:
    assert choose_version(Version(2, 0, 2), " 2.5.0 ") == Ok(Version(2, 5, 0))


def test_choose_version_rejects_garbage() -> None:
    result = choose_version(Version(2, 0, 2), "next week")
    assert isinstance(result, Err)
    assert result.error.kind == "invalid_version"


def test_release_names() -> None:
    names = ReleaseNames.derive(
        previous=Version(2, 0, 1), version=Version(2, 0, 2), branch_prefix="next-release-"
    )
    assert names.branch == "next-release-2.0.2"
    assert names.tag == "2.0.2"
    assert names.previous_tag == "2.0.1"
