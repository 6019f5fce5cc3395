from __future__ import annotations

from pathlib import Path

from relcut.core.result import Err, Ok
from relcut.release.descriptor import (
    apply_version_info,
    parse_version_info,
    read_version_info,
    rewrite_version_info,
)
from relcut.release.model import Version, VersionInfo

from ._fakes import DESCRIPTOR

PREVIOUS = VersionInfo(version=Version(2, 0, 1), version_code=40)
NEW = VersionInfo(version=Version(2, 0, 2), version_code=41)


def test_read_version_info(tmp_path: Path) -> None:
    path = tmp_path / "build.gradle"
    path.write_text(DESCRIPTOR, encoding="utf-8")

    assert read_version_info(path) == Ok(PREVIOUS)


def test_read_version_info_accepts_kotlin_dsl() -> None:
    text = 'defaultConfig {\n    versionCode = 7\n    versionName = "1.4.0-next"\n}\n'
    result = parse_version_info(text, source="build.gradle.kts")
    assert result == Ok(VersionInfo(version=Version(1, 4, 0, "-next"), version_code=7))


def test_read_version_info_missing_file(tmp_path: Path) -> None:
    result = read_version_info(tmp_path / "missing.gradle")
    assert isinstance(result, Err)
    assert result.error.kind == "io_failed"


def test_read_version_info_missing_fields() -> None:
    no_name = parse_version_info("versionCode 3\n", source="x")
    assert isinstance(no_name, Err)
    assert "versionName" in no_name.error.message

    no_code = parse_version_info("versionName '1.0.0'\n", source="x")
    assert isinstance(no_code, Err)
    assert "versionCode" in no_code.error.message

    bad = parse_version_info("versionName 'latest'\nversionCode 3\n", source="x")
    assert isinstance(bad, Err)
    assert bad.error.kind == "invalid_input"


def test_rewrite_only_touches_version_tokens() -> None:
    out, names, codes = rewrite_version_info(DESCRIPTOR, previous=PREVIOUS, new=NEW)

    assert (names, codes) == (1, 1)
    before = DESCRIPTOR.splitlines()
    after = out.splitlines()
    changed = [(a, b) for a, b in zip(before, after, strict=True) if a != b]
    assert changed == [
        ("        versionCode 40", "        versionCode 41"),
        ("        versionName '2.0.1'", "        versionName '2.0.2'"),
    ]


def test_rewrite_does_not_match_longer_code() -> None:
    text = "versionCode 400\nversionName '2.0.1'\n"
    _, _, codes = rewrite_version_info(text, previous=PREVIOUS, new=NEW)
    assert codes == 0


def test_apply_version_info(tmp_path: Path) -> None:
    path = tmp_path / "build.gradle"
    path.write_text(DESCRIPTOR, encoding="utf-8")

    assert apply_version_info(path, previous=PREVIOUS, new=NEW) == Ok(None)
    assert read_version_info(path) == Ok(NEW)


def test_apply_version_info_reports_no_match(tmp_path: Path) -> None:
    path = tmp_path / "build.gradle"
    path.write_text(DESCRIPTOR, encoding="utf-8")
    stale = VersionInfo(version=Version(1, 9, 9), version_code=40)

    result = apply_version_info(path, previous=stale, new=NEW)

    assert isinstance(result, Err)
    assert result.error.kind == "descriptor_unchanged"
    assert "versionName '1.9.9'" in result.error.message
    assert path.read_text(encoding="utf-8") == DESCRIPTOR


def test_apply_version_info_keeps_crlf_line_endings(tmp_path: Path) -> None:
    path = tmp_path / "build.gradle"
    path.write_bytes(DESCRIPTOR.replace("\n", "\r\n").encode("utf-8"))

    assert apply_version_info(path, previous=PREVIOUS, new=NEW) == Ok(None)

    expected = (
        DESCRIPTOR.replace("versionCode 40", "versionCode 41")
        .replace("versionName '2.0.1'", "versionName '2.0.2'")
        .replace("\n", "\r\n")
    )
    assert path.read_bytes() == expected.encode("utf-8")
