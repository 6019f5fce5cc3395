"""Version fields of the build descriptor.

The descriptor is a Gradle-style build file holding, somewhere in its text::

    versionCode 40
    versionName '2.0.1'

Only those two tokens are ever touched; every other byte of the file is kept.
"""

from __future__ import annotations

import re
from pathlib import Path

from relcut.core.result import Err, Ok, Result
from relcut.platform.files import atomic_write_text, read_text_verbatim
from relcut.release.errors import ReleaseError
from relcut.release.model import VersionInfo, parse_version

_NAME_RE = re.compile(r"""\bversionName\s*=?\s*(['"])([^'"\n]+)\1""")
_CODE_RE = re.compile(r"\bversionCode\s*=?\s*(\d+)\b")


def _read(path: Path) -> Result[str, ReleaseError]:
    try:
        return Ok(read_text_verbatim(path))
    except OSError as e:
        return Err(
            ReleaseError(
                kind="io_failed",
                message=f"failed to read {path.name}: {e}",
                hint=str(path),
            )
        )


def parse_version_info(text: str, *, source: str) -> Result[VersionInfo, ReleaseError]:
    name = _NAME_RE.search(text)
    if name is None:
        return Err(
            ReleaseError(
                kind="invalid_input",
                message=f"missing versionName in {source}",
                hint="Expected a line like: versionName '1.2.3'",
            )
        )

    version = parse_version(name.group(2))
    if version is None:
        return Err(
            ReleaseError(
                kind="invalid_input",
                message=f"invalid versionName in {source}: {name.group(2)}",
                hint="Expected MAJOR.MINOR.PATCH[-suffix]",
            )
        )

    code = _CODE_RE.search(text)
    if code is None:
        return Err(
            ReleaseError(
                kind="invalid_input",
                message=f"missing versionCode in {source}",
                hint="Expected a line like: versionCode 40",
            )
        )

    return Ok(VersionInfo(version=version, version_code=int(code.group(1))))


def read_version_info(path: Path) -> Result[VersionInfo, ReleaseError]:
    text = _read(path)
    if isinstance(text, Err):
        return text
    return parse_version_info(text.value, source=path.name)


def rewrite_version_info(
    text: str, *, previous: VersionInfo, new: VersionInfo
) -> tuple[str, int, int]:
    """Substitute both fields; returns (text, name_replacements, code_replacements).

    The previous values must appear verbatim: a versionName holding something
    else than ``previous.version`` is left alone and reported as 0 replacements.
    """
    name_re = re.compile(
        r"""(\bversionName\s*=?\s*)(['"])""" + re.escape(str(previous.version)) + r"""\2"""
    )
    code_re = re.compile(r"(\bversionCode\s*=?\s*)" + str(previous.version_code) + r"\b")

    out, names = name_re.subn(
        lambda m: f"{m.group(1)}{m.group(2)}{new.version}{m.group(2)}", text, count=1
    )
    out, codes = code_re.subn(lambda m: f"{m.group(1)}{new.version_code}", out, count=1)
    return out, names, codes


def apply_version_info(
    path: Path, *, previous: VersionInfo, new: VersionInfo
) -> Result[None, ReleaseError]:
    """Rewrite versionName/versionCode in place.

    Fails with ``descriptor_unchanged`` (and writes nothing) unless both
    fields were found with their previous values.
    """
    text = _read(path)
    if isinstance(text, Err):
        return text

    out, names, codes = rewrite_version_info(text.value, previous=previous, new=new)
    missing: list[str] = []
    if names == 0:
        missing.append(f"versionName '{previous.version}'")
    if codes == 0:
        missing.append(f"versionCode {previous.version_code}")
    if missing:
        return Err(
            ReleaseError(
                kind="descriptor_unchanged",
                message=f"{path.name} was not updated: {', '.join(missing)} not found",
                hint=str(path),
            )
        )

    try:
        atomic_write_text(path, out, encoding="utf-8")
    except OSError as e:
        return Err(
            ReleaseError(
                kind="io_failed",
                message=f"failed to write {path.name}: {e}",
                hint=str(path),
            )
        )
    return Ok(None)
