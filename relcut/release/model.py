from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

VersionBump = Literal["minor", "patch"]

_VERSION_RE = re.compile(r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)(-[0-9A-Za-z.-]+)?$")


@dataclass(frozen=True, slots=True)
class Version:
    """MAJOR.MINOR.PATCH with an optional ``-suffix`` (e.g. ``2.0.1-next``)."""

    major: int
    minor: int
    patch: int
    suffix: str = ""

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}{self.suffix}"

    def bump(self, kind: VersionBump) -> Version:
        """Next release version; the suffix is always dropped."""
        match kind:
            case "minor":
                return Version(self.major, self.minor + 1, 0)
            case "patch":
                return Version(self.major, self.minor, self.patch + 1)
            case _:
                raise AssertionError(f"unexpected bump kind: {kind}")


def parse_version(text: str) -> Version | None:
    m = _VERSION_RE.match(text.strip())
    if m is None:
        return None
    return Version(int(m.group(1)), int(m.group(2)), int(m.group(3)), m.group(4) or "")


@dataclass(frozen=True, slots=True)
class VersionInfo:
    """Version fields as recorded in the build descriptor."""

    version: Version
    version_code: int

    def next(self, version: Version) -> VersionInfo:
        return VersionInfo(version=version, version_code=self.version_code + 1)


@dataclass(frozen=True, slots=True)
class ReleaseNames:
    """Names derived from the new version."""

    version: Version
    branch: str
    tag: str
    previous_tag: str

    @classmethod
    def derive(cls, *, previous: Version, version: Version, branch_prefix: str) -> ReleaseNames:
        return cls(
            version=version,
            branch=f"{branch_prefix}{version}",
            tag=str(version),
            previous_tag=str(previous),
        )
