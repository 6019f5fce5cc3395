"""Changelog text handling.

Two jobs: strip the lines the forge's notes generator always adds (they are
re-created, or make no sense, inside our own changelog), and prepend a new
release section to the changelog document.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path

from relcut.core.result import Err, Ok, Result
from relcut.platform.files import atomic_write_text, read_text_verbatim
from relcut.release.errors import ReleaseError

_BOM = "\ufeff"

BOILERPLATE_MARKERS: tuple[str, ...] = (
    "## What's Changed",
    "<!-- Release notes generated",
    "**Full Changelog**",
)


def filter_boilerplate(text: str, markers: tuple[str, ...] = BOILERPLATE_MARKERS) -> str:
    """Drop every line containing one of ``markers``; other lines keep their order."""
    kept = [line for line in text.splitlines() if not any(m in line for m in markers)]
    return "\n".join(kept)


def compare_url(*, repo: str, base: str, head: str) -> str:
    return f"https://github.com/{repo}/compare/{base}...{head}"


@dataclass(frozen=True, slots=True)
class ChangelogSection:
    version: str
    previous_version: str
    released_on: date
    body: str
    repo: str

    def heading(self) -> str:
        return f"## [{self.version}] - {self.released_on.isoformat()}"

    def render(self) -> str:
        lines = [self.heading()]
        body = self.body.strip("\n")
        if body:
            lines.append(body)
        lines.append("")
        link = compare_url(repo=self.repo, base=self.previous_version, head=self.version)
        lines.append(f"**Full Changelog**: {link}")
        return "\n".join(lines)


def strip_title(document: str, title: str) -> str:
    """Return ``document`` with its title line removed, everything else verbatim.

    The title may follow a UTF-8 BOM or blank lines; those go with it. A
    document without the title comes back as is (minus any BOM).
    """
    text = document.removeprefix(_BOM)
    lines = text.splitlines(keepends=True)
    i = 0
    while i < len(lines) and not lines[i].strip():
        i += 1
    if i < len(lines) and lines[i].strip() == title.strip():
        return "".join(lines[i + 1 :])
    return text


def prepend_section(document: str, *, title: str, section: ChangelogSection) -> str:
    """New document: title, the new section, then the prior document minus its title.

    New lines use the document's own line ending; a leading BOM is kept.
    """
    newline = "\r\n" if "\r\n" in document else "\n"
    bom = _BOM if document.startswith(_BOM) else ""
    head = [title, *section.render().split("\n")]
    return bom + newline.join(head) + newline + strip_title(document, title)


def update_changelog(
    path: Path, *, title: str, section: ChangelogSection
) -> Result[None, ReleaseError]:
    """Prepend ``section`` to the changelog at ``path`` (atomic replace).

    A missing file is treated as an empty changelog.
    """
    try:
        current = read_text_verbatim(path) if path.exists() else ""
    except OSError as e:
        return Err(
            ReleaseError(
                kind="io_failed",
                message=f"failed to read {path.name}: {e}",
                hint=str(path),
            )
        )

    try:
        atomic_write_text(path, prepend_section(current, title=title, section=section))
    except OSError as e:
        return Err(
            ReleaseError(
                kind="io_failed",
                message=f"failed to write {path.name}: {e}",
                hint=str(path),
            )
        )
    return Ok(None)
