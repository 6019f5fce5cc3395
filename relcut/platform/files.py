"""Filesystem helpers.

Release files are edited in place, so both helpers keep the text exactly as
stored: line endings are neither translated on read nor on write.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

__all__ = ["atomic_write_text", "read_text_verbatim"]


def read_text_verbatim(path: Path, *, encoding: str = "utf-8") -> str:
    """Read ``path`` without newline translation (CRLF stays CRLF)."""
    with path.open("r", encoding=encoding, newline="") as handle:
        return handle.read()


def atomic_write_text(path: Path, content: str, *, encoding: str = "utf-8") -> None:
    """Replace ``path`` with ``content`` via a sibling temp file.

    ``content`` is written byte-for-byte (no newline translation). Readers see
    either the old file or the complete new one; the temp file is removed if
    anything fails before the rename.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    tmp_path = Path(tmp_name)

    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    finally:
        tmp_path.unlink(missing_ok=True)
