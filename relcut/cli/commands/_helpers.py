"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import NoReturn

import typer

from relcut.core.errors import ErrorCode
from relcut.output.console import ConsoleProtocol, Style
from relcut.release.errors import ReleaseError, ReleaseErrorKind

_KIND_CODES: dict[ReleaseErrorKind, ErrorCode] = {
    "not_interactive": ErrorCode.ENV_ERROR,
    "wrong_branch": ErrorCode.ENV_ERROR,
    "out_of_sync": ErrorCode.ENV_ERROR,
    "dirty_tree": ErrorCode.ENV_ERROR,
    "gh_missing": ErrorCode.ENV_ERROR,
    "git_failed": ErrorCode.BUILD_ERROR,
    "page_failed": ErrorCode.BUILD_ERROR,
    "forge_failed": ErrorCode.NETWORK_ERROR,
    "io_failed": ErrorCode.IO_ERROR,
    "invalid_input": ErrorCode.USER_ERROR,
    "invalid_version": ErrorCode.USER_ERROR,
    "descriptor_unchanged": ErrorCode.USER_ERROR,
    "already_exists": ErrorCode.USER_ERROR,
}


def release_error_code(kind: ReleaseErrorKind) -> ErrorCode:
    return _KIND_CODES.get(kind, ErrorCode.USER_ERROR)


def exit_release(error: ReleaseError, *, console: ConsoleProtocol) -> NoReturn:
    """Report ``error`` and stop the process with the matching exit code."""
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)
    raise typer.Exit(code=int(release_error_code(error.kind)))
