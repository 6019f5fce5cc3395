"""Process exit codes for the release CLI.

The values are the shell exit status of ``relcut`` and should remain stable:
- 0: Success (instructions printed)
- 1: User error (bad input, release already cut, descriptor not updated)
- 2: Environment error (not a terminal, dirty/unsynced tree, missing tools)
- 3: Build error (page generator or a git command failed)
- 4: Network error (forge API failed)
- 5: I/O error (file could not be read or written)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    BUILD_ERROR = 3
    NETWORK_ERROR = 4
    IO_ERROR = 5
