"""Core building blocks: Result type, exit codes, configuration."""

from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = ["ErrorCode", "Err", "Ok", "Result"]
