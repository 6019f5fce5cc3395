from __future__ import annotations

import sys


def is_interactive_terminal() -> bool:
    """True when an operator can both see prompts and answer them."""
    return bool(sys.stdin.isatty() and sys.stdout.isatty())
