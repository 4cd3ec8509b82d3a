"""Interactive yes/no prompts."""

from __future__ import annotations

import sys


def make_confirmation(prompt: str) -> bool:
    """Ask ``prompt`` until the user answers yes or no; EOF raises :class:`EOFError`."""
    while True:
        print(f"{prompt} [y(es)/n(o)]: ", end="", flush=True)
        line = sys.stdin.readline()
        if not line:
            raise EOFError("no answer on standard input")
        response = line.strip().lower()
        if response in ("y", "yes"):
            return True
        if response in ("n", "no"):
            return False