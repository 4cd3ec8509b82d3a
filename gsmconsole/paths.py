"""Filesystem path helpers."""

from __future__ import annotations

import os


def exist(path: str | os.PathLike[str]) -> bool:
    """Return whether ``path`` can be stat'ed."""
    try:
        os.stat(path)
    except (OSError, ValueError):
        return False
    return True


def get_file_dir(this_file: str) -> str:
    """Return the absolute directory of ``this_file`` with forward slashes."""
    return os.path.abspath(os.path.dirname(this_file)).replace("\\", "/")