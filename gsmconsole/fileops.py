"""File and directory copying, and terminal clearing."""

from __future__ import annotations

import os
import shutil
import stat
import subprocess
import sys


def copy_file(src: str, dst: str) -> None:
    """Copy a single file's contents from ``src`` to ``dst`` and its mode."""
    shutil.copyfile(src, dst)
    os.chmod(dst, stat.S_IMODE(os.stat(src).st_mode))


def copy_dir(src: str, dst: str) -> None:
    """Copy a directory tree; failures on individual entries are printed and skipped."""
    mode = stat.S_IMODE(os.stat(src).st_mode)
    os.makedirs(dst, mode=mode, exist_ok=True)
    with os.scandir(src) as entries:
        children = sorted(entries, key=lambda e: e.name)
    for entry in children:
        src_path = os.path.join(src, entry.name)
        dst_path = os.path.join(dst, entry.name)
        try:
            if entry.is_dir(follow_symlinks=False):
                copy_dir(src_path, dst_path)
            else:
                copy_file(src_path, dst_path)
        except OSError as err:
            print(err)


def clear_terminal_screen() -> None:
    """Clear the terminal using the platform's shell command."""
    if sys.platform == "win32":
        command = ["cmd", "/c", "cls"]
    elif sys.platform.startswith("linux"):
        command = ["clear"]
    else:
        raise RuntimeError(f'Currently OS is not supported. OS: "{sys.platform}"')
    try:
        subprocess.run(command, check=False)
    except OSError:
        pass