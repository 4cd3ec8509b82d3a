"""Creating and extracting zip archives."""

from __future__ import annotations

import os
import zipfile
from collections.abc import Iterator


def _walk(path: str) -> Iterator[str]:
    """Yield ``path`` and everything beneath it in lexical order."""
    yield path
    if os.path.isdir(path) and not os.path.islink(path):
        try:
            names = sorted(os.listdir(path))
        except OSError:
            return
        for name in names:
            yield from _walk(os.path.join(path, name))


def zip_path(src: str, dest_zip: str) -> None:
    """Archive a file or directory into ``dest_zip``.

    Entry names are relative to the parent of ``src``, so the archive holds
    ``src``'s own name as its top-level entry. Files are deflated.
    """
    base = os.path.dirname(os.path.normpath(src)) or "."
    with zipfile.ZipFile(dest_zip, "w") as archive:
        if not os.path.lexists(src):
            return
        for path in _walk(src):
            arcname = os.path.relpath(path, base).replace(os.sep, "/")
            if os.path.isdir(path):
                archive.write(path, arcname)
            else:
                archive.write(path, arcname, compress_type=zipfile.ZIP_DEFLATED)


def unzip(zip_file: str, dest_dir: str) -> None:
    """Extract every entry of ``zip_file`` beneath ``dest_dir``."""
    with zipfile.ZipFile(zip_file) as archive:
        for info in archive.infolist():
            target = os.path.normpath(os.path.join(dest_dir, info.filename))
            if info.is_dir():
                os.makedirs(target, exist_ok=True)
                continue
            os.makedirs(os.path.dirname(target), exist_ok=True)
            mode = (info.external_attr >> 16) & 0o777 or 0o666
            fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
            with os.fdopen(fd, "wb") as out, archive.open(info) as src:
                while chunk := src.read(64 * 1024):
                    out.write(chunk)