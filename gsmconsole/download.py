"""Downloading files over HTTP."""

from __future__ import annotations

import requests

_CHUNK_SIZE = 64 * 1024


def download_file(filepath: str, url: str) -> None:
    """Stream the body at ``url`` into ``filepath``.

    The file is created before the request is made. A response other than
    200 raises :class:`requests.HTTPError` with a ``bad status`` message.
    """
    with open(filepath, "wb") as out:
        with requests.get(url, stream=True) as response:
            if response.status_code != requests.codes.ok:
                raise requests.HTTPError(
                    f"bad status: {response.status_code} {response.reason}",
                    response=response,
                )
            for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                out.write(chunk)