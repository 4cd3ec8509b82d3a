"""Copying a server's files, configuration and logs into the backup area."""

from __future__ import annotations

import os

import click

from gsmconsole.fileops import copy_dir
from gsmconsole.identity import server_directories


def backup_server(root: str, server_id: int) -> list[str]:
    """Copy the server's directories into ``<root>/backup/<server_id>``.

    Returns the components (``server``, ``config``, ``log``) that were copied;
    a component that cannot be read is skipped.
    """
    backup_directory = f"{root}/backup/{server_id}"
    server_dir, config_dir, log_dir = server_directories(root, server_id)
    copied = []
    for component, source in (("server", server_dir), ("config", config_dir), ("log", log_dir)):
        try:
            copy_dir(source, f"{backup_directory}/{component}")
        except OSError:
            continue
        copied.append(component)
    return copied


def make_command() -> click.Command:
    """Build the ``backup`` command."""

    @click.command(name="backup")
    @click.option("--server-id", "server_id", type=click.IntRange(min=0), required=True)
    def backup(server_id: int) -> None:
        """Back up a server."""
        backup_server(os.environ.get("GSM_ROOT", ""), server_id)

    return backup