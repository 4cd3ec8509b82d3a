"""Starting a server's daemon process."""

from __future__ import annotations

import os
import subprocess
import sys

import click

from gsmconsole import logger
from gsmconsole.identity import IdentityRegistry, load_server_identity
from gsmconsole.steamcmd import UnsupportedPlatformError


def _daemon_name() -> str:
    platform = sys.platform
    if platform in ("win32", "cygwin"):
        return "gsm-server.exe"
    if platform.startswith("linux"):
        return "gsm-server"
    raise UnsupportedPlatformError("Not supported OS.")


def start_server(registry: IdentityRegistry, bin_dir: str, server_id: int) -> int | None:
    """Launch the daemon for ``server_id`` from ``bin_dir`` and return its PID.

    Unknown or deleted servers are reported and ``None`` is returned. The
    server id is passed to the daemon in ``$GSM_SERVER_ID``.
    """
    server = registry.find(server_id)
    if server is None or server.deleted:
        print("ERROR: The server does not exist.")
        return None
    os.environ["GSM_SERVER_ID"] = str(server.id)
    executable = f"{bin_dir}/{_daemon_name()}"
    try:
        process = subprocess.Popen([executable], cwd=bin_dir, env=dict(os.environ))
    except OSError as err:
        logger.panic(err)
    logger.info("Server started. Daemon PID:", process.pid)
    return process.pid


def make_command() -> click.Command:
    """Build the ``start`` command."""

    @click.command(name="start")
    @click.option(
        "--server-id", "server_id", type=click.IntRange(min=0), default=0, help="Server ID to start"
    )
    def start(server_id: int) -> None:
        """Start a server."""
        registry = load_server_identity(os.environ.get("GSM_ROOT", ""))
        try:
            start_server(registry, os.environ.get("GSM_PATH", ""), server_id)
        except UnsupportedPlatformError as err:
            raise click.ClickException(str(err)) from err

    return start