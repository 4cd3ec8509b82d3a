"""Sending restart, stop and console commands to servers through the coordinator."""

from __future__ import annotations

import json
import os
from typing import Any

import click
import websocket

from gsmconsole import logger, status
from gsmconsole.cliconf import coordinator_configuration
from gsmconsole.coordcmd import coordinator_url
from gsmconsole.identity import IdentityRegistry, load_server_identity
from gsmconsole.options import ROLE

_ERRORS = (websocket.WebSocketException, OSError)


def build_command_message(
    server_id: int, command: str, message: str | None = None
) -> dict[str, Any]:
    """Return the request that asks the coordinator to pass ``command`` to a server."""
    detail: dict[str, Any] = {"server_id": server_id, "command": command}
    if message is not None:
        detail["message"] = message
    code = status.SERVER_CONNECTED_COORDINATOR_AND_LOGGING_IN
    return {
        "role": ROLE,
        "code": int(code),
        "message": code.message(),
        "detail": detail,
    }


def send_server_command(
    registry: IdentityRegistry,
    url: str,
    server_id: int,
    command: str,
    message: str | None = None,
) -> bool:
    """Deliver ``command`` for ``server_id`` to the coordinator at ``url``.

    Returns whether the request was sent; unknown or deleted servers are
    reported and nothing is sent.
    """
    server = registry.find(server_id)
    if server is None:
        print("Server NOT found")
        return False
    if server.deleted:
        print("Server has been deleted")
        return False
    payload = json.dumps(
        build_command_message(server_id, command, message),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    print(f"[{url}] Connecting to the coordinator...", end="", flush=True)
    try:
        conn = websocket.create_connection(url)
    except _ERRORS as err:
        print()
        logger.error(err)
        return False
    print("OK")
    try:
        print("Sending message...", end="", flush=True)
        try:
            conn.send(payload)
        except _ERRORS as err:
            print()
            logger.error(err)
            return False
        print("OK")
        return True
    finally:
        conn.close()


def _dispatch(server_id: int, command: str, message: str | None = None) -> None:
    registry = load_server_identity(os.environ.get("GSM_ROOT", ""))
    try:
        cfg = coordinator_configuration()
    except (OSError, ValueError) as err:
        logger.error(err)
        return
    send_server_command(registry, coordinator_url(cfg), server_id, command, message)


_server_id_option = click.option(
    "--server-id", "server_id", type=click.IntRange(min=0), required=True, help="Server ID"
)


def make_commands() -> list[click.Command]:
    """Build the ``restart``, ``send`` and ``stop`` server commands."""

    @click.command(name="restart")
    @_server_id_option
    def restart(server_id: int) -> None:
        """Restart a server."""
        _dispatch(server_id, "restart")

    @click.command(name="send")
    @_server_id_option
    @click.argument("words", nargs=-1, required=True)
    def send(server_id: int, words: tuple[str, ...]) -> None:
        """Send a line to a server's console."""
        _dispatch(server_id, "send", " ".join(words))

    @click.command(name="stop")
    @_server_id_option
    def stop(server_id: int) -> None:
        """Stop a server."""
        _dispatch(server_id, "stop")

    return [restart, send, stop]