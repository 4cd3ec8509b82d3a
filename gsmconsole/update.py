"""Updating a server: stop every server sharing its files, then update them."""

from __future__ import annotations

import os
from typing import Any

import click
import websocket

from gsmconsole import logger, status
from gsmconsole.cliconf import coordinator_configuration
from gsmconsole.config import ConfigSpec, load
from gsmconsole.coordcmd import RetGram, coordinator_url
from gsmconsole.games import GameCatalog, load_available_games
from gsmconsole.identity import (
    IdentityRegistry,
    RecursiveSymlinkError,
    ServerIdentity,
    load_server_identity,
    server_directories,
)
from gsmconsole.interact import make_confirmation
from gsmconsole.options import Confirmation
from gsmconsole.steamcmd import (
    UnsupportedPlatformError,
    check_latest_build,
    check_local_build,
    steamcmd_install,
)

_ERRORS = (websocket.WebSocketException, OSError)


class _Unreachable(Exception):
    """The coordinator could not be reached."""


def _exchange(url: str, server_id: int) -> RetGram | None:
    """Send one update request for ``server_id`` and return the reply, if any."""
    try:
        conn = websocket.create_connection(url)
    except _ERRORS as err:
        logger.error(err)
        raise _Unreachable(str(err)) from err
    try:
        request = RetGram.for_code(
            status.SERVER_CONNECTED_COORDINATOR_AND_LOGGING_IN,
            {"server_id": server_id, "command": "update"},
        )
        conn.send(request.to_json())
        return RetGram.from_json(conn.recv())
    except (*_ERRORS, ValueError, TypeError):
        return None
    finally:
        conn.close()


def _stop(url: str, server_id: int) -> None:
    try:
        _exchange(url, server_id)
    except _Unreachable:
        pass


def _is_stopped(url: str, server_id: int) -> bool:
    reply = _exchange(url, server_id)
    return reply is not None and reply.code == int(status.COORDINATOR_SERVER_OFFLINE)


def _allows_update(config_dir: str) -> bool:
    cfg = load(ConfigSpec(name="config", type="toml", path=[config_dir]))
    value: Any = cfg.get("server.allow_update", False)
    if isinstance(value, str):
        return value.strip().lower() in ("1", "t", "true")
    return bool(value)


def _apply_update(
    root: str, catalog: GameCatalog, server: ServerIdentity, server_id: int, server_dir: str
) -> None:
    game = catalog.find(server.game)
    if game is None or game.specific.get("install_via") != "steamcmd":
        return
    specific = game.specific
    app_id = int(specific["appid"])

    def handle_update() -> None:
        mod = specific.get("mod")
        mod_name = mod if isinstance(mod, str) else ""
        custom = ""
        if "custom" in specific:
            if not isinstance(specific["custom"], str):
                raise ValueError('"custom" must be a string')
            custom = specific["custom"]
        platforms = [str(p) for p in specific.get("platform", [])]
        steamcmd_install(platforms, server_dir, app_id, mod_name, True, custom)

    latest = check_latest_build(app_id)
    try:
        local = check_local_build(root, server_id, app_id)
    except (OSError, ValueError) as err:
        print("Seems that appmanifest file has been corrupted.")
        print("Forcely update the server.")
        print("If this message occurs multiple times, please contact for supportance.")
        print("Error message:", err)
        handle_update()
        return
    print("Local build:", local)
    print("Latest build:", latest)
    if latest != local:
        print("Difference detected.")
        print("Starting update.")
        handle_update()
        return
    print("Current build is latest. No further action needed.")


def update_server(
    root: str,
    registry: IdentityRegistry,
    catalog: GameCatalog,
    url: str,
    server_id: int,
    confirmation: Confirmation,
) -> bool:
    """Stop every server that shares files with ``server_id``, then update it.

    The coordinator at ``url`` is asked to stop each server in the chain
    until it reports the server offline. Returns whether the update step was
    reached; unknown or deleted servers, servers that do not allow updates,
    a refusal and an unreachable coordinator all give ``False``.
    """
    server = registry.find(server_id)
    if server is None:
        print(f"ERROR: Cannot found server {server_id}.")
        return False
    if server.deleted:
        print("Server has been deleted.")
        return False

    server_dir, config_dir, _ = server_directories(root, server_id)
    if not _allows_update(config_dir):
        print("This server does not allow update.")
        return False

    if confirmation.declined():
        return False
    if confirmation.further_action_needed():
        print("Noting that updating server means that you may have to stop multiple servers.")
        print("Make sure that you have known all possible consequences.")
        if not make_confirmation("Proceed?"):
            return False

    chain = registry.server_chain(server_id)
    try:
        for member in chain:
            _stop(url, member)
        for member in chain:
            while not _is_stopped(url, member):
                _stop(url, member)
    except _Unreachable:
        return False

    if server.symlink_server_id > 0:
        root_server = registry.find_root_symlink_server(server.id)
        if root_server is None:
            print("ERROR: we cannot found the root server.")
            return False
        if root_server.deleted:
            print("Root server has been deleted.")
            return False
    _apply_update(root, catalog, server, server_id, server_dir)
    return True


def make_command() -> click.Command:
    """Build the ``update`` server command."""

    @click.command(name="update")
    @click.option("--server-id", "server_id", type=click.IntRange(min=0), required=True)
    @click.pass_context
    def update(ctx: click.Context, server_id: int) -> None:
        """Update a server."""
        root = os.environ.get("GSM_ROOT", "")
        confirmation = ctx.find_object(Confirmation) or Confirmation()
        registry = load_server_identity(root)
        catalog = load_available_games(root)
        try:
            cfg = coordinator_configuration()
        except (OSError, ValueError) as err:
            logger.error(err)
            return
        try:
            update_server(root, registry, catalog, coordinator_url(cfg), server_id, confirmation)
        except (UnsupportedPlatformError, RecursiveSymlinkError) as err:
            raise click.ClickException(str(err)) from err

    return update