"""Removing an installed server's files and marking it deleted."""

from __future__ import annotations

import os
import shutil
from collections.abc import Sequence

import click

from gsmconsole.identity import IdentityRegistry, load_server_identity, server_directories
from gsmconsole.interact import make_confirmation
from gsmconsole.options import Confirmation
from gsmconsole.paths import exist


def _remove_all(path: str) -> None:
    if os.path.islink(path) or os.path.isfile(path):
        os.unlink(path)
    elif os.path.isdir(path):
        shutil.rmtree(path)


def _go_list(items: Sequence[str]) -> str:
    return f"[{' '.join(items)}]"


def remove_server(
    root: str,
    registry: IdentityRegistry,
    server_id: int,
    component_keep: Sequence[str],
) -> list[str]:
    """Mark ``server_id`` deleted, delete its directories and save the registry.

    With an empty ``component_keep`` the server, config and log directories
    are all deleted. Otherwise the server directory is deleted, and so is
    each directory named in ``component_keep`` (``log`` or ``config``);
    other names are reported as unknown. Returns the paths deleted.
    """
    for server in registry.servers:
        if server.id == server_id:
            print("Trigger removal process.")
            server.deleted = True

    server_dir, config_dir, log_dir = server_directories(root, server_id)
    removed: list[str] = []

    def drop(path: str) -> None:
        if exist(path) or os.path.islink(path):
            _remove_all(path)
            removed.append(path)

    if not component_keep:
        for path in (server_dir, config_dir, log_dir):
            drop(path)
    else:
        drop(server_dir)
        for component in component_keep:
            if component == "log":
                drop(log_dir)
            elif component == "config":
                drop(config_dir)
            else:
                print("Unknown component:", component)

    registry.save()
    return removed


def make_command() -> click.Command:
    """Build the ``remove`` command."""

    @click.command(name="remove")
    @click.option("--server-id", "server_id", type=click.IntRange(min=0), required=True)
    @click.option(
        "--component-keep",
        "component_keep",
        multiple=True,
        help="Which component you want to keep, blank means remove everything",
    )
    @click.pass_context
    def remove(ctx: click.Context, server_id: int, component_keep: tuple[str, ...]) -> None:
        """Remove a server."""
        confirmation = ctx.find_object(Confirmation) or Confirmation()
        if confirmation.declined():
            return
        keep = [part for value in component_keep for part in value.split(",") if part]
        print("You want to keep following components: ", _go_list(keep))
        print("Otherwise will be removed.")
        if confirmation.further_action_needed():
            print("You will going to proceed the removal.")
            if not make_confirmation("Proceed?"):
                return
        root = os.environ.get("GSM_ROOT", "")
        registry = load_server_identity(root)
        remove_server(root, registry, server_id, keep)
        print(
            f"server ID: {server_id} has been removed. "
            f"Component kept: {_go_list(keep)}. Otherwise are removed."
        )

    return remove