"""The ``gsm`` command: environment setup and the command tree."""

from __future__ import annotations

import os
from collections.abc import Sequence

import click

from gsmconsole import logger
from gsmconsole.backup import make_command as make_backup_command
from gsmconsole.cliconf import init_config
from gsmconsole.coordcmd import make_command as make_coordinator_command
from gsmconsole.install import make_command as make_install_command
from gsmconsole.options import Confirmation
from gsmconsole.remove import make_command as make_remove_command
from gsmconsole.search import make_command as make_search_command
from gsmconsole.servercontrol import make_commands as make_control_commands
from gsmconsole.start import make_command as make_start_command
from gsmconsole.textutil import subtract
from gsmconsole.update import make_command as make_server_update_command

BASE_DIRECTORIES = (
    "backup",
    "config",
    "config/gsm",
    "config/server",
    "log",
    "log/gsm",
    "log/server",
    "server",
)


def initialize_env(cwd: str | None = None) -> tuple[str, str]:
    """Set ``$GSM_PATH`` to ``cwd`` and ``$GSM_ROOT`` to its parent.

    Backslashes become forward slashes. Returns ``(bin_dir, root_dir)``.
    """
    bin_dir = (os.getcwd() if cwd is None else cwd).replace("\\", "/")
    root_dir = subtract(bin_dir, 0, bin_dir.rfind("/"))
    os.environ["GSM_ROOT"] = root_dir
    os.environ["GSM_PATH"] = bin_dir
    return bin_dir, root_dir


def initialize_base_directory(root: str) -> None:
    """Create the backup, config, log and server directories under ``root``."""
    for name in BASE_DIRECTORIES:
        os.makedirs(f"{root}/{name}", exist_ok=True)


def _update_command() -> click.Command:
    @click.command(name="update")
    @click.option(
        "--content",
        default="all",
        is_flag=False,
        flag_value="all",
        help="Which content you want to update",
    )
    def update(content: str) -> None:
        """Update the manager's components."""
        messages = {
            "all": "Update everything.",
            "cli": "Update cli.",
            "coordinator": "Update coordinator.",
            "server": "Update server.",
        }
        if content in messages:
            print(messages[content])
        else:
            print("Unknown content input: ", content)

    return update


def build_cli() -> click.Group:
    """Build the full ``gsm`` command tree."""

    @click.group(name="gsm")
    @click.option("--yes", "-y", "agree", is_flag=True, hidden=True, help="Confirm.")
    @click.option("--no", "-n", "decline", is_flag=True, hidden=True, help="Decline.")
    @click.pass_context
    def gsm(ctx: click.Context, agree: bool, decline: bool) -> None:
        """Game server manager."""
        ctx.obj = Confirmation(agree=agree, decline=decline)

    @click.group(name="server")
    def server() -> None:
        """Manage servers."""

    for command in (
        make_backup_command(),
        make_install_command(),
        make_remove_command(),
        *make_control_commands(),
        make_search_command(),
        make_start_command(),
        make_server_update_command(),
    ):
        server.add_command(command)

    gsm.add_command(make_coordinator_command())
    gsm.add_command(server)
    gsm.add_command(_update_command())
    return gsm


def main(argv: Sequence[str] | None = None) -> None:
    """Prepare the environment and directories, then run the command line."""
    _, root = initialize_env()
    initialize_base_directory(root)
    logger.init(init_config().log)
    build_cli()(args=list(argv) if argv is not None else None, prog_name="gsm")