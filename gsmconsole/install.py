"""Installing a server: freshly, by importing existing files, or as a symlink of another."""

from __future__ import annotations

import os
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

import click

from gsmconsole import status
from gsmconsole.cliconf import write_default_game_config
from gsmconsole.fileops import copy_dir
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
from gsmconsole.paths import exist
from gsmconsole.steamcmd import UnsupportedPlatformError, steamcmd_install

_PAD = 10


def format_installation_info(keys: Sequence[str], values: Sequence[str]) -> list[str]:
    """Return one line per key with the values aligned in a column.

    The column starts ten characters after the end of the alphabetically last
    key. Keys and values of different lengths give no lines.
    """
    if len(keys) != len(values) or not keys:
        return []
    width = len(sorted(keys)[-1]) + _PAD
    return [f"{key:<{width}}{value}" for key, value in zip(keys, values)]


def _elapsed(start: float) -> str:
    return f"{time.perf_counter() - start:.6f}s"


@dataclass
class Installer:
    """Adds servers to the registry and lays out their directories under ``root``."""

    root: str
    registry: IdentityRegistry
    catalog: GameCatalog
    confirmation: Confirmation = field(default_factory=Confirmation)
    confirm: Callable[[str], bool] = make_confirmation
    steamcmd: Callable[..., None] = steamcmd_install

    def allocate(self, game: str, symlink_server_id: int) -> tuple[ServerIdentity, bool]:
        """Pick the identity for a new server.

        The first deleted server is taken over in place and ``True`` is
        returned with it; otherwise a new identity numbered after the last is
        returned with ``False`` and is not yet part of the registry.
        """
        for server in self.registry.servers:
            if server.deleted:
                server.deleted = False
                server.game = game
                server.symlink_server_id = symlink_server_id
                return server, True
        new = ServerIdentity(
            id=len(self.registry) + 1,
            game=game,
            deleted=False,
            symlink_server_id=symlink_server_id,
        )
        return new, False

    # Helpers ---------------------------------------------------------------

    def _game_name(self, game: str) -> str:
        found = self.catalog.find(game)
        if found is None:
            raise ValueError(f'Unable to find the game "{game}"')
        return found.name

    def _show_info(self, keys: Sequence[str], values: Sequence[str]) -> None:
        print("Installation information")
        for line in format_installation_info(keys, values):
            print(line)

    def _approved(self) -> bool:
        if not self.confirmation.further_action_needed():
            return True
        print("You are now going to proceed this installation.")
        return self.confirm("Proceed?")

    def _commit(self, server: ServerIdentity, reused: bool) -> None:
        if not reused:
            self.registry.servers.append(server)
        self.registry.save()

    @staticmethod
    def _mkdir(label: str, path: str) -> bool:
        print(f"Creating {label} directory...", end="", flush=True)
        try:
            os.mkdir(path)
        except OSError as err:
            print(status.CLI_INSTALL_SERVER_DIRECTORY_ALREADY_EXIST.write_detail(str(err)))
            return False
        print("OK")
        return True

    @staticmethod
    def _link(target: str, path: str) -> bool:
        print(f"[{target} -> {path}] Creating symbolic link...", end="", flush=True)
        try:
            os.symlink(target, path, target_is_directory=True)
        except OSError as err:
            print(status.CLI_INSTALL_UNABLE_TO_CREATE_SYMLINK.write_detail(str(err)))
            return False
        print("OK")
        return True

    @staticmethod
    def _run_steps(steps: Sequence[Callable[[], bool]]) -> None:
        for step in steps:
            if not step():
                return

    def _plain_directories(self, server_id: int) -> None:
        server_dir, config_dir, log_dir = server_directories(self.root, server_id)
        self._run_steps(
            [
                lambda: self._mkdir("log", log_dir),
                lambda: self._mkdir("server", server_dir),
                lambda: self._mkdir("config", config_dir),
            ]
        )

    # Installation kinds ----------------------------------------------------

    def install_symlink(self, symlink_server_id: int) -> ServerIdentity | None:
        """Install a server whose files are a symbolic link to another server's.

        Returns the installed server, or ``None`` when nothing was installed.
        """
        target = self.registry.find(symlink_server_id)
        if target is None:
            print(status.CLI_INSTALL_SYMLINK_SERVER_NOT_EXIST.write_detail(""))
            return None
        if target.symlink_server_id != 0:
            try:
                target = self.registry.find_root_symlink_server(target.id)
            except RecursiveSymlinkError as err:
                print(
                    status.CLI_INSTALL_SYMLINK_SERVER_ID_FOUND_RECURSIVE_REFERENCING.write_detail(
                        str(err)
                    )
                )
                return None
            if target is None:
                print(status.CLI_INSTALL_ROOT_SYMLINK_SERVER_NOT_EXIST.write_detail(""))
                return None
        if target.deleted:
            print(status.CLI_INSTALL_SYMLINK_SERVER_DELETED.write_detail(""))
            return None

        server, reused = self.allocate(target.game, symlink_server_id)
        if self.confirmation.declined():
            return None

        symlink_dir = server_directories(self.root, server.symlink_server_id)[0]
        server_dir, config_dir, log_dir = server_directories(self.root, server.id)
        self._show_info(
            [
                "Server ID:",
                "Game:",
                "Symbolic server ID:",
                "Symbolic server path:",
                "Server path:",
                "Server config path:",
                "Server logging path:",
            ],
            [
                str(server.id),
                self._game_name(server.game),
                str(server.symlink_server_id),
                symlink_dir,
                server_dir,
                config_dir,
                log_dir,
            ],
        )
        if not self._approved():
            return None

        if not exist(symlink_dir):
            print("Unexpected error occured: symlink server dir has been deleted!")
            return None

        start = time.perf_counter()
        self._commit(server, reused)
        root_server_dir = server_directories(self.root, target.id)[0]
        print("Generating server directories...")
        self._run_steps(
            [
                lambda: self._mkdir("log", log_dir),
                lambda: self._link(root_server_dir, server_dir),
                lambda: self._mkdir("config", config_dir),
            ]
        )
        print("OK")

        print("Writing default configuration...", end="", flush=True)
        write_default_game_config(server.game, config_dir)
        print("OK")
        print("Installation complete. Time elapsed: ", _elapsed(start))
        return server

    def install_import(self, game: str, import_dir: str) -> ServerIdentity | None:
        """Install a server by copying the files of an existing one from ``import_dir``."""
        if not import_dir:
            print("Must explicitly declare the import directory.")
            return None
        if not exist(import_dir):
            print('Directory not found: "', import_dir, '"')
            return None
        if self.catalog.find(game) is None:
            print("ERROR: Can't find the game!")
            return None

        server, reused = self.allocate(game, 0)
        if self.confirmation.declined():
            return None

        server_dir, config_dir, log_dir = server_directories(self.root, server.id)
        self._show_info(
            [
                "Server ID:",
                "Game:",
                "External server package directory:",
                "Server path:",
                "Server config path:",
                "Server logging path:",
            ],
            [
                str(server.id),
                self._game_name(server.game),
                import_dir,
                server_dir,
                config_dir,
                log_dir,
            ],
        )
        if not self._approved():
            return None

        start = time.perf_counter()
        self._commit(server, reused)

        print("Generating server directories...", end="", flush=True)
        self._plain_directories(server.id)
        print("OK")

        print("Copying files...", end="", flush=True)
        copy_dir(import_dir, server_dir)
        print("OK")

        print("Writing default configurations...", end="", flush=True)
        write_default_game_config(game, config_dir)
        print("OK")
        print("Installation complete. Time elapsed: ", _elapsed(start))
        return server

    def install_new(self, game: str) -> ServerIdentity | None:
        """Install a fresh server of ``game`` with the game's installer."""
        print("Newly installed server.")
        if not game:
            print(status.CLI_INSTALL_EXPLICITLY_DECLARE_WHICH_GAME_TO_INSTALL.write_detail(""))
            return None
        found = self.catalog.find(game)
        if found is None:
            print("Unable to find the game.")
            return None

        server, reused = self.allocate(game, 0)
        if self.confirmation.declined():
            return None

        server_dir, config_dir, log_dir = server_directories(self.root, server.id)
        self._show_info(
            ["Server ID:", "Game:", "Server path:", "Server config path:", "Server logging path:"],
            [str(server.id), self._game_name(server.game), server_dir, config_dir, log_dir],
        )
        if not self._approved():
            return None

        start = time.perf_counter()
        self._commit(server, reused)

        print("Generating server directories...", end="", flush=True)
        print()
        self._plain_directories(server.id)
        print("OK")

        print("Installing server...")
        specific = found.specific
        if specific.get("install_via") == "steamcmd":
            app_id = int(specific["appid"])
            mod = specific.get("mod")
            mod_name = mod if isinstance(mod, str) else ""
            custom = ""
            if "custom" in specific:
                if not isinstance(specific["custom"], str):
                    raise ValueError('"custom" must be a string')
                custom = specific["custom"]
            platforms = [str(p) for p in specific.get("platform", [])]
            print(app_id, mod_name, custom)
            self.steamcmd(platforms, server_dir, app_id, mod_name, True, custom)
        print("OK")

        print("Writing default configurations...", end="", flush=True)
        write_default_game_config(game, config_dir)
        print("OK")
        print("Installation complete. Time elapsed: ", _elapsed(start))
        return server


def make_command() -> click.Command:
    """Build the ``install`` command."""

    @click.command(name="install")
    @click.option(
        "--game",
        default="",
        help='Game to install. Must explicitly declared unless "--symlink" is set.',
    )
    @click.option("--import", "is_import", is_flag=True, help="Import an existing server.")
    @click.option("--import-dir", "import_dir", default="", help="The directory of external package.")
    @click.option("--symlink", is_flag=True, help="Link to another server's files.")
    @click.option(
        "--symlink-server-id",
        "symlink_server_id",
        type=click.IntRange(min=0),
        default=0,
        help="Symbolic link server id.",
    )
    @click.pass_context
    def install(
        ctx: click.Context,
        game: str,
        is_import: bool,
        import_dir: str,
        symlink: bool,
        symlink_server_id: int,
    ) -> None:
        """Install a server."""
        if symlink and is_import:
            print(status.CLI_INSTALL_NOT_ALLOWED_BOTH_SET_SYMLINK_AND_INSTALL.write_detail(""))
            return
        root = os.environ.get("GSM_ROOT", "")
        confirmation = ctx.find_object(Confirmation) or Confirmation()
        installer = Installer(
            root=root,
            registry=load_server_identity(root),
            catalog=load_available_games(root),
            confirmation=confirmation,
        )
        try:
            if symlink:
                installer.install_symlink(symlink_server_id)
            elif is_import:
                installer.install_import(game, import_dir)
            else:
                installer.install_new(game)
        except UnsupportedPlatformError as err:
            raise click.ClickException(str(err)) from err

    return install