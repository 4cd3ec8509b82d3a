"""Installing and updating game servers with SteamCMD."""

from __future__ import annotations

import os
import subprocess
import sys
from collections.abc import Iterable

from gsmconsole import logger
from gsmconsole.archive import unzip
from gsmconsole.download import download_file
from gsmconsole.paths import exist

STEAMCMD_URL_ENV = "GSM_STEAMCMD_URL"
HALF_LIFE_APP_ID = 90


class UnsupportedPlatformError(RuntimeError):
    """Raised when an operation cannot run on the current platform."""


def _goos() -> str:
    platform = sys.platform
    if platform in ("win32", "cygwin"):
        return "windows"
    if platform.startswith("linux"):
        return "linux"
    return platform.rstrip("0123456789")


def steamcmd_param_list(
    executable: str,
    install_dir: str,
    app_id: int,
    mod_name: str,
    validate: bool,
    custom: str,
) -> list[str]:
    """Return the SteamCMD command line, executable first, for installing ``app_id``."""
    params = [executable, f'+force_install_dir "{install_dir}"', "+login anonymous"]
    mod_name = mod_name.strip()
    if mod_name:
        params.append(f'+app_set_config {app_id} mod "{mod_name}"')
    if app_id == HALF_LIFE_APP_ID:
        # Half-Life needs the update run several times over.
        update = f"+app_update {app_id}" + (" validate" if validate else "")
        params.extend([update] * 4)
    else:
        update = f"+app_update {app_id}"
        custom = custom.strip()
        if custom:
            update += f" {custom}"
        if validate:
            update += " validate"
        params.append(update)
    params.append("+quit")
    return params


def ensure_steamcmd(directory: str, executable: str) -> None:
    """Make sure ``executable`` exists, downloading and unpacking SteamCMD if not.

    The archive is fetched from the URL in ``$GSM_STEAMCMD_URL``.
    """
    os.makedirs(directory, exist_ok=True)
    if exist(executable):
        return
    url = os.environ.get(STEAMCMD_URL_ENV)
    if not url:
        raise RuntimeError(
            f"Unable to download steamCMD: set {STEAMCMD_URL_ENV} to the archive's URL"
        )
    archive_path = f"{directory}/steamcmd.zip"
    download_file(archive_path, url)
    unzip(archive_path, directory)
    os.remove(archive_path)


def parse_latest_build(output: str) -> int:
    """Extract the public branch's build id from ``+app_info_print`` output."""
    text = output[output.index('"branches"') : len(output) - 1]
    text = text[text.index('"public"') : text.index("}") + 1]
    text = text[text.index("{") + 1 : text.index("}")]
    fields = text.split()
    if len(fields) < 2:
        raise ValueError("no build id in the public branch")
    return int(fields[1].replace('"', ""))


def check_latest_build(app_id: int) -> int:
    """Ask SteamCMD for the newest public build of ``app_id``; Windows only."""
    if _goos() != "windows":
        raise UnsupportedPlatformError(
            f"Checking the latest build is not supported on {sys.platform}."
        )
    executable = f"{os.environ.get('GSM_PATH', '')}/steamcmd/steamcmd.exe"
    result = subprocess.run(
        [
            executable,
            "+login anonymous",
            "+app_info_update 1",
            f"+app_info_print {app_id}",
            "+quit",
        ],
        capture_output=True,
        check=True,
    )
    return parse_latest_build(result.stdout.decode("utf-8", errors="replace"))


def check_local_build(root: str, server_id: int, app_id: int) -> int:
    """Read the installed build id from the server's app manifest.

    A manifest that cannot be opened raises :class:`OSError`; one without a
    build id raises :class:`ValueError`.
    """
    manifest = f"{root}/server/{server_id}/steamapps/appmanifest_{app_id}.acf"
    with open(manifest, encoding="utf-8", errors="replace") as handle:
        for line in handle:
            if "buildid" in line:
                fields = line.split()
                if len(fields) < 2:
                    break
                return int(fields[1].replace('"', ""))
    raise ValueError("Looks like the appmanifest file has been corrupted.")


def steamcmd_install(
    platforms: Iterable[str],
    server_directory: str,
    app_id: int,
    mod_name: str,
    validate: bool,
    custom: str,
) -> None:
    """Install ``app_id`` into ``server_directory`` if the game supports this platform."""
    system = _goos()
    if system not in set(platforms):
        raise UnsupportedPlatformError(
            "We cannot provide any installation because this game does not support your platform."
        )
    if system != "windows":
        return
    directory = f"{os.environ.get('GSM_PATH', '')}/steamcmd"
    executable = f"{directory}/steamcmd.exe"
    ensure_steamcmd(directory, executable)
    command = steamcmd_param_list(executable, server_directory, app_id, mod_name, validate, custom)
    print(command)
    try:
        subprocess.run(command, check=False)
    except OSError as err:
        logger.error(err)