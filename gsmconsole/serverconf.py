"""Configuration of a running game server and its launch command."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from gsmconsole.config import ConfigSpec, Settings, load
from gsmconsole.logger import LogConfig


@dataclass
class ServerSettings:
    """Options of one game server."""

    id: int = 0
    allow_update: bool = False
    auto_restart: bool = False
    auto_update: bool = False
    game: str = ""
    ip: str = ""
    max_restart_count: int = 0
    max_retry_coordinator_startup_connection_count: int = 0
    max_player: int = 0
    name: str = ""
    args: list[str] = field(default_factory=list)
    port: int = 0
    restart_after_delay: int = 0
    update_on_start: bool = False
    special: dict[str, Any] = field(default_factory=dict)


@dataclass
class CoordinatorAddress:
    """Where the coordinator listens."""

    ip: str = ""
    port: int = 0


@dataclass
class ServerConfig:
    """Everything a server daemon starts with."""

    log: LogConfig = field(default_factory=LogConfig)
    server: ServerSettings = field(default_factory=ServerSettings)
    coordinator: CoordinatorAddress = field(default_factory=CoordinatorAddress)


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _as_int(value: Any) -> int:
    if value is None:
        return 0
    try:
        return int(value.strip()) if isinstance(value, str) else int(value)
    except (TypeError, ValueError):
        return 0


def _as_uint(value: Any) -> int:
    return max(_as_int(value), 0)


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "t", "true")
    return bool(value)


def _as_str_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    if isinstance(value, (list, tuple)):
        return [_as_str(item) for item in value]
    return []


def _as_str_map(value: Any) -> dict[str, Any]:
    return {str(k): v for k, v in value.items()} if isinstance(value, dict) else {}


def _root() -> str:
    return os.environ.get("GSM_ROOT", "")


def cs16_startup_config(cfg: Settings) -> None:
    """Append Counter-Strike 1.6 launch parameters to ``server.param``."""
    params = _as_str_list(cfg.get("server.param"))
    params += [
        f"-ip {_as_str(cfg.get('server.ip'))}",
        f"-port {_as_uint(cfg.get('server.port'))}",
        f"-maxplayers {_as_int(cfg.get('server.maxplayer'))}",
        f"+map {_as_str(cfg.get('server.special.default_map'))}",
    ]
    # Only servers installed with a token get one; imported ones must not.
    gslt = _as_str(cfg.get("server.special.gslt"))
    if gslt:
        params.append(f"+sv_setsteamaccount {gslt}")
    cfg.set("server.param", params)


def csgo_startup_config(cfg: Settings) -> None:
    """Append Counter-Strike: Global Offensive launch parameters to ``server.param``."""
    params = _as_str_list(cfg.get("server.param"))
    params += [
        f"-ip {_as_str(cfg.get('server.ip'))}",
        f"-port {_as_uint(cfg.get('server.port'))}",
        f"-maxplayers_override {_as_int(cfg.get('server.maxplayer'))}",
        f"+map {_as_str(cfg.get('server.special.default_map'))}",
        f"+sv_setsteamaccount {_as_str(cfg.get('server.special.gslt'))}",
    ]
    cfg.set("server.param", params)


def build_startup_params(cfg: Settings) -> None:
    """Extend ``server.param`` for the configured game; unknown games raise :class:`ValueError`."""
    game = _as_str(cfg.get("server.game"))
    match game:
        case "cs1.6":
            cs16_startup_config(cfg)
        case "csgo":
            csgo_startup_config(cfg)
        case _:
            raise ValueError(f'Not supported game: "{game}"')


def init_config() -> ServerConfig:
    """Load the configuration of the server named by ``$GSM_SERVER_ID``."""
    raw_id = os.environ.get("GSM_SERVER_ID", "")
    root = _root()
    server_cfg = load(
        ConfigSpec(name="config", type="toml", path=[f"{root}/config/server/{raw_id}"])
    )
    coordinator_cfg = load(
        ConfigSpec(name="coordinator", type="toml", path=[f"{root}/config/gsm"])
    )
    build_startup_params(server_cfg)
    args = [piece for param in _as_str_list(server_cfg.get("server.param")) for piece in param.split(" ")]
    if not raw_id.isdigit():
        raise ValueError(f'invalid server ID "{raw_id}"')
    server_id = int(raw_id)
    log_path = f"{root}/log/server/{server_id}/L{datetime.now():%Y%m%d}.log"
    get = server_cfg.get
    return ServerConfig(
        log=LogConfig(output_path=["stdout", log_path]),
        server=ServerSettings(
            id=server_id,
            allow_update=_as_bool(get("server.allow_update")),
            auto_restart=_as_bool(get("server.auto_restart")),
            auto_update=_as_bool(get("server.auto_update")),
            game=_as_str(get("server.game")),
            ip=_as_str(get("server.ip")),
            max_restart_count=_as_int(get("server.max_restart_count")),
            max_retry_coordinator_startup_connection_count=_as_int(
                get("server.max_retry_coordinator_startup_connection_count")
            ),
            max_player=_as_int(get("server.maxplayer")),
            name=_as_str(get("server.name")),
            args=args,
            port=_as_uint(get("server.port")),
            restart_after_delay=_as_int(get("server.restart_after_delay")),
            update_on_start=_as_bool(get("server.update_on_start")),
            special=_as_str_map(get("server.special")),
        ),
        coordinator=CoordinatorAddress(
            ip=_as_str(coordinator_cfg.get("coordinator.ip")),
            port=_as_uint(coordinator_cfg.get("coordinator.port")),
        ),
    )


def _platform_name(platform: str | None) -> str:
    name = (platform or sys.platform).lower()
    if name in ("win32", "windows", "cygwin"):
        return "windows"
    if name.startswith("linux"):
        return "linux"
    return name


def combine_server_path(config: ServerConfig, platform: str | None = None) -> tuple[str, str]:
    """Return the server's directory and executable name for ``platform``."""
    exe_dir = f"{_root()}/server/{config.server.id}"
    system = _platform_name(platform)
    game = config.server.game
    match game:
        case "csgo" | "insurgency" | "l4d" | "l4d2" | "css":
            if system == "windows":
                exe_name = "srcds.exe"
            elif system == "linux":
                exe_name = "srcds_linux"
            else:
                raise ValueError("Not supported")
        case "cs1.6":
            if system != "windows":
                raise ValueError("Not supported.")
            exe_name = "hlds.exe"
        case _:
            raise ValueError(f'Unsupported game "{game}"')
    return exe_dir, exe_name