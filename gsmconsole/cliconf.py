"""Configuration for the command-line tool: logging, coordinator and game defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime

from gsmconsole.config import ConfigSpec, Settings, load, test_or_insert
from gsmconsole.logger import LogConfig


@dataclass
class CliConfig:
    """Settings the command-line tool starts with."""

    log: LogConfig = field(default_factory=LogConfig)


def _root() -> str:
    return os.environ.get("GSM_ROOT", "")


def init_config() -> CliConfig:
    """Log to stdout and to today's file under ``$GSM_ROOT/log/gsm``."""
    log_path = f"{_root()}/log/gsm/L{datetime.now():%Y%m%d}.log"
    return CliConfig(log=LogConfig(output_path=["stdout", log_path]))


def write_coordinator_config_field(cfg: Settings) -> None:
    """Fill in coordinator defaults that are not set yet."""
    test_or_insert(cfg, "coordinator.ip", "localhost")
    test_or_insert(cfg, "coordinator.port", 3484)
    # Accept only other coordinators, or servers too.
    test_or_insert(cfg, "coordinator.pure", False)
    # When set, this coordinator connects to the other one.
    test_or_insert(cfg, "coordinator.other_coordinator_address", "")


def coordinator_configuration() -> Settings:
    """Load the coordinator configuration, complete its defaults and save it."""
    cfg = load(
        ConfigSpec(name="coordinator", type="toml", path=[f"{_root()}/config/gsm"])
    )
    write_coordinator_config_field(cfg)
    cfg.write(cfg.config_file_used)
    return cfg


def cs16_config_field(cfg: Settings) -> None:
    """Counter-Strike 1.6 specific defaults."""
    # Leave the token empty for imported servers.
    test_or_insert(cfg, "server.special.gslt", "")
    test_or_insert(cfg, "server.special.default_map", "de_dust2")
    cfg.set("server.param", ["-console", "-game cstrike"])


def csgo_config_field(cfg: Settings) -> None:
    """Counter-Strike: Global Offensive specific defaults."""
    test_or_insert(cfg, "server.special.gslt", "")
    test_or_insert(cfg, "server.special.default_map", "de_dust2")
    cfg.set(
        "server.param",
        [
            "-console",
            "-game csgo",
            "+game_type 0",
            "+game_mode 0",
            "+mapgroup mg_active",
            "-tickrate 64",
            "-usercon",
        ],
    )


def write_game_config_special(cfg: Settings, game: str) -> None:
    """Apply the defaults specific to ``game``, if it has any."""
    match game:
        case "csgo":
            csgo_config_field(cfg)
        case "cs1.6":
            cs16_config_field(cfg)


def write_game_config_field(cfg: Settings, game: str) -> None:
    """Fill in the general server defaults, then the game's own."""
    test_or_insert(cfg, "server.game", game)
    test_or_insert(cfg, "server.ip", "localhost")
    test_or_insert(cfg, "server.port", 27015)
    test_or_insert(cfg, "server.name", "A server under Game Server Manager")
    test_or_insert(cfg, "server.param", [])
    # -1 means unlimited players.
    test_or_insert(cfg, "server.maxplayer", 24)
    test_or_insert(cfg, "server.allow_update", True)
    test_or_insert(cfg, "server.auto_update", False)
    test_or_insert(cfg, "server.update_on_start", False)
    test_or_insert(cfg, "server.auto_restart", True)
    # -1 means never retry.
    test_or_insert(cfg, "server.restart_after_delay", 5)
    # -1 means unlimited restarts.
    test_or_insert(cfg, "server.max_restart_count", -1)
    test_or_insert(cfg, "server.max_retry_coordinator_startup_connection_count", 5)
    write_game_config_special(cfg, game)


def write_default_game_config(game: str, config_directory: str) -> None:
    """Create ``config.toml`` with defaults in ``config_directory``; never overwrites."""
    cfg = Settings(name="config", config_type="toml", paths=[config_directory])
    write_game_config_field(cfg, game)
    cfg.safe_write()