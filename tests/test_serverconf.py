import pytest
import tomli_w

from gsmconsole import cliconf, serverconf
from gsmconsole.config import Settings


@pytest.fixture
def root(tmp_path, monkeypatch):
    monkeypatch.setenv("GSM_ROOT", str(tmp_path))
    return tmp_path


def _settings(game, gslt="", ip="192.0.2.1", port=27015, maxplayer=24):
    cfg = Settings()
    cfg.set("server.game", game)
    cfg.set("server.param", ["-console"])
    cfg.set("server.ip", ip)
    cfg.set("server.port", port)
    cfg.set("server.maxplayer", maxplayer)
    cfg.set("server.special.default_map", "de_dust2")
    cfg.set("server.special.gslt", gslt)
    return cfg


def test_cs16_without_token():
    cfg = _settings("cs1.6", ip="192.0.2.1", port=27015, maxplayer=24)
    serverconf.cs16_startup_config(cfg)
    params = cfg.get("server.param")
    assert params[0] == "-console"
    assert "-ip 192.0.2.1" in params
    assert "-port 27015" in params
    assert params[-1] == "+map de_dust2"
    assert not any(p.startswith("+sv_setsteamaccount") for p in params)


def test_cs16_with_token():
    cfg = _settings("cs1.6", gslt="token")
    serverconf.cs16_startup_config(cfg)
    assert cfg.get("server.param")[-1] == "+sv_setsteamaccount token"


def test_csgo_always_sets_account():
    cfg = _settings("csgo", gslt="", maxplayer=10)
    serverconf.csgo_startup_config(cfg)
    params = cfg.get("server.param")
    assert params[-1].startswith("+sv_setsteamaccount")
    assert "-maxplayers_override 10" in params
    assert len(params) == 6


def test_build_startup_params_dispatch_and_error():
    cfg = _settings("csgo")
    serverconf.build_startup_params(cfg)
    assert any(p.startswith("-maxplayers_override") for p in cfg.get("server.param"))
    with pytest.raises(ValueError):
        serverconf.build_startup_params(_settings("minecraft"))


@pytest.mark.parametrize(
    ("game", "platform", "exe"),
    [
        ("csgo", "windows", "srcds.exe"),
        ("l4d2", "linux", "srcds_linux"),
        ("cs1.6", "win32", "hlds.exe"),
    ],
)
def test_combine_server_path(root, game, platform, exe):
    config = serverconf.ServerConfig(server=serverconf.ServerSettings(id=3, game=game))
    exe_dir, exe_name = serverconf.combine_server_path(config, platform)
    assert exe_dir == f"{root}/server/3"
    assert exe_name == exe


@pytest.mark.parametrize(("game", "platform"), [("cs1.6", "linux"), ("csgo", "darwin"), ("tf2", "windows")])
def test_combine_server_path_unsupported(root, game, platform):
    config = serverconf.ServerConfig(server=serverconf.ServerSettings(id=1, game=game))
    with pytest.raises(ValueError):
        serverconf.combine_server_path(config, platform)


def test_init_config(root, monkeypatch):
    server_dir = root / "config" / "server" / "7"
    server_dir.mkdir(parents=True)
    cliconf.write_default_game_config("cs1.6", str(server_dir))
    gsm_dir = root / "config" / "gsm"
    gsm_dir.mkdir(parents=True)
    (gsm_dir / "coordinator.toml").write_text(
        tomli_w.dumps({"coordinator": {"ip": "127.0.0.1", "port": 4000}})
    )
    monkeypatch.setenv("GSM_SERVER_ID", "7")
    config = serverconf.init_config()
    server = config.server
    assert server.id == 7
    assert server.game == "cs1.6"
    assert server.args[:3] == ["-console", "-game", "cstrike"]
    assert server.args[server.args.index("+map") + 1] == "de_dust2"
    assert server.port == 27015
    assert server.max_restart_count == -1
    assert server.special == {"gslt": "", "default_map": "de_dust2"}
    assert config.coordinator.ip == "127.0.0.1"
    assert config.coordinator.port == 4000
    assert config.log.output_path[1].startswith(f"{root}/log/server/7/L")


def test_init_config_rejects_bad_server_id(root, monkeypatch):
    server_dir = root / "config" / "server" / "abc"
    server_dir.mkdir(parents=True)
    cliconf.write_default_game_config("csgo", str(server_dir))
    (root / "config" / "gsm").mkdir(parents=True)
    monkeypatch.setenv("GSM_SERVER_ID", "abc")
    with pytest.raises(ValueError):
        serverconf.init_config()