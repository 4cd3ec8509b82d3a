import os
import sys
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from unittest import mock

import pytest

from gsmconsole.archive import zip_path
from gsmconsole.steamcmd import (
    STEAMCMD_URL_ENV,
    UnsupportedPlatformError,
    check_latest_build,
    check_local_build,
    ensure_steamcmd,
    parse_latest_build,
    steamcmd_install,
    steamcmd_param_list,
)

APP_INFO = """AppID : 740, change number : 1/1
"740"
{
    "depots"
    {
        "branches"
        {
            "public"
            {
                "buildid"\t\t"8013489"
                "timeupdated"\t\t"1645000000"
            }
        }
    }
}
"""


def test_param_list_for_regular_app():
    params = steamcmd_param_list("steamcmd.exe", "C:/srv/1", 740, "", True, "")
    assert params == [
        "steamcmd.exe",
        '+force_install_dir "C:/srv/1"',
        "+login anonymous",
        "+app_update 740 validate",
        "+quit",
    ]


def test_param_list_with_mod_and_custom():
    params = steamcmd_param_list("exe", "dir", 740, "  cstrike ", False, " -beta test ")
    assert '+app_set_config 740 mod "cstrike"' in params
    assert params[-2] == "+app_update 740 -beta test"


def test_param_list_half_life_repeats_update_four_times():
    params = steamcmd_param_list("exe", "dir", 90, "cstrike", True, "ignored")
    assert params.count("+app_update 90 validate") == 4
    assert params[0] == "exe"
    assert params[-1] == "+quit"
    assert all("ignored" not in p for p in params)


def test_parse_latest_build():
    assert parse_latest_build(APP_INFO) == 8013489


def test_parse_latest_build_without_branches_raises():
    with pytest.raises(ValueError):
        parse_latest_build('"740"\n{\n}\n')


def _write_manifest(root, server_id, app_id, text):
    directory = root / "server" / str(server_id) / "steamapps"
    directory.mkdir(parents=True)
    (directory / f"appmanifest_{app_id}.acf").write_text(text, encoding="utf-8")


def test_check_local_build(tmp_path):
    _write_manifest(tmp_path, 3, 740, '"AppState"\n{\n\t"appid"\t\t"740"\n\t"buildid"\t\t"8013489"\n}\n')
    assert check_local_build(str(tmp_path), 3, 740) == 8013489


def test_check_local_build_missing_manifest(tmp_path):
    with pytest.raises(FileNotFoundError):
        check_local_build(str(tmp_path), 3, 740)


def test_check_local_build_without_buildid(tmp_path):
    _write_manifest(tmp_path, 3, 740, '"AppState"\n{\n\t"appid"\t\t"740"\n}\n')
    with pytest.raises(ValueError):
        check_local_build(str(tmp_path), 3, 740)


def test_install_rejects_unsupported_platform(tmp_path):
    with mock.patch.object(sys, "platform", "darwin"):
        with pytest.raises(UnsupportedPlatformError):
            steamcmd_install(["windows", "linux"], str(tmp_path), 740, "", True, "")


def test_check_latest_build_requires_windows():
    with mock.patch.object(sys, "platform", "linux"):
        with pytest.raises(UnsupportedPlatformError):
            check_latest_build(740)


def test_install_on_windows_runs_steamcmd(tmp_path, monkeypatch):
    monkeypatch.setenv("GSM_PATH", str(tmp_path))
    steam_dir = tmp_path / "steamcmd"
    steam_dir.mkdir()
    (steam_dir / "steamcmd.exe").write_bytes(b"exe")
    executable = f"{tmp_path}/steamcmd/steamcmd.exe"
    with mock.patch.object(sys, "platform", "win32"), mock.patch("subprocess.run") as run:
        steamcmd_install(["windows"], "C:/srv/2", 740, "", True, "")
    expected = steamcmd_param_list(executable, "C:/srv/2", 740, "", True, "")
    assert run.call_args.args[0] == expected


def test_ensure_keeps_existing_executable(tmp_path, monkeypatch):
    monkeypatch.delenv(STEAMCMD_URL_ENV, raising=False)
    executable = tmp_path / "steamcmd.exe"
    executable.write_bytes(b"original")
    ensure_steamcmd(str(tmp_path), str(executable))
    assert executable.read_bytes() == b"original"


def test_ensure_without_url_raises(tmp_path, monkeypatch):
    monkeypatch.delenv(STEAMCMD_URL_ENV, raising=False)
    with pytest.raises(RuntimeError):
        ensure_steamcmd(str(tmp_path / "steamcmd"), str(tmp_path / "steamcmd" / "steamcmd.exe"))


@pytest.fixture
def zip_server(tmp_path, monkeypatch):
    source = tmp_path / "src"
    source.mkdir()
    (source / "steamcmd.exe").write_bytes(b"binary body")
    archive = tmp_path / "bundle.zip"
    zip_path(str(source / "steamcmd.exe"), str(archive))
    body = archive.read_bytes()

    class Handler(BaseHTTPRequestHandler):
        def do_GET(self):
            self.send_response(200)
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def log_message(self, *args):
            pass

    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")
    monkeypatch.setenv("no_proxy", "127.0.0.1,localhost")
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{httpd.server_address[1]}/steamcmd.zip"
    httpd.shutdown()
    httpd.server_close()


def test_ensure_downloads_and_unpacks(tmp_path, monkeypatch, zip_server):
    monkeypatch.setenv(STEAMCMD_URL_ENV, zip_server)
    directory = tmp_path / "bin" / "steamcmd"
    executable = directory / "steamcmd.exe"
    ensure_steamcmd(str(directory), str(executable))
    assert executable.read_bytes() == b"binary body"
    assert not os.path.exists(directory / "steamcmd.zip")