import os

import pytest
from click.testing import CliRunner

from gsmconsole.cli import BASE_DIRECTORIES, build_cli, initialize_base_directory, initialize_env


@pytest.fixture(autouse=True)
def env(monkeypatch):
    monkeypatch.setenv("GSM_ROOT", "")
    monkeypatch.setenv("GSM_PATH", "")


def test_initialize_env_posix():
    assert initialize_env("/opt/gsm/bin") == ("/opt/gsm/bin", "/opt/gsm")
    assert os.environ["GSM_ROOT"] == "/opt/gsm"
    assert os.environ["GSM_PATH"] == "/opt/gsm/bin"


def test_initialize_env_backslashes():
    assert initialize_env("C:\\gsm\\bin") == ("C:/gsm/bin", "C:/gsm")


def test_initialize_env_without_separator():
    with pytest.raises(IndexError):
        initialize_env("bin")


def test_initialize_base_directory_is_idempotent(tmp_path):
    initialize_base_directory(str(tmp_path))
    initialize_base_directory(str(tmp_path))
    for name in BASE_DIRECTORIES:
        assert (tmp_path / name).is_dir()


@pytest.mark.parametrize(
    "args, expected",
    [
        (["update"], "Update everything.\n"),
        (["update", "--content"], "Update everything.\n"),
        (["update", "--content", "cli"], "Update cli.\n"),
        (["update", "--content", "coordinator"], "Update coordinator.\n"),
        (["update", "--content", "server"], "Update server.\n"),
    ],
)
def test_update_content(args, expected):
    result = CliRunner().invoke(build_cli(), args)
    assert result.exit_code == 0
    assert result.output == expected


def test_update_unknown_content():
    result = CliRunner().invoke(build_cli(), ["update", "--content", "foo"])
    assert result.output == "Unknown content input:  foo\n"


def test_server_group_commands():
    group = build_cli()
    server = group.commands["server"]
    assert {"backup", "install", "remove", "restart", "send", "start", "stop", "update"} <= set(
        server.commands
    )
    assert set(group.commands) == {"coordinator", "server", "update"}


def test_confirmation_flags_hidden():
    result = CliRunner().invoke(build_cli(), ["--help"])
    assert result.exit_code == 0
    assert "--yes" not in result.output
    assert "--no" not in result.output


def test_decline_flag_reaches_subcommand(tmp_path, monkeypatch):
    monkeypatch.setenv("GSM_ROOT", str(tmp_path))
    result = CliRunner().invoke(build_cli(), ["-n", "server", "remove", "--server-id", "1"])
    assert result.exit_code == 0
    assert result.output == ""
    assert list(tmp_path.iterdir()) == []