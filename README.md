# gsmconsole

`gsmconsole` manages dedicated game servers from the command line. It lays
out a server's directories and configuration, either as a fresh install, as
a copy of an existing server directory, or as a symbolic link to another
server's files. It starts a server's daemon process, passes restart, stop
and console commands to running servers through a coordinator reached over
a WebSocket, updates servers with SteamCMD, backs them up and removes them.

## Installation

```
pip install .
```

This installs the `gsm` command.

## Directory layout

`gsm` takes its working directory as the binary directory (`$GSM_PATH`) and
the parent of that directory as the root (`$GSM_ROOT`). The root holds:

```
backup/
config/gsm/        coordinator.toml, available_games.json, server_identity.json
config/server/<id>/config.toml
log/gsm/
log/server/<id>/
server/<id>/
```

Missing directories are created every time `gsm` runs.

`config/gsm/available_games.json` lists the games that can be installed,
under the key `AvailableGames`; each entry has `name`, `short` and
`specific` (for SteamCMD installs: `install_via`, `appid`, `platform`, and
optionally `mod` and `custom`). `config/gsm/server_identity.json` records
every installed server under the key `server_identity`.

## Usage

```
gsm coordinator start
gsm coordinator stop
gsm coordinator restart

gsm server install --game csgo
gsm server install --import --import-dir /srv/old-hlds --game cs1.6
gsm server install --symlink --symlink-server-id 1

gsm server start --server-id 1
gsm server send --server-id 1 say hello
gsm server restart --server-id 1
gsm server stop --server-id 1
gsm server update --server-id 1
gsm server backup --server-id 1
gsm server remove --server-id 1 --component-keep log
gsm server search counter --short cs

gsm update --content all
```

Commands that ask for confirmation accept `-y` / `--yes` to agree, or
`-n` / `--no` to decline, without prompting. Both go before the
subcommand, for example `gsm -y server install --game csgo`.

A deleted server's number is taken over by the next install.
`gsm server update` asks the coordinator to stop every server that shares
files with the given one, waits until each is reported offline, and then
runs SteamCMD when the installed build differs from the newest public one.

## Configuration

`config/gsm/coordinator.toml` is completed with defaults on first use:

```toml
[coordinator]
ip = "localhost"
port = 3484
pure = false
other_coordinator_address = ""
```

Each server gets `config/server/<id>/config.toml` with its game, address,
port, start-up parameters, player limit and restart policy. Game-specific
defaults and launch parameters exist for `csgo` and `cs1.6`.

When SteamCMD is not yet present under `$GSM_PATH/steamcmd`, its archive is
downloaded from the URL in the environment variable `GSM_STEAMCMD_URL`.

## What this package does not do

- It contains no coordinator and no server daemon. `gsm coordinator start`
  launches `gsm-coordinator.exe` and `gsm server start` launches
  `gsm-server` (`gsm-server.exe` on Windows) from `$GSM_PATH`; those
  programs must be provided separately.
- SteamCMD installs and build checks run on Windows only. On Linux a
  SteamCMD install does nothing, and `gsm server update` stops with an
  error when it needs the latest build.
- There is no command to attach to a server's console or to validate a
  server's files.

## Library use

The modules can be used on their own, for example:

```python
from gsmconsole.status import to_code
from gsmconsole.fifo import Queue

print(to_code(0).write_detail("Nothing"))   # {"code":0,"detail":"Nothing","message":"OK"}

q = Queue()
q.enqueue("line")
print(q.dequeue())                          # line
```

## Tests

```
pip install ".[test]"
pytest
```