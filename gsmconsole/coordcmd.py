"""Starting, stopping and restarting the coordinator from the command line."""

from __future__ import annotations

import json
import os
import subprocess
from dataclasses import dataclass, field
from typing import Any

import click
import websocket
from websocket import ABNF

from gsmconsole import logger, status
from gsmconsole.cliconf import coordinator_configuration
from gsmconsole.config import Settings
from gsmconsole.options import ROLE

COORDINATOR_EXECUTABLE = "gsm-coordinator.exe"

_CONNECT_ERRORS = (websocket.WebSocketException, OSError)


@dataclass
class RetGram:
    """A message exchanged with the coordinator."""

    role: str
    code: int
    message: str
    detail: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def for_code(cls, code: status.Code, detail: dict[str, Any] | None = None) -> RetGram:
        """Build a message from this tool carrying ``code`` and its registered text."""
        return cls(role=ROLE, code=int(code), message=code.message(), detail=detail or {})

    def to_json(self) -> str:
        """Encode as a compact JSON object."""
        payload = {
            "role": self.role,
            "code": int(self.code),
            "message": self.message,
            "detail": self.detail,
        }
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str | bytes) -> RetGram:
        """Decode a JSON object; missing fields take empty values."""
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("message must be a JSON object")
        return cls(
            role=str(data.get("role") or ""),
            code=int(data.get("code") or 0),
            message=str(data.get("message") or ""),
            detail=dict(data.get("detail") or {}),
        )


def coordinator_url(cfg: Settings) -> str:
    """Return the ``ws://`` address of the coordinator described by ``cfg``."""
    ip = cfg.get("coordinator.ip", "")
    try:
        port = max(int(cfg.get("coordinator.port", 0)), 0)
    except (TypeError, ValueError):
        port = 0
    return f"ws://{'' if ip is None else ip}:{port}"


def start_coordinator(bin_dir: str) -> int:
    """Launch the coordinator executable from ``bin_dir`` and return its PID."""
    executable = f"{bin_dir}/{COORDINATOR_EXECUTABLE}"
    try:
        process = subprocess.Popen([executable], cwd=bin_dir, env=dict(os.environ))
    except OSError as err:
        logger.panic(err)
    logger.info("Coordinator started. PID:", process.pid)
    return process.pid


def _connect(url: str) -> websocket.WebSocket | None:
    print(f"[{url}] Connecting to the coordinator...", end="", flush=True)
    try:
        conn = websocket.create_connection(url)
    except _CONNECT_ERRORS as err:
        print()
        logger.warn("Seems that the connection is closed. Message:", err)
        return None
    print("OK")
    return conn


def _send_stop_signal(conn: websocket.WebSocket) -> bool:
    logger.info("Sending stopping command")
    try:
        conn.send(RetGram.for_code(status.CLI_COORDINATOR_SEND_STOP_SIGNAL).to_json())
    except _CONNECT_ERRORS as err:
        logger.info(err)
        return False
    return True


def stop_coordinator(url: str) -> bool:
    """Ask the coordinator at ``url`` to exit; return whether the signal was sent."""
    conn = _connect(url)
    if conn is None:
        return False
    try:
        return _send_stop_signal(conn)
    finally:
        conn.close()


def restart_coordinator(url: str, bin_dir: str) -> int | None:
    """Stop the coordinator, wait for it to go away, then start it again.

    Returns the new coordinator's PID, or ``None`` when it could not be stopped.
    """
    conn = _connect(url)
    if conn is None:
        return None
    try:
        if not _send_stop_signal(conn):
            return None
        while True:
            try:
                opcode, _ = conn.recv_data(control_frame=True)
            except _CONNECT_ERRORS:
                break
            if opcode == ABNF.OPCODE_CLOSE:
                break
    finally:
        conn.close()
    pid = start_coordinator(bin_dir)
    logger.info("Restarting completed.")
    return pid


def _configured_url() -> str | None:
    try:
        cfg = coordinator_configuration()
    except (OSError, ValueError) as err:
        print("ERROR:", err)
        return None
    return coordinator_url(cfg)


def make_command() -> click.Group:
    """Build the ``coordinator`` command group."""

    @click.group(name="coordinator")
    def coordinator() -> None:
        """Manage the coordinator."""

    @coordinator.command(name="restart")
    def restart() -> None:
        """Stop the coordinator and start it again."""
        url = _configured_url()
        if url is not None:
            restart_coordinator(url, os.environ.get("GSM_PATH", ""))

    @coordinator.command(name="start")
    def start() -> None:
        """Start the coordinator."""
        if _configured_url() is not None:
            start_coordinator(os.environ.get("GSM_PATH", ""))

    @coordinator.command(name="stop")
    def stop() -> None:
        """Stop the coordinator."""
        url = _configured_url()
        if url is not None:
            stop_coordinator(url)

    return coordinator