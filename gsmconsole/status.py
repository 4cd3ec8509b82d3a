"""Numeric status codes with registered human-readable messages."""

from __future__ import annotations

import json
from typing import Any

_messages: dict[int, str] = {}

UNKNOWN_MESSAGE = "Unknown Error code."


class Code(int):
    """A status code whose message is looked up in the shared registry."""

    def __repr__(self) -> str:
        return f"Code({int(self)})"

    def message(self) -> str:
        """Return the registered message, or a generic one if unregistered."""
        return _messages.get(int(self), UNKNOWN_MESSAGE)

    def write_detail(self, detail: Any) -> str:
        """Return a compact JSON object with code, message and optional detail."""
        payload: dict[str, Any] = {"code": int(self), "message": self.message()}
        if detail is not None:
            payload["detail"] = detail
        return json.dumps(
            payload,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            default=str,
        )


def new(code: int, message: str) -> Code:
    """Register ``code`` with ``message``; a code may be registered only once."""
    if code in _messages:
        raise ValueError(f"Code: {code} already existd.")
    _messages[code] = message
    return to_code(code)


def to_code(value: int) -> Code:
    """Wrap an integer as a :class:`Code`."""
    return Code(value)


# -1 and 0 are reserved.
UNKNOWN_ERROR = new(-1, "Unknown Error")
OK = new(0, "OK")

# 1~99999: CLI
CLI_NOT_STARTED = new(1, "CLI not started")
CLI_IS_STARTING = new(2, "CLI is starting")

# 1000~1999: server install
CLI_INSTALL_REQUIRES_RW_ACCESS = new(1000, "Installing server requires both Read and Write access")
CLI_INSTALL_NOT_ALLOWED_BOTH_SET_SYMLINK_AND_INSTALL = new(1001, "Not allowed set both symlink and import flag")
CLI_INSTALL_SERVER_DIRECTORY_ALREADY_EXIST = new(1002, "Server directory is not empty")
CLI_INSTALL_UNABLE_TO_CREATE_SYMLINK = new(1003, "Unable to create symlink")
CLI_INSTALL_SYMLINK_SERVER_ID_FOUND_RECURSIVE_REFERENCING = new(1004, "Symlink server ID found recursive referencing")
CLI_INSTALL_EXPLICITLY_DECLARE_EXTERNAL_SERVER_DIRECTORY = new(1005, "Must explictly declare the external server directory")
CLI_INSTALL_EXTERNAL_SERVER_DIRECTORY_NOT_EXIST = new(1006, "Unable to find external server directory")
CLI_INSTALL_EXPLICITLY_DECLARE_WHICH_GAME_TO_INSTALL = new(1007, "Explicitly declare which game to install")
CLI_INSTALL_GAME_NOT_SUPPORTED = new(1008, "Game is not supported")
CLI_INSTALL_UNABLE_TO_FOUND_STEAMCMD = new(1009, "Unable to found SteamCMD")
CLI_INSTALL_ERROR_FOUND_WHEN_EXECUTING_STEAMCMD = new(1010, "Error found when executing SteamCMD")
CLI_INSTALL_UNABLE_TO_FIND_STEAMCMD_PRE_REQUISITE = new(1011, "Unable to find SteamCMD's pre-requisite")
CLI_INSTALL_ROOT_SYMLINK_SERVER_NOT_EXIST = new(1012, "Root symlink server is not exist.")
CLI_INSTALL_SYMLINK_SERVER_NOT_EXIST = new(1013, "This symlink server for symlink is not exist.")
CLI_INSTALL_SYMLINK_SERVER_DELETED = new(1014, "The server for symlink is deleted")
CLI_INSTALL_ERROR_ON_GENERATING_DIRECTORY = new(1015, "Error found when generating directory.")

# 2000~2999: server attach
CLI_ATTACH_UNABLE_ESTABLISH_CONNECTION_TO_COORDINATOR = new(2000, "Unable to establish connection to coordinator")

# 3000~3999: server backup
CLI_BACKUP_REQUIRE_RW_ACCESS = new(3000, "Backing up server requires Read and Write access")

# 4000~4999: server remove
CLI_REMOVE_REQUIRE_RW_ACCESS = new(4000, "Removing server requires Read and Write access")

# 5000~5999: server restart
CLI_RESTART_FAILED_TO_RESTART_SERVER = new(5000, "Failed to restart the server")

# 6000~6999: server send
CLI_SEND_UNABLE_TO_SEND_COMMAND_TO_SERVER = new(6000, "Failed to send command to the server")
CLI_SENDING_COMMAND = new(6001, "Sending command")

# 7000~7999: server start
CLI_START_UNABLE_TO_STARTUP_SERVER = new(7000, "Failed to startup the server")

# 8000~8999: server stop
CLI_STOP_UNABLE_TO_STOP_SERVER = new(8000, "Failed to stop the server")

# 9000~9999: server update
CLI_UPDATE_UNABLE_TO_UPDATE_SERVER = new(9000, "Failed to update the server")
CLI_UPDATE_SIGNAL = new(9001, "Update signal")

# 10000~10999: server validate
CLI_VALIDATE_UNABLE_TO_VALIDATE_SERVER = new(10000, "Unable to validate the server")

# 11000~11999: server search
CLI_SEARCH_UNABLE_TO_SEARCH_SERVER = new(11000, "Unable to search the server")

# 12000~12999: coordinator start
CLI_COORDINATOR_UNABLE_START_COORDINATOR = new(12000, "Unable to start the coordinator")

# 13000~13999: coordinator stop
CLI_COORDINATOR_UNABLE_STOP_COORDINATOR = new(13000, "Unable to stop the coordinator")
CLI_COORDINATOR_SEND_STOP_SIGNAL = new(13001, "Send stop signal")

# 14000~14999: coordinator restart
CLI_COORDINATOR_UNABLE_RESTART_COORDINATOR = new(14000, "Unable to restart the coordinator")

# 100000~199999: Server
SERVER_STARTING_INTERACTIVE_PROCESS = new(100000, "Starting interactive process")
SERVER_STOPPING_INTERACTIVE_PROCESS = new(100001, "Stopping interactive process")
SERVER_STARTED = new(100002, "Server started")
SERVER_STOPPING = new(100003, "Stopping server")
SERVER_CRASHED = new(100004, "Server crashed")
SERVER_RESTART_COUNTING_DOWN = new(100005, "Restarting counting down")
SERVER_FOUND_LAST_ABNORMAL_EXIT_PROCESS = new(100006, "Found last abnormal exit process")
SERVER_FAILED_TO_START = new(100007, "Failed to start the server")
SERVER_SEARCHING_COORDINATOR = new(100008, "Searching coordinator")
SERVER_FOUND_COORDINATOR_CONNECTING = new(100009, "Found a coordinator, connecting")
SERVER_CONNECTED_COORDINATOR_AND_LOGGING_IN = new(100010, "Connected to the coordinator, logging in")
SERVER_EXITED = new(100011, "Server Exited.")
SERVER_UPDATING = new(100012, "Server updating")
SERVER_RESTARTING = new(100013, "Server restarting")
SERVER_TERMINATE_ATTACH_CONSOLE = new(100014, "Terminate attach console")
SERVER_SENDING_PROCESS_INFO = new(100015, "Sending process info")

# 200000~299999: Coordinator
COORDINATOR_STARTING = new(200000, "Starting coordinator")
COORDINATOR_CONNECTING_TO_UPPER_NODE = new(200001, "Connecting to the upper coordinator node")
COORDINATOR_CONNECTED_AND_REDIRECTING = new(200002, "Connected to the upper node, redirecting")
COORDINATOR_CONNECTED_TO_THE_SPECIFIC_AND_LOGGING_IN = new(200003, "Connected to the specific coordinator, logging in")
COORDINATOR_RECEIVED_MESSAGE_FROM_CLI_AND_RESOLVING = new(200004, "Received message from CLI, resolving")
COORDINATOR_UNKNOWN_CLI_MESSAGE = new(200005, "Unknown CLI message")
COORDINATOR_INCORRECT_STARTUP_ARGS = new(200006, "Incorrect startup args")
COORDINATOR_SERVER_NOT_FOUND = new(200007, "Server not found")
COORDINATOR_COORDINATOR_NOT_FOUND = new(200008, "Coordinator not found")
COORDINATOR_SERVER_OFFLINE = new(200009, "Server offline")
COORDINATOR_COORDINATOR_OFFLINE = new(200010, "Coordinator offline")
COORDINATOR_UNKNOWN_ACTOR_ROLE = new(200011, "Unknown actor role")
COORDINATOR_SERVER_ALREADY_EXIST = new(200012, "Server already exists")