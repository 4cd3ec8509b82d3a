"""The registry of installed servers and the symbolic links between them."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from gsmconsole.config import ConfigSpec, Settings, load
from gsmconsole.fieldmap import to_map

_TAG = "map"


class RecursiveSymlinkError(ValueError):
    """Raised when servers link to each other in a cycle."""


@dataclass
class ServerIdentity:
    """One installed server; a non-zero ``symlink_server_id`` names the server it links to."""

    id: int = field(default=0, metadata={_TAG: "m_nIndex"})
    game: str = field(default="", metadata={_TAG: "m_sGame"})
    deleted: bool = field(default=False, metadata={_TAG: "m_bDeleted"})
    symlink_server_id: int = field(default=0, metadata={_TAG: "m_nSymlinkServerID"})


def server_directories(root: str, server_id: int) -> tuple[str, str, str]:
    """Return the server, config and log directories of ``server_id``."""
    return (
        f"{root}/server/{server_id}",
        f"{root}/config/server/{server_id}",
        f"{root}/log/server/{server_id}",
    )


def _value(entry: Mapping[str, Any], key: str) -> Any:
    lowered = key.lower()
    for candidate, value in entry.items():
        if isinstance(candidate, str) and candidate.lower() == lowered:
            return value
    raise ValueError(f'server identity entry has no "{key}"')


def _number(entry: Mapping[str, Any], key: str) -> int:
    value = _value(entry, key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f'"{key}" must be a number')
    return int(value)


def _identity_from(entry: Any) -> ServerIdentity:
    if not isinstance(entry, Mapping):
        raise ValueError("server identity entry must be an object")
    game = _value(entry, "m_sGame")
    deleted = _value(entry, "m_bDeleted")
    if not isinstance(game, str):
        raise ValueError('"m_sGame" must be a string')
    if not isinstance(deleted, bool):
        raise ValueError('"m_bDeleted" must be a boolean')
    return ServerIdentity(
        id=_number(entry, "m_nIndex"),
        game=game,
        deleted=deleted,
        symlink_server_id=_number(entry, "m_nSymlinkServerID"),
    )


class IdentityRegistry:
    """Installed servers, grouped by the root server their symlinks lead to."""

    def __init__(
        self,
        servers: Iterable[ServerIdentity] = (),
        settings: Settings | None = None,
    ) -> None:
        self.servers = list(servers)
        self.settings = settings
        self._table: dict[int, list[int]] = {}
        self._build_table()

    def __iter__(self) -> Iterator[ServerIdentity]:
        return iter(self.servers)

    def __len__(self) -> int:
        return len(self.servers)

    def _build_table(self) -> None:
        table: dict[int, list[int]] = {}
        for server in self.servers:
            if server.symlink_server_id == 0:
                table[server.id] = []
                continue
            root_id = server.symlink_server_id
            if root_id not in table:
                root = self.find_root_symlink_server(server.id)
                if root is None:
                    continue
                root_id = root.id
            members = table.get(root_id)
            if members is not None and server.id not in members:
                members.append(server.id)
        self._table = table

    def find(self, server_id: int) -> ServerIdentity | None:
        """Return the server with ``server_id``, or ``None``."""
        return next((s for s in self.servers if s.id == server_id), None)

    def find_root_symlink_server(self, server_id: int) -> ServerIdentity | None:
        """Follow the symlinks from ``server_id`` to the server that links nowhere.

        Returns ``None`` when the server or a link target is unknown, and raises
        :class:`RecursiveSymlinkError` when the links form a cycle.
        """
        current = self.find(server_id)
        if current is None:
            return None
        seen = {current.id}
        while True:
            target = self.find(current.symlink_server_id)
            if target is None:
                return None
            if target.symlink_server_id == 0:
                return target
            if target.id in seen:
                raise RecursiveSymlinkError(
                    f"recursive server found: {current.id} and {target.id}"
                )
            seen.add(target.id)
            current = target

    def server_chain(self, server_id: int) -> list[int]:
        """Return the root server and all servers linked to it, if ``server_id`` is among them."""
        if server_id in self._table:
            return [server_id, *self._table[server_id]]
        for root_id, members in self._table.items():
            if server_id in members:
                return [root_id, *members]
        return []

    def save(self) -> None:
        """Write every server back to the configuration file it was loaded from."""
        if self.settings is None:
            raise ValueError("no configuration to save the server identities to")
        self.settings.set("server_identity", [to_map(s, _TAG) for s in self.servers])
        self.settings.write()


def load_server_identity(root: str) -> IdentityRegistry:
    """Read ``server_identity.json`` from ``<root>/config/gsm``.

    A missing file is created empty; malformed entries raise :class:`ValueError`.
    """
    settings = load(
        ConfigSpec(name="server_identity", type="json", path=[f"{root}/config/gsm"])
    )
    raw = settings.get("server_identity")
    if raw is None:
        raw = []
    if not isinstance(raw, list):
        raise ValueError('"server_identity" must be a list')
    return IdentityRegistry((_identity_from(entry) for entry in raw), settings)