"""The catalogue of games that servers can be installed for."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from gsmconsole.config import ConfigSpec, load


@dataclass
class AvailableGame:
    """A supported game, its short name and installer-specific settings."""

    name: str
    short: str
    specific: dict[str, Any] = field(default_factory=dict)


class GameCatalog:
    """An ordered collection of :class:`AvailableGame` entries."""

    def __init__(self, games: Iterable[AvailableGame] = ()) -> None:
        self.games = list(games)

    def __iter__(self) -> Iterator[AvailableGame]:
        return iter(self.games)

    def __len__(self) -> int:
        return len(self.games)

    def find(self, game: str) -> AvailableGame | None:
        """Return the first game whose full or short name equals ``game``."""
        return next((g for g in self.games if game in (g.name, g.short)), None)


def _field(entry: Mapping[str, Any], key: str) -> Any:
    for candidate, value in entry.items():
        if isinstance(candidate, str) and candidate.lower() == key:
            return value
    raise ValueError(f'available game entry has no "{key}"')


def _game_from(entry: Any) -> AvailableGame:
    if not isinstance(entry, Mapping):
        raise ValueError("available game entry must be an object")
    name = _field(entry, "name")
    short = _field(entry, "short")
    specific = _field(entry, "specific")
    if not isinstance(name, str) or not isinstance(short, str):
        raise ValueError("available game name and short name must be strings")
    if not isinstance(specific, Mapping):
        raise ValueError("available game specific settings must be an object")
    return AvailableGame(name=name, short=short, specific=dict(specific))


def load_available_games(root: str) -> GameCatalog:
    """Read ``available_games.json`` from ``<root>/config/gsm``.

    A missing file is created empty and yields an empty catalogue; malformed
    entries raise :class:`ValueError`.
    """
    settings = load(
        ConfigSpec(name="available_games", type="json", path=[f"{root}/config/gsm"])
    )
    raw = settings.get("AvailableGames")
    if raw is None:
        return GameCatalog()
    if not isinstance(raw, list):
        raise ValueError('"AvailableGames" must be a list')
    return GameCatalog(_game_from(entry) for entry in raw)