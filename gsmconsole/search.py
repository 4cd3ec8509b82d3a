"""Searching the game catalogue by name and short name."""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence

import click

from gsmconsole.games import AvailableGame, load_available_games


def search_games(
    games: Iterable[AvailableGame],
    names: Sequence[str],
    shorts: Sequence[str],
) -> list[AvailableGame]:
    """Return games whose name contains one of ``names``, narrowed by ``shorts``.

    A game appears once for every pattern it matches. When ``shorts`` is
    empty the name matches are returned as they are.
    """
    found = [game for game in games for name in names if name in game.name]
    if not shorts:
        return found
    return [game for game in found for short in shorts if short in game.short]


def _split(values: tuple[str, ...]) -> list[str]:
    return [part for value in values for part in value.split(",")]


def make_command() -> click.Command:
    """Build the ``search`` command."""

    @click.command(name="search")
    @click.option("--short", "shorts", multiple=True, help="Short names to narrow by.")
    @click.argument("names", nargs=-1)
    def search(shorts: tuple[str, ...], names: tuple[str, ...]) -> None:
        """Search available games by name."""
        catalog = load_available_games(os.environ.get("GSM_ROOT", ""))
        for game in search_games(catalog, names, _split(shorts)):
            print(f"{{{game.name} {game.short} {game.specific}}}")

    return search