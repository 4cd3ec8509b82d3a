"""Answers given up front on the command line to confirmation prompts."""

from __future__ import annotations

from dataclasses import dataclass

ROLE = "cli"


@dataclass
class Confirmation:
    """The ``--yes`` and ``--no`` flags."""

    agree: bool = False
    decline: bool = False

    def further_action_needed(self) -> bool:
        """Whether the user must still be asked: neither or both flags were given."""
        return self.agree == self.decline

    def declined(self) -> bool:
        """Whether only ``--no`` was given."""
        return self.decline and not self.agree