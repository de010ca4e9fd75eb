"""Defines the Decision enum for the choices available on a single turn step."""
from enum import Enum


class Decision(Enum):
    """Enum for the decisions a player or the dealer can make on a turn step."""

    HIT = "hit"
    STAND = "stand"

    def __str__(self) -> str:
        return self.name
