"""Basic value types shared by the chess engine: board squares and side colours."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Pos:
    """A square on the board given by row and column; (-1, -1) means no square."""

    row: int = -1
    col: int = -1


class Color(Enum):
    """The side a piece belongs to."""

    BLACK = 0
    WHITE = 1

    def opponent(self) -> Color:
        """Return the other side."""
        return Color.BLACK if self is Color.WHITE else Color.WHITE