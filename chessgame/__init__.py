"""Two-player chess: a rules engine (types, pieces, board) and a pygame window (ui)."""

__version__ = "0.1.0"
__all__ = ["board", "pieces", "types", "ui"]