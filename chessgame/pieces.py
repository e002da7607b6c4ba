"""Chess pieces and the movement rules each of them follows."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Protocol

from .types import Color, Pos

BOARD_SIZE = 8


class _BoardView(Protocol):
    en_passant_target: Pos

    def piece_at(self, pos: Pos) -> Optional[Piece]: ...

    def set_piece(self, pos: Pos, piece: Optional[Piece]) -> None: ...

    def remove_piece(self, pos: Pos) -> None: ...

    def replace_piece(self, pos: Pos, piece: Optional[Piece]) -> None: ...


def _on_board(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


class Piece(ABC):
    """A piece standing on a board square."""

    letter = "?"

    def __init__(self, color: Color, position: Pos, board: _BoardView) -> None:
        self.color = color
        self.position = position
        self.board = board

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.color.name}, {self.position})"

    def _cased(self, letter: str) -> str:
        return letter.upper() if self.color is Color.WHITE else letter.lower()

    def symbol(self) -> str:
        """Return the piece letter: upper case for white, lower case for black."""
        return self._cased(self.letter)

    @abstractmethod
    def is_legal_move(self, new_pos: Pos) -> bool:
        """Tell whether the piece's movement pattern allows reaching new_pos."""

    def is_path_clear(self, source: Pos, destination: Pos) -> bool:
        """Tell whether the squares strictly between source and destination are empty."""
        if source.col == destination.col:
            return self._vertical_path_clear(source, destination)
        if source.row == destination.row:
            return self._horizontal_path_clear(source, destination)
        return self._diagonal_path_clear(source, destination)

    def _vertical_path_clear(self, source: Pos, destination: Pos) -> bool:
        if source.col != destination.col:
            return False
        step = 1 if destination.row > source.row else -1
        row = source.row + step
        while row != destination.row and 0 <= row < BOARD_SIZE:
            if self.board.piece_at(Pos(row, source.col)) is not None:
                return False
            row += step
        return True

    def _horizontal_path_clear(self, source: Pos, destination: Pos) -> bool:
        if source.row != destination.row:
            return False
        step = 1 if destination.col > source.col else -1
        col = source.col + step
        while col != destination.col and 0 <= col < BOARD_SIZE:
            if self.board.piece_at(Pos(source.row, col)) is not None:
                return False
            col += step
        return True

    def _diagonal_path_clear(self, source: Pos, destination: Pos) -> bool:
        row_dir = 1 if destination.row > source.row else -1
        col_dir = 1 if destination.col > source.col else -1
        row, col = source.row + row_dir, source.col + col_dir
        while _on_board(row, col):
            if row == destination.row and col == destination.col:
                break
            if self.board.piece_at(Pos(row, col)) is not None:
                return False
            row += row_dir
            col += col_dir
        return True


class Pawn(Piece):
    """A pawn: moves forward, captures diagonally, may capture en passant."""

    letter = "P"

    def symbol(self) -> str:
        """Return 'P' for a white pawn and 'p' for a black one."""
        return self._cased("P")

    def is_legal_move(self, new_pos: Pos) -> bool:
        board = self.board
        dr = new_pos.row - self.position.row
        dc = abs(new_pos.col - self.position.col)
        direction = -1 if self.color is Color.WHITE else 1
        target = board.piece_at(new_pos)

        if dc == 0 and dr == direction and target is None:
            return True

        if dc == 0 and dr == 2 * direction:
            start_row = 6 if self.color is Color.WHITE else 1
            if self.position.row != start_row:
                return False
            middle = Pos(self.position.row + direction, self.position.col)
            if board.piece_at(middle) is None and target is None:
                return True

        if dc == 1 and dr == direction:
            if target is not None:
                return target.color is not self.color
            if new_pos == board.en_passant_target:
                adjacent = board.piece_at(Pos(self.position.row, new_pos.col))
                return isinstance(adjacent, Pawn) and adjacent.color is not self.color

        return False

    def promote(self, choice: str) -> Optional[Piece]:
        """Replace the pawn on its last rank with the chosen piece (queen by default).

        Returns the new piece, or None when the pawn is not on its last rank.
        """
        last_row = 0 if self.color is Color.WHITE else 7
        if self.position.row != last_row:
            return None
        kind = _PROMOTIONS.get(choice.upper(), Queen)
        new_piece = kind(self.color, self.position, self.board)
        self.board.replace_piece(self.position, new_piece)
        return new_piece


class Rook(Piece):
    """A rook: moves along ranks and files over empty squares."""

    letter = "R"

    def __init__(self, color: Color, position: Pos, board: _BoardView) -> None:
        super().__init__(color, position, board)
        self.has_moved = False

    def symbol(self) -> str:
        """Return 'R' for a white rook and 'r' for a black one."""
        return self._cased("R")

    def is_legal_move(self, new_pos: Pos) -> bool:
        return self._vertical_path_clear(self.position, new_pos) or self._horizontal_path_clear(
            self.position, new_pos
        )


class Knight(Piece):
    """A knight: jumps in an L shape."""

    letter = "N"

    def symbol(self) -> str:
        """Return 'N' for a white knight and 'n' for a black one."""
        return self._cased("N")

    def is_legal_move(self, new_pos: Pos) -> bool:
        dr = abs(new_pos.row - self.position.row)
        dc = abs(new_pos.col - self.position.col)
        return (dr, dc) in ((2, 1), (1, 2))


class Bishop(Piece):
    """A bishop: moves diagonally over empty squares."""

    letter = "B"

    def symbol(self) -> str:
        """Return 'B' for a white bishop and 'b' for a black one."""
        return self._cased("B")

    def is_legal_move(self, new_pos: Pos) -> bool:
        dr = abs(new_pos.row - self.position.row)
        dc = abs(new_pos.col - self.position.col)
        return dr == dc and self._diagonal_path_clear(self.position, new_pos)


class Queen(Rook, Bishop):
    """A queen: moves as a rook or as a bishop."""

    letter = "Q"

    def symbol(self) -> str:
        """Return 'Q' for a white queen and 'q' for a black one."""
        return self._cased("Q")

    def is_legal_move(self, new_pos: Pos) -> bool:
        return Rook.is_legal_move(self, new_pos) or Bishop.is_legal_move(self, new_pos)


class King(Piece):
    """A king: one square in any direction, or castling two squares sideways."""

    letter = "K"

    def __init__(self, color: Color, position: Pos, board: _BoardView) -> None:
        super().__init__(color, position, board)
        self.has_moved = False

    def symbol(self) -> str:
        """Return 'K' for a white king and 'k' for a black one."""
        return self._cased("K")

    def is_legal_move(self, new_pos: Pos) -> bool:
        occupant = self.board.piece_at(new_pos)
        if occupant is not None and occupant.color is self.color:
            return False
        dr = abs(new_pos.row - self.position.row)
        dc = abs(new_pos.col - self.position.col)
        if dr <= 1 and dc <= 1:
            return True
        if not self.has_moved and dr == 0 and dc == 2:
            return self.is_castling_possible(new_pos)
        return False

    def _castling_columns(self, new_pos: Pos) -> tuple[int, int]:
        if new_pos.col > self.position.col:
            return 7, 5
        return 0, 3

    def is_castling_possible(self, new_pos: Pos) -> bool:
        """Tell whether an unmoved own rook with a clear path stands on the castling side."""
        rook_col, _ = self._castling_columns(new_pos)
        rook_pos = Pos(self.position.row, rook_col)
        if not self._horizontal_path_clear(self.position, rook_pos):
            return False
        rook = self.board.piece_at(rook_pos)
        expected = "R" if self.color is Color.WHITE else "r"
        if rook is None or rook.symbol() != expected:
            return False
        return isinstance(rook, Rook) and not rook.has_moved

    def perform_castling(self, new_pos: Pos) -> None:
        """Move the castling rook to the square next to the king's destination."""
        rook_col, new_rook_col = self._castling_columns(new_pos)
        rook_pos = Pos(self.position.row, rook_col)
        new_rook_pos = Pos(self.position.row, new_rook_col)
        rook = self.board.piece_at(rook_pos)
        self.board.set_piece(new_rook_pos, rook)
        self.board.remove_piece(rook_pos)
        if rook is not None:
            rook.position = new_rook_pos


_PROMOTIONS: dict[str, type[Piece]] = {"Q": Queen, "R": Rook, "B": Bishop, "N": Knight}

_BY_LETTER: dict[str, type[Piece]] = {
    cls.letter.lower(): cls for cls in (Pawn, Rook, Knight, Bishop, Queen, King)
}


def piece_from_symbol(symbol: str, position: Pos, board: _BoardView) -> Optional[Piece]:
    """Build the piece a letter stands for; '.' stands for an empty square.

    Upper-case letters are white, lower-case letters black. Raises ValueError
    for any other character.
    """
    if symbol == ".":
        return None
    kind = _BY_LETTER.get(symbol.lower()) if len(symbol) == 1 else None
    if kind is None:
        raise ValueError(f"unknown piece symbol: {symbol!r}")
    color = Color.WHITE if symbol.isupper() else Color.BLACK
    return kind(color, position, board)