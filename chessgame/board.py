"""The chess board: piece placement, move execution and game-state queries."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Optional, Union

from .pieces import BOARD_SIZE, King, Pawn, Piece, Rook, piece_from_symbol
from .types import Color, Pos

SAVE_FILE = "grid.txt"

_BACK_RANK = "RNBQKBNR"
_PROMOTION_LETTERS = frozenset("QRBN")
_NO_SQUARE = Pos()


def _on_board(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


class Board:
    """An 8x8 chess board with the side to move, selection and en passant state."""

    def __init__(self) -> None:
        self.grid: list[list[Optional[Piece]]] = self._empty_grid()
        self.current_turn = Color.WHITE
        self.selected = _NO_SQUARE
        self.en_passant_target = _NO_SQUARE
        self.pending_promotion: Optional[Pos] = None

    @staticmethod
    def _empty_grid() -> list[list[Optional[Piece]]]:
        return [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]

    def __str__(self) -> str:
        return "".join(
            "".join("." if piece is None else piece.symbol() for piece in row) + "\n"
            for row in self.grid
        )

    def _squares(self) -> Iterator[tuple[Pos, Optional[Piece]]]:
        for row, pieces in enumerate(self.grid):
            for col, piece in enumerate(pieces):
                yield Pos(row, col), piece

    def _pieces_of(self, color: Color) -> Iterator[tuple[Pos, Piece]]:
        for pos, piece in self._squares():
            if piece is not None and piece.color is color:
                yield pos, piece

    @staticmethod
    def _all_positions() -> Iterator[Pos]:
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                yield Pos(row, col)

    @staticmethod
    def _check_square(pos: Pos) -> None:
        if not _on_board(pos.row, pos.col):
            raise IndexError(f"square off the board: {pos}")

    def initialize(self) -> None:
        """Set up the standard starting position."""
        self.clear()
        for col, letter in enumerate(_BACK_RANK):
            self.grid[0][col] = piece_from_symbol(letter.lower(), Pos(0, col), self)
            self.grid[1][col] = Pawn(Color.BLACK, Pos(1, col), self)
            self.grid[6][col] = Pawn(Color.WHITE, Pos(6, col), self)
            self.grid[7][col] = piece_from_symbol(letter, Pos(7, col), self)

    def clear(self) -> None:
        """Remove every piece from the board."""
        self.grid = self._empty_grid()

    def move_piece(self, source: Pos, target: Pos) -> bool:
        """Carry out a move, handling castling and en passant.

        Returns False when there is no piece on source or a castling move is
        not possible; the move's legality is not checked otherwise.
        """
        piece = self.piece_at(source)
        if piece is None:
            return False

        self.en_passant_target = _NO_SQUARE

        if isinstance(piece, King):
            if not piece.has_moved and abs(target.col - source.col) == 2:
                if not piece.is_castling_possible(target):
                    return False
                piece.perform_castling(target)
            piece.has_moved = True

        if isinstance(piece, Rook):
            piece.has_moved = True

        if isinstance(piece, Pawn):
            if abs(target.row - source.row) == 2:
                ep_row = target.row + 1 if piece.color is Color.WHITE else target.row - 1
                self.en_passant_target = Pos(ep_row, target.col)
            elif target.col != source.col and self.piece_at(target) is None:
                captured_pos = Pos(source.row, target.col)
                if isinstance(self.piece_at(captured_pos), Pawn):
                    self.grid[captured_pos.row][captured_pos.col] = None

        self.grid[target.row][target.col] = piece
        self.grid[source.row][source.col] = None
        piece.position = target
        return True

    def switch_turn(self) -> None:
        """Hand the move to the other side."""
        self.current_turn = self.current_turn.opponent()

    def piece_at(self, pos: Pos) -> Optional[Piece]:
        """Return the piece on pos, or None for an empty or off-board square."""
        if _on_board(pos.row, pos.col):
            return self.grid[pos.row][pos.col]
        return None

    def is_valid_source(self, row: int, col: int, color: Color) -> bool:
        """Tell whether (row, col) holds a piece of the given colour."""
        if not _on_board(row, col):
            return False
        piece = self.piece_at(Pos(row, col))
        return piece is not None and piece.color is color

    def is_valid_destination(self, row: int, col: int, color: Color) -> bool:
        """Tell whether (row, col) is on the board and not held by the given colour."""
        if not _on_board(row, col):
            return False
        piece = self.piece_at(Pos(row, col))
        return piece is None or piece.color is not color

    def replace_piece(self, pos: Pos, piece: Optional[Piece]) -> None:
        """Put piece on pos, discarding whatever stood there."""
        self.set_piece(pos, piece)

    def set_piece(self, pos: Pos, piece: Optional[Piece]) -> None:
        """Put piece on pos."""
        self._check_square(pos)
        self.grid[pos.row][pos.col] = piece

    def remove_piece(self, pos: Pos) -> None:
        """Empty the square pos."""
        self._check_square(pos)
        self.grid[pos.row][pos.col] = None

    def is_square_attacked(self, pos: Pos, by_color: Color) -> bool:
        """Tell whether any piece of by_color could move onto pos."""
        attack_dir = -1 if by_color is Color.WHITE else 1
        for attacker_pos, piece in self._pieces_of(by_color):
            if not piece.is_legal_move(pos):
                continue
            if isinstance(piece, Pawn):
                if abs(pos.col - attacker_pos.col) == 1 and pos.row - attacker_pos.row == attack_dir:
                    return True
            else:
                return True
        return False

    def is_in_check(self, color: Color) -> bool:
        """Tell whether the king of color is attacked; False when it has no king."""
        king_pos = self.find_king(color)
        if king_pos == _NO_SQUARE:
            return False
        return self.is_square_attacked(king_pos, color.opponent())

    def is_checkmate(self, color: Color) -> bool:
        """Tell whether color is in check with no move out of it."""
        return self.is_in_check(color) and not self.has_legal_moves(color)

    def is_stalemate(self, color: Color) -> bool:
        """Tell whether color is not in check but has no legal move."""
        return not self.is_in_check(color) and not self.has_legal_moves(color)

    def has_legal_moves(self, color: Color) -> bool:
        """Tell whether color has any move that does not leave its king in check."""
        for source, piece in list(self._pieces_of(color)):
            for target in self._all_positions():
                if target == source:
                    continue
                if target == self.find_king(color):
                    continue
                if piece.is_legal_move(target) and self.is_valid_move(source, target, color):
                    return True
        return False

    def find_king(self, color: Color) -> Pos:
        """Return the square of color's king, or Pos() when there is none."""
        for pos, piece in self._pieces_of(color):
            if isinstance(piece, King):
                return pos
        return _NO_SQUARE

    def all_possible_moves(self, color: Color) -> list[Pos]:
        """List every destination each piece of color could move to, per piece."""
        return [
            target
            for _, piece in self._pieces_of(color)
            for target in self._all_positions()
            if piece.is_legal_move(target)
        ]

    def is_valid_move(self, source: Pos, target: Pos, color: Color) -> bool:
        """Tell whether the move is legal and leaves color's king out of check."""
        piece = self.piece_at(source)
        if piece is None or not piece.is_legal_move(target):
            return False
        self._check_square(target)

        captured = self.grid[target.row][target.col]
        self.grid[target.row][target.col] = piece
        self.grid[source.row][source.col] = None
        try:
            in_check = self.is_in_check(color)
        finally:
            self.grid[source.row][source.col] = piece
            self.grid[target.row][target.col] = captured
        return not in_check

    def highlight_targets(self, pos: Pos) -> dict[Pos, bool]:
        """Map each square the piece on pos may move to onto whether it is a capture.

        Only a piece of the side to move has targets.
        """
        piece = self.piece_at(pos)
        if piece is None or piece.color is not self.current_turn:
            return {}
        targets: dict[Pos, bool] = {}
        for target in self._all_positions():
            occupant = self.piece_at(target)
            if occupant is not None and occupant.color is self.current_turn:
                continue
            if piece.is_legal_move(target) and self.is_valid_move(pos, target, self.current_turn):
                targets[target] = occupant is not None
        return targets

    def select(self, row: int, col: int) -> bool:
        """Select (row, col) when it holds a piece of the side to move."""
        if not self.is_valid_source(row, col, self.current_turn):
            return False
        self.selected = Pos(row, col)
        return True

    def click(self, row: int, col: int) -> bool:
        """Handle a click on (row, col): select a piece or move the selected one.

        Returns True when a move was made. A pawn reaching its last rank sets
        pending_promotion and keeps the turn until promote is called.
        """
        if self.pending_promotion is not None or not _on_board(row, col):
            return False
        if self.selected == _NO_SQUARE:
            self.select(row, col)
            return False

        source, target = self.selected, Pos(row, col)
        self.selected = _NO_SQUARE
        piece = self.piece_at(source)
        if (
            piece is None
            or not self.is_valid_destination(row, col, self.current_turn)
            or not piece.is_legal_move(target)
            or not self.is_valid_move(source, target, self.current_turn)
        ):
            return False
        if not self.move_piece(source, target):
            return False

        last_row = 0 if self.current_turn is Color.WHITE else BOARD_SIZE - 1
        if isinstance(self.piece_at(target), Pawn) and row == last_row:
            self.pending_promotion = target
        else:
            self.switch_turn()
        return True

    def promote(self, row: int, col: int, choice: str) -> Piece:
        """Replace the piece on (row, col) with a queen, rook, bishop or knight.

        choice is one of Q, R, B, N in either case. Completes a pending
        promotion on that square by handing the move to the other side.
        """
        letter = choice.upper()
        if letter not in _PROMOTION_LETTERS:
            raise ValueError(f"invalid promotion choice: {choice!r}")
        pos = Pos(row, col)
        old = self.piece_at(pos)
        if old is None:
            raise ValueError(f"no piece to promote on {pos}")
        symbol = letter if old.color is Color.WHITE else letter.lower()
        new_piece = piece_from_symbol(symbol, pos, self)
        assert new_piece is not None
        self.replace_piece(pos, new_piece)
        if self.pending_promotion == pos:
            self.pending_promotion = None
            self.switch_turn()
        return new_piece

    def load_text(self, text: str) -> None:
        """Set up the board from 64 piece letters, '.' for empty, whitespace ignored."""
        symbols = [ch for ch in text if not ch.isspace()]
        needed = BOARD_SIZE * BOARD_SIZE
        if len(symbols) < needed:
            raise ValueError(f"board text holds {len(symbols)} squares, {needed} needed")
        grid = self._empty_grid()
        for index, symbol in enumerate(symbols[:needed]):
            row, col = divmod(index, BOARD_SIZE)
            grid[row][col] = piece_from_symbol(symbol, Pos(row, col), self)
        self.grid = grid

    def load(self, path: Union[str, Path]) -> None:
        """Set up the board from a saved text file."""
        self.load_text(Path(path).read_text(encoding="utf-8"))