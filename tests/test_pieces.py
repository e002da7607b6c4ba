import pytest

from chessgame.pieces import (
    Bishop,
    King,
    Knight,
    Pawn,
    Queen,
    Rook,
    piece_from_symbol,
)
from chessgame.types import Color, Pos


class FakeBoard:
    def __init__(self):
        self.grid = {}
        self.en_passant_target = Pos()

    def piece_at(self, pos):
        if 0 <= pos.row < 8 and 0 <= pos.col < 8:
            return self.grid.get(pos)
        return None

    def set_piece(self, pos, piece):
        self.grid[pos] = piece

    def remove_piece(self, pos):
        self.grid.pop(pos, None)

    def replace_piece(self, pos, piece):
        self.grid[pos] = piece

    def place(self, piece):
        self.grid[piece.position] = piece
        return piece


@pytest.fixture
def board():
    return FakeBoard()


def moves(piece, *squares):
    return [piece.is_legal_move(Pos(r, c)) for r, c in squares]


@pytest.mark.parametrize(
    "kind,white,black",
    [(Pawn, "P", "p"), (Rook, "R", "r"), (Knight, "N", "n"),
     (Bishop, "B", "b"), (Queen, "Q", "q"), (King, "K", "k")],
)
def test_symbols(board, kind, white, black):
    assert kind(Color.WHITE, Pos(0, 0), board).symbol() == white
    assert kind(Color.BLACK, Pos(0, 0), board).symbol() == black


def test_knight_moves(board):
    knight = board.place(Knight(Color.WHITE, Pos(7, 1), board))
    result = [knight.is_legal_move(Pos(r, c)) for r, c in [(5, 2), (5, 0), (6, 3), (5, 1), (6, 2)]]
    assert result == [True, True, True, False, False]


def test_knight_jumps_over_pieces(board):
    knight = board.place(Knight(Color.WHITE, Pos(7, 1), board))
    board.place(Pawn(Color.WHITE, Pos(6, 1), board))
    board.place(Pawn(Color.WHITE, Pos(6, 2), board))
    assert knight.is_legal_move(Pos(5, 2)) == True  # noqa: E712


def test_rook_blocked_along_file(board):
    rook = board.place(Rook(Color.WHITE, Pos(7, 0), board))
    board.place(Pawn(Color.BLACK, Pos(4, 0), board))
    result = [rook.is_legal_move(Pos(r, 0)) for r in (5, 4, 3)]
    assert result == [True, True, False]


def test_rook_along_rank_and_not_diagonal(board):
    rook = board.place(Rook(Color.WHITE, Pos(7, 0), board))
    result = [rook.is_legal_move(Pos(7, 5)), rook.is_legal_move(Pos(6, 1))]
    assert result == [True, False]
    board.place(Knight(Color.WHITE, Pos(7, 2), board))
    assert rook.is_legal_move(Pos(7, 5)) == False  # noqa: E712


def test_bishop_diagonal_and_blocked(board):
    bishop = board.place(Bishop(Color.WHITE, Pos(7, 2), board))
    result = [bishop.is_legal_move(Pos(5, 4)), bishop.is_legal_move(Pos(5, 3))]
    assert result == [True, False]
    board.place(Pawn(Color.WHITE, Pos(6, 3), board))
    result = [bishop.is_legal_move(Pos(5, 4)), bishop.is_legal_move(Pos(6, 1))]
    assert result == [False, True]


def test_queen_combines_rook_and_bishop(board):
    queen = board.place(Queen(Color.WHITE, Pos(4, 4), board))
    result = [queen.is_legal_move(Pos(r, c)) for r, c in [(4, 0), (0, 4), (1, 1), (2, 3)]]
    assert result == [True, True, True, False]
    board.place(Pawn(Color.BLACK, Pos(3, 3), board))
    assert queen.is_legal_move(Pos(1, 1)) == False  # noqa: E712


def test_path_clear_each_direction(board):
    rook = board.place(Rook(Color.WHITE, Pos(0, 0), board))
    targets = [Pos(0, 7), Pos(7, 0), Pos(7, 7)]
    assert [rook.is_path_clear(Pos(0, 0), t) for t in targets] == [True, True, True]
    board.place(Pawn(Color.BLACK, Pos(3, 3), board))
    board.place(Pawn(Color.BLACK, Pos(0, 4), board))
    assert [rook.is_path_clear(Pos(0, 0), t) for t in targets] == [False, True, False]


def test_white_pawn_forward_and_double_step(board):
    pawn = board.place(Pawn(Color.WHITE, Pos(6, 4), board))
    result = [pawn.is_legal_move(Pos(r, 4)) for r in (5, 4, 7, 3)]
    assert result == [True, True, False, False]


def test_black_pawn_moves_down(board):
    pawn = board.place(Pawn(Color.BLACK, Pos(1, 2), board))
    result = [pawn.is_legal_move(Pos(r, 2)) for r in (2, 3, 0)]
    assert result == [True, True, False]


def test_pawn_double_step_only_from_start(board):
    pawn = board.place(Pawn(Color.WHITE, Pos(5, 4), board))
    assert pawn.is_legal_move(Pos(3, 4)) == False  # noqa: E712


def test_pawn_blocked(board):
    pawn = board.place(Pawn(Color.WHITE, Pos(6, 4), board))
    board.place(Knight(Color.BLACK, Pos(5, 4), board))
    result = [pawn.is_legal_move(Pos(5, 4)), pawn.is_legal_move(Pos(4, 4))]
    assert result == [False, False]


def test_pawn_double_step_blocked_on_destination(board):
    pawn = board.place(Pawn(Color.WHITE, Pos(6, 4), board))
    board.place(Knight(Color.BLACK, Pos(4, 4), board))
    result = [pawn.is_legal_move(Pos(4, 4)), pawn.is_legal_move(Pos(5, 4))]
    assert result == [False, True]


def test_pawn_captures_only_enemy_diagonally(board):
    pawn = board.place(Pawn(Color.WHITE, Pos(6, 4), board))
    board.place(Knight(Color.BLACK, Pos(5, 3), board))
    board.place(Knight(Color.WHITE, Pos(5, 5), board))
    result = [pawn.is_legal_move(Pos(5, 3)), pawn.is_legal_move(Pos(5, 5))]
    assert result == [True, False]


def test_pawn_en_passant(board):
    pawn = board.place(Pawn(Color.WHITE, Pos(3, 4), board))
    board.place(Pawn(Color.BLACK, Pos(3, 5), board))
    before = pawn.is_legal_move(Pos(2, 5))
    board.en_passant_target = Pos(2, 5)
    after = pawn.is_legal_move(Pos(2, 5))
    assert (before, after) == (False, True)


def test_en_passant_requires_enemy_pawn(board):
    pawn = board.place(Pawn(Color.WHITE, Pos(3, 4), board))
    board.place(Knight(Color.BLACK, Pos(3, 5), board))
    board.en_passant_target = Pos(2, 5)
    assert pawn.is_legal_move(Pos(2, 5)) == False  # noqa: E712


@pytest.mark.parametrize(
    "choice,kind", [("Q", Queen), ("r", Rook), ("B", Bishop), ("n", Knight), ("x", Queen)]
)
def test_promote_on_last_rank(board, choice, kind):
    pawn = board.place(Pawn(Color.WHITE, Pos(0, 3), board))
    new_piece = pawn.promote(choice)
    assert type(new_piece) is kind
    assert new_piece.color is Color.WHITE
    assert board.piece_at(Pos(0, 3)) is new_piece


def test_promote_black_on_row_seven(board):
    pawn = Pawn(Color.BLACK, Pos(7, 0), board)
    board.place(pawn)
    new_piece = pawn.promote("N")
    assert new_piece.symbol() == "n"
    assert board.piece_at(Pos(7, 0)) is new_piece


def test_promote_elsewhere_does_nothing(board):
    pawn = board.place(Pawn(Color.WHITE, Pos(3, 3), board))
    assert pawn.promote("Q") is None
    assert board.piece_at(Pos(3, 3)) is pawn


def test_king_single_steps(board):
    king = board.place(King(Color.WHITE, Pos(4, 4), board))
    neighbours = [
        Pos(4 + dr, 4 + dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0)
    ]
    assert [king.is_legal_move(p) for p in neighbours] == [True] * 8
    assert king.is_legal_move(Pos(2, 4)) == False  # noqa: E712


def test_king_cannot_take_own_piece(board):
    king = board.place(King(Color.WHITE, Pos(4, 4), board))
    board.place(Pawn(Color.WHITE, Pos(3, 4), board))
    board.place(Pawn(Color.BLACK, Pos(3, 3), board))
    result = [king.is_legal_move(Pos(3, 4)), king.is_legal_move(Pos(3, 3))]
    assert result == [False, True]


def test_kingside_castling(board):
    king = board.place(King(Color.WHITE, Pos(7, 4), board))
    board.place(Rook(Color.WHITE, Pos(7, 7), board))
    result = [king.is_castling_possible(Pos(7, 6)), king.is_legal_move(Pos(7, 6))]
    assert result == [True, True]


def test_castling_blocked_by_piece(board):
    king = board.place(King(Color.WHITE, Pos(7, 4), board))
    board.place(Rook(Color.WHITE, Pos(7, 7), board))
    board.place(Bishop(Color.WHITE, Pos(7, 5), board))
    assert king.is_legal_move(Pos(7, 6)) == False  # noqa: E712


def test_castling_needs_unmoved_rook_and_king(board):
    king = board.place(King(Color.WHITE, Pos(7, 4), board))
    rook = board.place(Rook(Color.WHITE, Pos(7, 0), board))
    results = [king.is_legal_move(Pos(7, 2))]
    rook.has_moved = True
    results.append(king.is_legal_move(Pos(7, 2)))
    rook.has_moved = False
    king.has_moved = True
    results.append(king.is_legal_move(Pos(7, 2)))
    assert results == [True, False, False]


def test_castling_not_with_queen_or_enemy_rook(board):
    king = board.place(King(Color.WHITE, Pos(7, 4), board))
    board.place(Queen(Color.WHITE, Pos(7, 7), board))
    board.place(Rook(Color.BLACK, Pos(7, 0), board))
    result = [king.is_castling_possible(Pos(7, 6)), king.is_castling_possible(Pos(7, 2))]
    assert result == [False, False]


def test_perform_castling_kingside(board):
    king = board.place(King(Color.BLACK, Pos(0, 4), board))
    rook = board.place(Rook(Color.BLACK, Pos(0, 7), board))
    king.perform_castling(Pos(0, 6))
    assert board.piece_at(Pos(0, 5)) is rook
    assert board.piece_at(Pos(0, 7)) is None
    assert rook.position == Pos(0, 5)


def test_perform_castling_queenside(board):
    king = board.place(King(Color.WHITE, Pos(7, 4), board))
    rook = board.place(Rook(Color.WHITE, Pos(7, 0), board))
    king.perform_castling(Pos(7, 2))
    assert board.piece_at(Pos(7, 3)) is rook
    assert board.piece_at(Pos(7, 0)) is None
    assert rook.position == Pos(7, 3)


@pytest.mark.parametrize("symbol", list("PRNBQKprnbqk"))
def test_piece_from_symbol_round_trip(board, symbol):
    piece = piece_from_symbol(symbol, Pos(2, 3), board)
    assert piece.symbol() == symbol
    assert piece.position == Pos(2, 3)
    assert piece.board is board


def test_piece_from_symbol_empty_square(board):
    assert piece_from_symbol(".", Pos(0, 0), board) is None


@pytest.mark.parametrize("symbol", ["x", "", "QQ", "1"])
def test_piece_from_symbol_rejects_unknown(board, symbol):
    with pytest.raises(ValueError):
        piece_from_symbol(symbol, Pos(0, 0), board)