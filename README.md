# chessgame

A chess game for two players who share one screen and one mouse. It runs in a pygame window.

The rules engine covers ordinary piece movement and also the following:

- **Castling.** The king and the rook must not have moved, and the squares between them must be empty.
- **En passant captures.**
- **Pawn promotion** to a queen, rook, bishop or knight.
- **King safety.** A move that would leave your own king in check is refused.
- **Game end.** Check, checkmate and stalemate are detected and shown on screen.

## Installing

```
pip install .
```

This also installs pygame.

## Playing

```
chessgame
```

`chessgame --help` prints a short usage message. The command takes no other options.

When the game starts, a menu opens:

- Press **1** to start a new game.
- Press **2** to load a position from `grid.txt` in the current directory. If the file is missing or malformed, the game stops with an error.

To make a move:

1. Click one of your own pieces. Its square turns yellow.
2. The squares the piece may legally move to are highlighted. An empty target square is green and a square with an enemy piece on it is red.
3. Click a target square to move there. Clicking any other square cancels the selection.

The bar under the board shows whose turn it is. It shows "CHECK!" when the side to move is in check.

When a pawn reaches the last rank, a menu appears. Press **Q**, **R**, **B** or **N** to choose the new piece. Mouse clicks are ignored until you choose. The turn passes to the other side after the promotion.

When the position is checkmate or stalemate, a message is drawn over the board. The window stays open until you close it.

### Piece images

The game looks for piece images in the current directory. The file names are:

- White pieces: `pawnW.png`, `rookW.png`, `knightW.png`, `bishopW.png`, `queenW.png`, `kingW.png`
- Black pieces: `pawnB.png`, `rookB.png`, `knightB.png`, `bishopB.png`, `queenB.png`, `kingB.png`

Each image is scaled to fit one square. If an image is missing, that piece is drawn as its letter instead.

### Position files

A position file holds 64 piece symbols. They are read row by row, from Black's back rank to White's. Whitespace is ignored, and any symbols after the 64th are ignored too.

| Symbol | Meaning |
| --- | --- |
| `P R N B Q K` | White pieces (upper case) |
| `p r n b q k` | Black pieces (lower case) |
| `.` | Empty square |

This is the starting position:

```
rnbqkbnr
pppppppp
........
........
........
........
PPPPPPPP
RNBQKBNR
```

A file with fewer than 64 symbols is rejected with a `ValueError`. So is a file with an unknown symbol. A loaded position always starts with White to move.

## Using the engine from code

You can use the rules without opening a window:

```python
from chessgame.board import Board
from chessgame.types import Color, Pos

board = Board()
board.initialize()
board.click(6, 4)          # select the white e-pawn
board.click(4, 4)          # move it two squares forward
assert board.current_turn is Color.BLACK
assert board.en_passant_target == Pos(5, 4)
assert not board.is_in_check(Color.BLACK)
```

Squares are `Pos(row, col)` values. Row 0 is Black's back rank.

These `Board` methods are available:

- **Playing moves:**
  - `click(row, col)` and `select(row, col)` drive play the same way the mouse does.
  - `promote(row, col, choice)` completes a pending promotion.
  - `move_piece(source, target)` carries out a move, including castling and en passant, without checking its legality.
- **Checking moves:**
  - `is_valid_move(source, target, color)` reports whether a move is legal and leaves the mover's king safe.
  - `highlight_targets(pos)` maps each target square of the piece on `pos` to whether moving there is a capture.
- **Game state:**
  - `is_in_check`, `is_checkmate` and `is_stalemate` report the state for either colour.
  - `has_legal_moves`, `is_square_attacked` and `find_king` are also available.
- **Setting up positions:**
  - `initialize()` sets up the starting position.
  - `load_text(text)` and `load(path)` read positions in the format described above.
  - `str(board)` gives the position in the same format.

`chessgame.pieces.piece_from_symbol` builds a single piece from its letter.

## What it does not do

- There is no way to save a game from the window. `grid.txt` has to be written by hand, or from code with `str(board)`.
- A position file does not record whose turn it is, castling rights, or the en passant square.
- There is no computer opponent, no move history or undo, no clock, and no draw by repetition or by the fifty-move rule.
- When castling, the game checks only that the king and rook have not moved and that the squares between them are empty. The king may castle out of, through or into check.

## Running the tests

```
pip install .[test]
pytest
```