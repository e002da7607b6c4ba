"""A pygame window that shows the board and lets two players play by mouse."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Union

import pygame

from .board import SAVE_FILE, Board
from .pieces import BOARD_SIZE
from .types import Color, Pos

RGB = tuple[int, int, int]

WINDOW_BOARD_SIZE = 800
PANEL_HEIGHT = 100
FPS = 60
PIECE_IMAGE_SIZE = 512

LIGHT_SQUARE: RGB = (211, 176, 131)
DARK_SQUARE: RGB = (112, 31, 126)
BACKGROUND: RGB = (245, 245, 245)
WHITE: RGB = (255, 255, 255)
BLACK: RGB = (0, 0, 0)
RED: RGB = (230, 41, 55)
GREEN: RGB = (0, 228, 48)
YELLOW: RGB = (253, 249, 0)
ORANGE: RGB = (255, 161, 0)

HIGHLIGHT_ALPHA = 127

_PIECE_NAMES = {
    "p": "pawn",
    "r": "rook",
    "n": "knight",
    "b": "bishop",
    "q": "queen",
    "k": "king",
}
_PROMOTION_LETTERS = frozenset("QRBN")


def square_from_point(x: float, y: float, board_size: int = WINDOW_BOARD_SIZE) -> Pos:
    """Map a window point to the board square under it; Pos() below the board."""
    if y >= board_size:
        return Pos()
    square = board_size // BOARD_SIZE
    return Pos(int(y // square), int(x // square))


def promotion_choice(char: str) -> Optional[str]:
    """Turn a typed character into a promotion letter Q, R, B or N, or None."""
    if len(char) != 1:
        return None
    if "a" <= char <= "z":
        char = char.upper()
    return char if char in _PROMOTION_LETTERS else None


class ChessWindow:
    """Draws a board onto a pygame surface and runs the interactive game loop."""

    def __init__(
        self,
        surface: Optional[pygame.Surface] = None,
        image_dir: Union[str, Path, None] = None,
        board_size: int = WINDOW_BOARD_SIZE,
    ) -> None:
        self.board_size = board_size
        self.square_size = board_size // BOARD_SIZE
        pygame.font.init()
        if surface is None:
            pygame.display.init()
            surface = pygame.display.set_mode((board_size, board_size + PANEL_HEIGHT))
            pygame.display.set_caption("Chess Game")
        self.surface = surface
        self.clock = pygame.time.Clock()
        self._fonts: dict[int, pygame.font.Font] = {}
        self._board_image = self._checkered_board()
        self._piece_images = self._load_piece_images(
            Path.cwd() if image_dir is None else Path(image_dir)
        )

    def _font(self, size: int) -> pygame.font.Font:
        if size not in self._fonts:
            self._fonts[size] = pygame.font.Font(None, size)
        return self._fonts[size]

    def _text(self, text: str, x: int, y: int, size: int, color: RGB) -> None:
        self.surface.blit(self._font(size).render(text, True, color), (x, y))

    def _checkered_board(self) -> pygame.Surface:
        image = pygame.Surface((self.board_size, self.board_size))
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                color = LIGHT_SQUARE if (row + col) % 2 == 0 else DARK_SQUARE
                rect = (col * self.square_size, row * self.square_size,
                        self.square_size, self.square_size)
                image.fill(color, rect)
        return image

    def _load_piece_images(self, image_dir: Path) -> dict[str, pygame.Surface]:
        images: dict[str, pygame.Surface] = {}
        size = (self.square_size, self.square_size)
        for letter, name in _PIECE_NAMES.items():
            for symbol, suffix in ((letter.upper(), "W"), (letter, "B")):
                path = image_dir / f"{name}{suffix}.png"
                if path.is_file():
                    images[symbol] = pygame.transform.smoothscale(
                        pygame.image.load(str(path)), size
                    )
        return images

    def draw_board(self, board: Board) -> None:
        """Draw the squares and the panel telling whose turn it is."""
        self.surface.blit(self._board_image, (0, 0))
        white_turn = board.current_turn is Color.WHITE
        panel = WHITE if white_turn else BLACK
        text_color = BLACK if white_turn else WHITE
        self.surface.fill(panel, (0, self.board_size, self.board_size, PANEL_HEIGHT))

        turn_text = "WHITE'S TURN" if white_turn else "BLACK'S TURN"
        rendered = self._font(30).render(turn_text, True, text_color)
        self.surface.blit(
            rendered, ((self.board_size - rendered.get_width()) // 2, self.board_size + 35)
        )
        if board.is_in_check(board.current_turn):
            self._text("CHECK!", 10, self.board_size + 70, 20, RED)

    def draw_pieces(self, board: Board) -> None:
        """Draw every piece on its square, as an image when one was loaded."""
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                piece = board.piece_at(Pos(row, col))
                if piece is None:
                    continue
                symbol = piece.symbol()
                x, y = col * self.square_size, row * self.square_size
                image = self._piece_images.get(symbol)
                if image is not None:
                    self.surface.blit(image, (x, y))
                    continue
                color = WHITE if piece.color is Color.WHITE else BLACK
                rendered = self._font(self.square_size // 2).render(symbol, True, color)
                self.surface.blit(
                    rendered,
                    (x + (self.square_size - rendered.get_width()) // 2,
                     y + (self.square_size - rendered.get_height()) // 2),
                )

    def highlight_square(self, row: int, col: int, color: RGB) -> None:
        """Tint one square with a half-transparent colour."""
        overlay = pygame.Surface((self.square_size, self.square_size), pygame.SRCALPHA)
        overlay.fill((*color[:3], HIGHLIGHT_ALPHA))
        self.surface.blit(overlay, (col * self.square_size, row * self.square_size))

    def draw_promotion_menu(self, color: Color) -> None:
        """Draw the band asking which piece a pawn of color becomes."""
        background = WHITE if color is Color.WHITE else BLACK
        text_color = BLACK if color is Color.WHITE else WHITE
        half = self.board_size // 2
        self.surface.fill(background, (0, half - 50, self.board_size, 100))
        self._text("PROMOTE PAWN TO:", half - 150, half - 30, 20, text_color)
        self._text("Q - Queen  R - Rook  B - Bishop  N - Knight",
                   half - 200, half + 10, 30, text_color)

    def _draw_frame(self, board: Board) -> None:
        self.surface.fill(BACKGROUND)
        self.draw_board(board)
        if board.selected != Pos():
            self.highlight_square(board.selected.row, board.selected.col, YELLOW)
            for target, capture in board.highlight_targets(board.selected).items():
                self.highlight_square(target.row, target.col, RED if capture else GREEN)
        self.draw_pieces(board)

        turn = board.current_turn
        if board.is_checkmate(turn):
            winner = "BLACK" if turn is Color.WHITE else "WHITE"
            self._text(f"CHECKMATE! {winner} WINS!", 100, 350, 40, RED)
        elif board.is_stalemate(turn):
            self._text("STALEMATE! GAME DRAWN!", 150, 350, 40, ORANGE)
        if board.pending_promotion is not None:
            self.draw_promotion_menu(turn)

    def show_start_menu(self, board: Board) -> bool:
        """Offer a new or a saved game; return False if the window was closed."""
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return False
                if event.type == pygame.KEYDOWN:
                    if event.key in (pygame.K_1, pygame.K_KP1):
                        board.initialize()
                        return True
                    if event.key in (pygame.K_2, pygame.K_KP2):
                        board.load(SAVE_FILE)
                        return True
            self.surface.fill(BACKGROUND)
            self._text("CHESS GAME", 250, 200, 50, BLACK)
            self._text("1. New Game", 300, 300, 30, BLACK)
            self._text("2. Load Game", 300, 350, 30, BLACK)
            pygame.display.flip()
            self.clock.tick(FPS)

    def run(self, board: Board) -> None:
        """Play the game on board until the window is closed."""
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                pending = board.pending_promotion
                if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and pending is None:
                    pos = square_from_point(*event.pos, self.board_size)
                    if pos != Pos():
                        board.click(pos.row, pos.col)
                elif event.type == pygame.KEYDOWN and pending is not None:
                    letter = promotion_choice(event.unicode)
                    if letter is not None:
                        board.promote(pending.row, pending.col, letter)
            self._draw_frame(board)
            pygame.display.flip()
            self.clock.tick(FPS)


def main(argv: Optional[list[str]] = None) -> int:
    """Open the chess window and play until it is closed."""
    parser = argparse.ArgumentParser(
        prog="chessgame",
        description=f"Two-player chess. Press 1 for a new game or 2 to load {SAVE_FILE}.",
    )
    parser.parse_args(argv)
    try:
        window = ChessWindow()
        board = Board()
        if window.show_start_menu(board):
            window.run(board)
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())