"""Tetris played on the framebuffer, driven by gamepad button states."""

import random
from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass

from efmgames.framebuffer import HEIGHT, Framebuffer
from efmgames.util import BLACK, BLUE, WHITE, number_to_digits, rgb888_to_rgb565

TILE_SIZE = 10
BORDER_WIDTH = 1

GAME_WIDTH = 10
GAME_HEIGHT = HEIGHT // TILE_SIZE

UNIQ_SHAPES = 7
SHAPE_WIDTH = 4
SHAPE_HEIGHT = 4

PLAYER_INIT_X = 3
PLAYER_INIT_Y = 0

LETTER_TILE_SIZE = 5
LETTER_HEIGHT = 5
LETTER_WIDTH = 4

QUEUE_LENGTH = 4
MAX_SCORE = 999999
MAX_LEVEL = 9
LINE_SCORES = {1: 40, 2: 100, 3: 300, 4: 1200}

BUTTON_LEFT = 1
BUTTON_ROTATE = 2
BUTTON_RIGHT = 4
BUTTON_DROP = 8
BUTTON_QUIT = 16
BUTTON_RESTART = 32
BUTTON_DOWN = 128

Bitmap = tuple[tuple[int, ...], ...]


def _bitmap(*rows: str) -> Bitmap:
    return tuple(tuple(1 if ch == "#" else 0 for ch in row) for row in rows)


EMPTY_SHAPE = _bitmap("....", "....", "....", "....")

SHAPES: tuple[Bitmap, ...] = (
    _bitmap("....", "####", "....", "...."),  # I
    _bitmap("#...", "###.", "....", "...."),  # J
    _bitmap("..#.", "###.", "....", "...."),  # L
    _bitmap(".##.", ".##.", "....", "...."),  # O
    _bitmap(".##.", "##..", "....", "...."),  # S
    _bitmap(".#..", "###.", "....", "...."),  # T
    _bitmap("##..", ".##.", "....", "...."),  # Z
)

_SHAPE_RGB = (
    (0, 255, 255),
    (0, 0, 255),
    (255, 172, 0),
    (255, 255, 0),
    (0, 255, 0),
    (154, 0, 255),
    (255, 0, 0),
)

_S = _bitmap("###.", "#...", "###.", "..#.", "###.")
_C = _bitmap("###.", "#...", "#...", "#...", "###.")
_O = _bitmap("###.", "#.#.", "#.#.", "#.#.", "###.")
_R = _bitmap("##..", "#.#.", "###.", "##..", "#.#.")
_E = _bitmap("###.", "#...", "###.", "#...", "###.")
_L = _bitmap("#...", "#...", "#...", "#...", "###.")
_V = _bitmap("#.#.", "#.#.", "#.#.", ".#..", ".#..")

SCORE_TEXT: tuple[Bitmap, ...] = (_S, _C, _O, _R, _E)
LEVEL_TEXT: tuple[Bitmap, ...] = (_L, _E, _V, _E, _L)

DIGIT_GLYPHS: tuple[Bitmap, ...] = (
    _bitmap("###.", "#.#.", "#.#.", "#.#.", "###."),
    _bitmap("..#.", "..#.", "..#.", "..#.", "..#."),
    _bitmap("###.", "..#.", "###.", "#...", "###."),
    _bitmap("###.", "..#.", "###.", "..#.", "###."),
    _bitmap("#.#.", "#.#.", "###.", "..#.", "..#."),
    _bitmap("###.", "#...", "###.", "..#.", "###."),
    _bitmap("###.", "#...", "###.", "#.#.", "###."),
    _bitmap("###.", "..#.", "..#.", "..#.", "..#."),
    _bitmap("###.", "#.#.", "###.", "#.#.", "###."),
    _bitmap("###.", "#.#.", "###.", "..#.", "###."),
)


class QuitGame(Exception):
    """Raised when the player asks to leave the game."""


@dataclass
class Player:
    """The falling tetromino and the player's progress."""

    x: int = PLAYER_INIT_X
    y: int = PLAYER_INIT_Y
    shape: Bitmap = EMPTY_SHAPE
    color: int = BLACK
    score: int = 0
    lines_cleared: int = 0
    level: int = 0


@dataclass
class Projection:
    """Where the player's tetromino would land if dropped."""

    x: int = PLAYER_INIT_X
    y: int = PLAYER_INIT_Y
    shape: Bitmap = EMPTY_SHAPE


def rotate_clockwise(shape: Bitmap) -> Bitmap:
    """Return the shape turned 90 degrees clockwise."""
    return tuple(zip(*reversed(shape)))


def _cells(shape: Bitmap):
    for i, row in enumerate(shape):
        for j, cell in enumerate(row):
            if cell:
                yield i, j


class Tetris:
    """Game state together with the drawing of it onto a framebuffer."""

    def __init__(self, framebuffer: Framebuffer, rng=None):
        self.fb = framebuffer
        self.rng = rng if rng is not None else random.Random()
        self.board = [[0] * GAME_WIDTH for _ in range(GAME_HEIGHT)]
        self.queue: deque[int] = deque()
        self.player = Player()
        self.projection = Projection()
        self.colors = tuple(rgb888_to_rgb565(*rgb) for rgb in _SHAPE_RGB)

    # shape manipulation

    def illegal_position(self, shape: Bitmap, x: int, y: int) -> bool:
        """Whether the shape at (x, y) leaves the board or overlaps a taken tile."""
        for i, j in _cells(shape):
            bx, by = x + j, y + i
            if not (0 <= bx < GAME_WIDTH and 0 <= by < GAME_HEIGHT):
                return True
            if self.board[by][bx]:
                return True
        return False

    def rotate(self) -> None:
        """Turn the player's shape until it fits, or back to where it started."""
        shape = self.player.shape
        for _ in range(4):
            shape = rotate_clockwise(shape)
            if not self.illegal_position(shape, self.player.x, self.player.y):
                break
        self.player.shape = shape

    def shape_color(self, index: int) -> int:
        """Colour of the shape with the given index."""
        if 0 <= index < UNIQ_SHAPES:
            return self.colors[index]
        return self.colors[0]

    def update_projection(self) -> None:
        """Move the projection to where the player's shape would land."""
        proj = self.projection
        proj.shape = self.player.shape
        proj.x = self.player.x
        proj.y = self.player.y
        while not self.illegal_position(proj.shape, proj.x, proj.y + 1):
            proj.y += 1

    # painting and blitting

    def paint_tetris_tile(self, color: int, x: int, y: int) -> None:
        """Paint one board tile, inside its border, without refreshing."""
        if x < 0 or y < 0:
            raise ValueError(f"could not paint tile x: {x}, y: {y}")
        self.fb.paint_region(color, x * TILE_SIZE + BORDER_WIDTH,
                             y * TILE_SIZE + BORDER_WIDTH,
                             TILE_SIZE - BORDER_WIDTH * 2,
                             TILE_SIZE - BORDER_WIDTH * 2)

    def paint_text_tile(self, color: int, x: int, y: int) -> None:
        """Paint one text tile at an absolute pixel position."""
        if x < 0 or y < 0:
            raise ValueError(f"could not paint tile x: {x}, y: {y}")
        self.fb.paint_region(color, x, y, LETTER_TILE_SIZE, LETTER_TILE_SIZE)

    def blit_shape(self, color: int, x: int, y: int, shape: Bitmap) -> None:
        """Paint the tiles of a shape and refresh the area around it."""
        for i, j in _cells(shape):
            self.paint_tetris_tile(color, x + j, y + i)
        x = max(x, 0)
        self.fb.update_region(x * TILE_SIZE, y * TILE_SIZE,
                              SHAPE_WIDTH * TILE_SIZE, SHAPE_HEIGHT * TILE_SIZE)

    def blit_board(self) -> None:
        """Paint every taken board tile and refresh the whole screen."""
        for i, row in enumerate(self.board):
            for j, color in enumerate(row):
                if color:
                    self.paint_tetris_tile(color, j, i)
        self.fb.update_screen()

    def paint_queue(self) -> None:
        """Paint the queue of coming shapes beside the board."""
        offset_top = 3
        for idx, shape_index in enumerate(self.queue):
            color = self.shape_color(shape_index)
            shape = SHAPES[shape_index]
            for i, row in enumerate(shape):
                for j, cell in enumerate(row):
                    self.paint_tetris_tile(color if cell else BLACK,
                                           GAME_WIDTH + 4 + j,
                                           idx * (SHAPE_HEIGHT + 1) + i + offset_top)

    def paint_glyph(self, glyph: Bitmap, x: int, y: int, color: int) -> None:
        """Paint one letter or digit, with black for its empty tiles."""
        for i, row in enumerate(glyph):
            for j, cell in enumerate(row):
                self.paint_text_tile(color if cell else BLACK,
                                     x + j * LETTER_TILE_SIZE,
                                     y + i * LETTER_TILE_SIZE)

    def paint_text(self, text: Sequence[Bitmap], x: int, y: int, color: int) -> None:
        """Paint a row of glyphs."""
        for i, glyph in enumerate(text):
            self.paint_glyph(glyph, x + LETTER_WIDTH * LETTER_TILE_SIZE * i, y, color)

    def paint_digits(self, number: int, x: int, y: int, color: int) -> None:
        """Paint a number in decimal."""
        text = [DIGIT_GLYPHS[d] for d in number_to_digits(number)]
        self.paint_text(text, x, y, color)

    # board manipulation

    def shift_rows_above(self, row: int) -> None:
        """Drop every row above `row` one step, removing `row` itself."""
        self.board[1:row + 1] = self.board[0:row]
        self.board[0] = [0] * GAME_WIDTH
        for i in range(row + 1):
            for j, color in enumerate(self.board[i]):
                if not color:
                    self.paint_tetris_tile(BLACK, j, i)

    def transfer_shape_to_board(self, shape: Bitmap, x: int, y: int) -> int:
        """Fix a shape onto the board, clear full lines, and update score and level.

        Returns the number of lines cleared.
        """
        player = self.player
        for i, j in _cells(shape):
            self.board[y + i][x + j] = player.color

        lines = 0
        for i in range(y, min(y + SHAPE_HEIGHT, GAME_HEIGHT)):
            if all(self.board[i]):
                lines += 1
                self.shift_rows_above(i)

        player.lines_cleared += lines
        player.score = min(player.score + LINE_SCORES.get(lines, 0), MAX_SCORE)
        player.level = min(player.lines_cleared // 10, MAX_LEVEL)
        return lines

    # game flow

    def _enqueue_random(self, *, front: bool = False) -> None:
        index = self.rng.randrange(UNIQ_SHAPES)
        if front:
            self.queue.appendleft(index)
        else:
            self.queue.append(index)

    def new_player_shape(self) -> None:
        """Give the player the next shape from the queue and redraw the panel."""
        player = self.player
        player.x = PLAYER_INIT_X
        player.y = PLAYER_INIT_Y

        self.paint_digits(player.score, 200, 70, WHITE)
        self.paint_digits(player.level, 200, 170, WHITE)
        lines_left = 10 - player.lines_cleared % 10
        if lines_left == 10:
            self.paint_digits(lines_left, 260, 170, WHITE)
        else:
            self.paint_digits(0, 260, 170, BLACK)
            self.paint_digits(lines_left, 280, 170, WHITE)

        index = self.queue.popleft()
        player.shape = SHAPES[index]
        player.color = self.shape_color(index)

        self.update_projection()
        self._enqueue_random()

        if self.illegal_position(player.shape, player.x, player.y):
            self.restart()

        self.paint_queue()
        self.paint_text(SCORE_TEXT, 200, 30, WHITE)
        self.paint_text(LEVEL_TEXT, 200, 130, WHITE)
        self.blit_board()

    def _paint_border(self) -> None:
        for i in range(GAME_HEIGHT):
            self.paint_tetris_tile(WHITE, GAME_WIDTH, i)

    def restart(self) -> None:
        """Start a new game from an empty board."""
        self.board = [[0] * GAME_WIDTH for _ in range(GAME_HEIGHT)]
        for i in range(GAME_HEIGHT):
            for j in range(GAME_WIDTH):
                self.paint_tetris_tile(BLACK, j, i)

        self.queue.clear()
        for _ in range(QUEUE_LENGTH):
            self._enqueue_random(front=True)

        player = self.player
        player.score = 0
        player.level = 0
        player.lines_cleared = 0

        self.paint_digits(player.score, 200, 70, WHITE)
        self.fb.paint_region(BLACK, 200, 70, 120, 30)
        self.paint_digits(player.level, 200, 170, WHITE)
        self.fb.paint_region(BLACK, 200, 170, 120, 30)

        self.new_player_shape()
        self._paint_border()
        self.fb.update_screen()

    def tick(self) -> bool:
        """Move the shape down one step; fix it to the board if it cannot move.

        Returns True if the shape moved.
        """
        player = self.player
        if not self.illegal_position(player.shape, player.x, player.y + 1):
            player.y += 1
            return True
        self.transfer_shape_to_board(player.shape, player.x, player.y)
        self.new_player_shape()
        return False

    def _erase_player(self) -> None:
        self.blit_shape(BLACK, self.projection.x, self.projection.y, self.player.shape)
        self.blit_shape(BLACK, self.player.x, self.player.y, self.player.shape)

    def _draw_player(self) -> None:
        self.blit_shape(BLUE, self.projection.x, self.projection.y, self.player.shape)
        self.blit_shape(self.player.color, self.player.x, self.player.y,
                        self.player.shape)

    def tick_and_blit(self) -> None:
        """Advance the game one step and redraw the falling shape."""
        self._erase_player()
        self.tick()
        self._draw_player()

    def handle_gamepad(self, state: int) -> None:
        """Act on a gamepad button state."""
        self._erase_player()
        player = self.player

        if state == BUTTON_LEFT:
            if not self.illegal_position(player.shape, player.x - 1, player.y):
                player.x -= 1
        elif state == BUTTON_ROTATE:
            self.rotate()
        elif state == BUTTON_RIGHT:
            if not self.illegal_position(player.shape, player.x + 1, player.y):
                player.x += 1
        elif state == BUTTON_DROP:
            while self.tick():
                pass
            self.blit_board()
        elif state == BUTTON_QUIT:
            self.fb.paint_screen(BLACK)
            raise QuitGame("Exiting tetris. Goodbye!")
        elif state == BUTTON_RESTART:
            self.restart()
        elif state == BUTTON_DOWN:
            self.tick()

        self.update_projection()
        self._draw_player()

    def start(self) -> None:
        """Clear the screen, draw the border and begin a game."""
        self.fb.paint_screen(BLACK)
        self._paint_border()
        self.queue.clear()
        self.restart()
        self.update_projection()
        self.blit_board()
        self._draw_player()