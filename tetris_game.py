"""
Game state machine: Falling -> (Flashing ->) Falling / GameOver.

The machine is polled. Every event (a periodic tick or one input command) runs
to completion before the next is handled, and each transition replaces the
board and state objects instead of mutating them. Time comes from an injected
clock returning milliseconds, so timing can be driven deterministically.
"""
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, NamedTuple, Optional, Tuple, Union

import pygame

from tetris_board import Grid, eliminate, full_rows, try_merge
from tetris_config import Settings, load_settings
from tetris_rng import NESRandom
from tetris_shape import Offset, Shape, rotate_clockwise, rotate_counterclockwise

log = logging.getLogger(__name__)

Clock = Callable[[], int]


class GameStateError(RuntimeError):
    """A step was requested in a state that does not support it."""


class Command(Enum):
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SOFT_DROP = "soft_drop"
    ROTATE_CW = "rotate_cw"
    ROTATE_CCW = "rotate_ccw"
    RESTART = "restart"


class DisplayMode(Enum):
    NORMAL = "normal"
    FLASH = "flash"
    DARKENED = "darkened"


@dataclass(frozen=True)
class Falling:
    piece: Shape
    offset: Offset
    fall_timer: int


@dataclass(frozen=True)
class Flashing:
    stage: int
    stage_timer: int
    rows: Tuple[int, ...]


@dataclass(frozen=True)
class GameOver:
    pass


State = Union[Falling, Flashing, GameOver]


class Snapshot(NamedTuple):
    """What the renderer reads: a grid to draw and how to decorate it."""
    grid: Grid
    mode: DisplayMode
    rows: Tuple[int, ...] = ()


MOVES = {
    Command.MOVE_LEFT: (-1, 0),
    Command.MOVE_RIGHT: (1, 0),
    Command.SOFT_DROP: (0, 1),
}


class Game:
    def __init__(self, settings: Optional[Settings] = None, selector=None,
                 clock: Optional[Clock] = None, board: Optional[Grid] = None):
        self.settings = settings or load_settings()
        s = self.settings
        self.selector = selector or NESRandom(s.seed, s.pre_rotate)
        self.clock: Clock = clock or pygame.time.get_ticks
        if board is None:
            board = Grid.empty(s.board_width, s.board_height)
        elif (board.width, board.height) != (s.board_width, s.board_height):
            raise ValueError(f"board is {board.width}x{board.height}, "
                             f"settings say {s.board_width}x{s.board_height}")
        self.board: Grid = board
        self.state: State = self._spawn(self.clock())

    # ---------- spawning & locking ----------
    def _spawn(self, now: int) -> State:
        piece = self.selector.next_template()
        offset = ((self.board.width - piece.width) // 2, 0)
        if try_merge(self.board, offset, piece) is None:
            log.info("spawn blocked at %s, game over", offset)
            return GameOver()
        log.debug("spawned %s piece at %s", piece.color.value, offset)
        return Falling(piece, offset, now)

    def _lock(self, falling: Falling, now: int) -> State:
        merged = try_merge(self.board, falling.offset, falling.piece)
        if merged is None:
            log.info("piece cannot rest at %s, game over", falling.offset)
            return GameOver()
        self.board = merged
        rows = full_rows(merged)
        log.debug("locked %s piece at %s", falling.piece.color.value, falling.offset)
        if rows:
            log.debug("rows %s complete", rows)
            return Flashing(0, now, tuple(rows))
        return self._spawn(now)

    def _falling(self) -> Falling:
        if not isinstance(self.state, Falling):
            raise GameStateError(f"no falling piece in state {type(self.state).__name__}")
        return self.state

    # ---------- commands ----------
    def move(self, dx: int, dy: int) -> bool:
        """Shift the falling piece; a blocked downward move locks it.

        Returns True when the offset changed.
        """
        falling = self._falling()
        now = self.clock()
        x, y = falling.offset
        candidate = (x + dx, y + dy)
        down = (dx, dy) == (0, 1)
        if try_merge(self.board, candidate, falling.piece) is not None:
            self.state = replace(falling, offset=candidate,
                                 fall_timer=now if down else falling.fall_timer)
            return True
        if down:
            self.state = self._lock(falling, now)
        return False

    def rotate(self, clockwise: bool = True) -> bool:
        falling = self._falling()
        turned = rotate_clockwise(falling.piece) if clockwise else rotate_counterclockwise(falling.piece)
        x, y = falling.offset
        for dx in self.settings.wall_kicks:
            if try_merge(self.board, (x + dx, y), turned) is not None:
                self.state = replace(falling, piece=turned, offset=(x + dx, y))
                return True
        return False

    def restart(self):
        if not isinstance(self.state, GameOver):
            raise GameStateError(f"restart needs GameOver, not {type(self.state).__name__}")
        log.info("restarting")
        self.board = Grid.empty(self.board.width, self.board.height)
        self.state = self._spawn(self.clock())

    def handle(self, command: Command):
        """Apply one input command; commands invalid in the current state are ignored."""
        if command is Command.RESTART:
            if isinstance(self.state, GameOver):
                self.restart()
            return
        if not isinstance(self.state, Falling):
            return
        if command in MOVES:
            self.move(*MOVES[command])
        elif command is Command.ROTATE_CW:
            self.rotate(True)
        elif command is Command.ROTATE_CCW:
            self.rotate(False)

    # ---------- time ----------
    def tick(self):
        now = self.clock()
        state = self.state
        s = self.settings
        if isinstance(state, Falling):
            if now - state.fall_timer > s.fall_interval_ms:
                self.move(0, 1)
        elif isinstance(state, Flashing):
            if now - state.stage_timer <= s.flash_stage_ms:
                return
            if state.stage < s.flash_stages:
                self.state = replace(state, stage=state.stage + 1, stage_timer=now)
            else:
                self.board = eliminate(self.board, state.rows)
                log.debug("cleared rows %s", list(state.rows))
                self.state = self._spawn(now)

    # ---------- views ----------
    @property
    def over(self) -> bool:
        return isinstance(self.state, GameOver)

    def snapshot(self) -> Snapshot:
        state = self.state
        if isinstance(state, Falling):
            merged = try_merge(self.board, state.offset, state.piece)
            return Snapshot(merged or self.board, DisplayMode.NORMAL)
        if isinstance(state, Flashing):
            if state.stage % 2:
                return Snapshot(self.board, DisplayMode.FLASH, state.rows)
            return Snapshot(self.board, DisplayMode.NORMAL)
        return Snapshot(self.board, DisplayMode.DARKENED)
