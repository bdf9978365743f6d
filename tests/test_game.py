import pytest

from conftest import FakeClock, ScriptedSelector, grid_from
from tetris_board import Grid, full_rows
from tetris_config import load_settings
from tetris_game import (Command, DisplayMode, Falling, Flashing, Game, GameOver,
                         GameStateError)
from tetris_piece import TEMPLATES
from tetris_shape import Color, rotate_clockwise

VERTICAL_I = rotate_clockwise(TEMPLATES["I"])
STEM_LEFT_T = rotate_clockwise(TEMPLATES["T"])


def make_game(settings, clock, *shapes, board=None):
    return Game(settings, ScriptedSelector(*shapes), clock, board=board)


def drop(game):
    """Soft-drop until the piece locks; returns the number of rows travelled."""
    moved = 0
    while game.move(0, 1):
        moved += 1
    return moved


def test_spawn_is_centered_at_top(settings, clock, o_piece):
    game = make_game(settings, clock, o_piece)
    assert game.state == Falling(o_piece, (3, 0), clock.now)


def test_o_piece_drops_to_floor_without_flashing(settings, clock, o_piece):
    game = make_game(settings, clock, o_piece)
    assert drop(game) == 18
    assert sorted(game.board.occupied()) == [(3, 18), (3, 19), (4, 18), (4, 19)]
    assert full_rows(game.board) == []
    assert isinstance(game.state, Falling)
    assert game.state.offset == (3, 0)
    assert game.selector.handed == 2


def test_completed_row_flashes_then_clears(settings, clock):
    board = grid_from(*["........"] * 19, "XXX.XXXX", color=Color.CYAN)
    game = make_game(settings, clock, VERTICAL_I, TEMPLATES["O"], board=board)
    assert game.state.offset == (3, 0)

    assert drop(game) == 16
    assert game.state == Flashing(0, clock.now, (19,))
    assert game.board.rows[19] == (Color.CYAN,) * 3 + (Color.BLUE,) + (Color.CYAN,) * 4

    for stage in range(1, settings.flash_stages + 1):
        clock.advance(settings.flash_stage_ms)
        game.tick()
        assert game.state.stage == stage - 1
        clock.advance(1)
        game.tick()
        assert game.state.stage == stage

    clock.advance(settings.flash_stage_ms + 1)
    game.tick()
    assert isinstance(game.state, Falling)
    assert game.board.height == 20
    assert game.board.rows[0] == (None,) * 8
    assert sorted(game.board.occupied()) == [(3, 17), (3, 18), (3, 19)]


def test_flash_alternates_display_mode(settings, clock):
    board = grid_from(*["........"] * 19, "XXX.XXXX")
    game = make_game(settings, clock, VERTICAL_I, board=board)
    drop(game)
    assert game.snapshot().mode is DisplayMode.NORMAL
    clock.advance(settings.flash_stage_ms + 1)
    game.tick()
    snap = game.snapshot()
    assert snap.mode is DisplayMode.FLASH
    assert snap.rows == (19,)
    clock.advance(settings.flash_stage_ms + 1)
    game.tick()
    assert game.snapshot().mode is DisplayMode.NORMAL


def test_commands_are_ignored_while_flashing(settings, clock):
    board = grid_from(*["........"] * 19, "XXX.XXXX")
    game = make_game(settings, clock, VERTICAL_I, board=board)
    drop(game)
    before = (game.state, game.board)
    for cmd in Command:
        game.handle(cmd)
    assert (game.state, game.board) == before


def test_move_left_against_wall_is_rejected(settings, clock, o_piece):
    game = make_game(settings, clock, o_piece)
    for _ in range(3):
        game.handle(Command.MOVE_LEFT)
    assert game.state.offset == (0, 0)
    game.handle(Command.MOVE_LEFT)
    assert game.state.offset == (0, 0)
    assert isinstance(game.state, Falling)


def test_move_right_stops_at_wall(settings, clock, o_piece):
    game = make_game(settings, clock, o_piece)
    for _ in range(10):
        game.handle(Command.MOVE_RIGHT)
    assert game.state.offset == (6, 0)


def test_sideways_move_blocked_by_placed_cell(settings, clock, o_piece):
    board = grid_from("..X.....", *["........"] * 19)
    game = make_game(settings, clock, o_piece, board=board)
    game.handle(Command.MOVE_LEFT)
    assert game.state.offset == (3, 0)


def test_blocked_spawn_goes_straight_to_game_over(settings, clock, o_piece):
    board = grid_from("...XX...", *["........"] * 19)
    game = make_game(settings, clock, o_piece, board=board)
    assert isinstance(game.state, GameOver)
    assert game.over
    snap = game.snapshot()
    assert snap.mode is DisplayMode.DARKENED
    assert snap.grid == board


def test_stacking_to_the_top_ends_the_game(clock, o_piece):
    settings = load_settings({"BOARD_HEIGHT": 4})
    game = make_game(settings, clock, o_piece)
    drop(game)
    assert isinstance(game.state, Falling)
    drop(game)
    assert isinstance(game.state, GameOver)
    assert len(game.board.occupied()) == 8


def test_gravity_waits_for_interval_to_be_exceeded(settings, clock, o_piece):
    game = make_game(settings, clock, o_piece)
    clock.advance(settings.fall_interval_ms)
    game.tick()
    assert game.state.offset == (3, 0)
    clock.advance(1)
    game.tick()
    assert game.state.offset == (3, 1)
    assert game.state.fall_timer == clock.now


def test_soft_drop_resets_fall_timer(settings, clock, o_piece):
    game = make_game(settings, clock, o_piece)
    clock.advance(500)
    game.handle(Command.SOFT_DROP)
    assert game.state.offset == (3, 1)
    clock.advance(500)
    game.tick()
    assert game.state.offset == (3, 1)


def test_sideways_move_keeps_fall_timer(settings, clock, o_piece):
    game = make_game(settings, clock, o_piece)
    start = game.state.fall_timer
    clock.advance(300)
    game.handle(Command.MOVE_RIGHT)
    assert game.state.fall_timer == start


def test_gravity_locks_resting_piece(settings, clock, o_piece):
    game = make_game(settings, clock, o_piece, TEMPLATES["I"])
    for _ in range(19):
        clock.advance(settings.fall_interval_ms + 1)
        game.tick()
    assert sorted(game.board.occupied()) == [(3, 18), (3, 19), (4, 18), (4, 19)]
    assert game.state.piece == TEMPLATES["I"]
    assert game.state.offset == (2, 0)


def test_rotate_in_place(settings, clock):
    game = make_game(settings, clock, TEMPLATES["T"])
    game.handle(Command.ROTATE_CW)
    assert game.state.piece == STEM_LEFT_T
    assert game.state.offset == (2, 0)
    game.handle(Command.ROTATE_CCW)
    assert game.state.piece == TEMPLATES["T"]


def test_rotate_near_right_wall_kicks_left(settings, clock):
    game = make_game(settings, clock, STEM_LEFT_T)
    for _ in range(3):
        game.handle(Command.MOVE_RIGHT)
    assert game.state.offset == (6, 0)
    game.handle(Command.ROTATE_CW)
    assert game.state.offset == (5, 0)
    assert game.state.piece == rotate_clockwise(STEM_LEFT_T)


def test_rotation_without_room_is_a_no_op(clock):
    settings = load_settings({"WALL_KICKS": (0,)})
    game = make_game(settings, clock, STEM_LEFT_T)
    for _ in range(3):
        game.handle(Command.MOVE_RIGHT)
    before = game.state
    game.handle(Command.ROTATE_CW)
    assert game.state == before


def test_falling_snapshot_shows_piece_over_board(settings, clock, o_piece):
    game = make_game(settings, clock, o_piece)
    snap = game.snapshot()
    assert snap.mode is DisplayMode.NORMAL
    assert sorted(snap.grid.occupied()) == [(3, 0), (3, 1), (4, 0), (4, 1)]
    assert game.board.occupied() == []


def test_game_over_ignores_ticks_and_moves(settings, clock, o_piece):
    board = grid_from("...XX...", *["........"] * 19)
    game = make_game(settings, clock, o_piece, board=board)
    clock.advance(10_000)
    game.tick()
    game.handle(Command.SOFT_DROP)
    game.handle(Command.ROTATE_CW)
    assert isinstance(game.state, GameOver)
    assert game.board == board


def test_restart_clears_board_and_spawns(settings, clock, o_piece):
    board = grid_from("...XX...", *["XXXX.XXX"] * 19)
    game = make_game(settings, clock, o_piece, board=board)
    game.handle(Command.RESTART)
    assert game.board == Grid.empty(8, 20)
    assert game.state == Falling(o_piece, (3, 0), clock.now)


def test_restart_is_ignored_mid_game(settings, clock, o_piece):
    game = make_game(settings, clock, o_piece)
    game.handle(Command.SOFT_DROP)
    game.handle(Command.RESTART)
    assert game.state.offset == (3, 1)


def test_state_specific_steps_fail_loudly(settings, clock, o_piece):
    game = make_game(settings, clock, o_piece)
    with pytest.raises(GameStateError):
        game.restart()
    over = make_game(settings, clock, o_piece, board=grid_from("...XX...", *["........"] * 19))
    with pytest.raises(GameStateError):
        over.move(1, 0)
    with pytest.raises(GameStateError):
        over.rotate()


def test_board_must_match_settings(settings, clock, o_piece):
    with pytest.raises(ValueError):
        make_game(settings, clock, o_piece, board=Grid.empty(10, 20))


def test_each_transition_replaces_the_board(settings, clock, o_piece):
    game = make_game(settings, clock, o_piece)
    first = game.board
    drop(game)
    assert game.board is not first
    assert first.occupied() == []


def test_default_clock_and_selector_come_from_pygame():
    game = Game(load_settings({"SEED": 7}))
    assert isinstance(game.state, Falling)
    assert game.state.piece in TEMPLATES.values()
