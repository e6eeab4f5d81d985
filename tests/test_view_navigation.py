"""Tests for cursor movement and scrolling in the View."""

import random

import pytest
from hecto.buffer import Buffer
from hecto.commands import Direction, Move, Resize
from hecto.position import Position, Size
from hecto.view import View


SAMPLE_LINES = ["Hello world!", "How are we all doing?", "", "👋Ｂ👋", "Goodbye all"]


def create_view(lines=SAMPLE_LINES, width=5, height=3):
    return View(Buffer.from_lines(lines), Size(width=width, height=height))


def assert_cursor_visible(view):
    grid = view.buffer.grid_position_of(view.cursor_position)
    offset = view.scroll_offset
    assert offset.row <= grid.row < offset.row + view.size.height
    assert offset.col <= grid.col < offset.col + view.size.width


def test_end_scrolls_right_to_caret_after_last_character():
    view = create_view()
    view.cursor_position = Position(1, 3)

    view.move(Direction.END)

    assert view.cursor_position == Position(1, 21)
    assert view.scroll_offset == Position(row=0, col=17)


def test_home_keeps_row():
    view = create_view()
    view.cursor_position = Position(1, 7)
    view.move(Direction.HOME)
    assert view.cursor_position == Position(1, 0)


def test_end_sets_column_to_line_length():
    view = create_view()
    view.cursor_position = Position(3, 0)
    view.move(Direction.END)
    assert view.cursor_position == Position(3, 3)


def test_left_saturates_at_column_zero():
    view = create_view()
    view.move(Direction.LEFT)
    assert view.cursor_position == Position(0, 0)


def test_right_stops_after_last_character():
    view = create_view()
    view.cursor_position = Position(0, 11)
    view.move(Direction.RIGHT)
    assert view.cursor_position == Position(0, 12)
    view.move(Direction.RIGHT)
    assert view.cursor_position == Position(0, 12)


def test_right_does_not_wrap_to_next_line():
    view = create_view()
    view.cursor_position = Position(0, 12)
    view.move(Direction.RIGHT)
    assert view.cursor_position.row == 0


def test_up_saturates_at_first_row():
    view = create_view()
    view.move(Direction.UP)
    assert view.cursor_position == Position(0, 0)


def test_down_stops_at_last_line():
    view = create_view()
    for _ in range(10):
        view.move(Direction.DOWN)
    assert view.cursor_position.row == 4


def test_vertical_move_clamps_column_to_line_length():
    view = create_view()
    view.cursor_position = Position(1, 20)

    view.move(Direction.UP)
    assert view.cursor_position == Position(0, 12)

    view.move(Direction.DOWN)
    view.move(Direction.DOWN)
    assert view.cursor_position == Position(2, 0)


def test_page_down_moves_by_viewport_height():
    view = create_view(height=3)
    view.move(Direction.PAGE_DOWN)
    assert view.cursor_position.row == 3
    view.move(Direction.PAGE_DOWN)
    assert view.cursor_position.row == 4


def test_page_up_moves_by_viewport_height():
    view = create_view(height=3)
    view.cursor_position = Position(4, 0)
    view.move(Direction.PAGE_UP)
    assert view.cursor_position.row == 1
    view.move(Direction.PAGE_UP)
    assert view.cursor_position.row == 0


@pytest.mark.parametrize("direction", list(Direction))
def test_moves_in_empty_buffer_stay_at_origin(direction):
    view = create_view(lines=[])
    view.move(direction)
    assert view.cursor_position == Position(0, 0)
    assert view.scroll_offset == Position(0, 0)


def test_move_sets_redraw_flag():
    view = create_view()
    view.needs_redraw = False
    view.move(Direction.DOWN)
    assert view.needs_redraw


def test_scrolling_down_is_lazy():
    view = create_view(height=3)
    for _ in range(2):
        view.move(Direction.DOWN)
    assert view.scroll_offset.row == 0

    view.move(Direction.DOWN)
    assert view.scroll_offset.row == 1

    # Moving back up inside the window doesn't scroll
    view.move(Direction.UP)
    assert view.scroll_offset.row == 1

    view.move(Direction.UP)
    view.move(Direction.UP)
    assert view.scroll_offset.row == 0


def test_horizontal_scroll_uses_display_columns():
    view = create_view(width=5)
    view.cursor_position = Position(3, 0)

    view.move(Direction.END)

    # Caret after three wide graphemes sits at display column 6
    assert view.scroll_offset.col == 2
    assert view.cursor_grid_position() == Position(3 - view.scroll_offset.row, 4)


def test_home_scrolls_back_to_left_edge():
    view = create_view()
    view.cursor_position = Position(1, 3)
    view.move(Direction.END)
    view.move(Direction.HOME)
    assert view.scroll_offset.col == 0
    assert view.cursor_grid_position().col == 0


def test_cursor_grid_position_is_relative_to_viewport():
    view = create_view()
    view.cursor_position = Position(4, 0)
    view.move(Direction.END)
    assert view.cursor_position == Position(4, 11)
    assert view.scroll_offset == Position(row=2, col=7)
    assert view.cursor_grid_position() == Position(2, 4)


def test_resize_keeps_cursor_visible():
    view = create_view(width=5, height=3)
    view.cursor_position = Position(1, 3)
    view.move(Direction.END)
    assert view.scroll_offset.col == 17

    # Growing the window doesn't scroll back
    view.resize(Size(width=30, height=3))
    assert view.scroll_offset.col == 17

    view.resize(Size(width=3, height=3))
    assert view.scroll_offset.col == 19
    assert_cursor_visible(view)


def test_resize_shorter_scrolls_down_to_cursor():
    view = create_view(width=20, height=5)
    view.cursor_position = Position(4, 0)
    view.resize(Size(width=20, height=1))
    assert view.scroll_offset.row == 4
    assert view.needs_redraw


def test_handle_command_dispatches_moves_and_resizes():
    view = create_view()
    assert view.handle_command(Move(Direction.DOWN)) is False
    assert view.cursor_position.row == 1
    assert view.handle_command(Resize(Size(width=40, height=10))) is False
    assert view.size == Size(width=40, height=10)


def test_handle_command_rejects_editor_commands():
    from hecto.commands import Quit
    view = create_view()
    with pytest.raises(TypeError):
        view.handle_command(Quit())


@pytest.mark.parametrize("seed", range(5))
def test_cursor_stays_visible_after_every_move(seed):
    rng = random.Random(seed)
    lines = SAMPLE_LINES + ["日本語のテキストです" * 3, "x" * 40, "", "a👋b"]
    view = create_view(lines=lines, width=7, height=4)
    for _ in range(200):
        if rng.random() < 0.1:
            view.resize(Size(width=rng.randint(1, 12), height=rng.randint(1, 6)))
        else:
            view.move(rng.choice(list(Direction)))
        assert_cursor_visible(view)
