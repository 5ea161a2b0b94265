"""Test viewport scrolling and screen metrics."""

from linevi.model import CursorPosition
from linevi.view import ScreenMetrics, Viewport


def test_metrics_reserve_status_and_command_rows():
    metrics = ScreenMetrics.from_size(24, 80)
    assert metrics.body_rows == 22
    assert metrics.content_width == 74


def test_metrics_minimums():
    metrics = ScreenMetrics.from_size(1, 3)
    assert metrics.rows == 4
    assert metrics.cols == 10
    assert metrics.body_rows == 2
    assert metrics.content_width == 8


def test_scroll_down_to_cursor_below_window():
    """With 5 body rows, moving to line 10 puts the top at 6."""
    viewport = Viewport()
    metrics = viewport.adjust(CursorPosition(10, 0), line_count=50, screen_rows=7, screen_cols=80)
    assert metrics.body_rows == 5
    assert viewport.top == 6


def test_scroll_up_to_cursor_above_window():
    viewport = Viewport(top=20)
    viewport.adjust(CursorPosition(12, 0), line_count=50, screen_rows=7, screen_cols=80)
    assert viewport.top == 12


def test_no_scroll_while_cursor_visible():
    viewport = Viewport(top=6)
    for line in range(6, 11):
        viewport.adjust(CursorPosition(line, 0), line_count=50, screen_rows=7, screen_cols=80)
        assert viewport.top == 6


def test_top_clamped_to_document():
    viewport = Viewport(top=40)
    viewport.adjust(CursorPosition(2, 0), line_count=3, screen_rows=7, screen_cols=80)
    assert viewport.top == 2


def test_horizontal_scroll_follows_cursor():
    viewport = Viewport()
    # 20 columns - 6 gutter = 14 content columns
    viewport.adjust(CursorPosition(0, 30), line_count=1, screen_rows=10, screen_cols=20)
    assert viewport.left == 17
    viewport.adjust(CursorPosition(0, 20), line_count=1, screen_rows=10, screen_cols=20)
    assert viewport.left == 17
    viewport.adjust(CursorPosition(0, 3), line_count=1, screen_rows=10, screen_cols=20)
    assert viewport.left == 3


def test_cursor_inside_window_after_adjust():
    viewport = Viewport(top=3, left=50)
    cursor = CursorPosition(40, 5)
    metrics = viewport.adjust(cursor, line_count=100, screen_rows=12, screen_cols=30)
    assert viewport.top <= cursor.line < viewport.top + metrics.body_rows
    assert viewport.left <= cursor.col < viewport.left + metrics.content_width


def test_reset():
    viewport = Viewport(top=4, left=9)
    viewport.reset()
    assert (viewport.top, viewport.left) == (0, 0)
