# Copyright 2026 The ChromiumOS Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

"""Tests for the line buffer and its rendering."""

# pylint:disable=import-error
import hypothesis
import hypothesis.strategies as st
import pytest
from termsrv import line_buffer
from termsrv import render


# pylint: disable=redefined-outer-name


@pytest.fixture
def line(terminal):
    """A LineBuffer with a capacity of 8, rendering to terminal."""
    return line_buffer.LineBuffer(render.Renderer(terminal.send), capacity=8)


def fill(line, terminal, data, cursor=None):
    """Put data in the line, move the cursor, and forget the output."""
    line.insert(data)
    if cursor is not None:
        line.move_cursor(cursor - line.cursor_pos)
    terminal.clear()


def test_record_rejects_oversized_data():
    with pytest.raises(ValueError):
        line_buffer.LineRecord(4, b"abcd")


def test_record_copy_is_independent():
    record = line_buffer.LineRecord(8, b"abc")
    copy = record.copy()
    record.clear()
    assert copy.data == b"abc"
    assert record.data == b""
    assert record.buffer == bytearray(8)


def test_insert_at_end(line, terminal):
    assert line.insert(b"ab")
    assert line.data == b"ab"
    assert line.cursor_pos == 2
    assert terminal.output == b"ab"


def test_insert_mid_line_redraws_tail(line, terminal):
    fill(line, terminal, b"ac", cursor=1)
    assert line.insert(b"b")
    assert line.data == b"abc"
    assert line.cursor_pos == 2
    assert terminal.output == (
        b"b" + render.SAVE_CURSOR + b"c" + render.RESTORE_CURSOR
    )


def test_insert_when_full_is_dropped(line, terminal):
    fill(line, terminal, b"abcdefg")
    assert not line.insert(b"h")
    assert line.data == b"abcdefg"
    assert line.cursor_pos == 7
    assert terminal.output == b""


def test_insert_that_would_overflow_is_dropped_whole(line, terminal):
    fill(line, terminal, b"abcde")
    assert not line.insert(b"xyz")
    assert line.data == b"abcde"


def test_erase_before_mid_line(line, terminal):
    fill(line, terminal, b"test", cursor=2)
    assert line.erase_before()
    assert line.data == b"tst"
    assert line.cursor_pos == 1
    assert line.record.buffer[3] == 0
    assert terminal.output == (
        render.DEL
        + render.SAVE_CURSOR
        + b"st"
        + b" "
        + render.RESTORE_CURSOR
    )


def test_erase_before_at_start_is_noop(line, terminal):
    fill(line, terminal, b"abc", cursor=0)
    assert not line.erase_before()
    assert line.data == b"abc"
    assert terminal.output == b""


def test_erase_at_mid_line(line, terminal):
    fill(line, terminal, b"abc", cursor=0)
    assert line.erase_at()
    assert line.data == b"bc"
    assert line.cursor_pos == 0
    assert terminal.output == (
        render.SAVE_CURSOR + b"bc" + b" " + render.RESTORE_CURSOR
    )


def test_erase_at_end_is_noop(line, terminal):
    fill(line, terminal, b"abc")
    assert not line.erase_at()
    assert line.data == b"abc"
    assert terminal.output == b""


def test_move_cursor_is_clamped(line, terminal):
    fill(line, terminal, b"abc")
    assert line.move_cursor(-5) == -3
    assert line.cursor_pos == 0
    assert terminal.output == 3 * render.CURSOR_LEFT
    terminal.clear()

    assert line.move_cursor(10) == 3
    assert line.cursor_pos == 3
    assert terminal.output == 3 * render.CURSOR_RIGHT


def test_home_and_end(line, terminal):
    fill(line, terminal, b"abcd", cursor=2)
    line.home()
    assert line.cursor_pos == 0
    line.end()
    assert line.cursor_pos == 4
    assert terminal.output == 2 * render.CURSOR_LEFT + 4 * render.CURSOR_RIGHT


def test_replace_with_shorter_line_blanks_rest(line, terminal):
    fill(line, terminal, b"abcde", cursor=3)
    line.replace(line_buffer.LineRecord(8, b"xy"))
    assert line.data == b"xy"
    assert line.cursor_pos == 2
    assert line.record.buffer[2:] == bytearray(6)
    assert terminal.output == (
        3 * render.CURSOR_LEFT
        + b"xy"
        + render.SAVE_CURSOR
        + b"   "
        + render.RESTORE_CURSOR
    )


def test_replace_with_longer_line(line, terminal):
    fill(line, terminal, b"a")
    line.replace(line_buffer.LineRecord(8, b"xyz"))
    assert line.data == b"xyz"
    assert terminal.output == (
        render.CURSOR_LEFT + b"xyz" + render.SAVE_CURSOR + render.RESTORE_CURSOR
    )


@hypothesis.given(
    st.binary(min_size=0, max_size=6),
    st.integers(min_value=0, max_value=6),
    st.integers(min_value=0x20, max_value=0x7E),
)
def test_insert_then_backspace_restores_line(text, cursor, byte):
    """Inserting a byte and backspacing it leaves the buffer as it was."""
    line = line_buffer.LineBuffer(render.Renderer(lambda data: None), 8)
    line.insert(text)
    line.move_cursor(min(cursor, len(text)) - line.cursor_pos)
    before = bytes(line.record.buffer), line.length, line.cursor_pos

    assert line.insert(bytes([byte]))
    assert line.erase_before()

    assert (bytes(line.record.buffer), line.length, line.cursor_pos) == before
