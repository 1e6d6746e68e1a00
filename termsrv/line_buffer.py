# Copyright 2026 The ChromiumOS Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

"""Fixed capacity line storage with a cursor.

The line is edited in place: inserting or deleting in the middle shifts the
tail of the buffer, and only that tail is redrawn on the terminal.
"""

MAX_LINE_LENGTH = 64  # Buffer capacity.  One byte is always kept free.


class LineRecord:
    """A fixed capacity byte buffer and the number of bytes in use.

    Attributes:
        buffer: A bytearray of length capacity.  Bytes past length are zero.
        length: Number of bytes in use, always below capacity.
    """

    def __init__(self, capacity=MAX_LINE_LENGTH, data=b""):
        if len(data) >= capacity:
            raise ValueError(
                f"{len(data)} bytes do not fit a {capacity} byte line"
            )
        self.buffer = bytearray(capacity)
        self.buffer[: len(data)] = data
        self.length = len(data)

    @property
    def capacity(self):
        return len(self.buffer)

    @property
    def data(self):
        """The bytes in use, as an immutable bytes object."""
        return bytes(self.buffer[: self.length])

    def __len__(self):
        return self.length

    def __eq__(self, other):
        if not isinstance(other, LineRecord):
            return NotImplemented
        return self.data == other.data

    def __repr__(self):
        return f"LineRecord({self.data!r})"

    def clear(self):
        self.buffer[:] = bytes(self.capacity)
        self.length = 0

    def assign(self, other):
        """Copy the contents of another record into this one."""
        self.clear()
        size = min(other.length, self.capacity - 1)
        self.buffer[:size] = other.buffer[:size]
        self.length = size

    def copy(self):
        record = LineRecord(self.capacity)
        record.assign(self)
        return record


class LineBuffer:
    """The line being edited, its cursor and its on-screen rendering.

    Attributes:
        record: The live LineRecord.
        cursor_pos: Insertion point, 0 <= cursor_pos <= record.length.
        renderer: A termsrv.render.Renderer used to echo every change.
    """

    def __init__(self, renderer, capacity=MAX_LINE_LENGTH):
        self.renderer = renderer
        self.record = LineRecord(capacity)
        self.cursor_pos = 0

    @property
    def length(self):
        return self.record.length

    @property
    def data(self):
        return self.record.data

    @property
    def tail(self):
        """Bytes from the cursor to the end of the line."""
        return bytes(self.record.buffer[self.cursor_pos : self.record.length])

    def clear(self):
        """Forget the line without touching the terminal."""
        self.record.clear()
        self.cursor_pos = 0

    def can_insert(self, count=1):
        return self.record.length + count < self.record.capacity

    def insert(self, data):
        """Insert bytes at the cursor, shifting the tail right.

        Args:
            data: The bytes to insert.

        Returns:
            False if the line has no room for data, in which case nothing
            changed.  True otherwise.
        """
        count = len(data)
        if not count:
            return True
        if not self.can_insert(count):
            return False

        buf = self.record.buffer
        pos = self.cursor_pos
        end = self.record.length
        tail = bytes(buf[pos:end])
        buf[pos + count : end + count] = tail
        buf[pos : pos + count] = data
        self.record.length += count
        self.cursor_pos += count

        self.renderer.write(data)
        if tail:
            self.renderer.redraw_tail(tail)
        return True

    def erase_before(self):
        """Backspace: remove the byte left of the cursor.

        Returns:
            True if a byte was removed.
        """
        if self.cursor_pos == 0:
            return False

        buf = self.record.buffer
        end = self.record.length
        tail = bytes(buf[self.cursor_pos : end])
        buf[self.cursor_pos - 1 : end - 1] = tail
        buf[end - 1] = 0
        self.record.length -= 1
        self.cursor_pos -= 1

        self.renderer.rubout()
        self.renderer.redraw_tail(tail, blank=1)
        return True

    def erase_at(self):
        """Delete forward: remove the byte under the cursor.

        Returns:
            True if a byte was removed.
        """
        if self.cursor_pos == self.record.length:
            return False

        buf = self.record.buffer
        end = self.record.length
        tail = bytes(buf[self.cursor_pos + 1 : end])
        buf[self.cursor_pos : end - 1] = tail
        buf[end - 1] = 0
        self.record.length -= 1

        self.renderer.redraw_tail(tail, blank=1)
        return True

    def move_cursor(self, delta):
        """Move the cursor by delta cells, clamped to the line.

        Returns:
            The signed number of cells actually moved.
        """
        target = min(max(self.cursor_pos + delta, 0), self.record.length)
        moved = target - self.cursor_pos
        if moved < 0:
            self.renderer.cursor_left(-moved)
        elif moved > 0:
            self.renderer.cursor_right(moved)
        self.cursor_pos = target
        return moved

    def home(self):
        return self.move_cursor(-self.cursor_pos)

    def end(self):
        return self.move_cursor(self.record.length - self.cursor_pos)

    def replace(self, record):
        """Swap in another line, e.g. one recalled from history.

        The terminal cursor walks back to the start of the line, the new
        line is written over the old one, and any cells the old line used
        beyond the new one are blanked.  The cursor ends up at end of line.

        Args:
            record: A LineRecord.  Its contents are copied.
        """
        old_length = self.record.length
        self.renderer.cursor_left(self.cursor_pos)
        self.cursor_pos = 0

        self.record.assign(record)
        self.renderer.write(self.record.data)
        self.cursor_pos = self.record.length

        self.renderer.blank(old_length - self.record.length)
