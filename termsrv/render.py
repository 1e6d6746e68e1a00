# Copyright 2026 The ChromiumOS Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

"""Output side of the terminal server.

The remote terminal emulator cannot see the line buffer, so every edit is
followed by the smallest byte sequence that brings its display back in sync.
Movement is always relative and one cell at a time.
"""

ESC = b"\x1b"
CRLF = b"\r\n"
DEL = b"\x7f"
SPACE = b" "
SAVE_CURSOR = ESC + b"[s"
RESTORE_CURSOR = ESC + b"[u"
CURSOR_LEFT = ESC + b"[D"
CURSOR_RIGHT = ESC + b"[C"


class Renderer:
    """Emits terminal control sequences through an injected sink.

    Attributes:
        send: A callable taking a bytes object.  It must transmit all of the
            bytes in order before returning.
    """

    def __init__(self, send):
        self.send = send

    def write(self, data):
        """Write raw bytes to the terminal, skipping empty writes."""
        if data:
            self.send(bytes(data))

    def crlf(self):
        self.send(CRLF)

    def rubout(self):
        """Echo DEL so the terminal erases the cell left of its cursor."""
        self.send(DEL)

    def save_cursor(self):
        self.send(SAVE_CURSOR)

    def restore_cursor(self):
        self.send(RESTORE_CURSOR)

    def cursor_left(self, count=1):
        for _ in range(count):
            self.send(CURSOR_LEFT)

    def cursor_right(self, count=1):
        for _ in range(count):
            self.send(CURSOR_RIGHT)

    def redraw_tail(self, tail, blank=0):
        """Rewrite the text right of the cursor without moving the cursor.

        Args:
            tail: The bytes that now follow the cursor.
            blank: Number of spaces written after the tail to hide stale
                characters left over from a longer line.
        """
        self.save_cursor()
        self.write(tail)
        self.write(SPACE * blank)
        self.restore_cursor()

    def blank(self, count):
        """Blank count cells right of the cursor, cursor stays put."""
        self.redraw_tail(b"", max(0, count))
