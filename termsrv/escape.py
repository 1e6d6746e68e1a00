# Copyright 2026 The ChromiumOS Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

"""Incremental recognizer for control bytes and ANSI escape sequences.

Bytes are fed one at a time.  A control byte (0x00-0x1f) or DEL (0x7f) opens
a pending sequence; every following byte is appended to it until exactly one
entry of ESCAPE_SEQUENCES matches in full, or none can match any more.  When
several entries share the pending prefix (seven of them start with ESC [),
the decision is deferred until more bytes arrive.
"""

import collections
import enum


MAX_ESCAPE_LENGTH = 10  # Capacity of the pending buffer.


class EscAction(enum.Enum):
    """Editor actions bound to recognized sequences."""

    ACCEPT = "accept"
    BACKSPACE = "backspace"
    COMPLETE = "complete"
    DELETE = "delete"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"


EscapeSequence = collections.namedtuple("EscapeSequence", ["code", "action"])

ESCAPE_SEQUENCES = (
    EscapeSequence(b"\x0d", EscAction.ACCEPT),
    EscapeSequence(b"\x0a", EscAction.ACCEPT),
    EscapeSequence(b"\x7f", EscAction.BACKSPACE),
    EscapeSequence(b"\x08", EscAction.BACKSPACE),
    EscapeSequence(b"\x09", EscAction.COMPLETE),
    EscapeSequence(b"\x1b[3~", EscAction.DELETE),
    EscapeSequence(b"\x1b[A", EscAction.UP),
    EscapeSequence(b"\x1b[B", EscAction.DOWN),
    EscapeSequence(b"\x1b[D", EscAction.LEFT),
    EscapeSequence(b"\x1b[C", EscAction.RIGHT),
    EscapeSequence(b"\x1b[4~", EscAction.END),
    EscapeSequence(b"\x1b[1~", EscAction.HOME),
)

LONGEST_SEQUENCE = max(len(seq.code) for seq in ESCAPE_SEQUENCES)


class MatchKind(enum.Enum):
    """Outcome of feeding one byte to the matcher."""

    LITERAL = "literal"
    PENDING = "pending"
    RESOLVED = "resolved"
    FLUSH = "flush"


class MatchResult(
    collections.namedtuple("MatchResult", ["kind", "action", "data"])
):
    """What the caller should do with the byte just fed.

    Attributes:
        kind: A MatchKind.
        action: The EscAction to run, only set for RESOLVED.
        data: For LITERAL, the byte itself.  For FLUSH, every pending byte
            in arrival order.  Empty otherwise.
    """

    __slots__ = ()

    @classmethod
    def literal(cls, byte):
        return cls(MatchKind.LITERAL, None, bytes([byte]))

    @classmethod
    def pending(cls):
        return cls(MatchKind.PENDING, None, b"")

    @classmethod
    def resolved(cls, action):
        return cls(MatchKind.RESOLVED, action, b"")

    @classmethod
    def flush(cls, data):
        return cls(MatchKind.FLUSH, None, bytes(data))


def is_control(byte):
    """Return True for bytes that start (or are) an escape sequence.

    Args:
        byte: An integer in the range 0-255.
    """
    return byte <= 0x1F or byte == 0x7F


def printable(byte):
    """Map a byte to what may be shown on the terminal.

    Control bytes are never echoed raw; they are replaced with '?'.
    """
    return ord("?") if is_control(byte) else byte


class EscapeMatcher:
    """Tracks a partially received escape sequence.

    Attributes:
        table: The sequences that can be recognized.
        max_length: Capacity of the pending buffer.  If it fills up while the
            sequence is still ambiguous, the pending bytes are flushed.
        pending: The bytes received since the sequence started.
    """

    def __init__(self, table=ESCAPE_SEQUENCES, max_length=MAX_ESCAPE_LENGTH):
        self.table = tuple(table)
        self.max_length = max_length
        self.pending = bytearray()

    def __len__(self):
        return len(self.pending)

    def reset(self):
        self.pending.clear()

    def candidates(self):
        """Return every table entry that still agrees with the pending bytes."""
        size = len(self.pending)
        return [
            seq
            for seq in self.table
            if len(seq.code) >= size and seq.code[:size] == self.pending
        ]

    def feed(self, byte):
        """Feed a single byte.

        Args:
            byte: An integer in the range 0-255.

        Returns:
            A MatchResult.  The pending buffer is empty again after any
            result other than PENDING.
        """
        if not self.pending and not is_control(byte):
            return MatchResult.literal(byte)

        self.pending.append(byte)
        matches = self.candidates()

        if not matches:
            data = bytes(self.pending)
            self.reset()
            return MatchResult.flush(data)

        if len(matches) == 1 and len(matches[0].code) == len(self.pending):
            self.reset()
            return MatchResult.resolved(matches[0].action)

        if len(self.pending) >= self.max_length:
            data = bytes(self.pending)
            self.reset()
            return MatchResult.flush(data)

        return MatchResult.pending()
