# Copyright 2026 The ChromiumOS Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

"""Bounded history of accepted command lines."""

from termsrv import line_buffer


MAX_HISTORY_LENGTH = 3


class HistoryRing:
    """Past command lines, oldest first, browsable in both directions.

    Entries are copies; nothing outside the ring holds a reference to them.
    When the ring is full the oldest entry is shifted out to make room.

    Attributes:
        capacity: Maximum number of entries.
        entries: List of LineRecord, index 0 is the oldest.
        browse_pos: Index of the entry being shown.  Equal to len(entries)
            when the user is editing a fresh line rather than browsing.
    """

    def __init__(self, capacity=MAX_HISTORY_LENGTH):
        self.capacity = capacity
        self.entries = []
        self.browse_pos = 0

    def __len__(self):
        return len(self.entries)

    def __getitem__(self, index):
        return self.entries[index]

    @property
    def browsing(self):
        return self.browse_pos < len(self.entries)

    def clear(self):
        self.entries = []
        self.browse_pos = 0

    def reset_browse(self):
        self.browse_pos = len(self.entries)

    def append(self, record):
        """Store a copy of record.  Empty records are ignored.

        Returns:
            True if the record was stored.
        """
        if not record.length:
            return False
        if len(self.entries) >= self.capacity:
            del self.entries[0]
        self.entries.append(record.copy())
        self.reset_browse()
        return True

    def browse_up(self):
        """Step towards older entries.

        Returns:
            The LineRecord now selected, or None at the oldest entry.
        """
        if self.browse_pos == 0:
            return None
        self.browse_pos -= 1
        return self.entries[self.browse_pos]

    def browse_down(self):
        """Step towards newer entries.

        Returns:
            The LineRecord now selected.  Stepping past the newest entry
            returns an empty record (back to live editing).  None when
            already at the live edit position.
        """
        if self.browse_pos >= len(self.entries):
            return None
        self.browse_pos += 1
        if self.browse_pos == len(self.entries):
            return line_buffer.LineRecord(self.entries[-1].capacity)
        return self.entries[self.browse_pos]

    def lines(self):
        """Return the stored lines as bytes, oldest first."""
        return [entry.data for entry in self.entries]
