# Copyright 2026 The ChromiumOS Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

"""A line editing terminal server for serial command interfaces.

termsrv sits between a UART (or any byte transport) and a set of command
handlers.  It consumes the raw bytes a terminal emulator sends, one at a time,
and keeps an edited command line: cursor movement, insert and delete anywhere
in the line, a short command history browsed with the arrow keys, and tab
completion of command names.  Since the terminal cannot see the line, every
edit is echoed back as the control sequences that redraw it.

The console module holds the session object.  The escape, line_buffer,
history, commands and render modules are its parts, and transport serves a
session over a serial port or a pseudo-terminal.
"""
