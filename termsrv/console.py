# Copyright 2026 The ChromiumOS Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

"""Terminal server session.

TerminalServer turns the raw byte stream typed into a remote terminal into
edited command lines.  It keeps the terminal display in sync with the line
it holds, remembers the last few commands and hands accepted lines to the
registered command handlers.
"""

import logging

from termsrv import commands as commands_lib
from termsrv import config
from termsrv import escape
from termsrv import history as history_lib
from termsrv import line_buffer
from termsrv import render


class LoggerAdapter(logging.LoggerAdapter):
    """Class which provides a small adapter for the logger."""

    def process(self, msg, kwargs):
        """Prepends the session name to the beginning of the log message."""
        return f"{self.extra['session']} - {msg}", kwargs


class TerminalServer:
    """One editing session on one terminal.

    Bytes are fed through process_byte() as they arrive.  Nothing here
    blocks except the send callable, and nothing raises while processing
    input: out of range edits are ignored.

    Attributes:
        logger: A logger for this session.
        settings: The termsrv.config.Settings in effect.
        renderer: A termsrv.render.Renderer wrapping the send callable.
        commands: The termsrv.commands.CommandTable dispatched to.
        line: The termsrv.line_buffer.LineBuffer being edited.
        history: The termsrv.history.HistoryRing of accepted lines.
        matcher: The termsrv.escape.EscapeMatcher for control sequences.
    """

    def __init__(self, send, commands=(), settings=None, name=None):
        """Initialises a session; equivalent to init() then detach().

        Args:
            send: Callable taking bytes; writes them to the terminal.
            commands: Iterable of termsrv.commands.Command, or (name,
                handler) pairs, or a CommandTable.
            settings: Optional termsrv.config.Settings.
            name: Optional session name used in log messages.

        Raises:
            termsrv.config.ConfigError: Bad settings or command table.
        """
        logger_name = f"{name} - TermSrv.Console" if name else "TermSrv.Console"
        self.logger = LoggerAdapter(
            logging.getLogger(logger_name), {"session": name or "termsrv"}
        )
        self.settings = (settings or config.Settings()).validate()
        self.renderer = render.Renderer(send)
        if not isinstance(commands, commands_lib.CommandTable):
            commands = commands_lib.CommandTable(commands)
        self.commands = commands
        self._warn_duplicates()

        self.line = line_buffer.LineBuffer(
            self.renderer, self.settings.max_line_length
        )
        self.history = history_lib.HistoryRing(self.settings.history_depth)
        self.matcher = escape.EscapeMatcher(
            max_length=self.settings.max_escape_length
        )
        self._actions = {
            escape.EscAction.ACCEPT: self.accept,
            escape.EscAction.BACKSPACE: self.backspace,
            escape.EscAction.COMPLETE: self.complete,
            escape.EscAction.DELETE: self.delete,
            escape.EscAction.UP: self.show_previous_command,
            escape.EscAction.DOWN: self.show_next_command,
            escape.EscAction.LEFT: self.cursor_left,
            escape.EscAction.RIGHT: self.cursor_right,
            escape.EscAction.HOME: self.home,
            escape.EscAction.END: self.end,
        }
        self.detach()

    def __str__(self):
        """Show internal state of the session as a string."""
        string = []
        string.append(f"line: {self.line.data!r}")
        string.append(f"length: {self.line.length}")
        string.append(f"cursor_pos: {self.line.cursor_pos}")
        string.append(f"pending_escape: {bytes(self.matcher.pending)!r}")
        string.append(f"history: {self.history.lines()!r}")
        string.append(f"history_pos: {self.history.browse_pos}")
        string.append(f"commands: {self.commands.names()!r}")
        return "\n".join(string)

    def _warn_duplicates(self):
        seen = set()
        for name in self.commands.names():
            if name in seen:
                self.logger.warning(
                    "Command %r registered twice; only the first is used.",
                    name,
                )
            seen.add(name)

    @property
    def cursor_pos(self):
        return self.line.cursor_pos

    def attach(self):
        """Call when a client connects: print a fresh prompt."""
        self.logger.debug("Client attached.")
        self.renderer.crlf()
        self.renderer.write(self.settings.greeting)

    def detach(self):
        """Call when a client disconnects: forget all session state."""
        self.logger.debug("Resetting session state.")
        self.line.clear()
        self.matcher.reset()
        self.history.clear()

    def process(self, data):
        """Feed every byte of data in order."""
        for byte in bytes(data):
            self.process_byte(byte)

    def process_byte(self, byte):
        """Handle one byte received from the terminal.

        Args:
            byte: An integer 0-255, or a bytes object of length 1.
        """
        if isinstance(byte, (bytes, bytearray)):
            (byte,) = byte
        self.logger.log(1, "Input byte: 0x%02x", byte)

        result = self.matcher.feed(byte)
        if result.kind is escape.MatchKind.LITERAL:
            self.insert(result.data)
        elif result.kind is escape.MatchKind.FLUSH:
            self.logger.debug("Unrecognized sequence %r.", result.data)
            for pending in result.data:
                self.insert(bytes([escape.printable(pending)]))
        elif result.kind is escape.MatchKind.RESOLVED:
            self._actions[result.action]()

    def insert(self, data):
        """Insert bytes at the cursor, dropping them if the line is full."""
        if not self.line.insert(data):
            self.logger.debug("Line full, dropped %r.", data)
            return False
        return True

    def accept(self):
        """Return key: store, dispatch and start a new line."""
        self.logger.debug("Enter key pressed.")
        self.renderer.crlf()

        record = self.line.record
        if self.history.append(record):
            self.logger.debug("Added %r to history.", record.data)
        self.history.reset_browse()

        self.dispatch(record.data)

        self.renderer.write(self.settings.greeting)
        self.line.clear()

    def dispatch(self, line):
        """Run the handler registered for the first word of line.

        Args:
            line: The accepted line as bytes.

        Returns:
            The Command that ran, or None.
        """
        name = commands_lib.command_name(line)
        cmd = self.commands.lookup(name)
        if cmd is not None:
            self.logger.debug("Running command %r.", cmd.name)
            try:
                cmd.handler(line)
            except Exception:  # pylint: disable=broad-except
                self.logger.exception("Command %r failed.", cmd.name)
            self.renderer.crlf()
            return cmd

        if name:
            self.logger.debug("Unknown command %r.", name)
            self.renderer.write(name)
            self.renderer.write(self.settings.unknown_command)
            self.renderer.crlf()
        return None

    def backspace(self):
        self.logger.debug("Backspace pressed.")
        self.line.erase_before()

    def delete(self):
        self.logger.debug("Delete key pressed.")
        self.line.erase_at()

    def cursor_left(self):
        self.logger.debug("Left arrow key pressed.")
        self.line.move_cursor(-1)

    def cursor_right(self):
        self.logger.debug("Right arrow key pressed.")
        self.line.move_cursor(1)

    def home(self):
        self.logger.debug("Home key pressed.")
        self.line.home()

    def end(self):
        self.logger.debug("End key pressed.")
        self.line.end()

    def show_previous_command(self):
        """Up arrow: replace the line with the previous history entry."""
        self.logger.debug("Up arrow key pressed.")
        record = self.history.browse_up()
        if record is None:
            self.logger.debug("No more history to show.")
            return
        self.logger.debug(
            "printing previous entry %d - %r",
            self.history.browse_pos,
            record.data,
        )
        self.line.replace(record)

    def show_next_command(self):
        """Down arrow: replace the line with the next history entry."""
        self.logger.debug("Down arrow key pressed.")
        record = self.history.browse_down()
        if record is None:
            self.logger.debug("Already at the newest line.")
            return
        self.logger.debug(
            "printing next entry %d - %r", self.history.browse_pos, record.data
        )
        self.line.replace(record)

    def complete(self):
        """Tab: complete the line to the only command it is a prefix of."""
        self.logger.debug("Tab pressed.")
        suffix = self.commands.completion(self.line.data)
        if not suffix:
            return
        # The suffix goes in at the cursor, so completing with the cursor
        # inside the line splits the typed text.
        if self.line.cursor_pos != self.line.length:
            self.logger.warning(
                "Completing %r with the cursor at %d of %d.",
                suffix,
                self.line.cursor_pos,
                self.line.length,
            )
        if not self.insert(suffix):
            self.logger.debug("No room to complete with %r.", suffix)
