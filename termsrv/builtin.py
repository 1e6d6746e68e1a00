# Copyright 2026 The ChromiumOS Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

"""Commands registered by the termsrv command line tool."""

from termsrv import commands


class BuiltinCommands:
    """A small command set for trying out a terminal server.

    The handlers write through the same send callable as the server.  The
    server is attached after construction because its command table is
    fixed when it is created.

    Attributes:
        send: Callable taking bytes.
        server: The termsrv.console.TerminalServer running these commands.
    """

    def __init__(self, send):
        self.send = send
        self.server = None

    def table(self):
        """Return the commands as a list of termsrv.commands.Command."""
        return [
            commands.Command(b"help", self.help),
            commands.Command(b"history", self.history),
            commands.Command(b"echo", self.echo),
            commands.Command(b"command1", self.demo),
            commands.Command(b"command2", self.demo),
        ]

    def help(self, line):
        """List registered command names."""
        del line
        names = self.server.commands.names()
        self.send(b"Known commands:\r\n")
        self.send(b"\r\n".join(b"  " + name for name in names))

    def history(self, line):
        """Print the history of entered commands."""
        del line
        entries = self.server.history.lines()
        # Make it pretty by figuring out how wide to pad the numbers.
        wide = (len(entries) // 10) + 1
        self.send(
            b"\r\n".join(
                b" %*d %s" % (wide, i, entry) for i, entry in enumerate(entries)
            )
        )

    def echo(self, line):
        """Write back everything after the command name."""
        _, _, text = line.partition(b" ")
        self.send(text)

    def demo(self, line):
        """Write the command name, like the firmware's test commands."""
        self.send(commands.command_name(line))
