# Copyright 2026 The ChromiumOS Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

"""Registered commands: lookup on Return and prefix completion on Tab."""

import collections

from termsrv import config


class Command(collections.namedtuple("Command", ["name", "handler"])):
    """A command the application registered.

    Attributes:
        name: The command name as bytes, e.g. b"help".
        handler: A callable invoked with the whole accepted line (bytes).
    """

    __slots__ = ()

    @property
    def name_length(self):
        return len(self.name)


def command_name(line):
    """Return the part of line before the first space."""
    return line.split(b" ", 1)[0]


class CommandTable:
    """An ordered, immutable set of commands.

    Attributes:
        commands: Tuple of Command in registration order.
    """

    def __init__(self, commands=()):
        self.commands = tuple(self._check(cmd) for cmd in commands)

    @staticmethod
    def _check(cmd):
        if not isinstance(cmd, Command):
            cmd = Command(*cmd)
        name = cmd.name
        if isinstance(name, str):
            name = name.encode("ascii")
        if not name:
            raise config.ConfigError("Command names must not be empty")
        if b" " in name:
            raise config.ConfigError(f"Command name {name!r} contains a space")
        if not callable(cmd.handler):
            raise config.ConfigError(f"Handler for {name!r} is not callable")
        return Command(bytes(name), cmd.handler)

    def __iter__(self):
        return iter(self.commands)

    def __len__(self):
        return len(self.commands)

    def names(self):
        return [cmd.name for cmd in self.commands]

    def lookup(self, name):
        """Find the command whose name is exactly name.

        Prefixes never match here; they are only used for completion.

        Returns:
            The first matching Command, or None.
        """
        for cmd in self.commands:
            if cmd.name_length == len(name) and cmd.name == name:
                return cmd
        return None

    def matches(self, prefix):
        """Return every command whose name starts with prefix."""
        return [
            cmd
            for cmd in self.commands
            if cmd.name_length >= len(prefix)
            and cmd.name[: len(prefix)] == prefix
        ]

    def completion(self, prefix):
        """Return the suffix that completes prefix to a unique command.

        Returns:
            The remaining bytes of the only command starting with prefix.
            Empty if there are zero or several such commands, or if prefix
            is already a full name.
        """
        found = self.matches(prefix)
        if len(found) != 1:
            return b""
        return found[0].name[len(prefix) :]
