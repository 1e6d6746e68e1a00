# Copyright 2026 The ChromiumOS Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

"""Tests for the termsrv command line and its built in commands."""

import unittest.mock as mock

# pylint:disable=import-error
import pytest
from termsrv import __main__ as main_lib
from termsrv import builtin
from termsrv import config
from termsrv import console
from termsrv import transport


# pylint: disable=redefined-outer-name


class ScriptedLink:
    """A transport replaying one read, then reporting EOF."""

    name = "scripted"

    def __init__(self, data):
        self.data = [data]
        self.sent = []
        self.closed = False

    def send(self, data):
        self.sent.append(data)

    def read(self):
        if not self.data:
            raise EOFError
        return self.data.pop(0)

    def close(self):
        self.closed = True

    @property
    def output(self):
        return b"".join(self.sent)


@pytest.fixture
def builtins_server(terminal):
    """A TerminalServer running the built in commands."""
    commands = builtin.BuiltinCommands(terminal.send)
    server = console.TerminalServer(terminal.send, commands.table())
    commands.server = server
    return server


def test_help(builtins_server, terminal):
    builtins_server.process(b"help\r")
    assert terminal.output == (
        b"help\r\nKnown commands:\r\n"
        b"  help\r\n  history\r\n  echo\r\n  command1\r\n  command2"
        b"\r\n" + config.GREETING_STRING
    )


def test_history(builtins_server, terminal):
    builtins_server.process(b"echo a\r")
    terminal.clear()
    builtins_server.process(b"history\r")
    assert terminal.output == (
        b"history\r\n 0 echo a\r\n 1 history\r\n" + config.GREETING_STRING
    )


def test_echo(builtins_server, terminal):
    builtins_server.process(b"echo hi  there\r")
    assert terminal.output == (
        b"echo hi  there\r\nhi  there\r\n" + config.GREETING_STRING
    )


@pytest.mark.parametrize("name", [b"command1", b"command2"])
def test_demo_commands(builtins_server, terminal, name):
    builtins_server.process(name + b" x\r")
    assert terminal.output == (
        name + b" x\r\n" + name + b"\r\n" + config.GREETING_STRING
    )


def test_main_serves_pty_by_default():
    link = ScriptedLink(b"echo yo\r")
    with mock.patch.object(transport, "PtyTransport", return_value=link):
        assert main_lib.main(["--log-level", "debug"]) == 0
    assert link.closed
    assert b"yo\r\n" in link.output
    assert link.output.startswith(b"\r\n" + config.GREETING_STRING)


def test_main_serves_serial_port():
    link = ScriptedLink(b"")
    with mock.patch.object(
        transport, "SerialTransport", return_value=link
    ) as serial_transport:
        assert main_lib.main(["/dev/ttyUSB0", "--baudrate", "9600"]) == 0
    serial_transport.assert_called_once_with("/dev/ttyUSB0", baudrate=9600)


def test_main_uses_config(tmp_path):
    path = tmp_path / "termsrv.yaml"
    path.write_text('greeting: "dev> "\n', encoding="utf-8")
    link = ScriptedLink(b"")
    with mock.patch.object(transport, "PtyTransport", return_value=link):
        assert main_lib.main(["--config", str(path)]) == 0
    assert link.output == b"\r\ndev> "


def test_main_bad_config(tmp_path):
    assert main_lib.main(["--config", str(tmp_path / "missing.yaml")]) == 1


def test_main_transport_failure():
    with mock.patch.object(
        transport,
        "SerialTransport",
        side_effect=transport.TransportError("busy"),
    ):
        assert main_lib.main(["/dev/ttyUSB0"]) == 1
