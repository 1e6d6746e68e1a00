# Copyright 2026 The ChromiumOS Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

"""Common settings and fixtures for all tests."""

# pylint: disable=import-error
import hypothesis
import pytest
from termsrv import console


hypothesis.settings.register_profile(
    "cq", suppress_health_check=list(hypothesis.HealthCheck)
)
hypothesis.settings.load_profile("cq")

# pylint: disable=redefined-outer-name


class Terminal:
    """Records everything a server sends, standing in for a UART."""

    def __init__(self):
        self.chunks = []

    def send(self, data):
        assert isinstance(data, bytes)
        self.chunks.append(data)

    @property
    def output(self):
        return b"".join(self.chunks)

    def clear(self):
        self.chunks = []


@pytest.fixture
def terminal():
    """Returns an empty Terminal."""
    return Terminal()


@pytest.fixture
def server_factory(terminal):
    """Returns a TerminalServer factory writing to the terminal fixture."""

    def _server_factory(commands=(), **kwargs):
        return console.TerminalServer(
            terminal.send, commands, name="test", **kwargs
        )

    return _server_factory


@pytest.fixture
def server(server_factory):
    """A TerminalServer with no commands and default settings."""
    return server_factory()
