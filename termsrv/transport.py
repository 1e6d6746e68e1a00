# Copyright 2026 The ChromiumOS Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

"""Byte transports a TerminalServer can be served over, and the serve loop."""

import logging
import os
import pty
import select
import tty

import serial  # pylint:disable=import-error


BAUDRATE = 115200  # Default baudrate setting for UART port
MAX_READ = 100  # Max bytes to read at a time from the user.
POLL_INTERVAL = 0.1  # Seconds to wait for input before re-polling.


class TransportError(Exception):
    """Raised when a transport cannot be opened."""


class SerialTransport:
    """A UART, through pyserial.

    Attributes:
        serial: serial.Serial object
        logger: object that store the log
    """

    def __init__(self, port, baudrate=BAUDRATE, timeout=POLL_INTERVAL):
        """Open the serial port.

        Args:
            port: UART device path. e.g. /dev/ttyUSB0
            baudrate: Baud rate such as 9600 or 115200.
            timeout: Read timeout value, in seconds.

        Raises:
            TransportError: The port could not be opened.
        """
        self.logger = logging.getLogger(type(self).__name__ + "| " + port)
        try:
            self.serial = serial.Serial(port, baudrate, timeout=timeout)
        except serial.SerialException as e:
            raise TransportError(f"Cannot open {port}: {e}") from e
        self.logger.debug("Opened at %d baud.", baudrate)

    @property
    def name(self):
        return self.serial.port

    def send(self, data):
        self.serial.write(data)
        self.serial.flush()

    def read(self):
        """Read whatever has arrived, waiting up to the read timeout.

        Returns:
            The bytes read; empty on timeout.
        """
        waiting = self.serial.in_waiting
        return self.serial.read(min(max(waiting, 1), MAX_READ))

    def close(self):
        self.logger.debug("Closing...")
        self.serial.close()


class PtyTransport:
    """A pseudo-terminal pair; a terminal emulator attaches to user_pty.

    Attributes:
        master_pty: File descriptor of the master side.  Used for driving
            output to the user and receiving user input.
        user_pty: A string representing the PTY name of the served console.
        logger: object that store the log
    """

    def __init__(self, timeout=POLL_INTERVAL):
        try:
            self.master_pty, self._user_fd = pty.openpty()
        except OSError as e:
            raise TransportError(f"Cannot open a pty: {e}") from e
        # The server does all of the echoing and line editing itself.
        tty.setraw(self._user_fd)
        self.user_pty = os.ttyname(self._user_fd)
        self.timeout = timeout
        self.logger = logging.getLogger(
            type(self).__name__ + "| " + self.user_pty
        )
        self.logger.debug("Serving on %s.", self.user_pty)

    @property
    def name(self):
        return self.user_pty

    def send(self, data):
        view = memoryview(data)
        while view:
            written = os.write(self.master_pty, view)
            view = view[written:]

    def read(self):
        """Read user input, waiting up to the timeout.

        Returns:
            The bytes read; empty on timeout.

        Raises:
            EOFError: The user side went away.
        """
        ready, _, _ = select.select([self.master_pty], [], [], self.timeout)
        if not ready:
            return b""
        try:
            data = os.read(self.master_pty, MAX_READ)
        except OSError as e:
            self.logger.debug("Ptm read failed, probably user disconnect.")
            raise EOFError(str(e)) from e
        if not data:
            raise EOFError("pty closed")
        return data

    def close(self):
        self.logger.debug("Closing...")
        os.close(self.master_pty)
        os.close(self._user_fd)


def serve(server, transport, shutdown=None):
    """Feed everything the transport receives to server until told to stop.

    Args:
        server: A termsrv.console.TerminalServer whose send callable writes
            to transport.
        transport: An object with read() and close() methods.  read()
            returns the bytes received, possibly none, and raises EOFError
            when the far end is gone.
        shutdown: Optional threading.Event; the loop exits once it is set.
    """
    server.attach()
    try:
        while shutdown is None or not shutdown.is_set():
            try:
                data = transport.read()
            except EOFError:
                server.logger.debug("Transport reached EOF.")
                break
            for byte in data:
                server.process_byte(byte)

    except KeyboardInterrupt:
        pass

    finally:
        server.detach()
        transport.close()
        server.logger.debug("Exit serve loop.")
