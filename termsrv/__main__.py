# Copyright 2026 The ChromiumOS Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

"""The entry point into termsrv."""

import argparse
import logging
import sys

from termsrv import builtin
from termsrv import config
from termsrv import console
from termsrv import transport


# Dictionary used to map log level strings to their corresponding int values.
log_level_map = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def get_argparser():
    """Get the argument parser."""
    parser = argparse.ArgumentParser(
        prog="termsrv",
        description="Serve an editing command line over a UART or a PTY.",
    )
    parser.add_argument(
        "port",
        nargs="?",
        help=(
            "The serial device to serve, e.g. /dev/ttyUSB0.  "
            "A new PTY is served if omitted."
        ),
    )
    parser.add_argument(
        "--baudrate",
        type=int,
        default=transport.BAUDRATE,
        help="Baud rate of the serial device",
    )
    parser.add_argument(
        "--config",
        help="YAML file with terminal server settings",
    )
    parser.add_argument(
        "--log-level",
        choices=list(log_level_map),
        default="info",
        help="Logging verbosity",
    )
    return parser


def open_transport(opts):
    """Open the transport selected on the command line."""
    if opts.port:
        return transport.SerialTransport(opts.port, baudrate=opts.baudrate)
    return transport.PtyTransport()


def main(argv=None):
    """The main function.

    Args:
        argv: Optionally, the command-line to parse, not including argv[0].

    Returns:
        Zero upon success, or non-zero upon failure.
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = get_argparser()
    opts = parser.parse_args(argv)

    # Start logging with a timestamp, module, and log level shown in each log
    # entry.
    logging.basicConfig(
        level=log_level_map[opts.log_level],
        format="%(asctime)s - %(module)s - %(levelname)s - %(message)s",
    )

    try:
        settings = (
            config.load_settings(opts.config)
            if opts.config
            else config.Settings()
        )
        link = open_transport(opts)
    except (config.ConfigError, transport.TransportError) as e:
        logging.error("%s", e)
        return 1

    logging.info("Terminal server is being served on %s.", link.name)
    builtins = builtin.BuiltinCommands(link.send)
    server = console.TerminalServer(
        link.send, builtins.table(), settings=settings, name=link.name
    )
    builtins.server = server
    transport.serve(server, link)
    return 0


if __name__ == "__main__":
    sys.exit(main())
