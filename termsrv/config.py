# Copyright 2026 The ChromiumOS Authors
# Use of this source code is governed by a BSD-style license that can be
# found in the LICENSE file.

"""Terminal server settings and their YAML loader."""

import dataclasses
import pathlib

import yaml  # pylint: disable=import-error

from termsrv import escape
from termsrv import history
from termsrv import line_buffer


MIN_ESCAPE_LENGTH = escape.LONGEST_SEQUENCE

GREETING_STRING = b"\x1b[36mroot@hexapod-AIWM: \x1b[0m"
UNKNOWN_COMMAND_STRING = b"\x1b[31m - command not found\x1b[0m"


class ConfigError(Exception):
    """Raised for settings or command tables that cannot be used."""


@dataclasses.dataclass(frozen=True)
class Settings:
    """Tunables of one terminal server session.

    Attributes:
        max_line_length: Line buffer capacity.  Lines hold at most one byte
            less than this.
        history_depth: Number of accepted lines kept in history.
        max_escape_length: Capacity of the pending escape sequence buffer.
        greeting: Prompt written on attach and after every command.
        unknown_command: Written after the name of a command not found.
    """

    max_line_length: int = line_buffer.MAX_LINE_LENGTH
    history_depth: int = history.MAX_HISTORY_LENGTH
    max_escape_length: int = escape.MAX_ESCAPE_LENGTH
    greeting: bytes = GREETING_STRING
    unknown_command: bytes = UNKNOWN_COMMAND_STRING

    def validate(self):
        """Check the settings are usable.

        Returns:
            self, so the call can be chained.

        Raises:
            ConfigError: A value is out of range.
        """
        if self.max_line_length < 2:
            raise ConfigError(
                "max_line_length must be at least 2, "
                f"got {self.max_line_length}"
            )
        if self.history_depth < 1:
            raise ConfigError(
                f"history_depth must be at least 1, got {self.history_depth}"
            )
        if self.max_escape_length < MIN_ESCAPE_LENGTH:
            raise ConfigError(
                f"max_escape_length must be at least {MIN_ESCAPE_LENGTH}, "
                f"got {self.max_escape_length}"
            )
        return self


def _coerce(field, value):
    """Convert a YAML value to the type of a Settings field."""
    if field.type in (bytes, "bytes"):
        if isinstance(value, str):
            try:
                return value.encode("latin-1")
            except UnicodeEncodeError as e:
                raise ConfigError(
                    f"{field.name} must be Latin-1 text: {value!r}"
                ) from e
        if isinstance(value, bytes):
            return value
    elif isinstance(value, int) and not isinstance(value, bool):
        return value
    raise ConfigError(
        f"{field.name} has the wrong type: {type(value).__name__}"
    )


def settings_from_dict(values):
    """Build Settings from a mapping of field names to values.

    Raises:
        ConfigError: Unknown keys, wrong types or out of range values.
    """
    if values is None:
        values = {}
    if not isinstance(values, dict):
        raise ConfigError("Settings must be a mapping")

    fields = {field.name: field for field in dataclasses.fields(Settings)}
    unknown = sorted(set(values) - set(fields))
    if unknown:
        raise ConfigError(f"Unknown settings: {', '.join(map(str, unknown))}")

    kwargs = {
        name: _coerce(fields[name], value) for name, value in values.items()
    }
    return Settings(**kwargs).validate()


def load_settings(path):
    """Read Settings from a YAML file.

    Args:
        path: Path to a YAML file holding a single mapping.

    Raises:
        ConfigError: The file is missing, unparsable, or holds bad values.
    """
    path = pathlib.Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            values = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Cannot parse {path}: {e}") from e
    return settings_from_dict(values)
