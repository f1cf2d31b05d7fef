# SPDX-FileCopyrightText: 2025 The po-missing contributors
#
# SPDX-License-Identifier: Zlib

"""Helper functions for the po-missing command-line.

Warning:
    Non-public module (implementation detail).  Subject to change
    without notice, including removal.

"""

from __future__ import annotations

import os
import pathlib
import sys
from typing import TYPE_CHECKING

import click

from po_missing import _internals

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

if TYPE_CHECKING:
    from typing_extensions import Any

PROG_NAME = _internals.PROG_NAME
CONFIG_FILENAME = 'config.toml'
CONFIG_SECTION = PROG_NAME

# Error messages
INVALID_USER_CONFIG = 'Invalid user configuration'

_CONFIG_KEY_TYPES: dict[str, type] = {
    'base_path': str,
    'main_name': str,
    'missing_name': str,
    'wrap_width': int,
}


def config_filename() -> pathlib.Path:
    """Return the filename of the user configuration file.

    The file is named `config.toml`, located within the configuration
    directory as determined by the `PO_MISSING_PATH` environment
    variable, or by [`click.get_app_dir`][] in POSIX mode.

    """
    path = pathlib.Path(
        os.getenv(PROG_NAME.upper().replace('-', '_') + '_PATH')
        or click.get_app_dir(PROG_NAME, force_posix=True)
    )
    return path / CONFIG_FILENAME


def validate_user_config(obj: Any, /) -> dict[str, Any]:  # noqa: ANN401
    """Check the parsed user configuration, and extract our settings.

    Returns:
        The settings from the `[po-missing]` table, possibly empty.

    Raises:
        ValueError:
            The configuration has the wrong shape, contains unknown
            settings, or settings of the wrong type.

    """
    section = obj.get(CONFIG_SECTION, {})
    if not isinstance(section, dict):
        msg = f'{INVALID_USER_CONFIG}: [{CONFIG_SECTION}] is not a table'
        raise ValueError(msg)  # noqa: TRY004
    for key, value in section.items():
        expected_type = _CONFIG_KEY_TYPES.get(key)
        if expected_type is None:
            msg = f'{INVALID_USER_CONFIG}: unknown setting {key!r}'
            raise ValueError(msg)
        # bool is a subclass of int, but not a valid wrap width
        if not isinstance(value, expected_type) or isinstance(value, bool):
            msg = (
                f'{INVALID_USER_CONFIG}: setting {key!r} must be '
                f'of type {expected_type.__name__}'
            )
            raise ValueError(msg)  # noqa: TRY004
    if section.get('wrap_width', 0) < 0:
        msg = f"{INVALID_USER_CONFIG}: setting 'wrap_width' is negative"
        raise ValueError(msg)
    return dict(section)


def load_user_config() -> dict[str, Any]:
    """Load the user config from the application directory.

    The filename is obtained via [`config_filename`][].  A nonexistent
    file counts as an empty configuration.

    Returns:
        The settings of the `[po-missing]` table, as a `dict`.

    Raises:
        OSError:
            There was an OS error accessing the file.
        ValueError:
            The data loaded from the file is not a valid configuration
            file.

    """
    filename = config_filename()
    try:
        with filename.open('rb') as fileobj:
            data = tomllib.load(fileobj)
    except FileNotFoundError:
        return {}
    return validate_user_config(data)
