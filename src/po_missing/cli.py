# SPDX-FileCopyrightText: 2025 The po-missing contributors
#
# SPDX-License-Identifier: Zlib

"""Command-line interface for po-missing."""

from __future__ import annotations

import logging

import click

import po_missing as pom
from po_missing import _types, locales
from po_missing._internals import cli_helpers, cli_machinery

__author__ = pom.__author__
__version__ = pom.__version__

__all__ = ('po_missing',)

PROG_NAME = cli_machinery.PROG_NAME
DEFAULT_BASE_PATH = 'frontend/src/locales'

logger = logging.getLogger(PROG_NAME.replace('-', '_'))


@click.command(
    cls=cli_machinery.LoggingCommand,
    context_settings={'help_option_names': ['-h', '--help']},
)
@click.option(
    '-b',
    '--base-path',
    metavar='DIR',
    help=(
        'scan the locale folders in DIR '
        f'(default: {DEFAULT_BASE_PATH}, or the configured `base_path`)'
    ),
)
@click.option(
    '--main-name',
    metavar='NAME',
    help=(
        'use NAME as the filename of each main catalog '
        f'(default: {_types.DEFAULT_MAIN_NAME})'
    ),
)
@click.option(
    '--missing-name',
    metavar='NAME',
    help=(
        'use NAME as the filename of each missing translations catalog '
        f'(default: {_types.DEFAULT_MISSING_NAME})'
    ),
)
@click.option(
    '--wrap-width',
    metavar='N',
    callback=cli_machinery.validate_wrap_width,
    help='wrap lines in written catalogs at N columns (default: 78)',
)
@cli_machinery.standard_logging_options
@cli_machinery.version_option
@click.pass_context
def po_missing(
    ctx: click.Context,
    /,
    *,
    base_path: str | None = None,
    main_name: str | None = None,
    missing_name: str | None = None,
    wrap_width: int | None = None,
) -> None:
    """Extract missing translations from gettext catalogs.

    Scan the locale folders within the base directory.  For each locale
    with a main catalog, merge any translations filled in within the
    missing translations catalog back into the main catalog, then
    extract all entries still lacking a translation into a fresh missing
    translations catalog.  If no translations are missing, the missing
    translations catalog is removed.

    Defaults for all options except the logging options can be set in
    the `[po-missing]` table of the configuration file `config.toml`,
    located in the directory named by the `PO_MISSING_PATH` environment
    variable, or else in the standard application directory.

    """
    try:
        config = cli_helpers.load_user_config()
    except OSError as exc:
        logger.error(  # noqa: TRY400
            'Cannot load user config: %s: %r',
            exc.strerror,
            exc.filename,
        )
        ctx.exit(1)
    except ValueError as exc:
        logger.error('Cannot load user config: %s', exc)  # noqa: TRY400
        ctx.exit(1)
    if base_path is None:
        base_path = config.get('base_path', DEFAULT_BASE_PATH)
    if main_name is None:
        main_name = config.get('main_name', _types.DEFAULT_MAIN_NAME)
    if missing_name is None:
        missing_name = config.get(
            'missing_name', _types.DEFAULT_MISSING_NAME
        )
    if wrap_width is None:
        wrap_width = config.get('wrap_width')

    logger.info("Scanning for locales in '%s' directory...", base_path)
    try:
        tally = locales.process_locales(
            base_path,
            main_name=main_name,
            missing_name=missing_name,
            wrapwidth=wrap_width,
        )
    except FileNotFoundError:
        logger.error("Directory '%s' does not exist", base_path)  # noqa: TRY400
        ctx.exit(1)
    except OSError as exc:
        logger.error(  # noqa: TRY400
            "Failed to read directory '%s': %s", base_path, exc.strerror
        )
        ctx.exit(1)
    if not tally.ok:
        logger.error('Completed with %d errors', tally.errors)
        ctx.exit(1)


if __name__ == '__main__':
    po_missing()
