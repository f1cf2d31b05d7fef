# SPDX-FileCopyrightText: 2025 The po-missing contributors
#
# SPDX-License-Identifier: Zlib


"""Command-line machinery for po-missing.

Warning:
    Non-public module (implementation detail).  Subject to change
    without notice, including removal.

"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import TYPE_CHECKING, Callable, Literal, TypeVar

import click
from typing_extensions import Any, ParamSpec

from po_missing import _internals

if TYPE_CHECKING:
    import types

    from typing_extensions import Self

PROG_NAME = _internals.PROG_NAME
VERSION = _internals.VERSION
PACKAGE_NAME = PROG_NAME.replace('-', '_')

# Error messages
NOT_AN_INTEGER = 'not an integer'
NOT_A_NONNEGATIVE_INTEGER = 'not a non-negative integer'


# Logging
# =======


class ClickEchoStderrHandler(logging.Handler):
    """A [`logging.Handler`][] writing to standard error via `click`.

    Using [`click.echo`][] instead of a stream handler means that the
    output is captured by [`click.testing.CliRunner`][], and that
    styling is stripped when standard error is not a terminal.

    """

    def emit(self, record: logging.LogRecord) -> None:
        click.echo(self.format(record), err=True)


class CLIofPackageFormatter(logging.Formatter):
    """Format package log records as command-line diagnostics.

    Every line of the message is prefixed with the program name and,
    for debug messages and warnings, a label naming the level.  Info and
    error messages carry no label: the former are plain progress
    reports, and the latter are the tool's own error messages.

    """

    LABELS: dict[int, str] = {
        logging.DEBUG: 'Debug',
        logging.WARNING: 'Warning',
    }

    def __init__(self, *, prog_name: str = PROG_NAME) -> None:
        super().__init__()
        self.prog_name = prog_name

    def format(self, record: logging.LogRecord) -> str:
        label = self.LABELS.get(record.levelno)
        prefix = f'{self.prog_name}: '
        if label is not None:
            if record.levelno >= logging.WARNING:
                label = click.style(label, bold=True)
            prefix += f'{label}: '
        text = ''.join(
            prefix + line
            for line in record.getMessage().splitlines(keepends=True)
        )
        if record.exc_info:
            text += '\n' + self.formatException(record.exc_info)
        return text


class HandlerInstallation:
    """Install a handler on a logger for the duration of a context.

    Nested uses of the same instance install the handler only once, and
    only the outermost exit removes it again.  The handler is left alone
    if it was already installed before the outermost entry.

    """

    def __init__(self, handler: logging.Handler, logger_name: str) -> None:
        self.handler = handler
        self.logger = logging.getLogger(logger_name)
        self.installed: list[bool] = []

    def __enter__(self) -> Self:
        needed = self.handler not in self.logger.handlers
        if needed:
            self.logger.addHandler(self.handler)
        self.installed.append(needed)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> Literal[False]:
        if self.installed.pop():
            self.logger.removeHandler(self.handler)
        return False


class StandardCLILogging:
    """The shared stderr handler for the `po_missing` logger hierarchy.

    The handler emits warnings and errors by default; the logging
    options of the command lower its threshold.

    """

    package_name = PACKAGE_NAME
    cli_handler = ClickEchoStderrHandler()
    cli_handler.addFilter(logging.Filter(name=PACKAGE_NAME))
    cli_handler.setFormatter(CLIofPackageFormatter())
    cli_handler.setLevel(logging.WARNING)
    _installation = HandlerInstallation(cli_handler, PACKAGE_NAME)

    @classmethod
    def ensure_standard_logging(cls) -> HandlerInstallation:
        """Return a context manager installing the stderr handler."""
        return cls._installation


P = ParamSpec('P')
R = TypeVar('R')


def adjust_logging_level(
    ctx: click.Context,
    /,
    param: click.Parameter | None = None,
    value: int | None = None,
) -> None:
    """Lower the threshold of the stderr handler to `value`."""
    # Every logging option shares this callback, so it also runs for
    # the options that were not given, with a false value.
    if param is None or not value or ctx.resilient_parsing:
        return
    StandardCLILogging.cli_handler.setLevel(value)
    logging.getLogger(StandardCLILogging.package_name).setLevel(value)


class LoggingCommand(click.Command):
    """A [`click.Command`][] that routes package logs to standard error.

    Only the function call shortcut installs the handler; calling
    `.main` directly (as the test runner does) leaves logging alone.

    """

    def __call__(  # pragma: no cover [external-api]
        self,
        *args: Any,  # noqa: ANN401
        **kwargs: Any,  # noqa: ANN401
    ) -> Any:  # noqa: ANN401
        """"""  # noqa: D419
        with StandardCLILogging.ensure_standard_logging():
            return self.main(*args, **kwargs)


# Callbacks and shared options
# ============================


def validate_wrap_width(
    ctx: click.Context,
    param: click.Parameter,
    value: Any,  # noqa: ANN401
) -> int | None:
    """Check that the wrap width is valid (int, 0 or larger).

    Args:
        ctx: The `click` context.
        param: The current command-line parameter.
        value: The parameter value to be checked.

    Returns:
        The parsed parameter value.

    Raises:
        click.BadParameter: The parameter value is invalid.

    """
    del ctx  # Unused.
    del param  # Unused.
    if value is None:
        return value
    if isinstance(value, int):
        int_value = value
    else:
        try:
            int_value = int(value, 10)
        except ValueError as exc:
            raise click.BadParameter(NOT_AN_INTEGER) from exc
    if int_value < 0:
        raise click.BadParameter(NOT_A_NONNEGATIVE_INTEGER)
    return int_value


def version_option_callback(
    ctx: click.Context,
    param: click.Parameter,
    value: bool,  # noqa: FBT001
) -> None:
    """Print version information, including the major libraries, and exit."""
    del param  # Unused.
    if not value or ctx.resilient_parsing:
        return
    click.echo(
        ' '.join([click.style(PROG_NAME, bold=True), VERSION]),
        color=ctx.color,
    )
    for dependency in ('polib', 'click'):
        try:
            dependency_version = importlib.metadata.version(dependency)
        except importlib.metadata.PackageNotFoundError:  # pragma: no cover
            continue
        click.echo(
            f'Using {dependency} {dependency_version}.', color=ctx.color
        )
    ctx.exit()


def version_option(f: Callable[P, R]) -> Callable[P, R]:
    return click.option(
        '--version',
        is_flag=True,
        is_eager=True,
        expose_value=False,
        callback=version_option_callback,
        help='show applicable version information, then exit',
    )(f)


def _logging_option(*names: str, level: int, help: str) -> Any:  # noqa: A002,ANN401
    return click.option(
        *names,
        'logging_level',
        is_flag=True,
        flag_value=level,
        expose_value=False,
        callback=adjust_logging_level,
        help=help,
    )


debug_option = _logging_option(
    '--debug',
    level=logging.DEBUG,
    help='also emit debug information (implies --verbose)',
)
verbose_option = _logging_option(
    '-v',
    '--verbose',
    level=logging.INFO,
    help='report per-locale progress on standard error',
)
quiet_option = _logging_option(
    '-q',
    '--quiet',
    level=logging.ERROR,
    help='suppress warnings, emit only errors',
)


def standard_logging_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the `--debug`, `-v`/`--verbose` and `-q`/`--quiet` options."""
    return debug_option(verbose_option(quiet_option(f)))
