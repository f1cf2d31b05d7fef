# SPDX-FileCopyrightText: 2025 The po-missing contributors
#
# SPDX-License-Identifier: Zlib

from __future__ import annotations

import contextlib
import os
import pathlib
import sys
from typing import TYPE_CHECKING

import click.testing
import hypothesis
import polib
import pytest
from hypothesis import strategies
from typing_extensions import NamedTuple, Self

from po_missing._internals import cli_machinery

__all__ = ()

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping, Sequence

    from typing_extensions import Any


BASE_PATH = 'locales'
"""The base directory used by [`isolated_locales`][]."""

PO_HEADER = r"""# German translations for the test project.
# This file is distributed under the same license as the project.
#
msgid ""
msgstr ""
"Project-Id-Version: test 1.0\n"
"Language: de\n"
"MIME-Version: 1.0\n"
"Content-Type: text/plain; charset=UTF-8\n"
"Content-Transfer-Encoding: 8bit\n"
"Plural-Forms: nplurals=2; plural=(n != 1);\n"
"""

MAIN_PO = (
    PO_HEADER
    + r"""
msgid "a"
msgstr ""

msgid "b"
msgstr "x"
"""
)
"""A main catalog with one untranslated entry, `a`."""

MISSING_PO = (
    PO_HEADER
    + r"""
msgid "a"
msgstr "merged"
"""
)
"""A missing catalog supplying a translation for `a`."""

MISSING_PO_BLANK = (
    PO_HEADER
    + r"""
msgid "a"
msgstr "   "
"""
)
"""A missing catalog with only a whitespace "translation" for `a`."""

MISSING_PO_HEADER_ONLY = PO_HEADER
"""A missing catalog without any entries."""

FULLY_TRANSLATED_PO = (
    PO_HEADER
    + r"""
msgid "a"
msgstr "eins"

msgid "b"
msgstr "zwei"
"""
)

CONTEXT_PO = (
    PO_HEADER
    + r"""
msgid "Open"
msgstr ""

msgctxt "menu"
msgid "Open"
msgstr ""

msgid "apple"
msgid_plural "apples"
msgstr[0] ""
msgstr[1] ""

msgid "Close"
msgstr "Schließen"
"""
)
"""A main catalog with context-disambiguated and plural entries."""

CONTEXT_MISSING_PO = (
    PO_HEADER
    + r"""
msgctxt "menu"
msgid "Open"
msgstr "Öffnen"

msgid "apple"
msgid_plural "apples"
msgstr[0] "Apfel"
msgstr[1] "Äpfel"
"""
)

BROKEN_PO = """\
msgid "a"
msgstr "b"
this is not a gettext catalog
"""
"""Text that polib refuses to parse."""

UNDECODABLE_PO = b'msgid "a"\nmsgstr "\xff\xfe"\n'
"""Bytes that are not valid UTF-8."""

CANNOT_LOAD_CONFIG = 'Cannot load user config'

skip_if_not_posix = pytest.mark.skipif(
    os.name != 'posix',
    reason='requires POSIX file modes and symbolic links',
)
"""Skip a test unless the platform has POSIX file semantics."""


def entry(
    msgid: str,
    msgstr: str = '',
    *,
    msgctxt: str | None = None,
    msgid_plural: str = '',
    msgstr_plural: Mapping[int, str] | None = None,
) -> polib.POEntry:
    kwargs: dict[str, Any] = {'msgid': msgid, 'msgstr': msgstr}
    if msgctxt is not None:
        kwargs['msgctxt'] = msgctxt
    if msgid_plural:
        kwargs['msgid_plural'] = msgid_plural
        kwargs['msgstr_plural'] = dict(msgstr_plural or {})
    return polib.POEntry(**kwargs)


def catalog(
    entries: Sequence[polib.POEntry],
    /,
    *,
    metadata: Mapping[str, str] | None = None,
) -> polib.POFile:
    """Build an in-memory catalog from the given entries."""
    po = polib.POFile()
    if metadata is not None:
        po.metadata = dict(metadata)
    po.extend(entries)
    return po


def translations(po: polib.POFile, /) -> list[tuple[str, str | None, str]]:
    """Return the `(msgid, msgctxt, msgstr)` triples of the catalog."""
    return [(e.msgid, e.msgctxt, e.msgstr) for e in po]


hypothesis_settings_coverage_compatible = (
    hypothesis.settings(
        # Running under coverage with the Python tracer increases
        # running times 40-fold.
        deadline=(
            40 * deadline
            if (deadline := hypothesis.settings().deadline) is not None
            else None
        ),
        suppress_health_check=(hypothesis.HealthCheck.too_slow,),
    )
    if sys.gettrace() is not None
    else hypothesis.settings()
)

msgids = strategies.sampled_from(['a', 'b', 'c', 'd', 'Open', 'Close'])
msgctxts = strategies.one_of(
    strategies.none(), strategies.sampled_from(['menu', 'button'])
)
msgstrs = strategies.sampled_from(['', ' ', '\t\n', 'x', ' y ', 'Zeile'])


@strategies.composite
def entries(draw: strategies.DrawFn) -> polib.POEntry:
    """Draw a singular catalog entry, possibly the header entry."""
    msgid = draw(strategies.one_of(msgids, strategies.just('')))
    msgctxt = None if msgid == '' else draw(msgctxts)
    return entry(msgid, draw(msgstrs), msgctxt=msgctxt)


@strategies.composite
def catalogs(
    draw: strategies.DrawFn,
    entry_strategy: strategies.SearchStrategy[polib.POEntry] = entries(),  # noqa: B008
) -> polib.POFile:
    """Draw an in-memory catalog, with or without metadata."""
    metadata = draw(
        strategies.one_of(
            strategies.none(),
            strategies.just({'Language': 'de'}),
        )
    )
    return catalog(
        draw(strategies.lists(entry_strategy, max_size=12)),
        metadata=metadata,
    )


@contextlib.contextmanager
def umask(mask: int, /) -> Iterator[None]:
    """Set the process umask for the duration of the context."""
    old_mask = os.umask(mask)
    try:
        yield
    finally:
        os.umask(old_mask)


@contextlib.contextmanager
def isolated_config(
    monkeypatch: pytest.MonkeyPatch,
    runner: CliRunner,
    config: str | None = None,
) -> Iterator[None]:
    """Run within an isolated filesystem, with an isolated user config.

    If given, `config` is written verbatim as the user configuration
    file.

    """
    with runner.isolated_filesystem():
        config_dir = pathlib.Path.cwd() / '.po-missing'
        config_dir.mkdir()
        monkeypatch.setenv('PO_MISSING_PATH', os.fspath(config_dir))
        monkeypatch.setenv('HOME', os.getcwd())
        if config is not None:
            (config_dir / 'config.toml').write_text(config, encoding='UTF-8')
        yield


@contextlib.contextmanager
def isolated_locales(
    monkeypatch: pytest.MonkeyPatch,
    runner: CliRunner,
    locales: Mapping[str, Mapping[str, str | bytes]],
    config: str | None = None,
) -> Iterator[pathlib.Path]:
    """Run within an isolated filesystem with a populated locale tree.

    Args:
        monkeypatch:
            The monkeypatch fixture.
        runner:
            The CLI runner providing the isolated filesystem.
        locales:
            A mapping of locale names to mappings of filenames to file
            contents.  Each locale becomes a directory below
            [`BASE_PATH`][].
        config:
            Optional user configuration file contents.

    Yields:
        The path to the locale tree.

    """
    with isolated_config(monkeypatch=monkeypatch, runner=runner, config=config):
        base = pathlib.Path(BASE_PATH)
        base.mkdir()
        write_locales(base, locales)
        yield base


def write_locales(
    base: pathlib.Path,
    locales: Mapping[str, Mapping[str, str | bytes]],
) -> None:
    for locale, files in locales.items():
        locale_dir = base / locale
        locale_dir.mkdir(parents=True, exist_ok=True)
        for filename, contents in files.items():
            if isinstance(contents, bytes):
                (locale_dir / filename).write_bytes(contents)
            else:
                (locale_dir / filename).write_text(contents, encoding='UTF-8')


def snapshot(base: pathlib.Path, /) -> dict[str, bytes]:
    """Return the contents of all files below `base`, by relative path."""
    return {
        path.relative_to(base).as_posix(): path.read_bytes()
        for path in sorted(base.rglob('*'))
        if path.is_file()
    }


class ReadableResult(NamedTuple):
    """Helper class for formatting and testing click.testing.Result objects."""

    exception: BaseException | None
    exit_code: int
    output: str
    stderr: str

    @classmethod
    def parse(cls, r: click.testing.Result, /) -> Self:
        try:
            stderr = r.stderr
        except ValueError:
            stderr = r.output
        return cls(r.exception, r.exit_code, r.stdout or '', stderr or '')

    def clean_exit(
        self, *, output: str = '', empty_stderr: bool = False
    ) -> bool:
        """Return whether the invocation exited cleanly.

        Args:
            output:
                An expected output string.
            empty_stderr:
                Whether standard error must be empty.

        """
        return (
            (
                not self.exception
                or (
                    isinstance(self.exception, SystemExit)
                    and self.exit_code == 0
                )
            )
            and (not output or output in self.output)
            and (not empty_stderr or not self.stderr)
        )

    def error_exit(
        self, *, error: str | type[BaseException] = BaseException
    ) -> bool:
        """Return whether the invocation exited uncleanly.

        Args:
            error:
                An expected error message, or an expected exception
                type.

        """
        if isinstance(error, str):
            return (
                isinstance(self.exception, SystemExit)
                and self.exit_code > 0
                and (not error or error in self.stderr)
            )
        return isinstance(self.exception, error)


class CliRunner:
    """A [`click.testing.CliRunner`][] with po-missing's logging set up.

    Invoking a command through `click.testing` bypasses the logging
    setup in [`cli_machinery.LoggingCommand.__call__`][], so we install
    the standard logging handlers around each invocation ourselves.
    Results are returned as [`ReadableResult`][] objects.

    """

    def __init__(self) -> None:
        try:
            self.click_testing_clirunner = click.testing.CliRunner(
                mix_stderr=False
            )
        except TypeError:
            # click 8.2 and later always capture stderr separately.
            self.click_testing_clirunner = click.testing.CliRunner()

    def invoke(
        self,
        cli: click.Command,
        args: Sequence[str] | str | None = None,
        **kwargs: Any,  # noqa: ANN401
    ) -> ReadableResult:
        logging_cm = cli_machinery.StandardCLILogging
        with logging_cm.ensure_standard_logging():
            return ReadableResult.parse(
                self.click_testing_clirunner.invoke(cli, args, **kwargs)
            )

    def isolated_filesystem(
        self,
        temp_dir: str | os.PathLike[str] | None = None,
    ) -> contextlib.AbstractContextManager[str]:
        return self.click_testing_clirunner.isolated_filesystem(
            temp_dir=temp_dir
        )
