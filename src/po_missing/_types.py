# SPDX-FileCopyrightText: 2025 The po-missing contributors
#
# SPDX-License-Identifier: Zlib

"""Types used by po-missing."""

from __future__ import annotations

import enum
import pathlib
from typing import TYPE_CHECKING

from typing_extensions import NamedTuple

if TYPE_CHECKING:
    import os

    from typing_extensions import Self

__all__ = (
    'DEFAULT_MAIN_NAME',
    'DEFAULT_MISSING_NAME',
    'LocalePaths',
    'LocaleReport',
    'MissingOutcome',
    'RunTally',
)

DEFAULT_MAIN_NAME = 'messages.po'
DEFAULT_MISSING_NAME = 'messages-missing.po'


class LocalePaths(NamedTuple):
    """The catalog file paths owned by a single locale.

    Attributes:
        locale:
            The locale name, i.e. the name of the locale directory.
        main:
            The path to the main catalog.  Required on disk for the
            locale to be processed.
        missing:
            The path to the derived "missing translations" catalog.

    """

    locale: str
    """"""
    main: pathlib.Path
    """"""
    missing: pathlib.Path
    """"""

    @classmethod
    def for_directory(
        cls,
        directory: str | os.PathLike[str],
        /,
        *,
        main_name: str = DEFAULT_MAIN_NAME,
        missing_name: str = DEFAULT_MISSING_NAME,
    ) -> Self:
        """Construct the catalog paths for the given locale directory."""  # noqa: DOC201
        path = pathlib.Path(directory)
        return cls(path.name, path / main_name, path / missing_name)


class MissingOutcome(str, enum.Enum):
    """What happened to the "missing translations" catalog file.

    Attributes:
        WRITTEN:
            The file was (re)written with the untranslated entries.
        DELETED:
            Nothing is missing, and a stale file was deleted.
        ABSENT:
            Nothing is missing, and there was no file to delete.

    """

    WRITTEN = 'written'
    """"""
    DELETED = 'deleted'
    """"""
    ABSENT = 'absent'
    """"""


class LocaleReport(NamedTuple):
    """The outcome of reconciling a single locale.

    Attributes:
        locale:
            The locale name.
        merged:
            The number of main catalog entries updated from the missing
            catalog.
        missing:
            The number of (non-header) entries still lacking
            a translation.
        main_rewritten:
            True if the main catalog file was rewritten.
        outcome:
            What happened to the missing catalog file.

    """

    locale: str
    """"""
    merged: int
    """"""
    missing: int
    """"""
    main_rewritten: bool
    """"""
    outcome: MissingOutcome
    """"""


class RunTally(NamedTuple):
    """Success, error and skip counts across a run over many locales.

    Immutable; the `record_*` methods return updated copies.

    """

    processed: int = 0
    """"""
    errors: int = 0
    """"""
    skipped: int = 0
    """"""

    @property
    def ok(self) -> bool:
        """True if no locale failed."""
        return self.errors == 0

    def record_success(self) -> Self:
        return self._replace(processed=self.processed + 1)

    def record_error(self) -> Self:
        return self._replace(errors=self.errors + 1)

    def record_skip(self) -> Self:
        return self._replace(skipped=self.skipped + 1)
