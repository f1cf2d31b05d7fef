# SPDX-FileCopyrightText: 2025 The po-missing contributors
#
# SPDX-License-Identifier: Zlib

"""Walk a tree of locale directories and reconcile each locale."""

from __future__ import annotations

import errno
import logging
import os
import pathlib
from typing import TYPE_CHECKING

from po_missing import _types, reconcile

if TYPE_CHECKING:
    from collections.abc import Iterator

__all__ = ('iter_locale_paths', 'process_locales')

logger = logging.getLogger(__name__)


def iter_locale_paths(
    base_path: str | os.PathLike[str],
    /,
    *,
    main_name: str = _types.DEFAULT_MAIN_NAME,
    missing_name: str = _types.DEFAULT_MISSING_NAME,
) -> Iterator[_types.LocalePaths]:
    """Yield the catalog paths of every locale below `base_path`.

    Every subdirectory of `base_path` is a locale, named after the
    directory.  Locales are yielded in name order.  Whether the catalog
    files exist is not checked.

    Raises:
        FileNotFoundError:
            `base_path` does not exist.
        NotADirectoryError:
            `base_path` is not a directory.
        OSError:
            `base_path` cannot be listed.

    """
    base = pathlib.Path(base_path)
    if not base.exists():
        raise FileNotFoundError(
            errno.ENOENT, os.strerror(errno.ENOENT), os.fspath(base)
        )
    if not base.is_dir():
        raise NotADirectoryError(
            errno.ENOTDIR, os.strerror(errno.ENOTDIR), os.fspath(base)
        )
    subdirs = sorted(
        (child for child in base.iterdir() if child.is_dir()),
        key=lambda child: child.name,
    )
    for subdir in subdirs:
        yield _types.LocalePaths.for_directory(
            subdir, main_name=main_name, missing_name=missing_name
        )


def process_locales(
    base_path: str | os.PathLike[str],
    /,
    *,
    main_name: str = _types.DEFAULT_MAIN_NAME,
    missing_name: str = _types.DEFAULT_MISSING_NAME,
    wrapwidth: int | None = None,
) -> _types.RunTally:
    """Reconcile every locale below `base_path`.

    A failure within a single locale is logged and counted, and does
    not stop the processing of the remaining locales.  Locales without
    a main catalog are skipped silently.

    Returns:
        The tally of processed, failed and skipped locales.

    Raises:
        OSError:
            `base_path` does not exist, or cannot be listed.  See
            [`iter_locale_paths`][].

    """
    tally = _types.RunTally()
    # List eagerly, so that run-level failures surface before any
    # locale is touched.
    all_paths = list(
        iter_locale_paths(
            base_path, main_name=main_name, missing_name=missing_name
        )
    )
    for paths in all_paths:
        try:
            report = reconcile.process_locale(paths, wrapwidth=wrapwidth)
        except (OSError, ValueError) as exc:
            logger.error(  # noqa: TRY400
                'Error processing locale %r: %s', paths.locale, exc
            )
            tally = tally.record_error()
            continue
        if report is None:
            tally = tally.record_skip()
        else:
            tally = tally.record_success()
    logger.info(
        'Processing complete: %d locales processed, %d errors',
        tally.processed,
        tally.errors,
    )
    return tally
