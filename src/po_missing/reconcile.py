# SPDX-FileCopyrightText: 2025 The po-missing contributors
#
# SPDX-License-Identifier: Zlib

"""Reconcile a main catalog with its "missing translations" catalog.

For each locale, the main catalog holds every translation unit, and the
missing catalog holds only those units that still lack a translation.
Translators fill in the missing catalog; reconciling then

 1. merges every completed translation from the missing catalog back
    into the main catalog (*merge-back*), and
 2. recomputes the missing catalog from the main catalog.

After reconciling, the missing catalog contains no translations, so
reconciling again is a no-op.

"""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING

from po_missing import _types, catalog

if TYPE_CHECKING:
    import polib

__all__ = (
    'collect_missing',
    'merge_back',
    'process_locale',
    'reconcile',
)

logger = logging.getLogger(__name__)


def merge_back(main: polib.POFile, missing: polib.POFile, /) -> int:
    """Copy completed translations from `missing` into `main`, in place.

    An entry of `missing` is a completed translation if it is not the
    header and [`catalog.has_translation`][] holds.  It is copied into
    the first entry of `main` with the same `(msgid, msgctxt)` identity.
    Entries without a counterpart in `main`, or whose counterpart
    disagrees on having plural forms, are ignored.

    Returns:
        The number of updated entries in `main`.

    """
    index: dict[tuple[str, str | None], polib.POEntry] = {}
    for entry in main:
        if not catalog.is_header(entry):
            index.setdefault(catalog.entry_identity(entry), entry)
    updated = 0
    for entry in missing:
        if catalog.is_header(entry) or not catalog.has_translation(entry):
            continue
        target = index.get(catalog.entry_identity(entry))
        if target is None:
            logger.debug(
                'No counterpart for msgid %r (msgctxt %r)',
                entry.msgid,
                entry.msgctxt,
            )
            continue
        if catalog.is_plural(target) != catalog.is_plural(entry):
            logger.debug(
                'Plural forms differ for msgid %r (msgctxt %r)',
                entry.msgid,
                entry.msgctxt,
            )
            continue
        catalog.copy_translation(entry, target)
        updated += 1
    return updated


def collect_missing(main: polib.POFile, /) -> tuple[polib.POFile, int]:
    """Derive the missing catalog from `main`.

    The result carries the header of `main`, followed by copies of all
    untranslated non-header entries of `main`, in order.

    Returns:
        A tuple of the missing catalog, and the number of untranslated
        entries in it (not counting the header).

    """
    missing = catalog.new_catalog_like(main)
    count = 0
    for entry in main:
        if catalog.is_header(entry) or catalog.has_translation(entry):
            continue
        missing.append(copy.deepcopy(entry))
        count += 1
    return missing, count


def reconcile(
    main: polib.POFile,
    missing: polib.POFile | None = None,
    /,
) -> tuple[polib.POFile | None, polib.POFile | None]:
    """Reconcile the catalogs in memory, without touching any files.

    Neither argument is modified.

    Args:
        main:
            The main catalog.
        missing:
            The missing catalog, or `None` if there is none.

    Returns:
        A tuple of the updated main catalog, or `None` if no
        translations were merged back, and the recomputed missing
        catalog, or `None` if no translations are missing.

    """
    updated_main: polib.POFile | None = None
    if missing is not None:
        candidate = copy.deepcopy(main)
        if merge_back(candidate, missing):
            updated_main = candidate
    new_missing, count = collect_missing(
        updated_main if updated_main is not None else main
    )
    return updated_main, (new_missing if count else None)


def process_locale(
    paths: _types.LocalePaths,
    /,
    *,
    wrapwidth: int | None = None,
) -> _types.LocaleReport | None:
    """Reconcile the catalog files of a single locale.

    If the missing catalog holds completed translations for the main
    catalog, merge them back, rewrite the main catalog, delete the
    missing catalog, and reload the main catalog from disk.  Then
    rewrite the missing catalog with the untranslated entries of the
    main catalog, or delete it if there are none.

    An absent or unparsable missing catalog is treated as empty.

    Args:
        paths:
            The catalog paths of the locale.
        wrapwidth:
            The wrap width for the written catalogs.  If not given, use
            polib's default.

    Returns:
        A report on the reconciliation, or `None` if the locale has no
        main catalog and was skipped.

    Raises:
        OSError:
            There was an OS error reading or writing a catalog.
        catalog.CatalogLoadError:
            The main catalog cannot be parsed.
        UnicodeEncodeError:
            A catalog cannot be encoded in its character set.

    """
    if not paths.main.exists():
        logger.debug('Skipping %s: no %s', paths.locale, paths.main.name)
        return None
    main = catalog.load(paths.main, wrapwidth=wrapwidth)
    missing = catalog.load_optional(paths.missing, wrapwidth=wrapwidth)

    merged = 0
    removed = False
    if missing is not None:
        merged = merge_back(main, missing)
    if merged:
        catalog.save(main, paths.main)
        removed = catalog.remove(paths.missing)
        logger.info(
            '%s: %d translations merged back from %s',
            paths.locale,
            merged,
            paths.missing.name,
        )
        # Derive from what was actually written, not from memory.
        main = catalog.load(paths.main, wrapwidth=wrapwidth)

    new_missing, count = collect_missing(main)
    if count:
        catalog.save(new_missing, paths.missing)
        outcome = _types.MissingOutcome.WRITTEN
        logger.info(
            '%s: %d missing translations extracted', paths.locale, count
        )
    else:
        removed = catalog.remove(paths.missing) or removed
        outcome = (
            _types.MissingOutcome.DELETED
            if removed
            else _types.MissingOutcome.ABSENT
        )
        logger.info('%s: no missing translations', paths.locale)
    return _types.LocaleReport(
        locale=paths.locale,
        merged=merged,
        missing=count,
        main_rewritten=bool(merged),
        outcome=outcome,
    )
