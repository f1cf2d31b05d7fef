# SPDX-FileCopyrightText: 2025 The po-missing contributors
#
# SPDX-License-Identifier: Zlib

"""Loading, saving and inspecting gettext catalogs.

Catalogs are [`polib.POFile`][] objects, i.e. ordered lists of
[`polib.POEntry`][] objects.  polib stores the catalog header (the entry
with the empty `msgid`) separately, as the catalog's `header` and
`metadata` attributes; any header entry that still shows up inside the
entry list is nevertheless recognized by [`is_header`][] and never
treated as a translatable unit.

"""

from __future__ import annotations

import copy
import errno
import logging
import os
import pathlib
import shutil
import tempfile
from typing import TYPE_CHECKING

import polib

if TYPE_CHECKING:
    from typing_extensions import Any

__all__ = (
    'CatalogLoadError',
    'copy_translation',
    'entry_identity',
    'has_translation',
    'is_header',
    'is_plural',
    'load',
    'load_optional',
    'new_catalog_like',
    'remove',
    'save',
)

logger = logging.getLogger(__name__)


class CatalogLoadError(ValueError):
    """The file at `path` cannot be parsed as a gettext catalog."""

    def __init__(
        self,
        path: str | os.PathLike[str],
        reason: object = None,
    ) -> None:
        super().__init__(path, reason)
        self.path = os.fspath(path)
        self.reason = reason

    def __str__(self) -> str:
        if self.reason:
            return f'Failed to read {self.path}: {self.reason}'
        return f'Failed to read {self.path}'


def entry_identity(entry: polib.POEntry, /) -> tuple[str, str | None]:
    """Return the `(msgid, msgctxt)` pair identifying a translation unit."""
    return (entry.msgid, entry.msgctxt)


def is_header(entry: polib.POEntry, /) -> bool:
    """Return whether the entry is the catalog's header (metadata) entry."""
    return entry.msgid == ''


def is_plural(entry: polib.POEntry, /) -> bool:
    """Return whether the entry has plural forms."""
    return bool(entry.msgid_plural)


def has_translation(entry: polib.POEntry, /) -> bool:
    """Return whether the entry carries a usable translation.

    A singular entry is translated if its `msgstr` is non-empty after
    trimming whitespace.  A plural entry is translated if it has at
    least one plural form, and every plural form is non-empty after
    trimming whitespace.

    Fuzziness is not taken into account.

    """
    if is_plural(entry):
        forms = entry.msgstr_plural or {}
        return bool(forms) and all(
            (form or '').strip() for form in forms.values()
        )
    return bool((entry.msgstr or '').strip())


def copy_translation(source: polib.POEntry, target: polib.POEntry, /) -> None:
    """Copy the translation of `source` verbatim into `target`."""
    target.msgstr = source.msgstr
    if source.msgid_plural and target.msgid_plural:
        target.msgstr_plural = dict(source.msgstr_plural)


def load(
    path: str | os.PathLike[str],
    /,
    *,
    wrapwidth: int | None = None,
) -> polib.POFile:
    """Load the gettext catalog stored at `path`.

    Args:
        path:
            The path to the catalog file.
        wrapwidth:
            The wrap width to use when serializing this catalog again.
            If not given, use polib's default.

    Returns:
        The parsed catalog, with entries in file order.

    Raises:
        FileNotFoundError:
            There is no file at `path`.
        OSError:
            There was an OS error reading the file.
        CatalogLoadError:
            The file contents are not a valid gettext catalog, or cannot
            be decoded in the catalog's declared character set.

    """
    path = pathlib.Path(path)
    # polib treats any string that does not name an existing file as
    # literal catalog contents.
    if not path.is_file():
        raise FileNotFoundError(
            errno.ENOENT, os.strerror(errno.ENOENT), os.fspath(path)
        )
    kwargs: dict[str, Any] = {}
    if wrapwidth is not None:
        kwargs['wrapwidth'] = wrapwidth
    try:
        catalog = polib.pofile(os.fspath(path), **kwargs)
    except OSError as exc:
        # polib reports syntax errors as a bare OSError, without an
        # errno.
        if exc.errno is not None:
            raise
        raise CatalogLoadError(path, exc) from exc
    except ValueError as exc:
        raise CatalogLoadError(path, exc) from exc
    logger.debug('Loaded %d entries from %s', len(catalog), path)
    return catalog


def load_optional(
    path: str | os.PathLike[str],
    /,
    *,
    wrapwidth: int | None = None,
) -> polib.POFile | None:
    """Load the gettext catalog stored at `path`, if possible.

    Like [`load`][], but a nonexistent, unreadable or unparsable file
    counts as "no catalog".  Problems with an existing file are logged
    as warnings.

    Returns:
        The parsed catalog, or `None`.

    """
    try:
        return load(path, wrapwidth=wrapwidth)
    except FileNotFoundError:
        return None
    except CatalogLoadError as exc:
        logger.warning('Ignoring unreadable catalog: %s', exc)
        return None
    except OSError as exc:
        logger.warning(
            'Ignoring unreadable catalog: %s: %s', exc.filename, exc.strerror
        )
        return None


def _default_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def save(catalog: polib.POFile, path: str | os.PathLike[str], /) -> None:
    """Write the catalog to `path`, replacing any previous file.

    The catalog is first written to a temporary file in the same
    directory, which then atomically replaces the target file.  On
    failure, the target file is left untouched.

    If `path` is a symbolic link, the file it points to is replaced
    instead, and the link stays intact.  The replaced file keeps its
    permission bits; a new file gets the usual permissions for the
    current umask.

    Raises:
        OSError:
            There was an OS error writing the file.
        UnicodeEncodeError:
            The catalog contents cannot be encoded in the catalog's
            character set.

    """
    path = pathlib.Path(os.path.realpath(path))
    contents = str(catalog)
    with tempfile.NamedTemporaryFile(
        'w',
        encoding=catalog.encoding,
        dir=path.parent,
        prefix=f'.{path.name}.',
        suffix='.tmp',
        delete=False,
    ) as outfile:
        tmpname = outfile.name
        try:
            outfile.write(contents)
        except BaseException:
            outfile.close()
            os.unlink(tmpname)
            raise
    try:
        try:
            shutil.copymode(path, tmpname)
        except FileNotFoundError:
            os.chmod(tmpname, _default_mode())
        os.replace(tmpname, path)
    except BaseException:
        os.unlink(tmpname)
        raise
    logger.debug('Saved %d entries to %s', len(catalog), path)


def remove(path: str | os.PathLike[str], /) -> bool:
    """Delete the file at `path`, if any.

    Returns:
        True if a file was deleted, false if there was no file.

    Raises:
        OSError:
            There was an OS error deleting an existing file.

    """
    try:
        os.remove(path)
    except FileNotFoundError:
        return False
    logger.debug('Removed %s', path)
    return True


def new_catalog_like(template: polib.POFile, /) -> polib.POFile:
    """Return an empty catalog with the same header as `template`.

    The header comment, the metadata (and its fuzziness), the encoding
    and the wrap width are carried over.  If `template` holds a header
    entry within its entry list, then a copy of the first such entry
    becomes the first entry of the new catalog.

    """
    catalog = polib.POFile(
        wrapwidth=template.wrapwidth, encoding=template.encoding
    )
    catalog.header = template.header
    catalog.metadata = dict(template.metadata)
    catalog.metadata_is_fuzzy = copy.copy(template.metadata_is_fuzzy)
    for entry in template:
        if is_header(entry):
            catalog.append(copy.deepcopy(entry))
            break
    return catalog
