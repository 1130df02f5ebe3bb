"""File naming and matching rules for attached files.

A stored file is named ``<base name><suffix>.<extension>``. The base
name comes from the owner's naming attributes; the suffix tells the
formats apart; the extension is whatever the upload had (or a forced
one), so lookups never know the exact name and match on the stem.
"""

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any, Final

from server.apps.attachments.exceptions import UnresolvedNameError
from server.apps.attachments.formats import Format

_EXTENSION_SEPARATOR: Final = '.'
_ALLOW_LIST_SEPARATOR: Final = ','


def build_base_file_name(
    owner: Any,
    naming_attributes: Sequence[str],
    separator: str = '_',
    prefix: str = '',
) -> str:
    """Build the base file name from the owner's naming attributes.

    Args:
        owner: Model instance the files belong to.
        naming_attributes: Attribute names read off the owner, in order.
        separator: Joins the values when there are several attributes.
        prefix: Constant prepended to the joined values.

    Returns:
        Base file name, without suffix and extension.

    Raises:
        UnresolvedNameError: If an attribute is still None or empty,
            e.g. the primary key before the owner was inserted.
    """
    parts = []
    for attribute in naming_attributes:
        value = getattr(owner, attribute)
        if value is None or value == '':
            raise UnresolvedNameError(attribute)
        parts.append(str(value))
    return prefix + separator.join(parts)


def parse_allow_list(extensions: str | None) -> tuple[str, ...]:
    """Split a comma separated allow-list into lower-case extensions.

    Example: ``'JPG, png'`` -> ``('jpg', 'png')``. Empty means any.
    """
    if not extensions:
        return ()
    return tuple(
        extension.strip().lstrip(_EXTENSION_SEPARATOR).lower()
        for extension in extensions.split(_ALLOW_LIST_SEPARATOR)
        if extension.strip()
    )


def is_allowed_upload(extension: str, extensions: str | None) -> bool:
    """Check an upload extension against the raw allow-list string.

    The check is a case-insensitive substring test on the whole
    allow-list, so ``'jp'`` passes ``'jpg,png'``.
    """
    if not extensions:
        return True
    return extension.lower() in extensions.lower()


def split_file_name(file_name: str) -> tuple[str, str] | None:
    """Split a stored file name into stem and extension.

    Example: ``'7_thumb.png'`` -> ``('7_thumb', 'png')``.

    Returns:
        Stem and extension, or None if there is no extension.
    """
    stem, separator, extension = file_name.rpartition(_EXTENSION_SEPARATOR)
    if not separator or not stem or not extension:
        return None
    return stem, extension


def has_allowed_extension(
    file_name: str,
    allowed_extensions: Iterable[str] = (),
) -> bool:
    """Check a stored file's extension against parsed allow-list."""
    split = split_file_name(file_name)
    if split is None:
        return False
    allowed = tuple(allowed_extensions)
    return not allowed or split[1].lower() in allowed


def matches_stem(
    file_name: str,
    stem: str,
    allowed_extensions: Iterable[str] = (),
) -> bool:
    """Check whether ``file_name`` is ``<stem>.<extension>``."""
    split = split_file_name(file_name)
    if split is None or split[0] != stem:
        return False
    return has_allowed_extension(file_name, allowed_extensions)


def match_format(
    file_name: str,
    base_name: str,
    formats: Iterable[Format],
    allowed_extensions: Iterable[str] = (),
) -> Format | None:
    """Find the format a stored file belongs to.

    The file must be ``<base_name><suffix>.<extension>`` for one of the
    formats. Formats are tried in order and the first one whose suffix
    fits exactly wins.

    Args:
        file_name: Name of a file in the attachment folder.
        base_name: Base file name of the owner.
        formats: Formats of the format table.
        allowed_extensions: Parsed allow-list, empty for any extension.

    Returns:
        Matching format, or None if the file is not part of the set.
    """
    split = split_file_name(Path(file_name).name)
    if split is None:
        return None
    stem, _ = split
    if not stem.startswith(base_name):
        return None
    if not has_allowed_extension(file_name, allowed_extensions):
        return None

    suffix = stem[len(base_name):]
    for format_ in formats:
        if format_.suffix == suffix:
            return format_
    return None
