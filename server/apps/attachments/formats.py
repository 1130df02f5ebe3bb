"""Format table: the named variants written for every upload."""

import os
from collections.abc import Iterable, Mapping
from typing import Any, Final, NamedTuple, final

from django.core.exceptions import ImproperlyConfigured

NORMAL_FORMAT: Final = 'normal'

_FORMAT_KEYS: Final = frozenset(('suffix', 'process'))
_FORBIDDEN_SUFFIX_CHARS: Final = frozenset(('.', '/', os.sep))

ProcessStep = tuple[str, tuple[Any, ...]]


@final
class Format(NamedTuple):
    """A named variant of the attached file.

    Stored as ``<base name><suffix>.<extension>``. ``process`` holds the
    ordered ``(operation, args)`` steps applied by a processor.
    """

    name: str
    suffix: str
    process: tuple[ProcessStep, ...] = ()


def build_format_table(
    formats: Mapping[str, Mapping[str, Any]] | None = None,
) -> dict[str, Format]:
    """Build and validate the format table.

    The ``normal`` format (empty suffix, no steps) always exists; an
    explicit ``normal`` entry overrides only the keys it gives. Other
    formats default their suffix to ``_<name>``.

    Args:
        formats: Format name mapped to ``{'suffix': ..., 'process': ...}``.

    Returns:
        Format name mapped to Format, ``normal`` first.

    Raises:
        ImproperlyConfigured: If an entry is malformed or two formats
            share a suffix.
    """
    formats = formats or {}
    table = {NORMAL_FORMAT: _build_format(
        NORMAL_FORMAT,
        formats.get(NORMAL_FORMAT, {}),
        default_suffix='',
    )}
    for name, options in formats.items():
        if name == NORMAL_FORMAT:
            continue
        table[name] = _build_format(name, options, default_suffix=f'_{name}')

    _check_suffixes(table.values())
    return table


def normalize_steps(process: Any) -> tuple[ProcessStep, ...]:
    """Turn a ``process`` option into ordered ``(operation, args)`` steps.

    Accepts ``{operation: args}`` or a sequence of ``(operation, args)``
    pairs. ``args`` may be a list or tuple, a single value or None.
    """
    if not process:
        return ()
    pairs = process.items() if isinstance(process, Mapping) else process
    steps = []
    for pair in pairs:
        try:
            operation, args = pair
        except (TypeError, ValueError) as error:
            raise ImproperlyConfigured(
                f'Processing step must be an (operation, args) pair: {pair!r}',
            ) from error
        steps.append((str(operation), _normalize_args(args)))
    return tuple(steps)


def _normalize_args(args: Any) -> tuple[Any, ...]:
    if args is None:
        return ()
    if isinstance(args, (list, tuple)):
        return tuple(args)
    return (args,)


def _build_format(
    name: str,
    options: Mapping[str, Any],
    default_suffix: str,
) -> Format:
    if not isinstance(options, Mapping):
        raise ImproperlyConfigured(
            f'Format "{name}" must be a mapping, got {options!r}',
        )
    unknown = set(options) - _FORMAT_KEYS
    if unknown:
        raise ImproperlyConfigured(
            f'Format "{name}" has unknown options: {sorted(unknown)}',
        )

    suffix = options.get('suffix', default_suffix)
    if suffix is None:
        suffix = default_suffix
    if name != NORMAL_FORMAT and not suffix:
        raise ImproperlyConfigured(f'Format "{name}" needs a non-empty suffix')
    if _FORBIDDEN_SUFFIX_CHARS.intersection(suffix):
        raise ImproperlyConfigured(
            f'Format "{name}" suffix must not contain dots or path '
            f'separators: {suffix!r}',
        )
    return Format(
        name=name,
        suffix=suffix,
        process=normalize_steps(options.get('process')),
    )


def _check_suffixes(formats: Iterable[Format]) -> None:
    seen: dict[str, str] = {}
    for format_ in formats:
        if format_.suffix in seen:
            raise ImproperlyConfigured(
                f'Formats "{seen[format_.suffix]}" and "{format_.name}" '
                f'share the suffix {format_.suffix!r}',
            )
        seen[format_.suffix] = format_.name
