"""Configuration of an attached file."""

from collections.abc import Mapping, Sequence
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, final

from django.core.exceptions import ImproperlyConfigured

from server.apps.attachments.exceptions import UnknownFormatError
from server.apps.attachments.formats import Format, build_format_table
from server.apps.attachments.naming import parse_allow_list

if TYPE_CHECKING:
    from server.apps.attachments.infrastructure.processors import (
        ProcessorFactory,
    )


@final
class AttachmentConfig:
    """Validated, immutable settings of one attached file.

    Everything is checked here, so a broken declaration fails when the
    model class is defined rather than on the first upload.
    """

    def __init__(  # noqa: WPS211
        self,
        *,
        attribute: str | None = None,
        relative_folder: str | None = None,
        naming_attributes: str | Sequence[str] | None = None,
        attribute_separator: str = '_',
        extensions: str | None = None,
        default_name: str | None = None,
        prefix: str = '',
        formats: Mapping[str, Mapping[str, Any]] | None = None,
        processor: 'ProcessorFactory | None' = None,
        force_extension: str | None = None,
        add_cache_bust_to_url: bool = True,
        root_dir: str | Path | None = None,
        base_url: str | None = None,
    ) -> None:
        """Validate and store attached file settings.

        Args:
            attribute: Name of the upload on the owner or its form.
            relative_folder: Folder of the files, relative to the root.
            naming_attributes: Owner attribute(s) building the file name.
                Defaults to the owner's primary key.
            attribute_separator: Joins several naming attribute values.
            extensions: Comma separated allow-list, empty for any.
            default_name: Stem of the fallback file served when the
                owner has none.
            prefix: Constant prepended to every file name.
            formats: Format name mapped to its suffix and process steps.
            processor: Callable building a processor from a source path.
            force_extension: Extension of every stored file.
            add_cache_bust_to_url: Append a modified-time hash to URLs.
            root_dir: Web-servable root, defaults to ATTACHMENTS_ROOT.
            base_url: Public URL of the root, defaults to
                ATTACHMENTS_BASE_URL.

        Raises:
            ImproperlyConfigured: If a required option is missing or the
                format table is invalid.
        """
        if not attribute:
            raise ImproperlyConfigured('Attribute property must be set.')
        if not relative_folder or not relative_folder.strip('/'):
            raise ImproperlyConfigured('Relative folder must be set.')
        if processor is not None and not callable(processor):
            raise ImproperlyConfigured(
                f'Processor must be callable, got {processor!r}',
            )

        self.attribute = attribute
        self.relative_folder = relative_folder.strip('/')
        self.naming_attributes = _normalize_names(naming_attributes)
        self.attribute_separator = attribute_separator
        self.extensions = extensions or None
        self.allowed_extensions = parse_allow_list(extensions)
        self.default_name = default_name
        self.prefix = prefix
        self.formats: Mapping[str, Format] = MappingProxyType(
            build_format_table(formats),
        )
        self.processor = processor
        self.force_extension = (
            force_extension.lstrip('.').lower() if force_extension else None
        )
        if (
            self.force_extension
            and self.allowed_extensions
            and self.force_extension not in self.allowed_extensions
        ):
            raise ImproperlyConfigured(
                f'Forced extension "{self.force_extension}" is not in '
                f'the allowed extensions "{extensions}".',
            )
        self.add_cache_bust_to_url = add_cache_bust_to_url
        self.root_dir = root_dir
        self.base_url = base_url

    def get_format(self, format_name: str) -> Format:
        """Get a format by name.

        Raises:
            UnknownFormatError: If the format is not configured.
        """
        try:
            return self.formats[format_name]
        except KeyError:
            raise UnknownFormatError(format_name) from None


def _normalize_names(names: str | Sequence[str] | None) -> tuple[str, ...]:
    if names is None:
        return ()
    if isinstance(names, str):
        return (names,)
    if not names:
        raise ImproperlyConfigured('Naming attributes must not be empty.')
    return tuple(names)
