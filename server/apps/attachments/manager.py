"""Attachment manager: files of one owner instance.

Files of an owner are named ``<base name><suffix>.<extension>`` inside
the attachment folder. The extension is only known while saving, so
every lookup scans the folder and matches file names on base name and
suffix instead of building an exact path.

Saving purges the current set before writing the new one; there is no
locking and no rollback. A failure between the purge and the writes
leaves the set empty or partial until the next successful save.
"""

import logging
import os
from typing import Any, final

from django.conf import settings
from django.core.files.base import File as DjangoFile
from django.db.models.fields.files import FieldFile

from server.apps.attachments.config import AttachmentConfig
from server.apps.attachments.exceptions import (
    ProcessingError,
    UnresolvedNameError,
)
from server.apps.attachments.formats import NORMAL_FORMAT, Format
from server.apps.attachments.infrastructure.storage import AttachmentStorage
from server.apps.attachments.infrastructure.upload import UploadSource
from server.apps.attachments.naming import (
    build_base_file_name,
    is_allowed_upload,
    match_format,
    matches_stem,
)

logger = logging.getLogger(__name__)


@final
class AttachmentManager:
    """Names, writes, finds and deletes the attached files of an owner.

    One manager is bound to one owner instance. Assign an upload to
    ``file`` before saving the owner to replace its files.
    """

    def __init__(self, owner: Any, config: AttachmentConfig) -> None:
        """Bind manager to its owner.

        Args:
            owner: Model instance the files belong to.
            config: Attached file configuration.
        """
        self.owner = owner
        self.config = config
        self.file: DjangoFile | None = None
        self._base_file_name: str | None = None

        root_dir = config.root_dir or settings.ATTACHMENTS_ROOT
        base_url = config.base_url
        if base_url is None:
            base_url = settings.ATTACHMENTS_BASE_URL
        self.storage = AttachmentStorage(
            location=os.path.join(root_dir, config.relative_folder),
            base_url=f'{base_url.rstrip("/")}/{config.relative_folder}/',
        )

    @property
    def folder_path(self) -> str:
        """Absolute path of the attachment folder."""
        return self.storage.location

    def resolve_base_file_name(self) -> str:
        """Get the file name without suffix and extension.

        Computed from the owner's naming attributes on first success and
        then kept for the life of this manager.

        Raises:
            UnresolvedNameError: If a naming attribute is still None.
        """
        if self._base_file_name is None:
            self._base_file_name = build_base_file_name(
                self.owner,
                self._naming_attributes(),
                separator=self.config.attribute_separator,
                prefix=self.config.prefix,
            )
        return self._base_file_name

    def get_default_file_name(self) -> str | None:
        """Get the default file name without suffix and extension.

        Returns:
            Prefixed default name, or None if no default is configured.
        """
        if self.config.default_name is None:
            return None
        return self.config.prefix + self.config.default_name

    def list_existing_variants(self, base_name: str) -> dict[str, str]:
        """Find the stored file of every format for ``base_name``.

        Args:
            base_name: Base file name of the attachment set.

        Returns:
            Format name mapped to absolute file path, for existing files.
        """
        variants: dict[str, str] = {}
        for format_name, path in self._scan(base_name):
            variants.setdefault(format_name, path)
        return variants

    def get_files_path(self) -> dict[str, str]:
        """Get format name mapped to path for every existing file."""
        return self.list_existing_variants(self.resolve_base_file_name())

    def get_file_path(self, format_name: str = NORMAL_FORMAT) -> str | None:
        """Get the path of the file of a format.

        Raises:
            UnknownFormatError: If the format is not configured.
        """
        self.config.get_format(format_name)
        return self.get_files_path().get(format_name)

    def get_file_url(self, format_name: str = NORMAL_FORMAT) -> str | None:
        """Get the public URL of the file of a format.

        Falls back to the default file when the owner has no file for
        this format.

        Args:
            format_name: Name of the format.

        Returns:
            URL, or None if neither the file nor a default exists. An
            owner without identity only gets the default.

        Raises:
            UnknownFormatError: If the format is not configured.
        """
        suffix = self.config.get_format(format_name).suffix
        names = self.storage.list_files()

        stems = []
        base_name = self._try_base_file_name()
        if base_name is not None:
            stems.append(base_name + suffix)
        default_name = self.get_default_file_name()
        if default_name is not None:
            stems.append(default_name + suffix)

        for stem in stems:
            for name in names:
                if matches_stem(name, stem, self.config.allowed_extensions):
                    return self._make_file_url(name)
        return None

    def on_owner_saved(self, upload: DjangoFile | None = None) -> bool:
        """Replace the owner's files with a new upload, if there is one.

        The source is ``upload`` if given, else the file assigned to
        ``self.file``, else a django File found on the owner under the
        configured attribute. Without a source, or with an extension
        outside the allow-list, nothing happens.

        Args:
            upload: Explicit upload to store.

        Returns:
            True if files were written, False if the save was skipped.

        Raises:
            ProcessingError: If some formats failed to process.
            OSError: If the filesystem fails.
        """
        source = self._resolve_upload(upload)
        if source is None:
            logger.debug('No upload for %s, files untouched', self._describe())
            return False

        upload_source = UploadSource(source)
        extension = upload_source.extension
        if not is_allowed_upload(extension, self.config.extensions):
            logger.info(
                'Skipping upload %s for %s: extension not in %s',
                upload_source.name,
                self._describe(),
                self.config.extensions,
            )
            return False
        if not extension and not self.config.force_extension:
            logger.warning(
                'Skipping upload %s for %s: no extension',
                upload_source.name,
                self._describe(),
            )
            return False

        base_name = self.resolve_base_file_name()
        self.purge_variants(base_name)
        try:
            self.write_variants(upload_source, extension)
        finally:
            self._consume(source)
        return True

    def write_variants(self, source: UploadSource, extension: str) -> list[str]:
        """Write one file per format from ``source``.

        Args:
            source: Upload to store.
            extension: Extension of the upload, used unless an extension
                is forced.

        Returns:
            Absolute paths written.

        Raises:
            ProcessingError: If some formats failed to process. The
                other formats are written anyway.
        """
        extension = (self.config.force_extension or extension).lower()
        base_name = self.resolve_base_file_name()
        formats = list(self.config.formats.values())

        if self.config.processor is not None:
            return self._write_processed(source, base_name, extension, formats)

        if len(formats) == 1:
            name = f'{base_name}{formats[0].suffix}.{extension}'
            saved_name = self.storage.save(name, source.content())
            return [self.storage.path(saved_name)]

        written = []
        for format_ in formats:
            name = f'{base_name}{format_.suffix}.{extension}'
            saved_name = self.storage.save(name, source.copy())
            written.append(self.storage.path(saved_name))
        return written

    def on_owner_deleted(self) -> int:
        """Delete the owner's files.

        Returns:
            Number of files deleted, 0 for an owner without identity.
        """
        return self.delete_files()

    def delete_files(self) -> int:
        """Delete the owner's files outside the delete lifecycle."""
        base_name = self._try_base_file_name()
        if base_name is None:
            return 0
        return self.purge_variants(base_name)

    def purge_variants(self, base_name: str) -> int:
        """Delete every file of the attachment set of ``base_name``.

        Args:
            base_name: Base file name of the attachment set.

        Returns:
            Number of files deleted, 0 if there were none.
        """
        deleted = 0
        for _, path in self._scan(base_name):
            self.storage.delete(os.path.basename(path))
            deleted += 1
        if deleted:
            logger.info('Deleted %d files of %s', deleted, base_name)
        return deleted

    def _write_processed(
        self,
        source: UploadSource,
        base_name: str,
        extension: str,
        formats: list[Format],
    ) -> list[str]:
        written = []
        failures: dict[str, Exception] = {}
        self.storage.ensure_location()
        with source.temporary_path() as source_path:
            for format_ in formats:
                path = self.storage.path(
                    f'{base_name}{format_.suffix}.{extension}',
                )
                try:
                    self._process(format_, source_path, path)
                except Exception as error:
                    logger.exception(
                        'Failed to process format %s of %s',
                        format_.name,
                        self._describe(),
                    )
                    failures[format_.name] = error
                else:
                    written.append(path)

        if failures:
            raise ProcessingError(failures)
        return written

    def _process(self, format_: Format, source_path: str, path: str) -> None:
        processor = self.config.processor(source_path)
        for operation, args in format_.process:
            processor.invoke(operation, args)
        processor.save(path)

    def _scan(self, base_name: str) -> list[tuple[str, str]]:
        matches = []
        formats = self.config.formats.values()
        for name in self.storage.list_files():
            format_ = match_format(
                name,
                base_name,
                formats,
                self.config.allowed_extensions,
            )
            if format_ is not None:
                matches.append((format_.name, self.storage.path(name)))
        return matches

    def _resolve_upload(self, upload: DjangoFile | None) -> DjangoFile | None:
        if upload is not None:
            return upload
        if self.file is not None:
            return self.file
        candidate = getattr(self.owner, self.config.attribute, None)
        if isinstance(candidate, FieldFile) or not isinstance(candidate, DjangoFile):
            return None
        return candidate if candidate.name else None

    def _consume(self, source: DjangoFile) -> None:
        # An upload is stored once; later saves of the owner keep the files
        self.file = None
        if getattr(self.owner, self.config.attribute, None) is source:
            setattr(self.owner, self.config.attribute, None)

    def _try_base_file_name(self) -> str | None:
        # Nothing is ever stored under an unresolved name
        try:
            return self.resolve_base_file_name()
        except UnresolvedNameError as error:
            logger.debug('%s has no file name: %s', self._describe(), error)
            return None

    def _naming_attributes(self) -> tuple[str, ...]:
        if self.config.naming_attributes:
            return self.config.naming_attributes
        return (self.owner._meta.pk.attname,)  # noqa: WPS437

    def _make_file_url(self, name: str) -> str:
        url = self.storage.url(name)
        if self.config.add_cache_bust_to_url:
            url = f'{url}?_={self.storage.cache_bust_token(name)}'
        return url

    def _describe(self) -> str:
        owner_pk = getattr(self.owner, 'pk', None)
        return f'{type(self.owner).__name__}(pk={owner_pk})'
