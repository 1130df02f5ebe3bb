"""Adapter between django uploads and attachment writes."""

import logging
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import final

from django.core.files.base import File as DjangoFile

logger = logging.getLogger(__name__)


def get_file_extension(filename: str) -> str:
    """Get file extension from filename.

    Args:
        filename: Filename (e.g., 'photo.JPG').

    Returns:
        Extension without dot, as given (e.g., 'JPG').
        Returns empty string if no extension.
    """
    extension = Path(filename).suffix
    return extension.lstrip('.')


@final
class UploadSource:
    """An uploaded file on its way into an attachment folder.

    Wraps any django File: ``UploadedFile`` from a request,
    ``TemporaryUploadedFile`` spooled to disk, or a named ``ContentFile``.
    """

    def __init__(self, upload: DjangoFile) -> None:
        """Initialize upload source.

        Args:
            upload: Uploaded django File, must have a name.
        """
        self._upload = upload

    @property
    def name(self) -> str:
        """Client supplied file name."""
        return Path(self._upload.name or '').name

    @property
    def extension(self) -> str:
        """Extension reported by the upload, without dot."""
        return get_file_extension(self.name)

    def content(self) -> DjangoFile:
        """Get the upload itself for a single, possibly moving, save.

        Storage moves a ``TemporaryUploadedFile`` instead of copying it.
        """
        return self._upload

    def copy(self) -> DjangoFile:
        """Get a view of the upload that storage always copies."""
        self._upload.seek(0)
        return DjangoFile(self._upload.file, name=self.name)

    @contextmanager
    def temporary_path(self) -> Iterator[str]:
        """Provide a filesystem path holding the upload's content.

        Disk-backed uploads hand out their own temporary file. In-memory
        uploads are spooled to a temporary copy removed afterwards.

        Yields:
            Absolute path of the source content.
        """
        if hasattr(self._upload, 'temporary_file_path'):
            yield self._upload.temporary_file_path()
            return

        suffix = f'.{self.extension}' if self.extension else ''
        with tempfile.NamedTemporaryFile(suffix=suffix, delete=False) as spool:
            for chunk in self._upload.chunks():
                spool.write(chunk)
        logger.debug('Spooled upload %s to %s', self.name, spool.name)
        try:
            yield spool.name
        finally:
            os.remove(spool.name)
