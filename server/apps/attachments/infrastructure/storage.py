"""Local filesystem storage backend for attached files."""

import logging
import os
import zlib
from typing import Any, final, override

from django.core.files.storage import FileSystemStorage

logger = logging.getLogger(__name__)


@final
class AttachmentStorage(FileSystemStorage):
    """Filesystem storage of one attachment folder.

    Extends django FileSystemStorage with:
    - Overwriting of existing names (files are addressed by name)
    - Sorted folder listing that tolerates a missing folder
    - Cache busting token from the modification time
    - Enhanced error logging
    """

    def __init__(self, location: str, base_url: str) -> None:
        """Initialize storage for one folder.

        Args:
            location: Absolute folder path.
            base_url: Public URL of the folder.
        """
        super().__init__(
            location=location,
            base_url=base_url,
            allow_overwrite=True,
        )

    @override
    def save(  # noqa: WPS211
        self,
        name: str | None,
        content: Any,
        max_length: int | None = None,
    ) -> str:
        """Save file to the folder with error handling and logging.

        Args:
            name: File name inside the folder.
            content: File content (django File).
            max_length: Optional maximum length for the filename.

        Returns:
            Name the file was saved under.

        Raises:
            OSError: If writing the file fails.
        """
        try:
            logger.info('Writing attached file: %s', self.describe(name))
            saved_name = super().save(name, content, max_length)
            logger.info('Successfully wrote attached file: %s', saved_name)
        except Exception:
            logger.exception(
                'Failed to write attached file: %s',
                self.describe(name),
            )
            raise
        else:
            return saved_name

    @override
    def delete(self, name: str) -> None:
        """Delete file from the folder with error handling and logging.

        Args:
            name: File name inside the folder.

        Raises:
            OSError: If deleting the file fails.
        """
        try:
            logger.info('Deleting attached file: %s', self.describe(name))
            super().delete(name)
        except Exception:
            logger.exception(
                'Failed to delete attached file: %s',
                self.describe(name),
            )
            raise

    def list_files(self) -> list[str]:
        """List file names of the folder, sorted.

        Returns:
            File names; empty if the folder does not exist yet.
        """
        if not os.path.isdir(self.location):
            return []
        _, files = self.listdir('')
        logger.debug('Scanned %d files in %s', len(files), self.location)
        return sorted(files)

    def ensure_location(self) -> None:
        """Create the folder if it does not exist yet."""
        os.makedirs(self.location, exist_ok=True)

    def cache_bust_token(self, name: str) -> str:
        """Get a short token that changes with the file's mtime.

        Args:
            name: File name inside the folder.

        Returns:
            CRC32 of the whole-second modification timestamp.
        """
        modified = int(os.path.getmtime(self.path(name)))
        return str(zlib.crc32(str(modified).encode()))

    def describe(self, name: str | None) -> str:
        """Get the absolute path of ``name`` for log messages."""
        return os.path.join(self.location, name or '')
