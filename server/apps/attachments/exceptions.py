"""Exceptions for attachments app."""

from collections.abc import Mapping
from typing import override


class AttachmentError(Exception):
    """Base class for attached file errors."""


class UnresolvedNameError(AttachmentError):
    """Raised when the owner's naming attributes are not populated yet."""

    def __init__(self, attribute: str) -> None:
        """Initialize UnresolvedNameError.

        Args:
            attribute: Naming attribute that has no value.
        """
        self.attribute = attribute
        super().__init__(
            f'Cannot build file name: attribute "{attribute}" is not set',
        )


class UnknownFormatError(AttachmentError, KeyError):
    """Raised when a format name is not part of the format table."""

    def __init__(self, format_name: str) -> None:
        self.format_name = format_name
        super().__init__(f'Unknown format: {format_name}')

    @override
    def __str__(self) -> str:
        # KeyError would quote the whole message otherwise
        return str(self.args[0])


class UnknownOperationError(AttachmentError):
    """Raised when a processing step names an unsupported operation."""


class ProcessingError(AttachmentError):
    """Raised after a save when one or more formats failed to process.

    Formats processed before or after the failing ones are kept on disk.
    """

    def __init__(self, failures: Mapping[str, Exception]) -> None:
        """Initialize ProcessingError.

        Args:
            failures: Failed format names mapped to their causes.
        """
        self.failures = dict(failures)
        details = ', '.join(
            f'{name}: {error!r}' for name, error in self.failures.items()
        )
        super().__init__(f'Processing failed for formats ({details})')
