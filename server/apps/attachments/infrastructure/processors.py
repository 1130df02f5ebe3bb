"""Processors turning an upload into the variant of one format.

A processor is built from the path of the original upload, receives the
format's processing steps through ``invoke`` and finally writes its
result with ``save``. Every format gets a fresh processor built from the
same source, so formats never feed into each other.
"""

import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, ClassVar, Final, Protocol, final, override

from PIL import Image, ImageOps

from server.apps.attachments.exceptions import UnknownOperationError

logger = logging.getLogger(__name__)

_JPEG_EXTENSIONS: Final = frozenset(('jpg', 'jpeg'))
_WHITE: Final = (255, 255, 255)


class Processor(Protocol):
    """What the attachment manager needs from a processor."""

    def invoke(self, operation: str, args: Sequence[Any]) -> None:
        """Apply the named operation with positional ``args``."""

    def save(self, path: str) -> None:
        """Write the processed result to ``path``."""


ProcessorFactory = Callable[[str], Processor]


class BaseProcessor:
    """Processor dispatching steps to the methods named in ``operations``.

    Subclasses list their public processing methods in ``operations``;
    any other name raises UnknownOperationError.
    """

    operations: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, source_path: str) -> None:
        self.source_path = source_path

    def invoke(self, operation: str, args: Sequence[Any]) -> None:
        """Apply the named operation with positional ``args``.

        Raises:
            UnknownOperationError: If ``operation`` is not listed in
                ``operations``.
        """
        if operation not in self.operations:
            raise UnknownOperationError(
                f'{type(self).__name__} does not support "{operation}"',
            )
        logger.debug(
            'Applying %s%r to %s',
            operation,
            tuple(args),
            self.source_path,
        )
        getattr(self, operation)(*args)

    def save(self, path: str) -> None:
        raise NotImplementedError


@final
class ImageProcessor(BaseProcessor):
    """Pillow based image processor.

    Example format::

        'thumb': {'suffix': '_thumb', 'process': [('thumbnail', (60, 60))]}
    """

    operations: ClassVar[frozenset[str]] = frozenset((
        'resize',
        'thumbnail',
        'crop',
        'rotate',
        'grayscale',
    ))

    def __init__(self, source_path: str) -> None:
        """Open the source image.

        Args:
            source_path: Path of the uploaded image.
        """
        super().__init__(source_path)
        with Image.open(source_path) as image:
            image.load()
            self.image = image.copy()

    def resize(self, width: int, height: int) -> None:
        """Resize to exactly ``width`` x ``height``."""
        self.image = self.image.resize(
            (int(width), int(height)),
            Image.Resampling.LANCZOS,
        )

    def thumbnail(self, width: int, height: int) -> None:
        """Shrink to fit in ``width`` x ``height``, keeping the ratio."""
        self.image.thumbnail(
            (int(width), int(height)),
            Image.Resampling.LANCZOS,
        )

    def crop(self, left: int, upper: int, right: int, lower: int) -> None:
        """Crop to the given box."""
        self.image = self.image.crop((left, upper, right, lower))

    def rotate(self, degrees: float) -> None:
        """Rotate counter clockwise, growing the canvas to fit."""
        self.image = self.image.rotate(degrees, expand=True)

    def grayscale(self) -> None:
        self.image = ImageOps.grayscale(self.image)

    @override
    def save(self, path: str) -> None:
        """Write the image; the format follows the path's extension.

        Args:
            path: Destination path.
        """
        image = self.image
        extension = Path(path).suffix.lstrip('.').lower()
        if extension in _JPEG_EXTENSIONS and image.mode not in {'RGB', 'L'}:
            image = _flatten(image)
        image.save(path)
        logger.info('Saved processed image: %s', path)


def _flatten(image: Image.Image) -> Image.Image:
    # JPEG has no alpha channel
    if image.mode in {'RGBA', 'LA', 'P'}:
        rgba = image.convert('RGBA')
        background = Image.new('RGB', rgba.size, _WHITE)
        background.paste(rgba, mask=rgba.split()[-1])
        return background
    return image.convert('RGB')
