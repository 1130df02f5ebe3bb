"""Shared fixtures for attachments app tests."""

from io import BytesIO
from pathlib import Path

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image

from server.apps.attachments.config import AttachmentConfig
from server.apps.attachments.infrastructure.processors import BaseProcessor
from server.apps.attachments.manager import AttachmentManager
from server.apps.catalog.models import Product


class RecordingProcessor(BaseProcessor):
    """Processor writing the source bytes followed by the applied steps."""

    operations = frozenset(('resize', 'fail'))

    def __init__(self, source_path):
        super().__init__(source_path)
        self.steps = []
        self.content = Path(source_path).read_bytes()

    def resize(self, width, height):
        self.steps.append(f'resize:{width}x{height}')

    def fail(self):
        raise RuntimeError('processing failed')

    def save(self, path):
        marks = ''.join(f'|{step}' for step in self.steps)
        Path(path).write_bytes(self.content + marks.encode())


@pytest.fixture
def attachments_root(tmp_path, settings):
    """Point attachment settings at a temporary web root.

    Returns:
        Path of the temporary web root.
    """
    root = tmp_path / 'www'
    root.mkdir()
    settings.ATTACHMENTS_ROOT = str(root)
    settings.ATTACHMENTS_BASE_URL = 'https://example.com/media'
    return root


@pytest.fixture
def recording_processor():
    """Processor class recording its steps in the written file.

    Returns:
        RecordingProcessor class.
    """
    return RecordingProcessor


@pytest.fixture
def make_manager(attachments_root):
    """Build a manager for an unsaved product with the given options.

    Returns:
        Factory taking the owner's primary key and config options.
    """
    def factory(pk=7, **options):
        options.setdefault('attribute', 'upload')
        options.setdefault('relative_folder', 'files')
        return AttachmentManager(Product(pk=pk), AttachmentConfig(**options))

    return factory


@pytest.fixture
def make_upload():
    """Build an in-memory upload.

    Returns:
        Factory taking a file name and content.
    """
    def factory(name='source.png', content=b'source-bytes'):
        return SimpleUploadedFile(name, content)

    return factory


@pytest.fixture
def make_image():
    """Generate image bytes with Pillow.

    Returns:
        Factory taking size, image format and mode.
    """
    def factory(size=(120, 80), image_format='PNG', mode='RGB'):
        buffer = BytesIO()
        Image.new(mode, size, 'red').save(buffer, format=image_format)
        return buffer.getvalue()

    return factory
