"""Shared fixtures for catalog app tests."""

from io import BytesIO

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image


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
def make_picture():
    """Build an uploaded picture generated with Pillow.

    Returns:
        Factory taking the file name, image size and format.
    """
    def factory(name='photo.png', size=(120, 80), image_format='PNG'):
        buffer = BytesIO()
        Image.new('RGB', size, 'blue').save(buffer, format=image_format)
        return SimpleUploadedFile(
            name,
            buffer.getvalue(),
            content_type=f'image/{image_format.lower()}',
        )

    return factory
