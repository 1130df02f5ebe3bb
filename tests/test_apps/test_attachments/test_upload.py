"""Tests for the upload adapter."""

import os

from django.core.files.base import ContentFile
from django.core.files.uploadedfile import (
    SimpleUploadedFile,
    TemporaryUploadedFile,
)

from server.apps.attachments.infrastructure.upload import (
    UploadSource,
    get_file_extension,
)


def test_get_file_extension():
    """Test file extension extraction keeps the case."""
    assert get_file_extension('photo.JPG') == 'JPG'
    assert get_file_extension('archive.tar.gz') == 'gz'
    assert get_file_extension('README') == ''


def test_name_and_extension():
    """Test the client file name is reduced to its base name."""
    source = UploadSource(ContentFile(b'x', name='dir/photo.PNG'))

    assert source.name == 'photo.PNG'
    assert source.extension == 'PNG'


def test_temporary_path_spools_in_memory_upload():
    """Test in-memory uploads get a temporary copy removed afterwards."""
    source = UploadSource(SimpleUploadedFile('photo.png', b'image-bytes'))

    with source.temporary_path() as path:
        assert path.endswith('.png')
        with open(path, 'rb') as spooled:
            assert spooled.read() == b'image-bytes'

    assert not os.path.exists(path)


def test_temporary_path_reuses_disk_upload():
    """Test disk-backed uploads hand out their own temporary file."""
    upload = TemporaryUploadedFile('photo.png', 'image/png', 5, None)
    upload.write(b'bytes')
    upload.flush()
    source = UploadSource(upload)

    with source.temporary_path() as path:
        assert path == upload.temporary_file_path()

    assert os.path.exists(path)
    upload.close()


def test_copy_is_never_moved():
    """Test copies have no temporary path for storage to move."""
    upload = TemporaryUploadedFile('photo.png', 'image/png', 5, None)
    upload.write(b'bytes')
    upload.flush()

    copy = UploadSource(upload).copy()

    assert not hasattr(copy, 'temporary_file_path')
    assert b''.join(copy.chunks()) == b'bytes'
    upload.close()
