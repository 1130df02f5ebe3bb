"""Tests for the attachment folder storage."""

import os
import zlib

from django.core.files.base import ContentFile

from server.apps.attachments.infrastructure.storage import AttachmentStorage


def _storage(tmp_path):
    return AttachmentStorage(
        location=str(tmp_path / 'files'),
        base_url='https://example.com/media/files',
    )


def test_list_files_missing_folder(tmp_path):
    """Test listing a folder that was never written is empty."""
    assert _storage(tmp_path).list_files() == []


def test_list_files_sorted_without_directories(tmp_path):
    """Test listing returns sorted file names only."""
    folder = tmp_path / 'files'
    (folder / 'nested').mkdir(parents=True)
    (folder / 'b.png').write_bytes(b'b')
    (folder / 'a.png').write_bytes(b'a')

    assert _storage(tmp_path).list_files() == ['a.png', 'b.png']


def test_save_overwrites_existing_name(tmp_path):
    """Test saving under an existing name replaces the file."""
    storage = _storage(tmp_path)

    storage.save('7.png', ContentFile(b'old'))
    saved_name = storage.save('7.png', ContentFile(b'new'))

    assert saved_name == '7.png'
    assert storage.list_files() == ['7.png']
    assert (tmp_path / 'files' / '7.png').read_bytes() == b'new'


def test_delete(tmp_path):
    """Test deleting a file."""
    storage = _storage(tmp_path)
    storage.save('7.png', ContentFile(b'content'))

    storage.delete('7.png')

    assert storage.list_files() == []


def test_url(tmp_path):
    """Test URLs are built under the folder URL."""
    storage = _storage(tmp_path)

    assert storage.url('7 a.png') == 'https://example.com/media/files/7%20a.png'


def test_cache_bust_token_follows_mtime(tmp_path):
    """Test the cache bust token is the CRC32 of the mtime seconds."""
    storage = _storage(tmp_path)
    storage.save('7.png', ContentFile(b'content'))
    path = storage.path('7.png')
    os.utime(path, (1700000000, 1700000000))

    token = storage.cache_bust_token('7.png')

    assert token == str(zlib.crc32(b'1700000000'))
    os.utime(path, (1700000001, 1700000001))
    assert storage.cache_bust_token('7.png') != token
