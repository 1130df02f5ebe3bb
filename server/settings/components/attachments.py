"""Attached files settings.

``ATTACHMENTS_ROOT`` is the web-servable directory every attachment
folder is relative to, ``ATTACHMENTS_BASE_URL`` is its public address.
"""

from server.settings.components import config
from server.settings.components.common import MEDIA_ROOT

ATTACHMENTS_ROOT = config('ATTACHMENTS_ROOT', default=MEDIA_ROOT)
ATTACHMENTS_BASE_URL = config('ATTACHMENTS_BASE_URL', default='/media')
