"""Main settings file.

This file merges all components from ``server/settings/components``.
Values are read from the environment (or ``config/.env``) by
``python-decouple``.
"""

from split_settings.tools import include

include(
    'components/common.py',
    'components/logging.py',
    'components/attachments.py',
)
