"""Template filters for attached files."""

from django import template

from server.apps.attachments.formats import NORMAL_FORMAT
from server.apps.attachments.manager import AttachmentManager

register = template.Library()


@register.filter
def attachment_url(manager: object, format_name: str = NORMAL_FORMAT) -> str:
    """Get the public URL of an attached file.

    Usage::

        {{ product.picture|attachment_url }}
        {{ product.picture|attachment_url:"thumb" }}

    Args:
        manager: AttachmentManager of the instance.
        format_name: Name of the format.

    Returns:
        URL, or an empty string when there is no file nor default.
    """
    if not isinstance(manager, AttachmentManager):
        return ''
    return manager.get_file_url(format_name) or ''
