"""Form helpers for models with attached files."""

import logging
from typing import Any

from server.apps.attachments.fields import get_attached_files

logger = logging.getLogger(__name__)


class AttachmentFormMixin:
    """ModelForm mixin handing uploads over to attached files.

    The form declares a file field named after each attachment's
    ``attribute``; on ``save()`` its cleaned value is assigned to the
    attachment manager, which stores it once the instance is saved.

    Example::

        class ProductForm(AttachmentFormMixin, forms.ModelForm):
            picture_upload = forms.ImageField(required=False)
    """

    def save(self, commit: bool = True) -> Any:
        """Assign uploads, then save the instance."""
        for attached in get_attached_files(self._meta.model):
            upload = self.cleaned_data.get(attached.config.attribute)
            if upload:
                logger.debug(
                    'Form upload %s assigned to %s',
                    upload.name,
                    attached.name,
                )
                attached.get_manager(self.instance).file = upload
        return super().save(commit=commit)
