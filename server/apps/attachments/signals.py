"""Signal handlers for attachments app."""

import logging

from django.db import models
from django.db.models.signals import post_delete, post_save

from server.apps.attachments.fields import get_attached_files

logger = logging.getLogger(__name__)


def connect_attached_files(sender: type[models.Model]) -> None:
    """Hook save and delete signals of a model with attached files.

    Connecting twice is a no-op.

    Args:
        sender: The model class.
    """
    if not get_attached_files(sender):
        return

    uid = f'{sender._meta.label}.attached_files'  # noqa: WPS437
    post_save.connect(
        save_attached_files,
        sender=sender,
        dispatch_uid=f'{uid}.save',
    )
    post_delete.connect(
        delete_attached_files,
        sender=sender,
        dispatch_uid=f'{uid}.delete',
    )
    logger.debug('Attached files hooked for %s', sender._meta.label)  # noqa: WPS437


def save_attached_files(
    sender: type[models.Model],
    instance: models.Model,
    raw: bool = False,
    **kwargs: object,
) -> None:
    """Store uploads after a record is inserted or updated.

    Inserts and updates are handled the same way: the record's current
    files are replaced when an upload is pending, left alone otherwise.
    Fixture loading (``raw``) never touches the files.

    Args:
        sender: The model class.
        instance: The instance that was saved.
        raw: True when the instance is saved by loaddata.
        **kwargs: Additional signal arguments.
    """
    if raw:
        return

    for attached in get_attached_files(sender):
        attached.get_manager(instance).on_owner_saved()


def delete_attached_files(
    sender: type[models.Model],
    instance: models.Model,
    **kwargs: object,
) -> None:
    """Delete attached files when a record is deleted.

    A failing file delete propagates to the code deleting the record.

    Args:
        sender: The model class.
        instance: The instance being deleted.
        **kwargs: Additional signal arguments.
    """
    for attached in get_attached_files(sender):
        deleted = attached.get_manager(instance).on_owner_deleted()
        logger.info(
            'Deleted %d attached files (%s) of %s after DB delete',
            deleted,
            attached.name,
            sender._meta.label,  # noqa: WPS437
        )
