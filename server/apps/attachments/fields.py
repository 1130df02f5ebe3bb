"""Declaring attached files on models."""

from typing import Any, final

from django.db import models

from server.apps.attachments.config import AttachmentConfig
from server.apps.attachments.manager import AttachmentManager


@final
class AttachedFile:
    """Model class attribute giving each instance an AttachmentManager.

    Example::

        class Product(models.Model):
            picture = AttachedFile(
                attribute='picture_upload',
                relative_folder='products',
            )

        product.picture_upload = request.FILES['picture']
        product.save()
        product.picture.get_file_url()

    The configuration is validated when the model class is defined.
    Saving and deleting an instance stores and removes its files.
    """

    def __init__(self, **options: Any) -> None:
        """Build the attached file configuration.

        Args:
            options: Keyword arguments of AttachmentConfig.

        Raises:
            ImproperlyConfigured: If the configuration is invalid.
        """
        self.config = AttachmentConfig(**options)
        self.name = ''

    def contribute_to_class(self, cls: type[models.Model], name: str) -> None:
        """Attach to the model class.

        The attachments app hooks the save and delete signals of the
        model once all models are loaded.
        """
        self.name = name
        setattr(cls, name, self)

    def __get__(
        self,
        instance: models.Model | None,
        owner: type[models.Model],
    ) -> 'AttachedFile | AttachmentManager':
        if instance is None:
            return self
        return self.get_manager(instance)

    def get_manager(self, instance: models.Model) -> AttachmentManager:
        """Get the manager of ``instance``, created on first access."""
        cache_name = self.cache_name
        manager = instance.__dict__.get(cache_name)
        if manager is None:
            manager = AttachmentManager(instance, self.config)
            instance.__dict__[cache_name] = manager
        return manager

    @property
    def cache_name(self) -> str:
        return f'_{self.name}_attachment_manager'


def get_attached_files(model: type[models.Model]) -> list[AttachedFile]:
    """List attached files declared on a model class and its parents."""
    found: dict[str, AttachedFile] = {}
    for klass in model.__mro__:
        for name, attr in vars(klass).items():
            if isinstance(attr, AttachedFile) and name not in found:
                found[name] = attr
    return list(found.values())
