"""Database models for catalog app."""

from typing import Final, final, override

from django.db import models

from server.apps.attachments.fields import AttachedFile
from server.apps.attachments.infrastructure.processors import ImageProcessor

# Constants for field max lengths
_SKU_MAX_LENGTH: Final = 32
_NAME_MAX_LENGTH: Final = 255

_THUMBNAIL_SIZE: Final = (60, 60)


@final
class Product(models.Model):
    """Product with a picture and its thumbnail.

    Pictures are stored as {sku}.{ext} and {sku}_thumb.{ext} in the
    products folder; products without a picture show the placeholder.
    """

    sku = models.CharField(
        max_length=_SKU_MAX_LENGTH,
        unique=True,
    )

    name = models.CharField(
        max_length=_NAME_MAX_LENGTH,
    )

    picture = AttachedFile(
        attribute='picture_upload',
        relative_folder='products',
        naming_attributes='sku',
        extensions='jpg,jpeg,png,gif',
        default_name='placeholder',
        formats={
            'thumb': {
                'suffix': '_thumb',
                'process': [('thumbnail', _THUMBNAIL_SIZE)],
            },
        },
        processor=ImageProcessor,
    )

    class Meta:
        """Model metadata."""

        verbose_name = 'Product'  # type: ignore[mutable-override]
        verbose_name_plural = 'Products'  # type: ignore[mutable-override]
        ordering = ['sku']

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.sku}: {self.name}'


@final
class Manual(models.Model):
    """Printable manual of a product.

    Stored as manual_{product_id}_{language}.pdf in the manuals folder.
    """

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name='manuals',
    )

    language = models.CharField(
        max_length=8,
        default='en',
    )

    document = AttachedFile(
        attribute='document_upload',
        relative_folder='manuals',
        naming_attributes=('product_id', 'language'),
        prefix='manual_',
        extensions='pdf',
        add_cache_bust_to_url=False,
    )

    class Meta:
        """Model metadata."""

        verbose_name = 'Manual'  # type: ignore[mutable-override]
        verbose_name_plural = 'Manuals'  # type: ignore[mutable-override]

        constraints = [
            models.UniqueConstraint(
                fields=['product', 'language'],
                name='manuals_product_language_unique',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.product_id}:{self.language}'
