"""Django app configuration for catalog app."""

from django.apps import AppConfig


class CatalogConfig(AppConfig):
    """Configuration for catalog app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'server.apps.catalog'
    verbose_name = 'Catalog'
