"""Django app configuration for attachments app."""

from typing import override

from django.apps import AppConfig, apps


class AttachmentsConfig(AppConfig):
    """Configuration for attachments app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'server.apps.attachments'
    verbose_name = 'Attachments'

    @override
    def ready(self) -> None:
        """Hook signal handlers of every model with attached files."""
        from server.apps.attachments import signals  # noqa: WPS433

        for model in apps.get_models():
            signals.connect_attached_files(model)
