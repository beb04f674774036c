from django.apps import AppConfig


class SitekitConfig(AppConfig):
    """Configuration for the sitekit Django app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'sitekit'

    def ready(self) -> None:
        from django.core.signals import setting_changed

        from .services import reset_build_context

        # Inputs are read once per process; a settings override starts over.
        setting_changed.connect(reset_build_context, dispatch_uid='sitekit.reset_build_context')
