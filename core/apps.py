from django.apps import AppConfig


class CoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'core'

    def ready(self):
        """Register the built-in section renderers."""
        import core.services.invoicing.sections  # noqa: F401
