from django.apps import AppConfig


class ComposerConfig(AppConfig):
    name = 'composer'
    verbose_name = 'Composer'

    def ready(self):
        """Register the core block types when the app is ready."""
        import composer.blocks  # noqa: F401 - Register core blocks
