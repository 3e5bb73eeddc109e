from django.apps import AppConfig


class FinancesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.finances"
    label = "finances"

    def ready(self) -> None:
        from .handlers import register_handlers

        register_handlers()
