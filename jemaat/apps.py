from django.apps import AppConfig


class JemaatConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "jemaat"
    verbose_name = "Jemaat & Keluarga"
