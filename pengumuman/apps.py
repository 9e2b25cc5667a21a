from django.apps import AppConfig


class PengumumanConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "pengumuman"
    verbose_name = "Pengumuman"
