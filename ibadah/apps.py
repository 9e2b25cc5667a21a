from django.apps import AppConfig


class IbadahConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "ibadah"
    verbose_name = "Jadwal Ibadah"
