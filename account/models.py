from django.contrib.auth.models import User
from django.db import models

from account.roles import Role, capabilities_for


class UserProfile(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="profile")
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.JEMAAT)
    no_whatsapp = models.CharField(max_length=30, null=True, blank=True)

    # akun JEMAAT terhubung ke data jemaat
    jemaat = models.OneToOneField(
        "jemaat.Jemaat",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="user_profile",
    )
    # MAJELIS hanya mengelola data di rayon ini
    rayon = models.ForeignKey(
        "jemaat.Rayon",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="majelis_profiles",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.user.username} ({self.get_role_display()})"

    @property
    def capabilities(self):
        return capabilities_for(self.role)
