from django.db import models

from core.models import BaseModel


class KategoriPengumuman(BaseModel):
    nama = models.CharField(max_length=100, unique=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        verbose_name = "Kategori Pengumuman"
        verbose_name_plural = "Kategori Pengumuman"
        ordering = ["nama"]

    def __str__(self):
        return self.nama
