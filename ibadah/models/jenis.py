from django.db import models

from core.models import BaseModel


class JenisIbadah(BaseModel):
    # contoh: Ibadah Minggu, Ibadah Rayon, Ibadah Keluarga
    nama_ibadah = models.CharField(max_length=100, unique=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        verbose_name = "Jenis Ibadah"
        verbose_name_plural = "Jenis Ibadah"
        ordering = ["nama_ibadah"]

    def __str__(self):
        return self.nama_ibadah
