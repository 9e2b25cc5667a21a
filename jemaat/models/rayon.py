from django.db import models

from core.models import BaseModel


class Rayon(BaseModel):
    nama_rayon = models.CharField(max_length=100, unique=True)

    class Meta:
        ordering = ["nama_rayon"]

    def __str__(self):
        return self.nama_rayon
