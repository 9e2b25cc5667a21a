from django.db import models

from core.models import BaseModel


class StatusKeluarga(models.TextChoices):
    UTUH = "UTUH", "Keluarga Utuh"
    JANDA = "JANDA", "Janda"
    DUDA = "DUDA", "Duda"
    SINGLE_PARENT = "SINGLE_PARENT", "Single Parent"


class Keluarga(BaseModel):
    no_kk = models.CharField("No. KK", max_length=32, unique=True)
    no_bagungan = models.PositiveIntegerField(null=True, blank=True)
    rayon = models.ForeignKey(
        "jemaat.Rayon",
        on_delete=models.PROTECT,
        related_name="keluarga",
    )
    status_keluarga = models.CharField(
        max_length=20,
        choices=StatusKeluarga.choices,
        default=StatusKeluarga.UTUH,
    )

    # alamat disimpan sederhana (wilayah administratif tidak dimodelkan)
    alamat = models.CharField(max_length=255, blank=True, default="")
    rt = models.PositiveSmallIntegerField(null=True, blank=True)
    rw = models.PositiveSmallIntegerField(null=True, blank=True)

    class Meta:
        ordering = ["rayon__nama_rayon", "no_bagungan", "no_kk"]
        indexes = [
            models.Index(fields=["rayon", "no_bagungan"], name="keluarga_rayon_bagungan_idx"),
        ]

    def __str__(self):
        return f"KK {self.no_kk}"
