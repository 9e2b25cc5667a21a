from django.core.exceptions import ValidationError
from django.db import models

from core.models import BaseModel


class StatusPeriode(models.TextChoices):
    DRAFT = "DRAFT", "Draft"
    ACTIVE = "ACTIVE", "Aktif"
    CLOSED = "CLOSED", "Ditutup"


class PeriodeAnggaran(BaseModel):
    nama = models.CharField(max_length=100)
    tahun = models.PositiveIntegerField(db_index=True)
    tanggal_mulai = models.DateField()
    tanggal_akhir = models.DateField()
    keterangan = models.TextField(null=True, blank=True)
    status = models.CharField(
        max_length=10,
        choices=StatusPeriode.choices,
        default=StatusPeriode.DRAFT,
    )
    is_active = models.BooleanField(default=True)

    class Meta:
        verbose_name = "Periode Anggaran"
        verbose_name_plural = "Periode Anggaran"
        ordering = ["-tahun", "-tanggal_mulai"]

    def __str__(self):
        return self.nama

    def clean(self):
        if self.tanggal_mulai and self.tanggal_akhir and self.tanggal_mulai >= self.tanggal_akhir:
            raise ValidationError({"tanggal_akhir": "Tanggal akhir harus setelah tanggal mulai"})
