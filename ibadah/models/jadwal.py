from django.core.exceptions import ValidationError
from django.db import models

from core.models import BaseModel


class JadwalIbadah(BaseModel):
    judul = models.CharField(max_length=200)
    jenis_ibadah = models.ForeignKey(
        "ibadah.JenisIbadah",
        on_delete=models.PROTECT,
        related_name="jadwal",
    )
    tanggal = models.DateField(db_index=True)
    waktu_mulai = models.TimeField(null=True, blank=True)
    waktu_selesai = models.TimeField(null=True, blank=True)

    lokasi = models.CharField(max_length=200, blank=True, default="")
    tema = models.CharField(max_length=255, null=True, blank=True)
    firman = models.CharField(max_length=255, null=True, blank=True)

    # ibadah rayon -> rayon, ibadah keluarga -> keluarga (rayon ikut keluarga)
    rayon = models.ForeignKey(
        "jemaat.Rayon",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="jadwal_ibadah",
    )
    keluarga = models.ForeignKey(
        "jemaat.Keluarga",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="jadwal_ibadah",
    )

    # kehadiran diisi setelah ibadah
    jumlah_laki = models.PositiveIntegerField(null=True, blank=True)
    jumlah_perempuan = models.PositiveIntegerField(null=True, blank=True)
    keterangan = models.TextField(null=True, blank=True)

    class Meta:
        verbose_name = "Jadwal Ibadah"
        verbose_name_plural = "Jadwal Ibadah"
        ordering = ["-tanggal", "-waktu_mulai"]

    def __str__(self):
        return f"{self.judul} ({self.tanggal})"

    @property
    def total_hadir(self):
        return (self.jumlah_laki or 0) + (self.jumlah_perempuan or 0)

    def clean(self):
        if self.waktu_mulai and self.waktu_selesai and self.waktu_selesai <= self.waktu_mulai:
            raise ValidationError({"waktu_selesai": "Waktu selesai harus setelah waktu mulai"})
