from datetime import date

from django.db import models

from core.models import BaseModel


class GolonganDarah(models.TextChoices):
    A = "A"
    B = "B"
    AB = "AB"
    O = "O"


class StatusDalamKeluarga(models.TextChoices):
    KEPALA = "KEPALA", "Kepala Keluarga"
    ISTRI = "ISTRI", "Istri"
    ANAK = "ANAK", "Anak"
    LAINNYA = "LAINNYA", "Lainnya"


class StatusJemaat(models.TextChoices):
    AKTIF = "AKTIF", "Aktif"
    TIDAK_AKTIF = "TIDAK_AKTIF", "Tidak Aktif"
    KELUAR = "KELUAR", "Keluar"


class Jemaat(BaseModel):
    nama = models.CharField(max_length=150)
    # True = laki-laki, False = perempuan
    jenis_kelamin = models.BooleanField(default=True)
    tanggal_lahir = models.DateField(null=True, blank=True)
    golongan_darah = models.CharField(
        max_length=2, choices=GolonganDarah.choices, null=True, blank=True,
    )
    status_dalam_keluarga = models.CharField(
        max_length=10,
        choices=StatusDalamKeluarga.choices,
        default=StatusDalamKeluarga.ANAK,
    )
    status = models.CharField(
        max_length=12,
        choices=StatusJemaat.choices,
        default=StatusJemaat.AKTIF,
        db_index=True,
    )
    keluarga = models.ForeignKey(
        "jemaat.Keluarga",
        on_delete=models.PROTECT,
        related_name="anggota",
    )

    class Meta:
        verbose_name_plural = "Jemaat"
        ordering = ["nama"]
        indexes = [
            models.Index(fields=["keluarga", "status_dalam_keluarga"], name="jemaat_keluarga_status_idx"),
        ]

    def __str__(self):
        return self.nama

    def umur(self, today=None):
        if not self.tanggal_lahir:
            return None
        today = today or date.today()
        born = self.tanggal_lahir
        return today.year - born.year - ((today.month, today.day) < (born.month, born.day))
