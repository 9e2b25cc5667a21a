from django.db import models

from core.models import BaseModel


class RealisasiItemKeuangan(BaseModel):
    item = models.ForeignKey(
        "keuangan.ItemKeuangan",
        on_delete=models.PROTECT,
        related_name="realisasi",
    )
    periode = models.ForeignKey(
        "keuangan.PeriodeAnggaran",
        on_delete=models.PROTECT,
        related_name="realisasi",
    )
    tanggal_realisasi = models.DateField(db_index=True)
    total_realisasi = models.DecimalField(max_digits=18, decimal_places=2)
    keterangan = models.TextField(null=True, blank=True)

    class Meta:
        verbose_name = "Realisasi Item Keuangan"
        verbose_name_plural = "Realisasi Item Keuangan"
        ordering = ["-tanggal_realisasi", "-created_at"]

    def __str__(self):
        return f"{self.item.kode} {self.tanggal_realisasi}: {self.total_realisasi}"
