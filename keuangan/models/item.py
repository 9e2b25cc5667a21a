from django.db import models

from core.models import BaseModel


class ItemKeuangan(BaseModel):
    """
    Baris anggaran hierarkis per kategori & periode.

    parent -> children membentuk pohon (A, A.1, A.1.1, ...).
    level hanya informasi; struktur sebenarnya ditentukan parent.
    total_target disimpan per baris, tidak dijumlah dari children.
    """
    kategori = models.ForeignKey(
        "keuangan.KategoriKeuangan",
        on_delete=models.PROTECT,
        related_name="items",
    )
    periode = models.ForeignKey(
        "keuangan.PeriodeAnggaran",
        on_delete=models.PROTECT,
        related_name="items",
    )
    parent = models.ForeignKey(
        "self",
        null=True,
        blank=True,
        on_delete=models.PROTECT,
        related_name="children",
    )

    kode = models.CharField(max_length=50)
    nama = models.CharField(max_length=200)
    deskripsi = models.TextField(null=True, blank=True)
    level = models.PositiveSmallIntegerField(default=1)
    urutan = models.PositiveIntegerField(default=1)

    # target / anggaran
    target_frekuensi = models.PositiveIntegerField(null=True, blank=True)
    satuan_frekuensi = models.CharField(max_length=50, null=True, blank=True)
    nominal_satuan = models.DecimalField(max_digits=18, decimal_places=2, null=True, blank=True)
    total_target = models.DecimalField(max_digits=18, decimal_places=2, null=True, blank=True)

    # data aktual
    nominal_actual = models.DecimalField(max_digits=18, decimal_places=2, default=0)
    jumlah_transaksi = models.PositiveIntegerField(default=0)
    keterangan = models.TextField(null=True, blank=True)

    is_active = models.BooleanField(default=True)

    class Meta:
        verbose_name = "Item Keuangan"
        verbose_name_plural = "Item Keuangan"
        ordering = ["kategori__kode", "level", "urutan", "kode"]
        constraints = [
            models.UniqueConstraint(
                fields=["kategori", "periode", "kode"],
                name="uniq_item_kode_per_kategori_periode",
            )
        ]
        indexes = [
            models.Index(fields=["periode", "kategori", "parent"], name="item_periode_kategori_idx"),
        ]

    def __str__(self):
        return f"{self.kode} - {self.nama}"
