from django.db import models

from core.models import BaseModel


class KategoriKeuangan(BaseModel):
    # contoh: "A" = Penerimaan, "B" = Pengeluaran
    kode = models.CharField(max_length=10, unique=True)
    nama = models.CharField(max_length=100)
    is_active = models.BooleanField(default=True)

    class Meta:
        verbose_name = "Kategori Keuangan"
        verbose_name_plural = "Kategori Keuangan"
        ordering = ["kode"]

    def __str__(self):
        return f"{self.kode} - {self.nama}"

    def save(self, *args, **kwargs):
        self.kode = (self.kode or "").strip().upper()
        super().save(*args, **kwargs)
