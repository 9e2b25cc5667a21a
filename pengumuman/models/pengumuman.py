from django.conf import settings
from django.db import models
from django.utils import timezone

from core.models import BaseModel
from pengumuman.services.attachments import AttachmentsValidator


class StatusPengumuman(models.TextChoices):
    DRAFT = "DRAFT", "Draft"
    PUBLISHED = "PUBLISHED", "Dipublikasikan"
    ARCHIVED = "ARCHIVED", "Diarsipkan"


class PrioritasPengumuman(models.TextChoices):
    LOW = "LOW", "Rendah"
    MEDIUM = "MEDIUM", "Sedang"
    HIGH = "HIGH", "Tinggi"
    URGENT = "URGENT", "Mendesak"


class Pengumuman(BaseModel):
    judul = models.CharField(max_length=200)
    kategori = models.ForeignKey(
        "pengumuman.KategoriPengumuman",
        on_delete=models.PROTECT,
        related_name="pengumuman",
    )
    konten = models.TextField(blank=True, default="")
    tanggal_pengumuman = models.DateField(default=timezone.localdate, db_index=True)

    status = models.CharField(
        max_length=10,
        choices=StatusPengumuman.choices,
        default=StatusPengumuman.DRAFT,
    )
    prioritas = models.CharField(
        max_length=10,
        choices=PrioritasPengumuman.choices,
        default=PrioritasPengumuman.MEDIUM,
    )
    is_pinned = models.BooleanField(default=False)

    # [{fileName, fileType, base64Data}, ...]
    attachments = models.JSONField(default=list, blank=True, validators=[AttachmentsValidator()])

    published_at = models.DateTimeField(null=True, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="pengumuman_dibuat",
    )

    class Meta:
        verbose_name = "Pengumuman"
        verbose_name_plural = "Pengumuman"
        ordering = ["-is_pinned", "-tanggal_pengumuman", "-created_at"]
        indexes = [
            models.Index(fields=["status", "tanggal_pengumuman"], name="pengumuman_status_tgl_idx"),
        ]

    def __str__(self):
        return self.judul

    @property
    def attachment_count(self):
        return len(self.attachments or [])

    def save(self, *args, **kwargs):
        if self.status == StatusPengumuman.PUBLISHED and self.published_at is None:
            self.published_at = timezone.now()
        super().save(*args, **kwargs)
