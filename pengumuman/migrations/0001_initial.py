import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

import pengumuman.services.attachments


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="KategoriPengumuman",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("nama", models.CharField(max_length=100, unique=True)),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={
                "verbose_name": "Kategori Pengumuman",
                "verbose_name_plural": "Kategori Pengumuman",
                "ordering": ["nama"],
            },
        ),
        migrations.CreateModel(
            name="Pengumuman",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("judul", models.CharField(max_length=200)),
                ("konten", models.TextField(blank=True, default="")),
                ("tanggal_pengumuman", models.DateField(db_index=True, default=django.utils.timezone.localdate)),
                ("status", models.CharField(
                    choices=[("DRAFT", "Draft"), ("PUBLISHED", "Dipublikasikan"), ("ARCHIVED", "Diarsipkan")],
                    default="DRAFT",
                    max_length=10,
                )),
                ("prioritas", models.CharField(
                    choices=[("LOW", "Rendah"), ("MEDIUM", "Sedang"), ("HIGH", "Tinggi"), ("URGENT", "Mendesak")],
                    default="MEDIUM",
                    max_length=10,
                )),
                ("is_pinned", models.BooleanField(default=False)),
                ("attachments", models.JSONField(
                    blank=True,
                    default=list,
                    validators=[pengumuman.services.attachments.AttachmentsValidator()],
                )),
                ("published_at", models.DateTimeField(blank=True, null=True)),
                ("kategori", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="pengumuman",
                    to="pengumuman.kategoripengumuman",
                )),
                ("created_by", models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name="pengumuman_dibuat",
                    to=settings.AUTH_USER_MODEL,
                )),
            ],
            options={
                "verbose_name": "Pengumuman",
                "verbose_name_plural": "Pengumuman",
                "ordering": ["-is_pinned", "-tanggal_pengumuman", "-created_at"],
                "indexes": [
                    models.Index(fields=["status", "tanggal_pengumuman"], name="pengumuman_status_tgl_idx"),
                ],
            },
        ),
    ]
