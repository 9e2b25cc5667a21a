import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("jemaat", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="JenisIbadah",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("nama_ibadah", models.CharField(max_length=100, unique=True)),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={
                "verbose_name": "Jenis Ibadah",
                "verbose_name_plural": "Jenis Ibadah",
                "ordering": ["nama_ibadah"],
            },
        ),
        migrations.CreateModel(
            name="JadwalIbadah",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("judul", models.CharField(max_length=200)),
                ("tanggal", models.DateField(db_index=True)),
                ("waktu_mulai", models.TimeField(blank=True, null=True)),
                ("waktu_selesai", models.TimeField(blank=True, null=True)),
                ("lokasi", models.CharField(blank=True, default="", max_length=200)),
                ("tema", models.CharField(blank=True, max_length=255, null=True)),
                ("firman", models.CharField(blank=True, max_length=255, null=True)),
                ("jumlah_laki", models.PositiveIntegerField(blank=True, null=True)),
                ("jumlah_perempuan", models.PositiveIntegerField(blank=True, null=True)),
                ("keterangan", models.TextField(blank=True, null=True)),
                ("jenis_ibadah", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="jadwal",
                    to="ibadah.jenisibadah",
                )),
                ("rayon", models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name="jadwal_ibadah",
                    to="jemaat.rayon",
                )),
                ("keluarga", models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name="jadwal_ibadah",
                    to="jemaat.keluarga",
                )),
            ],
            options={
                "verbose_name": "Jadwal Ibadah",
                "verbose_name_plural": "Jadwal Ibadah",
                "ordering": ["-tanggal", "-waktu_mulai"],
            },
        ),
    ]
