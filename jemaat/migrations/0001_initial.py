import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Rayon",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("nama_rayon", models.CharField(max_length=100, unique=True)),
            ],
            options={
                "ordering": ["nama_rayon"],
            },
        ),
        migrations.CreateModel(
            name="Keluarga",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("no_kk", models.CharField(max_length=32, unique=True, verbose_name="No. KK")),
                ("no_bagungan", models.PositiveIntegerField(blank=True, null=True)),
                ("status_keluarga", models.CharField(
                    choices=[
                        ("UTUH", "Keluarga Utuh"),
                        ("JANDA", "Janda"),
                        ("DUDA", "Duda"),
                        ("SINGLE_PARENT", "Single Parent"),
                    ],
                    default="UTUH",
                    max_length=20,
                )),
                ("alamat", models.CharField(blank=True, default="", max_length=255)),
                ("rt", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("rw", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("rayon", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="keluarga",
                    to="jemaat.rayon",
                )),
            ],
            options={
                "ordering": ["rayon__nama_rayon", "no_bagungan", "no_kk"],
                "indexes": [models.Index(fields=["rayon", "no_bagungan"], name="keluarga_rayon_bagungan_idx")],
            },
        ),
        migrations.CreateModel(
            name="Jemaat",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("nama", models.CharField(max_length=150)),
                ("jenis_kelamin", models.BooleanField(default=True)),
                ("tanggal_lahir", models.DateField(blank=True, null=True)),
                ("golongan_darah", models.CharField(
                    blank=True,
                    choices=[("A", "A"), ("B", "B"), ("AB", "Ab"), ("O", "O")],
                    max_length=2,
                    null=True,
                )),
                ("status_dalam_keluarga", models.CharField(
                    choices=[
                        ("KEPALA", "Kepala Keluarga"),
                        ("ISTRI", "Istri"),
                        ("ANAK", "Anak"),
                        ("LAINNYA", "Lainnya"),
                    ],
                    default="ANAK",
                    max_length=10,
                )),
                ("status", models.CharField(
                    choices=[("AKTIF", "Aktif"), ("TIDAK_AKTIF", "Tidak Aktif"), ("KELUAR", "Keluar")],
                    db_index=True,
                    default="AKTIF",
                    max_length=12,
                )),
                ("keluarga", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="anggota",
                    to="jemaat.keluarga",
                )),
            ],
            options={
                "verbose_name_plural": "Jemaat",
                "ordering": ["nama"],
                "indexes": [
                    models.Index(fields=["keluarga", "status_dalam_keluarga"], name="jemaat_keluarga_status_idx"),
                ],
            },
        ),
    ]
