import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="KategoriKeuangan",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("kode", models.CharField(max_length=10, unique=True)),
                ("nama", models.CharField(max_length=100)),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={
                "verbose_name": "Kategori Keuangan",
                "verbose_name_plural": "Kategori Keuangan",
                "ordering": ["kode"],
            },
        ),
        migrations.CreateModel(
            name="PeriodeAnggaran",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("nama", models.CharField(max_length=100)),
                ("tahun", models.PositiveIntegerField(db_index=True)),
                ("tanggal_mulai", models.DateField()),
                ("tanggal_akhir", models.DateField()),
                ("keterangan", models.TextField(blank=True, null=True)),
                ("status", models.CharField(
                    choices=[("DRAFT", "Draft"), ("ACTIVE", "Aktif"), ("CLOSED", "Ditutup")],
                    default="DRAFT",
                    max_length=10,
                )),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={
                "verbose_name": "Periode Anggaran",
                "verbose_name_plural": "Periode Anggaran",
                "ordering": ["-tahun", "-tanggal_mulai"],
            },
        ),
        migrations.CreateModel(
            name="ItemKeuangan",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("kode", models.CharField(max_length=50)),
                ("nama", models.CharField(max_length=200)),
                ("deskripsi", models.TextField(blank=True, null=True)),
                ("level", models.PositiveSmallIntegerField(default=1)),
                ("urutan", models.PositiveIntegerField(default=1)),
                ("target_frekuensi", models.PositiveIntegerField(blank=True, null=True)),
                ("satuan_frekuensi", models.CharField(blank=True, max_length=50, null=True)),
                ("nominal_satuan", models.DecimalField(blank=True, decimal_places=2, max_digits=18, null=True)),
                ("total_target", models.DecimalField(blank=True, decimal_places=2, max_digits=18, null=True)),
                ("nominal_actual", models.DecimalField(decimal_places=2, default=0, max_digits=18)),
                ("jumlah_transaksi", models.PositiveIntegerField(default=0)),
                ("keterangan", models.TextField(blank=True, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("kategori", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="items",
                    to="keuangan.kategorikeuangan",
                )),
                ("periode", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="items",
                    to="keuangan.periodeanggaran",
                )),
                ("parent", models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="children",
                    to="keuangan.itemkeuangan",
                )),
            ],
            options={
                "verbose_name": "Item Keuangan",
                "verbose_name_plural": "Item Keuangan",
                "ordering": ["kategori__kode", "level", "urutan", "kode"],
                "indexes": [
                    models.Index(fields=["periode", "kategori", "parent"], name="item_periode_kategori_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("kategori", "periode", "kode"),
                        name="uniq_item_kode_per_kategori_periode",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="RealisasiItemKeuangan",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("tanggal_realisasi", models.DateField(db_index=True)),
                ("total_realisasi", models.DecimalField(decimal_places=2, max_digits=18)),
                ("keterangan", models.TextField(blank=True, null=True)),
                ("item", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="realisasi",
                    to="keuangan.itemkeuangan",
                )),
                ("periode", models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="realisasi",
                    to="keuangan.periodeanggaran",
                )),
            ],
            options={
                "verbose_name": "Realisasi Item Keuangan",
                "verbose_name_plural": "Realisasi Item Keuangan",
                "ordering": ["-tanggal_realisasi", "-created_at"],
            },
        ),
    ]
