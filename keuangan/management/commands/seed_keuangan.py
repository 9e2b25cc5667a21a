from datetime import date
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from keuangan.models import ItemKeuangan, KategoriKeuangan, PeriodeAnggaran, StatusPeriode
from keuangan.services.periode import find_overlapping

KATEGORI = [
    ("A", "PENERIMAAN"),
    ("B", "PENGELUARAN"),
]

# (kategori, kode, nama, target_frekuensi, satuan, nominal_satuan, children)
ITEMS = [
    ("A", "A.1", "Persembahan Ibadah", None, None, None, [
        ("A.1.1", "Persembahan Ibadah Minggu", 52, "Minggu", "2500000", []),
        ("A.1.2", "Persembahan Ibadah Rayon", 48, "Kali", "500000", []),
    ]),
    ("A", "A.2", "Perpuluhan", 12, "Bulan", "15000000", []),
    ("A", "A.3", "Persembahan Khusus", None, None, None, [
        ("A.3.1", "Persembahan Natal", 1, "Kali", "20000000", []),
        ("A.3.2", "Persembahan Paskah", 1, "Kali", "10000000", []),
        ("A.3.3", "Persembahan Syukur", None, None, None, [
            ("A.3.3.1", "Syukur Ulang Tahun", 100, "Kali", "250000", []),
            ("A.3.3.2", "Syukur Pernikahan", 10, "Kali", "1000000", []),
        ]),
    ]),
    ("B", "B.1", "Belanja Pegawai", None, None, None, [
        ("B.1.1", "Honor Pendeta", 12, "Bulan", "6000000", []),
        ("B.1.2", "Honor Pegawai Kantor", 12, "Bulan", "3500000", []),
    ]),
    ("B", "B.2", "Operasional Gedung", None, None, None, [
        ("B.2.1", "Listrik", 12, "Bulan", "1500000", []),
        ("B.2.2", "Air", 12, "Bulan", "300000", []),
        ("B.2.3", "Kebersihan", 12, "Bulan", "750000", []),
    ]),
    ("B", "B.3", "Pelayanan & Diakonia", 12, "Bulan", "2000000", []),
]


class Command(BaseCommand):
    help = "Seed kategori, periode & item keuangan (hierarkis) untuk demo"

    def add_arguments(self, parser):
        parser.add_argument("--tahun", type=int, default=date.today().year)

    @transaction.atomic
    def handle(self, *args, **options):
        tahun = options["tahun"]

        kategori = {}
        for kode, nama in KATEGORI:
            kategori[kode], _ = KategoriKeuangan.objects.update_or_create(
                kode=kode, defaults={"nama": nama, "is_active": True},
            )

        mulai, akhir = date(tahun, 1, 1), date(tahun, 12, 31)
        periode = PeriodeAnggaran.objects.filter(tahun=tahun, tanggal_mulai=mulai).first()
        if periode is None:
            if find_overlapping(mulai, akhir):
                self.stderr.write(self.style.ERROR(f"Sudah ada periode lain di tahun {tahun}"))
                return
            periode = PeriodeAnggaran.objects.create(
                nama=f"Anggaran {tahun}",
                tahun=tahun,
                tanggal_mulai=mulai,
                tanggal_akhir=akhir,
                status=StatusPeriode.ACTIVE,
            )

        self.created = 0
        self.updated = 0
        for i, (kat, kode, nama, frek, satuan, nominal, children) in enumerate(ITEMS, start=1):
            urutan = sum(1 for row in ITEMS[:i] if row[0] == kat)
            self._upsert(kategori[kat], periode, None, kode, nama, frek, satuan, nominal, children, urutan)

        self.stdout.write(self.style.SUCCESS(
            f"Keuangan seed done. periode={periode.nama}, created={self.created}, updated={self.updated}"
        ))

    def _upsert(self, kategori, periode, parent, kode, nama, frek, satuan, nominal, children, urutan):
        nominal = Decimal(nominal) if nominal else None
        total = nominal * frek if nominal is not None and frek else None

        item, is_created = ItemKeuangan.objects.update_or_create(
            kategori=kategori,
            periode=periode,
            kode=kode,
            defaults={
                "parent": parent,
                "nama": nama,
                "level": parent.level + 1 if parent else 1,
                "urutan": urutan,
                "target_frekuensi": frek,
                "satuan_frekuensi": satuan,
                "nominal_satuan": nominal,
                "total_target": total,
                "is_active": True,
            },
        )
        if is_created:
            self.created += 1
        else:
            self.updated += 1

        for n, (c_kode, c_nama, c_frek, c_satuan, c_nominal, c_children) in enumerate(children, start=1):
            self._upsert(kategori, periode, item, c_kode, c_nama, c_frek, c_satuan, c_nominal, c_children, n)
