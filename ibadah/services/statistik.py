# ibadah/services/statistik.py
from django.db.models import Count, IntegerField, Sum
from django.db.models.functions import Coalesce, ExtractMonth

BULAN = [
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
]


class KehadiranReportService:
    """
    Rekap kehadiran ibadah per bulan dalam satu tahun.
    Queryset dasar dikirim dari view (sudah di-scope sesuai user).
    """

    def get_queryset(self, base_qs, *, year, jenis_ibadah_id=None, rayon_id=None):
        qs = base_qs.filter(tanggal__year=year)
        if jenis_ibadah_id:
            qs = qs.filter(jenis_ibadah_id=jenis_ibadah_id)
        if rayon_id:
            qs = qs.filter(rayon_id=rayon_id)
        return qs

    def build(self, base_qs, *, year, **filters):
        qs = self.get_queryset(base_qs, year=year, **filters)

        rows = (
            qs.annotate(bulan=ExtractMonth("tanggal"))
            .values("bulan")
            .annotate(
                laki=Coalesce(Sum("jumlah_laki"), 0, output_field=IntegerField()),
                perempuan=Coalesce(Sum("jumlah_perempuan"), 0, output_field=IntegerField()),
                jumlah_jadwal=Count("id"),
            )
            .order_by("bulan")
        )
        by_month = {r["bulan"]: r for r in rows}

        bulanan = []
        for m in range(1, 13):
            r = by_month.get(m, {})
            laki = r.get("laki", 0)
            perempuan = r.get("perempuan", 0)
            bulanan.append({
                "bulan": m,
                "namaBulan": BULAN[m - 1],
                "laki": laki,
                "perempuan": perempuan,
                "total": laki + perempuan,
                "jumlahJadwal": r.get("jumlah_jadwal", 0),
            })

        per_jenis = (
            qs.values("jenis_ibadah__nama_ibadah")
            .annotate(
                laki=Coalesce(Sum("jumlah_laki"), 0, output_field=IntegerField()),
                perempuan=Coalesce(Sum("jumlah_perempuan"), 0, output_field=IntegerField()),
            )
            .order_by("jenis_ibadah__nama_ibadah")
        )

        total_laki = sum(b["laki"] for b in bulanan)
        total_perempuan = sum(b["perempuan"] for b in bulanan)
        return {
            "tahun": year,
            "bulanan": bulanan,
            "perJenis": [
                {
                    "name": r["jenis_ibadah__nama_ibadah"],
                    "value": r["laki"] + r["perempuan"],
                }
                for r in per_jenis
            ],
            "summary": {
                "totalLaki": total_laki,
                "totalPerempuan": total_perempuan,
                "totalHadir": total_laki + total_perempuan,
                "jumlahJadwal": sum(b["jumlahJadwal"] for b in bulanan),
                "maxKehadiran": max((b["total"] for b in bulanan), default=0),
            },
        }
