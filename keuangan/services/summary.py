# keuangan/services/summary.py
from decimal import ROUND_HALF_UP, Decimal

from django.db.models import Count, Prefetch, Q, Sum

from core.utils.formatting import decimal_str, to_decimal
from keuangan.models import (
    ItemKeuangan,
    KategoriKeuangan,
    PeriodeAnggaran,
    RealisasiItemKeuangan,
    StatusPeriode,
)

RECENT_LIMIT = 5
TOP_ITEMS_LIMIT = 5

# kode kategori
PENERIMAAN = "A"
PENGELUARAN = "B"

NO_ACTIVE_PERIODE = "Tidak ada periode aktif"


def _dec(value):
    return to_decimal(value) or Decimal("0")


def achievement_percentage(realisasi, target):
    """realisasi / target * 100, dibulatkan 2 desimal. Target 0 -> 0."""
    if target <= 0:
        return 0.0
    pct = (realisasi / target * 100).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return float(pct)


def realisasi_filter(*, periode_id=None, tanggal_mulai=None, tanggal_selesai=None, by_item=False):
    f = {}
    # filter periode di realisasi hanya kalau tidak minta item tertentu
    if periode_id and not by_item:
        f["periode_id"] = periode_id
    if tanggal_mulai:
        f["tanggal_realisasi__gte"] = tanggal_mulai
    if tanggal_selesai:
        f["tanggal_realisasi__lte"] = tanggal_selesai
    return f


def item_summary(item, realisasi_list):
    total = sum((_dec(r.total_realisasi) for r in realisasi_list), Decimal("0"))
    frek = len(realisasi_list)
    target = _dec(item.total_target)
    target_frek = item.target_frekuensi or 0
    pct = achievement_percentage(total, target)

    return {
        "id": str(item.pk),
        "kode": item.kode,
        "nama": item.nama,
        "level": item.level,
        "deskripsi": item.deskripsi,
        "kategori": {"id": str(item.kategori_id), "nama": item.kategori.nama, "kode": item.kategori.kode},
        "periode": {"id": str(item.periode_id), "nama": item.periode.nama, "tahun": item.periode.tahun},
        "targetFrekuensi": item.target_frekuensi,
        "satuanFrekuensi": item.satuan_frekuensi,
        "nominalSatuan": decimal_str(item.nominal_satuan),
        "totalTarget": decimal_str(item.total_target),
        "jumlahRealisasi": frek,
        "totalFrekuensiActual": frek,
        "totalRealisasiAmount": decimal_str(total),
        "varianceAmount": decimal_str(total - target),
        "varianceFrekuensi": frek - target_frek,
        "variancePercentage": pct,
        "achievementPercentage": pct,
        "isTargetAchieved": total >= target,
        "recentRealisasi": [
            {
                "id": str(r.pk),
                "tanggalRealisasi": r.tanggal_realisasi.isoformat(),
                "totalRealisasi": decimal_str(r.total_realisasi),
                "keterangan": r.keterangan,
            }
            for r in realisasi_list[:RECENT_LIMIT]
        ],
    }


def realisasi_summary(*, item_id=None, kategori_id=None, periode_id=None, level=None,
                      tanggal_mulai=None, tanggal_selesai=None):
    """
    Ringkasan realisasi vs target per item + total keseluruhan.
    Kalau item_id diisi, filter kategori/periode/level diabaikan.
    """
    items = ItemKeuangan.objects.filter(is_active=True)
    if item_id:
        items = items.filter(pk=item_id)
    else:
        if kategori_id:
            items = items.filter(kategori_id=kategori_id)
        if periode_id:
            items = items.filter(periode_id=periode_id)
        if level is not None:
            items = items.filter(level=level)

    real_qs = RealisasiItemKeuangan.objects.filter(
        **realisasi_filter(
            periode_id=periode_id,
            tanggal_mulai=tanggal_mulai,
            tanggal_selesai=tanggal_selesai,
            by_item=bool(item_id),
        )
    ).order_by("-tanggal_realisasi", "-created_at")

    items = (
        items
        .select_related("kategori", "periode")
        .prefetch_related(Prefetch("realisasi", queryset=real_qs, to_attr="realisasi_terfilter"))
        .order_by("kategori__kode", "level", "urutan", "kode")
    )

    rows = [item_summary(item, item.realisasi_terfilter) for item in items]

    total_target = sum((_dec(r["totalTarget"]) for r in rows), Decimal("0"))
    total_real = sum((_dec(r["totalRealisasiAmount"]) for r in rows), Decimal("0"))
    summary = {
        "totalItems": len(rows),
        "totalTargetAmount": decimal_str(total_target),
        "totalRealisasiAmount": decimal_str(total_real),
        "totalVarianceAmount": decimal_str(total_real - total_target),
        "itemsWithRealisasi": sum(1 for r in rows if r["jumlahRealisasi"] > 0),
        "itemsTargetAchieved": sum(1 for r in rows if r["isTargetAchieved"]),
    }
    return {"items": rows, "summary": summary}


# =========================
# DASHBOARD
# =========================

def latest_active_periode():
    """Periode ACTIVE + is_active yang paling baru dibuat (None kalau tidak ada)."""
    return (
        PeriodeAnggaran.objects
        .filter(status=StatusPeriode.ACTIVE, is_active=True)
        .order_by("-created_at")
        .first()
    )


def _kategori_totals(real_qs, kode, tahun, bulan):
    in_year = Q(item__kategori__kode=kode, tanggal_realisasi__year=tahun)
    in_month = in_year & Q(tanggal_realisasi__month=bulan)
    agg = real_qs.aggregate(
        bulan=Sum("total_realisasi", filter=in_month),
        tahun=Sum("total_realisasi", filter=in_year),
        transaksi_bulan=Count("id", filter=in_month),
        transaksi_tahun=Count("id", filter=in_year),
    )
    return {
        "bulan": _dec(agg["bulan"]),
        "tahun": _dec(agg["tahun"]),
        "jumlahTransaksiBulan": agg["transaksi_bulan"],
        "jumlahTransaksi": agg["transaksi_tahun"],
    }


def _as_json(totals):
    return {k: decimal_str(v) if isinstance(v, Decimal) else v for k, v in totals.items()}


def top_items(periode, limit=TOP_ITEMS_LIMIT):
    """Item dengan realisasi terbesar di satu periode (nominalActual = jumlah realisasi)."""
    items = (
        ItemKeuangan.objects
        .filter(periode=periode, is_active=True)
        .select_related("kategori")
        .annotate(nominal=Sum("realisasi__total_realisasi"), transaksi=Count("realisasi"))
        .filter(transaksi__gt=0)
        .order_by("-nominal", "kode")[:limit]
    )
    return [
        {
            "id": str(item.pk),
            "kode": item.kode,
            "nama": item.nama,
            "kategori": item.kategori.nama,
            "jenis": "penerimaan" if item.kategori.kode == PENERIMAAN else "pengeluaran",
            "nominalActual": decimal_str(item.nominal),
            "jumlahTransaksi": item.transaksi,
            "totalTarget": decimal_str(item.total_target),
        }
        for item in items
    ]


def keuangan_dashboard(*, tahun, bulan, periode=None):
    """
    Ringkasan dashboard keuangan untuk satu periode:
    penerimaan (kategori A) & pengeluaran (kategori B) bulan/tahun berjalan,
    saldo, capaian anggaran penerimaan dan item teratas.
    periode=None -> periode aktif terbaru.
    """
    if periode is None:
        periode = latest_active_periode()

    if periode is None:
        real_qs = RealisasiItemKeuangan.objects.none()
    else:
        real_qs = RealisasiItemKeuangan.objects.filter(periode=periode)

    masuk = _kategori_totals(real_qs, PENERIMAAN, tahun, bulan)
    keluar = _kategori_totals(real_qs, PENGELUARAN, tahun, bulan)

    target = Decimal("0")
    realisasi = Decimal("0")
    if periode is not None:
        target = _dec(
            ItemKeuangan.objects
            .filter(periode=periode, kategori__kode=PENERIMAAN, level=1, is_active=True)
            .aggregate(total=Sum("total_target"))["total"]
        )
        realisasi = _dec(
            real_qs.filter(item__kategori__kode=PENERIMAAN).aggregate(total=Sum("total_realisasi"))["total"]
        )

    return {
        "filter": {
            "tahun": tahun,
            "bulan": bulan,
            "periode": periode.nama if periode else NO_ACTIVE_PERIODE,
            "periodeId": str(periode.pk) if periode else None,
        },
        "stats": {
            "totalPenerimaan": _as_json(masuk),
            "totalPengeluaran": _as_json(keluar),
            "saldo": {
                "bulan": decimal_str(masuk["bulan"] - keluar["bulan"]),
                "tahun": decimal_str(masuk["tahun"] - keluar["tahun"]),
            },
            "anggaran": {
                "target": decimal_str(target),
                "realisasi": decimal_str(realisasi),
                "persentase": achievement_percentage(realisasi, target),
            },
        },
        "topItems": top_items(periode) if periode else [],
        "systemCounts": {
            "kategori": KategoriKeuangan.objects.filter(is_active=True).count(),
            "item": ItemKeuangan.objects.filter(is_active=True).count(),
            "periode": PeriodeAnggaran.objects.filter(is_active=True).count(),
        },
    }
