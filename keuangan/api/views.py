# keuangan/api/views.py
import logging
from datetime import date
from decimal import Decimal

from django.db import transaction
from django.db.models import Count, Q
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.views import APIView

from account.roles import Capability
from core.api import created, fail, ok
from core.exceptions import BusinessRuleError, flatten_detail
from core.pagination import bounded_int, filter_value, paginate, parse_bool, parse_page_params
from core.utils.formatting import decimal_str
from keuangan.api.serializers import (
    ItemKeuanganCreateSerializer,
    ItemKeuanganSerializer,
    ItemKeuanganUpdateSerializer,
    ItemParentSerializer,
    KategoriKeuanganSerializer,
    PeriodeAnggaranSerializer,
    PeriodeRingkasSerializer,
    PopulateSerializer,
    RealisasiSerializer,
)
from keuangan.models import ItemKeuangan, KategoriKeuangan, PeriodeAnggaran, RealisasiItemKeuangan
from keuangan.services import items as item_service
from keuangan.services import periode as periode_service
from keuangan.services.summary import keuangan_dashboard, realisasi_summary
from keuangan.services.tree import OrphanPolicy, build_item_tree

logger = logging.getLogger(__name__)

KEUANGAN_CAPS = {
    "GET": Capability.VIEW_KEUANGAN,
    "POST": Capability.MANAGE_KEUANGAN,
    "PATCH": Capability.MANAGE_KEUANGAN,
    "DELETE": Capability.MANAGE_KEUANGAN,
}

PERIODE_MISMATCH = "Periode tidak sesuai dengan item keuangan"
BULK_EMPTY = "List realisasi wajib berisi array dengan minimal 1 item"


def _int_or_none(v):
    try:
        return int(v)
    except (TypeError, ValueError):
        return None


# =========================
# KATEGORI
# =========================

class KategoriListView(APIView):
    required_capabilities = KEUANGAN_CAPS

    def get(self, request):
        qs = KategoriKeuangan.objects.annotate(items_count=Count("items")).order_by("kode")
        search = (request.query_params.get("search") or "").strip()
        if search:
            qs = qs.filter(Q(nama__icontains=search) | Q(kode__icontains=search))
        active = parse_bool(request.query_params.get("isActive"))
        if active is not None:
            qs = qs.filter(is_active=active)
        return ok(KategoriKeuanganSerializer(qs, many=True).data)

    def post(self, request):
        ser = KategoriKeuanganSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        kategori = ser.save()
        return created(KategoriKeuanganSerializer(kategori).data, "Kategori keuangan berhasil dibuat")


class KategoriDetailView(APIView):
    required_capabilities = KEUANGAN_CAPS

    def get(self, request, pk):
        kategori = get_object_or_404(KategoriKeuangan.objects.annotate(items_count=Count("items")), pk=pk)
        return ok(KategoriKeuanganSerializer(kategori).data)

    def patch(self, request, pk):
        kategori = get_object_or_404(KategoriKeuangan, pk=pk)
        ser = KategoriKeuanganSerializer(kategori, data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        kategori = ser.save()
        return ok(KategoriKeuanganSerializer(kategori).data, "Kategori keuangan berhasil diperbarui")

    def delete(self, request, pk):
        kategori = get_object_or_404(KategoriKeuangan, pk=pk)
        if kategori.items.exists():
            return fail("Kategori tidak dapat dihapus karena masih memiliki item keuangan")
        kategori.delete()
        return ok(None, "Kategori keuangan berhasil dihapus")


# =========================
# PERIODE
# =========================

class PeriodeListView(APIView):
    required_capabilities = KEUANGAN_CAPS

    def get(self, request):
        q = request.query_params
        qs = PeriodeAnggaran.objects.annotate(items_count=Count("items"))

        search = (q.get("search") or "").strip()
        if search:
            qs = qs.filter(Q(nama__icontains=search) | Q(keterangan__icontains=search))
        tahun = _int_or_none(filter_value(q, "tahun"))
        if tahun:
            qs = qs.filter(tahun=tahun)
        status_ = filter_value(q, "status")
        if status_:
            qs = qs.filter(status=status_)

        qs = qs.order_by("-tahun", "-tanggal_mulai")
        page, limit, _ = parse_page_params(q, default_limit=10)
        items, pagination = paginate(qs, page, limit)
        return ok({
            "items": PeriodeAnggaranSerializer(items, many=True).data,
            "pagination": pagination,
        })

    def post(self, request):
        ser = PeriodeAnggaranSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        periode = periode_service.create_periode(**ser.validated_data)
        return created(PeriodeAnggaranSerializer(periode).data, "Periode anggaran berhasil dibuat")


class PeriodeDetailView(APIView):
    required_capabilities = KEUANGAN_CAPS

    def get(self, request, pk):
        periode = get_object_or_404(PeriodeAnggaran.objects.annotate(items_count=Count("items")), pk=pk)
        data = PeriodeAnggaranSerializer(periode).data
        data["jumlahRealisasi"] = periode.realisasi.count()
        return ok(data)

    def patch(self, request, pk):
        periode = get_object_or_404(PeriodeAnggaran, pk=pk)
        ser = PeriodeAnggaranSerializer(periode, data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        periode = periode_service.update_periode(periode, **ser.validated_data)
        return ok(PeriodeAnggaranSerializer(periode).data, "Periode anggaran berhasil diperbarui")

    def delete(self, request, pk):
        periode = get_object_or_404(PeriodeAnggaran, pk=pk)
        periode_service.delete_periode(periode)
        return ok(None, "Periode anggaran berhasil dihapus")


class PeriodePopulateView(APIView):
    """Salin struktur item dari periode lain (template) ke periode ini."""
    required_capabilities = {"POST": Capability.MANAGE_KEUANGAN}

    def post(self, request, pk):
        target = PeriodeAnggaran.objects.filter(pk=pk).first()
        if target is None:
            return fail("Periode anggaran tidak ditemukan", status=status.HTTP_404_NOT_FOUND)

        ser = PopulateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        source = PeriodeAnggaran.objects.filter(pk=ser.validated_data["sourcePeriodeId"]).first()
        if source is None:
            return fail("Periode sumber tidak ditemukan", status=status.HTTP_404_NOT_FOUND)

        count = periode_service.populate_from_periode(
            target, source, overwrite=ser.validated_data["overwrite"],
        )
        items = item_service.filter_items(item_service.item_queryset(), periode_id=target.pk)
        return created(
            {
                "periode": PeriodeRingkasSerializer(target).data,
                "jumlahItem": count,
                "tree": build_item_tree(ItemKeuanganSerializer(items, many=True).data),
            },
            f"Berhasil populate {count} item anggaran ke periode {target.nama}",
        )


# =========================
# ITEM
# =========================

def _item_filters(q):
    return {
        "search": (q.get("search") or "").strip() or None,
        "kategori_id": filter_value(q, "kategoriId"),
        "periode_id": filter_value(q, "periodeId"),
        "parent_id": (q.get("parentId") or "").strip() or None,
        "level": _int_or_none(filter_value(q, "level")),
    }


class ItemListView(APIView):
    required_capabilities = KEUANGAN_CAPS

    def get(self, request):
        q = request.query_params
        qs = item_service.filter_items(item_service.item_queryset(), **_item_filters(q))

        # tree view butuh seluruh item hasil filter, tanpa paging
        if parse_bool(q.get("includeTree"), False):
            data = ItemKeuanganSerializer(qs, many=True).data
            total = len(data)
            return ok({
                "items": data,
                "tree": build_item_tree(data),
                "pagination": {
                    "page": 1,
                    "limit": total,
                    "total": total,
                    "totalPages": 1 if total else 0,
                    "hasNext": False,
                    "hasPrev": False,
                },
            })

        page, limit, _ = parse_page_params(q, default_limit=100)
        items, pagination = paginate(qs, page, limit)
        return ok({
            "items": ItemKeuanganSerializer(items, many=True).data,
            "pagination": pagination,
        })

    def post(self, request):
        ser = ItemKeuanganCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        item = item_service.create_item(**ser.to_service_kwargs())
        item = item_service.item_queryset().get(pk=item.pk)
        return created(ItemKeuanganSerializer(item).data, "Item keuangan berhasil dibuat")


class ItemTreeView(APIView):
    """Pohon item untuk satu periode (opsional per kategori)."""
    required_capabilities = {"GET": Capability.VIEW_KEUANGAN}

    def get(self, request):
        q = request.query_params
        periode_id = filter_value(q, "periodeId")
        if not periode_id:
            return fail("Validasi gagal", {"periodeId": "Periode wajib dipilih"})

        try:
            policy = OrphanPolicy((q.get("orphans") or OrphanPolicy.DROP.value).lower())
        except ValueError:
            return fail("Validasi gagal", {"orphans": "Nilai harus 'drop' atau 'promote'"})

        qs = item_service.filter_items(
            item_service.item_queryset(),
            periode_id=periode_id,
            kategori_id=filter_value(q, "kategoriId"),
        )
        data = ItemKeuanganSerializer(qs, many=True).data
        return ok({
            "tree": build_item_tree(data, orphan_policy=policy),
            "totalItems": len(data),
        })


class ItemDetailView(APIView):
    required_capabilities = KEUANGAN_CAPS

    def get_object(self, pk):
        return get_object_or_404(item_service.item_queryset(), pk=pk)

    def get(self, request, pk):
        item = self.get_object(pk)
        data = ItemKeuanganSerializer(item).data
        data["periode"] = PeriodeRingkasSerializer(item.periode).data
        data["children"] = ItemParentSerializer(item.children.order_by("urutan"), many=True).data
        return ok(data)

    def patch(self, request, pk):
        item = self.get_object(pk)
        ser = ItemKeuanganUpdateSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        item_service.update_item(item, **ser.to_service_kwargs())
        return ok(ItemKeuanganSerializer(self.get_object(pk)).data, "Item keuangan berhasil diperbarui")

    def delete(self, request, pk):
        item_service.delete_item(self.get_object(pk))
        return ok(None, "Item keuangan berhasil dihapus")


# =========================
# REALISASI
# =========================

def _ensure_periode_matches(item, periode):
    if item.periode_id != periode.pk:
        raise BusinessRuleError(PERIODE_MISMATCH)


def realisasi_queryset():
    return RealisasiItemKeuangan.objects.select_related("item", "item__kategori", "periode")


class RealisasiListView(APIView):
    required_capabilities = KEUANGAN_CAPS

    def get(self, request):
        q = request.query_params
        qs = realisasi_queryset()

        item_id = filter_value(q, "itemKeuanganId")
        if item_id:
            qs = qs.filter(item_id=item_id)
        periode_id = filter_value(q, "periodeId")
        if periode_id:
            qs = qs.filter(periode_id=periode_id)
        kategori_id = filter_value(q, "kategoriId")
        if kategori_id:
            qs = qs.filter(item__kategori_id=kategori_id)
        mulai = filter_value(q, "tanggalMulai")
        if mulai:
            qs = qs.filter(tanggal_realisasi__gte=mulai)
        selesai = filter_value(q, "tanggalSelesai")
        if selesai:
            qs = qs.filter(tanggal_realisasi__lte=selesai)
        search = (q.get("search") or "").strip()
        if search:
            qs = qs.filter(Q(keterangan__icontains=search) | Q(item__nama__icontains=search))

        qs = qs.order_by("-tanggal_realisasi", "-created_at")
        page, limit, _ = parse_page_params(q, default_limit=50)
        items, pagination = paginate(qs, page, limit)
        return ok(
            {"realisasi": RealisasiSerializer(items, many=True).data, "pagination": pagination},
            "Data realisasi berhasil diambil",
        )

    def post(self, request):
        ser = RealisasiSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        _ensure_periode_matches(ser.validated_data["item"], ser.validated_data["periode"])
        realisasi = ser.save()
        logger.info(
            "Realisasi %s untuk item %s dicatat oleh %s",
            realisasi.total_realisasi, realisasi.item.kode, request.auth.username,
        )
        return created(RealisasiSerializer(realisasi).data, "Realisasi berhasil dicatat")


class RealisasiDetailView(APIView):
    required_capabilities = KEUANGAN_CAPS

    def get_object(self, pk):
        return get_object_or_404(realisasi_queryset(), pk=pk)

    def get(self, request, pk):
        return ok(RealisasiSerializer(self.get_object(pk)).data)

    def patch(self, request, pk):
        realisasi = self.get_object(pk)
        ser = RealisasiSerializer(realisasi, data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        _ensure_periode_matches(
            ser.validated_data.get("item", realisasi.item),
            ser.validated_data.get("periode", realisasi.periode),
        )
        realisasi = ser.save()
        return ok(RealisasiSerializer(realisasi).data, "Realisasi berhasil diperbarui")

    def delete(self, request, pk):
        self.get_object(pk).delete()
        return ok(None, "Realisasi berhasil dihapus")


class RealisasiSummaryView(APIView):
    required_capabilities = {"GET": Capability.VIEW_KEUANGAN}

    def get(self, request):
        q = request.query_params
        data = realisasi_summary(
            item_id=filter_value(q, "itemKeuanganId"),
            kategori_id=filter_value(q, "kategoriId"),
            periode_id=filter_value(q, "periodeId"),
            level=_int_or_none(filter_value(q, "level")),
            tanggal_mulai=filter_value(q, "tanggalMulai"),
            tanggal_selesai=filter_value(q, "tanggalSelesai"),
        )
        return ok(data, "Summary realisasi berhasil diambil")


class RealisasiBulkView(APIView):
    """
    POST {realisasiList: [...]} -> semua dibuat dalam satu transaksi.
    Satu item gagal validasi -> tidak ada yang disimpan, error dilaporkan per index.
    """
    required_capabilities = {"POST": Capability.MANAGE_KEUANGAN}

    def post(self, request):
        rows = request.data.get("realisasiList") if isinstance(request.data, dict) else None
        if not isinstance(rows, list) or not rows:
            return fail("Validasi gagal", {"realisasiList": BULK_EMPTY})

        ser = RealisasiSerializer(data=rows, many=True)
        if not ser.is_valid():
            errors = [
                {"index": i, "errors": flatten_detail(err)}
                for i, err in enumerate(ser.errors) if err
            ]
            return fail("Validasi gagal pada beberapa item", errors)

        mismatch = [
            {"index": i, "errors": {"periodeId": PERIODE_MISMATCH}}
            for i, row in enumerate(ser.validated_data)
            if row["item"].periode_id != row["periode"].pk
        ]
        if mismatch:
            return fail("Validasi gagal pada beberapa item", mismatch)

        with transaction.atomic():
            realisasi = ser.save()

        total = sum((r.total_realisasi for r in realisasi), Decimal("0"))
        logger.info(
            "%s realisasi (total %s) dicatat sekaligus oleh %s",
            len(realisasi), total, request.auth.username,
        )
        return created(
            {
                "created": RealisasiSerializer(realisasi, many=True).data,
                "summary": {"totalCreated": len(realisasi), "totalAmount": decimal_str(total)},
            },
            f"{len(realisasi)} realisasi berhasil dibuat",
        )


# =========================
# DASHBOARD
# =========================

class KeuanganDashboardView(APIView):
    required_capabilities = {"GET": Capability.VIEW_KEUANGAN}

    def get(self, request):
        q = request.query_params
        today = date.today()

        errors = {}
        tahun = today.year
        if filter_value(q, "tahun"):
            tahun = bounded_int(q.get("tahun"), 1, 9999)
            if tahun is None:
                errors["tahun"] = "Tahun harus antara 1 dan 9999"
        bulan = today.month
        if filter_value(q, "bulan"):
            bulan = bounded_int(q.get("bulan"), 1, 12)
            if bulan is None:
                errors["bulan"] = "Bulan harus antara 1 dan 12"
        if errors:
            return fail("Validasi gagal", errors)

        periode = None
        periode_id = filter_value(q, "periodeId")
        if periode_id:
            periode = get_object_or_404(PeriodeAnggaran, pk=periode_id)

        data = keuangan_dashboard(tahun=tahun, bulan=bulan, periode=periode)
        return ok(data, "Dashboard data berhasil diambil")
