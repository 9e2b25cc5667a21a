# ibadah/api/views.py
import logging
from datetime import date

from django.shortcuts import get_object_or_404
from rest_framework.permissions import AllowAny
from rest_framework.views import APIView

from account.roles import Capability
from core.api import created, fail, ok
from core.pagination import bounded_int, filter_value, paginate, parse_bool, parse_page_params
from ibadah.api.serializers import JadwalIbadahSerializer, JenisIbadahSerializer, public_jadwal
from ibadah.models import JadwalIbadah, JenisIbadah
from ibadah.services.statistik import KehadiranReportService
from jemaat.services.scoping import queryset_for_auth

logger = logging.getLogger(__name__)

JADWAL_CAPS = {
    "GET": Capability.VIEW_JADWAL,
    "POST": Capability.MANAGE_JADWAL,
    "PATCH": Capability.MANAGE_JADWAL,
    "DELETE": Capability.MANAGE_JADWAL,
}

PUBLIC_MAX_LIMIT = 50


def _int_or_none(v):
    try:
        return int(v)
    except (TypeError, ValueError):
        return None


def jadwal_queryset(ctx):
    qs = JadwalIbadah.objects.select_related("jenis_ibadah", "rayon", "keluarga", "keluarga__rayon")
    return queryset_for_auth(qs, ctx)


def _check_rayon_scope(ctx, validated):
    """MAJELIS hanya boleh membuat / memindah jadwal ke rayon-nya."""
    if not ctx.is_rayon_scoped:
        return None
    rayon = validated.get("rayon")
    keluarga = validated.get("keluarga")
    if rayon is not None and rayon.pk != ctx.rayon_id:
        return "Anda hanya dapat mengelola jadwal di rayon yang Anda kelola"
    if keluarga is not None and keluarga.rayon_id != ctx.rayon_id:
        return "Anda hanya dapat mengelola jadwal keluarga di rayon yang Anda kelola"
    return None


class JenisIbadahListView(APIView):
    required_capabilities = {"GET": Capability.VIEW_JADWAL}

    def get(self, request):
        qs = JenisIbadah.objects.filter(is_active=True).order_by("nama_ibadah")
        return ok(JenisIbadahSerializer(qs, many=True).data)


class JadwalIbadahListView(APIView):
    required_capabilities = JADWAL_CAPS

    def get(self, request):
        q = request.query_params
        qs = jadwal_queryset(request.auth)

        search = (q.get("search") or "").strip()
        if search:
            qs = qs.filter(judul__icontains=search)
        rayon = filter_value(q, "rayon")
        if rayon:
            qs = qs.filter(rayon_id=rayon)
        jenis = filter_value(q, "idJenisIbadah")
        if jenis:
            qs = qs.filter(jenis_ibadah_id=jenis)
        year = bounded_int(filter_value(q, "year"), 1, 9999)
        if year:
            qs = qs.filter(tanggal__year=year)
        month = bounded_int(filter_value(q, "month"), 1, 12)
        if month:
            qs = qs.filter(tanggal__month=month)

        page, limit, _ = parse_page_params(q, default_limit=10)
        items, pagination = paginate(qs.order_by("-tanggal", "-waktu_mulai"), page, limit)
        return ok({
            "items": JadwalIbadahSerializer(items, many=True).data,
            "pagination": pagination,
        })

    def post(self, request):
        ser = JadwalIbadahSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        denied = _check_rayon_scope(request.auth, ser.validated_data)
        if denied:
            return fail(denied, status=403)

        jadwal = ser.save()
        logger.info("Jadwal ibadah %s dibuat oleh %s", jadwal.pk, request.auth.username)
        return created(JadwalIbadahSerializer(jadwal).data, "Jadwal ibadah berhasil dibuat")


class JadwalIbadahDetailView(APIView):
    required_capabilities = JADWAL_CAPS

    def get_object(self, request, pk):
        return get_object_or_404(jadwal_queryset(request.auth), pk=pk)

    def get(self, request, pk):
        return ok(JadwalIbadahSerializer(self.get_object(request, pk)).data)

    def patch(self, request, pk):
        jadwal = self.get_object(request, pk)
        ser = JadwalIbadahSerializer(jadwal, data=request.data, partial=True)
        ser.is_valid(raise_exception=True)

        denied = _check_rayon_scope(request.auth, ser.validated_data)
        if denied:
            return fail(denied, status=403)

        jadwal = ser.save()
        return ok(JadwalIbadahSerializer(jadwal).data, "Jadwal ibadah berhasil diperbarui")

    def delete(self, request, pk):
        self.get_object(request, pk).delete()
        return ok(None, "Jadwal ibadah berhasil dihapus")


class PublicJadwalIbadahView(APIView):
    """Jadwal ibadah untuk website publik: tanpa login, hanya GET."""
    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        q = request.query_params
        limit = min(_int_or_none(q.get("limit")) or 10, PUBLIC_MAX_LIMIT)

        qs = JadwalIbadah.objects.select_related("jenis_ibadah", "rayon", "keluarga__rayon")
        if parse_bool(q.get("upcoming"), True):
            qs = qs.filter(tanggal__gte=date.today())
        jenis = filter_value(q, "jenisIbadah")
        if jenis:
            qs = qs.filter(jenis_ibadah__nama_ibadah__iexact=jenis)

        qs = qs.order_by("tanggal", "waktu_mulai")[:limit]
        return ok({
            "schedules": [public_jadwal(j) for j in qs],
            "jenisIbadah": JenisIbadahSerializer(
                JenisIbadah.objects.filter(is_active=True).order_by("nama_ibadah"), many=True,
            ).data,
        })


class StatistikKehadiranView(APIView):
    required_capabilities = {"GET": Capability.VIEW_JADWAL}

    def get(self, request):
        q = request.query_params
        year = date.today().year
        if filter_value(q, "year"):
            year = bounded_int(q.get("year"), 1, 9999)
            if year is None:
                return fail("Validasi gagal", {"year": "Tahun harus antara 1 dan 9999"})
        data = KehadiranReportService().build(
            jadwal_queryset(request.auth),
            year=year,
            jenis_ibadah_id=filter_value(q, "idJenisIbadah"),
            rayon_id=filter_value(q, "idRayon"),
        )
        return ok(data, "Statistik kehadiran berhasil diambil")
