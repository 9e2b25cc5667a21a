# jemaat/api/views.py
import logging
from datetime import date

from django.db.models import Count, Q
from django.shortcuts import get_object_or_404
from rest_framework.views import APIView

from account.roles import Capability
from core.api import created, fail, ok
from core.pagination import bounded_int, filter_value, paginate, parse_bool, parse_page_params
from jemaat.api.serializers import JemaatSerializer, KeluargaSerializer, RayonSerializer
from jemaat.models import Jemaat, Keluarga, Rayon
from jemaat.services.scoping import ensure_keluarga_in_scope, queryset_for_auth

logger = logging.getLogger(__name__)

JEMAAT_CAPS = {
    "GET": Capability.VIEW_JEMAAT,
    "POST": Capability.MANAGE_JEMAAT,
    "PATCH": Capability.MANAGE_JEMAAT,
    "DELETE": Capability.MANAGE_JEMAAT,
}

JEMAAT_SORT_FIELDS = {
    "nama": "nama",
    "tanggalLahir": "tanggal_lahir",
    "status": "status",
    "createdAt": "created_at",
}

MAX_AGE = 150

MAX_AGE = 150


def _multi(query, name):
    # ?status=AKTIF&status=KELUAR atau ?status=AKTIF
    values = [v for v in query.getlist(name) if v not in ("", "all")]
    return values or None


# =========================
# RAYON
# =========================

class RayonListView(APIView):
    required_capabilities = {
        "GET": Capability.VIEW_JEMAAT,
        "POST": Capability.MANAGE_USERS,
    }

    def get(self, request):
        qs = Rayon.objects.annotate(jumlah_keluarga=Count("keluarga")).order_by("nama_rayon")
        data = []
        for r in qs:
            row = RayonSerializer(r).data
            row["jumlahKeluarga"] = r.jumlah_keluarga
            data.append(row)
        return ok(data)

    def post(self, request):
        ser = RayonSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        rayon = ser.save()
        return created(RayonSerializer(rayon).data, "Rayon berhasil ditambahkan")


# =========================
# KELUARGA
# =========================

class KeluargaListView(APIView):
    required_capabilities = JEMAAT_CAPS

    def get(self, request):
        q = request.query_params
        qs = queryset_for_auth(
            Keluarga.objects.select_related("rayon").annotate(jumlah_anggota=Count("anggota")),
            request.auth,
        )

        search = (q.get("search") or "").strip()
        if search:
            qs = qs.filter(Q(no_kk__icontains=search) | Q(alamat__icontains=search))

        id_rayon = filter_value(q, "idRayon")
        if id_rayon:
            qs = qs.filter(rayon_id=id_rayon)

        page, limit, _ = parse_page_params(q, default_limit=50)
        items, pagination = paginate(qs, page, limit)
        return ok({
            "items": KeluargaSerializer(items, many=True).data,
            "pagination": pagination,
        })

    def post(self, request):
        ser = KeluargaSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        ctx = request.auth
        rayon = ser.validated_data["rayon"]
        if ctx.is_rayon_scoped and rayon.pk != ctx.rayon_id:
            return fail("Anda hanya dapat menambahkan keluarga dalam rayon yang Anda kelola", status=403)

        keluarga = ser.save()
        logger.info("Keluarga %s dibuat oleh %s", keluarga.no_kk, ctx.username)
        return created(KeluargaSerializer(keluarga).data)


class KeluargaDetailView(APIView):
    required_capabilities = JEMAAT_CAPS

    def get_object(self, request, pk):
        qs = queryset_for_auth(Keluarga.objects.select_related("rayon"), request.auth)
        return get_object_or_404(qs, pk=pk)

    def get(self, request, pk):
        keluarga = self.get_object(request, pk)
        data = KeluargaSerializer(keluarga).data
        data["anggota"] = JemaatSerializer(
            keluarga.anggota.order_by("status_dalam_keluarga", "tanggal_lahir"), many=True
        ).data
        return ok(data)

    def patch(self, request, pk):
        keluarga = self.get_object(request, pk)
        ser = KeluargaSerializer(keluarga, data=request.data, partial=True)
        ser.is_valid(raise_exception=True)

        ctx = request.auth
        rayon = ser.validated_data.get("rayon")
        if rayon is not None and ctx.is_rayon_scoped and rayon.pk != ctx.rayon_id:
            return fail("Anda hanya dapat memindahkan keluarga ke rayon yang Anda kelola", status=403)

        keluarga = ser.save()
        return ok(KeluargaSerializer(keluarga).data, "Data berhasil diperbarui")

    def delete(self, request, pk):
        keluarga = self.get_object(request, pk)
        if keluarga.anggota.exists():
            return fail("Keluarga tidak dapat dihapus karena masih memiliki anggota jemaat")
        keluarga.delete()
        return ok(None, "Data berhasil dihapus")


# =========================
# JEMAAT
# =========================

def filter_jemaat(qs, q, today=None):
    """
    Filter list jemaat dari query string (search, status, gender, umur, ...).
    """
    search = (q.get("search") or "").strip()
    if search:
        qs = qs.filter(Q(nama__icontains=search) | Q(keluarga__no_kk__icontains=search))

    jk = parse_bool(q.get("jenisKelamin"))
    if jk is not None:
        qs = qs.filter(jenis_kelamin=jk)

    status = _multi(q, "status")
    if status:
        qs = qs.filter(status__in=status)

    gol = _multi(q, "golonganDarah")
    if gol:
        qs = qs.filter(golongan_darah__in=gol)

    id_keluarga = filter_value(q, "idKeluarga")
    if id_keluarga:
        qs = qs.filter(keluarga_id=id_keluarga)

    id_rayon = filter_value(q, "idRayon")
    if id_rayon:
        qs = qs.filter(keluarga__rayon_id=id_rayon)

    lahir_from = filter_value(q, "tanggalLahirFrom")
    if lahir_from:
        qs = qs.filter(tanggal_lahir__gte=lahir_from)
    lahir_to = filter_value(q, "tanggalLahirTo")
    if lahir_to:
        qs = qs.filter(tanggal_lahir__lte=lahir_to)

    # umur dihitung kasar per tahun kelahiran
    year = (today or date.today()).year
    age_max = bounded_int(filter_value(q, "ageMax"), 0, MAX_AGE)
    if age_max is not None:
        qs = qs.filter(tanggal_lahir__gte=date(year - age_max, 1, 1))
    age_min = bounded_int(filter_value(q, "ageMin"), 0, MAX_AGE)
    if age_min is not None:
        qs = qs.filter(tanggal_lahir__lte=date(year - age_min, 12, 31))

    sort_by = JEMAAT_SORT_FIELDS.get(q.get("sortBy") or "nama", "nama")
    if (q.get("sortOrder") or "asc").lower() == "desc":
        sort_by = f"-{sort_by}"
    return qs.order_by(sort_by, "id")


class JemaatListView(APIView):
    required_capabilities = JEMAAT_CAPS

    def get(self, request):
        q = request.query_params
        qs = queryset_for_auth(
            Jemaat.objects.select_related("keluarga", "keluarga__rayon"),
            request.auth,
        )
        qs = filter_jemaat(qs, q)

        page, limit, _ = parse_page_params(q, default_limit=1000)
        items, pagination = paginate(qs, page, limit)
        return ok({
            "items": JemaatSerializer(items, many=True).data,
            "pagination": pagination,
        })

    def post(self, request):
        id_keluarga = request.data.get("idKeluarga")
        if id_keluarga and not Keluarga.objects.filter(pk=id_keluarga).exists():
            return fail("Keluarga tidak ditemukan", status=404)

        ser = JemaatSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        ensure_keluarga_in_scope(ser.validated_data["keluarga"], request.auth)

        jemaat = ser.save()
        logger.info("Jemaat %s ditambahkan oleh %s", jemaat.pk, request.auth.username)
        return created(JemaatSerializer(jemaat).data)


class JemaatDetailView(APIView):
    required_capabilities = JEMAAT_CAPS

    def get_object(self, request, pk):
        qs = queryset_for_auth(
            Jemaat.objects.select_related("keluarga", "keluarga__rayon"),
            request.auth,
        )
        return get_object_or_404(qs, pk=pk)

    def get(self, request, pk):
        return ok(JemaatSerializer(self.get_object(request, pk)).data)

    def patch(self, request, pk):
        jemaat = self.get_object(request, pk)
        ser = JemaatSerializer(jemaat, data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        if "keluarga" in ser.validated_data:
            ensure_keluarga_in_scope(ser.validated_data["keluarga"], request.auth)
        jemaat = ser.save()
        return ok(JemaatSerializer(jemaat).data, "Data berhasil diperbarui")

    def delete(self, request, pk):
        jemaat = self.get_object(request, pk)
        jemaat.delete()
        return ok(None, "Data berhasil dihapus")
