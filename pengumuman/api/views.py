# pengumuman/api/views.py
import logging

from django.db.models import Q
from django.shortcuts import get_object_or_404
from rest_framework.views import APIView

from account.roles import Capability, Role
from core.api import created, ok
from core.pagination import filter_value, paginate, parse_page_params
from pengumuman.api.serializers import (
    KategoriPengumumanSerializer,
    PengumumanListSerializer,
    PengumumanSerializer,
)
from pengumuman.models import KategoriPengumuman, Pengumuman, StatusPengumuman

logger = logging.getLogger(__name__)

PENGUMUMAN_CAPS = {
    "GET": Capability.VIEW_PENGUMUMAN,
    "POST": Capability.MANAGE_PENGUMUMAN,
    "PATCH": Capability.MANAGE_PENGUMUMAN,
    "DELETE": Capability.MANAGE_PENGUMUMAN,
}


def pengumuman_queryset(ctx):
    qs = Pengumuman.objects.select_related("kategori", "created_by")
    # jemaat hanya melihat yang sudah dipublikasikan
    if ctx.role == Role.JEMAAT:
        qs = qs.filter(status=StatusPengumuman.PUBLISHED)
    return qs


class KategoriPengumumanListView(APIView):
    required_capabilities = {
        "GET": Capability.VIEW_PENGUMUMAN,
        "POST": Capability.MANAGE_PENGUMUMAN,
    }

    def get(self, request):
        qs = KategoriPengumuman.objects.filter(is_active=True)
        return ok(KategoriPengumumanSerializer(qs, many=True).data)

    def post(self, request):
        ser = KategoriPengumumanSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        return created(KategoriPengumumanSerializer(ser.save()).data, "Kategori pengumuman berhasil ditambahkan")


class PengumumanListView(APIView):
    required_capabilities = PENGUMUMAN_CAPS

    def get(self, request):
        q = request.query_params
        qs = pengumuman_queryset(request.auth)

        search = (q.get("search") or "").strip()
        if search:
            qs = qs.filter(Q(judul__icontains=search) | Q(konten__icontains=search))
        kategori = filter_value(q, "kategoriId")
        if kategori:
            qs = qs.filter(kategori_id=kategori)
        status = filter_value(q, "status")
        if status:
            qs = qs.filter(status=status.upper())
        prioritas = filter_value(q, "prioritas")
        if prioritas:
            qs = qs.filter(prioritas=prioritas.upper())

        qs = qs.order_by("-is_pinned", "-tanggal_pengumuman", "-created_at")
        page, limit, _ = parse_page_params(q, default_limit=10)
        items, pagination = paginate(qs, page, limit)
        return ok(
            {"items": PengumumanListSerializer(items, many=True).data, "pagination": pagination},
            "Data pengumuman berhasil diambil",
        )

    def post(self, request):
        ser = PengumumanSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        obj = ser.save(created_by=request.user)
        logger.info("Pengumuman %s dibuat oleh %s (%s lampiran)", obj.pk, request.auth.username, obj.attachment_count)
        return created(PengumumanSerializer(obj).data, "Pengumuman berhasil dibuat")


class PengumumanDetailView(APIView):
    required_capabilities = PENGUMUMAN_CAPS

    def get_object(self, request, pk):
        return get_object_or_404(pengumuman_queryset(request.auth), pk=pk)

    def get(self, request, pk):
        return ok(PengumumanSerializer(self.get_object(request, pk)).data)

    def patch(self, request, pk):
        obj = self.get_object(request, pk)
        ser = PengumumanSerializer(obj, data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        obj = ser.save()
        return ok(PengumumanSerializer(obj).data, "Pengumuman berhasil diperbarui")

    def delete(self, request, pk):
        self.get_object(request, pk).delete()
        return ok(None, "Pengumuman berhasil dihapus")
