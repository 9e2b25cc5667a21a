# ibadah/urls.py
from django.urls import path

from .api.views import (
    JadwalIbadahDetailView,
    JadwalIbadahListView,
    JenisIbadahListView,
    PublicJadwalIbadahView,
    StatistikKehadiranView,
)

app_name = "ibadah"

urlpatterns = [
    path("jenis-ibadah", JenisIbadahListView.as_view(), name="jenis_list"),
    path("jadwal-ibadah", JadwalIbadahListView.as_view(), name="jadwal_list"),
    path("jadwal-ibadah/<uuid:pk>", JadwalIbadahDetailView.as_view(), name="jadwal_detail"),
    path("public/jadwal-ibadah", PublicJadwalIbadahView.as_view(), name="public_jadwal"),
    path("statistik/kehadiran", StatistikKehadiranView.as_view(), name="statistik_kehadiran"),
]
