# keuangan/urls.py
from django.urls import path

from .api.views import (
    ItemDetailView,
    ItemListView,
    ItemTreeView,
    KategoriDetailView,
    KategoriListView,
    KeuanganDashboardView,
    PeriodeDetailView,
    PeriodeListView,
    PeriodePopulateView,
    RealisasiBulkView,
    RealisasiDetailView,
    RealisasiListView,
    RealisasiSummaryView,
)

app_name = "keuangan"

urlpatterns = [
    path("kategori", KategoriListView.as_view(), name="kategori_list"),
    path("kategori/<uuid:pk>", KategoriDetailView.as_view(), name="kategori_detail"),

    path("periode", PeriodeListView.as_view(), name="periode_list"),
    path("periode/<uuid:pk>", PeriodeDetailView.as_view(), name="periode_detail"),
    path("periode/<uuid:pk>/populate", PeriodePopulateView.as_view(), name="periode_populate"),

    path("item", ItemListView.as_view(), name="item_list"),
    path("item/tree", ItemTreeView.as_view(), name="item_tree"),
    path("item/<uuid:pk>", ItemDetailView.as_view(), name="item_detail"),

    path("realisasi", RealisasiListView.as_view(), name="realisasi_list"),
    path("realisasi/summary", RealisasiSummaryView.as_view(), name="realisasi_summary"),
    path("realisasi/bulk", RealisasiBulkView.as_view(), name="realisasi_bulk"),
    path("realisasi/<uuid:pk>", RealisasiDetailView.as_view(), name="realisasi_detail"),

    path("dashboard", KeuanganDashboardView.as_view(), name="dashboard"),
]
