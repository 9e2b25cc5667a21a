# jemaat/urls.py
from django.urls import path

from .api.views import (
    JemaatDetailView,
    JemaatListView,
    KeluargaDetailView,
    KeluargaListView,
    RayonListView,
)

app_name = "jemaat"

urlpatterns = [
    path("rayon", RayonListView.as_view(), name="rayon_list"),
    path("keluarga", KeluargaListView.as_view(), name="keluarga_list"),
    path("keluarga/<uuid:pk>", KeluargaDetailView.as_view(), name="keluarga_detail"),
    path("jemaat", JemaatListView.as_view(), name="jemaat_list"),
    path("jemaat/<uuid:pk>", JemaatDetailView.as_view(), name="jemaat_detail"),
]
