# pengumuman/urls.py
from django.urls import path

from .api.views import KategoriPengumumanListView, PengumumanDetailView, PengumumanListView

app_name = "pengumuman"

urlpatterns = [
    path("kategori-pengumuman", KategoriPengumumanListView.as_view(), name="kategori_list"),
    path("pengumuman", PengumumanListView.as_view(), name="list"),
    path("pengumuman/<uuid:pk>", PengumumanDetailView.as_view(), name="detail"),
]
