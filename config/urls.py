from django.contrib import admin
from django.urls import path, include

from core.api import health_view


urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/health", health_view, name="health"),
    path("api/auth/", include("account.urls", namespace="account")),
    path("api/keuangan/", include("keuangan.urls", namespace="keuangan")),
    path("api/", include("jemaat.urls", namespace="jemaat")),
    path("api/", include("ibadah.urls", namespace="ibadah")),
    path("api/", include("pengumuman.urls", namespace="pengumuman")),
]
