from django.contrib import admin

from .models import Jemaat, Keluarga, Rayon


class JemaatInline(admin.TabularInline):
    model = Jemaat
    extra = 0
    fields = ("nama", "jenis_kelamin", "tanggal_lahir", "status_dalam_keluarga", "status")


@admin.register(Rayon)
class RayonAdmin(admin.ModelAdmin):
    list_display = ("nama_rayon", "created_at")
    search_fields = ("nama_rayon",)


@admin.register(Keluarga)
class KeluargaAdmin(admin.ModelAdmin):
    list_display = ("no_kk", "no_bagungan", "rayon", "status_keluarga")
    list_filter = ("rayon", "status_keluarga")
    search_fields = ("no_kk", "alamat")
    inlines = [JemaatInline]


@admin.register(Jemaat)
class JemaatAdmin(admin.ModelAdmin):
    list_display = ("nama", "jenis_kelamin", "tanggal_lahir", "status", "keluarga")
    list_filter = ("status", "jenis_kelamin", "golongan_darah", "keluarga__rayon")
    search_fields = ("nama", "keluarga__no_kk")
    autocomplete_fields = ("keluarga",)
