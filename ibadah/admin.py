from django.contrib import admin

from .models import JadwalIbadah, JenisIbadah


@admin.register(JenisIbadah)
class JenisIbadahAdmin(admin.ModelAdmin):
    list_display = ("nama_ibadah", "is_active")
    search_fields = ("nama_ibadah",)


@admin.register(JadwalIbadah)
class JadwalIbadahAdmin(admin.ModelAdmin):
    list_display = ("judul", "jenis_ibadah", "tanggal", "waktu_mulai", "rayon", "jumlah_laki", "jumlah_perempuan")
    list_filter = ("jenis_ibadah", "rayon")
    search_fields = ("judul", "tema", "firman")
    date_hierarchy = "tanggal"
    list_select_related = ("jenis_ibadah", "rayon")
