from django.contrib import admin

from core.utils.formatting import format_rupiah
from .models import ItemKeuangan, KategoriKeuangan, PeriodeAnggaran, RealisasiItemKeuangan


@admin.register(KategoriKeuangan)
class KategoriKeuanganAdmin(admin.ModelAdmin):
    list_display = ("kode", "nama", "is_active")
    list_filter = ("is_active",)
    search_fields = ("kode", "nama")


@admin.register(PeriodeAnggaran)
class PeriodeAnggaranAdmin(admin.ModelAdmin):
    list_display = ("nama", "tahun", "tanggal_mulai", "tanggal_akhir", "status", "is_active")
    list_filter = ("status", "tahun", "is_active")
    search_fields = ("nama",)


@admin.register(ItemKeuangan)
class ItemKeuanganAdmin(admin.ModelAdmin):
    list_display = ("kode", "nama", "kategori", "periode", "level", "urutan", "target_rp", "is_active")
    list_filter = ("periode", "kategori", "level", "is_active")
    search_fields = ("kode", "nama")
    autocomplete_fields = ("parent",)
    list_select_related = ("kategori", "periode")

    @admin.display(description="Total Target", ordering="total_target")
    def target_rp(self, obj):
        return format_rupiah(obj.total_target)


@admin.register(RealisasiItemKeuangan)
class RealisasiItemKeuanganAdmin(admin.ModelAdmin):
    list_display = ("tanggal_realisasi", "item", "periode", "realisasi_rp")
    list_filter = ("periode",)
    search_fields = ("item__kode", "item__nama", "keterangan")
    date_hierarchy = "tanggal_realisasi"
    list_select_related = ("item", "periode")

    @admin.display(description="Total Realisasi", ordering="total_realisasi")
    def realisasi_rp(self, obj):
        return format_rupiah(obj.total_realisasi)
