from django.contrib import admin

from .models import KategoriPengumuman, Pengumuman


@admin.register(KategoriPengumuman)
class KategoriPengumumanAdmin(admin.ModelAdmin):
    list_display = ("nama", "is_active")
    search_fields = ("nama",)


@admin.register(Pengumuman)
class PengumumanAdmin(admin.ModelAdmin):
    list_display = ("judul", "kategori", "tanggal_pengumuman", "status", "prioritas", "is_pinned", "jumlah_lampiran")
    list_filter = ("status", "prioritas", "is_pinned", "kategori")
    search_fields = ("judul", "konten")
    date_hierarchy = "tanggal_pengumuman"
    readonly_fields = ("published_at", "created_by")
    list_select_related = ("kategori",)

    @admin.display(description="Lampiran")
    def jumlah_lampiran(self, obj):
        return obj.attachment_count

    def save_model(self, request, obj, form, change):
        if not change and obj.created_by_id is None:
            obj.created_by = request.user
        super().save_model(request, obj, form, change)
