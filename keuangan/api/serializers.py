from rest_framework import serializers

from keuangan.models import (
    ItemKeuangan,
    KategoriKeuangan,
    PeriodeAnggaran,
    RealisasiItemKeuangan,
    StatusPeriode,
)


def fk_id(source, queryset=None, **kwargs):
    # id FK selalu string agar cocok dengan "id" di tree builder
    pk_field = serializers.UUIDField(format="hex_verbose")
    if queryset is None:
        return serializers.PrimaryKeyRelatedField(source=source, read_only=True, pk_field=pk_field, **kwargs)
    return serializers.PrimaryKeyRelatedField(source=source, queryset=queryset, pk_field=pk_field, **kwargs)


# =========================
# KATEGORI
# =========================

class KategoriKeuanganSerializer(serializers.ModelSerializer):
    kode = serializers.CharField(max_length=10, error_messages={"required": "Kode kategori wajib diisi"})
    nama = serializers.CharField(max_length=100, error_messages={"required": "Nama kategori wajib diisi"})
    isActive = serializers.BooleanField(source="is_active", required=False)
    jumlahItem = serializers.IntegerField(source="items_count", read_only=True, default=None)

    class Meta:
        model = KategoriKeuangan
        fields = ["id", "kode", "nama", "isActive", "jumlahItem"]

    def validate_kode(self, value):
        value = value.strip().upper()
        qs = KategoriKeuangan.objects.filter(kode=value)
        if self.instance:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("Kode kategori sudah digunakan")
        return value


class KategoriRingkasSerializer(serializers.ModelSerializer):
    class Meta:
        model = KategoriKeuangan
        fields = ["id", "nama", "kode"]


# =========================
# PERIODE
# =========================

class PeriodeAnggaranSerializer(serializers.ModelSerializer):
    nama = serializers.CharField(max_length=100, error_messages={"required": "Nama periode wajib diisi"})
    tahun = serializers.IntegerField(min_value=1900, max_value=9999, error_messages={"required": "Tahun wajib diisi"})
    tanggalMulai = serializers.DateField(source="tanggal_mulai", error_messages={"required": "Tanggal mulai wajib diisi"})
    tanggalAkhir = serializers.DateField(source="tanggal_akhir", error_messages={"required": "Tanggal akhir wajib diisi"})
    keterangan = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    status = serializers.ChoiceField(choices=StatusPeriode.choices, required=False)
    isActive = serializers.BooleanField(source="is_active", required=False)
    jumlahItem = serializers.IntegerField(source="items_count", read_only=True, default=None)

    class Meta:
        model = PeriodeAnggaran
        fields = [
            "id", "nama", "tahun", "tanggalMulai", "tanggalAkhir",
            "keterangan", "status", "isActive", "jumlahItem",
        ]


class PeriodeRingkasSerializer(serializers.ModelSerializer):
    class Meta:
        model = PeriodeAnggaran
        fields = ["id", "nama", "tahun"]


class PopulateSerializer(serializers.Serializer):
    sourcePeriodeId = serializers.UUIDField(error_messages={"required": "Periode sumber wajib dipilih"})
    overwrite = serializers.BooleanField(required=False, default=False)


# =========================
# ITEM
# =========================

class ItemParentSerializer(serializers.ModelSerializer):
    class Meta:
        model = ItemKeuangan
        fields = ["id", "nama", "kode", "level"]


class ItemKeuanganSerializer(serializers.ModelSerializer):
    """Output item (list/detail/tree)."""
    kategoriId = fk_id("kategori")
    periodeId = fk_id("periode")
    parentId = fk_id("parent")
    kategori = KategoriRingkasSerializer(read_only=True)
    parent = ItemParentSerializer(read_only=True)
    targetFrekuensi = serializers.IntegerField(source="target_frekuensi", read_only=True)
    satuanFrekuensi = serializers.CharField(source="satuan_frekuensi", read_only=True)
    nominalSatuan = serializers.DecimalField(source="nominal_satuan", max_digits=18, decimal_places=2, read_only=True)
    totalTarget = serializers.DecimalField(source="total_target", max_digits=18, decimal_places=2, read_only=True)
    nominalActual = serializers.DecimalField(source="nominal_actual", max_digits=18, decimal_places=2, read_only=True)
    jumlahTransaksi = serializers.IntegerField(source="jumlah_transaksi", read_only=True)
    isActive = serializers.BooleanField(source="is_active", read_only=True)
    jumlahChildren = serializers.SerializerMethodField()

    class Meta:
        model = ItemKeuangan
        fields = [
            "id", "kategoriId", "periodeId", "parentId", "kategori", "parent",
            "kode", "nama", "deskripsi", "level", "urutan",
            "targetFrekuensi", "satuanFrekuensi", "nominalSatuan", "totalTarget",
            "nominalActual", "jumlahTransaksi", "keterangan", "isActive",
            "jumlahChildren",
        ]
        read_only_fields = fields

    def get_jumlahChildren(self, obj):
        n = getattr(obj, "children_count", None)
        return n if n is not None else obj.children.count()


class ItemKeuanganCreateSerializer(serializers.Serializer):
    kategoriId = serializers.UUIDField(error_messages={"required": "Kategori wajib dipilih"})
    periodeId = serializers.UUIDField(error_messages={"required": "Periode wajib dipilih"})
    parentId = serializers.UUIDField(required=False, allow_null=True)
    kode = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)
    nama = serializers.CharField(max_length=200, error_messages={"required": "Nama item wajib diisi"})
    deskripsi = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    targetFrekuensi = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    satuanFrekuensi = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)
    nominalSatuan = serializers.DecimalField(max_digits=18, decimal_places=2, required=False, allow_null=True)
    totalTarget = serializers.DecimalField(max_digits=18, decimal_places=2, required=False, allow_null=True)
    nominalActual = serializers.DecimalField(max_digits=18, decimal_places=2, required=False, default=0)
    jumlahTransaksi = serializers.IntegerField(min_value=0, required=False, default=0)
    keterangan = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    isActive = serializers.BooleanField(required=False, default=True)

    FIELD_MAP = {
        "kategoriId": "kategori_id",
        "periodeId": "periode_id",
        "parentId": "parent_id",
        "kode": "kode",
        "nama": "nama",
        "deskripsi": "deskripsi",
        "targetFrekuensi": "target_frekuensi",
        "satuanFrekuensi": "satuan_frekuensi",
        "nominalSatuan": "nominal_satuan",
        "totalTarget": "total_target",
        "nominalActual": "nominal_actual",
        "jumlahTransaksi": "jumlah_transaksi",
        "keterangan": "keterangan",
        "isActive": "is_active",
    }

    def to_service_kwargs(self):
        return {self.FIELD_MAP[k]: v for k, v in self.validated_data.items()}


class ItemKeuanganUpdateSerializer(ItemKeuanganCreateSerializer):
    """PATCH: semua opsional, kategori/periode/parent tidak bisa diubah."""
    kategoriId = None
    periodeId = None
    parentId = None
    nama = serializers.CharField(max_length=200, required=False)
    nominalActual = None
    jumlahTransaksi = None
    isActive = serializers.BooleanField(required=False)


# =========================
# REALISASI
# =========================

class ItemRealisasiSerializer(serializers.ModelSerializer):
    kategori = KategoriRingkasSerializer(read_only=True)
    targetFrekuensi = serializers.IntegerField(source="target_frekuensi", read_only=True)
    satuanFrekuensi = serializers.CharField(source="satuan_frekuensi", read_only=True)
    nominalSatuan = serializers.DecimalField(source="nominal_satuan", max_digits=18, decimal_places=2, read_only=True)
    totalTarget = serializers.DecimalField(source="total_target", max_digits=18, decimal_places=2, read_only=True)

    class Meta:
        model = ItemKeuangan
        fields = [
            "id", "kode", "nama", "level", "kategori",
            "targetFrekuensi", "satuanFrekuensi", "nominalSatuan", "totalTarget",
        ]


class RealisasiSerializer(serializers.ModelSerializer):
    itemKeuanganId = fk_id(
        "item",
        queryset=ItemKeuangan.objects.all(),
        error_messages={
            "required": "Item keuangan wajib dipilih",
            "does_not_exist": "Item keuangan tidak ditemukan",
        },
    )
    periodeId = fk_id(
        "periode",
        queryset=PeriodeAnggaran.objects.all(),
        error_messages={
            "required": "Periode wajib dipilih",
            "does_not_exist": "Periode tidak ditemukan",
        },
    )
    tanggalRealisasi = serializers.DateField(
        source="tanggal_realisasi",
        error_messages={"required": "Tanggal realisasi wajib diisi"},
    )
    totalRealisasi = serializers.DecimalField(
        source="total_realisasi",
        max_digits=18,
        decimal_places=2,
        min_value=0,
        error_messages={"required": "Total realisasi wajib diisi"},
    )
    keterangan = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    itemKeuangan = ItemRealisasiSerializer(source="item", read_only=True)
    periode = PeriodeRingkasSerializer(read_only=True)

    class Meta:
        model = RealisasiItemKeuangan
        fields = [
            "id", "itemKeuanganId", "periodeId", "tanggalRealisasi",
            "totalRealisasi", "keterangan", "itemKeuangan", "periode",
        ]
