from rest_framework import serializers

from jemaat.models import Jemaat, Keluarga, Rayon


class RayonSerializer(serializers.ModelSerializer):
    namaRayon = serializers.CharField(source="nama_rayon", max_length=100)

    class Meta:
        model = Rayon
        fields = ["id", "namaRayon"]

    def validate_namaRayon(self, value):
        value = value.strip()
        qs = Rayon.objects.filter(nama_rayon__iexact=value)
        if self.instance:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("Nama rayon sudah digunakan")
        return value


class KeluargaSerializer(serializers.ModelSerializer):
    noKK = serializers.CharField(source="no_kk", max_length=32)
    noBagungan = serializers.IntegerField(source="no_bagungan", required=False, allow_null=True, min_value=0)
    idRayon = serializers.PrimaryKeyRelatedField(source="rayon", queryset=Rayon.objects.all())
    rayon = RayonSerializer(read_only=True)
    statusKeluarga = serializers.ChoiceField(
        source="status_keluarga",
        choices=Keluarga._meta.get_field("status_keluarga").choices,
        required=False,
    )
    jumlahAnggota = serializers.SerializerMethodField()

    class Meta:
        model = Keluarga
        fields = [
            "id", "noKK", "noBagungan", "idRayon", "rayon", "statusKeluarga",
            "alamat", "rt", "rw", "jumlahAnggota",
        ]

    def get_jumlahAnggota(self, obj):
        n = getattr(obj, "jumlah_anggota", None)
        return n if n is not None else obj.anggota.count()

    def validate_noKK(self, value):
        value = value.strip()
        qs = Keluarga.objects.filter(no_kk=value)
        if self.instance:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("No. KK sudah terdaftar")
        return value


class KeluargaRingkasSerializer(serializers.ModelSerializer):
    noKK = serializers.CharField(source="no_kk", read_only=True)
    noBagungan = serializers.IntegerField(source="no_bagungan", read_only=True)
    rayon = RayonSerializer(read_only=True)

    class Meta:
        model = Keluarga
        fields = ["id", "noKK", "noBagungan", "rayon"]


class JemaatSerializer(serializers.ModelSerializer):
    jenisKelamin = serializers.BooleanField(source="jenis_kelamin")
    tanggalLahir = serializers.DateField(source="tanggal_lahir", required=False, allow_null=True)
    golonganDarah = serializers.ChoiceField(
        source="golongan_darah",
        choices=Jemaat._meta.get_field("golongan_darah").choices,
        required=False,
        allow_null=True,
    )
    statusDalamKeluarga = serializers.ChoiceField(
        source="status_dalam_keluarga",
        choices=Jemaat._meta.get_field("status_dalam_keluarga").choices,
        required=False,
    )
    idKeluarga = serializers.PrimaryKeyRelatedField(source="keluarga", queryset=Keluarga.objects.all())
    keluarga = KeluargaRingkasSerializer(read_only=True)
    umur = serializers.SerializerMethodField()

    class Meta:
        model = Jemaat
        fields = [
            "id", "nama", "jenisKelamin", "tanggalLahir", "golonganDarah",
            "statusDalamKeluarga", "status", "idKeluarga", "keluarga", "umur",
        ]

    def get_umur(self, obj):
        return obj.umur()

    def validate_nama(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Nama jemaat wajib diisi")
        return value
