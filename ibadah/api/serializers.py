from rest_framework import serializers

from ibadah.models import JadwalIbadah, JenisIbadah
from jemaat.models import Keluarga, Rayon


class JenisIbadahSerializer(serializers.ModelSerializer):
    namaIbadah = serializers.CharField(source="nama_ibadah", read_only=True)

    class Meta:
        model = JenisIbadah
        fields = ["id", "namaIbadah"]


class JadwalIbadahSerializer(serializers.ModelSerializer):
    judul = serializers.CharField(max_length=200, error_messages={"required": "Judul wajib diisi"})
    idJenisIbadah = serializers.PrimaryKeyRelatedField(
        source="jenis_ibadah",
        queryset=JenisIbadah.objects.all(),
        error_messages={"required": "Jenis ibadah wajib dipilih", "does_not_exist": "Jenis ibadah tidak ditemukan"},
    )
    jenisIbadah = JenisIbadahSerializer(source="jenis_ibadah", read_only=True)
    tanggal = serializers.DateField(error_messages={"required": "Tanggal wajib diisi"})
    waktuMulai = serializers.TimeField(source="waktu_mulai", required=False, allow_null=True)
    waktuSelesai = serializers.TimeField(source="waktu_selesai", required=False, allow_null=True)
    lokasi = serializers.CharField(max_length=200, required=False, allow_blank=True)
    idRayon = serializers.PrimaryKeyRelatedField(
        source="rayon", queryset=Rayon.objects.all(), required=False, allow_null=True,
    )
    namaRayon = serializers.SerializerMethodField()
    idKeluarga = serializers.PrimaryKeyRelatedField(
        source="keluarga", queryset=Keluarga.objects.all(), required=False, allow_null=True,
    )
    jumlahLaki = serializers.IntegerField(source="jumlah_laki", min_value=0, required=False, allow_null=True)
    jumlahPerempuan = serializers.IntegerField(source="jumlah_perempuan", min_value=0, required=False, allow_null=True)
    totalHadir = serializers.IntegerField(source="total_hadir", read_only=True)

    class Meta:
        model = JadwalIbadah
        fields = [
            "id", "judul", "idJenisIbadah", "jenisIbadah", "tanggal",
            "waktuMulai", "waktuSelesai", "lokasi", "tema", "firman",
            "idRayon", "namaRayon", "idKeluarga",
            "jumlahLaki", "jumlahPerempuan", "totalHadir", "keterangan",
        ]

    def get_namaRayon(self, obj):
        if obj.rayon_id:
            return obj.rayon.nama_rayon
        if obj.keluarga_id and obj.keluarga.rayon_id:
            return obj.keluarga.rayon.nama_rayon
        return None

    def validate(self, attrs):
        mulai = attrs.get("waktu_mulai", getattr(self.instance, "waktu_mulai", None))
        selesai = attrs.get("waktu_selesai", getattr(self.instance, "waktu_selesai", None))
        if mulai and selesai and selesai <= mulai:
            raise serializers.ValidationError({"waktuSelesai": "Waktu selesai harus setelah waktu mulai"})
        return attrs


def public_jadwal(jadwal):
    """Format ringkas untuk halaman publik (tanpa data kehadiran)."""
    rayon = jadwal.rayon or (jadwal.keluarga.rayon if jadwal.keluarga_id else None)
    return {
        "id": str(jadwal.pk),
        "title": jadwal.judul,
        "jenisIbadah": jadwal.jenis_ibadah.nama_ibadah if jadwal.jenis_ibadah_id else "Ibadah",
        "date": jadwal.tanggal.isoformat(),
        "time": jadwal.waktu_mulai.strftime("%H:%M") if jadwal.waktu_mulai else "Belum ditentukan",
        "location": jadwal.lokasi or "Gereja",
        "tema": jadwal.tema,
        "firman": jadwal.firman,
        "keterangan": jadwal.keterangan,
        "rayon": rayon.nama_rayon if rayon else None,
    }
