from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from pengumuman.models import KategoriPengumuman, Pengumuman, PrioritasPengumuman, StatusPengumuman
from pengumuman.services.attachments import AttachmentsValidator, decode_attachments


class AttachmentsField(serializers.JSONField):
    """Terima list atau string JSON, simpan sebagai list."""

    def to_internal_value(self, data):
        try:
            return decode_attachments(data)
        except DjangoValidationError as exc:
            raise serializers.ValidationError(exc.messages)


class KategoriPengumumanSerializer(serializers.ModelSerializer):
    nama = serializers.CharField(max_length=100, error_messages={"required": "Nama kategori wajib diisi"})

    class Meta:
        model = KategoriPengumuman
        fields = ["id", "nama"]


class PengumumanListSerializer(serializers.ModelSerializer):
    """Untuk list: attachment tidak ikut dikirim, hanya jumlahnya."""
    kategoriId = serializers.UUIDField(source="kategori_id", read_only=True)
    kategori = KategoriPengumumanSerializer(read_only=True)
    tanggalPengumuman = serializers.DateField(source="tanggal_pengumuman", read_only=True)
    isPinned = serializers.BooleanField(source="is_pinned", read_only=True)
    attachmentCount = serializers.IntegerField(source="attachment_count", read_only=True)
    publishedAt = serializers.DateTimeField(source="published_at", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Pengumuman
        fields = [
            "id", "judul", "kategoriId", "kategori", "konten", "tanggalPengumuman",
            "status", "prioritas", "isPinned", "attachmentCount", "publishedAt", "createdAt",
        ]


class PengumumanSerializer(serializers.ModelSerializer):
    judul = serializers.CharField(max_length=200, error_messages={
        "required": "Judul pengumuman wajib diisi",
        "blank": "Judul pengumuman wajib diisi",
    })
    kategoriId = serializers.PrimaryKeyRelatedField(
        source="kategori",
        queryset=KategoriPengumuman.objects.all(),
        error_messages={"required": "Kategori wajib dipilih", "does_not_exist": "Kategori tidak ditemukan"},
    )
    kategori = KategoriPengumumanSerializer(read_only=True)
    konten = serializers.CharField(required=False, allow_blank=True)
    tanggalPengumuman = serializers.DateField(source="tanggal_pengumuman", required=False)
    status = serializers.ChoiceField(choices=StatusPengumuman.choices, required=False)
    prioritas = serializers.ChoiceField(choices=PrioritasPengumuman.choices, required=False)
    isPinned = serializers.BooleanField(source="is_pinned", required=False)
    attachments = AttachmentsField(required=False, validators=[AttachmentsValidator()])
    attachmentCount = serializers.IntegerField(source="attachment_count", read_only=True)
    publishedAt = serializers.DateTimeField(source="published_at", read_only=True)
    createdBy = serializers.CharField(source="created_by.username", read_only=True, default=None)

    class Meta:
        model = Pengumuman
        fields = [
            "id", "judul", "kategoriId", "kategori", "konten", "tanggalPengumuman",
            "status", "prioritas", "isPinned", "attachments", "attachmentCount",
            "publishedAt", "createdBy",
        ]
