"""Pengumuman: validasi lampiran base64, list tanpa payload lampiran, akses jemaat."""

import base64
import json
from datetime import date

import pytest
from django.core.exceptions import ValidationError

from account.roles import Role
from pengumuman.models import KategoriPengumuman, Pengumuman, StatusPengumuman
from pengumuman.services.attachments import AttachmentsValidator, decode_attachments, validate_attachment

pytestmark = pytest.mark.django_db

URL = "/api/pengumuman"

PNG_B64 = base64.b64encode(b"\x89PNG\r\n\x1a\n" + b"0" * 64).decode()


def _att(file_type="image/png", data=PNG_B64, name="foto.png"):
    return {"fileName": name, "fileType": file_type, "base64Data": data}


@pytest.fixture()
def kategori_umum():
    return KategoriPengumuman.objects.create(nama="Umum")


def _pengumuman(kategori, judul, **kw):
    return Pengumuman.objects.create(kategori=kategori, judul=judul, **kw)


# ── Validasi lampiran ────────────────────────────────────────────────────────

class TestAttachments:
    def test_decode_json_string_once(self) -> None:
        raw = json.dumps([_att()])
        assert decode_attachments(raw) == [_att()]
        assert decode_attachments(None) == []
        assert decode_attachments([_att()]) == [_att()]

    def test_decode_rejects_garbage(self) -> None:
        with pytest.raises(ValidationError):
            decode_attachments("{bukan json")
        with pytest.raises(ValidationError):
            decode_attachments(json.dumps({"fileName": "x"}))

    def test_missing_keys(self) -> None:
        with pytest.raises(ValidationError, match="File attachment tidak valid"):
            validate_attachment({"fileName": "a.png", "fileType": "image/png"})

    def test_unsupported_type(self) -> None:
        with pytest.raises(ValidationError, match="tidak didukung"):
            validate_attachment(_att(file_type="application/zip", name="a.zip"))

    def test_image_over_1mb(self) -> None:
        big = "A" * (1024 * 1024 * 4 // 3 + 8)
        with pytest.raises(ValidationError, match="1MB"):
            validate_attachment(_att(data=big))

    def test_pdf_allows_up_to_3mb(self) -> None:
        two_mb = "A" * (2 * 1024 * 1024 * 4 // 3)
        validate_attachment(_att(file_type="application/pdf", data=two_mb, name="warta.pdf"))

    def test_invalid_base64(self) -> None:
        with pytest.raises(ValidationError, match="Base64 tidak valid"):
            validate_attachment(_att(data="bukan base64!!"))

    def test_validator_checks_every_item(self) -> None:
        with pytest.raises(ValidationError):
            AttachmentsValidator()([_att(), _att(file_type="text/plain", name="a.txt")])


# ── API ──────────────────────────────────────────────────────────────────────

class TestPengumumanApi:
    def test_create_with_attachment(self, auth_client, kategori_umum) -> None:
        client = auth_client(Role.EMPLOYEE)
        resp = client.post(
            URL,
            {
                "judul": "Warta Jemaat",
                "kategoriId": str(kategori_umum.pk),
                "status": "PUBLISHED",
                "attachments": json.dumps([_att()]),
            },
            format="json",
        )
        assert resp.status_code == 201
        data = resp.json()["data"]
        assert data["attachmentCount"] == 1
        assert data["publishedAt"] is not None
        assert data["createdBy"] == client.user.username

        obj = Pengumuman.objects.get()
        assert obj.attachments == [_att()]

    def test_create_rejects_bad_attachment(self, auth_client, kategori_umum) -> None:
        resp = auth_client().post(
            URL,
            {"judul": "x", "kategoriId": str(kategori_umum.pk), "attachments": [_att(file_type="video/mp4")]},
            format="json",
        )
        assert resp.status_code == 400
        assert resp.json()["errors"]["attachments"] == "Tipe file video/mp4 tidak didukung"
        assert not Pengumuman.objects.exists()

    def test_create_requires_judul(self, auth_client, kategori_umum) -> None:
        resp = auth_client().post(URL, {"kategoriId": str(kategori_umum.pk)}, format="json")
        assert resp.status_code == 400
        assert resp.json()["errors"]["judul"] == "Judul pengumuman wajib diisi"

    def test_list_pinned_first_without_payload(self, auth_client, kategori_umum) -> None:
        _pengumuman(kategori_umum, "Lama", tanggal_pengumuman=date(2025, 1, 1))
        _pengumuman(kategori_umum, "Baru", tanggal_pengumuman=date(2025, 3, 1), attachments=[_att()])
        _pengumuman(kategori_umum, "Disematkan", tanggal_pengumuman=date(2024, 1, 1), is_pinned=True)

        items = auth_client().get(URL).json()["data"]["items"]

        assert [i["judul"] for i in items] == ["Disematkan", "Baru", "Lama"]
        assert "attachments" not in items[1]
        assert items[1]["attachmentCount"] == 1

    def test_filters(self, auth_client, kategori_umum) -> None:
        _pengumuman(kategori_umum, "Rapat Majelis", prioritas="HIGH")
        _pengumuman(kategori_umum, "Natal", status=StatusPengumuman.PUBLISHED)

        client = auth_client()
        by_prio = client.get(URL, {"prioritas": "high"}).json()["data"]["items"]
        by_search = client.get(URL, {"search": "natal", "status": "all"}).json()["data"]["items"]

        assert [i["judul"] for i in by_prio] == ["Rapat Majelis"]
        assert [i["judul"] for i in by_search] == ["Natal"]

    def test_jemaat_sees_published_only(self, auth_client, kategori_umum) -> None:
        draft = _pengumuman(kategori_umum, "Draft")
        _pengumuman(kategori_umum, "Terbit", status=StatusPengumuman.PUBLISHED)

        client = auth_client(Role.JEMAAT)
        items = client.get(URL).json()["data"]["items"]
        assert [i["judul"] for i in items] == ["Terbit"]
        assert client.get(f"{URL}/{draft.pk}").status_code == 404

    def test_jemaat_cannot_create(self, auth_client, kategori_umum) -> None:
        resp = auth_client(Role.JEMAAT).post(URL, {"judul": "x"}, format="json")
        assert resp.status_code == 403

    def test_detail_includes_attachments(self, auth_client, kategori_umum) -> None:
        obj = _pengumuman(kategori_umum, "Lampiran", attachments=[_att()])
        data = auth_client().get(f"{URL}/{obj.pk}").json()["data"]
        assert data["attachments"][0]["fileName"] == "foto.png"

    def test_patch_publish_sets_published_at(self, auth_client, kategori_umum) -> None:
        obj = _pengumuman(kategori_umum, "Draft")
        assert obj.published_at is None

        resp = auth_client().patch(f"{URL}/{obj.pk}", {"status": "PUBLISHED"}, format="json")
        assert resp.status_code == 200
        obj.refresh_from_db()
        assert obj.published_at is not None

    def test_delete(self, auth_client, kategori_umum) -> None:
        obj = _pengumuman(kategori_umum, "Hapus")
        assert auth_client().delete(f"{URL}/{obj.pk}").status_code == 200
        assert not Pengumuman.objects.exists()
