"""Periode anggaran (overlap, populate), kategori, realisasi (+ bulk), summary & dashboard."""

from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from account.roles import Role
from core.exceptions import BusinessRuleError
from keuangan.models import ItemKeuangan, KategoriKeuangan, PeriodeAnggaran, RealisasiItemKeuangan, StatusPeriode
from keuangan.services.periode import find_overlapping, populate_from_periode
from keuangan.services.summary import (
    achievement_percentage,
    keuangan_dashboard,
    latest_active_periode,
    realisasi_summary,
)

pytestmark = pytest.mark.django_db

BASE = "/api/keuangan"


def _periode(nama, tahun):
    return PeriodeAnggaran.objects.create(
        nama=nama, tahun=tahun, tanggal_mulai=date(tahun, 1, 1), tanggal_akhir=date(tahun, 12, 31),
    )


def _realisasi(item, periode, total, tanggal=date(2025, 3, 1)):
    return RealisasiItemKeuangan.objects.create(
        item=item, periode=periode, tanggal_realisasi=tanggal, total_realisasi=Decimal(total),
    )


class TestKategoriApi:
    def test_kode_uppercased(self, auth_client) -> None:
        resp = auth_client().post(f"{BASE}/kategori", {"kode": " b ", "nama": "Pengeluaran"}, format="json")
        assert resp.status_code == 201
        assert resp.json()["data"]["kode"] == "B"

    def test_duplicate_kode(self, auth_client, kategori) -> None:
        resp = auth_client().post(f"{BASE}/kategori", {"kode": "a", "nama": "Lagi"}, format="json")
        assert resp.status_code == 400
        assert resp.json()["errors"]["kode"] == "Kode kategori sudah digunakan"

    def test_delete_with_items_blocked(self, auth_client, kategori, periode, make_item) -> None:
        make_item(kategori, periode, "A")
        resp = auth_client().delete(f"{BASE}/kategori/{kategori.pk}")
        assert resp.status_code == 400
        assert KategoriKeuangan.objects.filter(pk=kategori.pk).exists()


class TestPeriode:
    def test_overlap_detection(self, periode) -> None:
        assert find_overlapping(date(2025, 6, 1), date(2026, 5, 31)) == periode
        assert find_overlapping(date(2024, 1, 1), date(2024, 12, 31)) is None

    def test_create_overlapping_rejected(self, auth_client, periode) -> None:
        resp = auth_client().post(
            f"{BASE}/periode",
            {"nama": "Tengah", "tahun": 2025, "tanggalMulai": "2025-06-01", "tanggalAkhir": "2025-07-01"},
            format="json",
        )
        assert resp.status_code == 400
        assert resp.json()["message"] == "Periode anggaran tidak boleh tumpang tindih dengan periode lain"

    def test_end_before_start_rejected(self, auth_client) -> None:
        resp = auth_client().post(
            f"{BASE}/periode",
            {"nama": "Salah", "tahun": 2030, "tanggalMulai": "2030-12-31", "tanggalAkhir": "2030-01-01"},
            format="json",
        )
        assert resp.status_code == 400
        assert resp.json()["errors"]["tanggalAkhir"] == "Tanggal akhir harus setelah tanggal mulai"

    def test_create_and_list(self, auth_client) -> None:
        client = auth_client(Role.EMPLOYEE)
        resp = client.post(
            f"{BASE}/periode",
            {"nama": "Anggaran 2026", "tahun": 2026, "tanggalMulai": "2026-01-01", "tanggalAkhir": "2026-12-31"},
            format="json",
        )
        assert resp.status_code == 201
        assert resp.json()["data"]["status"] == "DRAFT"

        listing = client.get(f"{BASE}/periode", {"tahun": "2026"}).json()["data"]
        assert listing["pagination"]["total"] == 1
        assert listing["items"][0]["jumlahItem"] == 0

    def test_patch_own_range_not_overlap(self, auth_client, periode) -> None:
        resp = auth_client().patch(
            f"{BASE}/periode/{periode.pk}", {"tanggalAkhir": "2025-11-30"}, format="json",
        )
        assert resp.status_code == 200
        periode.refresh_from_db()
        assert periode.tanggal_akhir == date(2025, 11, 30)


class TestPopulate:
    def _source(self, kategori, periode, make_item):
        a = make_item(kategori, periode, "A", urutan=1, total_target=Decimal("300"))
        a1 = make_item(kategori, periode, "A.1", parent=a, urutan=1, total_target=Decimal("100"))
        make_item(kategori, periode, "A.1.1", parent=a1, urutan=1)
        off = make_item(kategori, periode, "A.2", parent=a, urutan=2, is_active=False)
        make_item(kategori, periode, "A.2.1", parent=off, urutan=1)
        return a

    def test_copies_hierarchy(self, kategori, periode, make_item) -> None:
        self._source(kategori, periode, make_item)
        target = _periode("Anggaran 2026", 2026)

        assert populate_from_periode(target, periode) == 3

        copies = {i.kode: i for i in ItemKeuangan.objects.filter(periode=target)}
        assert set(copies) == {"A", "A.1", "A.1.1"}
        assert copies["A.1"].parent == copies["A"]
        assert copies["A.1.1"].parent == copies["A.1"]
        assert copies["A"].total_target == Decimal("300")

    def test_refuses_when_target_has_items(self, kategori, periode, make_item) -> None:
        self._source(kategori, periode, make_item)
        target = _periode("Anggaran 2026", 2026)
        make_item(kategori, target, "Z")

        with pytest.raises(BusinessRuleError, match="overwrite=true"):
            populate_from_periode(target, periode)

    def test_overwrite_replaces_items(self, kategori, periode, make_item) -> None:
        self._source(kategori, periode, make_item)
        target = _periode("Anggaran 2026", 2026)
        z = make_item(kategori, target, "Z")
        make_item(kategori, target, "Z.1", parent=z)

        populate_from_periode(target, periode, overwrite=True)
        assert not ItemKeuangan.objects.filter(periode=target, kode__startswith="Z").exists()
        assert ItemKeuangan.objects.filter(periode=target).count() == 3

    def test_empty_source(self, periode) -> None:
        target = _periode("Anggaran 2026", 2026)
        with pytest.raises(BusinessRuleError, match="Tidak ada item keuangan aktif"):
            populate_from_periode(target, periode)

    def test_endpoint(self, auth_client, kategori, periode, make_item) -> None:
        self._source(kategori, periode, make_item)
        target = _periode("Anggaran 2026", 2026)

        resp = auth_client().post(
            f"{BASE}/periode/{target.pk}/populate", {"sourcePeriodeId": str(periode.pk)}, format="json",
        )
        body = resp.json()
        assert resp.status_code == 201
        assert body["data"]["jumlahItem"] == 3
        assert [n["kode"] for n in body["data"]["tree"]] == ["A"]

    def test_endpoint_unknown_periode(self, auth_client, periode) -> None:
        resp = auth_client().post(
            f"{BASE}/periode/00000000-0000-0000-0000-000000000000/populate",
            {"sourcePeriodeId": str(periode.pk)},
            format="json",
        )
        assert resp.status_code == 404


class TestRealisasiApi:
    def test_create(self, auth_client, kategori, periode, make_item) -> None:
        item = make_item(kategori, periode, "A")
        resp = auth_client(Role.EMPLOYEE).post(
            f"{BASE}/realisasi",
            {
                "itemKeuanganId": str(item.pk),
                "periodeId": str(periode.pk),
                "tanggalRealisasi": "2025-02-02",
                "totalRealisasi": "2500000",
            },
            format="json",
        )
        assert resp.status_code == 201
        data = resp.json()["data"]
        assert data["totalRealisasi"] == "2500000.00"
        assert data["itemKeuangan"]["kode"] == "A"

    def test_periode_mismatch(self, auth_client, kategori, periode, make_item) -> None:
        item = make_item(kategori, periode, "A")
        other = _periode("Anggaran 2026", 2026)
        resp = auth_client().post(
            f"{BASE}/realisasi",
            {
                "itemKeuanganId": str(item.pk),
                "periodeId": str(other.pk),
                "tanggalRealisasi": "2026-02-02",
                "totalRealisasi": "10",
            },
            format="json",
        )
        assert resp.status_code == 400
        assert resp.json()["message"] == "Periode tidak sesuai dengan item keuangan"

    def test_missing_fields(self, auth_client) -> None:
        resp = auth_client().post(f"{BASE}/realisasi", {}, format="json")
        errors = resp.json()["errors"]
        assert resp.status_code == 400
        assert errors["itemKeuanganId"] == "Item keuangan wajib dipilih"
        assert errors["totalRealisasi"] == "Total realisasi wajib diisi"

    def test_list_filters_and_order(self, auth_client, kategori, periode, make_item) -> None:
        a = make_item(kategori, periode, "A")
        b = make_item(kategori, periode, "B")
        _realisasi(a, periode, "10", date(2025, 1, 5))
        _realisasi(a, periode, "20", date(2025, 3, 5))
        _realisasi(b, periode, "30", date(2025, 2, 5))

        client = auth_client()
        all_rows = client.get(f"{BASE}/realisasi").json()["data"]["realisasi"]
        assert [r["tanggalRealisasi"] for r in all_rows] == ["2025-03-05", "2025-02-05", "2025-01-05"]

        only_a = client.get(f"{BASE}/realisasi", {"itemKeuanganId": str(a.pk), "tanggalMulai": "2025-02-01"})
        assert [r["totalRealisasi"] for r in only_a.json()["data"]["realisasi"]] == ["20.00"]

    def test_patch_and_delete(self, auth_client, kategori, periode, make_item) -> None:
        item = make_item(kategori, periode, "A")
        real = _realisasi(item, periode, "10")
        client = auth_client()

        resp = client.patch(f"{BASE}/realisasi/{real.pk}", {"totalRealisasi": "15"}, format="json")
        assert resp.status_code == 200
        real.refresh_from_db()
        assert real.total_realisasi == Decimal("15")

        assert client.delete(f"{BASE}/realisasi/{real.pk}").status_code == 200
        assert not RealisasiItemKeuangan.objects.exists()


class TestSummary:
    def test_achievement_percentage(self) -> None:
        assert achievement_percentage(Decimal("1"), Decimal("3")) == 33.33
        assert achievement_percentage(Decimal("5"), Decimal("0")) == 0.0
        assert achievement_percentage(Decimal("150"), Decimal("100")) == 150.0

    def test_per_item_and_overall(self, kategori, periode, make_item) -> None:
        a = make_item(kategori, periode, "A", total_target=Decimal("1000"), target_frekuensi=4)
        b = make_item(kategori, periode, "B", total_target=Decimal("100"))
        for i in range(6):
            _realisasi(a, periode, "100", date(2025, 1, i + 1))
        _realisasi(b, periode, "150")

        data = realisasi_summary(periode_id=periode.pk)
        rows = {r["kode"]: r for r in data["items"]}

        assert rows["A"]["totalRealisasiAmount"] == "600.00"
        assert rows["A"]["varianceAmount"] == "-400.00"
        assert rows["A"]["varianceFrekuensi"] == 2
        assert rows["A"]["achievementPercentage"] == 60.0
        assert rows["A"]["isTargetAchieved"] is False
        assert len(rows["A"]["recentRealisasi"]) == 5
        assert rows["A"]["recentRealisasi"][0]["tanggalRealisasi"] == "2025-01-06"
        assert rows["B"]["isTargetAchieved"] is True

        summary = data["summary"]
        assert summary["totalItems"] == 2
        assert summary["totalTargetAmount"] == "1100.00"
        assert summary["totalRealisasiAmount"] == "750.00"
        assert summary["itemsWithRealisasi"] == 2
        assert summary["itemsTargetAchieved"] == 1

    def test_endpoint(self, auth_client, kategori, periode, make_item) -> None:
        make_item(kategori, periode, "A", total_target=Decimal("10"))
        resp = auth_client(Role.PENDETA).get(f"{BASE}/realisasi/summary", {"periodeId": str(periode.pk)})
        assert resp.status_code == 200
        assert resp.json()["data"]["summary"]["itemsWithRealisasi"] == 0


class TestRealisasiBulk:
    URL = f"{BASE}/realisasi/bulk"

    def _row(self, item, periode, total="1000000", tanggal="2025-03-01"):
        return {
            "itemKeuanganId": str(item.pk),
            "periodeId": str(periode.pk),
            "tanggalRealisasi": tanggal,
            "totalRealisasi": total,
        }

    def test_creates_all(self, auth_client, kategori, periode, make_item) -> None:
        a = make_item(kategori, periode, "A")
        b = make_item(kategori, periode, "B")
        resp = auth_client().post(
            self.URL,
            {"realisasiList": [self._row(a, periode), self._row(b, periode, total="500000")]},
            format="json",
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["message"] == "2 realisasi berhasil dibuat"
        assert body["data"]["summary"]["totalCreated"] == 2
        assert Decimal(body["data"]["summary"]["totalAmount"]) == Decimal("1500000")
        assert [r["itemKeuangan"]["kode"] for r in body["data"]["created"]] == ["A", "B"]
        assert RealisasiItemKeuangan.objects.count() == 2

    def test_errors_reported_by_index(self, auth_client, kategori, periode, make_item) -> None:
        a = make_item(kategori, periode, "A")
        broken = self._row(a, periode)
        del broken["totalRealisasi"]
        resp = auth_client().post(
            self.URL, {"realisasiList": [self._row(a, periode), broken]}, format="json",
        )
        assert resp.status_code == 400
        assert resp.json()["message"] == "Validasi gagal pada beberapa item"
        assert resp.json()["errors"] == [
            {"index": 1, "errors": {"totalRealisasi": "Total realisasi wajib diisi"}},
        ]
        assert not RealisasiItemKeuangan.objects.exists()

    def test_periode_mismatch_by_index(self, auth_client, kategori, periode, make_item) -> None:
        a = make_item(kategori, periode, "A")
        other = _periode("Anggaran 2026", 2026)
        resp = auth_client().post(
            self.URL,
            {"realisasiList": [self._row(a, periode), self._row(a, other, tanggal="2026-01-05")]},
            format="json",
        )
        assert resp.status_code == 400
        assert resp.json()["errors"] == [
            {"index": 1, "errors": {"periodeId": "Periode tidak sesuai dengan item keuangan"}},
        ]
        assert not RealisasiItemKeuangan.objects.exists()

    @pytest.mark.parametrize("payload", [{}, {"realisasiList": []}, {"realisasiList": "x"}])
    def test_empty_list_rejected(self, auth_client, payload) -> None:
        resp = auth_client().post(self.URL, payload, format="json")
        assert resp.status_code == 400
        assert resp.json()["errors"] == {
            "realisasiList": "List realisasi wajib berisi array dengan minimal 1 item",
        }

    def test_majelis_forbidden(self, auth_client) -> None:
        resp = auth_client(Role.MAJELIS).post(self.URL, {"realisasiList": []}, format="json")
        assert resp.status_code == 403


class TestDashboard:
    URL = f"{BASE}/dashboard"

    @pytest.fixture()
    def data(self, kategori, periode, make_item):
        periode.status = StatusPeriode.ACTIVE
        periode.save()
        pengeluaran = KategoriKeuangan.objects.create(kode="B", nama="PENGELUARAN")

        a = make_item(kategori, periode, "A", total_target=Decimal("10000000"))
        a1 = make_item(kategori, periode, "A.1", parent=a, total_target=Decimal("4000000"))
        b = make_item(pengeluaran, periode, "B")
        make_item(kategori, periode, "C")  # tanpa realisasi

        _realisasi(a, periode, "1000000", date(2025, 3, 1))
        _realisasi(a, periode, "2000000", date(2025, 1, 10))
        _realisasi(a1, periode, "500000", date(2025, 3, 15))
        _realisasi(b, periode, "300000", date(2025, 3, 20))
        return periode

    def test_latest_active_periode(self, periode) -> None:
        assert latest_active_periode() is None

        periode.status = StatusPeriode.ACTIVE
        periode.save()
        PeriodeAnggaran.objects.filter(pk=periode.pk).update(created_at=timezone.now() - timedelta(days=1))
        nonaktif = _periode("Anggaran 2026", 2026)
        nonaktif.status, nonaktif.is_active = StatusPeriode.ACTIVE, False
        nonaktif.save()
        assert latest_active_periode() == periode

        baru = _periode("Anggaran 2027", 2027)
        baru.status = StatusPeriode.ACTIVE
        baru.save()
        assert latest_active_periode() == baru

    def test_totals(self, data) -> None:
        result = keuangan_dashboard(tahun=2025, bulan=3)
        stats = result["stats"]

        assert result["filter"]["periode"] == "Anggaran 2025"
        masuk = stats["totalPenerimaan"]
        assert Decimal(masuk["bulan"]) == Decimal("1500000")
        assert Decimal(masuk["tahun"]) == Decimal("3500000")
        assert masuk["jumlahTransaksiBulan"] == 2
        assert masuk["jumlahTransaksi"] == 3
        keluar = stats["totalPengeluaran"]
        assert Decimal(keluar["bulan"]) == Decimal("300000")
        assert keluar["jumlahTransaksi"] == 1
        assert Decimal(stats["saldo"]["bulan"]) == Decimal("1200000")
        assert Decimal(stats["saldo"]["tahun"]) == Decimal("3200000")

        # target hanya dari item level 1 kategori penerimaan
        assert Decimal(stats["anggaran"]["target"]) == Decimal("10000000")
        assert stats["anggaran"]["persentase"] == 35.0

    def test_top_items_by_nominal(self, data) -> None:
        top = keuangan_dashboard(tahun=2025, bulan=3)["topItems"]
        assert [t["kode"] for t in top] == ["A", "A.1", "B"]
        assert Decimal(top[0]["nominalActual"]) == Decimal("3000000")
        assert top[0]["jumlahTransaksi"] == 2
        assert top[2]["jenis"] == "pengeluaran"

    def test_other_month_and_year(self, data) -> None:
        stats = keuangan_dashboard(tahun=2024, bulan=3)["stats"]
        assert Decimal(stats["totalPenerimaan"]["tahun"]) == 0
        assert stats["totalPengeluaran"]["jumlahTransaksi"] == 0
        # anggaran dihitung per periode, bukan per tahun filter
        assert Decimal(stats["anggaran"]["realisasi"]) == Decimal("3500000")

    def test_no_active_periode(self, periode) -> None:
        result = keuangan_dashboard(tahun=2025, bulan=1)
        assert result["filter"]["periode"] == "Tidak ada periode aktif"
        assert result["topItems"] == []
        assert Decimal(result["stats"]["saldo"]["tahun"]) == 0
        assert result["stats"]["anggaran"]["persentase"] == 0.0
        assert result["systemCounts"]["periode"] == 1

    def test_endpoint(self, auth_client, data) -> None:
        resp = auth_client(Role.PENDETA).get(self.URL, {"tahun": "2025", "bulan": "3"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["message"] == "Dashboard data berhasil diambil"
        assert body["data"]["filter"] == {
            "tahun": 2025, "bulan": 3, "periode": "Anggaran 2025", "periodeId": str(data.pk),
        }

    def test_endpoint_explicit_periode(self, auth_client, data) -> None:
        draft = _periode("Anggaran 2026", 2026)
        resp = auth_client().get(self.URL, {"periodeId": str(draft.pk), "tahun": "2026"})
        assert resp.status_code == 200
        assert resp.json()["data"]["filter"]["periode"] == "Anggaran 2026"
        assert resp.json()["data"]["topItems"] == []

    def test_endpoint_invalid_params(self, auth_client) -> None:
        resp = auth_client().get(self.URL, {"tahun": "20000", "bulan": "13"})
        assert resp.status_code == 400
        assert resp.json()["errors"] == {
            "tahun": "Tahun harus antara 1 dan 9999",
            "bulan": "Bulan harus antara 1 dan 12",
        }

    def test_jemaat_forbidden(self, auth_client) -> None:
        assert auth_client(Role.JEMAAT).get(self.URL).status_code == 403
