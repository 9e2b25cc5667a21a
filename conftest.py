"""Shared pytest fixtures.

Provides:
- api_client: DRF APIClient tanpa token
- make_user: factory user + UserProfile dengan role tertentu
- auth_client: factory APIClient dengan header Authorization: Bearer <jwt>
- rayon / make_keluarga / make_jemaat: data jemaat minimal
- kategori / periode / make_item: data keuangan minimal
"""

from datetime import date

import pytest
from django.contrib.auth.models import User
from rest_framework.test import APIClient

from account.models import UserProfile
from account.roles import Role
from account.services.tokens import create_token


# ── Client & user ──────────────────────────────────────────────────────────

@pytest.fixture()
def api_client():
    return APIClient()


@pytest.fixture()
def make_user(db):
    counter = {"n": 0}

    def _make(role=Role.ADMIN, *, username=None, password="rahasia123", rayon=None, jemaat=None, **extra):
        counter["n"] += 1
        username = username or f"{str(role).lower()}{counter['n']}"
        user = User.objects.create_user(
            username=username,
            email=extra.pop("email", f"{username}@gereja.test"),
            password=password,
            **extra,
        )
        UserProfile.objects.create(user=user, role=role, rayon=rayon, jemaat=jemaat)
        return user

    return _make


@pytest.fixture()
def auth_client(make_user):
    """auth_client(Role.EMPLOYEE) atau auth_client(user=existing_user)."""

    def _client(role=Role.ADMIN, *, user=None, **user_kwargs):
        user = user or make_user(role, **user_kwargs)
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {create_token(user)}")
        client.user = user
        return client

    return _client


# ── Jemaat ─────────────────────────────────────────────────────────────────

@pytest.fixture()
def rayon(db):
    from jemaat.models import Rayon

    return Rayon.objects.create(nama_rayon="Rayon 1")


@pytest.fixture()
def make_keluarga(db):
    from jemaat.models import Keluarga

    counter = {"n": 0}

    def _make(rayon, **kwargs):
        counter["n"] += 1
        kwargs.setdefault("no_kk", f"KK{counter['n']:04d}")
        kwargs.setdefault("no_bagungan", counter["n"])
        return Keluarga.objects.create(rayon=rayon, **kwargs)

    return _make


@pytest.fixture()
def make_jemaat(db):
    from jemaat.models import Jemaat

    def _make(keluarga, nama="Yohanes", **kwargs):
        return Jemaat.objects.create(keluarga=keluarga, nama=nama, **kwargs)

    return _make


# ── Keuangan ───────────────────────────────────────────────────────────────

@pytest.fixture()
def kategori(db):
    from keuangan.models import KategoriKeuangan

    return KategoriKeuangan.objects.create(kode="A", nama="PENERIMAAN")


@pytest.fixture()
def periode(db):
    from keuangan.models import PeriodeAnggaran

    return PeriodeAnggaran.objects.create(
        nama="Anggaran 2025",
        tahun=2025,
        tanggal_mulai=date(2025, 1, 1),
        tanggal_akhir=date(2025, 12, 31),
    )


@pytest.fixture()
def make_item(db):
    from keuangan.models import ItemKeuangan

    def _make(kategori, periode, kode, parent=None, **kwargs):
        kwargs.setdefault("nama", f"Item {kode}")
        kwargs.setdefault("level", parent.level + 1 if parent else 1)
        return ItemKeuangan.objects.create(
            kategori=kategori, periode=periode, parent=parent, kode=kode, **kwargs
        )

    return _make
