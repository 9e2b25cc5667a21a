# account/roles.py
"""
Role & capability gereja.

Role user disimpan di UserProfile.role. Hak akses TIDAK dicek dengan
membandingkan string role di tiap view; setiap role dipetakan sekali ke
himpunan Capability lewat ROLE_CAPABILITIES, lalu view cukup menyebut
capability yang dibutuhkan (lihat account.permissions.HasCapability).
"""
from django.db import models


class Role(models.TextChoices):
    ADMIN = "ADMIN", "Admin"
    PENDETA = "PENDETA", "Pendeta"
    MAJELIS = "MAJELIS", "Majelis"
    EMPLOYEE = "EMPLOYEE", "Pegawai"
    JEMAAT = "JEMAAT", "Jemaat"


class Capability(models.TextChoices):
    VIEW_JEMAAT = "view_jemaat"
    MANAGE_JEMAAT = "manage_jemaat"
    VIEW_KEUANGAN = "view_keuangan"
    MANAGE_KEUANGAN = "manage_keuangan"
    VIEW_JADWAL = "view_jadwal"
    MANAGE_JADWAL = "manage_jadwal"
    VIEW_PENGUMUMAN = "view_pengumuman"
    MANAGE_PENGUMUMAN = "manage_pengumuman"
    MANAGE_USERS = "manage_users"


_STAFF_JEMAAT = {Capability.VIEW_JEMAAT, Capability.MANAGE_JEMAAT}
_KEUANGAN = {Capability.VIEW_KEUANGAN, Capability.MANAGE_KEUANGAN}
_JADWAL = {Capability.VIEW_JADWAL, Capability.MANAGE_JADWAL}
_PENGUMUMAN = {Capability.VIEW_PENGUMUMAN, Capability.MANAGE_PENGUMUMAN}

ROLE_CAPABILITIES = {
    Role.ADMIN: frozenset(set(Capability)),
    # PENDETA punya akses yang sama dengan ADMIN
    Role.PENDETA: frozenset(set(Capability)),
    Role.MAJELIS: frozenset(
        _STAFF_JEMAAT | _JADWAL | {Capability.VIEW_PENGUMUMAN}
    ),
    Role.EMPLOYEE: frozenset(_STAFF_JEMAAT | _KEUANGAN | _JADWAL | _PENGUMUMAN),
    Role.JEMAAT: frozenset({Capability.VIEW_JADWAL, Capability.VIEW_PENGUMUMAN}),
}

ROLE_REDIRECTS = {
    Role.ADMIN: "/admin/dashboard",
    Role.PENDETA: "/admin/dashboard",
    Role.MAJELIS: "/majelis/dashboard",
    Role.EMPLOYEE: "/employee/dashboard",
    Role.JEMAAT: "/jemaat/dashboard",
}


def parse_role(value):
    """String role dari DB/token -> Role, atau None kalau tidak dikenal."""
    try:
        return Role(str(value).upper())
    except ValueError:
        return None


def capabilities_for(role):
    role = parse_role(role) if role is not None else None
    if role is None:
        return frozenset()
    return ROLE_CAPABILITIES[role]


def redirect_url_for(role):
    role = parse_role(role) if role is not None else None
    return ROLE_REDIRECTS.get(role, "/dashboard")
