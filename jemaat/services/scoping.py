# jemaat/services/scoping.py
from django.db.models import Q

from account.authentication import AuthContext
from core.exceptions import BusinessRuleError

RAYON_FORBIDDEN = (
    "Anda hanya dapat menambahkan jemaat ke keluarga dalam rayon yang Anda kelola"
)

# path ke rayon untuk tiap model yang bisa di-scope
RAYON_PATHS = {
    "keluarga": ("rayon_id",),
    "jemaat": ("keluarga__rayon_id",),
    # jadwal ibadah: rayon langsung ATAU keluarga di rayon tsb
    "jadwalibadah": ("rayon_id", "keluarga__rayon_id"),
}


def queryset_for_auth(qs, ctx):
    """
    MAJELIS dengan rayon -> hanya data rayon-nya.
    Role lain (ADMIN, PENDETA, EMPLOYEE, ...) -> semua.
    Tanpa AuthContext -> kosong.
    """
    if not isinstance(ctx, AuthContext):
        return qs.none()
    if not ctx.is_rayon_scoped:
        return qs

    paths = RAYON_PATHS.get(qs.model._meta.model_name)
    if not paths:
        return qs.none()

    cond = Q()
    for p in paths:
        cond |= Q(**{p: ctx.rayon_id})
    return qs.filter(cond)


def ensure_keluarga_in_scope(keluarga, ctx):
    """Dipakai saat create/update jemaat: keluarga harus di rayon majelis."""
    if isinstance(ctx, AuthContext) and ctx.is_rayon_scoped and keluarga.rayon_id != ctx.rayon_id:
        raise BusinessRuleError(RAYON_FORBIDDEN, status_code=403)
