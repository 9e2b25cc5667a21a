# keuangan/services/items.py
import logging

from django.db import transaction
from django.db.models import Count, Max, Q

from core.exceptions import BusinessRuleError
from keuangan.models import ItemKeuangan, KategoriKeuangan, PeriodeAnggaran
from keuangan.services.kode import generate_item_kode

logger = logging.getLogger(__name__)

ITEM_ORDERING = ["kategori__kode", "level", "urutan", "kode"]

UPDATABLE_FIELDS = (
    "kode",
    "nama",
    "deskripsi",
    "target_frekuensi",
    "satuan_frekuensi",
    "nominal_satuan",
    "total_target",
    "keterangan",
    "is_active",
)


def item_queryset():
    return (
        ItemKeuangan.objects
        .select_related("kategori", "periode", "parent")
        .annotate(children_count=Count("children", distinct=True))
    )


def filter_items(qs, *, search=None, kategori_id=None, periode_id=None, parent_id=None, level=None):
    """
    Filter list item. parent_id="null" -> hanya root.
    Hanya item aktif yang dikembalikan.
    """
    qs = qs.filter(is_active=True)

    if search:
        qs = qs.filter(
            Q(nama__icontains=search)
            | Q(kode__icontains=search)
            | Q(deskripsi__icontains=search)
        )
    if kategori_id:
        qs = qs.filter(kategori_id=kategori_id)
    if periode_id:
        qs = qs.filter(periode_id=periode_id)
    if parent_id:
        if parent_id == "null":
            qs = qs.filter(parent__isnull=True)
        else:
            qs = qs.filter(parent_id=parent_id)
    if level is not None:
        qs = qs.filter(level=level)

    return qs.order_by(*ITEM_ORDERING)


def next_urutan(kategori, periode, parent):
    agg = ItemKeuangan.objects.filter(
        kategori=kategori,
        periode=periode,
        parent=parent,
        is_active=True,
    ).aggregate(m=Max("urutan"))
    return (agg["m"] or 0) + 1


@transaction.atomic
def create_item(*, kategori_id, periode_id, nama, parent_id=None, kode=None, **fields):
    kategori = KategoriKeuangan.objects.filter(pk=kategori_id).first()
    if kategori is None:
        raise BusinessRuleError("Kategori tidak ditemukan")

    periode = PeriodeAnggaran.objects.filter(pk=periode_id).first()
    if periode is None:
        raise BusinessRuleError("Periode tidak ditemukan")

    parent = None
    level = 1
    if parent_id:
        parent = ItemKeuangan.objects.filter(pk=parent_id).first()
        if parent is None:
            raise BusinessRuleError("Parent item tidak ditemukan")
        if parent.kategori_id != kategori.pk:
            raise BusinessRuleError("Parent harus dalam kategori yang sama")
        if parent.periode_id != periode.pk:
            raise BusinessRuleError("Parent harus dalam periode yang sama")
        level = parent.level + 1

    kode = (kode or "").strip() or generate_item_kode(kategori, periode, parent)

    if ItemKeuangan.objects.filter(kategori=kategori, periode=periode, kode=kode).exists():
        raise BusinessRuleError("Kode sudah digunakan dalam kategori dan periode ini")

    item = ItemKeuangan.objects.create(
        kategori=kategori,
        periode=periode,
        parent=parent,
        kode=kode,
        nama=nama,
        level=level,
        urutan=next_urutan(kategori, periode, parent),
        **fields,
    )
    logger.info("Item keuangan %s (%s) dibuat di periode %s", item.kode, item.pk, periode.nama)
    return item


@transaction.atomic
def update_item(item, **changes):
    kode = changes.get("kode")
    if kode is not None:
        kode = kode.strip()
        changes["kode"] = kode
        if kode != item.kode:
            dup = (
                ItemKeuangan.objects
                .filter(kategori_id=item.kategori_id, periode_id=item.periode_id, kode=kode)
                .exclude(pk=item.pk)
                .exists()
            )
            if dup:
                raise BusinessRuleError("Kode sudah digunakan dalam kategori ini")

    update_fields = []
    for name in UPDATABLE_FIELDS:
        if name in changes:
            setattr(item, name, changes[name])
            update_fields.append(name)

    if update_fields:
        item.save(update_fields=update_fields + ["updated_at"])
    return item


@transaction.atomic
def delete_item(item):
    if item.children.exists():
        raise BusinessRuleError("Item tidak dapat dihapus karena masih memiliki sub item")
    if item.realisasi.exists():
        raise BusinessRuleError("Item tidak dapat dihapus karena masih memiliki realisasi")
    logger.info("Item keuangan %s (%s) dihapus", item.kode, item.pk)
    item.delete()


def delete_items_bottom_up(qs):
    """
    Hapus sekumpulan item (FK parent = PROTECT): daun dulu, lalu naik.
    Return jumlah item yang terhapus.
    """
    deleted = 0
    while True:
        leaves = qs.filter(children__isnull=True)
        n, _ = leaves.delete()
        if not n:
            break
        deleted += n
    return deleted
