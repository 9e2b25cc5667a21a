# keuangan/services/periode.py
import logging

from django.db import transaction
from django.db.models import Q

from core.exceptions import BusinessRuleError
from keuangan.models import ItemKeuangan, PeriodeAnggaran, RealisasiItemKeuangan
from keuangan.services.items import delete_items_bottom_up
from keuangan.services.tree import build_item_tree, flatten_tree

logger = logging.getLogger(__name__)

OVERLAP_MESSAGE = "Periode anggaran tidak boleh tumpang tindih dengan periode lain"


def find_overlapping(tanggal_mulai, tanggal_akhir, exclude_pk=None):
    """Periode lain yang rentangnya beririsan dengan [tanggal_mulai, tanggal_akhir]."""
    qs = PeriodeAnggaran.objects.filter(
        Q(tanggal_mulai__lte=tanggal_akhir) & Q(tanggal_akhir__gte=tanggal_mulai)
    )
    if exclude_pk:
        qs = qs.exclude(pk=exclude_pk)
    return qs.first()


def validate_range(tanggal_mulai, tanggal_akhir, exclude_pk=None):
    if tanggal_mulai >= tanggal_akhir:
        raise BusinessRuleError(
            "Validasi gagal",
            {"tanggalAkhir": "Tanggal akhir harus setelah tanggal mulai"},
        )
    if find_overlapping(tanggal_mulai, tanggal_akhir, exclude_pk):
        raise BusinessRuleError(OVERLAP_MESSAGE)


@transaction.atomic
def create_periode(**data):
    validate_range(data["tanggal_mulai"], data["tanggal_akhir"])
    periode = PeriodeAnggaran.objects.create(**data)
    logger.info("Periode anggaran %s dibuat", periode.nama)
    return periode


@transaction.atomic
def update_periode(periode, **changes):
    if "tanggal_mulai" in changes or "tanggal_akhir" in changes:
        validate_range(
            changes.get("tanggal_mulai", periode.tanggal_mulai),
            changes.get("tanggal_akhir", periode.tanggal_akhir),
            exclude_pk=periode.pk,
        )
    for name, value in changes.items():
        setattr(periode, name, value)
    periode.save()
    return periode


@transaction.atomic
def delete_periode(periode):
    if periode.items.exists():
        raise BusinessRuleError("Periode tidak dapat dihapus karena masih memiliki item keuangan")
    if periode.realisasi.exists():
        raise BusinessRuleError("Periode tidak dapat dihapus karena masih memiliki realisasi")
    periode.delete()


@transaction.atomic
def populate_from_periode(target, source, overwrite=False):
    """
    Salin item aktif periode `source` ke periode `target`, hierarki dipertahankan
    (parent dipetakan ke salinannya). Item yang parent-nya tidak ikut tersalin
    (nonaktif) dilewati beserta turunannya.
    Return jumlah item yang dibuat.
    """
    if source.pk == target.pk:
        raise BusinessRuleError("Periode sumber dan tujuan tidak boleh sama")

    existing = ItemKeuangan.objects.filter(periode=target)
    if existing.exists():
        if not overwrite:
            raise BusinessRuleError(
                "Periode anggaran sudah memiliki item. "
                "Gunakan parameter overwrite=true untuk menimpa."
            )
        if RealisasiItemKeuangan.objects.filter(item__periode=target).exists():
            raise BusinessRuleError(
                "Item periode ini tidak dapat ditimpa karena sudah memiliki realisasi"
            )
        removed = delete_items_bottom_up(existing)
        logger.info("Populate overwrite: %s item lama di periode %s dihapus", removed, target.nama)

    source_items = {
        str(item.pk): item
        for item in ItemKeuangan.objects.filter(periode=source, is_active=True)
    }
    if not source_items:
        raise BusinessRuleError("Tidak ada item keuangan aktif untuk di-populate")

    # urutan pohon (parent selalu sebelum anaknya); item yang parent-nya
    # nonaktif tidak masuk pohon sehingga ikut terlewati
    roots = build_item_tree(source_items.values())
    copies = {}
    for node, _depth in flatten_tree(roots):
        item = source_items[node["id"]]
        copies[item.pk] = ItemKeuangan.objects.create(
            kategori_id=item.kategori_id,
            periode=target,
            parent=copies.get(item.parent_id),
            kode=item.kode,
            nama=item.nama,
            deskripsi=item.deskripsi,
            level=item.level,
            urutan=item.urutan,
            target_frekuensi=item.target_frekuensi,
            satuan_frekuensi=item.satuan_frekuensi,
            nominal_satuan=item.nominal_satuan,
            total_target=item.total_target,
            keterangan=item.keterangan,
        )

    skipped = len(source_items) - len(copies)
    if skipped:
        logger.warning("Populate %s -> %s: %s item dilewati (parent tidak aktif)", source.nama, target.nama, skipped)
    logger.info("Populate %s -> %s: %s item dibuat", source.nama, target.nama, len(copies))
    return len(copies)
