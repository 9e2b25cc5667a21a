# keuangan/services/kode.py
from keuangan.models import ItemKeuangan


def letter_code(index):
    """0 -> A, 25 -> Z, 26 -> AA, ..."""
    s = ""
    n = index + 1
    while n > 0:
        n, r = divmod(n - 1, 26)
        s = chr(65 + r) + s
    return s


def hierarchical_kode(parent_kode, child_index, level):
    # Level 1: A, B, C ...; Level 2+: A.1, A.1.1, ...
    if level == 1:
        return letter_code(child_index)
    return f"{parent_kode}.{child_index + 1}"


def generate_item_kode(kategori, periode, parent=None):
    """
    Kode otomatis untuk item baru:
    - level 1 -> kode kategori; kalau sudah dipakai -> huruf berikutnya (A, B, ...)
    - level 2+ -> <kode parent>.<urutan anak>
    Kandidat yang sudah dipakai dalam (kategori, periode) dilewati.
    """
    level = parent.level + 1 if parent else 1
    siblings = ItemKeuangan.objects.filter(
        kategori=kategori,
        periode=periode,
        parent=parent,
        is_active=True,
    )
    idx = siblings.count()

    taken = set(
        ItemKeuangan.objects
        .filter(kategori=kategori, periode=periode)
        .values_list("kode", flat=True)
    )

    if level == 1 and kategori.kode not in taken:
        return kategori.kode

    while True:
        kode = hierarchical_kode(parent.kode if parent else None, idx, level)
        if kode not in taken:
            return kode
        idx += 1
