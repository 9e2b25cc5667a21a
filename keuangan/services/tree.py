# keuangan/services/tree.py
"""
Susun list item keuangan (flat, masing-masing punya parentId opsional)
menjadi pohon untuk tampilan hierarkis:

    items (DB / serializer) -> build_item_tree() -> renderer (API, CLI, admin)

Dua pass, O(n):
  PASS 1: id -> node (salinan dangkal item + children kosong)
  PASS 2: tempel node ke children parent-nya, atau ke roots kalau parentId kosong

Node yang parentId-nya tidak ketemu (parent beda periode, nonaktif, terhapus)
mengikuti OrphanPolicy: DROP (default) dibuang, PROMOTE dijadikan root.
Tidak ada deteksi siklus; node di dalam siklus hanya saling menempel dan
tidak pernah sampai ke roots.
"""
from collections.abc import Mapping
from enum import Enum
from numbers import Number


class OrphanPolicy(str, Enum):
    DROP = "drop"
    PROMOTE = "promote"


def _str_or_none(v):
    return None if v is None else str(v)


def item_as_dict(item):
    """ItemKeuangan (model) -> mapping dengan key yang sama dengan API."""
    return {
        "id": _str_or_none(item.pk),
        "parentId": _str_or_none(item.parent_id),
        "kategoriId": _str_or_none(item.kategori_id),
        "periodeId": _str_or_none(item.periode_id),
        "kode": item.kode,
        "nama": item.nama,
        "level": item.level,
        "urutan": item.urutan,
        "targetFrekuensi": item.target_frekuensi,
        "satuanFrekuensi": item.satuan_frekuensi,
        "nominalSatuan": item.nominal_satuan,
        "totalTarget": item.total_target,
        "isActive": item.is_active,
    }


def _as_node(item):
    node = dict(item) if isinstance(item, Mapping) else item_as_dict(item)
    node["children"] = []
    return node


def _is_blank(v):
    return v is None or v == ""


def _urutan_key(node):
    # urutan kosong / bukan angka -> paling belakang
    u = node.get("urutan")
    if isinstance(u, Number) and not isinstance(u, bool):
        return (0, u)
    return (1, 0)


def build_item_tree(items, orphan_policy=OrphanPolicy.DROP):
    """
    Return list root node; setiap node = salinan dangkal item + "children".
    Roots & setiap children diurutkan berdasarkan urutan (stabil).
    Input tidak diubah.
    """
    orphan_policy = OrphanPolicy(orphan_policy)

    # PASS 1
    nodes = [_as_node(item) for item in items]
    by_id = {}
    for node in nodes:
        node_id = node.get("id")
        if not _is_blank(node_id):
            by_id[str(node_id)] = node

    # PASS 2
    roots = []
    for node in nodes:
        parent_id = node.get("parentId")
        if _is_blank(parent_id):
            roots.append(node)
            continue

        parent = by_id.get(str(parent_id))
        if parent is not None:
            parent["children"].append(node)
        elif orphan_policy is OrphanPolicy.PROMOTE:
            roots.append(node)

    roots.sort(key=_urutan_key)
    for node in nodes:
        node["children"].sort(key=_urutan_key)
    return roots


def flatten_tree(roots):
    """Depth-first (node, depth) untuk seluruh forest."""
    return list(_walk(roots, lambda node: True))


def iter_visible(roots, expanded=None):
    """
    Depth-first (node, depth) hanya untuk node yang terlihat:
    children ikut ditampilkan kalau parent-nya expanded.
    expanded=None -> semua terbuka.
    """
    if expanded is None:
        return _walk(roots, lambda node: True)
    return _walk(roots, lambda node: expanded.is_expanded(node.get("id")))


def _walk(roots, descend):
    stack = [(node, 0) for node in reversed(roots)]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        children = node.get("children") or []
        if children and descend(node):
            stack.extend((child, depth + 1) for child in reversed(children))


class ExpandedNodes:
    """
    State buka/tutup node pohon (per tampilan, bukan global).
    """

    def __init__(self, ids=()):
        self._ids = {str(i) for i in ids if not _is_blank(i)}

    def __contains__(self, node_id):
        return self.is_expanded(node_id)

    def __len__(self):
        return len(self._ids)

    def is_expanded(self, node_id):
        return not _is_blank(node_id) and str(node_id) in self._ids

    def expand(self, node_id):
        if not _is_blank(node_id):
            self._ids.add(str(node_id))

    def collapse(self, node_id):
        self._ids.discard(str(node_id))

    def toggle(self, node_id):
        """Return True kalau setelah toggle node jadi expanded."""
        if self.is_expanded(node_id):
            self.collapse(node_id)
            return False
        self.expand(node_id)
        return self.is_expanded(node_id)

    def expand_all(self, roots):
        for node, _depth in flatten_tree(roots):
            if node.get("children"):
                self.expand(node.get("id"))

    def collapse_all(self):
        self._ids.clear()

    def as_list(self):
        return sorted(self._ids)
