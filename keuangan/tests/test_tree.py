"""Tree builder: flat item keuangan -> forest (tanpa DB)."""

import copy

import pytest

from keuangan.services.tree import (
    ExpandedNodes,
    OrphanPolicy,
    build_item_tree,
    flatten_tree,
    iter_visible,
)


def _item(id, parent=None, urutan=None, **extra):
    row = {"id": id, "parentId": parent, "kode": id, "nama": f"Item {id}", **extra}
    if urutan is not None:
        row["urutan"] = urutan
    return row


def _ids(nodes):
    return [n["id"] for n in nodes]


def _count(roots):
    return len(flatten_tree(roots))


# ── Contoh dasar ─────────────────────────────────────────────────────────────

class TestBuildItemTree:
    def test_empty_input(self) -> None:
        assert build_item_tree([]) == []

    def test_single_parent_with_sorted_children(self) -> None:
        items = [
            _item("a", urutan=1),
            _item("b", parent="a", urutan=2),
            _item("c", parent="a", urutan=1),
        ]
        roots = build_item_tree(items)

        assert _ids(roots) == ["a"]
        assert _ids(roots[0]["children"]) == ["c", "b"]
        assert roots[0]["children"][0]["children"] == []

    def test_roots_sorted_by_urutan(self) -> None:
        items = [_item("x", urutan=3), _item("y", urutan=1), _item("z", urutan=2)]
        assert _ids(build_item_tree(items)) == ["y", "z", "x"]

    def test_missing_urutan_sorts_last_and_stable(self) -> None:
        items = [
            _item("n1"),
            _item("u2", urutan=2),
            _item("n2"),
            _item("u1", urutan=1),
        ]
        assert _ids(build_item_tree(items)) == ["u1", "u2", "n1", "n2"]

    def test_equal_urutan_keeps_input_order(self) -> None:
        items = [_item("p", urutan=1), _item("q", urutan=1), _item("r", urutan=1)]
        assert _ids(build_item_tree(items)) == ["p", "q", "r"]

    def test_three_levels(self) -> None:
        items = [
            _item("A.1.1", parent="A.1", urutan=1),
            _item("A", urutan=1),
            _item("A.1", parent="A", urutan=1),
            _item("A.2", parent="A", urutan=2),
        ]
        roots = build_item_tree(items)

        assert _ids(roots) == ["A"]
        assert _ids(roots[0]["children"]) == ["A.1", "A.2"]
        assert _ids(roots[0]["children"][0]["children"]) == ["A.1.1"]

    def test_empty_string_parent_is_root(self) -> None:
        roots = build_item_tree([_item("a", parent="", urutan=1)])
        assert _ids(roots) == ["a"]

    def test_node_keeps_item_fields(self) -> None:
        roots = build_item_tree([_item("a", urutan=1, totalTarget="1500000.00", level=1)])
        node = roots[0]
        assert node["totalTarget"] == "1500000.00"
        assert node["kode"] == "a"
        assert node["level"] == 1

    def test_totals_not_rolled_up(self) -> None:
        items = [
            _item("a", urutan=1, totalTarget="0"),
            _item("b", parent="a", urutan=1, totalTarget="100"),
        ]
        roots = build_item_tree(items)
        assert roots[0]["totalTarget"] == "0"

    def test_item_without_id_is_attached_but_not_a_parent(self) -> None:
        items = [
            _item("a", urutan=1),
            {"parentId": "a", "nama": "tanpa id", "urutan": 1},
            {"nama": "root tanpa id", "urutan": 2},
        ]
        roots = build_item_tree(items)
        assert [n.get("nama") for n in roots] == ["Item a", "root tanpa id"]
        assert roots[0]["children"][0]["nama"] == "tanpa id"


# ── Parent yang tidak ditemukan ──────────────────────────────────────────────

class TestOrphanPolicy:
    ITEMS = [
        _item("a", urutan=1),
        _item("b", parent="missing", urutan=1),
        _item("c", parent="b", urutan=1),
    ]

    def test_drop_is_default(self) -> None:
        roots = build_item_tree(self.ITEMS)
        assert _ids(roots) == ["a"]
        assert _count(roots) == 1

    def test_promote_surfaces_orphan_as_root(self) -> None:
        roots = build_item_tree(self.ITEMS, orphan_policy=OrphanPolicy.PROMOTE)
        assert _ids(roots) == ["a", "b"]
        assert _ids(roots[1]["children"]) == ["c"]

    def test_policy_accepts_string_value(self) -> None:
        roots = build_item_tree(self.ITEMS, orphan_policy="promote")
        assert _ids(roots) == ["a", "b"]

    def test_unknown_policy_rejected(self) -> None:
        with pytest.raises(ValueError):
            build_item_tree(self.ITEMS, orphan_policy="keep")


class TestCycles:
    def test_two_node_cycle_never_reaches_roots(self) -> None:
        items = [
            _item("root", urutan=1),
            _item("x", parent="y", urutan=1),
            _item("y", parent="x", urutan=2),
        ]
        roots = build_item_tree(items)
        assert _ids(roots) == ["root"]
        assert _count(roots) == 1

    def test_self_parent_is_dropped(self) -> None:
        roots = build_item_tree([_item("s", parent="s", urutan=1)])
        assert roots == []


# ── Properti umum ────────────────────────────────────────────────────────────

SAMPLE = [
    _item("B", urutan=2),
    _item("A", urutan=1),
    _item("A.2", parent="A", urutan=2),
    _item("A.1", parent="A", urutan=1),
    _item("A.1.1", parent="A.1", urutan=1),
    _item("B.1", parent="B"),
    _item("Z.1", parent="Z", urutan=1),  # parent tidak ada
]


class TestTreeProperties:
    def test_cardinality(self) -> None:
        ids = {row["id"] for row in SAMPLE}
        expected = sum(1 for row in SAMPLE if not row["parentId"] or row["parentId"] in ids)
        assert _count(build_item_tree(SAMPLE)) == expected

    def test_roots_are_exactly_items_without_parent(self) -> None:
        roots = build_item_tree(SAMPLE)
        assert set(_ids(roots)) == {row["id"] for row in SAMPLE if not row["parentId"]}

    def test_every_child_attached_to_its_parent(self) -> None:
        roots = build_item_tree(SAMPLE)
        by_id = {node["id"]: node for node, _ in flatten_tree(roots)}
        for row in SAMPLE:
            parent = by_id.get(row["parentId"])
            if parent is not None:
                assert row["id"] in _ids(parent["children"])

    def test_siblings_sorted(self) -> None:
        roots = build_item_tree(SAMPLE)
        groups = [roots] + [node["children"] for node, _ in flatten_tree(roots)]
        for siblings in groups:
            keys = [(n.get("urutan") is None, n.get("urutan") or 0) for n in siblings]
            assert keys == sorted(keys)

    def test_idempotent_and_input_untouched(self) -> None:
        before = copy.deepcopy(SAMPLE)
        first = build_item_tree(SAMPLE)
        second = build_item_tree(SAMPLE)

        assert first == second
        assert SAMPLE == before
        assert all("children" not in row for row in SAMPLE)

    def test_existing_children_key_is_replaced(self) -> None:
        items = [{"id": "a", "urutan": 1, "children": ["stale"]}]
        roots = build_item_tree(items)
        assert roots[0]["children"] == []
        assert items[0]["children"] == ["stale"]


# ── Rendering helpers ────────────────────────────────────────────────────────

class TestRendering:
    def test_flatten_depth_first_with_depth(self) -> None:
        roots = build_item_tree(SAMPLE)
        assert [(n["id"], d) for n, d in flatten_tree(roots)] == [
            ("A", 0), ("A.1", 1), ("A.1.1", 2), ("A.2", 1), ("B", 0), ("B.1", 1),
        ]

    def test_iter_visible_all_collapsed(self) -> None:
        roots = build_item_tree(SAMPLE)
        visible = [n["id"] for n, _ in iter_visible(roots, ExpandedNodes())]
        assert visible == ["A", "B"]

    def test_iter_visible_partially_expanded(self) -> None:
        roots = build_item_tree(SAMPLE)
        expanded = ExpandedNodes(["A"])
        visible = [(n["id"], d) for n, d in iter_visible(roots, expanded)]
        assert visible == [("A", 0), ("A.1", 1), ("A.2", 1), ("B", 0)]

    def test_iter_visible_without_state_shows_everything(self) -> None:
        roots = build_item_tree(SAMPLE)
        assert list(iter_visible(roots)) == flatten_tree(roots)

    def test_expanded_nodes_toggle(self) -> None:
        state = ExpandedNodes()
        assert state.toggle("A") is True
        assert state.is_expanded("A")
        assert "A" in state
        assert state.toggle("A") is False
        assert not state.is_expanded("A")

    def test_expand_collapse(self) -> None:
        state = ExpandedNodes()
        state.expand("x")
        state.expand(None)
        assert state.as_list() == ["x"]
        state.collapse("x")
        state.collapse("never-added")
        assert len(state) == 0

    def test_expand_all_only_marks_parents(self) -> None:
        roots = build_item_tree(SAMPLE)
        state = ExpandedNodes()
        state.expand_all(roots)
        assert state.as_list() == ["A", "A.1", "B"]
        assert list(iter_visible(roots, state)) == flatten_tree(roots)

    def test_states_are_independent(self) -> None:
        one, two = ExpandedNodes(), ExpandedNodes()
        one.expand("A")
        assert not two.is_expanded("A")
