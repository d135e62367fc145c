import json
import logging

from routine_builder.catalog.models import Product
from routine_builder.selection.selection_set import SelectionSet


def _p(pid, name=None):
    return Product(id=pid, name=name or f"Product {pid}", brand="B", category="c", image="i")


def test_toggle_adds_then_removes():
    s = SelectionSet()
    assert s.toggle(_p(1)) is True
    assert s.contains(1)
    assert s.toggle(_p(1)) is False
    assert not s.contains(1)
    assert len(s) == 0


def test_double_toggle_restores_content_and_order():
    s = SelectionSet([_p(1), _p(2), _p(3)])
    before = s.items

    s.toggle(_p(4))
    s.toggle(_p(4))
    assert s.items == before

    s.toggle(_p(2))
    s.toggle(_p(2))
    # re-adding moves the product to the end
    assert s.ids == [1, 3, 2]


def test_membership_is_odd_toggle_count_in_first_toggle_order():
    s = SelectionSet()
    for pid in [3, 1, 2, 1, 5, 2, 2, 4, 5]:
        s.toggle(_p(pid))
    # 3:1x 1:2x 2:3x 5:2x 4:1x
    assert s.ids == [3, 2, 4]


def test_removal_preserves_order_of_remaining_members():
    s = SelectionSet([_p(1), _p(2)])
    s.toggle(_p(1))
    assert s.ids == [2]


def test_toggle_removes_by_id_not_by_value():
    s = SelectionSet([_p(1, "Old name")])
    s.toggle(_p(1, "New name"))
    assert len(s) == 0


def test_entries_are_snapshots():
    s = SelectionSet()
    s.toggle(_p(1, "Original"))
    # a newer catalog record for the same id does not refresh the entry
    assert s.get(1).name == "Original"


def test_clear_empties_unconditionally():
    s = SelectionSet([_p(1), _p(2)])
    s.clear()
    assert s.items == []
    s.clear()
    assert s.items == []


def test_every_mutation_notifies_exactly_once():
    s = SelectionSet()
    calls = []
    s.subscribe(lambda sel: calls.append(sel.ids))

    s.toggle(_p(1))
    s.toggle(_p(2))
    s.toggle(_p(1))
    s.clear()
    s.clear()

    assert calls == [[1], [1, 2], [2], [], []]


def test_restore_does_not_notify():
    s = SelectionSet()
    calls = []
    s.subscribe(lambda sel: calls.append(1))
    s.restore(SelectionSet([_p(1)]).serialize())
    assert calls == []


def test_unsubscribe_stops_notifications():
    s = SelectionSet()
    calls = []
    unsubscribe = s.subscribe(lambda sel: calls.append(1))
    s.toggle(_p(1))
    unsubscribe()
    s.toggle(_p(2))
    assert calls == [1]


def test_failing_listener_does_not_block_others(caplog):
    s = SelectionSet()
    calls = []

    def boom(sel):
        raise RuntimeError("render failed")

    s.subscribe(boom)
    s.subscribe(lambda sel: calls.append(sel.ids))

    with caplog.at_level(logging.ERROR):
        s.toggle(_p(1))

    assert s.ids == [1]
    assert calls == [[1]]
    assert "listener" in caplog.text


def test_serialize_restore_round_trip():
    products = [
        Product(id=7, name="Crème", brand="Lancôme", category="moisturizer", image="x", description="Rich"),
        Product(id="sku-2", name="Serum", brand="Y", category="serum", image="y"),
    ]
    original = SelectionSet(products)

    restored = SelectionSet()
    assert restored.restore(original.serialize()) is True

    assert restored.items == original.items
    assert restored.ids == [7, "sku-2"]


def test_serialized_form_is_json_array_of_records():
    s = SelectionSet([_p(1)])
    assert json.loads(s.serialize()) == [{"id": 1, "name": "Product 1", "brand": "B", "category": "c", "image": "i"}]


def test_restore_malformed_input_leaves_empty_set(caplog):
    for bad in ["{not json", '{"id": 1}', "[1, 2]", '[{"id": 1}]', "null"]:
        s = SelectionSet([_p(1)])
        with caplog.at_level(logging.ERROR):
            assert s.restore(bad) is False
        assert s.items == []
    assert "Error loading saved products" in caplog.text


def test_restore_collapses_duplicate_ids():
    record = {"id": 1, "name": "A", "brand": "B", "category": "c", "image": "i"}
    s = SelectionSet()
    assert s.restore(json.dumps([record, dict(record, name="Dup")])) is True
    assert [p.name for p in s] == ["A"]
