import pytest

from mmoffline.entity import InitializationError
from mmoffline.named_id import NamedIdEntity
from mmoffline.product import (
    JSON_FIELDS,
    ProductEntity,
    deserialize_id_list,
    serialize_id_list,
)


class _Cursor:
    def __init__(self, rows):
        self._rows = iter(rows)

    def fetchone(self):
        return next(self._rows, None)


def _tea():
    return ProductEntity(5, "Tea", 2.5, 3, 7, [1, 2])


def test_serialize_id_list_format():
    assert serialize_id_list([1, 2]) == "1|2|"


def test_id_list_round_trip():
    ids = [5, 17, 300]
    assert deserialize_id_list(serialize_id_list(ids)) == ids


def test_deserialize_skips_empty_and_junk():
    assert deserialize_id_list("3||x|4|") == [3, 4]


def test_serialize_empty_list():
    assert deserialize_id_list(serialize_id_list([])) == []


def test_default_id_is_int32_min():
    assert ProductEntity().id == -2147483648


def test_from_fields_full():
    p = ProductEntity.from_fields(["5", "Tea", "2.5", "3", "7", "1|2|"])
    assert p == _tea()


def test_from_fields_prefix_keeps_defaults():
    p = ProductEntity.from_fields(["9", "Milk"])
    assert (p.id, p.name, p.price, p.measure, p.client_ids) == (9, "Milk", 0.0, 0, [])


def test_from_fields_bad_price():
    with pytest.raises(InitializationError) as info:
        ProductEntity.from_fields(["5", "Tea", "cheap"])
    assert info.value.counter == 1


def test_from_fields_empty_raises():
    with pytest.raises(InitializationError):
        ProductEntity.from_fields([])


def test_from_fields_too_many_raises():
    with pytest.raises(InitializationError):
        ProductEntity.from_fields(["1"] * 7)


def test_to_json_keys():
    assert list(_tea().to_json()) == list(JSON_FIELDS)
    assert list(JSON_FIELDS) == ["id", "name", "price", "um", "group_id", "clients_id_list"]


def test_json_round_trip():
    original = _tea()
    restored = ProductEntity()
    assert restored.from_json(original.to_json()) is True
    assert restored == original


def test_from_json_empty_is_false():
    assert ProductEntity().from_json({}) is False


def test_from_json_uses_defaults():
    p = ProductEntity()
    assert p.from_json({"name": "Salt"}) is True
    assert p.id == -1
    assert p.name == "Salt"


def test_insertion_values():
    assert _tea().insertion_values() == '( 5 , "Tea" , 2.5 , 3 , 7 , "1|2|" )'


def test_insertion_query_uses_table():
    p = _tea()
    query = p.insertion_query()
    assert query == p.table.insert(p.insertion_values())
    assert "Products" in query
    assert "Other" in p.insertion_query("Other")


def test_from_cursor_round_trip():
    cursor = _Cursor([(5, "Tea", 2.5, 3, 7, "1|2|")])
    p = ProductEntity()
    assert p.from_cursor(cursor) is True
    assert p == _tea()
    assert p.from_cursor(cursor) is False


def test_higher_than_by_name():
    apple = ProductEntity(1, "apple")
    banana = ProductEntity(2, "Banana")
    assert banana.higher_than(apple) is True
    assert apple.higher_than(banana) is False


def test_higher_than_same_prefix_uses_id():
    low = ProductEntity(1, "Bread white")
    high = ProductEntity(2, "bread black")
    assert high.higher_than(low) is True
    assert low.higher_than(high) is False


def test_higher_than_empty_name_is_false():
    assert ProductEntity(10, "").higher_than(ProductEntity(1, "A")) is False


def test_higher_than_other_type_uses_id():
    assert ProductEntity(10, "A").higher_than(NamedIdEntity("b", 3)) is True


def test_matches():
    p = _tea()
    assert p.matches("te") is True
    assert p.matches("5") is True
    assert p.matches("xyz") is False


def test_compare():
    assert _tea().compare(ProductEntity(5, "Other")) is True
    assert _tea().compare(NamedIdEntity("Tea", 5)) is False
    assert _tea().deep_compare(NamedIdEntity("Tea", 5)) is False


def test_clone_is_independent():
    p = _tea()
    copy = p.clone()
    copy.client_ids.append(9)
    assert p.client_ids == [1, 2]
    assert copy.compare(p) is True