import sqlite3

from mmoffline.client import ClientEntity
from mmoffline.named_id import (
    NamedIdEntity,
    find_named_id_by_id,
    find_named_id_by_name,
)
from mmoffline.table_handlers import TableName


def test_from_fields_full():
    assert NamedIdEntity.from_fields(["kg", "3"]) == NamedIdEntity("kg", 3)


def test_from_fields_partial_and_bad():
    assert NamedIdEntity.from_fields(["kg"]) == NamedIdEntity("kg", 0)
    assert NamedIdEntity.from_fields(["kg", "bad"]) == NamedIdEntity("kg", 0)
    assert NamedIdEntity.from_fields(["a", "1", "2"]) == NamedIdEntity()


def test_json_round_trip():
    item = NamedIdEntity("piece", 8)
    restored = NamedIdEntity()
    assert restored.from_json(item.to_json())
    assert restored == item


def test_from_json_failures():
    assert not NamedIdEntity().from_json({"name": "x"})
    assert not NamedIdEntity().from_json({"id": "1"})
    assert not NamedIdEntity().from_json({"id": "q", "name": "x"})


def test_insertion_values():
    item = NamedIdEntity("kg", 3)
    assert item.insertion_values() == '( "kg" , 3 )'
    assert item.insertion_query("Measures") == item.table.insert('( "kg" , 3 )', "Measures")


def test_from_cursor_round_trip():
    connection = sqlite3.connect(":memory:")
    item = NamedIdEntity()
    connection.execute(item.table.definition("Measures"))
    rows = [("kg", 1), ("litre", 2)]
    connection.executemany("insert into Measures (name, id) values (?, ?)", rows)
    cursor = connection.execute(item.table.select_all("Measures"))
    loaded = []
    while item.from_cursor(cursor):
        loaded.append(item.clone())
    assert [(i.name, i.id) for i in loaded] == rows
    connection.close()


def test_from_cursor_bad_id():
    connection = sqlite3.connect(":memory:")
    cursor = connection.execute("select 'kg', 'oops'")
    assert not NamedIdEntity().from_cursor(cursor)
    connection.close()


def test_compare_and_order():
    assert NamedIdEntity("a", 1).compare(NamedIdEntity("b", 1))
    assert not NamedIdEntity("a", 1).compare(ClientEntity(1, "a"))
    assert NamedIdEntity("a", 5).higher_than(NamedIdEntity("z", 2))
    assert not NamedIdEntity("a", 2).higher_than(ClientEntity(5, "a"))
    assert NamedIdEntity.type_id == TableName.NAMED_IDS


def test_matches():
    item = NamedIdEntity("Kilogram", 12)
    assert item.matches("GRAM")
    assert not item.matches("12")


def test_find_by_name():
    items = [NamedIdEntity("kg", 1), NamedIdEntity("l", 2), NamedIdEntity("kg", 3)]
    assert find_named_id_by_name("kg", items) == 0
    assert find_named_id_by_name("l", items) == 1
    assert find_named_id_by_name("KG", items) == -1


def test_find_by_id():
    items = [NamedIdEntity("kg", 1), NamedIdEntity("l", 2)]
    assert find_named_id_by_id(2, items) == 1
    assert find_named_id_by_id(9, items) == -1
    assert find_named_id_by_id(1, []) == -1