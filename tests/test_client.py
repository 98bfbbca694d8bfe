import sqlite3

import pytest

from mmoffline.client import ClientEntity
from mmoffline.entity import InitializationError
from mmoffline.named_id import NamedIdEntity
from mmoffline.table_handlers import TableName


def test_from_fields():
    client = ClientEntity.from_fields(["12", "Alpha"])
    assert client == ClientEntity(12, "Alpha")


@pytest.mark.parametrize("values", [["1"], ["1", "a", "b"], ["x", "a"]])
def test_from_fields_errors(values):
    with pytest.raises(InitializationError) as info:
        ClientEntity.from_fields(values)
    assert info.value.counter == 2


def test_json_round_trip():
    client = ClientEntity(33, "Beta")
    restored = ClientEntity()
    assert restored.from_json(client.to_json())
    assert restored == client


def test_from_json_failures():
    assert not ClientEntity().from_json({"name": "x"})
    assert not ClientEntity().from_json({"id": "no", "name": "x"})
    partial = ClientEntity()
    assert not partial.from_json({"id": "5"})
    assert partial.id == 5


def test_insertion_values_and_query():
    client = ClientEntity(5, "Bob")
    assert client.insertion_values() == '( 5 , "Bob" )'
    assert client.insertion_query() == client.table.insert('( 5 , "Bob" )')
    assert client.table.declaration == "Clients"


def test_from_cursor_iterates_rows():
    connection = sqlite3.connect(":memory:")
    client = ClientEntity()
    connection.execute(client.table.definition())
    rows = [(1, "One"), (2, "Two")]
    connection.executemany("insert into Clients (id, name) values (?, ?)", rows)
    cursor = connection.execute(client.table.select_all())
    loaded = []
    while client.from_cursor(cursor):
        loaded.append(client.clone())
    assert [(c.id, c.name) for c in loaded] == rows
    connection.close()


def test_from_cursor_rejects_bad_id():
    connection = sqlite3.connect(":memory:")
    cursor = connection.execute("select 'abc', 'name'")
    assert not ClientEntity().from_cursor(cursor)
    connection.close()


def test_compare_and_deep_compare():
    assert ClientEntity(1, "a").compare(ClientEntity(1, "b"))
    assert not ClientEntity(1, "a").compare(ClientEntity(2, "a"))
    assert not ClientEntity(1, "a").deep_compare(NamedIdEntity("a", 1))
    assert ClientEntity.type_id == TableName.CLIENTS


def test_higher_than_uses_name_prefix():
    assert ClientEntity(1, "beta").higher_than(ClientEntity(9, "Alpha"))
    assert not ClientEntity(9, "Alpha").higher_than(ClientEntity(1, "beta"))


def test_higher_than_falls_back_to_id():
    assert ClientEntity(9, "Same").higher_than(ClientEntity(1, "same"))
    assert not ClientEntity(1, "Same").higher_than(ClientEntity(9, "same"))
    assert ClientEntity(9, "abcdefX").higher_than(ClientEntity(1, "abcdeA"))


def test_higher_than_empty_name():
    assert not ClientEntity(9, "").higher_than(ClientEntity(1, "x"))


def test_higher_than_other_type_uses_id():
    assert ClientEntity(9, "a").higher_than(NamedIdEntity("z", 1))
    assert not ClientEntity(1, "z").higher_than(NamedIdEntity("a", 9))


def test_matches():
    client = ClientEntity(1234, "Green Shop")
    assert client.matches("green")
    assert client.matches("23")
    assert not client.matches("blue")