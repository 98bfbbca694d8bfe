import sqlite3

import pytest

from mmoffline.table_handlers import (
    TableHandler,
    TableName,
    count_elements_query,
    drop_table_query,
)

SCHEMA = "( id INTEGER PRIMARY KEY NOT NULL, name TEXT )"


@pytest.fixture
def handler():
    return TableHandler("Clients", SCHEMA, ["id", "name"], 0)


@pytest.fixture
def keyless():
    return TableHandler("Loose", "( a TEXT, b TEXT )", ["a", "b"])


def test_table_name_order():
    assert [TableName(i) for i in range(6)] == list(TableName)
    assert TableName(5) is TableName.DOCUMENT_ENTRIES
    with pytest.raises(ValueError):
        TableName(6)


def test_template_queries():
    assert drop_table_query("Clients") == "drop table Clients"
    assert count_elements_query("Clients").startswith("select count(*) from ")
    assert count_elements_query("Clients").endswith("Clients")


def test_definition(handler):
    assert handler.definition() == "create table Clients " + SCHEMA
    assert handler.definition("Other").split()[2] == "Other"


def test_fields_are_tuple(handler):
    assert handler.fields == ("id", "name")
    assert handler.primary_key == "id"


def test_select_all_keeps_order(handler):
    query = handler.select_all()
    assert query.startswith("select ")
    assert query.endswith(" from Clients")
    assert query.index("id") < query.index("name")
    assert handler.all_fields_declaration() in query


def test_select_filtered(handler):
    query = handler.select_filtered("id > 3", "Other")
    assert query == handler.select_all("Other") + " where id > 3"


def test_select_by_primary_key(handler):
    assert handler.select_by_primary_key(42) == handler.select_all() + " where id = 42"


def test_primary_key_queries_without_key(keyless):
    assert keyless.select_by_primary_key(1) is None
    assert keyless.delete_by_primary_key(1) is None
    assert keyless.make_index() is None


def test_update(handler):
    assert handler.update("set name = 'x'") == "update Clients set name = 'x'"


def test_replace(handler):
    query = handler.replace("( 1 , \"a\" )", "Other")
    assert query.startswith("REPLACE INTO Other ( ")
    assert query.endswith(" ) VALUES ( 1 , \"a\" )")


def test_delete_filtered(handler):
    assert handler.delete_filtered("id = 1") == "delete from Clients where id = 1"


def test_delete_by_primary_key(handler):
    query = handler.delete_by_primary_key(7, "Other")
    assert query.startswith("DELETE FROM Other where ")
    assert query.endswith("id = 7")


def test_drop(handler):
    assert handler.drop() == drop_table_query("Clients")
    assert handler.drop("X") == drop_table_query("X")


def test_insert(handler):
    query = handler.insert("( 1 , \"a\" )")
    assert query.startswith("insert into Clients (")
    assert query.endswith(") values ( 1 , \"a\" )")


def test_make_index(handler):
    assert handler.make_index() == "CREATE INDEX Clients_index ON Clients(id)"


def test_clone_renames(handler):
    other = handler.clone("Copy")
    assert other.declaration == "Copy"
    assert other.fields == handler.fields
    assert other.primary_key_field == handler.primary_key_field
    assert handler.declaration == "Clients"


def test_bad_primary_key_index():
    with pytest.raises(ValueError):
        TableHandler("T", "( a TEXT )", ["a"], 3)


def test_queries_run_against_sqlite(handler):
    db = sqlite3.connect(":memory:")
    db.execute(handler.definition())
    db.execute(handler.make_index())
    db.execute(handler.insert("( 1 , 'alpha' )"))
    db.execute(handler.replace("( 1 , 'beta' )"))
    rows = db.execute(handler.select_by_primary_key(1)).fetchall()
    assert rows == [(1, "beta")]
    db.execute(handler.delete_by_primary_key(1))
    assert db.execute(count_elements_query("Clients")).fetchone()[0] == 0
    db.execute(handler.drop())
    tables = db.execute("select name from sqlite_master where type='table'").fetchall()
    assert tables == []