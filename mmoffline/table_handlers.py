"""Table handlers that build the SQL statements used for entity tables."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Optional


class TableName(IntEnum):
    """Numbers of the predefined tables; also used as entity type ids."""

    CLIENTS = 0
    PRODUCTS = 1
    GROUPS = 2
    NAMED_IDS = 3
    DOCUMENTS = 4
    DOCUMENT_ENTRIES = 5


def drop_table_query(table: str) -> str:
    """Return a query dropping the named table."""
    return f"drop table {table}"


def count_elements_query(table: str) -> str:
    """Return a query counting all rows of the named table."""
    return f"select count(*) from {table}"


@dataclass(frozen=True)
class TableHandler:
    """Describes one table and builds the queries that operate on it.

    ``declaration`` is the table name, ``schema`` the column definition part
    of the ``create table`` statement, ``fields`` the column names in the
    order used for selects and inserts, and ``primary_key_field`` the index
    of the primary key column in ``fields`` (``-1`` when there is none).
    Every builder accepts ``another_name`` to target a table with the same
    layout under a different name.
    """

    declaration: str = ""
    schema: str = ""
    fields: tuple[str, ...] = ()
    primary_key_field: int = -1
    table_type: int = 1

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))
        if self.primary_key_field != -1 and not 0 <= self.primary_key_field < len(self.fields):
            raise ValueError(
                f"primary key index {self.primary_key_field} is outside of "
                f"{len(self.fields)} fields"
            )

    @property
    def primary_key(self) -> Optional[str]:
        """Name of the primary key column, or None."""
        if self.primary_key_field == -1:
            return None
        return self.fields[self.primary_key_field]

    def _name(self, another_name: Optional[str]) -> str:
        return self.declaration if another_name is None else another_name

    def definition(self, another_name: Optional[str] = None) -> str:
        """Return the ``create table`` statement."""
        return f"create table {self._name(another_name)} {self.schema}"

    def all_fields_declaration(self) -> str:
        """Return the column names joined for use in a statement."""
        return " , ".join(self.fields)

    def select_all(self, another_name: Optional[str] = None) -> str:
        """Return a select of every row, columns in declared order."""
        return f"select {self.all_fields_declaration()} from {self._name(another_name)}"

    def select_filtered(self, filter: str, another_name: Optional[str] = None) -> str:
        """Return a select restricted by a where clause."""
        return f"{self.select_all(another_name)} where {filter}"

    def select_by_primary_key(
        self, pkey_value: object, another_name: Optional[str] = None
    ) -> Optional[str]:
        """Return a select of one row by primary key, or None without a key."""
        key = self.primary_key
        if key is None:
            return None
        return f"{self.select_all(another_name)} where {key} = {pkey_value}"

    def update(self, values: str, another_name: Optional[str] = None) -> str:
        """Return an update statement with the given set/where part."""
        return f"update {self._name(another_name)} {values}"

    def replace(self, values: str, another_name: Optional[str] = None) -> str:
        """Return a ``REPLACE INTO`` statement for the given values."""
        return (
            f"REPLACE INTO {self._name(another_name)} ( "
            f"{self.all_fields_declaration()} ) VALUES {values}"
        )

    def delete_filtered(self, filter: str, another_name: Optional[str] = None) -> str:
        """Return a delete of every row matching the filter."""
        return f"delete from {self._name(another_name)} where {filter}"

    def delete_by_primary_key(
        self, pkey_value: object, another_name: Optional[str] = None
    ) -> Optional[str]:
        """Return a delete of one row by primary key, or None without a key."""
        key = self.primary_key
        if key is None:
            return None
        return f"DELETE FROM {self._name(another_name)} where {key} = {pkey_value}"

    def drop(self, another_name: Optional[str] = None) -> str:
        """Return a statement dropping the table."""
        return drop_table_query(self._name(another_name))

    def insert(self, values: str, another_name: Optional[str] = None) -> str:
        """Return an insert statement for the given values."""
        return (
            f"insert into {self._name(another_name)} "
            f"({self.all_fields_declaration()}) values {values}"
        )

    def make_index(self, another_name: Optional[str] = None) -> Optional[str]:
        """Return an index creation statement on the primary key, or None."""
        key = self.primary_key
        if key is None:
            return None
        name = self._name(another_name)
        return f"CREATE INDEX {name}_index ON {name}({key})"

    def clone(self, new_name: str) -> "TableHandler":
        """Return a copy of this handler describing a table named ``new_name``."""
        return TableHandler(new_name, self.schema, self.fields, self.primary_key_field)


def make_handler(
    declaration: str, schema: str, fields: Iterable[str], primary_key_field: int = -1
) -> TableHandler:
    """Build a handler from any iterable of field names."""
    return TableHandler(declaration, schema, tuple(fields), primary_key_field)