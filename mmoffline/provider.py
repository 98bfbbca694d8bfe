"""SQLite access for entities: creating tables, storing and loading them."""

from __future__ import annotations

import logging
import random
import sqlite3
from typing import Any, Iterable, Optional, Sequence, Type, TypeVar, Union

from mmoffline.client import ClientEntity
from mmoffline.document import DocumentEntity
from mmoffline.document_entry import DocumentEntryEntity
from mmoffline.entity import Entity, InitializationError, format_number, parse_int
from mmoffline.group import GroupEntity
from mmoffline.named_id import NamedIdEntity
from mmoffline.product import ProductEntity
from mmoffline.table_handlers import TableName, drop_table_query, count_elements_query
from mmoffline.tables import predefined_table

DATABASE_NAME = "MainDB"

_log = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)

_PROTOTYPES: dict[TableName, Type[Entity]] = {
    TableName.CLIENTS: ClientEntity,
    TableName.PRODUCTS: ProductEntity,
    TableName.GROUPS: GroupEntity,
    TableName.NAMED_IDS: NamedIdEntity,
    TableName.DOCUMENTS: DocumentEntity,
    TableName.DOCUMENT_ENTRIES: DocumentEntryEntity,
}

TableRef = Union[TableName, int, str]


def prototype_for(table: Union[TableName, int]) -> Entity:
    """Return a fresh default entity of the type stored in a predefined table."""
    return _PROTOTYPES[TableName(table)]()


def _cell_as_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        return round(value) if value == value and abs(value) != float("inf") else None
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    try:
        return parse_int(str(value))
    except ValueError:
        return None


def _cell_as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


class SqliteDataProvider:
    """Stores and loads entities in one SQLite database.

    The connection is opened on first use and kept until ``close``; every
    statement is committed as soon as it runs. Failing statements make the
    methods return False, None or an empty result, as each one documents.
    """

    _instance: Optional["SqliteDataProvider"] = None

    def __init__(self, path: str = DATABASE_NAME, trace: bool = False) -> None:
        self.path = path
        self.trace = trace
        self._connection: Optional[sqlite3.Connection] = None

    @classmethod
    def instance(cls) -> "SqliteDataProvider":
        """Return the shared provider, creating it on first use."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def __enter__(self) -> "SqliteDataProvider":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def _db(self) -> sqlite3.Connection:
        if self._connection is None:
            self._connection = sqlite3.connect(self.path, isolation_level=None)
        return self._connection

    @property
    def is_open(self) -> bool:
        """True while a connection is held."""
        return self._connection is not None

    def close(self) -> None:
        """Close the connection; the next operation reopens it."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    def _run(self, sql: Optional[str]) -> Optional[sqlite3.Cursor]:
        if not sql:
            return None
        if self.trace:
            _log.debug("runQuery %s", sql)
        try:
            return self._db.execute(sql)
        except sqlite3.Error as error:
            if self.trace:
                _log.warning("error executing sql -> %s <- %s", sql, error)
            return None

    def _execute(self, sql: Optional[str]) -> bool:
        return self._run(sql) is not None

    def _tables(self) -> list[str]:
        cursor = self._run(
            "select name from sqlite_master where type = 'table' "
            "and name not like 'sqlite_%'"
        )
        return [] if cursor is None else [row[0] for row in cursor.fetchall()]

    @staticmethod
    def _table_name(table: TableRef) -> str:
        if isinstance(table, str):
            return table
        return predefined_table(table).declaration

    @staticmethod
    def _collect(prototype: Entity, cursor: sqlite3.Cursor) -> list[Entity]:
        loaded = []
        while prototype.from_cursor(cursor):
            loaded.append(prototype.clone())
        return loaded

    def table_exists(self, table: TableRef) -> bool:
        """True when the table, given by number or name, exists."""
        return self._table_name(table) in self._tables()

    def drop_table(self, table: TableRef) -> bool:
        """Drop a table given by number or name."""
        if isinstance(table, str):
            return self._execute(drop_table_query(table))
        return self._execute(predefined_table(table).drop())

    def create_table(self, table: TableRef) -> bool:
        """Create a predefined table with its index, or a table from a full definition."""
        if isinstance(table, str):
            return self._execute("create table " + table)
        handler = predefined_table(table)
        self._execute(handler.definition())
        return self._execute(handler.make_index())

    def create_table_for(self, entity: Entity, table: Optional[str] = None) -> bool:
        """Create the entity's table, optionally under another name, with its index."""
        self._execute(entity.table.definition(table))
        return self._execute(entity.table.make_index(table))

    def store_entity(self, entity: Entity) -> bool:
        """Insert one entity into its own table, creating the table when missing."""
        if not self.table_exists(entity.table.declaration):
            if not self.create_table_for(entity):
                return False
        return self._execute(entity.insertion_query())

    def push_data(self, entities: Iterable[Entity], table: Optional[str] = None) -> bool:
        """Insert entities into their own tables, or all into ``table``."""
        for entity in entities:
            target = entity.table.declaration if table is None else table
            if not self.table_exists(target):
                if not self.create_table_for(entity, table):
                    return False
            if not self._execute(entity.insertion_query(table)):
                return False
        return True

    def push_entity_list(self, entities: Sequence[Entity], table: Optional[str] = None) -> bool:
        """Insert entities of one type into one table, named after the first by default."""
        entities = list(entities)
        if not entities:
            return True
        name = entities[0].table.declaration if table is None else table
        if not self.table_exists(name):
            if not self.create_table_for(entities[0], name):
                return False
        return all(self._execute(entity.insertion_query(name)) for entity in entities)

    def replace_data(self, entity: Entity, table: Optional[str] = None) -> bool:
        """Replace the row holding the entity's primary key."""
        return self._execute(entity.table.replace(entity.insertion_values(), table))

    def remove_one_entity(self, entity: Entity, table: Optional[str] = None) -> bool:
        """Delete the row holding the entity's primary key."""
        return self._execute(entity.table.delete_by_primary_key(entity.entity_id, table))

    def remove_entities_filtered(
        self, prototype: Entity, filter: str, table: Optional[str] = None
    ) -> bool:
        """Delete the rows matching a where clause from the prototype's table."""
        return self._execute(prototype.table.delete_filtered(filter, table))

    def recreate_table(self, prototype: Entity) -> bool:
        """Drop the prototype's table if present, then create it anew without index."""
        if self.table_exists(prototype.table.declaration):
            self._execute(prototype.table.drop())
        return self._execute(prototype.table.definition())

    def drop_everything(self) -> None:
        """Drop every table of the database."""
        for table in self._tables():
            self.drop_table(table)

    def forced_commit(self) -> None:
        """Commit whatever is pending."""
        self._db.commit()

    def load_id_pairs(self, query: str) -> dict[int, int]:
        """Run a two-column query and map the first column to the second.

        Rows of another width or with unreadable numbers are skipped.
        """
        cursor = self._run(query)
        if cursor is None:
            return {}
        pairs: dict[int, int] = {}
        for row in cursor:
            if len(row) != 2:
                continue
            key, value = _cell_as_int(row[0]), _cell_as_int(row[1])
            if key is None or value is None:
                continue
            pairs[key] = value
        return pairs

    def load_data_from(self, table: Union[TableName, int]) -> list[Entity]:
        """Load every entity of a predefined table."""
        prototype = prototype_for(table)
        cursor = self._run(prototype.table.select_all())
        if cursor is None:
            return []
        return self._collect(prototype, cursor)

    def load_column(self, table: str) -> list[str]:
        """Return the first column of every row of a table as text, skipping nulls."""
        cursor = self._run("select * from " + table)
        if cursor is None:
            return []
        texts = (_cell_as_text(row[0]) for row in cursor if row)
        return [text for text in texts if text is not None]

    def count_data(self, table: str) -> int:
        """Number of rows in a table; 0 when it is missing."""
        if not self.table_exists(table):
            return 0
        cursor = self._run(count_elements_query(table))
        if cursor is None:
            return 0
        row = cursor.fetchone()
        if row is None:
            return 0
        count = _cell_as_int(row[0])
        return 0 if count is None else count

    def assert_id(self, query: str, entity_id: int) -> int:
        """Return an id for which ``query`` (with ``%1`` as the id) finds no row.

        Starts from ``entity_id`` and tries random ids while it is taken.
        """
        candidate = entity_id
        while True:
            cursor = self._run(query.replace("%1", str(candidate)))
            if cursor is None or cursor.fetchone() is None:
                return candidate
            candidate = random.randrange(0, 1 << 31)

    def load_data_as(
        self, prototype: Entity, filter: Optional[str] = None, table: Optional[str] = None
    ) -> list[Entity]:
        """Load entities of the prototype's type, optionally filtered or from another table."""
        handler = prototype.table
        sql = handler.select_all(table) if filter is None else handler.select_filtered(filter, table)
        cursor = self._run(sql)
        if cursor is None:
            return []
        return self._collect(prototype.clone(), cursor)

    def load_entities(
        self, entity_class: Type[E], filter: Optional[str] = None, table: Optional[str] = None
    ) -> list[E]:
        """Load entities of a class, optionally filtered or from another table."""
        return self.load_data_as(entity_class(), filter, table)  # type: ignore[return-value]

    def load_entity_by_id(
        self, entity_class: Type[E], entity_id: int, table: Optional[str] = None
    ) -> Optional[E]:
        """Load one entity by primary key.

        Returns None when the query fails; a default entity when no row matches.
        """
        entity = entity_class()
        cursor = self._run(entity.table.select_by_primary_key(entity_id, table))
        if cursor is None:
            return None
        entity.from_cursor(cursor)
        return entity

    def load_entity_as(
        self, entity_class: Type[E], filter: str, table: Optional[str] = None
    ) -> E:
        """Load the first entity matching a filter; a default entity on any failure."""
        entity = entity_class()
        cursor = self._run(entity.table.select_filtered(filter, table))
        if cursor is None:
            return entity
        try:
            entity.from_cursor(cursor)
        except InitializationError:
            entity = entity_class()
        return entity

    def load_entities_with_query(self, entity_class: Type[E], query: str) -> list[E]:
        """Load entities of a class from the rows of a full query."""
        cursor = self._run(query)
        if cursor is None:
            return []
        return self._collect(entity_class(), cursor)  # type: ignore[return-value]