# mmoffline

The data layer of an offline order-taking application. It keeps clients,
products, product groups, named lookups (measures, document types, options,
warehouses), order documents and their entries in a local SQLite database. It
can import reference data from a folder of CSV files. It also provides
in-memory list models for search, selection and per-item counters.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `mmoffline.table_handlers`: `TableName`, the numbers of the predefined
  tables, and `TableHandler`, which builds SQL statements from a table's name,
  schema and field list. Its builders are `definition`, `select_all`,
  `select_filtered`, `select_by_primary_key`, `update`, `replace`,
  `delete_filtered`, `delete_by_primary_key`, `drop`, `insert` and
  `make_index`. Each builder takes an optional other table name. The
  key-based builders return `None` for a table without a primary key.
  `drop_table_query` and `count_elements_query` build statements for any
  table name.
- `mmoffline.tables`: the field lists and predefined tables of every entity
  (`predefined_table`). It also holds the complex queries
  `CLIENT_QUANTITY_LINKING`, `TRUNCATE_GROUPS_WITHOUT_PRODUCTS` and
  `product_quantity_query(client_id, group_id)`.
- `mmoffline.id_generator`: `IdGenerator` builds signed 64-bit ids. Each id is
  the current time in nanoseconds shifted left by `shift_border` bits (10 by
  default), with those low bits filled at random. `IdGenerator.instance()`
  returns the shared generator. `generate_id(shift_border, seed)` returns an
  id from the shared generator when both arguments are left out, and from a
  temporary one otherwise.
- `mmoffline.entity`: the abstract `Entity` base class and
  `InitializationError`. It also provides the helpers `parse_int`,
  `parse_float` and `format_number`.
- Entity types, all dataclasses:
  - `ClientEntity` (`mmoffline.client`)
  - `NamedIdEntity` (`mmoffline.named_id`, with `find_named_id_by_name` and
    `find_named_id_by_id`)
  - `ProductEntity` (`mmoffline.product`, with `serialize_id_list` and
    `deserialize_id_list`)
  - `DocumentEntryEntity` (`mmoffline.document_entry`)
  - `DocumentEntity` (`mmoffline.document`). It links entries in memory with
    `link_entry`, `unlink_entry`, `owns_entry` and `clean_entries`.
  - `GroupEntity` (`mmoffline.group`).

  Each type is built from text values with `from_fields`. Each converts to and
  from a JSON-style mapping with `to_json` and `from_json`. Each reads the next
  row of a cursor with `from_cursor`, and renders insert values with
  `insertion_values`.
- `mmoffline.group` also has `GroupTreeModel`. It shows one layer of the group
  tree at a time in two columns. `step_to_next_layer` goes down and
  `step_to_upper_level` goes up. Optional callbacks report a selected group and
  a request to leave the top layer.
- `mmoffline.provider`: `SqliteDataProvider` stores and loads entities in one
  SQLite file (`MainDB` in the current directory by default). The connection
  opens on first use and every statement is committed at once. A failing
  statement makes a method return `False`, `None` or an empty result rather
  than raise. It can be used as a context manager, which closes the
  connection.
- `mmoffline.models`: three in-memory models with optional click callbacks:
  - `DataEntityListModel`, a list of entities of any type.
  - `DataEntityFilterModel`, a view of a list model filtered by each entity's
    `matches`.
  - `DataCountingDataModel`, a list model with a counter per entity id.
- `mmoffline.csv_parser`: `CsvFileParser` imports reference data from a
  folder:
  - `clients.csv`, `products.csv` and `groups.csv` go into the entities' own
    tables.
  - `measures.csv`, `types.csv`, `options.csv` and `depozits.csv` go into the
    `Measures`, `Tips`, `Options` and `Depozits` tables.

  Each file begins with a header line, and the separator is `;` by default.
  Parsing stops at the first problem, which is recorded in `errors`.

## Example

```python
from mmoffline.client import ClientEntity
from mmoffline.provider import SqliteDataProvider

with SqliteDataProvider("orders.db") as provider:
    provider.push_entity_list([ClientEntity.from_fields(["1", "Acme"])])
    clients = provider.load_entities(ClientEntity)
```

Importing a folder of CSV files:

```python
from mmoffline.csv_parser import CsvFileParser
from mmoffline.provider import SqliteDataProvider

parser = CsvFileParser("data/", provider=SqliteDataProvider("orders.db"))
if not parser.parse():
    print(parser.errors)
```

## What it does not do

This package is a library only. It has no command-line program and no
screens. It does not exchange data with a server: documents are only kept in
the local database, and reference data arrives only through the CSV import.