"""Data layer for offline order taking: entities, SQL table handlers, SQLite storage, CSV import and list models."""

__version__ = "0.1.0"

__all__ = [
    "table_handlers",
    "tables",
    "id_generator",
    "entity",
    "client",
    "named_id",
    "product",
    "document_entry",
    "document",
    "group",
    "provider",
    "models",
    "csv_parser",
]