"""Loading of the reference tables from a directory of CSV files."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Type, Union

from mmoffline.client import ClientEntity
from mmoffline.entity import Entity, InitializationError
from mmoffline.group import GroupEntity
from mmoffline.named_id import NamedIdEntity
from mmoffline.product import ProductEntity
from mmoffline.provider import SqliteDataProvider
from mmoffline.tables import GROUP_FIELDS, PRODUCT_FIELDS

_NAMED_ID_FIELD_COUNT = 2

# file name, entity class, values per line, target table (None: the entity's own)
_SOURCES: tuple[tuple[str, Type[Entity], int, Optional[str]], ...] = (
    ("clients.csv", ClientEntity, 2, None),
    ("products.csv", ProductEntity, len(PRODUCT_FIELDS), None),
    ("groups.csv", GroupEntity, len(GROUP_FIELDS), None),
    ("measures.csv", NamedIdEntity, _NAMED_ID_FIELD_COUNT, "Measures"),
    ("types.csv", NamedIdEntity, _NAMED_ID_FIELD_COUNT, "Tips"),
    ("options.csv", NamedIdEntity, _NAMED_ID_FIELD_COUNT, "Options"),
    ("depozits.csv", NamedIdEntity, _NAMED_ID_FIELD_COUNT, "Depozits"),
)


class CsvFileParser:
    """Reads the CSV files of a directory and stores their rows in the database.

    Every file starts with a header line; all lines must split into the same
    number of values. Parsing stops at the first problem, which is recorded
    in ``errors``; tables loaded before it stay stored.
    """

    def __init__(
        self,
        path: Union[str, Path],
        separator: str = ";",
        provider: Optional[SqliteDataProvider] = None,
    ) -> None:
        self.root = Path(path)
        self.separator = separator
        self._provider = provider
        self.errors: list[str] = []
        self.is_ready = self.root.is_dir()
        if not self.is_ready:
            self.errors.append("Folder does not exists!")

    @property
    def provider(self) -> SqliteDataProvider:
        """Database the parsed entities go to."""
        if self._provider is None:
            self._provider = SqliteDataProvider.instance()
        return self._provider

    def parse(self) -> bool:
        """Load every file in turn; False at the first failure."""
        if not self.is_ready:
            return False
        return all(
            self._load(file_name, entity_class, count, table)
            for file_name, entity_class, count, table in _SOURCES
        )

    def _check_count(self, values: list[str], required: int) -> bool:
        if len(values) != required:
            self.errors.append(
                f"values count mismatch: {len(values)} instead of: {required}"
            )
            return False
        return True

    def _read_lines(self, file_name: str) -> Optional[list[str]]:
        try:
            text = (self.root / file_name).read_text(encoding="utf-8")
        except OSError:
            self.errors.append("file can not be opened " + file_name)
            return None
        lines = text.split("\n")
        if text.endswith("\n"):
            lines.pop()
        return [line.rstrip("\r") for line in lines]

    def _load(
        self,
        file_name: str,
        entity_class: Type[Entity],
        count: int,
        table: Optional[str],
    ) -> bool:
        lines = self._read_lines(file_name)
        if lines is None:
            return False
        header, *rows = lines
        if not self._check_count(header.split(self.separator), count):
            return False
        entities: list[Entity] = []
        for line in rows:
            values = line.split(self.separator)
            if not self._check_count(values, count):
                return False
            try:
                entities.append(entity_class.from_fields(values))  # type: ignore[attr-defined]
            except InitializationError as error:
                culprit = (
                    values[error.counter] if 0 <= error.counter < len(values) else line
                )
                self.errors.append("Impossible to convert value: " + culprit)
                return False
        self.provider.push_entity_list(entities, table)
        return True