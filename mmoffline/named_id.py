"""Entity holding just a name and an id, used for measures, types and the like."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Iterable, Mapping, Sequence

from mmoffline.entity import Entity, parse_int
from mmoffline.table_handlers import TableName


@dataclass
class NamedIdEntity(Entity):
    """Any item described by a name and an id."""

    name: str = ""
    id: int = 0
    type_id: ClassVar[TableName] = TableName.NAMED_IDS

    @classmethod
    def from_fields(cls, values: Iterable[str]) -> "NamedIdEntity":
        """Build from ``[name, id]``; a missing or unreadable id becomes 0."""
        values = list(values)
        entity = cls()
        if len(values) == 2:
            try:
                entity.id = parse_int(values[1])
            except ValueError:
                entity.id = 0
        if len(values) in (1, 2):
            entity.name = values[0]
        return entity

    @property
    def entity_id(self) -> int:
        return self.id

    def to_json(self) -> dict[str, str]:
        return {"name": self.name, "id": str(self.id)}

    def from_json(self, data: Mapping[str, Any]) -> bool:
        raw_id = data.get("id")
        if raw_id is None:
            return False
        try:
            self.id = parse_int(str(raw_id))
        except ValueError:
            return False
        name = data.get("name")
        if name is None:
            return False
        self.name = str(name)
        return True

    def from_cursor(self, cursor: Any) -> bool:
        row = cursor.fetchone()
        if row is None or len(row) < 1:
            return False
        self.name = self._cell_text(row[0])
        if len(row) < 2:
            return False
        try:
            self.id = self._cell_int(row[1])
        except ValueError:
            return False
        return True

    def insertion_values(self) -> str:
        return f'( "{self.name}" , {self.id} )'

    def compare(self, other: Entity) -> bool:
        return isinstance(other, NamedIdEntity) and self.id == other.id

    def higher_than(self, other: Entity) -> bool:
        return self.id > other.entity_id

    def matches(self, pattern: str) -> bool:
        return self._text_contains(self.name, pattern)


def find_named_id_by_name(name: str, items: Sequence[NamedIdEntity]) -> int:
    """Return the index of the first item with exactly this name, or -1."""
    return next((index for index, item in enumerate(items) if item.name == name), -1)


def find_named_id_by_id(entity_id: int, items: Sequence[NamedIdEntity]) -> int:
    """Return the index of the first item with this id, or -1."""
    return next((index for index, item in enumerate(items) if item.id == entity_id), -1)