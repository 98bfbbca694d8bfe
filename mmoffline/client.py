"""Client entity: an id and a display name."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Iterable, Mapping

from mmoffline.entity import Entity, InitializationError, parse_int
from mmoffline.table_handlers import TableName


@dataclass
class ClientEntity(Entity):
    """A client, identified by its id."""

    id: int = 0
    name: str = ""
    type_id: ClassVar[TableName] = TableName.CLIENTS

    @classmethod
    def from_fields(cls, values: Iterable[str]) -> "ClientEntity":
        """Build a client from ``[id, name]``; raises InitializationError."""
        values = list(values)
        if len(values) != 2:
            raise InitializationError(2)
        try:
            client_id = parse_int(values[0])
        except ValueError:
            raise InitializationError(2) from None
        return cls(client_id, values[-1])

    @property
    def entity_id(self) -> int:
        return self.id

    def to_json(self) -> dict[str, str]:
        return {"id": str(self.id), "name": self.name}

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
        try:
            self.id = self._cell_int(row[0])
        except ValueError:
            return False
        if len(row) < 2:
            return False
        self.name = self._cell_text(row[1])
        return True

    def insertion_values(self) -> str:
        return f'( {self.id} , "{self.name}" )'

    def compare(self, other: Entity) -> bool:
        return isinstance(other, ClientEntity) and self.id == other.id

    def higher_than(self, other: Entity) -> bool:
        """Order by the first five case-folded name characters, then by id."""
        if not isinstance(other, ClientEntity):
            return self.id > other.entity_id
        limit = min(len(self.name), len(other.name), 5)
        for mine, theirs in zip(self.name[:limit], other.name[:limit]):
            mine, theirs = mine.casefold(), theirs.casefold()
            if mine != theirs:
                return mine > theirs
        return limit > 0 and self.id > other.id

    def matches(self, pattern: str) -> bool:
        """Case-insensitive match on the name, or plain match on the id."""
        return self._text_contains(self.name, pattern) or pattern in str(self.id)