"""Product entity: an item offered to clients, with a price and a group."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Iterable, Mapping, Sequence

from mmoffline.entity import (
    Entity,
    InitializationError,
    format_number,
    parse_float,
    parse_int,
)
from mmoffline.table_handlers import TableName
from mmoffline.tables import PRODUCT_FIELDS

INT32_MIN = -(1 << 31)

# Field names used when a product travels as JSON.
JSON_FIELDS: tuple[str, ...] = (
    "id",
    "name",
    "price",
    "um",
    "group_id",
    "clients_id_list",
)
JSON_DEFAULTS: tuple[str, ...] = ("-1", "", "0.0", "0", "0", "")


def serialize_id_list(ids: Iterable[int]) -> str:
    """Join ids, each followed by ``|``."""
    return "".join(f"{item}|" for item in ids)


def deserialize_id_list(text: str) -> list[int]:
    """Split a ``|``-separated id list, skipping empty and unreadable parts."""
    ids: list[int] = []
    for part in text.split("|"):
        if not part:
            continue
        try:
            ids.append(parse_int(part))
        except ValueError:
            continue
    return ids


_CONVERTERS: tuple[tuple[str, Callable[[str], Any]], ...] = (
    ("id", parse_int),
    ("name", str),
    ("price", parse_float),
    ("measure", parse_int),
    ("group_id", parse_int),
    ("client_ids", deserialize_id_list),
)


@dataclass
class ProductEntity(Entity):
    """A product; ``client_ids`` lists the clients allowed to order it."""

    id: int = INT32_MIN
    name: str = ""
    price: float = 0.0
    measure: int = 0
    group_id: int = 0
    client_ids: list[int] = field(default_factory=list)
    type_id: ClassVar[TableName] = TableName.PRODUCTS

    def _load(self, values: Sequence[str]) -> None:
        """Fill fields positionally from a prefix of the field list."""
        if not 1 <= len(values) <= len(_CONVERTERS):
            raise InitializationError(len(values) - 1)
        pairs = list(enumerate(zip(values, _CONVERTERS)))
        for index, (text, (attr, convert)) in reversed(pairs):
            try:
                value = convert(text)
            except ValueError:
                raise InitializationError(index - 1) from None
            setattr(self, attr, value)

    @classmethod
    def from_fields(cls, values: Iterable[str]) -> "ProductEntity":
        """Build a product from ``[id, name, price, measure, groupId, clientIds]``.

        Fewer values fill a prefix of the fields; raises InitializationError.
        """
        entity = cls()
        entity._load(list(values))
        return entity

    @property
    def entity_id(self) -> int:
        return self.id

    def to_json(self) -> dict[str, str]:
        return dict(
            zip(
                JSON_FIELDS,
                (
                    str(self.id),
                    self.name,
                    format_number(self.price),
                    str(self.measure),
                    str(self.group_id),
                    serialize_id_list(self.client_ids),
                ),
            )
        )

    def from_json(self, data: Mapping[str, Any]) -> bool:
        if not data:
            return False
        self._load(self._json_values(data, JSON_FIELDS, JSON_DEFAULTS))
        return True

    def from_cursor(self, cursor: Any) -> bool:
        texts = self._row_texts(cursor, len(PRODUCT_FIELDS))
        if texts is None:
            return False
        self._load(texts)
        return True

    def insertion_values(self) -> str:
        return (
            f'( {self.id} , "{self.name}" , {format_number(self.price)} , '
            f"{self.measure} , {self.group_id} , "
            f'"{serialize_id_list(self.client_ids)}" )'
        )

    def compare(self, other: Entity) -> bool:
        return isinstance(other, ProductEntity) and self.id == other.id

    def higher_than(self, other: Entity) -> bool:
        """Order by the first five case-folded name characters, then by id."""
        if not isinstance(other, ProductEntity):
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