"""Document entry entity: one line of a document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Iterable, Mapping, Sequence

from mmoffline.entity import (
    Entity,
    InitializationError,
    format_number,
    parse_float,
    parse_int,
)
from mmoffline.table_handlers import TableName
from mmoffline.tables import DOCUMENT_ENTRY_FIELDS

JSON_DEFAULTS: tuple[str, ...] = (
    "0",
    "0",
    "0",
    "",
    "0",
    "0",
    "0",
    "0",
    "0",
    "0",
    "",
)

ENTRY_ID_ASSERTION_QUERY = "select entryId from Entries where entryId = %1;"

_CONVERTERS: tuple[tuple[str, Callable[[str], Any]], ...] = (
    ("parent_doc_id", parse_int),
    ("entry_id", parse_int),
    ("product_id", parse_int),
    ("product_name", str),
    ("price", parse_float),
    ("measure", parse_int),
    ("quantity", parse_float),
    ("option1", parse_int),
    ("option2", parse_int),
    ("option3", parse_int),
    ("comment", str),
)


@dataclass
class DocumentEntryEntity(Entity):
    """One line of a document, tied to it by ``parent_doc_id``."""

    parent_doc_id: int = 0
    entry_id: int = 0
    product_id: int = 0
    product_name: str = ""
    price: float = 0.0
    measure: int = 0
    quantity: float = 0.0
    option1: int = 0
    option2: int = 0
    option3: int = 0
    comment: str = ""
    type_id: ClassVar[TableName] = TableName.DOCUMENT_ENTRIES

    def _load(self, values: Sequence[str]) -> None:
        """Fill fields positionally; lists of unsupported length are ignored."""
        if not 1 <= len(values) <= len(_CONVERTERS):
            return
        pairs = list(enumerate(zip(values, _CONVERTERS)))
        for index, (text, (attr, convert)) in reversed(pairs):
            try:
                value = convert(text)
            except ValueError:
                raise InitializationError(index - 1) from None
            setattr(self, attr, value)

    @classmethod
    def from_fields(cls, values: Iterable[str]) -> "DocumentEntryEntity":
        """Build an entry from its fields in table order; raises InitializationError."""
        entity = cls()
        entity._load(list(values))
        return entity

    @property
    def entity_id(self) -> int:
        return self.entry_id

    def _texts(self) -> tuple[str, ...]:
        return (
            str(self.parent_doc_id),
            str(self.entry_id),
            str(self.product_id),
            self.product_name,
            format_number(self.price),
            str(self.measure),
            format_number(self.quantity),
            str(self.option1),
            str(self.option2),
            str(self.option3),
            self.comment,
        )

    def to_json(self) -> dict[str, str]:
        return dict(zip(DOCUMENT_ENTRY_FIELDS, self._texts()))

    def from_json(self, data: Mapping[str, Any]) -> bool:
        if not data:
            return False
        self._load(self._json_values(data, DOCUMENT_ENTRY_FIELDS, JSON_DEFAULTS))
        return True

    def from_cursor(self, cursor: Any) -> bool:
        texts = self._row_texts(cursor, len(DOCUMENT_ENTRY_FIELDS))
        if texts is None:
            return False
        self._load(texts)
        return True

    def insertion_values(self) -> str:
        return (
            f"( {self.parent_doc_id} , {self.entry_id} , {self.product_id} , "
            f'"{self.product_name}" , {format_number(self.price)} , {self.measure} , '
            f"{format_number(self.quantity)} , {self.option1} , {self.option2} , "
            f'{self.option3}, "{self.comment}" )'
        )

    def compare(self, other: Entity) -> bool:
        return isinstance(other, DocumentEntryEntity) and self.entry_id == other.entry_id

    def higher_than(self, other: Entity) -> bool:
        return self.entry_id > other.entity_id

    def matches(self, pattern: str) -> bool:
        return self._text_contains(self.product_name, pattern)