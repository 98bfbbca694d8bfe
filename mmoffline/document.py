"""Document entity: a client order made of entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, ClassVar, Iterable, Mapping, Optional, Sequence, Union

from mmoffline.document_entry import DocumentEntryEntity
from mmoffline.entity import (
    DATE_SERIALIZATION_FORMAT,
    DATETIME_SERIALIZATION_FORMAT,
    Entity,
    InitializationError,
    format_number,
    parse_float,
    parse_int,
)
from mmoffline.table_handlers import TableName
from mmoffline.tables import DOCUMENT_FIELDS

JSON_DEFAULTS: tuple[str, ...] = (
    "0",
    "12.12.2019",
    "12.12.2019",
    "0",
    "",
    "0",
    "",
    "0",
    "",
    "0.0",
)


def _parse_datetime(text: str) -> Optional[datetime]:
    try:
        return datetime.strptime(text, DATETIME_SERIALIZATION_FORMAT)
    except ValueError:
        return None


def _parse_date(text: str) -> Optional[date]:
    try:
        return datetime.strptime(text, DATE_SERIALIZATION_FORMAT).date()
    except ValueError:
        return None


def _format_moment(value: Optional[Union[date, datetime]], fmt: str) -> str:
    return "" if value is None else value.strftime(fmt)


_CONVERTERS: tuple[tuple[str, Callable[[str], Any]], ...] = (
    ("document_id", parse_int),
    ("date_when_created", _parse_datetime),
    ("shipping_date", _parse_date),
    ("client_id", parse_int),
    ("client_name", str),
    ("warehouse_id", parse_int),
    ("warehouse_name", str),
    ("document_type", parse_int),
    ("document_type_name", str),
    ("already_paid", parse_float),
)


@dataclass
class DocumentEntity(Entity):
    """A document; ``linked_entries`` is kept in memory only, never stored."""

    document_id: int = 0
    date_when_created: Optional[datetime] = None
    shipping_date: Optional[date] = None
    client_id: int = 0
    client_name: str = ""
    warehouse_id: int = 0
    warehouse_name: str = ""
    document_type: int = 0
    document_type_name: str = ""
    already_paid: float = 0.0
    linked_entries: list[DocumentEntryEntity] = field(
        default_factory=list, compare=False, repr=False
    )
    type_id: ClassVar[TableName] = TableName.DOCUMENTS

    def _load(self, values: Sequence[str]) -> None:
        """Fill fields positionally; unreadable dates become None."""
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
    def from_fields(cls, values: Iterable[str]) -> "DocumentEntity":
        """Build a document from its fields in table order; raises InitializationError."""
        entity = cls()
        entity._load(list(values))
        return entity

    @property
    def entity_id(self) -> int:
        return self.document_id

    def _texts(self) -> tuple[str, ...]:
        return (
            str(self.document_id),
            _format_moment(self.date_when_created, DATETIME_SERIALIZATION_FORMAT),
            _format_moment(self.shipping_date, DATE_SERIALIZATION_FORMAT),
            str(self.client_id),
            self.client_name,
            str(self.warehouse_id),
            self.warehouse_name,
            str(self.document_type),
            self.document_type_name,
            format_number(self.already_paid),
        )

    def to_json(self) -> dict[str, str]:
        return dict(zip(DOCUMENT_FIELDS, self._texts()))

    def from_json(self, data: Mapping[str, Any]) -> bool:
        if not data:
            return False
        self._load(self._json_values(data, DOCUMENT_FIELDS, JSON_DEFAULTS))
        return True

    def from_cursor(self, cursor: Any) -> bool:
        texts = self._row_texts(cursor, len(DOCUMENT_FIELDS))
        if texts is None:
            return False
        self._load(texts)
        return True

    def insertion_values(self) -> str:
        (doc_id, created, shipping, client_id, client_name, warehouse_id,
         warehouse_name, doc_type, doc_type_name, paid) = self._texts()
        return (
            f'( {doc_id} , "{created}" , "{shipping}" , {client_id} , '
            f'"{client_name}" , {warehouse_id} , "{warehouse_name}" , '
            f'{doc_type} , "{doc_type_name}" , {paid} )'
        )

    def compare(self, other: Entity) -> bool:
        return isinstance(other, DocumentEntity) and self.document_id == other.document_id

    def higher_than(self, other: Entity) -> bool:
        return self.document_id > other.entity_id

    def matches(self, pattern: str) -> bool:
        return self._text_contains(self.client_name, pattern)

    def link_entry(self, entry: DocumentEntryEntity) -> bool:
        """Attach an entry that belongs to this document."""
        if entry.parent_doc_id != self.document_id:
            return False
        self.linked_entries.append(entry)
        return True

    def unlink_entry(self, entry: Optional[DocumentEntryEntity]) -> bool:
        """Detach an entry and clear its parent id; False when no entry is given."""
        if entry is None:
            return False
        for position, linked in enumerate(self.linked_entries):
            if linked is entry:
                del self.linked_entries[position]
                break
        entry.parent_doc_id = 0
        return True

    def owns_entry(self, entry: DocumentEntryEntity) -> bool:
        """Return True when the entry's parent id is this document's id."""
        return entry.parent_doc_id == self.document_id

    def clean_entries(self) -> None:
        """Detach every linked entry that no longer belongs to this document."""
        strangers = [e for e in self.linked_entries if e.parent_doc_id != self.document_id]
        for entry in strangers:
            self.unlink_entry(entry)