"""Base entity with the common interface for storing, loading and comparing."""

from __future__ import annotations

import copy
import math
import re
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Mapping, Optional, Sequence, Union

from mmoffline.table_handlers import TableHandler, TableName
from mmoffline.tables import PREDEFINED_DB_NAMES, predefined_table

DATE_SERIALIZATION_FORMAT = "%d.%m.%Y"
DATETIME_SERIALIZATION_FORMAT = "%d.%m.%Y %H.%M.%S"

_INT_PATTERN = re.compile(r"\s*[+-]?\d+\s*")
_FLOAT_PATTERN = re.compile(
    r"\s*[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf|nan)\s*",
    re.IGNORECASE,
)
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


def parse_int(text: str) -> int:
    """Parse a decimal 64-bit integer, surrounding whitespace allowed.

    Raises ValueError when the text is not such a number.
    """
    if not isinstance(text, str) or not _INT_PATTERN.fullmatch(text):
        raise ValueError(f"not an integer: {text!r}")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


def parse_float(text: str) -> float:
    """Parse a decimal floating point number; raises ValueError on failure."""
    if not isinstance(text, str) or not _FLOAT_PATTERN.fullmatch(text):
        raise ValueError(f"not a number: {text!r}")
    return float(text)


def format_number(value: Union[int, float]) -> str:
    """Format a number as stored in queries: integers whole, floats with 6 significant digits."""
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "nan"
    return f"{value:.6g}"


class InitializationError(Exception):
    """Raised when an entity cannot be built from the values it was fed."""

    def __init__(self, counter: int) -> None:
        self.counter = counter
        super().__init__(f"Error initializing entity with supportive value {counter}")


class Entity(ABC):
    """Common interface of every data entity.

    Subclasses set ``type_id`` to their predefined table number and implement
    the abstract methods; everything else is built on top of them.
    """

    type_id: ClassVar[TableName]

    @property
    @abstractmethod
    def entity_id(self) -> int:
        """Id of this entity."""

    @abstractmethod
    def to_json(self) -> dict[str, str]:
        """Return the entity as a mapping of field names to text values."""

    @abstractmethod
    def from_json(self, data: Mapping[str, Any]) -> bool:
        """Fill the entity from a mapping; return True on success."""

    @abstractmethod
    def from_cursor(self, cursor: Any) -> bool:
        """Fill the entity from the next row of a cursor; False when there is none."""

    @abstractmethod
    def insertion_values(self) -> str:
        """Return the parenthesised values part of an insert statement."""

    @abstractmethod
    def compare(self, other: "Entity") -> bool:
        """Return True when ``other`` denotes the same entity."""

    @abstractmethod
    def higher_than(self, other: "Entity") -> bool:
        """Return True when this entity sorts above ``other``."""

    @abstractmethod
    def matches(self, pattern: str) -> bool:
        """Return True when the entity fits a search pattern."""

    @property
    def table(self) -> TableHandler:
        """Handler of the table associated with this entity."""
        return predefined_table(self.type_id)

    def insertion_header(self) -> str:
        """Return the column list used for inserts."""
        return self.table.all_fields_declaration()

    def insertion_query(self, table: Optional[str] = None) -> str:
        """Return a full insert statement, optionally into another table."""
        return self.table.insert(self.insertion_values(), table)

    def deep_compare(self, other: "Entity") -> bool:
        """Compare type first, then the entity itself."""
        if other.type_id != self.type_id:
            return False
        return self.compare(other)

    def clone(self) -> "Entity":
        """Return an independent copy; lists held by the entity are copied too."""
        duplicate = copy.copy(self)
        for name, value in list(vars(duplicate).items()):
            if isinstance(value, list):
                setattr(duplicate, name, list(value))
        return duplicate

    def renamed_table(self, name: Union[str, TableName, int]) -> TableHandler:
        """Return the associated table under a new name or a predefined table's name."""
        if not isinstance(name, str):
            name = PREDEFINED_DB_NAMES[TableName(name)]
        return self.table.clone(name)

    def sorting_compare(self, other: "Entity") -> bool:
        """Ordering used for sorting; same as ``higher_than``."""
        return self.higher_than(other)

    @staticmethod
    def _text_contains(text: str, pattern: str) -> bool:
        return pattern.casefold() in text.casefold()

    @staticmethod
    def _json_values(
        data: Mapping[str, Any], fields: Sequence[str], defaults: Sequence[str]
    ) -> list[str]:
        return [str(data.get(name, default)) for name, default in zip(fields, defaults)]

    @staticmethod
    def _cell_text(value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, float):
            return format_number(value)
        if isinstance(value, bytes):
            return value.decode("utf-8", errors="replace")
        return str(value)

    @staticmethod
    def _cell_int(value: Any) -> int:
        """Convert a database cell to an integer; raises ValueError on failure."""
        if value is None:
            return 0
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            if not math.isfinite(value):
                raise ValueError(f"not an integer: {value!r}")
            return round(value)
        return parse_int(Entity._cell_text(value))

    @classmethod
    def _row_texts(cls, cursor: Any, count: int) -> Optional[list[str]]:
        """Fetch the next row as ``count`` text values, or None at the end."""
        row = cursor.fetchone()
        if row is None:
            return None
        cells = list(row)[:count]
        cells.extend([None] * (count - len(cells)))
        return [cls._cell_text(cell) for cell in cells]