"""Product groups forming a tree, and a layered table model for walking it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Iterable, Mapping, Optional, Sequence

from mmoffline.entity import Entity, InitializationError, parse_int
from mmoffline.table_handlers import TableName
from mmoffline.tables import GROUP_FIELDS

JSON_DEFAULTS: tuple[str, ...] = ("", "0", "0")

_CONVERTERS: tuple[tuple[str, Callable[[str], Any]], ...] = (
    ("name", str),
    ("id", parse_int),
    ("superior_group_id", parse_int),
)


def join_index(row: int, column: int, count: int) -> int:
    """Map a cell of the two-column layout to a position in a list of ``count`` items.

    Column 0 holds the first half (rounded up), column 1 the rest; any other
    column maps to 0.
    """
    if column == 0:
        return row
    if column == 1:
        return count // 2 + count % 2 + row
    return 0


def _out_of_range(row: int, column: int, count: int) -> bool:
    return count <= join_index(row, column, count)


@dataclass(eq=False)
class GroupEntity(Entity):
    """A group of products; groups nest through ``superior_group_id``."""

    name: str = ""
    id: int = 0
    superior_group_id: int = 0
    subgroups: list["GroupEntity"] = field(default_factory=list, repr=False)
    type_id: ClassVar[TableName] = TableName.GROUPS

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GroupEntity):
            return NotImplemented
        return self.id == other.id

    __hash__ = None  # type: ignore[assignment]

    def _load(self, values: Sequence[str]) -> bool:
        """Fill fields positionally; False for an empty list, longer lists are ignored."""
        if not values:
            return False
        if len(values) > len(_CONVERTERS):
            return True
        pairs = list(enumerate(zip(values, _CONVERTERS)))
        for index, (text, (attr, convert)) in reversed(pairs):
            try:
                value = convert(text)
            except ValueError:
                raise InitializationError(index - 1) from None
            setattr(self, attr, value)
        return True

    @classmethod
    def from_fields(cls, values: Iterable[str]) -> "GroupEntity":
        """Build a group from ``[name, id, parent_id]``; raises InitializationError."""
        entity = cls()
        entity._load(list(values))
        return entity

    @property
    def entity_id(self) -> int:
        return self.id

    def to_json(self) -> dict[str, str]:
        return dict(
            zip(GROUP_FIELDS, (self.name, str(self.id), str(self.superior_group_id)))
        )

    def from_json(self, data: Mapping[str, Any]) -> bool:
        return self._load(self._json_values(data, GROUP_FIELDS, JSON_DEFAULTS))

    def from_cursor(self, cursor: Any) -> bool:
        texts = self._row_texts(cursor, len(GROUP_FIELDS))
        if texts is None:
            return False
        self._load(texts)
        return True

    def insertion_values(self) -> str:
        return f'( "{self.name}" , {self.id} , {self.superior_group_id} )'

    def compare(self, other: Entity) -> bool:
        return isinstance(other, GroupEntity) and self.id == other.id

    def higher_than(self, other: Entity) -> bool:
        return self.id > other.entity_id

    def matches(self, pattern: str) -> bool:
        return self._text_contains(self.name, pattern)

    def is_top_level(self) -> bool:
        """True when the group has no superior group."""
        return self.superior_group_id == 0

    def has_subgroups(self) -> bool:
        """True when at least one subgroup is attached."""
        return bool(self.subgroups)

    def owns(self, group: "GroupEntity") -> bool:
        """True when ``group`` names this group as its superior."""
        return self.id == group.superior_group_id

    def append_if_owned(self, group: "GroupEntity") -> bool:
        """Attach ``group`` as a subgroup when this group owns it."""
        if not self.owns(group):
            return False
        self.subgroups.append(group)
        return True

    def subgroup_by_id(self, group_id: int) -> Optional["GroupEntity"]:
        """Return the attached subgroup with this id, or None."""
        return next((group for group in self.subgroups if group.id == group_id), None)

    def subgroup(self, index: int) -> "GroupEntity":
        """Return the subgroup at a position; raises IndexError when out of range."""
        if not 0 <= index < len(self.subgroups):
            raise IndexError(f"subgroup index {index} out of range")
        return self.subgroups[index]

    def count_subgroups(self) -> int:
        """Number of attached subgroups."""
        return len(self.subgroups)


GroupCallback = Callable[[GroupEntity], None]


class GroupTreeModel:
    """Shows one layer of the group tree at a time in two columns.

    Stepping into a group with subgroups shows them; stepping into a leaf
    selects it. Selections and requests to leave the top layer are both
    returned and reported to the optional callbacks.
    """

    def __init__(
        self,
        groups: Iterable[GroupEntity] = (),
        on_group_selected: Optional[GroupCallback] = None,
        on_back_required: Optional[Callable[[], None]] = None,
    ) -> None:
        self.on_group_selected = on_group_selected
        self.on_back_required = on_back_required
        self.top_layer: list[GroupEntity] = []
        self._top_linker: dict[int, GroupEntity] = {}
        self._layer_ids: list[int] = []
        self.current_layer = 0
        self.current_group: Optional[GroupEntity] = None
        self.set_list(groups)

    def _visible(self) -> Sequence[GroupEntity]:
        if self.current_layer == 0 or self.current_group is None:
            return self.top_layer
        return self.current_group.subgroups

    def row_count(self) -> int:
        """Rows needed to show the current layer in two columns."""
        count = len(self._visible())
        return count // 2 + count % 2

    def column_count(self) -> int:
        """Two columns when more than one group is visible, otherwise one."""
        return 2 if len(self._visible()) > 1 else 1

    def _cell(self, row: int, column: int) -> Optional[GroupEntity]:
        visible = self._visible()
        if row < 0 or row >= self.row_count():
            return None
        if _out_of_range(row, column, len(visible)):
            return None
        return visible[join_index(row, column, len(visible))]

    def display(self, row: int, column: int) -> Optional[str]:
        """Name of the group shown in a cell, or None for an empty cell."""
        group = self._cell(row, column)
        return None if group is None else group.name

    def entity_at(self, row: int, column: int) -> Optional[GroupEntity]:
        """Group shown in a cell, or None for an empty cell."""
        return self._cell(row, column)

    def header(self) -> Optional[str]:
        """Name of the group whose subgroups are shown; None on the top layer."""
        if self.current_layer == 0 or self.current_group is None:
            return None
        return self.current_group.name

    def set_list(self, groups: Iterable[GroupEntity]) -> None:
        """Build the tree from a flat list and show its top layer."""
        groups = list(groups)
        self.top_layer = []
        self._top_linker = {}
        self._layer_ids = []
        self.current_layer = 0
        self.current_group = None
        by_id = {group.id: group for group in groups}
        for group in groups:
            if group.is_top_level():
                self._top_linker[group.id] = group
                self.top_layer.append(group)
            elif group.superior_group_id in by_id:
                by_id[group.superior_group_id].append_if_owned(group)

    def clear_layers(self) -> None:
        """Return to the top layer."""
        self.current_layer = 0
        self.current_group = None
        self._layer_ids = []

    def _select(self, group: GroupEntity) -> GroupEntity:
        if self.on_group_selected is not None:
            self.on_group_selected(group)
        return group

    def _walk(self, depth: int) -> GroupEntity:
        group = self._top_linker[self._layer_ids[0]]
        for group_id in self._layer_ids[1:depth]:
            found = group.subgroup_by_id(group_id)
            if found is None:
                break
            group = found
        return group

    def step_to_next_layer(self, row: int, column: int) -> Optional[GroupEntity]:
        """Open the group in a cell.

        Returns the group when it was selected (it has no subgroups, or it
        would close a cycle), otherwise None; an empty cell changes nothing.
        """
        if self.current_layer == 0:
            count = len(self.top_layer)
            if _out_of_range(row, column, count):
                return None
            chosen = self.top_layer[join_index(row, column, count)]
            self.current_group = chosen
            if not chosen.has_subgroups():
                return self._select(chosen)
        else:
            parent = self._walk(len(self._layer_ids))
            count = parent.count_subgroups()
            if _out_of_range(row, column, count):
                return None
            chosen = parent.subgroup(join_index(row, column, count))
            if not chosen.has_subgroups() or chosen.id in self._layer_ids:
                return self._select(chosen)
            self.current_group = chosen
        self.current_layer += 1
        self._layer_ids.append(chosen.id)
        return None

    def step_to_upper_level(self) -> bool:
        """Go one layer up; returns True when already on top and leaving is requested."""
        if self.current_layer == 0:
            self._layer_ids = []
            if self.on_back_required is not None:
                self.on_back_required()
            return True
        if self.current_layer == 1:
            self._layer_ids = []
            self.current_layer = 0
            self.current_group = None
            return False
        self.current_group = self._walk(len(self._layer_ids) - 1)
        self.current_layer -= 1
        if self._layer_ids:
            self._layer_ids.pop()
        return False