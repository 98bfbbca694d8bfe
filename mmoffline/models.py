"""In-memory list models holding entities of any type, with filtering and counters."""

from __future__ import annotations

from typing import Callable, Iterable, Mapping, Optional, Sequence, Type, TypeVar, Union

from mmoffline.entity import Entity

E = TypeVar("E", bound=Entity)

EntityCallback = Callable[[Entity], None]


def index_of_entity_by_id(entity_id: int, entities: Sequence[Entity]) -> int:
    """Return the position of the first entity with this id, or -1."""
    return next(
        (index for index, entity in enumerate(entities) if entity.entity_id == entity_id),
        -1,
    )


def upcast_entities(entities: Iterable[Entity], entity_class: Type[E]) -> list[E]:
    """Keep only the entities that are instances of ``entity_class``."""
    return [entity for entity in entities if isinstance(entity, entity_class)]


class DataEntityListModel:
    """An ordered list of entities of any type.

    Clicking a row returns its entity and reports it to ``on_entity_clicked``.
    The entity returned is the stored one; ask ``data`` for a copy to avoid
    changing the model.
    """

    def __init__(
        self,
        entities: Iterable[Entity] = (),
        on_entity_clicked: Optional[EntityCallback] = None,
    ) -> None:
        self.entities: list[Entity] = list(entities)
        self.on_entity_clicked = on_entity_clicked

    def __len__(self) -> int:
        return len(self.entities)

    def __iter__(self):
        return iter(self.entities)

    def _valid(self, row: int) -> bool:
        return 0 <= row < len(self.entities)

    def row_count(self) -> int:
        """Number of entities held."""
        return len(self.entities)

    def data(self, row: int, copy: bool = False) -> Optional[Entity]:
        """Entity at a row, or a copy of it; None when the row is out of range."""
        if not self._valid(row):
            return None
        entity = self.entities[row]
        return entity.clone() if copy else entity

    def set_data(self, entities: Iterable[Entity]) -> None:
        """Replace the whole contents."""
        self.entities = list(entities)

    def remove_at(self, row: int) -> None:
        """Remove the entity at a row; an invalid row changes nothing."""
        if self._valid(row):
            del self.entities[row]

    def remove_entity(self, entity: Entity) -> None:
        """Remove every entity that denotes the same item as ``entity``."""
        self.entities = [item for item in self.entities if not item.deep_compare(entity)]

    def replace_entity(self, entity: Entity) -> None:
        """Put ``entity`` in place of every stored entity denoting the same item."""
        self.entities = [
            entity if item.deep_compare(entity) else item for item in self.entities
        ]

    def reset(self) -> None:
        """Empty the model."""
        self.entities = []

    def click(self, row: int) -> Optional[Entity]:
        """Return the entity at a row and report it; None for an invalid row."""
        if not self._valid(row):
            return None
        entity = self.entities[row]
        if self.on_entity_clicked is not None:
            self.on_entity_clicked(entity)
        return entity


class DataEntityFilterModel:
    """A filtered view of a list model, using each entity's own ``matches``."""

    def __init__(
        self,
        source: DataEntityListModel,
        pattern: str = "",
        on_entity_clicked: Optional[EntityCallback] = None,
    ) -> None:
        self.source = source
        self.pattern = pattern
        self.on_entity_clicked = on_entity_clicked

    def set_pattern(self, pattern: str) -> None:
        """Change the search pattern."""
        self.pattern = pattern

    def rows(self) -> list[Entity]:
        """Entities of the source that fit the pattern, in source order."""
        return [entity for entity in self.source.entities if entity.matches(self.pattern)]

    def click(self, row: int) -> Optional[Entity]:
        """Return the entity at a filtered row and report it; None for an invalid row."""
        visible = self.rows()
        if not 0 <= row < len(visible):
            return None
        entity = visible[row]
        if self.on_entity_clicked is not None:
            self.on_entity_clicked(entity)
        return entity


class DataCountingDataModel(DataEntityListModel):
    """A list model that attaches a counter to each entity by its id."""

    def __init__(
        self,
        entities: Iterable[Entity] = (),
        on_entity_clicked: Optional[EntityCallback] = None,
    ) -> None:
        super().__init__(entities, on_entity_clicked)
        self.quantities: dict[int, int] = {}

    def quantity(self, row: int) -> Optional[int]:
        """Counter of the entity at a row (0 when none is set); None for an invalid row."""
        if not self._valid(row):
            return None
        return self.quantities.get(self.entities[row].entity_id, 0)

    def assign_quantity_info(self, quantities: Mapping[int, int]) -> None:
        """Replace all counters."""
        self.quantities = dict(quantities)

    def assign_quantity_update(self, key: Union[Entity, int], quantity: int) -> bool:
        """Set the counter of an entity or id that already has one."""
        entity_id = key.entity_id if isinstance(key, Entity) else key
        if entity_id not in self.quantities:
            return False
        self.quantities[entity_id] = quantity
        return True

    def assign_empty_counters(self, default: int = 0) -> None:
        """Set the counter of every held entity to ``default``."""
        for entity in self.entities:
            self.quantities[entity.entity_id] = default

    def increment_quantity(self, entity_id: int, quantity: int) -> bool:
        """Add to the counter of an id that already has one."""
        if entity_id not in self.quantities:
            return False
        self.quantities[entity_id] += quantity
        return True