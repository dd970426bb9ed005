"""Feature encoding: map a record's fields to weight-table slots.

Every field resolves to exactly one ``Contribution``: the index of the weight
it reads and the factor that weight is multiplied by.

- absent value        -> (ABSENT_INDEX, 1.0)
- bounded categorical -> (category_to_index(value), 1.0)
- presence-only text  -> (PRESENT_INDEX, 1.0)
- numeric             -> (int(value), value)

Numeric fields are quantized only to pick (and grow) a slot; the slot's weight
is then scaled by the raw value.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .records import Passenger, PassengerClass, PortOfEmbarkation, Sex

ABSENT_INDEX = 0
PRESENT_INDEX = 1


class FieldKind(str, Enum):
    CATEGORICAL = 'categorical'
    PRESENCE = 'presence'
    NUMERIC = 'numeric'


CATEGORY_INDEX: dict[Enum, int] = {
    PassengerClass.FIRST: 1,
    PassengerClass.SECOND: 2,
    PassengerClass.THIRD: 3,
    Sex.FEMALE: 1,
    Sex.MALE: 2,
    PortOfEmbarkation.CHERBOURG: 1,
    PortOfEmbarkation.SOUTHAMPTON: 2,
    PortOfEmbarkation.QUEENSTOWN: 3,
}


def category_to_index(member: Enum) -> int:
    """Return the fixed weight slot of a categorical value."""
    try:
        return CATEGORY_INDEX[member]
    except KeyError:
        raise ValueError(f'No weight slot is assigned to {member!r}') from None


@dataclass(frozen=True)
class FieldSpec:
    """Static description of one record field and its weight table."""

    name: str
    kind: FieldKind
    categories: type[Enum] | None = None

    def __post_init__(self) -> None:
        if self.kind is FieldKind.CATEGORICAL and self.categories is None:
            raise ValueError(f'Categorical field {self.name!r} needs a categories enum')

    @property
    def bounded(self) -> bool:
        return self.kind is not FieldKind.NUMERIC

    @property
    def initial_size(self) -> int:
        """Number of slots the table holds right after construction."""
        if self.kind is FieldKind.CATEGORICAL:
            return len(self.categories) + 1  # type: ignore[arg-type]
        if self.kind is FieldKind.PRESENCE:
            return PRESENT_INDEX + 1
        return ABSENT_INDEX + 1


@dataclass(frozen=True)
class Contribution:
    index: int
    scale: float


# Fixed evaluation order; also the column order of the source CSV files.
FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec('passenger_class', FieldKind.CATEGORICAL, PassengerClass),
    FieldSpec('name', FieldKind.PRESENCE),
    FieldSpec('sex', FieldKind.CATEGORICAL, Sex),
    FieldSpec('age', FieldKind.NUMERIC),
    FieldSpec('siblings_spouses', FieldKind.NUMERIC),
    FieldSpec('parents_children', FieldKind.NUMERIC),
    FieldSpec('ticket_id', FieldKind.PRESENCE),
    FieldSpec('fare', FieldKind.NUMERIC),
    FieldSpec('cabin_id', FieldKind.PRESENCE),
    FieldSpec('port_of_embarkation', FieldKind.CATEGORICAL, PortOfEmbarkation),
)

FIELDS_BY_NAME: dict[str, FieldSpec] = {spec.name: spec for spec in FIELDS}


def resolve(spec: FieldSpec, record: Passenger) -> Contribution:
    """Resolve the weight slot and scale for one field of ``record``."""
    value: Any = getattr(record, spec.name)
    if value is None:
        return Contribution(ABSENT_INDEX, 1.0)
    if spec.kind is FieldKind.CATEGORICAL:
        return Contribution(category_to_index(value), 1.0)
    if spec.kind is FieldKind.PRESENCE:
        return Contribution(PRESENT_INDEX, 1.0)
    return Contribution(quantize(value), float(value))


def quantize(value: float) -> int:
    """Truncate a non-negative numeric value to its weight slot."""
    return int(value)


def iter_contributions(record: Passenger):
    """Yield ``(spec, contribution)`` for every field in evaluation order."""
    for spec in FIELDS:
        yield spec, resolve(spec, record)
