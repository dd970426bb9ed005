"""Passenger records and the categorical domains they draw from."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from .errors import RecordError


class BinaryClass(Enum):
    """Outcome of the binary classifier."""

    YES = 1
    NO = 0


class PassengerClass(Enum):
    FIRST = '1'
    SECOND = '2'
    THIRD = '3'


class Sex(Enum):
    MALE = 'male'
    FEMALE = 'female'


class PortOfEmbarkation(Enum):
    CHERBOURG = 'C'
    SOUTHAMPTON = 'S'
    QUEENSTOWN = 'Q'


_NUMERIC_FIELDS = ('age', 'siblings_spouses', 'parents_children', 'fare')


@dataclass(frozen=True, kw_only=True)
class Passenger:
    """Unlabeled passenger record. Every feature is optional (``None`` means absent)."""

    passenger_id: int
    passenger_class: PassengerClass | None = None
    name: str | None = None
    sex: Sex | None = None
    age: float | None = None
    siblings_spouses: int | None = None
    parents_children: int | None = None
    ticket_id: str | None = None
    fare: float | None = None
    cabin_id: str | None = None
    port_of_embarkation: PortOfEmbarkation | None = None

    def __post_init__(self) -> None:
        if self.passenger_id < 0:
            raise RecordError(
                f'passenger_id must be non-negative, got {self.passenger_id}',
                record_id=self.passenger_id,
                column='passenger_id',
            )
        for attr in _NUMERIC_FIELDS:
            value = getattr(self, attr)
            if value is None:
                continue
            if not math.isfinite(value) or value < 0:
                raise RecordError(
                    f'{attr} must be a finite non-negative number, got {value!r} '
                    f'for passenger {self.passenger_id}',
                    record_id=self.passenger_id,
                    column=attr,
                )

    @property
    def record_id(self) -> int:
        return self.passenger_id


@dataclass(frozen=True, kw_only=True)
class LabeledPassenger(Passenger):
    """Training record: a passenger plus the known outcome."""

    survived: BinaryClass

    @property
    def answer(self) -> BinaryClass:
        return self.survived


@dataclass(frozen=True)
class Outcome:
    """Prediction for a single record."""

    record_id: int
    prediction: BinaryClass
