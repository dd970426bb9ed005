"""Shared fixtures for titanic_logreg tests."""

from __future__ import annotations

import pytest

from titanic_logreg.model import (
    BinaryClass,
    LabeledPassenger,
    PassengerClass,
    PortOfEmbarkation,
    Sex,
    WeightStore,
)


@pytest.fixture
def full_passenger() -> LabeledPassenger:
    """Survivor with every field present; fresh weights give a weighted sum of 83."""
    return LabeledPassenger(
        passenger_id=1,
        survived=BinaryClass.YES,
        passenger_class=PassengerClass.FIRST,
        name='Lewis Webb',
        sex=Sex.MALE,
        age=25.33,
        siblings_spouses=3,
        parents_children=2,
        ticket_id='Golden Ticket',
        fare=45.67,
        cabin_id='1',
        port_of_embarkation=PortOfEmbarkation.SOUTHAMPTON,
    )


@pytest.fixture
def weights() -> WeightStore:
    return WeightStore()
