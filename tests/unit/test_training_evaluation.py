"""Unit tests for training-set fit metrics."""

from __future__ import annotations

import pytest

from titanic_logreg.model import (
    BinaryClass,
    EmptyDatasetError,
    LabeledPassenger,
    Sex,
    WeightStore,
    apply_update,
    average_cost,
)
from titanic_logreg.training import FitMetrics, evaluate_training_fit


@pytest.fixture
def records() -> list[LabeledPassenger]:
    return [
        LabeledPassenger(passenger_id=1, survived=BinaryClass.YES, sex=Sex.FEMALE),
        LabeledPassenger(passenger_id=2, survived=BinaryClass.YES, sex=Sex.MALE),
        LabeledPassenger(passenger_id=3, survived=BinaryClass.NO, sex=Sex.MALE),
        LabeledPassenger(passenger_id=4, survived=BinaryClass.NO, sex=Sex.FEMALE),
    ]


@pytest.fixture
def women_survive() -> WeightStore:
    weights = WeightStore()
    apply_update(
        weights,
        -15.0,
        LabeledPassenger(passenger_id=0, survived=BinaryClass.YES, sex=Sex.FEMALE),
    )
    # Undo the shift on shared slots so men stay at a positive weighted sum.
    apply_update(weights, 15.0, LabeledPassenger(passenger_id=0, survived=BinaryClass.NO))
    return weights


class TestEvaluateTrainingFit:
    def test_returns_fit_metrics(self, women_survive, records) -> None:
        result = evaluate_training_fit(women_survive, records)
        assert isinstance(result, FitMetrics)
        assert result.support == 4

    def test_confusion_matrix_and_accuracy(self, women_survive, records) -> None:
        result = evaluate_training_fit(women_survive, records)

        # Predictions: 1 YES, 2 NO, 3 NO, 4 YES.
        assert result.confusion_matrix == [[1, 1], [1, 1]]
        assert result.accuracy == 0.5
        assert result.f1_survived == pytest.approx(0.5)

    def test_avg_cost_matches_model(self, women_survive, records) -> None:
        result = evaluate_training_fit(women_survive, records)
        assert result.avg_cost == pytest.approx(average_cost(women_survive, records))

    def test_all_negative_predictions_have_zero_f1(self, records) -> None:
        result = evaluate_training_fit(WeightStore(), records)
        assert result.f1_survived == 0.0
        assert result.confusion_matrix == [[2, 0], [2, 0]]

    def test_to_dict_is_serialisable(self, women_survive, records) -> None:
        data = evaluate_training_fit(women_survive, records).to_dict()
        assert set(data) == {'accuracy', 'f1_survived', 'avg_cost', 'support', 'confusion_matrix'}

    def test_rejects_empty_records(self) -> None:
        with pytest.raises(EmptyDatasetError):
            evaluate_training_fit(WeightStore(), [])
