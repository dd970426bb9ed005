"""Training and inference core."""

from .encoding import (
    ABSENT_INDEX,
    FIELDS,
    PRESENT_INDEX,
    Contribution,
    FieldKind,
    FieldSpec,
    category_to_index,
    resolve,
)
from .errors import (
    EmptyDatasetError,
    EncodingError,
    InputFileError,
    NumericOverflowError,
    RecordError,
    TitanicLogRegError,
    TrainingCancelledError,
)
from .logistic import (
    apply_update,
    average_cost,
    cost,
    diff_hypothesis,
    gradient_descent_update,
    hypothesis,
    sigmoid,
    weighted_sum,
)
from .predict import predict, predict_batch
from .records import (
    BinaryClass,
    LabeledPassenger,
    Outcome,
    Passenger,
    PassengerClass,
    PortOfEmbarkation,
    Sex,
)
from .solver import DEFAULT_SHRINK_FACTOR, SolveResult, SolverState, solve
from .weights import INITIAL_WEIGHT, WeightStore

__all__ = [
    # Encoding
    'ABSENT_INDEX',
    'PRESENT_INDEX',
    'FIELDS',
    'Contribution',
    'FieldKind',
    'FieldSpec',
    'category_to_index',
    'resolve',
    # Errors
    'TitanicLogRegError',
    'RecordError',
    'InputFileError',
    'EncodingError',
    'EmptyDatasetError',
    'NumericOverflowError',
    'TrainingCancelledError',
    # Logistic
    'sigmoid',
    'weighted_sum',
    'hypothesis',
    'cost',
    'average_cost',
    'diff_hypothesis',
    'apply_update',
    'gradient_descent_update',
    # Prediction
    'predict',
    'predict_batch',
    # Records
    'BinaryClass',
    'Outcome',
    'Passenger',
    'LabeledPassenger',
    'PassengerClass',
    'PortOfEmbarkation',
    'Sex',
    # Solver
    'DEFAULT_SHRINK_FACTOR',
    'SolveResult',
    'SolverState',
    'solve',
    # Weights
    'INITIAL_WEIGHT',
    'WeightStore',
]
