"""Error taxonomy for the training and inference core."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .solver import SolveResult


class TitanicLogRegError(Exception):
    """Base class for every error raised by titanic_logreg."""


class RecordError(TitanicLogRegError, ValueError):
    """Raised when an input record holds a value the model cannot accept."""

    def __init__(self, message: str, record_id: int | None = None, column: str | None = None):
        super().__init__(message)
        self.record_id = record_id
        self.column = column


class InputFileError(TitanicLogRegError, OSError):
    """Raised when an input file cannot be read."""


class EncodingError(TitanicLogRegError, LookupError):
    """Raised when a structurally guaranteed weight slot is missing.

    This signals a corrupted weight store, never bad input data.
    """

    def __init__(self, record_id: int, field_name: str, index: int, operation: str = 'lookup'):
        super().__init__(
            f'{operation}: {field_name} weight {index} was unreachable for passenger {record_id}'
        )
        self.record_id = record_id
        self.field_name = field_name
        self.index = index
        self.operation = operation


class EmptyDatasetError(TitanicLogRegError, ZeroDivisionError):
    """Raised when an average is requested over zero records."""


class TrainingCancelledError(TitanicLogRegError):
    """Raised when the solver stops before reaching the tolerance."""

    def __init__(self, message: str, result: SolveResult):
        super().__init__(message)
        self.result = result


class NumericOverflowError(TitanicLogRegError, ArithmeticError):
    """Raised when training drives a weight or the cost out of the finite range.

    Inside ``solve`` the partial result is attached as ``result``; a bare
    hypothesis evaluation raises it with ``result=None``.
    """

    def __init__(self, message: str, result: SolveResult | None = None):
        super().__init__(message)
        self.result = result
