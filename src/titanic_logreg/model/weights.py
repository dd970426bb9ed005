"""Sparse per-field weight tables."""

from __future__ import annotations

import math
from typing import Any

from .encoding import ABSENT_INDEX, FIELDS, FIELDS_BY_NAME, FieldSpec
from .errors import EncodingError

# New slots start at 1.0 rather than 0.0. This is a non-standard prior kept on
# purpose: changing it changes every trained model.
INITIAL_WEIGHT = 1.0


class WeightStore:
    """One bias plus one weight table per record field.

    Bounded tables (categorical and presence fields) are fully sized on
    construction. Numeric tables start with the absent slot only and grow on
    demand; they never shrink. Tables passed to the constructor are copied.
    """

    def __init__(
        self,
        bias: float = INITIAL_WEIGHT,
        tables: dict[str, list[float]] | None = None,
    ) -> None:
        self.bias = float(bias)
        if tables is None:
            tables = {spec.name: [INITIAL_WEIGHT] * spec.initial_size for spec in FIELDS}
        self._tables = {name: list(table) for name, table in tables.items()}
        self._check_structure()

    def _check_structure(self) -> None:
        for spec in FIELDS:
            table = self._tables.get(spec.name)
            if table is None:
                raise ValueError(f'Weight table missing for field {spec.name!r}')
            if spec.bounded and len(table) != spec.initial_size:
                raise ValueError(
                    f'Weight table {spec.name!r} must hold {spec.initial_size} slots, '
                    f'found {len(table)}'
                )
            if len(table) <= ABSENT_INDEX:
                raise ValueError(f'Weight table {spec.name!r} lacks the absent slot')

    def table(self, field_name: str) -> tuple[float, ...]:
        return tuple(self._tables[field_name])

    def size(self, field_name: str) -> int:
        return len(self._tables[field_name])

    def ensure_index(self, spec: FieldSpec, index: int) -> None:
        """Grow a numeric table so that ``index`` exists."""
        if spec.bounded:
            return
        table = self._tables[spec.name]
        if len(table) <= index:
            table.extend([INITIAL_WEIGHT] * (index + 1 - len(table)))

    def get(self, spec: FieldSpec, index: int, record_id: int, grow: bool = True) -> float:
        """Return the weight at ``index``.

        With ``grow=False`` a numeric slot past the end of its table reads as
        ``INITIAL_WEIGHT`` (the value growth would create) and the store is
        left untouched.
        """
        if grow:
            self.ensure_index(spec, index)
        table = self._tables[spec.name]
        if 0 <= index < len(table):
            return table[index]
        if not grow and not spec.bounded and index >= 0:
            return INITIAL_WEIGHT
        raise EncodingError(record_id, spec.name, index)

    def add(self, spec: FieldSpec, index: int, delta: float, record_id: int) -> None:
        self.ensure_index(spec, index)
        table = self._tables[spec.name]
        if not 0 <= index < len(table):
            raise EncodingError(record_id, spec.name, index, operation='update')
        table[index] += delta

    def snapshot(self) -> WeightStore:
        """Return an independent copy; later updates to either side are not shared."""
        return WeightStore(bias=self.bias, tables=self._tables)

    def is_finite(self) -> bool:
        """True when the bias and every slot hold a finite number."""
        if not math.isfinite(self.bias):
            return False
        return all(math.isfinite(w) for table in self._tables.values() for w in table)

    def to_dict(self) -> dict[str, Any]:
        return {
            'bias': self.bias,
            **{name: list(self._tables[name]) for name in FIELDS_BY_NAME},
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WeightStore):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        sizes = ', '.join(f'{name}={len(table)}' for name, table in self._tables.items())
        return f'WeightStore(bias={self.bias!r}, {sizes})'
