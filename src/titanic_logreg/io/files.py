"""CSV readers for passenger records and writer for predictions."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

import pandas as pd

from ..model.errors import InputFileError, RecordError
from ..model.records import (
    BinaryClass,
    LabeledPassenger,
    Outcome,
    Passenger,
    PassengerClass,
    PortOfEmbarkation,
    Sex,
)
from ..utils import get_logger, json_log

log = get_logger(__name__)

ID_COLUMN = 'PassengerId'
LABEL_COLUMN = 'Survived'

# CSV column -> Passenger attribute, in file order.
FEATURE_COLUMNS: dict[str, str] = {
    'Pclass': 'passenger_class',
    'Name': 'name',
    'Sex': 'sex',
    'Age': 'age',
    'SibSp': 'siblings_spouses',
    'Parch': 'parents_children',
    'Ticket': 'ticket_id',
    'Fare': 'fare',
    'Cabin': 'cabin_id',
    'Embarked': 'port_of_embarkation',
}

LABEL_CODES: dict[str, BinaryClass] = {'1': BinaryClass.YES, '0': BinaryClass.NO}

E = TypeVar('E', bound=Enum)


def read_training_records(csv_path: str | Path) -> list[LabeledPassenger]:
    """Read labeled passengers from a CSV with a ``Survived`` column."""
    df = _read_frame(csv_path, required=(ID_COLUMN, LABEL_COLUMN, *FEATURE_COLUMNS))
    records = []
    for row in df.to_dict(orient='records'):
        record_id = _parse_id(row[ID_COLUMN])
        records.append(
            LabeledPassenger(
                passenger_id=record_id,
                survived=_parse_label(row[LABEL_COLUMN], record_id),
                **_parse_features(row, record_id),
            )
        )
    log.info(
        json_log(
            'io.read_training.completed',
            component='io',
            path=str(csv_path),
            rows=len(records),
        )
    )
    return records


def read_test_records(csv_path: str | Path) -> list[Passenger]:
    """Read unlabeled passengers. A ``Survived`` column, if present, is ignored."""
    df = _read_frame(csv_path, required=(ID_COLUMN, *FEATURE_COLUMNS))
    records = []
    for row in df.to_dict(orient='records'):
        record_id = _parse_id(row[ID_COLUMN])
        records.append(Passenger(passenger_id=record_id, **_parse_features(row, record_id)))
    log.info(
        json_log('io.read_test.completed', component='io', path=str(csv_path), rows=len(records))
    )
    return records


def write_outcomes(output_path: str | Path, outcomes: Iterable[Outcome]) -> Path:
    """Write ``PassengerId,Survived`` rows in the order given."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    rows = [
        {ID_COLUMN: outcome.record_id, LABEL_COLUMN: outcome.prediction.value}
        for outcome in outcomes
    ]
    df = pd.DataFrame(rows, columns=[ID_COLUMN, LABEL_COLUMN])
    df.to_csv(path, index=False)
    log.info(
        json_log('io.write_outcomes.completed', component='io', path=str(path), rows=len(df))
    )
    return path


def _read_frame(csv_path: str | Path, required: Iterable[str]) -> pd.DataFrame:
    # Keep every cell as text so empty cells stay distinguishable from zero.
    try:
        df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError:
        raise RecordError(f'{csv_path}: file is empty') from None
    except (UnicodeDecodeError, pd.errors.ParserError) as exc:
        raise RecordError(f'{csv_path}: not a readable UTF-8 CSV file: {exc}') from exc
    except OSError as exc:
        raise InputFileError(f'Failed to read from {csv_path}: {exc}') from exc
    missing = [column for column in required if column not in df.columns]
    if missing:
        raise RecordError(f'{csv_path}: missing required column(s): {", ".join(missing)}')
    return df


def _parse_features(row: dict[str, Any], record_id: int) -> dict[str, Any]:
    parsers: dict[str, Callable[[str, int, str], Any]] = {
        'Pclass': _enum_parser(PassengerClass),
        'Name': _parse_text,
        'Sex': _enum_parser(Sex),
        'Age': _parse_float,
        'SibSp': _parse_count,
        'Parch': _parse_count,
        'Ticket': _parse_text,
        'Fare': _parse_float,
        'Cabin': _parse_text,
        'Embarked': _enum_parser(PortOfEmbarkation),
    }
    features: dict[str, Any] = {}
    for column, attr in FEATURE_COLUMNS.items():
        raw = str(row[column]).strip()
        features[attr] = None if raw == '' else parsers[column](raw, record_id, column)
    return features


def _parse_id(raw: Any) -> int:
    text = str(raw).strip()
    try:
        return int(text)
    except ValueError:
        raise RecordError(
            f'{ID_COLUMN} must be an integer, got {text!r}',
            column=ID_COLUMN,
        ) from None


def _parse_label(raw: Any, record_id: int) -> BinaryClass:
    text = str(raw).strip()
    try:
        return LABEL_CODES[text]
    except KeyError:
        raise RecordError(
            f'{LABEL_COLUMN} must be 0 or 1, got {text!r} for passenger {record_id}',
            record_id=record_id,
            column=LABEL_COLUMN,
        ) from None


def _enum_parser(enum_cls: type[E]) -> Callable[[str, int, str], E]:
    def parse(raw: str, record_id: int, column: str) -> E:
        try:
            return enum_cls(raw)
        except ValueError:
            allowed = ', '.join(member.value for member in enum_cls)
            raise RecordError(
                f'{column} must be one of {allowed}, got {raw!r} for passenger {record_id}',
                record_id=record_id,
                column=column,
            ) from None

    return parse


def _parse_text(raw: str, record_id: int, column: str) -> str:
    return raw


def _parse_float(raw: str, record_id: int, column: str) -> float:
    try:
        return float(raw)
    except ValueError:
        raise RecordError(
            f'{column} must be a number, got {raw!r} for passenger {record_id}',
            record_id=record_id,
            column=column,
        ) from None


def _parse_count(raw: str, record_id: int, column: str) -> int:
    number = _parse_float(raw, record_id, column)
    if not number.is_integer():
        raise RecordError(
            f'{column} must be a whole number, got {raw!r} for passenger {record_id}',
            record_id=record_id,
            column=column,
        )
    return int(number)
