"""Tests for the JSON-line logging helpers."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from titanic_logreg.utils import get_logger, json_log, set_verbosity


def test_json_log_serialises_paths_as_text() -> None:
    payload = json.loads(json_log('io.read', component='io', path=Path('/data/train.csv')))

    assert payload['msg'] == 'io.read'
    assert payload['component'] == 'io'
    assert payload['path'] == '/data/train.csv'
    assert 'ts' in payload


def test_debug_env_enables_debug_level(monkeypatch) -> None:
    monkeypatch.setenv('TLR_DEBUG', '1')
    logger = get_logger('titanic_logreg.tests.debug_env')

    assert logger.level == logging.DEBUG


def test_set_verbosity_switches_project_loggers_only() -> None:
    project = get_logger('titanic_logreg.tests.verbosity')
    other = logging.getLogger('somebody_else.tests.verbosity')
    other.setLevel(logging.WARNING)

    set_verbosity(True)
    assert project.level == logging.DEBUG
    assert other.level == logging.WARNING

    set_verbosity(False)
    assert project.level == logging.INFO
