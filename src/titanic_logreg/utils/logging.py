"""JSON-line logging for titanic_logreg.

Each module logs through ``get_logger(__name__)`` and passes events built by
``json_log``, e.g. ``solver.converged`` or ``io.read_training.completed``,
with a ``component`` key naming the layer. Output goes to stdout, one JSON
object per line. ``TLR_DEBUG`` in the environment or the CLI's ``--verbose``
flag (through ``set_verbosity``) turns on per-iteration debug events.
"""

from __future__ import annotations

import json
import logging
import os
import sys
import time
from typing import Any


def json_log(message: str, **extra: Any) -> str:
    """Return a JSON-formatted log string."""
    payload = {'ts': time.time(), 'msg': message, **extra}
    return json.dumps(payload, ensure_ascii=False, default=str)


def get_logger(name: str) -> logging.Logger:
    """Return a configured logger following project conventions."""
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter('%(message)s'))
    logger.addHandler(handler)

    level = logging.DEBUG if os.getenv('TLR_DEBUG') else logging.INFO
    logger.setLevel(level)
    return logger


def set_verbosity(verbose: bool, prefix: str = 'titanic_logreg') -> None:
    """Switch every project logger created so far between INFO and DEBUG."""
    level = logging.DEBUG if verbose else logging.INFO
    for name, logger in logging.root.manager.loggerDict.items():
        if name.startswith(prefix) and isinstance(logger, logging.Logger):
            logger.setLevel(level)
