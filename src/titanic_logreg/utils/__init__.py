"""Shared utilities."""

from .logging import get_logger, json_log, set_verbosity

__all__ = ['get_logger', 'json_log', 'set_verbosity']
