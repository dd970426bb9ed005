"""Input/output helpers."""

from .files import read_test_records, read_training_records, write_outcomes

__all__ = ['read_test_records', 'read_training_records', 'write_outcomes']
