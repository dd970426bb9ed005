"""Logistic-regression survival classifier for Titanic passenger records."""

__version__ = '0.1.0'
