"""
Core Package - Bracket Pool Scorer
bracket_scorer/core/__init__.py

Core infrastructure: dependencies, exceptions.

Dependencies are imported from bracket_scorer.core.dependencies directly; they
pull in the scoring pipeline, which itself imports the exceptions below.
"""

from bracket_scorer.core.exceptions import (
    DataUnavailableException,
    EmptyEntryListException,
    IndexOutOfRangeException,
    LengthMismatchException,
    NoWinnersException,
    SettlementException,
    SettlementInvariantException,
)

__all__ = [
    "DataUnavailableException",
    "EmptyEntryListException",
    "IndexOutOfRangeException",
    "LengthMismatchException",
    "NoWinnersException",
    "SettlementException",
    "SettlementInvariantException",
]
