"""Bracket pool settlement: scoring, ranking, prize distribution and Merkle commitment."""

__version__ = "1.0.0"
