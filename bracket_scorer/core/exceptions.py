"""
Custom Exceptions - Bracket Pool Scorer
bracket_scorer/core/exceptions.py

Every condition that aborts a settlement run. Nothing here is recoverable
inside a run: the caller fixes the input and re-runs.
"""


class SettlementException(Exception):
    """Base exception for settlement failures."""

    pass


class LengthMismatchException(SettlementException):
    """An entry's picks do not line up with the game results."""

    def __init__(self, picks_length: int, results_length: int):
        self.picks_length = picks_length
        self.results_length = results_length
        super().__init__(
            f"Length mismatch: picks={picks_length}, results={results_length}"
        )


class IndexOutOfRangeException(SettlementException):
    """Game index outside the round weight table."""

    def __init__(self, game_index: int, max_index: int = 66):
        self.game_index = game_index
        self.max_index = max_index
        super().__init__(f"Invalid game index: {game_index} (valid: 0-{max_index})")


class EmptyEntryListException(SettlementException):
    """Prize distribution was asked to split a pool over zero entries."""

    def __init__(self, message: str = "Cannot distribute prizes to empty entry list"):
        self.message = message
        super().__init__(message)


class NoWinnersException(SettlementException):
    """No entry carries a positive prize, so there is nothing to commit to."""

    def __init__(self, message: str = "Cannot build Merkle tree with no winners"):
        self.message = message
        super().__init__(message)


class DataUnavailableException(SettlementException):
    """The chain data source could not produce a snapshot."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Data unavailable from {source}: {reason}")


class SettlementInvariantException(SettlementException):
    """A computed settlement broke one of its own accounting invariants."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
