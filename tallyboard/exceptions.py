"""
Error classes for Tally Board.
"""


class TallyError(Exception):
    """Base error for tally operations."""
    pass


class StoreUnavailable(TallyError):
    """The document store failed on a read or write."""
    pass


class InvalidTimeZone(TallyError, ValueError):
    """The configured civil time zone cannot be resolved."""
    pass


class CounterError(TallyError, ValueError):
    """A counter operation was rejected by the model."""

    def __init__(self, name: str, message: str):
        super().__init__(message)
        self.name = name


class UnknownCounter(CounterError):
    """The counter does not exist in the active set."""

    def __init__(self, name: str):
        super().__init__(name, f"Unknown tally type: {name}")


class DuplicateCounter(CounterError):
    """A counter with the same normalized name already exists."""

    def __init__(self, name: str):
        super().__init__(name, f"Tally type already exists: {name}")


class ProtectedCounter(CounterError):
    """Builtin counters cannot be removed."""

    def __init__(self, name: str):
        super().__init__(name, f"Cannot remove default tally type: {name}")


class InvalidCounterName(CounterError):
    """The counter name is empty after normalization."""

    def __init__(self, name: str):
        super().__init__(name, "Tally name cannot be empty")


class InvalidConfirmation(TallyError, ValueError):
    """A destructive action was not confirmed with the expected phrase."""

    def __init__(self, expected: str):
        super().__init__(f'Please type "{expected}" to clear all tallies.')
        self.expected = expected
