"""Enum definitions for Tally Board."""

import enum


class MutationKind(str, enum.Enum):
    """Counter mutations applied to the active day."""

    INCREMENT = "increment"
    DECREMENT = "decrement"
    ADD_CUSTOM = "add_custom"
    REMOVE_CUSTOM = "remove_custom"


class SyncState(str, enum.Enum):
    """Lifecycle of a synchronizer session."""

    UNINITIALIZED = "uninitialized"
    LOADED = "loaded"
    ROLLED_OVER = "rolled_over"
