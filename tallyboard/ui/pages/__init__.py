"""UI pages."""

from . import board, history

__all__ = ["board", "history"]
