"""Tally Board - shared daily counters with midnight rollover."""

__version__ = "0.1.0"
