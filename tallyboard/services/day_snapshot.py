"""Persisted counter state for one calendar day."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, Optional

from tallyboard.services.counter_set import (
    DEFAULT_TALLY_TYPES,
    CounterSet,
    initialize,
    merge_counts,
)

TALLIES_COLLECTION = "tallies"


@dataclass(frozen=True)
class DaySnapshot:
    """
    Counter state for one ``YYYY-MM-DD`` day in the fixed zone.

    Attributes:
        date_key: Document id and ``date`` field
        counters: Counts and custom names active that day
        timezone: Zone label stored alongside the counts
        created_at: ISO-8601 instant of the last write
    """

    date_key: str
    counters: CounterSet
    timezone: str
    created_at: Optional[str] = None

    @property
    def custom_types(self):
        return list(self.counters.custom_types)

    def with_counters(self, counters: CounterSet) -> "DaySnapshot":
        return replace(self, counters=counters)

    def stamped(self, created_at: str) -> "DaySnapshot":
        return replace(self, created_at=created_at)

    def to_document(self) -> Dict[str, Any]:
        return {
            "tallies": self.counters.to_tallies(),
            "timezone": self.timezone,
            "customTallyTypes": list(self.counters.custom_types),
            "date": self.date_key,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_document(
        cls,
        date_key: str,
        data: Dict[str, Any],
        custom_types: Optional[Iterable[str]] = None,
        builtin_types: Iterable[str] = DEFAULT_TALLY_TYPES,
    ) -> "DaySnapshot":
        """
        Rebuild a snapshot from its stored document.

        Args:
            date_key: Document id
            data: Stored document
            custom_types: Authoritative custom names; the document's own list
                is used when None
            builtin_types: Builtin names always present in the set
        """
        if custom_types is None:
            custom_types = data.get("customTallyTypes") or []
        counters = initialize(custom_types, builtin_types)
        counters = merge_counts(counters, data.get("tallies") or {})
        return cls(
            date_key=date_key,
            counters=counters,
            timezone=data.get("timezone", ""),
            created_at=data.get("createdAt"),
        )

    @classmethod
    def fresh(
        cls,
        date_key: str,
        custom_types: Iterable[str],
        timezone: str,
        created_at: str,
        builtin_types: Iterable[str] = DEFAULT_TALLY_TYPES,
    ) -> "DaySnapshot":
        """Zero-valued snapshot seeded with builtins and the given customs."""
        return cls(
            date_key=date_key,
            counters=initialize(custom_types, builtin_types),
            timezone=timezone,
            created_at=created_at,
        )
