"""Counter set model: named non-negative counts for one day."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from tallyboard.exceptions import (
    DuplicateCounter,
    InvalidCounterName,
    ProtectedCounter,
    UnknownCounter,
)

# Default tally types, present in every day and never removable
DEFAULT_TALLY_TYPES: Tuple[str, ...] = (
    "PRODUCT SERVICE REQUESTS",
    "IN-STORE REPAIRS",
    "DROP-OFFS",
    "AFTER-SALES CALLS",
    "DEFERRALS",
)


def normalize_name(name: str) -> str:
    """Canonical counter key: trimmed and upper-cased."""
    return str(name).strip().upper()


def _unique(names: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for name in names:
        if name not in seen:
            seen.add(name)
            result.append(name)
    return result


@dataclass(frozen=True)
class CounterSet:
    """
    Mapping of counter name to count.

    ``counts`` keeps builtins first, then customs in insertion order. Operations
    never mutate a set; they return a new one.
    """

    counts: Mapping[str, int]
    builtin_types: Tuple[str, ...] = DEFAULT_TALLY_TYPES
    custom_types: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def all_types(self) -> List[str]:
        return list(self.builtin_types) + list(self.custom_types)

    def __contains__(self, name: object) -> bool:
        return normalize_name(name) in self.counts

    def count(self, name: str) -> int:
        key = normalize_name(name)
        if key not in self.counts:
            raise UnknownCounter(key)
        return self.counts[key]

    def is_builtin(self, name: str) -> bool:
        return normalize_name(name) in self.builtin_types

    def to_tallies(self) -> Dict[str, Dict[str, int]]:
        """Wire form: ``{name: {"count": n}}``."""
        return {name: {"count": count} for name, count in self.counts.items()}


def initialize(
    names: Iterable[str], builtin_types: Iterable[str] = DEFAULT_TALLY_TYPES
) -> CounterSet:
    """Every builtin plus every given name, all at zero."""
    builtins = tuple(_unique(normalize_name(n) for n in builtin_types))
    customs = tuple(
        n for n in _unique(normalize_name(n) for n in names) if n and n not in builtins
    )
    counts = {name: 0 for name in builtins + customs}
    return CounterSet(counts=counts, builtin_types=builtins, custom_types=customs)


def increment(counters: CounterSet, name: str) -> CounterSet:
    key = normalize_name(name)
    if key not in counters.counts:
        raise UnknownCounter(key)
    counts = dict(counters.counts)
    counts[key] += 1
    return replace(counters, counts=counts)


def decrement(counters: CounterSet, name: str) -> CounterSet:
    """Decrease by one; at zero the same set is returned unchanged."""
    key = normalize_name(name)
    if key not in counters.counts:
        raise UnknownCounter(key)
    if counters.counts[key] <= 0:
        return counters
    counts = dict(counters.counts)
    counts[key] -= 1
    return replace(counters, counts=counts)


def add_custom(counters: CounterSet, name: str) -> CounterSet:
    key = normalize_name(name)
    if not key:
        raise InvalidCounterName(name)
    if key in counters.counts or key in counters.all_types:
        raise DuplicateCounter(key)
    counts = dict(counters.counts)
    counts[key] = 0
    return replace(
        counters, counts=counts, custom_types=counters.custom_types + (key,)
    )


def remove_custom(counters: CounterSet, name: str) -> CounterSet:
    """Delete a custom counter entirely (the key is removed, not zeroed)."""
    key = normalize_name(name)
    if key in counters.builtin_types:
        raise ProtectedCounter(key)
    if key not in counters.counts:
        raise UnknownCounter(key)
    counts = {k: v for k, v in counters.counts.items() if k != key}
    customs = tuple(t for t in counters.custom_types if t != key)
    return replace(counters, counts=counts, custom_types=customs)


def reset_counts(counters: CounterSet) -> CounterSet:
    return replace(counters, counts={name: 0 for name in counters.counts})


def merge_counts(counters: CounterSet, stored: Mapping[str, Any]) -> CounterSet:
    """
    Overlay persisted counts onto a set.

    Args:
        counters: Set defining which names are known
        stored: Persisted ``tallies`` map, ``{name: {"count": n}}``

    Returns:
        New set; names not in ``counters`` are ignored and bad counts become 0.
        A ``stored`` value that is not a mapping leaves the set unchanged
    """
    if not isinstance(stored, Mapping):
        return counters
    counts = dict(counters.counts)
    for name, value in stored.items():
        if name not in counts:
            continue
        raw = value.get("count", 0) if isinstance(value, Mapping) else value
        try:
            counts[name] = max(int(raw), 0)
        except (TypeError, ValueError):
            counts[name] = 0
    return replace(counters, counts=counts)
