"""Tests for the counter set model."""

import random

import pytest

from tallyboard.exceptions import (
    DuplicateCounter,
    InvalidCounterName,
    ProtectedCounter,
    UnknownCounter,
)
from tallyboard.services.counter_set import (
    DEFAULT_TALLY_TYPES,
    add_custom,
    decrement,
    increment,
    initialize,
    merge_counts,
    normalize_name,
    remove_custom,
    reset_counts,
)

CUSTOM_POOL = ["VIP REQUESTS", "WARRANTY CLAIMS", "PICKUPS", "CALLBACKS", "ESCALATIONS"]


def _random_set(rng: random.Random):
    customs = rng.sample(CUSTOM_POOL, rng.randint(0, len(CUSTOM_POOL)))
    counters = initialize(customs)
    for _ in range(rng.randint(0, 20)):
        counters = increment(counters, rng.choice(counters.all_types))
    return counters


class TestInitialize:
    def test_all_zero(self):
        counters = initialize(["vip requests"])

        assert counters.all_types == list(DEFAULT_TALLY_TYPES) + ["VIP REQUESTS"]
        assert all(count == 0 for count in counters.counts.values())

    def test_builtins_always_present(self):
        counters = initialize([])
        assert list(counters.counts) == list(DEFAULT_TALLY_TYPES)

    def test_custom_matching_builtin_is_not_duplicated(self):
        counters = initialize(["drop-offs", "DROP-OFFS", "pickups", " PICKUPS "])

        assert counters.custom_types == ("PICKUPS",)
        assert len(counters.counts) == len(DEFAULT_TALLY_TYPES) + 1


class TestIncrementDecrement:
    def test_increment(self):
        counters = increment(initialize([]), "DROP-OFFS")
        assert counters.count("DROP-OFFS") == 1

    def test_operations_do_not_mutate(self):
        original = initialize([])
        increment(original, "DROP-OFFS")
        assert original.count("DROP-OFFS") == 0

    def test_lookup_is_normalized(self):
        counters = increment(initialize([]), "  drop-offs ")
        assert counters.count("Drop-Offs") == 1

    def test_membership_is_normalized(self):
        counters = initialize(["pickups"])

        assert "drop-offs" in counters
        assert " Pickups " in counters
        assert "walk-ins" not in counters

    def test_unknown_counter(self):
        with pytest.raises(UnknownCounter) as exc_info:
            increment(initialize([]), "NOPE")
        assert exc_info.value.name == "NOPE"

        with pytest.raises(UnknownCounter):
            decrement(initialize([]), "NOPE")

    def test_decrement_at_zero_is_noop(self):
        counters = initialize([])
        assert decrement(counters, "DEFERRALS") is counters

    def test_decrement_undoes_increment(self):
        rng = random.Random(1234)
        for _ in range(50):
            counters = _random_set(rng)
            name = rng.choice(counters.all_types)
            assert decrement(increment(counters, name), name) == counters

    def test_decrement_never_negative(self):
        rng = random.Random(99)
        for _ in range(50):
            counters = _random_set(rng)
            name = rng.choice(counters.all_types)
            for _ in range(rng.randint(1, 30)):
                counters = decrement(counters, name)
                assert counters.count(name) >= 0


class TestCustomCounters:
    def test_add_custom(self):
        counters = add_custom(initialize([]), "  vip requests ")

        assert "VIP REQUESTS" in counters
        assert counters.custom_types == ("VIP REQUESTS",)
        assert counters.count("VIP REQUESTS") == 0

    def test_add_duplicate_variant(self):
        counters = add_custom(initialize([]), "VIP REQUESTS")

        with pytest.raises(DuplicateCounter):
            add_custom(counters, "vip requests ")

    def test_add_builtin_name_is_duplicate(self):
        with pytest.raises(DuplicateCounter):
            add_custom(initialize([]), "drop-offs")

    @pytest.mark.parametrize("name", ["", "   ", "\t"])
    def test_add_empty_name(self, name):
        with pytest.raises(InvalidCounterName):
            add_custom(initialize([]), name)

    def test_add_then_remove_restores_membership(self):
        rng = random.Random(7)
        for _ in range(30):
            counters = _random_set(rng)
            candidates = [n for n in CUSTOM_POOL + ["NEW ONE"] if n not in counters]
            if not candidates:
                continue
            name = rng.choice(candidates)
            restored = remove_custom(add_custom(counters, name), name)

            assert set(restored.counts) == set(counters.counts)
            assert restored.custom_types == counters.custom_types

    def test_remove_deletes_key(self):
        counters = increment(add_custom(initialize([]), "PICKUPS"), "PICKUPS")
        counters = remove_custom(counters, "pickups")

        assert "PICKUPS" not in counters
        assert "PICKUPS" not in counters.counts

    def test_remove_builtin_is_protected(self):
        rng = random.Random(42)
        for _ in range(20):
            counters = _random_set(rng)
            name = rng.choice(DEFAULT_TALLY_TYPES)
            with pytest.raises(ProtectedCounter):
                remove_custom(counters, name.lower())
            assert name in counters

    def test_remove_unknown(self):
        with pytest.raises(UnknownCounter):
            remove_custom(initialize([]), "GHOST")


class TestResetAndMerge:
    def test_reset_counts(self):
        counters = increment(increment(initialize(["PICKUPS"]), "PICKUPS"), "DEFERRALS")
        reset = reset_counts(counters)

        assert set(reset.counts) == set(counters.counts)
        assert all(count == 0 for count in reset.counts.values())

    def test_merge_counts(self):
        counters = initialize(["PICKUPS"])
        merged = merge_counts(
            counters,
            {
                "PICKUPS": {"count": 4},
                "DROP-OFFS": {"count": "2"},
                "DEFERRALS": {"count": -3},
                "IN-STORE REPAIRS": {"count": "lots"},
                "REMOVED LONG AGO": {"count": 9},
            },
        )

        assert merged.count("PICKUPS") == 4
        assert merged.count("DROP-OFFS") == 2
        assert merged.count("DEFERRALS") == 0
        assert merged.count("IN-STORE REPAIRS") == 0
        assert "REMOVED LONG AGO" not in merged

    @pytest.mark.parametrize("stored", [["DROP-OFFS"], "DROP-OFFS", 3, None])
    def test_merge_ignores_malformed_tallies(self, stored):
        counters = increment(initialize([]), "DROP-OFFS")

        assert merge_counts(counters, stored) == counters

    def test_to_tallies(self):
        counters = increment(initialize([]), "DROP-OFFS")
        assert counters.to_tallies()["DROP-OFFS"] == {"count": 1}

    def test_normalize_name(self):
        assert normalize_name("  vip Requests ") == "VIP REQUESTS"
