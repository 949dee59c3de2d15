"""Daily tally synchronizer: keeps the active day in step with the store."""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from tallyboard.exceptions import InvalidConfirmation, StoreUnavailable, TallyError
from tallyboard.models.enums import MutationKind, SyncState
from tallyboard.services.civil_clock import CivilDayClock
from tallyboard.services.counter_set import (
    DEFAULT_TALLY_TYPES,
    add_custom,
    decrement,
    increment,
    normalize_name,
    remove_custom,
    reset_counts,
)
from tallyboard.services.day_snapshot import TALLIES_COLLECTION, DaySnapshot
from tallyboard.services.document_store import DocumentStore
from tallyboard.services.global_settings_service import GlobalSettingsService
from tallyboard.services.order_reconciler import apply_move, reconcile
from tallyboard.utils.logger import logger


@dataclass(frozen=True)
class BoardEntry:
    """One row of the tally board as shown to users."""

    name: str
    count: int
    builtin: bool


class TallyService:
    """
    Synchronizes one client's view of today's tallies with the shared store.

    Every mutation is two-phase: the in-memory snapshot is updated first,
    then the whole day document is overwritten in the store. Concurrent
    clients therefore race with last-write-wins semantics.

    Lifecycle: UNINITIALIZED -> LOADED -> ROLLED_OVER -> LOADED (next day).
    """

    def __init__(
        self,
        store: DocumentStore,
        clock: CivilDayClock,
        settings_service: Optional[GlobalSettingsService] = None,
        builtin_types: Optional[Sequence[str]] = None,
        confirmation_phrase: Optional[str] = None,
    ):
        """
        Initialize the tally service.

        Args:
            store: Shared document store
            clock: Civil-day clock for the fixed zone
            settings_service: Global settings access. Built from store/clock if omitted
            builtin_types: Protected tally names. Defaults to DEFAULT_TALLY_TYPES
            confirmation_phrase: Phrase required by clear_all. Defaults to settings
        """
        if confirmation_phrase is None:
            from tallyboard.config import settings

            confirmation_phrase = settings.clear_confirmation_phrase

        self.store = store
        self.clock = clock
        self.settings_service = settings_service or GlobalSettingsService(store, clock)
        self.builtin_types = tuple(
            normalize_name(t) for t in (builtin_types or DEFAULT_TALLY_TYPES)
        )
        self.confirmation_phrase = confirmation_phrase

        self.state = SyncState.UNINITIALIZED
        self.snapshot: Optional[DaySnapshot] = None
        self.tally_order: List[str] = []
        self._last_rollover_key: Optional[str] = None

    @property
    def active_date_key(self) -> Optional[str]:
        return self.snapshot.date_key if self.snapshot else None

    def load(self) -> DaySnapshot:
        """
        Load today's snapshot, creating and persisting it if missing.

        The global custom list, when it exists, wins over the list embedded
        in the day document.

        Returns:
            The active snapshot

        Raises:
            StoreUnavailable: If any read or the initial write fails
        """
        date_key = self.clock.date_key()
        try:
            data = self.store.get(TALLIES_COLLECTION, date_key)
            global_customs = self.settings_service.fetch_custom_types()
            global_order = self.settings_service.fetch_tally_order()

            if data is not None:
                snapshot = DaySnapshot.from_document(
                    date_key,
                    data,
                    custom_types=global_customs,
                    builtin_types=self.builtin_types,
                )
                logger.info(f"Loaded tallies for {date_key}")
            else:
                snapshot = self._fresh_snapshot(date_key, global_customs or [])
                self.store.set(TALLIES_COLLECTION, date_key, snapshot.to_document())
                logger.info(f"Created tallies for {date_key}")
        except StoreUnavailable as e:
            logger.error(f"Error loading tallies for {date_key}: {e}")
            raise

        self.snapshot = snapshot
        self.tally_order = reconcile(global_order, snapshot.counters.all_types)
        self.state = SyncState.LOADED
        return snapshot

    def apply_mutation(
        self, kind: Union[MutationKind, str], name: str
    ) -> DaySnapshot:
        """
        Apply a counter mutation locally, then persist the full day document.

        Args:
            kind: Mutation to apply
            name: Tally name (normalized before lookup)

        Returns:
            The active snapshot after the mutation

        Raises:
            UnknownCounter, DuplicateCounter, ProtectedCounter, InvalidCounterName:
                Rejected before any write; state is unchanged
            StoreUnavailable: If a write fails. Local state keeps the mutation and
                a global list already written is not rolled back
        """
        kind = MutationKind(kind)
        self._require_loaded()
        self._ensure_current_day()

        snapshot = self.snapshot
        counters = snapshot.counters
        if kind is MutationKind.INCREMENT:
            updated = increment(counters, name)
        elif kind is MutationKind.DECREMENT:
            updated = decrement(counters, name)
            if updated is counters:
                return snapshot
        elif kind is MutationKind.ADD_CUSTOM:
            updated = add_custom(counters, name)
        else:
            updated = remove_custom(counters, name)

        self.snapshot = snapshot.with_counters(updated)
        self.tally_order = reconcile(self.tally_order, updated.all_types)
        self.state = SyncState.LOADED

        if kind in (MutationKind.ADD_CUSTOM, MutationKind.REMOVE_CUSTOM):
            try:
                self.settings_service.save_custom_types(list(updated.custom_types))
            except StoreUnavailable as e:
                logger.error(f"Error saving global custom tally types: {e}")
                raise

        self._persist_snapshot()
        logger.info(f"Applied {kind.value} to {normalize_name(name)} on {self.snapshot.date_key}")
        return self.snapshot

    def increment(self, name: str) -> DaySnapshot:
        return self.apply_mutation(MutationKind.INCREMENT, name)

    def decrement(self, name: str) -> DaySnapshot:
        return self.apply_mutation(MutationKind.DECREMENT, name)

    def add_custom(self, name: str) -> DaySnapshot:
        return self.apply_mutation(MutationKind.ADD_CUSTOM, name)

    def remove_custom(self, name: str) -> DaySnapshot:
        return self.apply_mutation(MutationKind.REMOVE_CUSTOM, name)

    def clear_all(self, confirmation: str) -> DaySnapshot:
        """
        Zero every tally for today.

        Args:
            confirmation: Must match the confirmation phrase, case-insensitively

        Raises:
            InvalidConfirmation: If the phrase does not match
            StoreUnavailable: If the write fails
        """
        expected = self.confirmation_phrase.strip().lower()
        if (confirmation or "").strip().lower() != expected:
            raise InvalidConfirmation(self.confirmation_phrase)

        self._require_loaded()
        self._ensure_current_day()
        self.snapshot = self.snapshot.with_counters(reset_counts(self.snapshot.counters))
        self.state = SyncState.LOADED
        self._persist_snapshot()
        logger.info(f"Cleared all tallies for {self.snapshot.date_key}")
        return self.snapshot

    def move(self, source: str, target: str) -> List[str]:
        """
        Move one tally to another's position and save the global order.

        Returns:
            The new display order
        """
        self._require_loaded()
        current = self.ordered_types()
        new_order = apply_move(current, normalize_name(source), normalize_name(target))
        if new_order == current:
            return current

        self.tally_order = new_order
        try:
            self.settings_service.save_tally_order(new_order)
        except StoreUnavailable as e:
            logger.error(f"Error saving global tally order: {e}")
            raise
        return new_order

    def ordered_types(self) -> List[str]:
        self._require_loaded()
        return reconcile(self.tally_order, self.snapshot.counters.all_types)

    def board(self) -> List[BoardEntry]:
        """Tallies in display order with their counts."""
        order = self.ordered_types()
        counts = self.snapshot.counters.counts
        return [
            BoardEntry(name=name, count=counts[name], builtin=name in self.builtin_types)
            for name in order
        ]

    def rollover(self) -> Optional[DaySnapshot]:
        """
        Switch the active snapshot to the current day.

        Skipped when the current date key is already active or was already
        rolled over to. A document another client created for the new day is
        adopted rather than overwritten. The previous day's document is not
        touched and the display order carries over.

        Returns:
            The new snapshot, or None if nothing was done
        """
        self._require_loaded()
        new_key = self.clock.date_key()
        if new_key == self.snapshot.date_key or new_key == self._last_rollover_key:
            logger.debug(f"Rollover skipped, {new_key} is already active")
            return None

        previous_key = self.snapshot.date_key
        logger.info(f"Rolling tallies over from {previous_key} to {new_key}")
        try:
            global_customs = self.settings_service.fetch_custom_types()
            if global_customs is None:
                global_customs = self.snapshot.custom_types

            existing = self.store.get(TALLIES_COLLECTION, new_key)
            if existing is not None:
                snapshot = DaySnapshot.from_document(
                    new_key,
                    existing,
                    custom_types=global_customs,
                    builtin_types=self.builtin_types,
                )
                logger.info(f"Adopted existing tallies for {new_key}")
            else:
                snapshot = self._fresh_snapshot(new_key, global_customs)
                self.store.set(TALLIES_COLLECTION, new_key, snapshot.to_document())
        except StoreUnavailable as e:
            logger.error(f"Error rolling tallies over to {new_key}: {e}")
            raise

        self.snapshot = snapshot
        self.tally_order = reconcile(self.tally_order, snapshot.counters.all_types)
        self._last_rollover_key = new_key
        self.state = SyncState.ROLLED_OVER
        logger.info(f"Tallies reset for {new_key}")
        return snapshot

    def check_midnight(self) -> bool:
        """
        Timer hook: roll over inside the midnight window or when the day is stale.

        Returns:
            True if a rollover happened
        """
        if self.state is SyncState.UNINITIALIZED:
            logger.warning("Midnight check skipped, tallies not loaded")
            return False

        boundary = self.clock.is_boundary_minute()
        stale = self.clock.date_key() != self.snapshot.date_key
        if not (boundary or stale):
            return False
        return self.rollover() is not None

    def _ensure_current_day(self) -> None:
        if self.clock.date_key() != self.snapshot.date_key:
            self.rollover()

    def _fresh_snapshot(self, date_key: str, custom_types: Sequence[str]) -> DaySnapshot:
        return DaySnapshot.fresh(
            date_key,
            custom_types,
            timezone=self.clock.zone_name,
            created_at=self.clock.timestamp(),
            builtin_types=self.builtin_types,
        )

    def _persist_snapshot(self) -> None:
        self.snapshot = self.snapshot.stamped(self.clock.timestamp())
        try:
            self.store.set(
                TALLIES_COLLECTION, self.snapshot.date_key, self.snapshot.to_document()
            )
        except StoreUnavailable as e:
            logger.error(f"Error saving tallies for {self.snapshot.date_key}: {e}")
            raise

    def _require_loaded(self) -> None:
        if self.state is SyncState.UNINITIALIZED or self.snapshot is None:
            raise TallyError("Tallies have not been loaded yet")
