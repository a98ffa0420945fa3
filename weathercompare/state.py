"""Comparison slots with whole-slot replacement and stale-write discard."""

import logging

from weathercompare.errors import SlotIndexError
from weathercompare.models.location import LocationSlot

logger = logging.getLogger(__name__)

MAX_SLOTS = 3


class AppState:
    """Up to three location slots, each either empty or fully populated.

    Every update takes a ticket from begin_update(); publish() only lands if
    no newer ticket has been issued for that slot since, so a slow response
    can never overwrite a newer one.
    """

    def __init__(self, max_slots: int = MAX_SLOTS):
        self.max_slots = max_slots
        self._slots: list[LocationSlot | None] = [None] * max_slots
        self._tickets: list[int] = [0] * max_slots

    def _check(self, index: int) -> None:
        if not 0 <= index < self.max_slots:
            raise SlotIndexError(f"Slot index {index} out of range 0..{self.max_slots - 1}")

    @property
    def slots(self) -> tuple[LocationSlot | None, ...]:
        return tuple(self._slots)

    def get(self, index: int) -> LocationSlot | None:
        self._check(index)
        return self._slots[index]

    def populated(self) -> list[LocationSlot]:
        return [s for s in self._slots if s is not None]

    def begin_update(self, index: int) -> int:
        self._check(index)
        self._tickets[index] += 1
        return self._tickets[index]

    def is_current(self, index: int, ticket: int) -> bool:
        self._check(index)
        return self._tickets[index] == ticket

    def publish(self, index: int, slot: LocationSlot, ticket: int | None = None) -> bool:
        """Replace a slot. Returns False if the ticket has been superseded."""
        self._check(index)
        if ticket is None:
            ticket = self.begin_update(index)
        if not self.is_current(index, ticket):
            logger.info("Discarding stale update for slot %d (ticket %d)", index, ticket)
            return False
        if slot.index != index:
            raise SlotIndexError(f"Slot built for index {slot.index} published to {index}")
        self._slots[index] = slot
        return True

    def clear(self, index: int, ticket: int | None = None) -> bool:
        """Empty a slot. Also invalidates any in-flight update for it."""
        self._check(index)
        if ticket is not None and not self.is_current(index, ticket):
            return False
        self._tickets[index] += 1
        self._slots[index] = None
        return True
