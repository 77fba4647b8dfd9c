"""Open-addressing hash table keyed by interned Lox strings."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterator

if TYPE_CHECKING:
    from loxvm.value import LoxString

_MAX_LOAD = 0.75


class _Tombstone:
    """Marker left behind in a slot whose entry was deleted."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<tombstone>"


_TOMBSTONE = _Tombstone()


def _grow_capacity(capacity: int) -> int:
    return 8 if capacity < 8 else capacity * 2


def _find_slot(slots: list, key: LoxString) -> int:
    """Return the slot index holding ``key`` or the slot where it belongs."""
    capacity = len(slots)
    index = key.hash % capacity
    tombstone: int | None = None
    while True:
        slot = slots[index]
        if slot is None:
            return tombstone if tombstone is not None else index
        if slot is _TOMBSTONE:
            if tombstone is None:
                tombstone = index
        elif slot[0] is key:
            return index
        index = (index + 1) % capacity


class Table:
    """Hash table using linear probing and tombstones.

    Keys are compared by identity, which is sound because every key is
    an interned string.
    """

    def __init__(self) -> None:
        self._slots: list = []
        self._used = 0  # live entries plus tombstones
        self._live = 0

    def __len__(self) -> int:
        return self._live

    def __contains__(self, key: LoxString) -> bool:
        if self._used == 0:
            return False
        return isinstance(self._slots[_find_slot(self._slots, key)], tuple)

    def _entries(self) -> Iterator[tuple[LoxString, Any]]:
        return (slot for slot in self._slots if isinstance(slot, tuple))

    def get(self, key: LoxString, default: Any = None) -> Any:
        """Return the value stored for ``key``, or ``default``."""
        if self._used == 0:
            return default
        slot = self._slots[_find_slot(self._slots, key)]
        if not isinstance(slot, tuple):
            return default
        return slot[1]

    def _resize(self, capacity: int) -> None:
        slots: list = [None] * capacity
        live = 0
        for key, value in self._entries():
            slots[_find_slot(slots, key)] = (key, value)
            live += 1
        self._slots = slots
        self._used = live
        self._live = live

    def set(self, key: LoxString, value: Any) -> bool:
        """Store ``value`` under ``key``; return True if the key was new."""
        if self._used + 1 > len(self._slots) * _MAX_LOAD:
            self._resize(_grow_capacity(len(self._slots)))

        index = _find_slot(self._slots, key)
        slot = self._slots[index]
        is_new = not isinstance(slot, tuple)
        if slot is None:
            self._used += 1
        if is_new:
            self._live += 1
        self._slots[index] = (key, value)
        return is_new

    def delete(self, key: LoxString) -> bool:
        """Remove ``key``; return True if it was present."""
        if self._used == 0:
            return False
        index = _find_slot(self._slots, key)
        if not isinstance(self._slots[index], tuple):
            return False
        self._slots[index] = _TOMBSTONE
        self._live -= 1
        return True

    def add_all(self, other: Table) -> None:
        """Copy every entry of ``other`` into this table."""
        for key, value in other._entries():
            self.set(key, value)

    def find_string(self, chars: str, hash_value: int) -> LoxString | None:
        """Find a key by its contents rather than its identity."""
        if self._used == 0:
            return None
        capacity = len(self._slots)
        index = hash_value % capacity
        while True:
            slot = self._slots[index]
            if slot is None:
                return None
            if slot is not _TOMBSTONE:
                key = slot[0]
                if key.hash == hash_value and key.chars == chars:
                    return key
            index = (index + 1) % capacity