"""
Indexing utilities that map raw values to contiguous integer ranges.

`IndexHashTable` is built once from a snapshot of unique values and answers
"which position did this value occupy?" without ever changing afterwards, so a
published table can be shared between reader threads without locking.
"""

from __future__ import annotations

import math
from typing import Generic, Hashable, Iterable, Iterator, MutableSequence, TypeVar

import numpy as np
from loguru import logger


T = TypeVar("T", bound=Hashable)

NOT_FOUND = -1
DEFAULT_LOAD_FACTOR = 0.7


class UniquenessViolation(ValueError):
    """Raised when the values handed to an `IndexHashTable` are not unique."""

    def __init__(self, value: object, first_index: int, duplicate_index: int) -> None:
        super().__init__(
            f"Values must be unique: {value!r} at position {duplicate_index} "
            f"already occurs at position {first_index}."
        )
        self.value = value
        self.first_index = first_index
        self.duplicate_index = duplicate_index


def _validate_load_factor(load_factor: float) -> float:
    load_factor = float(load_factor)
    if not math.isfinite(load_factor) or not 0.0 < load_factor <= 1.0:
        raise ValueError(f"load_factor must be in (0, 1], got {load_factor}.")
    return load_factor


def _table_capacity(size: int, load_factor: float) -> int:
    # Always keep one empty slot so a probe for a missing key terminates.
    needed = max(math.ceil(size / load_factor), size + 1)
    return 1 << (needed - 1).bit_length()


class IndexHashTable(Generic[T]):
    """
    Immutable hash table mapping each value of a sequence to its position.

    The table uses open addressing with linear probing: every value hashes to a
    slot of a power-of-two array, and on collision the next slot is tried,
    wrapping at the end of the array. Slots hold positions into the snapshot
    of values, or `NOT_FOUND` when empty.

    Values must implement ``__hash__`` and ``__eq__`` consistently and must not
    change either while the table is alive, otherwise lookups are undefined.

    Parameters
    ----------
    values:
        Values to index. They are copied into the table, so later changes to
        the caller's container do not affect it. All values must be unique.
    load_factor:
        Upper bound on the ratio of occupied slots, in (0, 1]. Usually 0.7.

    Raises
    ------
    UniquenessViolation
        If two values compare equal.
    ValueError
        If ``load_factor`` is outside (0, 1].
    """

    __slots__ = ("_values", "_slots", "_mask", "_load_factor")

    def __init__(self, values: Iterable[T], load_factor: float = DEFAULT_LOAD_FACTOR) -> None:
        load_factor = _validate_load_factor(load_factor)
        snapshot = tuple(values)
        capacity = _table_capacity(len(snapshot), load_factor)
        mask = capacity - 1
        hashes = np.fromiter(
            (hash(value) for value in snapshot), dtype=np.int64, count=len(snapshot)
        )
        slots = [NOT_FOUND] * capacity

        for index, slot in enumerate((hashes & mask).tolist()):
            value = snapshot[index]
            while True:
                occupant = slots[slot]
                if occupant == NOT_FOUND:
                    slots[slot] = index
                    break
                existing = snapshot[occupant]
                if existing is value or existing == value:
                    raise UniquenessViolation(value, occupant, index)
                slot = (slot + 1) & mask

        self._values = snapshot
        self._slots = tuple(slots)
        self._mask = mask
        self._load_factor = load_factor

    @property
    def load_factor(self) -> float:
        return self._load_factor

    @property
    def capacity(self) -> int:
        """Number of slots in the probe array."""
        return len(self._slots)

    def get(self, key: T) -> int:
        """Return the index of ``key``, or `NOT_FOUND` if it was never added."""
        values = self._values
        slots = self._slots
        mask = self._mask
        slot = hash(key) & mask
        while True:
            occupant = slots[slot]
            if occupant == NOT_FOUND:
                return NOT_FOUND
            existing = values[occupant]
            if existing is key or existing == key:
                return occupant
            slot = (slot + 1) & mask

    def size(self) -> int:
        return len(self._values)

    def to_array(self, buffer: MutableSequence[T] | None = None) -> MutableSequence[T]:
        """
        Write every value into ``buffer`` at its index and return the buffer.

        A new list is allocated when ``buffer`` is omitted. The result
        reproduces the original ordering of the values the table was built from.
        """
        size = len(self._values)
        if buffer is None:
            return list(self._values)
        if len(buffer) < size:
            raise IndexError(
                f"Buffer of length {len(buffer)} cannot hold {size} table entries."
            )
        for index, value in enumerate(self._values):
            buffer[index] = value
        return buffer

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: object) -> bool:
        return self.get(key) != NOT_FOUND  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[T]:
        return iter(self._values)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(size={len(self._values)}, "
            f"capacity={self.capacity}, load_factor={self._load_factor})"
        )


def unique_in_order(values: Iterable[T]) -> list[T]:
    """Return the distinct values in order of first appearance."""
    seen: set[T] = set()
    unique: list[T] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            unique.append(value)
    return unique


def build_index_table(
    values: Iterable[T],
    *,
    load_factor: float = DEFAULT_LOAD_FACTOR,
    deduplicate: bool = False,
) -> IndexHashTable[T]:
    """
    Create an IndexHashTable, optionally dropping repeated values first.

    Parameters
    ----------
    values:
        Raw values (feature names, outcome labels, tokens, etc.).
    deduplicate:
        Keep only the first occurrence of each value instead of failing with
        `UniquenessViolation`.
    """
    snapshot = list(values)
    if deduplicate:
        unique = unique_in_order(snapshot)
        dropped = len(snapshot) - len(unique)
        if dropped > 0:
            logger.warning("Dropped {} duplicate values before indexing.", dropped)
        snapshot = unique

    table = IndexHashTable(snapshot, load_factor)
    logger.debug(
        "Built index table | size={} capacity={} load_factor={}",
        table.size(),
        table.capacity,
        table.load_factor,
    )
    return table
