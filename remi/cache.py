"""Memo of discovered partitions, one entry per excluded card."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from .cards import Card
from .melds import Partition

__all__ = ["CacheKey", "CombinationCache", "WHOLE_HAND"]

CacheKey = tuple[str, int]

# Key used when nothing is held out of the search.
WHOLE_HAND: CacheKey = ("*", 0)


@dataclass(slots=True)
class CombinationCache:
    """Partitions keyed by the identity of the excluded card.

    The key carries the card id as well as its ``sign-suit`` code, so the two
    physical copies of a card in a two-deck game never share an entry.
    """

    _entries: dict[CacheKey, list[Partition]] = field(default_factory=dict)

    @staticmethod
    def key_for(excluded: Card | None) -> CacheKey:
        if excluded is None:
            return WHOLE_HAND
        return (excluded.code, excluded.id)

    def get(self, excluded: Card | None) -> list[Partition] | None:
        """Return copies of the stored partitions, or ``None`` when never computed."""

        entry = self._entries.get(self.key_for(excluded))
        return None if entry is None else [partition.copy() for partition in entry]

    def store(self, excluded: Card | None, partitions: list[Partition]) -> None:
        self._entries[self.key_for(excluded)] = [partition.copy() for partition in partitions]

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, excluded: object) -> bool:
        if excluded is not None and not isinstance(excluded, Card):
            return False
        return self.key_for(excluded) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CacheKey]:
        return iter(self._entries)

    def all_partitions(self) -> list[Partition]:
        return [partition.copy() for entry in self._entries.values() for partition in entry]
