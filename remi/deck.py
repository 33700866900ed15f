"""The physical Remi deck: a mutable pile of cards with a text serialisation."""

from __future__ import annotations

import random
from typing import Iterable, Iterator, Sequence

from .cards import Card, Sign, Suit

__all__ = ["Deck", "SEQUENCE_SEPARATOR", "JOKERS_PER_COPY"]

SEQUENCE_SEPARATOR = "|"
JOKERS_PER_COPY = 2


class Deck:
    """Cards stacked bottom to top; the top of the deck is the end of the list."""

    def __init__(self, count: int = 0) -> None:
        if count < 0:
            raise ValueError("count must not be negative")
        self._cards: list[Card] = []
        for _ in range(count):
            for sign in Sign.ordinary():
                for suit in Suit.ordinary():
                    self._cards.append(Card(sign, suit))
            for _ in range(JOKERS_PER_COPY):
                self._cards.append(Card.joker())

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    def size(self) -> int:
        return len(self._cards)

    def draw(self) -> Card:
        """Remove and return the top card."""

        if not self._cards:
            raise IndexError("cannot draw from an empty deck")
        return self._cards.pop()

    def draw_multiple(self, count: int) -> list[Card]:
        """Remove and return the top ``count`` cards, bottom-most first."""

        return self.draw_multiple_from(len(self._cards) - count, count)

    def draw_multiple_from(self, position: int, count: int) -> list[Card]:
        if count < 0 or position < 0 or position + count > len(self._cards):
            raise IndexError(f"cannot draw {count} card(s) from position {position}")
        drawn = self._cards[position : position + count]
        del self._cards[position : position + count]
        return drawn

    def insert(self, card: Card) -> None:
        self._cards.append(card)

    def insert_multiple(self, cards: Iterable[Card]) -> None:
        self._cards.extend(cards)

    def insert_multiple_at(self, cards: Sequence[Card], position: int) -> None:
        self._cards[position:position] = list(cards)

    def split(self, position: int) -> None:
        """Cut the deck; the card at ``position`` ends up at the bottom."""

        self._cards = self._cards[position:] + self._cards[:position]

    def shuffle(self, rng: random.Random | None = None) -> str:
        """Fisher-Yates shuffle in place; return the resulting sequence."""

        rng = rng or random.Random()
        for i in range(len(self._cards) - 1, 0, -1):
            j = rng.randint(0, i)
            self._cards[i], self._cards[j] = self._cards[j], self._cards[i]
        return self.sequence()

    def sequence(self) -> str:
        """Serialise the deck as ``sign-suit|sign-suit|...`` from bottom to top."""

        return SEQUENCE_SEPARATOR.join(card.code for card in self._cards)

    def shuffle_to(self, sequence: str) -> None:
        """Rebuild the deck so it matches ``sequence``."""

        if not sequence:
            self._cards = []
            return
        self._cards = [Card.from_code(code) for code in sequence.split(SEQUENCE_SEPARATOR)]
