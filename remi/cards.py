"""Card abstractions and helpers for Remi."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import Final, Iterable

__all__ = [
    "Sign",
    "Suit",
    "JOKER_RANK",
    "ACE_LOW_RANK",
    "ACE_HIGH_RANK",
    "Card",
    "CardView",
    "parse_cards",
]

JOKER_RANK: Final[int] = 0
ACE_LOW_RANK: Final[int] = 1
ACE_HIGH_RANK: Final[int] = 14


class Sign(str, Enum):
    """Rank tokens printed on a Remi card."""

    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    KNIGHT = "Kn"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"
    JOKER = "J"

    @classmethod
    def ordinary(cls) -> tuple["Sign", ...]:
        """Return the thirteen non-joker signs in rank order."""

        return tuple(sign for sign in cls if sign is not cls.JOKER)

    @property
    def rank(self) -> int:
        """Natural rank of the sign; the Ace reads high."""

        return _SIGN_RANKS[self]

    @classmethod
    def for_rank(cls, rank: int) -> "Sign":
        """Return the sign a wildcard adopts when standing in for ``rank``."""

        if rank == ACE_LOW_RANK:
            return cls.ACE
        try:
            return _RANK_SIGNS[rank]
        except KeyError:
            raise ValueError(f"no card has rank {rank}") from None


class Suit(str, Enum):
    """Enumeration of the suits; jokers carry the neutral suit."""

    SPADES = "S"
    HEARTS = "H"
    DIAMONDS = "D"
    CLUBS = "C"
    NEUTRAL = "N"

    @classmethod
    def ordinary(cls) -> tuple["Suit", ...]:
        return (cls.SPADES, cls.HEARTS, cls.DIAMONDS, cls.CLUBS)

    @property
    def order(self) -> int:
        return _SUIT_ORDER[self]


_SIGN_RANKS: Final[dict[Sign, int]] = {
    **{sign: rank for rank, sign in enumerate(Sign.ordinary(), start=2)},
    Sign.JOKER: JOKER_RANK,
}
_RANK_SIGNS: Final[dict[int, Sign]] = {rank: sign for sign, rank in _SIGN_RANKS.items() if sign is not Sign.JOKER}
_SUIT_ORDER: Final[dict[Suit, int]] = {suit: idx for idx, suit in enumerate(Suit)}
_SUIT_SYMBOLS: Final[dict[Suit, str]] = {
    Suit.SPADES: "♠",
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.NEUTRAL: "",
}

_card_ids = itertools.count(1)


def _next_card_id() -> int:
    return next(_card_ids)


@dataclass(frozen=True, slots=True)
class Card:
    """Value object describing a physical Remi card.

    Every card receives a process-unique ``id`` when it is created, so two
    cards with the same sign and suit (one from each deck copy) stay distinct.
    """

    sign: Sign
    suit: Suit
    is_face_up: bool = field(default=False, compare=False)
    id: int = field(default_factory=_next_card_id)

    def __post_init__(self) -> None:
        if (self.sign is Sign.JOKER) != (self.suit is Suit.NEUTRAL):
            raise ValueError(f"invalid card {self.sign.value}-{self.suit.value}")

    @classmethod
    def joker(cls) -> "Card":
        return cls(Sign.JOKER, Suit.NEUTRAL)

    @classmethod
    def from_code(cls, code: str) -> "Card":
        """Parse a ``sign-suit`` code such as ``"Kn-D"`` or ``"J-N"``."""

        sign_part, sep, suit_part = code.strip().partition("-")
        if not sep:
            raise ValueError(f"invalid card code '{code}'")
        try:
            sign = Sign(sign_part)
            suit = Suit(suit_part.upper())
        except ValueError:
            raise ValueError(f"invalid card code '{code}'") from None
        return cls(sign, suit)

    @property
    def rank(self) -> int:
        return self.sign.rank

    @property
    def is_joker(self) -> bool:
        """Return ``True`` when the card is a wildcard."""

        return self.sign is Sign.JOKER

    @property
    def code(self) -> str:
        return f"{self.sign.value}-{self.suit.value}"

    def label(self) -> str:
        """Create a display label suitable for CLI representations."""

        if self.is_joker:
            return "🃏"
        return f"{self.sign.value}{_SUIT_SYMBOLS[self.suit]}"

    def sort_key(self) -> tuple[int, int, int]:
        return (self.suit.order, self.rank, self.id)


@dataclass(slots=True)
class CardView:
    """Search-time projection of a :class:`Card`.

    The view owns its ``sign``/``suit``/``rank`` so the search can make a joker
    stand in for another card, or read an Ace low, without touching the card.
    """

    card: Card
    sign: Sign
    suit: Suit
    rank: int
    stands_in: bool = False

    @classmethod
    def of(cls, card: Card) -> "CardView":
        return cls(card=card, sign=card.sign, suit=card.suit, rank=card.rank)

    @classmethod
    def ace_low(cls, card: Card) -> "CardView":
        if card.sign is not Sign.ACE:
            raise ValueError(f"{card.code} is not an ace")
        return cls(card=card, sign=card.sign, suit=card.suit, rank=ACE_LOW_RANK)

    @property
    def is_joker(self) -> bool:
        """``True`` while the view is a wildcard that has not been resolved."""

        return self.card.is_joker and not self.stands_in

    def copy(self) -> "CardView":
        return CardView(self.card, self.sign, self.suit, self.rank, self.stands_in)

    def resolve(self, sign: Sign, suit: Suit, rank: int) -> None:
        if not self.card.is_joker:
            raise ValueError(f"{self.card.code} is not a joker")
        self.sign = sign
        self.suit = suit
        self.rank = rank
        self.stands_in = True

    def label(self) -> str:
        if self.is_joker:
            return "🃏"
        text = f"{self.sign.value}{_SUIT_SYMBOLS[self.suit]}"
        return f"🃏({text})" if self.stands_in else text


def parse_cards(codes: Iterable[str]) -> list[Card]:
    """Return freshly created cards for each code in ``codes``."""

    return [Card.from_code(code) for code in codes]
