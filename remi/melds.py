"""Meld primitives: compatibility classification, meld state and partitions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Sequence

from .cards import ACE_HIGH_RANK, ACE_LOW_RANK, Card, CardView, Suit

__all__ = [
    "MIN_MELD_LENGTH",
    "MAX_SET_LENGTH",
    "MeldKind",
    "Compatibility",
    "MeldState",
    "classify",
    "Meld",
    "Partition",
    "ValidationResult",
    "validate_meld",
]

MIN_MELD_LENGTH: Final[int] = 3
MAX_SET_LENGTH: Final[int] = len(Suit.ordinary())


class MeldKind(str, Enum):
    UNDETERMINED = "undetermined"
    RUN = "run"
    SET = "set"


class Compatibility(str, Enum):
    """How a candidate card relates to the last card of an open meld."""

    NONE = "none"
    RUN_EXTEND = "run_extend"
    SET_EXTEND = "set_extend"
    JOKER_AS_PRIOR = "joker_as_prior"
    JOKER_AS_CANDIDATE = "joker_as_candidate"


@dataclass(frozen=True, slots=True)
class MeldState:
    """Bookkeeping for the meld currently being built."""

    length: int = 0
    kind: MeldKind = MeldKind.UNDETERMINED
    has_joker: bool = False

    @property
    def is_empty(self) -> bool:
        return self.length == 0

    @property
    def can_close(self) -> bool:
        return self.length >= MIN_MELD_LENGTH

    def extend(self, kind: MeldKind, joker: bool) -> "MeldState":
        return MeldState(self.length + 1, kind, self.has_joker or joker)


def classify(last: CardView, candidate: Card) -> Compatibility:
    """Classify ``candidate`` against the last placed view of an open meld."""

    if last.is_joker and candidate.is_joker:
        return Compatibility.NONE
    if last.is_joker:
        return Compatibility.JOKER_AS_PRIOR
    if candidate.is_joker:
        return Compatibility.JOKER_AS_CANDIDATE
    if candidate.suit is last.suit and candidate.rank == last.rank + 1:
        return Compatibility.RUN_EXTEND
    if candidate.sign is last.sign:
        return Compatibility.SET_EXTEND
    return Compatibility.NONE


@dataclass(frozen=True, slots=True)
class Meld:
    """A closed meld; views are listed in the order they were placed."""

    kind: MeldKind
    views: tuple[CardView, ...]

    def __len__(self) -> int:
        return len(self.views)

    def cards(self) -> list[Card]:
        return [view.card for view in self.views]

    def copy(self) -> "Meld":
        return Meld(self.kind, tuple(view.copy() for view in self.views))

    def key(self) -> tuple:
        entries = sorted((view.card.id, view.sign.value, view.suit.value, view.rank) for view in self.views)
        return (self.kind.value, tuple(entries))

    def label(self) -> str:
        return " ".join(view.label() for view in self.views)


@dataclass(frozen=True, slots=True)
class Partition:
    """A grouping of every non-excluded card into melds."""

    excluded: Card | None
    melds: tuple[Meld, ...]

    def cards(self) -> list[Card]:
        return [card for meld in self.melds for card in meld.cards()]

    def copy(self) -> "Partition":
        """Return a partition whose views can be modified independently."""

        return Partition(self.excluded, tuple(meld.copy() for meld in self.melds))

    def key(self) -> frozenset:
        """Signature that ignores the order melds and set members were found in."""

        return frozenset(meld.key() for meld in self.melds)


@dataclass(slots=True)
class ValidationResult:
    valid: bool
    error: str | None = None


def validate_meld(kind: MeldKind, views: Sequence[CardView]) -> ValidationResult:
    """Check a resolved meld against the run and set rules."""

    if len(views) < MIN_MELD_LENGTH:
        return ValidationResult(False, error=f"a meld needs at least {MIN_MELD_LENGTH} cards")
    if any(view.is_joker for view in views):
        return ValidationResult(False, error="meld contains an unresolved joker")
    if sum(1 for view in views if view.card.is_joker) > 1:
        return ValidationResult(False, error="at most one joker per meld")

    if kind is MeldKind.SET:
        if len(views) > MAX_SET_LENGTH:
            return ValidationResult(False, error=f"a set holds at most {MAX_SET_LENGTH} cards")
        sign = views[0].sign
        if any(view.sign is not sign for view in views):
            return ValidationResult(False, error="set cards must share a sign")
        suits = [view.suit for view in views if not view.card.is_joker]
        if len(suits) != len(set(suits)):
            return ValidationResult(False, error="set cards must have distinct suits")
        return ValidationResult(True)

    if kind is MeldKind.RUN:
        suit = views[0].suit
        if any(view.suit is not suit for view in views):
            return ValidationResult(False, error="run cards must share a suit")
        ranks = [view.rank for view in views]
        if ranks[0] < ACE_LOW_RANK or ranks[-1] > ACE_HIGH_RANK:
            return ValidationResult(False, error="run leaves the Ace-to-Ace range")
        if any(later != earlier + 1 for earlier, later in zip(ranks, ranks[1:])):
            return ValidationResult(False, error="run ranks must be consecutive")
        return ValidationResult(True)

    return ValidationResult(False, error="meld kind was never determined")
