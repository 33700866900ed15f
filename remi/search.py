"""Backtracking search for every way a hand splits into melds.

The search walks the hand depth first. At each step it either starts a new
meld from one of the remaining cards or extends the open meld with a
compatible card; as soon as the open meld reaches three cards a second branch
closes it and starts over with the rest of the hand. Jokers are resolved on
the fly against their neighbour through :func:`remi.melds.classify`.

Partitions are assembled in a single canonical order: every new meld must
cover the earliest remaining card, and set members are added in input order.
Branches that can no longer reach that card are cut early.

Each branch owns its state: the remaining cards and melds are tuples, and a
joker's view is copied before it is resolved.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from .cache import CombinationCache
from .cards import ACE_HIGH_RANK, ACE_LOW_RANK, Card, CardView, Sign, Suit
from .melds import (
    MAX_SET_LENGTH,
    Compatibility,
    Meld,
    MeldKind,
    MeldState,
    Partition,
    classify,
)

__all__ = [
    "SearchConfig",
    "SearchStats",
    "TraceEntry",
    "CancellationToken",
    "SearchError",
    "InvalidExclusion",
    "ProtocolViolation",
    "ExpansionLimitExceeded",
    "SearchCancelled",
    "extend_meld",
    "search_partitions",
]

logger = logging.getLogger("remi.search")

DEFAULT_MAX_EXPANSIONS = 250_000


@dataclass(slots=True)
class SearchConfig:
    """Configuration values for the combination search."""

    max_expansions: int | None = DEFAULT_MAX_EXPANSIONS
    # Log every expansion at INFO instead of DEBUG.
    trace: bool = False


@dataclass(slots=True)
class SearchStats:
    """Counters collected while searching; diagnostics only."""

    expansions: int = 0
    pruned: int = 0
    partitions: int = 0

    def merge(self, other: "SearchStats") -> None:
        self.expansions += other.expansions
        self.pruned += other.pruned
        self.partitions += other.partitions

    def as_dict(self) -> dict[str, int]:
        return {"expansions": self.expansions, "pruned": self.pruned, "partitions": self.partitions}


@dataclass(frozen=True, slots=True)
class TraceEntry:
    """Snapshot of one expansion handed to the trace sink."""

    sequence: tuple[str, ...]
    meld_kind: MeldKind
    meld_length: int
    remaining: int
    expansions: int
    partitions: int


class CancellationToken:
    """Cooperative cancellation flag checked at every expansion."""

    __slots__ = ("_cancelled",)

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class SearchError(RuntimeError):
    """Base class for failures raised by the combination search."""


class InvalidExclusion(SearchError, ValueError):
    """Raised when the excluded card is not part of the searched cards."""


class ProtocolViolation(SearchError):
    """Raised when the search asks to extend a meld that has no cards."""


class ExpansionLimitExceeded(SearchError):
    """Raised when a search exceeds ``SearchConfig.max_expansions``."""


class SearchCancelled(SearchError):
    """Raised when the cancellation token fires mid-search."""


_Remaining = tuple[tuple[int, Card], ...]
_Placement = tuple[tuple[CardView, ...], MeldState]


def _run_seed(card: Card) -> tuple[CardView, MeldKind] | None:
    """Seed for a meld that may still become a run.

    Aces open a run low; Kings never open one since nothing follows the Ace.
    """

    if card.is_joker:
        return None
    if card.sign is Sign.ACE:
        return CardView.ace_low(card), MeldKind.RUN
    if card.sign is Sign.KING:
        return None
    return CardView.of(card), MeldKind.UNDETERMINED


def _kind_seed(card: Card) -> tuple[CardView, MeldKind] | None:
    """Seed for an n-of-a-kind, plus the wildcard seed for jokers."""

    if card.is_joker:
        return CardView.of(card), MeldKind.UNDETERMINED
    if card.sign in (Sign.ACE, Sign.KING):
        return CardView.of(card), MeldKind.SET
    return None


def _allows(kind: MeldKind, target: MeldKind) -> bool:
    return kind is MeldKind.UNDETERMINED or kind is target


def _set_accepts(views: Sequence[CardView], state: MeldState, card: Card) -> bool:
    if state.length >= MAX_SET_LENGTH:
        return False
    if card.sign is not views[-1].sign:
        return False
    return all(view.card.is_joker or view.suit is not card.suit for view in views)


def _joker_as_prior(views: tuple[CardView, ...], state: MeldState, card: Card) -> list[_Placement]:
    placements: list[_Placement] = []
    placed = CardView.of(card)
    if _allows(state.kind, MeldKind.RUN) and card.sign is not Sign.ACE:
        target = card.rank - 1
        if target >= ACE_LOW_RANK:
            joker = views[-1].copy()
            joker.resolve(Sign.for_rank(target), card.suit, target)
            placements.append((views[:-1] + (joker, placed), state.extend(MeldKind.RUN, True)))
    if _allows(state.kind, MeldKind.SET) and state.length < MAX_SET_LENGTH:
        joker = views[-1].copy()
        joker.resolve(card.sign, Suit.NEUTRAL, card.rank)
        placements.append((views[:-1] + (joker, placed), state.extend(MeldKind.SET, True)))
    return placements


def _joker_as_candidate(views: tuple[CardView, ...], state: MeldState, card: Card) -> list[_Placement]:
    if state.has_joker:
        return []
    last = views[-1]
    placements: list[_Placement] = []
    if _allows(state.kind, MeldKind.RUN):
        target = last.rank + 1
        if target <= ACE_HIGH_RANK:
            joker = CardView.of(card)
            joker.resolve(Sign.for_rank(target), last.suit, target)
            placements.append((views + (joker,), state.extend(MeldKind.RUN, True)))
    if _allows(state.kind, MeldKind.SET) and state.length < MAX_SET_LENGTH:
        joker = CardView.of(card)
        joker.resolve(last.sign, Suit.NEUTRAL, last.rank)
        placements.append((views + (joker,), state.extend(MeldKind.SET, True)))
    return placements


def _can_take(views: tuple[CardView, ...], state: MeldState, target: Card) -> bool:
    """Whether the open meld could still take ``target`` later on.

    ``target`` sits earlier in the input than every card placed so far, and
    set members join in input order, so a set can only take it as its joker.
    """

    last = views[-1]
    if target.is_joker:
        return not state.has_joker
    if last.is_joker:
        return True
    if state.kind is MeldKind.SET:
        return False
    return target.suit is last.suit and target.rank > last.rank


def extend_meld(views: tuple[CardView, ...], state: MeldState, card: Card) -> list[_Placement]:
    """Every way ``card`` can extend the open meld; empty when it cannot."""

    if not views or state.is_empty:
        raise ProtocolViolation("cannot extend a meld that has no cards")

    relation = classify(views[-1], card)
    if relation is Compatibility.NONE:
        return []
    if relation is Compatibility.RUN_EXTEND:
        if state.kind is MeldKind.SET:
            return []
        return [(views + (CardView.of(card),), state.extend(MeldKind.RUN, False))]
    if relation is Compatibility.SET_EXTEND:
        if state.kind is MeldKind.RUN or not _set_accepts(views, state, card):
            return []
        return [(views + (CardView.of(card),), state.extend(MeldKind.SET, False))]
    if relation is Compatibility.JOKER_AS_PRIOR:
        return _joker_as_prior(views, state, card)
    return _joker_as_candidate(views, state, card)


class _Search:
    def __init__(
        self,
        excluded: Card | None,
        config: SearchConfig,
        stats: SearchStats,
        cancel: CancellationToken | None,
        trace: Callable[[TraceEntry], None] | None,
    ) -> None:
        self.excluded = excluded
        self.config = config
        self.stats = stats
        self.cancel = cancel
        self.trace = trace
        self.found: dict[frozenset, Partition] = {}

    def run(self, remaining: _Remaining) -> list[Partition]:
        self.expand(remaining, (), (), MeldState(), -1, -1)
        return list(self.found.values())

    def expand(
        self,
        remaining: _Remaining,
        completed: tuple[Meld, ...],
        views: tuple[CardView, ...],
        state: MeldState,
        required: int,
        tail: int,
    ) -> None:
        """Advance one step.

        ``required`` is the input position of the card the open meld must
        take before it may close; ``tail`` is the position of its last
        non-joker card.
        """

        self._tick(remaining, completed, views, state)
        if state.is_empty:
            if not remaining:
                self._record(completed)
            else:
                self._start(remaining, completed)
            return
        if not remaining:
            # Open meld too short to close and nothing left to add.
            self.stats.pruned += 1
            return
        self._extend(remaining, completed, views, state, required, tail)

    def _start(self, remaining: _Remaining, completed: tuple[Meld, ...]) -> None:
        # Each new meld covers the earliest remaining card, so a partition is
        # only ever assembled in one meld order.
        required, target = remaining[0]
        for index, (position, card) in enumerate(remaining):
            rest = remaining[:index] + remaining[index + 1 :]
            for seed in (_run_seed(card), _kind_seed(card)):
                if seed is None:
                    continue
                view, kind = seed
                state = MeldState(1, kind, card.is_joker)
                if index and not _can_take((view,), state, target):
                    self.stats.pruned += 1
                    continue
                tail = -1 if card.is_joker else position
                self.expand(rest, completed, (view,), state, required, tail)

    def _extend(
        self,
        remaining: _Remaining,
        completed: tuple[Meld, ...],
        views: tuple[CardView, ...],
        state: MeldState,
        required: int,
        tail: int,
    ) -> None:
        pending = remaining[0][1] if remaining[0][0] == required else None
        for index, (position, card) in enumerate(remaining):
            placements = extend_meld(views, state, card)
            if not placements:
                self.stats.pruned += 1
                continue
            rest = remaining[:index] + remaining[index + 1 :]
            waiting = pending is not None and index > 0
            next_tail = tail if card.is_joker else position
            for next_views, next_state in placements:
                if next_state.kind is MeldKind.SET and not card.is_joker and position < tail:
                    # Set members join in input order.
                    self.stats.pruned += 1
                    continue
                if waiting and not _can_take(next_views, next_state, pending):
                    self.stats.pruned += 1
                    continue
                if next_state.can_close and not waiting:
                    closed = completed + (Meld(next_state.kind, next_views),)
                    self.expand(rest, closed, (), MeldState(), -1, -1)
                if rest and not (next_state.kind is MeldKind.SET and next_state.length >= MAX_SET_LENGTH):
                    self.expand(rest, completed, next_views, next_state, required, next_tail)

    def _record(self, completed: tuple[Meld, ...]) -> None:
        melds = tuple(meld.copy() for meld in completed)
        partition = Partition(self.excluded, melds)
        key = partition.key()
        if key in self.found:
            return
        self.found[key] = partition
        self.stats.partitions += 1

    def _tick(
        self,
        remaining: _Remaining,
        completed: tuple[Meld, ...],
        views: tuple[CardView, ...],
        state: MeldState,
    ) -> None:
        if self.cancel is not None and self.cancel.cancelled:
            raise SearchCancelled("combination search was cancelled")
        self.stats.expansions += 1
        limit = self.config.max_expansions
        if limit is not None and self.stats.expansions > limit:
            raise ExpansionLimitExceeded(f"search exceeded {limit} expansions")

        level = logging.INFO if self.config.trace else logging.DEBUG
        logged = logger.isEnabledFor(level)
        if self.trace is None and not logged:
            return
        sequence = tuple(view.label() for meld in completed for view in meld.views)
        entry = TraceEntry(
            sequence=sequence + tuple(view.label() for view in views),
            meld_kind=state.kind,
            meld_length=state.length,
            remaining=len(remaining),
            expansions=self.stats.expansions,
            partitions=self.stats.partitions,
        )
        if self.trace is not None:
            self.trace(entry)
        if not logged:
            return
        logger.log(
            level,
            json.dumps(
                {
                    "event": "expand",
                    "sequence": list(entry.sequence),
                    "meldKind": entry.meld_kind.value,
                    "meldLength": entry.meld_length,
                    "remaining": entry.remaining,
                    "expansions": entry.expansions,
                }
            )
        )


def _without(cards: Sequence[Card], excluded: Card | None) -> _Remaining:
    indexed = tuple(enumerate(cards))
    if excluded is None:
        return indexed
    for index, (_, card) in enumerate(indexed):
        if card.id == excluded.id:
            return indexed[:index] + indexed[index + 1 :]
    raise InvalidExclusion(f"excluded card {excluded.code} is not among the searched cards")


def search_partitions(
    cards: Iterable[Card],
    excluded: Card | None,
    *,
    cache: CombinationCache | None = None,
    config: SearchConfig | None = None,
    stats: SearchStats | None = None,
    cancel: CancellationToken | None = None,
    trace: Callable[[TraceEntry], None] | None = None,
) -> list[Partition]:
    """Return every partition of ``cards`` minus ``excluded`` into melds.

    ``excluded`` must be one of ``cards`` (matched by identity) or ``None`` to
    search the whole input. With a ``cache`` the result for ``excluded`` is
    reused when present and stored once the search completes.
    """

    remaining = _without(list(cards), excluded)
    if cache is not None:
        cached = cache.get(excluded)
        if cached is not None:
            return cached

    search = _Search(excluded, config or SearchConfig(), stats or SearchStats(), cancel, trace)
    partitions = search.run(remaining)
    if cache is not None:
        cache.store(excluded, partitions)
    return partitions
