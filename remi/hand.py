"""A player's hand and the driver that evaluates it one exclusion at a time."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator

from .cache import CombinationCache
from .cards import Card
from .melds import Partition
from .search import (
    CancellationToken,
    SearchCancelled,
    SearchConfig,
    SearchError,
    SearchStats,
    TraceEntry,
    search_partitions,
)

__all__ = ["ExclusionFailure", "EvaluationReport", "IncompleteEvaluation", "Hand"]

logger = logging.getLogger("remi.hand")


@dataclass(frozen=True, slots=True)
class ExclusionFailure:
    """Search failure recorded for a single excluded card (``None`` for the whole hand)."""

    excluded: Card | None
    error: SearchError


@dataclass(slots=True)
class EvaluationReport:
    """Everything found while evaluating a hand."""

    partitions: list[Partition] = field(default_factory=list)
    by_exclusion: dict[Card, list[Partition]] = field(default_factory=dict)
    stats: SearchStats = field(default_factory=SearchStats)
    failures: list[ExclusionFailure] = field(default_factory=list)
    elapsed: float = 0.0
    whole_hand: list[Partition] | None = None

    def discard_candidates(self) -> list[Card]:
        """Cards whose exclusion leaves a hand that melds completely."""

        return [card for card, partitions in self.by_exclusion.items() if partitions]


class IncompleteEvaluation(SearchError):
    """Raised when failed exclusions leave a question about the hand unanswered."""

    def __init__(self, failures: list[ExclusionFailure]) -> None:
        excluded = ", ".join(
            "whole hand" if failure.excluded is None else failure.excluded.code for failure in failures
        )
        super().__init__(f"evaluation incomplete, search failed for: {excluded}")
        self.failures = failures


class Hand:
    """Cards held by one player, kept sorted by suit and then rank."""

    def __init__(
        self,
        cards: Iterable[Card] = (),
        *,
        config: SearchConfig | None = None,
        cache: CombinationCache | None = None,
    ) -> None:
        self._cards: list[Card] = []
        self.config = config or SearchConfig()
        self.cache = cache if cache is not None else CombinationCache()
        self.add_cards(cards)

    @property
    def cards(self) -> tuple[Card, ...]:
        return tuple(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    def __contains__(self, card: object) -> bool:
        return any(held == card for held in self._cards)

    def add_cards(self, cards: Iterable[Card]) -> None:
        """Append ``cards`` and restore the suit/rank ordering."""

        added = list(cards)
        if not added:
            return
        self._cards.extend(added)
        self._cards.sort(key=Card.sort_key)
        self.cache.clear()

    def add_card(self, card: Card) -> None:
        """Put ``card`` in front so the next evaluation examines it first."""

        self._cards.insert(0, card)
        self.cache.clear()

    def remove_card(self, card: Card) -> Card:
        for index, held in enumerate(self._cards):
            if held.id == card.id:
                del self._cards[index]
                self.cache.clear()
                return held
        raise ValueError(f"card {card.code} is not in the hand")

    def evaluate_combinations(
        self,
        *,
        cancel: CancellationToken | None = None,
        trace: Callable[[TraceEntry], None] | None = None,
        include_whole_hand: bool = False,
    ) -> EvaluationReport:
        """Search the hand once per held-out card and gather the partitions.

        The whole hand, with nothing held out, is only searched when
        ``include_whole_hand`` is set; its partitions go to ``whole_hand`` and
        are not mixed into ``partitions``. A failing exclusion is recorded in
        ``failures`` and the loop moves on; cancellation stops the whole
        evaluation.
        """

        report = EvaluationReport()
        started = time.perf_counter()
        snapshot = list(self._cards)
        targets: list[Card | None] = list(snapshot)
        if include_whole_hand and snapshot:
            targets.insert(0, None)

        for excluded in targets:
            stats = SearchStats()
            try:
                partitions = search_partitions(
                    snapshot,
                    excluded,
                    cache=self.cache,
                    config=self.config,
                    stats=stats,
                    cancel=cancel,
                    trace=trace,
                )
            except SearchCancelled:
                raise
            except SearchError as exc:
                report.failures.append(ExclusionFailure(excluded, exc))
                label = "*" if excluded is None else excluded.code
                logger.warning(json.dumps({"event": "exclusion_failed", "excluded": label, "error": str(exc)}))
                continue
            finally:
                report.stats.merge(stats)
            if excluded is None:
                report.whole_hand = partitions
                continue
            report.by_exclusion[excluded] = partitions
            report.partitions.extend(partitions)

        report.elapsed = time.perf_counter() - started
        logger.info(
            json.dumps(
                {
                    "event": "hand_evaluated",
                    "cards": len(snapshot),
                    "partitions": len(report.partitions),
                    "failures": len(report.failures),
                    "elapsedMs": round(report.elapsed * 1000, 3),
                    **report.stats.as_dict(),
                }
            )
        )
        return report
