"""Players seated at a Remi table."""

from __future__ import annotations

import logging
from typing import Iterable

from .cards import Card
from .hand import EvaluationReport, Hand, IncompleteEvaluation
from .search import SearchConfig

__all__ = ["Player", "PlayerProxy"]

logger = logging.getLogger("remi.player")


class Player:
    """A named seat owning a hand and the last evaluation of it."""

    def __init__(self, name: str, *, config: SearchConfig | None = None) -> None:
        self.name = name
        self.hand = Hand(config=config)
        self.possible_combos: EvaluationReport | None = None
        logger.debug("instantiated player %s", name)

    def describe(self) -> str:
        return self.name

    def add_cards_to_hand(self, cards: Iterable[Card]) -> None:
        self.hand.add_cards(cards)
        self.possible_combos = None

    def add_card_to_hand(self, card: Card) -> None:
        self.hand.add_card(card)
        self.possible_combos = None

    def evaluate_combinations(self, *, include_whole_hand: bool = False) -> EvaluationReport:
        return self.hand.evaluate_combinations(include_whole_hand=include_whole_hand)

    def update_possible_combos(self) -> EvaluationReport:
        """Re-evaluate the hand and keep the report on ``possible_combos``."""

        self.possible_combos = self.hand.evaluate_combinations()
        return self.possible_combos

    def can_make_combo_with_card(self, card: Card) -> bool:
        """Return ``True`` if taking ``card`` would let the hand meld out.

        The check runs on a scratch hand; this player's hand is untouched.
        Raises :class:`IncompleteEvaluation` when no partition was found but
        some exclusions failed, since the answer is then unknown.
        """

        trial = Hand(self.hand.cards, config=self.hand.config)
        trial.add_card(card)
        report = trial.evaluate_combinations()
        if report.partitions:
            return True
        if report.failures:
            raise IncompleteEvaluation(report.failures)
        return False


class PlayerProxy(Player):
    """Stand-in for the remote opponent."""

    def __init__(self, *, config: SearchConfig | None = None) -> None:
        super().__init__("Proxy", config=config)
