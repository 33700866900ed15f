"""Game phases and the transitions allowed between them."""

from __future__ import annotations

from enum import Enum
from typing import Final

__all__ = ["GamePhase", "IllegalTransition", "PhaseMachine", "TRANSITIONS", "INPUT_PHASES"]


class GamePhase(str, Enum):
    """High-level phases of a Remi game."""

    CHOOSE_MODE = "choose_mode"
    WAIT_GAME_START = "wait_game_start"
    ENTER_DECK_SEQUENCE = "enter_deck_sequence"
    CHOOSE_MOVE = "choose_move"
    DRAW_CARD = "draw_card"
    PICK_CARD_FROM_PILE = "pick_card_from_pile"
    PICK_BOTTOM_CARD = "pick_bottom_card"
    MAKE_COMBO = "make_combo"
    ADD_TO_COMBO = "add_to_combo"
    SWAP_CARD_WITH_JOKER = "swap_card_with_joker"
    DISCARD_CARD = "discard_card"
    END_TURN = "end_turn"


class IllegalTransition(RuntimeError):
    """Raised when a phase change is not in the transition table."""


_MELD_ACTIONS: Final[frozenset[GamePhase]] = frozenset(
    {
        GamePhase.MAKE_COMBO,
        GamePhase.ADD_TO_COMBO,
        GamePhase.SWAP_CARD_WITH_JOKER,
        GamePhase.DISCARD_CARD,
    }
)

TRANSITIONS: Final[dict[GamePhase, frozenset[GamePhase]]] = {
    GamePhase.CHOOSE_MODE: frozenset({GamePhase.WAIT_GAME_START, GamePhase.ENTER_DECK_SEQUENCE}),
    GamePhase.WAIT_GAME_START: frozenset({GamePhase.CHOOSE_MOVE}),
    GamePhase.ENTER_DECK_SEQUENCE: frozenset({GamePhase.CHOOSE_MOVE}),
    GamePhase.CHOOSE_MOVE: frozenset(
        {GamePhase.DRAW_CARD, GamePhase.PICK_CARD_FROM_PILE, GamePhase.PICK_BOTTOM_CARD}
    ),
    GamePhase.DRAW_CARD: _MELD_ACTIONS,
    GamePhase.PICK_CARD_FROM_PILE: _MELD_ACTIONS,
    GamePhase.PICK_BOTTOM_CARD: _MELD_ACTIONS,
    GamePhase.MAKE_COMBO: _MELD_ACTIONS,
    GamePhase.ADD_TO_COMBO: _MELD_ACTIONS,
    GamePhase.SWAP_CARD_WITH_JOKER: _MELD_ACTIONS,
    GamePhase.DISCARD_CARD: frozenset({GamePhase.END_TURN}),
    GamePhase.END_TURN: frozenset({GamePhase.CHOOSE_MOVE}),
}

INPUT_PHASES: Final[frozenset[GamePhase]] = frozenset(
    {
        GamePhase.CHOOSE_MODE,
        GamePhase.ENTER_DECK_SEQUENCE,
        GamePhase.CHOOSE_MOVE,
        GamePhase.MAKE_COMBO,
        GamePhase.ADD_TO_COMBO,
        GamePhase.SWAP_CARD_WITH_JOKER,
        GamePhase.DISCARD_CARD,
    }
)


class PhaseMachine:
    """Tracks the current phase and rejects transitions outside the table."""

    def __init__(self, phase: GamePhase = GamePhase.CHOOSE_MODE) -> None:
        self.phase = phase

    @staticmethod
    def possible_phases(phase: GamePhase) -> frozenset[GamePhase]:
        return TRANSITIONS[phase]

    @staticmethod
    def allows_input(phase: GamePhase) -> bool:
        return phase in INPUT_PHASES

    def advance(self, phase: GamePhase) -> GamePhase:
        if phase not in TRANSITIONS[self.phase]:
            raise IllegalTransition(f"cannot move from {self.phase.value} to {phase.value}")
        self.phase = phase
        return phase
