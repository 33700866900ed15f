from __future__ import annotations

import pytest

from remi.state import GamePhase, IllegalTransition, PhaseMachine


def test_every_phase_has_a_successor() -> None:
    for phase in GamePhase:
        assert PhaseMachine.possible_phases(phase)


def test_turn_cycle() -> None:
    machine = PhaseMachine()

    for phase in (
        GamePhase.ENTER_DECK_SEQUENCE,
        GamePhase.CHOOSE_MOVE,
        GamePhase.DRAW_CARD,
        GamePhase.MAKE_COMBO,
        GamePhase.DISCARD_CARD,
        GamePhase.END_TURN,
        GamePhase.CHOOSE_MOVE,
    ):
        assert machine.advance(phase) is phase

    assert machine.phase is GamePhase.CHOOSE_MOVE


def test_illegal_transition_keeps_the_current_phase() -> None:
    machine = PhaseMachine(GamePhase.CHOOSE_MOVE)

    with pytest.raises(IllegalTransition):
        machine.advance(GamePhase.DISCARD_CARD)

    assert machine.phase is GamePhase.CHOOSE_MOVE


@pytest.mark.parametrize(
    ("phase", "expected"),
    [
        (GamePhase.CHOOSE_MOVE, True),
        (GamePhase.DISCARD_CARD, True),
        (GamePhase.WAIT_GAME_START, False),
        (GamePhase.DRAW_CARD, False),
        (GamePhase.END_TURN, False),
    ],
)
def test_allows_input(phase: GamePhase, expected: bool) -> None:
    assert PhaseMachine.allows_input(phase) is expected
