from __future__ import annotations

from dataclasses import replace

import pytest

from candypeaks.engine.deal import deal, deck_is_conserved
from candypeaks.engine.exposure import exposed_ids, is_exposed
from candypeaks.engine.layout import COVERERS
from candypeaks.engine.moves import is_adjacent_rank, playable_ids, propose_play
from candypeaks.engine.rules import play, toggle_wrap
from candypeaks.engine.types import Card, Inventory

from boards import card, make_state, swap


def test_rank_adjacency() -> None:
    assert is_adjacent_rank(5, 6, wrap_enabled=False)
    assert is_adjacent_rank(6, 5, wrap_enabled=True)
    assert not is_adjacent_rank(5, 7, wrap_enabled=True)
    assert not is_adjacent_rank(5, 7, wrap_enabled=False)
    assert is_adjacent_rank(1, 13, wrap_enabled=True)
    assert is_adjacent_rank(13, 1, wrap_enabled=True)
    assert not is_adjacent_rank(1, 13, wrap_enabled=False)
    assert not is_adjacent_rank(4, 4)


def test_exposure_follows_coverers() -> None:
    state = deal("candy")
    for pos in state.tableau:
        covered = any(state.tableau[c].card is not None for c in COVERERS[pos.id])
        assert is_exposed(pos, state.tableau) == (not covered)

    lifted = make_state({3: card(2), 10: card(3), 4: card(4, "S")})
    # 10 is still covered by 4
    assert exposed_ids(lifted.tableau) == (3, 4)


def test_seeded_plain_match_scenario() -> None:
    state = toggle_wrap(deal("test-1"), False)
    six, five = Card.of("H", 6), Card.of("S", 5)
    state = swap(state, state.tableau[0].card, six)  # type: ignore[arg-type]
    state = swap(state, state.waste[-1], five)
    assert deck_is_conserved(state)

    verdict = propose_play(state, 0)
    assert verdict.ok
    assert verdict.clear_ids == (0,)
    assert verdict.mode is None

    nxt = play(state, 0)
    assert nxt.combo == 1
    assert nxt.score == 100
    assert nxt.waste_top == six
    assert nxt.tableau[0].card is None
    assert deck_is_conserved(nxt)


def test_wrap_controls_ace_king_match() -> None:
    state = make_state({0: card(1)}, waste=[card(13, "S")], stock=[card(9, "C")])
    assert propose_play(state, 0).ok
    assert propose_play(replace(state, wrap_enabled=False), 0).reason == "illegal-match"


@pytest.mark.parametrize("target", [-1, 28, 1, 3])
def test_bad_targets_are_rejected(target: int) -> None:
    # 1 is empty, 3 is covered by 0
    state = make_state({0: card(6), 3: card(4)}, waste=[card(5, "S")])
    verdict = propose_play(state, target)
    assert not verdict.ok
    assert verdict.reason == "illegal-target"
    assert verdict.clear_ids == ()


def test_bad_targets_are_rejected_in_powerup_modes() -> None:
    state = make_state(
        {0: card(6), 3: card(4)},
        waste=[card(5, "S")],
        powerups=Inventory(bomb=1),
        active_powerup="bomb",
    )
    assert propose_play(state, 3).reason == "illegal-target"


def test_non_adjacent_and_empty_waste() -> None:
    state = make_state({0: card(9)}, waste=[card(5, "S")])
    assert propose_play(state, 0).reason == "illegal-match"
    assert propose_play(replace(state, waste=()), 0).reason == "illegal-match"


def test_finished_game_rejects_everything() -> None:
    state = make_state({0: card(6)}, waste=[card(5, "S")], status="lost")
    assert propose_play(state, 0).reason == "illegal-mode"


def test_powerup_without_inventory_is_illegal_mode() -> None:
    state = make_state({0: card(9)}, waste=[card(5, "S")], active_powerup="wild")
    verdict = propose_play(state, 0)
    assert not verdict.ok
    assert verdict.reason == "illegal-mode"


def test_wild_ignores_rank() -> None:
    state = make_state(
        {0: card(9)}, waste=[card(5, "S")], powerups=Inventory(wild=1), active_powerup="wild"
    )
    verdict = propose_play(state, 0)
    assert verdict.ok
    assert verdict.clear_ids == (0,)
    assert verdict.mode == "wild"


def test_bomb_clears_target_and_freed_neighbors() -> None:
    state = make_state(
        {0: card(9), 3: card(2), 4: card(7), 10: card(4)},
        waste=[card(5, "S")],
        stock=[card(13, "S")],
        powerups=Inventory(bomb=1),
        active_powerup="bomb",
    )
    verdict = propose_play(state, 0)
    assert verdict.ok
    assert verdict.clear_ids == (0, 3, 4)


def test_bomb_skips_neighbors_still_covered() -> None:
    # 10 stays covered by 4 after 3 goes
    state = make_state(
        {3: card(2), 4: card(7), 9: card(8), 10: card(4)},
        waste=[card(5, "S")],
        powerups=Inventory(bomb=1),
        active_powerup="bomb",
    )
    verdict = propose_play(state, 3)
    assert verdict.clear_ids == (3, 9)


def test_rainbow_clears_exposed_cards_of_same_rank() -> None:
    state = make_state(
        {0: card(7, "H"), 1: card(7, "D"), 2: card(3), 3: card(7, "C")},
        waste=[card(12, "S")],
        powerups=Inventory(rainbow=1),
        active_powerup="rainbow",
    )
    verdict = propose_play(state, 1)
    assert verdict.ok
    assert verdict.clear_ids == (1, 0)
    assert verdict.mode == "rainbow"


def test_evaluation_leaves_state_untouched() -> None:
    state = make_state({0: card(6)}, waste=[card(5, "S")])
    before = replace(state)
    propose_play(state, 0)
    assert state == before


def test_playable_ids_highlights_matches() -> None:
    state = make_state({0: card(6), 1: card(9), 2: card(4), 3: card(5)}, waste=[card(5, "S")])
    assert playable_ids(state) == (0, 2)
    wild = replace(state, powerups=Inventory(wild=1), active_powerup="wild")
    assert playable_ids(wild) == (0, 1, 2)
