from __future__ import annotations

from dataclasses import replace

import pytest

from candypeaks.engine.deal import deal, deck_is_conserved, new_deck
from candypeaks.engine.exposure import exposed_ids
from candypeaks.engine.state import RulesConfig
from candypeaks.engine.types import Inventory


def test_canonical_deck() -> None:
    deck = new_deck()
    assert len(deck) == 52
    assert len({c.id for c in deck}) == 52
    assert deck[0].id == "H1"
    assert deck[-1].id == "S13"
    assert [c.suit for c in deck[::13]] == ["H", "D", "C", "S"]


@pytest.mark.parametrize("seed", ["candy", "test-1", "", "🍬 peaks", "a much longer seed string"])
def test_deal_conserves_the_deck(seed: str) -> None:
    state = deal(seed)
    assert deck_is_conserved(state)
    assert len(state.tableau) == 28
    assert all(p.card is not None for p in state.tableau)
    assert len(state.stock) == 24
    assert len(state.waste) == 1
    assert state.hold is None


def test_deal_is_deterministic() -> None:
    a = deal("test-1")
    b = deal("test-1")
    assert a == b
    assert [p.card for p in a.tableau] == [p.card for p in b.tableau]
    assert a.stock == b.stock
    assert a.waste == b.waste


def test_different_seeds_give_different_deals() -> None:
    assert [p.card for p in deal("test-1").tableau] != [p.card for p in deal("test-2").tableau]


def test_initial_fields() -> None:
    state = deal("candy")
    assert state.seed == "candy"
    assert state.score == 0
    assert state.combo == 0
    assert state.powerups == Inventory()
    assert state.active_powerup is None
    assert state.powerup_cycle == 0
    assert state.wrap_enabled is True
    assert state.status == "playing"
    assert state.bonus_awarded is False


def test_only_peaks_start_exposed() -> None:
    assert exposed_ids(deal("candy").tableau) == (0, 1, 2)


def test_rules_control_wrap_default() -> None:
    state = deal("candy", RulesConfig(wrap_default=False))
    assert state.wrap_enabled is False
    assert state.rules.wrap_default is False


def test_conservation_detects_duplicates() -> None:
    state = deal("candy")
    broken = replace(state, hold=state.stock[0])
    assert not deck_is_conserved(broken)
    assert not deck_is_conserved(replace(state, stock=state.stock[1:]))
