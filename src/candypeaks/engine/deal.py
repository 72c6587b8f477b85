from __future__ import annotations

import math
from collections import Counter

from .layout import LAYOUT
from .rng import Rng, seed_rng
from .state import GameState, RulesConfig
from .types import SUITS, Card


def new_deck() -> list[Card]:
    """Canonical 52-card order: suits H, D, C, S; ranks ace to king."""
    return [Card.of(suit, rank) for suit in SUITS for rank in range(1, 14)]


def _shuffle(rng: Rng, cards: list[Card]) -> None:
    for i in range(len(cards) - 1, 0, -1):
        j = math.floor(rng.next() * (i + 1))
        cards[i], cards[j] = cards[j], cards[i]


def deal(seed: str, rules: RulesConfig | None = None) -> GameState:
    cfg = rules or RulesConfig()
    deck = new_deck()
    _shuffle(seed_rng(seed), deck)

    tableau = tuple(pos.with_card(deck[i]) for i, pos in enumerate(LAYOUT))
    stock = deck[len(tableau) :]
    waste = [stock.pop()] if stock else []

    return GameState(
        seed=seed,
        tableau=tableau,
        stock=tuple(stock),
        waste=tuple(waste),
        wrap_enabled=cfg.wrap_default,
        rules=cfg,
    )


def deck_is_conserved(state: GameState) -> bool:
    """True when tableau, stock, waste and hold hold every card exactly once."""
    seen = Counter(c.id for c in state.all_cards())
    return seen == Counter(c.id for c in new_deck())
