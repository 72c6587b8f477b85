from __future__ import annotations

from dataclasses import dataclass, field

from .types import Card, GameStatus, Inventory, Position, Powerup

DEFAULT_SEED = "candy"


@dataclass(frozen=True)
class RulesConfig:
    base_points: int = 100
    stock_bonus: int = 200
    combo_step: int = 3
    multiplier_step: float = 0.5
    multiplier_cap: float = 2.0  # bonus on top of 1.0
    wrap_default: bool = True


@dataclass(frozen=True)
class GameState:
    """Complete snapshot of a deal in progress.

    Never mutated: every transition builds a new value with
    `dataclasses.replace`, so old snapshots can be kept for undo.
    """

    seed: str
    tableau: tuple[Position, ...]
    stock: tuple[Card, ...]
    waste: tuple[Card, ...]
    hold: Card | None = None
    score: int = 0
    combo: int = 0
    powerups: Inventory = field(default_factory=Inventory)
    active_powerup: Powerup | None = None
    powerup_cycle: int = 0
    wrap_enabled: bool = True
    status: GameStatus = "playing"
    bonus_awarded: bool = False
    rules: RulesConfig = field(default_factory=RulesConfig)

    @property
    def waste_top(self) -> Card | None:
        return self.waste[-1] if self.waste else None

    @property
    def is_over(self) -> bool:
        return self.status != "playing"

    def cards_in_tableau(self) -> int:
        return sum(1 for p in self.tableau if p.card is not None)

    def all_cards(self) -> list[Card]:
        cards = [p.card for p in self.tableau if p.card is not None]
        cards.extend(self.stock)
        cards.extend(self.waste)
        if self.hold is not None:
            cards.append(self.hold)
        return cards
