from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal

Suit = Literal["H", "D", "C", "S"]
Powerup = Literal["wild", "bomb", "rainbow"]
GameStatus = Literal["playing", "won", "lost"]
RejectReason = Literal["illegal-target", "illegal-mode", "illegal-match", "no-op"]

SUITS: tuple[Suit, ...] = ("H", "D", "C", "S")
POWERUP_ORDER: tuple[Powerup, ...] = ("wild", "bomb", "rainbow")

_RANK_LABELS = {1: "A", 11: "J", 12: "Q", 13: "K"}


def rank_label(rank: int) -> str:
    return _RANK_LABELS.get(rank, str(rank))


@dataclass(frozen=True)
class Card:
    id: str
    rank: int
    suit: Suit

    @staticmethod
    def of(suit: Suit, rank: int) -> "Card":
        return Card(id=f"{suit}{rank}", rank=rank, suit=suit)

    @property
    def label(self) -> str:
        return rank_label(self.rank)


@dataclass(frozen=True)
class Position:
    """One tableau slot. `column` is the half-card grid column used by the layout."""

    id: int
    row: int
    column: int
    card: Card | None = None

    def with_card(self, card: Card | None) -> "Position":
        return replace(self, card=card)


@dataclass(frozen=True)
class Inventory:
    wild: int = 0
    bomb: int = 0
    rainbow: int = 0

    def get(self, kind: Powerup) -> int:
        return getattr(self, kind)

    def add(self, kind: Powerup, delta: int) -> "Inventory":
        return replace(self, **{kind: max(0, self.get(kind) + delta)})

    def total(self) -> int:
        return self.wild + self.bomb + self.rainbow

    def to_dict(self) -> dict[str, int]:
        return {kind: self.get(kind) for kind in POWERUP_ORDER}
