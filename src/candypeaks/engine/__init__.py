"""Deterministic, headless rules engine for Candy Peaks.

IMPORTANT: This package must never import a UI toolkit.
"""

from .actions import (
    Action,
    DrawAction,
    HoldAction,
    PlayAction,
    SelectPowerupAction,
    ToggleWrapAction,
)
from .deal import deal
from .exposure import exposed_ids
from .history import History
from .moves import PlayVerdict, is_adjacent_rank, playable_ids, propose_play
from .rules import StepResult, clear, draw, evaluate, hold, replay, select_powerup, step, toggle_wrap
from .state import DEFAULT_SEED, GameState, RulesConfig
from .types import Card, GameStatus, Inventory, Position, Powerup, RejectReason

__all__ = [
    "Action",
    "Card",
    "DEFAULT_SEED",
    "DrawAction",
    "GameState",
    "GameStatus",
    "History",
    "HoldAction",
    "Inventory",
    "PlayAction",
    "PlayVerdict",
    "Position",
    "Powerup",
    "RejectReason",
    "RulesConfig",
    "SelectPowerupAction",
    "StepResult",
    "ToggleWrapAction",
    "clear",
    "deal",
    "draw",
    "evaluate",
    "exposed_ids",
    "hold",
    "is_adjacent_rank",
    "playable_ids",
    "propose_play",
    "replay",
    "select_powerup",
    "step",
    "toggle_wrap",
]
