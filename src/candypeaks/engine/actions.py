from __future__ import annotations

from dataclasses import dataclass

from .types import Powerup


@dataclass(frozen=True)
class PlayAction:
    target_id: int


@dataclass(frozen=True)
class DrawAction:
    pass


@dataclass(frozen=True)
class HoldAction:
    pass


@dataclass(frozen=True)
class ToggleWrapAction:
    enabled: bool


@dataclass(frozen=True)
class SelectPowerupAction:
    kind: Powerup


Action = PlayAction | DrawAction | HoldAction | ToggleWrapAction | SelectPowerupAction
