from __future__ import annotations

from collections.abc import Mapping

from .actions import (
    Action,
    DrawAction,
    HoldAction,
    PlayAction,
    SelectPowerupAction,
    ToggleWrapAction,
)
from .deal import new_deck
from .layout import LAYOUT
from .state import GameState, RulesConfig
from .types import Card, Inventory

_CARDS_BY_ID: dict[str, Card] = {c.id: c for c in new_deck()}


def card_from_id(card_id: str) -> Card:
    """Look up a card by id. Raises KeyError for ids outside the deck."""
    return _CARDS_BY_ID[card_id]


def action_to_dict(a: Action) -> dict[str, object]:
    if isinstance(a, PlayAction):
        return {"type": "play", "target_id": a.target_id}
    if isinstance(a, DrawAction):
        return {"type": "draw"}
    if isinstance(a, HoldAction):
        return {"type": "hold"}
    if isinstance(a, ToggleWrapAction):
        return {"type": "toggle_wrap", "enabled": a.enabled}
    if isinstance(a, SelectPowerupAction):
        return {"type": "select_powerup", "kind": a.kind}
    # should be unreachable
    return {"type": "unknown"}


def action_from_dict(d: Mapping[str, object]) -> Action:
    """Inverse of `action_to_dict`; expects a schema-validated document."""
    t = d.get("type")
    if t == "play":
        return PlayAction(target_id=int(d["target_id"]))  # type: ignore[call-overload]
    if t == "draw":
        return DrawAction()
    if t == "hold":
        return HoldAction()
    if t == "toggle_wrap":
        return ToggleWrapAction(enabled=bool(d["enabled"]))
    if t == "select_powerup":
        return SelectPowerupAction(kind=d["kind"])  # type: ignore[arg-type]
    raise ValueError(f"Unknown action type: {t!r}")


def _rules_to_dict(r: RulesConfig) -> dict[str, object]:
    return {
        "base_points": r.base_points,
        "stock_bonus": r.stock_bonus,
        "combo_step": r.combo_step,
        "multiplier_step": r.multiplier_step,
        "multiplier_cap": r.multiplier_cap,
        "wrap_default": r.wrap_default,
    }


def snapshot(state: GameState) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of the game state."""
    return {
        "seed": state.seed,
        "tableau": [p.card.id if p.card is not None else None for p in state.tableau],
        "stock": [c.id for c in state.stock],
        "waste": [c.id for c in state.waste],
        "hold": state.hold.id if state.hold is not None else None,
        "score": state.score,
        "combo": state.combo,
        "powerups": state.powerups.to_dict(),
        "active_powerup": state.active_powerup,
        "powerup_cycle": state.powerup_cycle,
        "wrap_enabled": state.wrap_enabled,
        "status": state.status,
        "bonus_awarded": state.bonus_awarded,
        "rules": _rules_to_dict(state.rules),
    }


def state_from_snapshot(d: Mapping[str, object]) -> GameState:
    """Rebuild a GameState from `snapshot` output.

    Expects a schema-validated document; unknown card ids raise KeyError.
    """
    tableau_ids = d["tableau"]
    assert isinstance(tableau_ids, list)
    tableau = tuple(
        pos.with_card(card_from_id(cid) if cid is not None else None)
        for pos, cid in zip(LAYOUT, tableau_ids)
    )
    powerups = d["powerups"]
    rules = d.get("rules") or {}
    assert isinstance(powerups, Mapping) and isinstance(rules, Mapping)
    hold_id = d.get("hold")
    return GameState(
        seed=str(d["seed"]),
        tableau=tableau,
        stock=tuple(card_from_id(cid) for cid in d["stock"]),  # type: ignore[attr-defined]
        waste=tuple(card_from_id(cid) for cid in d["waste"]),  # type: ignore[attr-defined]
        hold=card_from_id(hold_id) if isinstance(hold_id, str) else None,
        score=int(d["score"]),  # type: ignore[call-overload]
        combo=int(d["combo"]),  # type: ignore[call-overload]
        powerups=Inventory(**{k: int(v) for k, v in powerups.items()}),
        active_powerup=d.get("active_powerup"),  # type: ignore[arg-type]
        powerup_cycle=int(d["powerup_cycle"]),  # type: ignore[call-overload]
        wrap_enabled=bool(d["wrap_enabled"]),
        status=d["status"],  # type: ignore[arg-type]
        bonus_awarded=bool(d["bonus_awarded"]),
        rules=RulesConfig(**rules),
    )
